import pytest

from simplex_tableau.parsing import (is_valid_fraction, parse_coefficients, parse_fraction,
                                     to_fraction_string, validate_fraction_array)


@pytest.mark.parametrize("text, expected", [
    ("1/2", 0.5),
    ("-3/4", -0.75),
    ("1.5", 1.5),
    (" 7 ", 7.0),
    (3, 3.0),
    (2.25, 2.25),
])
def test_parse_fraction(text, expected):
    assert parse_fraction(text) == pytest.approx(expected)


@pytest.mark.parametrize("text", [None, "", "  ", "1/0", "abc", "1/2/3", "inf", "nan"])
def test_parse_fraction_rejects_invalid_input(text):
    assert parse_fraction(text) is None


def test_fraction_validation():
    assert is_valid_fraction("5/3")
    assert not is_valid_fraction("5/")
    assert validate_fraction_array(["1", "2/3", 4])
    assert not validate_fraction_array(["1", "x"])
    assert not validate_fraction_array("1 2")


@pytest.mark.parametrize("value, expected", [
    (None, "-"),
    (float("nan"), "-"),
    (3.0, "3"),
    (-2, "-2"),
    (0.5, "1/2"),
    (-2.5, "-5/2"),
    (1 / 3, "1/3"),
    (0.0001, "0.0001"),
    (123456.5, "123456.5000"),
    (3.14159, "3.14"),
])
def test_to_fraction_string(value, expected):
    assert to_fraction_string(value) == expected


def test_parse_space_separated_coefficients():
    assert parse_coefficients("3 2 1/2", 3) == [3.0, 2.0, 0.5]


def test_parse_expression_coefficients():
    assert parse_coefficients("2x1 + 5x2 - x3", 3) == [2.0, 5.0, -1.0]
    assert parse_coefficients("-x2+1/2x1", 2) == [0.5, -1.0]
    assert parse_coefficients("x1", 3) == [1.0, 0.0, 0.0]


def test_parse_coefficients_errors():
    with pytest.raises(ValueError, match="Expected 2 coefficients"):
        parse_coefficients("1 2 3", 2)
    with pytest.raises(ValueError, match="Invalid coefficient"):
        parse_coefficients("1 two", 2)
    with pytest.raises(ValueError, match="outside"):
        parse_coefficients("x1 + x4", 2)
    with pytest.raises(ValueError, match="Invalid term"):
        parse_coefficients("2x1 + 3", 2)
    with pytest.raises(ValueError, match="Invalid term"):
        parse_coefficients("2y1 + 3x2", 2)
    with pytest.raises(ValueError, match="Invalid term"):
        parse_coefficients("2x1x2", 2)

"""
Number parsing and formatting for user-entered coefficients.

Accepts plain numbers, decimals ("1.5") and fractions ("-3/4"), and
formats tableau values back as short fractions where one fits.
"""

import math
import re
from fractions import Fraction

FRACTION_PATTERN = re.compile(r'^[+-]?\d+/\d+$')
TERM_PATTERN = re.compile(r'([+-]?(?:\d+/\d+|\d*\.?\d*))\*?x(\d+)')


def parse_fraction(value):
    """Convert a number, decimal string or 'a/b' string to float; None when invalid"""
    if value is None or value == '':
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)

    text = str(value).strip()
    if text == '':
        return None
    try:
        number = float(text)
    except ValueError:
        pass
    else:
        return number if math.isfinite(number) else None

    if FRACTION_PATTERN.match(text):
        numerator, denominator = text.split('/')
        if int(denominator) == 0:
            return None
        return int(numerator) / int(denominator)
    return None


def is_valid_fraction(value):
    return parse_fraction(value) is not None


def validate_fraction_array(values):
    if not isinstance(values, (list, tuple)):
        return False
    return all(is_valid_fraction(v) for v in values)


def to_fraction_string(value, tolerance=1e-6):
    """Format a value as an integer, a fraction with denominator <= 100, or a decimal"""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return '-'
    value = float(value)
    if value.is_integer():
        return str(int(value))
    if abs(value) < 0.001 or abs(value) > 10000:
        return f"{value:.4f}"

    frac = Fraction(value).limit_denominator(100)
    if abs(value - float(frac)) < tolerance:
        if frac.denominator == 1:
            return str(frac.numerator)
        return f"{frac.numerator}/{frac.denominator}"
    return f"{value:.2f}"


def parse_coefficients(input_str, expected_count):
    """Parse coefficients from user input - handles both formats"""
    # Try to parse as expression (like 2x1+5x2)
    if 'x' in input_str.lower():
        text = input_str.replace(' ', '').lower()
        coeffs = [0.0] * expected_count
        position = 0
        for match in TERM_PATTERN.finditer(text):
            # terms must tile the whole text, each after the first opening with a sign
            if match.start() != position or (position and text[position] not in '+-'):
                raise ValueError(f"Invalid term '{text[position:match.end()]}'")
            position = match.end()
            coeff_str, var_num = match.groups()
            if coeff_str in ('', '+'):
                coeff = 1.0
            elif coeff_str == '-':
                coeff = -1.0
            else:
                coeff = parse_fraction(coeff_str)
                if coeff is None:
                    raise ValueError(f"Invalid coefficient '{coeff_str}'")

            var_idx = int(var_num) - 1
            if not 0 <= var_idx < expected_count:
                raise ValueError(f"x{var_num} is outside x1..x{expected_count}")
            coeffs[var_idx] += coeff
        if position != len(text):
            raise ValueError(f"Invalid term '{text[position:]}'")
        return coeffs

    # Parse as space-separated numbers or fractions
    tokens = input_str.split()
    if len(tokens) != expected_count:
        raise ValueError(f"Expected {expected_count} coefficients, got {len(tokens)}")
    coeffs = []
    for token in tokens:
        coeff = parse_fraction(token)
        if coeff is None:
            raise ValueError(f"Invalid coefficient '{token}'")
        coeffs.append(coeff)
    return coeffs

import numpy as np
import pytest

from simplex_tableau import (BLAND, DANTZIG, LPProblem, NumericInstability, PivotChoice, Tableau,
                             build_tableau, find_pivot_column, find_pivot_row, pivot, select_pivot)


def test_entering_column_is_most_negative(scenario_a):
    assert find_pivot_column(build_tableau(scenario_a)) == 0


def test_entering_column_ties_go_to_lowest_index():
    tableau = build_tableau(LPProblem.from_lists([1, 1], [[1, 1]], [1]))
    assert find_pivot_column(tableau) == 0


def test_no_entering_column_when_optimal(scenario_c):
    tableau = build_tableau(scenario_c)
    assert find_pivot_column(tableau) is None
    assert select_pivot(tableau).is_optimal


def test_bland_rule_takes_first_improving_column():
    tableau = build_tableau(LPProblem.from_lists([1, 2], [[1, 0], [0, 1]], [1, 1]))
    assert find_pivot_column(tableau, rule=DANTZIG) == 1
    assert find_pivot_column(tableau, rule=BLAND) == 0


def test_ratio_test_picks_minimum_ratio(scenario_a):
    tableau = build_tableau(scenario_a)
    # ratios: 4 / 1 and 2 / 1
    assert find_pivot_row(tableau, 0) == 1


def test_ratio_ties_go_to_lowest_row():
    tableau = build_tableau(LPProblem.from_lists([1], [[1], [2]], [2, 4]))
    assert find_pivot_row(tableau, 0) == 0


def test_ratio_test_ignores_non_positive_coefficients():
    tableau = build_tableau(LPProblem.from_lists([1, 1], [[-1, 1], [0, 1], [2, 1]], [1, 5, 8]))
    assert find_pivot_row(tableau, 0) == 2


def test_unbounded_when_no_row_qualifies(scenario_b):
    tableau = pivot(build_tableau(scenario_b), PivotChoice(0, 0, 1.0))
    choice = select_pivot(tableau)
    assert choice.entering_column == 1
    assert choice.leaving_row is None
    assert choice.is_unbounded


def test_select_pivot_reports_pivot_value(three_constraint_max):
    choice = select_pivot(build_tableau(three_constraint_max))
    assert choice == PivotChoice(entering_column=0, leaving_row=2, pivot_value=3.0)


def test_pivot_produces_new_tableau_and_leaves_input_alone(scenario_a):
    tableau = build_tableau(scenario_a)
    before = tableau.values.copy()

    result = pivot(tableau, select_pivot(tableau))

    np.testing.assert_array_equal(tableau.values, before)
    assert tableau.row_labels == ("s1", "s2")
    assert result.row_labels == ("s1", "x1")
    np.testing.assert_allclose(result.values, [
        [0, 1, 1, -1, 2],
        [1, 0, 0, 1, 2],
        [0, -2, 0, 3, 6],
    ])


def test_pivot_column_becomes_unit_vector(three_constraint_max):
    tableau = build_tableau(three_constraint_max)
    for _ in range(3):
        choice = select_pivot(tableau)
        result = pivot(tableau, choice)

        assert result.num_columns == tableau.num_columns
        assert result.num_rows == tableau.num_rows
        column = result.values[:, choice.entering_column]
        assert column[choice.leaving_row] == 1.0
        assert np.count_nonzero(column) == 1
        tableau = result


def test_pivot_rejects_near_zero_element():
    tableau = Tableau([[1e-12, 1, 1], [-1, 0, 0]], ["s1"], ["x1", "s1", "RHS"], 1)
    with pytest.raises(NumericInstability):
        pivot(tableau, PivotChoice(0, 0, 1e-12))


def test_pivot_rejects_non_finite_results():
    tableau = Tableau([[1e-300, 1, 1e300], [-1, 0, 0]], ["s1"], ["x1", "s1", "RHS"], 1)
    with pytest.raises(NumericInstability, match="non-finite"):
        pivot(tableau, PivotChoice(0, 0, 1e-300), epsilon=1e-320)


def test_pivot_needs_complete_choice(scenario_a):
    with pytest.raises(ValueError):
        pivot(build_tableau(scenario_a), PivotChoice(entering_column=0))


def test_new_tableau_has_no_pivot_marker(scenario_a):
    tableau = build_tableau(scenario_a)
    result = pivot(tableau, select_pivot(tableau))
    assert result.pivot is None
    assert not any(cell.is_pivot for row in result.rows for cell in row.cells)

import numpy as np
import pytest

from simplex_tableau import (GREATER_EQUAL, LESS_EQUAL, MINIMIZE, Constraint, InvalidProblem,
                             LPProblem, build_tableau, normalize_problem)


def test_initial_tableau_for_maximization(scenario_a):
    tableau = build_tableau(scenario_a)

    assert tableau.column_labels == ("x1", "x2", "s1", "s2", "RHS")
    assert tableau.row_labels == ("s1", "s2")
    assert tableau.num_columns == 2 + 2 + 1
    assert tableau.num_rows == 2 + 1
    np.testing.assert_array_equal(tableau.values, [
        [1, 1, 1, 0, 4],
        [1, 0, 0, 1, 2],
        [-3, -2, 0, 0, 0],
    ])


def test_minimization_objective_row_keeps_coefficient_signs(scenario_c):
    tableau = build_tableau(scenario_c)
    np.testing.assert_array_equal(tableau.z_row, [1, 1, 0, 0])


def test_zero_objective_coefficient_is_not_negative_zero():
    problem = LPProblem.from_lists([0, 1], [[1, 1]], [3])
    tableau = build_tableau(problem)
    assert not np.signbit(tableau.z_row[0])


def test_tableau_is_read_only(scenario_a):
    tableau = build_tableau(scenario_a)
    with pytest.raises(ValueError):
        tableau.values[0, 0] = 99


def test_problem_without_constraints_has_only_z_row():
    tableau = build_tableau(LPProblem.from_lists([1, 2], [], []))
    assert tableau.num_rows == 1
    assert tableau.column_labels == ("x1", "x2", "RHS")


@pytest.mark.parametrize("problem, fragment", [
    (LPProblem.from_lists([1], [[1]], [-1]), "negative RHS"),
    (LPProblem.from_lists([1], [[1]], [1], operators=[GREATER_EQUAL]), "only '<='"),
    (LPProblem.from_lists([1], [[1]], [1], operators=["="]), "only '<='"),
    (LPProblem("maximize", 0, []), "At least one decision variable"),
    (LPProblem("maximize", 2, [1]), "expected 2"),
    (LPProblem("maximize", 2, [1, 1], [Constraint([1], LESS_EQUAL, 1)]), "expected 2"),
    (LPProblem("sideways", 1, [1]), "Unknown optimization direction"),
    (LPProblem.from_lists([float("nan")], [[1]], [1]), "finite"),
])
def test_invalid_problems_are_rejected(problem, fragment):
    with pytest.raises(InvalidProblem, match=fragment):
        build_tableau(problem)


def test_normalize_flips_non_positive_greater_equal():
    problem = LPProblem(MINIMIZE, 2, [1, 1], [
        Constraint([1, 1], LESS_EQUAL, 4),
        Constraint([1, -1], GREATER_EQUAL, -2),
        Constraint([1, 0], GREATER_EQUAL, 0),
    ])
    normalized = normalize_problem(problem)

    assert [c.operator for c in normalized.constraints] == [LESS_EQUAL] * 3
    assert normalized.constraints[1].coeffs == (-1.0, 1.0)
    assert normalized.constraints[1].rhs == 2.0
    assert normalized.constraints[2].rhs == 0.0
    assert normalized.direction == MINIMIZE
    # the input problem is left alone
    assert problem.constraints[1].operator == GREATER_EQUAL


@pytest.mark.parametrize("operator, rhs", [(GREATER_EQUAL, 3), ("=", 1), ("=", 0)])
def test_normalize_rejects_constraints_without_slack_basis(operator, rhs):
    problem = LPProblem.from_lists([1, 1], [[1, 1]], [rhs], operators=[operator])
    with pytest.raises(InvalidProblem):
        normalize_problem(problem)


@pytest.mark.parametrize("A, b, operators", [
    ([[1, 0], [0, 1]], [3, 4], [LESS_EQUAL]),
    ([[1, 0]], [3, 4], None),
    ([[1, 0], [0, 1]], [3], None),
])
def test_from_lists_rejects_mismatched_lengths(A, b, operators):
    with pytest.raises(ValueError, match="right-hand sides"):
        LPProblem.from_lists([1, 1], A, b, operators=operators)

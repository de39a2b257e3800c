import logging
import math

import numpy as np

from .errors import InvalidProblem
from .model import (DIRECTIONS, EQUAL, GREATER_EQUAL, LESS_EQUAL, MAXIMIZE, RHS_LABEL,
                    Constraint, LPProblem, Tableau, decision_name, slack_name)

logger = logging.getLogger(__name__)


def _check_finite(values, what):
    if not all(math.isfinite(v) for v in values):
        raise InvalidProblem(f"{what} must be finite numbers")


def validate_problem(problem):
    """Raise InvalidProblem unless the problem fits the all-slack standard form"""
    if problem.direction not in DIRECTIONS:
        raise InvalidProblem(f"Unknown optimization direction '{problem.direction}'")

    num_vars = problem.num_decision_vars
    if not isinstance(num_vars, (int, np.integer)) or num_vars <= 0:
        raise InvalidProblem("At least one decision variable is required")

    if len(problem.objective_coeffs) != num_vars:
        raise InvalidProblem(
            f"Objective has {len(problem.objective_coeffs)} coefficients, expected {num_vars}")
    _check_finite(problem.objective_coeffs, "Objective coefficients")

    for i, constraint in enumerate(problem.constraints, start=1):
        if len(constraint.coeffs) != num_vars:
            raise InvalidProblem(
                f"Constraint {i} has {len(constraint.coeffs)} coefficients, expected {num_vars}")
        _check_finite(constraint.coeffs + (constraint.rhs,), f"Constraint {i} values")
        if constraint.operator != LESS_EQUAL:
            raise InvalidProblem(
                f"Constraint {i} uses '{constraint.operator}'; only '<=' constraints are supported")
        if constraint.rhs < 0:
            raise InvalidProblem(
                f"Constraint {i} has negative RHS {constraint.rhs:g}; "
                "negative right-hand sides need a two-phase method")


def build_tableau(problem):
    """Build the initial simplex tableau with one slack variable per constraint"""
    validate_problem(problem)

    n = problem.num_decision_vars
    m = problem.num_constraints

    var_names = [decision_name(j) for j in range(n)]
    slack_names = [slack_name(i) for i in range(m)]

    values = np.zeros((m + 1, n + m + 1))
    for i, constraint in enumerate(problem.constraints):
        values[i, :n] = constraint.coeffs
        values[i, n + i] = 1
        values[i, -1] = constraint.rhs

    sign = -1.0 if problem.direction == MAXIMIZE else 1.0
    # + 0.0 turns -0.0 into 0.0 for zero coefficients
    values[-1, :n] = sign * np.asarray(problem.objective_coeffs, dtype=float) + 0.0

    logger.debug("Built %dx%d tableau for %s problem", m + 1, n + m + 1, problem.direction)
    return Tableau(values, slack_names, var_names + slack_names + [RHS_LABEL], n, problem.direction)


def normalize_problem(problem):
    """
    Rewrite '>=' constraints as '<=' where that keeps the RHS non-negative.

    a . x >= b with b <= 0 becomes -a . x <= -b. Any other '>=' or '='
    constraint has no all-slack starting basis and is rejected.
    """
    normalized = []
    for i, constraint in enumerate(problem.constraints, start=1):
        if constraint.operator == LESS_EQUAL:
            normalized.append(constraint)
        elif constraint.operator == GREATER_EQUAL and constraint.rhs <= 0:
            normalized.append(Constraint([-c + 0.0 for c in constraint.coeffs], LESS_EQUAL,
                                         -constraint.rhs + 0.0))
        elif constraint.operator in (GREATER_EQUAL, EQUAL):
            raise InvalidProblem(
                f"Constraint {i} ('{constraint.operator}' with RHS {constraint.rhs:g}) "
                "cannot be rewritten as a '<=' constraint with non-negative RHS")
        else:
            raise InvalidProblem(f"Constraint {i} has unknown operator '{constraint.operator}'")
    return LPProblem(problem.direction, problem.num_decision_vars, problem.objective_coeffs, normalized)

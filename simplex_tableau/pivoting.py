import logging

import numpy as np

from .config import BLAND, DANTZIG
from .errors import NumericInstability
from .model import PivotChoice, Tableau

logger = logging.getLogger(__name__)


def find_pivot_column(tableau, epsilon=1e-9, rule=DANTZIG):
    """Find the entering variable (most negative in objective row), None when optimal"""
    obj_row = tableau.z_row[:-1]
    candidates = np.flatnonzero(obj_row < -epsilon)
    if candidates.size == 0:
        return None
    if rule == BLAND:
        return int(candidates[0])
    # argmin keeps the first (lowest) index on ties
    return int(candidates[np.argmin(obj_row[candidates])])


def find_pivot_row(tableau, pivot_col, epsilon=1e-9):
    """Find the leaving variable using minimum ratio test, None when unbounded"""
    best_row = None
    best_ratio = None
    for i in range(tableau.num_constraints):
        coefficient = tableau.values[i, pivot_col]
        if coefficient <= epsilon:
            continue
        ratio = tableau.values[i, -1] / coefficient
        if best_ratio is None or ratio < best_ratio - epsilon:
            best_row, best_ratio = i, ratio
    return best_row


def select_pivot(tableau, epsilon=1e-9, rule=DANTZIG):
    pivot_col = find_pivot_column(tableau, epsilon, rule)
    if pivot_col is None:
        return PivotChoice()
    pivot_row = find_pivot_row(tableau, pivot_col, epsilon)
    if pivot_row is None:
        return PivotChoice(entering_column=pivot_col)
    return PivotChoice(pivot_col, pivot_row, float(tableau.values[pivot_row, pivot_col]))


def pivot(tableau, choice, epsilon=1e-9):
    """
    Perform one Gauss-Jordan pivot and return the resulting tableau.

    The input tableau is left untouched. The pivot row is scaled so the
    pivot cell becomes 1, the pivot column is eliminated from every other
    row, and the pivot row takes the entering variable as its label.
    """
    if not choice.is_complete:
        raise ValueError("pivot needs both an entering column and a leaving row")
    pivot_row, pivot_col = choice.leaving_row, choice.entering_column

    values = tableau.values.copy()
    pivot_element = values[pivot_row, pivot_col]
    if not np.isfinite(pivot_element) or abs(pivot_element) < epsilon:
        raise NumericInstability(
            f"Pivot element {pivot_element!r} at row {pivot_row + 1}, column {pivot_col + 1} is too close to zero")

    # Make pivot element = 1
    values[pivot_row] /= pivot_element

    # Make other elements in pivot column = 0
    for i in range(len(values)):
        if i != pivot_row:
            multiplier = values[i, pivot_col]
            if multiplier != 0:
                values[i] -= multiplier * values[pivot_row]

    if not np.all(np.isfinite(values)):
        raise NumericInstability("Pivot produced a non-finite tableau value")

    values[np.abs(values) < epsilon] = 0.0
    values[:, pivot_col] = 0.0
    values[pivot_row, pivot_col] = 1.0

    row_labels = list(tableau.row_labels)
    row_labels[pivot_row] = tableau.column_labels[pivot_col]

    logger.debug("Pivot on (%d, %d): %s enters, %s leaves", pivot_row, pivot_col,
                 tableau.column_labels[pivot_col], tableau.row_labels[pivot_row])
    return Tableau(values, row_labels, tableau.column_labels,
                   tableau.num_decision_vars, tableau.direction)

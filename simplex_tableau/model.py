"""
Data model shared by the tableau engine, the display helpers and the graph layer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

MAXIMIZE = "maximize"
MINIMIZE = "minimize"
DIRECTIONS = (MAXIMIZE, MINIMIZE)

LESS_EQUAL = "<="
GREATER_EQUAL = ">="
EQUAL = "="
OPERATORS = (LESS_EQUAL, GREATER_EQUAL, EQUAL)

RHS_LABEL = "RHS"
Z_LABEL = "Z"


class Status(str, Enum):
    """Terminal status of a solve"""
    OPTIMAL = "optimal"
    UNBOUNDED = "unbounded"
    INVALID_PROBLEM = "invalid_problem"
    NUMERIC_INSTABILITY = "numeric_instability"
    ITERATION_LIMIT_EXCEEDED = "iteration_limit_exceeded"
    CANCELLED = "cancelled"

    @property
    def is_error(self):
        return self not in (Status.OPTIMAL, Status.UNBOUNDED)


def decision_name(index):
    return f"x{index + 1}"


def slack_name(index):
    return f"s{index + 1}"


@dataclass(frozen=True)
class Constraint:
    """One linear constraint: coeffs . x <operator> rhs"""
    coeffs: Tuple[float, ...]
    operator: str
    rhs: float

    def __post_init__(self):
        object.__setattr__(self, 'coeffs', tuple(float(c) for c in self.coeffs))
        object.__setattr__(self, 'rhs', float(self.rhs))

    def lhs(self, values):
        return float(np.dot(self.coeffs, values))

    def is_satisfied(self, values, tol=1e-7):
        lhs = self.lhs(values)
        if self.operator == LESS_EQUAL:
            return lhs <= self.rhs + tol
        if self.operator == GREATER_EQUAL:
            return lhs >= self.rhs - tol
        return abs(lhs - self.rhs) <= tol


@dataclass(frozen=True)
class LPProblem:
    """
    A linear program over non-negative decision variables.

    direction is MAXIMIZE or MINIMIZE, objective_coeffs holds one
    coefficient per decision variable and every constraint carries
    the same number of coefficients.
    """
    direction: str
    num_decision_vars: int
    objective_coeffs: Tuple[float, ...]
    constraints: Tuple[Constraint, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'objective_coeffs', tuple(float(c) for c in self.objective_coeffs))
        object.__setattr__(self, 'constraints', tuple(self.constraints))

    @classmethod
    def from_lists(cls, c, A, b, operators=None, maximize=True):
        """Build a problem from coefficient lists, defaulting every operator to <="""
        if operators is None:
            operators = [LESS_EQUAL] * len(b)
        if len(A) != len(b) or len(operators) != len(b):
            raise ValueError(
                f"Got {len(A)} coefficient rows, {len(operators)} operators and {len(b)} right-hand sides")
        constraints = [Constraint(row, op, rhs) for row, op, rhs in zip(A, operators, b)]
        return cls(MAXIMIZE if maximize else MINIMIZE, len(c), c, constraints)

    @property
    def maximize(self):
        return self.direction == MAXIMIZE

    @property
    def num_constraints(self):
        return len(self.constraints)

    def objective(self, values):
        return float(np.dot(self.objective_coeffs, values))

    def is_feasible(self, values, tol=1e-7):
        if any(v < -tol for v in values):
            return False
        return all(constraint.is_satisfied(values, tol) for constraint in self.constraints)


@dataclass(frozen=True)
class Cell:
    value: float
    is_pivot: bool = False


@dataclass(frozen=True)
class Row:
    label: str
    cells: Tuple[Cell, ...]

    @property
    def values(self):
        return [cell.value for cell in self.cells]


class Tableau:
    """
    Simplex tableau: constraint rows followed by the Z-row.

    Each tableau owns a private, read-only numpy buffer. Columns are the
    decision variables, then the slack variables, then RHS. The Z-row of a
    minimization holds +c_j, i.e. it is the row of "maximize -objective",
    so improving columns are the negative ones in both directions.
    """

    def __init__(self, values, row_labels, column_labels, num_decision_vars,
                 direction=MAXIMIZE, pivot=None):
        values = np.array(values, dtype=float)
        if values.ndim != 2:
            raise ValueError("tableau values must be two-dimensional")
        if len(row_labels) != values.shape[0] - 1:
            raise ValueError("one label is required per constraint row")
        if len(column_labels) != values.shape[1]:
            raise ValueError("one label is required per column")
        values.flags.writeable = False
        self._values = values
        self.row_labels = tuple(row_labels)
        self.column_labels = tuple(column_labels)
        self.num_decision_vars = num_decision_vars
        self.direction = direction
        self.pivot = pivot

    @property
    def values(self):
        return self._values

    @property
    def num_rows(self):
        return self._values.shape[0]

    @property
    def num_columns(self):
        return self._values.shape[1]

    @property
    def num_constraints(self):
        return self.num_rows - 1

    @property
    def num_slack_vars(self):
        return self.num_columns - self.num_decision_vars - 1

    @property
    def z_row(self):
        return self._values[-1]

    @property
    def rhs(self):
        return self._values[:-1, -1]

    def cell(self, row, column):
        return Cell(float(self._values[row, column]), self.pivot == (row, column))

    @property
    def rows(self):
        labels = self.row_labels + (Z_LABEL,)
        return [
            Row(label, tuple(self.cell(i, j) for j in range(self.num_columns)))
            for i, label in enumerate(labels)
        ]

    def copy(self, pivot=None):
        return Tableau(self._values, self.row_labels, self.column_labels,
                       self.num_decision_vars, self.direction, pivot)

    def with_pivot(self, row, column):
        """Copy of this tableau with the pivot cell marked for display"""
        return self.copy(pivot=(row, column))

    def __eq__(self, other):
        if not isinstance(other, Tableau):
            return NotImplemented
        return (self.row_labels == other.row_labels
                and self.column_labels == other.column_labels
                and self.direction == other.direction
                and np.array_equal(self._values, other._values))

    __hash__ = None

    def __repr__(self):
        return f"Tableau(rows={self.num_rows}, columns={self.num_columns}, basis={list(self.row_labels)})"


@dataclass(frozen=True)
class PivotChoice:
    """Entering column, leaving row and pivot value chosen for one iteration"""
    entering_column: Optional[int] = None
    leaving_row: Optional[int] = None
    pivot_value: Optional[float] = None

    @property
    def is_optimal(self):
        return self.entering_column is None

    @property
    def is_unbounded(self):
        return self.entering_column is not None and self.leaving_row is None

    @property
    def is_complete(self):
        return self.entering_column is not None and self.leaving_row is not None


@dataclass(frozen=True)
class IterationRecord:
    """Tableau snapshot plus the pivot that produced the next one (None on the last record)"""
    tableau: Tableau
    choice: Optional[PivotChoice] = None

    @property
    def entering_label(self):
        if self.choice is None or self.choice.entering_column is None:
            return None
        return self.tableau.column_labels[self.choice.entering_column]

    @property
    def leaving_label(self):
        if self.choice is None or self.choice.leaving_row is None:
            return None
        return self.tableau.row_labels[self.choice.leaving_row]


@dataclass(frozen=True)
class Solution:
    status: Status
    decision_values: Tuple[float, ...] = ()
    slack_values: Tuple[float, ...] = ()
    objective_value: float = 0.0
    history: Tuple[IterationRecord, ...] = ()
    message: str = ""

    def __post_init__(self):
        object.__setattr__(self, 'decision_values', tuple(self.decision_values))
        object.__setattr__(self, 'slack_values', tuple(self.slack_values))
        object.__setattr__(self, 'history', tuple(self.history))

    @property
    def is_optimal(self):
        return self.status == Status.OPTIMAL

    @property
    def iterations(self):
        """Number of pivots performed"""
        return sum(1 for record in self.history if record.choice is not None)

    @property
    def final_tableau(self):
        return self.history[-1].tableau if self.history else None


@dataclass
class VisualizationSupport:
    can_2d: bool
    can_3d: bool
    message: str = ""


@dataclass
class GraphData:
    x_range: Tuple[float, float]
    y_range: Tuple[float, float]
    constraint_lines: List[dict] = field(default_factory=list)
    feasible_region: List[dict] = field(default_factory=list)
    objective_line: Optional[dict] = None
    variable_labels: Tuple[str, str] = ("x₁", "x₂")

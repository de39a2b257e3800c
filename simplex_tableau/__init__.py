from .config import BLAND, DANTZIG, EngineConfig
from .engine import SimplexEngine, solve, solve_in_background
from .errors import InvalidProblem, NumericInstability, SimplexError
from .history import IterationHistory
from .model import (EQUAL, GREATER_EQUAL, LESS_EQUAL, MAXIMIZE, MINIMIZE, Cell, Constraint,
                    IterationRecord, LPProblem, PivotChoice, Row, Solution, Status, Tableau)
from .pivoting import find_pivot_column, find_pivot_row, pivot, select_pivot
from .solution import extract_solution
from .standard_form import build_tableau, normalize_problem

__version__ = "1.0.0"

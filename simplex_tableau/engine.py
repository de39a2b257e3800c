"""
Simplex loop: build the standard form, pivot until a terminal state, extract.

The engine holds all of its working state in an EngineState created per
solve, so separate engines can run on separate threads without
coordination. Failures never raise past solve(); they come back as the
Solution status together with whatever history was collected.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional

from .config import EngineConfig
from .errors import SimplexError
from .history import IterationHistory
from .model import Solution, Status, Tableau
from .pivoting import pivot, select_pivot
from .solution import extract_solution
from .standard_form import build_tableau

logger = logging.getLogger(__name__)

BUILDING = "building"
ITERATING = "iterating"
TERMINATED = "terminated"


@dataclass
class EngineState:
    phase: str = BUILDING
    tableau: Optional[Tableau] = None
    history: IterationHistory = field(default_factory=IterationHistory)
    iterations: int = 0
    solution: Optional[Solution] = None


class SimplexEngine:
    """Solves one LPProblem with the tableau simplex method"""

    def __init__(self, problem, config=None, cancel_token=None):
        self.problem = problem
        self.config = config if config is not None else EngineConfig()
        self.cancel_token = cancel_token
        self.state = EngineState()

    @property
    def solution(self):
        return self.state.solution

    def solve(self):
        """Run the full iterate-to-termination loop and return the Solution"""
        for _ in self.iter_solve():
            pass
        return self.state.solution

    def iter_solve(self):
        """
        Generator form of solve() yielding each IterationRecord as it is recorded.

        The terminal Solution is available as self.solution as soon as the
        final record has been yielded.
        """
        state = self.state = EngineState()
        try:
            state.tableau = build_tableau(self.problem)
        except SimplexError as exc:
            self._finish(exc.status, str(exc))
            return

        state.phase = ITERATING
        epsilon = self.config.epsilon
        limit = self.config.iteration_limit(self.problem.num_decision_vars,
                                            self.problem.num_constraints)

        while True:
            if self._cancel_requested():
                self._finish(Status.CANCELLED, "Solve cancelled", keep_history=False)
                return

            choice = select_pivot(state.tableau, epsilon, self.config.pivot_rule)

            if choice.is_optimal:
                yield self._finish_with_record(
                    Status.OPTIMAL, f"Optimal after {state.iterations} iteration(s)")
                return

            if choice.is_unbounded:
                label = state.tableau.column_labels[choice.entering_column]
                yield self._finish_with_record(
                    Status.UNBOUNDED, f"{label} can increase without limit; the objective is unbounded")
                return

            if state.iterations >= limit:
                yield self._finish_with_record(
                    Status.ITERATION_LIMIT_EXCEEDED,
                    f"Stopped after {limit} iterations without reaching optimality")
                return

            try:
                next_tableau = pivot(state.tableau, choice, epsilon)
            except SimplexError as exc:
                yield self._finish_with_record(exc.status, str(exc))
                return

            record = state.history.append(
                state.tableau.with_pivot(choice.leaving_row, choice.entering_column), choice)
            logger.debug("Iteration %d: %s enters, %s leaves, pivot %g", state.iterations + 1,
                         record.entering_label, record.leaving_label, choice.pivot_value)
            state.tableau = next_tableau
            state.iterations += 1
            yield record

    def _cancel_requested(self):
        return self.cancel_token is not None and self.cancel_token.is_set()

    def _finish_with_record(self, status, message):
        """Record the current tableau as the final snapshot, then terminate"""
        record = self.state.history.append(self.state.tableau)
        self._finish(status, message)
        return record

    def _finish(self, status, message, keep_history=True):
        state = self.state
        n = self.problem.num_decision_vars if state.tableau is not None else 0
        m = self.problem.num_constraints if state.tableau is not None else 0
        history = state.history.records() if keep_history else ()

        if status == Status.OPTIMAL:
            decision_values, slack_values, objective_value = extract_solution(state.tableau)
        else:
            decision_values, slack_values, objective_value = [0.0] * n, [0.0] * m, 0.0

        state.phase = TERMINATED
        state.solution = Solution(status, decision_values, slack_values, objective_value,
                                  history, message)
        log = logger.warning if status.is_error else logger.info
        log("Simplex finished with status %s: %s", status.value, message)


def solve(problem, config=None, cancel_token=None):
    return SimplexEngine(problem, config, cancel_token).solve()


def solve_in_background(problem, config=None, executor=None):
    """
    Submit a solve to a thread pool.

    Returns (future, cancel_token); set the token to stop the solve at the
    next iteration boundary. The future resolves to the terminal Solution.
    """
    cancel_token = threading.Event()
    engine = SimplexEngine(problem, config, cancel_token)
    if executor is None:
        pool = ThreadPoolExecutor(max_workers=1)
        future = pool.submit(engine.solve)
        pool.shutdown(wait=False)
    else:
        future = executor.submit(engine.solve)
    return future, cancel_token

from dataclasses import dataclass, fields
from typing import Optional

DANTZIG = "dantzig"
BLAND = "bland"
PIVOT_RULES = (DANTZIG, BLAND)


@dataclass(frozen=True)
class EngineConfig:
    """
    Solver settings.

    epsilon is the tolerance used for pivot selection and for rejecting
    near-zero pivot elements. When max_iterations is None the cap is
    iteration_factor * (num_decision_vars + num_constraints).
    """
    epsilon: float = 1e-9
    max_iterations: Optional[int] = None
    iteration_factor: int = 20
    pivot_rule: str = DANTZIG

    def __post_init__(self):
        if self.epsilon <= 0:
            raise ValueError("epsilon must be positive")
        if self.max_iterations is not None and self.max_iterations < 0:
            raise ValueError("max_iterations cannot be negative")
        if self.iteration_factor < 1:
            raise ValueError("iteration_factor must be at least 1")
        if self.pivot_rule not in PIVOT_RULES:
            raise ValueError(f"Unknown pivot rule '{self.pivot_rule}', expected one of {PIVOT_RULES}")

    @classmethod
    def from_mapping(cls, settings):
        """Build a config from a plain dict such as st.secrets['solver']"""
        known = {f.name for f in fields(cls)}
        unknown = set(settings) - known
        if unknown:
            raise ValueError(f"Unknown solver settings: {', '.join(sorted(unknown))}")
        return cls(**dict(settings))

    def iteration_limit(self, num_decision_vars, num_constraints):
        if self.max_iterations is not None:
            return self.max_iterations
        return self.iteration_factor * (num_decision_vars + num_constraints)

from .model import Status


class SimplexError(Exception):
    """Base class for failures the engine turns into a terminal status"""
    status = None


class InvalidProblem(SimplexError):
    """Problem cannot be put into the all-slack standard form"""
    status = Status.INVALID_PROBLEM


class NumericInstability(SimplexError):
    """Pivot element too close to zero, or a non-finite cell was produced"""
    status = Status.NUMERIC_INSTABILITY

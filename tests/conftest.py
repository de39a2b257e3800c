import pytest

from simplex_tableau import LPProblem


@pytest.fixture
def scenario_a():
    """max 3x1 + 2x2 s.t. x1 + x2 <= 4, x1 <= 2"""
    return LPProblem.from_lists([3, 2], [[1, 1], [1, 0]], [4, 2], maximize=True)


@pytest.fixture
def scenario_b():
    """max x1 s.t. x1 - x2 <= 1"""
    return LPProblem.from_lists([1, 0], [[1, -1]], [1], maximize=True)


@pytest.fixture
def scenario_c():
    """min x1 + x2 s.t. x1 + x2 <= 5"""
    return LPProblem.from_lists([1, 1], [[1, 1]], [5], maximize=False)


@pytest.fixture
def three_constraint_max():
    """max 3x1 + 2x2 s.t. 2x1 + x2 <= 18, 2x1 + 3x2 <= 42, 3x1 + x2 <= 24; optimum (3, 12), Z = 33"""
    return LPProblem.from_lists([3, 2], [[2, 1], [2, 3], [3, 1]], [18, 42, 24], maximize=True)


@pytest.fixture
def negative_min():
    """min -2x1 - 3x2 s.t. x1 + x2 <= 4, x1 + 3x2 <= 6; optimum (3, 1), Z = -9"""
    return LPProblem.from_lists([-2, -3], [[1, 1], [1, 3]], [4, 6], maximize=False)

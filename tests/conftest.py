"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from densematrix import Matrix


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def square_2x2():
    return Matrix([[1.0, 2.0], [3.0, 4.0]])


@pytest.fixture
def well_conditioned(rng):
    """Random diagonally dominant 6x6 matrix (always invertible)."""
    n = 6
    data = rng.standard_normal((n, n)) + n * np.eye(n)
    return Matrix(data)


@pytest.fixture
def singular_3x3():
    """Third row is the sum of the first two."""
    return Matrix([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [5.0, 7.0, 9.0]])

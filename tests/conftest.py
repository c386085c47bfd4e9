"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pymatrix import Matrix


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def square_matrix(rng):
    """Well-conditioned 5 x 5 matrix (diagonally dominant)."""
    A = rng.standard_normal((5, 5)) + 5.0 * np.eye(5)
    return Matrix.from_array(A)


@pytest.fixture
def tall_matrix(rng):
    """Full column rank 8 x 3 matrix."""
    return Matrix.from_array(rng.standard_normal((8, 3)))


@pytest.fixture
def singular_matrix():
    """3 x 3 matrix whose third row is the sum of the first two."""
    return Matrix([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [5.0, 7.0, 9.0]])


@pytest.fixture
def rank_deficient_tall():
    """3 x 2 matrix whose second column is twice the first."""
    return Matrix([[1.0, 2.0], [2.0, 4.0], [3.0, 6.0]])


@pytest.fixture
def ill_conditioned_matrix():
    """Non-singular 2 x 2 matrix with a pivot ratio far below 1e-8."""
    return Matrix([[1.0, 1.0], [1.0, 1.0 + 1e-10]])

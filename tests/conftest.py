"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pyols.core.matrix import Matrix


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def square_matrix(rng):
    """Well-conditioned 4x4 matrix (diagonally dominant)."""
    A = rng.standard_normal((4, 4)) + 6.0 * np.eye(4)
    return Matrix.from_array(A)


@pytest.fixture
def noiseless_regression_data(rng):
    """Design with intercept column and exact targets Y = X B_true."""
    n, p, q = 50, 3, 2
    X = np.column_stack([np.ones(n), rng.uniform(-5, 5, size=(n, p))])
    B_true = np.array([
        [1.0, -3.0],
        [2.0, 0.5],
        [-1.5, 4.0],
        [0.25, 0.0],
    ])
    Y = X @ B_true
    return X, Y, B_true


@pytest.fixture
def noisy_regression_data(rng):
    """Single-output regression with small Gaussian noise."""
    n = 200
    x = rng.uniform(0, 10, size=(n, 2))
    y = 3.0 + x @ np.array([1.5, -0.75]) + rng.standard_normal(n) * 0.1
    return x, y


@pytest.fixture
def line_table_text():
    """Learning file for y = 2x with one prediction at x = 4."""
    return "3 1 1\n1 2\n2 4\n3 6\n1\n4\n"

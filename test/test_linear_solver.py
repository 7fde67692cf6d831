"""
Tests for the Gauss-Jordan linear solver
"""

import numpy as np
import pytest

from measurelib.errors import SingularSystemError
from measurelib.linear_solver import solve


@pytest.mark.parametrize("n", range(2, 9))
def test_random_nonsingular_systems(n):
    rng = np.random.default_rng(1000 + n)
    for _ in range(20):
        # Diagonal shift keeps the matrix well away from singular
        a = rng.uniform(-10, 10, size=(n, n)) + n * 10 * np.eye(n)
        b = rng.uniform(-10, 10, size=n)

        x = solve(a, b)

        residual = np.max(np.abs(a @ x - b))
        assert residual < 1e-6


def test_requires_pivoting():
    # Zero in the leading position: fails without row swaps
    a = [[0.0, 1.0], [1.0, 0.0]]
    b = [2.0, 3.0]
    x = solve(a, b)
    np.testing.assert_allclose(x, [3.0, 2.0])


def test_one_by_one():
    assert solve([[4.0]], [2.0]) == pytest.approx([0.5])


def test_identical_rows_are_singular():
    a = [[1.0, 2.0, 3.0], [1.0, 2.0, 3.0], [0.0, 1.0, 4.0]]
    with pytest.raises(SingularSystemError):
        solve(a, [1.0, 1.0, 2.0])


def test_zero_matrix_is_singular():
    with pytest.raises(SingularSystemError):
        solve(np.zeros((3, 3)), np.ones(3))


def test_inputs_are_not_modified():
    a = np.array([[0.0, 2.0], [3.0, 1.0]])
    b = np.array([4.0, 5.0])
    a_before, b_before = a.copy(), b.copy()

    solve(a, b)

    np.testing.assert_array_equal(a, a_before)
    np.testing.assert_array_equal(b, b_before)


def test_rejects_non_square_matrix():
    with pytest.raises(ValueError):
        solve([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]], [1.0, 2.0])


def test_rejects_mismatched_rhs():
    with pytest.raises(ValueError):
        solve([[1.0, 0.0], [0.0, 1.0]], [1.0, 2.0, 3.0])


def test_singular_is_a_value_error():
    # Callers that only know about ValueError still catch it
    with pytest.raises(ValueError):
        solve([[1.0, 1.0], [2.0, 2.0]], [1.0, 2.0])

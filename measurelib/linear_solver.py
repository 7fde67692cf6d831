"""
Dense linear solver - Gauss-Jordan elimination with partial pivoting.

Sized for the small systems behind homography estimation (n <= 8), so it
favors clear failure reporting over speed.
"""

import numpy as np

from .errors import SingularSystemError


# Pivot magnitude below which the system is considered singular
PIVOT_THRESHOLD = 1e-12


def solve(a, b, threshold=PIVOT_THRESHOLD):
    """
    Solve the square linear system a @ x = b.

    The inputs are copied; caller arrays are never modified.

    Args:
        a: n x n coefficient matrix (nested lists or numpy array)
        b: right-hand side vector of length n
        threshold: smallest acceptable pivot magnitude

    Returns:
        numpy array x of length n

    Raises:
        ValueError: If the shapes are not n x n and n
        SingularSystemError: If no pivot above threshold exists for a column
    """
    a = np.array(a, dtype=float)
    b = np.array(b, dtype=float)

    if a.ndim != 2 or a.shape[0] != a.shape[1] or a.shape[0] < 1:
        raise ValueError(f"Coefficient matrix must be square and non-empty, got shape {a.shape}")

    n = a.shape[0]
    if b.shape != (n,):
        raise ValueError(f"Right-hand side must have length {n}, got shape {b.shape}")

    # Augmented matrix [a | b]
    m = np.hstack([a, b.reshape(n, 1)])

    for k in range(n):
        # Partial pivoting: largest magnitude entry at or below row k
        pivot_row = k + int(np.argmax(np.abs(m[k:, k])))
        pivot = m[pivot_row, k]
        if abs(pivot) < threshold:
            raise SingularSystemError(f"Singular system: no pivot in column {k}")

        if pivot_row != k:
            m[[k, pivot_row]] = m[[pivot_row, k]]

        m[k] = m[k] / pivot

        # Eliminate column k from every other row, above and below
        factors = m[:, k].copy()
        factors[k] = 0.0
        m -= np.outer(factors, m[k])

    return m[:, n].copy()

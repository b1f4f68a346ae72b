"""Thomas algorithm for tridiagonal linear systems."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from .exceptions import SingularSystemError, ValidationError

__all__ = [
    "solve_tridiagonal",
]


def solve_tridiagonal(
    a: Sequence[float] | np.ndarray,
    b: Sequence[float] | np.ndarray,
    c: Sequence[float] | np.ndarray,
    d: Sequence[float] | np.ndarray,
) -> np.ndarray:
    """Solve a tridiagonal system Ax = d via the Thomas algorithm.

    All four inputs have the same length n and are indexed by row:
      - a: subdiagonal   -> A[j, j-1] (a[0] is ignored)
      - b: main diagonal -> A[j, j]
      - c: superdiagonal -> A[j, j+1] (c[n-1] is ignored)
      - d: right-hand side

    The matrix need not be symmetric or diagonally dominant, but every
    pivot met during elimination must be non-zero.

    Raises
    ------
    ValidationError
        If the inputs are empty or differ in length.
    SingularSystemError
        If a zero pivot is encountered.
    """
    n = len(b)
    if n == 0:
        raise ValidationError("tridiagonal system must have at least one row")
    if len(a) != n or len(c) != n or len(d) != n:
        raise ValidationError(
            f"a, b, c, d must have equal length, got {len(a)}, {n}, {len(c)}, {len(d)}"
        )

    # Copy to avoid mutating inputs
    lower = np.array(a, dtype=float)
    upper = np.array(c, dtype=float)
    pivots = np.array(b, dtype=float)
    rhs = np.array(d, dtype=float)

    # Forward elimination
    for j in range(1, n):
        if pivots[j - 1] == 0.0:
            raise SingularSystemError(f"zero pivot at row {j - 1}", row=j - 1)
        w = lower[j] / pivots[j - 1]
        pivots[j] -= w * upper[j - 1]
        rhs[j] -= w * rhs[j - 1]

    if pivots[-1] == 0.0:
        raise SingularSystemError(f"zero pivot at row {n - 1}", row=n - 1)

    # Back substitution
    x = np.empty(n, dtype=float)
    x[-1] = rhs[-1] / pivots[-1]
    for j in range(n - 2, -1, -1):
        x[j] = (rhs[j] - upper[j] * x[j + 1]) / pivots[j]
    return x

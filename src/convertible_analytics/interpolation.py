"""Local Lagrange interpolation on uniform grids."""

from __future__ import annotations

from collections.abc import Sequence
import math

import numpy as np

from .exceptions import ConfigurationError, ValidationError

__all__ = [
    "lagrange_interpolate",
    "stencil_start",
]


def stencil_start(x: Sequence[float] | np.ndarray, x0: float, n: int) -> int:
    """Index of the first node of an n-point stencil centred on x0.

    Even n puts x0 between the two middle nodes; odd n puts the nearest node
    in the middle. The result is clamped so the stencil stays on the grid.
    """
    if len(x) == 1:
        return 0
    dx = float(x[1] - x[0])
    offset = (x0 - float(x[0])) / dx
    half = n // 2
    if n % 2 == 0:
        j_star = math.floor(offset) - (half - 1)
    else:
        j_star = math.floor(offset + 0.5) - half
    j_star = max(0, j_star)
    return min(len(x) - n, j_star)


def lagrange_interpolate(
    y: Sequence[float] | np.ndarray,
    x: Sequence[float] | np.ndarray,
    x0: float,
    n: int,
) -> float:
    """Interpolate y(x0) with an n-point Lagrange polynomial.

    Parameters
    ----------
    y : array-like
        Values at the grid nodes.
    x : array-like
        Sorted, uniformly spaced grid nodes.
    x0 : float
        Query point. Points outside the grid are extrapolated from the
        edge stencil.
    n : int
        Number of stencil points (polynomial degree n-1). Reduced to
        len(x) when the grid is smaller.

    Returns
    -------
    float
        Interpolated value.

    Examples
    --------
    >>> lagrange_interpolate([0.0, 1.0, 4.0, 9.0], [0.0, 1.0, 2.0, 3.0], 1.5, 3)
    2.25
    """
    if len(x) != len(y):
        raise ValidationError(f"x and y must have equal length, got {len(x)} and {len(y)}")
    if len(x) < n:
        return lagrange_interpolate(y, x, x0, len(x))
    if n == 0:
        raise ConfigurationError("interpolation order must be >= 1")
    if n < 0:
        raise ConfigurationError(f"interpolation order must be >= 1, got {n}")

    j_star = stencil_start(x, x0, n)
    if n == 1:
        return float(y[j_star])

    nodes = np.asarray(x[j_star : j_star + n], dtype=float)
    values = np.asarray(y[j_star : j_star + n], dtype=float)

    total = 0.0
    for i in range(n):
        term = values[i]
        for k in range(n):
            if k == i:
                continue
            term *= (x0 - nodes[k]) / (nodes[i] - nodes[k])
        total += term
    return float(total)

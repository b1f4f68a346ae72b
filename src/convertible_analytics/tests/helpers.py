"""Reference oracles used across the test suite."""

import numpy as np
from scipy.stats import norm


def dense_tridiagonal_solve(a, b, c, d):
    """Solve the tridiagonal system by building the full matrix."""
    n = len(b)
    A = np.diag(np.asarray(b, dtype=float))
    for j in range(1, n):
        A[j, j - 1] = a[j]
        A[j - 1, j] = c[j - 1]
    return np.linalg.solve(A, np.asarray(d, dtype=float))


def _d1_d2(spot, strike, rate, q, vol, ttm):
    d1 = (np.log(spot / strike) + (rate - q + 0.5 * vol**2) * ttm) / (vol * np.sqrt(ttm))
    return d1, d1 - vol * np.sqrt(ttm)


def bs_call(spot, strike, rate, q, vol, ttm):
    d1, d2 = _d1_d2(spot, strike, rate, q, vol, ttm)
    return spot * np.exp(-q * ttm) * norm.cdf(d1) - strike * np.exp(-rate * ttm) * norm.cdf(d2)


def bs_put(spot, strike, rate, q, vol, ttm):
    d1, d2 = _d1_d2(spot, strike, rate, q, vol, ttm)
    return strike * np.exp(-rate * ttm) * norm.cdf(-d2) - spot * np.exp(-q * ttm) * norm.cdf(-d1)


def bs_binary_call(spot, strike, rate, q, vol, ttm):
    _, d2 = _d1_d2(spot, strike, rate, q, vol, ttm)
    return np.exp(-rate * ttm) * norm.cdf(d2)


def bs_binary_put(spot, strike, rate, q, vol, ttm):
    _, d2 = _d1_d2(spot, strike, rate, q, vol, ttm)
    return np.exp(-rate * ttm) * norm.cdf(-d2)


def bs_zero_strike_call(spot, rate, q, vol, ttm):
    return spot * np.exp(-q * ttm)

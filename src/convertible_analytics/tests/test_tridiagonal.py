"""Tests for the Thomas tridiagonal solver."""

import numpy as np
import pytest

from convertible_analytics.exceptions import SingularSystemError, ValidationError
from convertible_analytics.tests.helpers import dense_tridiagonal_solve
from convertible_analytics.tridiagonal import solve_tridiagonal


class TestSolveTridiagonal:
    def test_identity_system_returns_rhs(self):
        n = 6
        d = np.arange(1.0, n + 1)
        x = solve_tridiagonal(np.zeros(n), np.ones(n), np.zeros(n), d)
        np.testing.assert_allclose(x, d)

    @pytest.mark.parametrize("n", [1, 2, 5, 50])
    def test_matches_dense_solve(self, n):
        rng = np.random.default_rng(7)
        a = rng.uniform(-1.0, 1.0, n)
        c = rng.uniform(-1.0, 1.0, n)
        b = 3.0 + rng.uniform(0.0, 1.0, n)
        d = rng.normal(size=n)
        a[0] = 0.0
        c[-1] = 0.0

        x = solve_tridiagonal(a, b, c, d)

        np.testing.assert_allclose(x, dense_tridiagonal_solve(a, b, c, d), rtol=1e-12, atol=1e-12)

    def test_non_diagonally_dominant_system(self):
        a = [0.0, 2.0, 2.0]
        b = [1.0, 1.0, 1.0]
        c = [3.0, 3.0, 0.0]
        d = [1.0, -2.0, 4.0]

        x = solve_tridiagonal(a, b, c, d)

        np.testing.assert_allclose(x, dense_tridiagonal_solve(a, b, c, d), rtol=1e-12)

    def test_unused_corner_entries_are_ignored(self):
        a = np.array([0.0, -1.0, -1.0, -1.0])
        b = np.array([4.0, 4.0, 4.0, 4.0])
        c = np.array([-1.0, -1.0, -1.0, 0.0])
        d = np.array([1.0, 2.0, 3.0, 4.0])
        expected = solve_tridiagonal(a, b, c, d)

        a_junk = a.copy()
        c_junk = c.copy()
        a_junk[0] = 123.0
        c_junk[-1] = -456.0

        np.testing.assert_allclose(solve_tridiagonal(a_junk, b, c_junk, d), expected)

    def test_inputs_are_not_mutated(self):
        a = np.array([0.0, 1.0, 1.0])
        b = np.array([4.0, 4.0, 4.0])
        c = np.array([1.0, 1.0, 0.0])
        d = np.array([5.0, 6.0, 5.0])
        originals = [arr.copy() for arr in (a, b, c, d)]

        solve_tridiagonal(a, b, c, d)

        for arr, original in zip((a, b, c, d), originals):
            np.testing.assert_array_equal(arr, original)

    def test_accepts_plain_lists(self):
        x = solve_tridiagonal([0.0, 1.0], [2.0, 2.0], [1.0, 0.0], [3.0, 3.0])
        np.testing.assert_allclose(x, [1.0, 1.0])


class TestSolveTridiagonalErrors:
    def test_zero_leading_pivot(self):
        with pytest.raises(SingularSystemError, match="zero pivot at row 0") as excinfo:
            solve_tridiagonal([0.0, 1.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0])
        assert excinfo.value.row == 0

    def test_zero_pivot_created_by_elimination(self):
        # second pivot becomes 1 - 1 * 1 / 1 = 0
        with pytest.raises(SingularSystemError) as excinfo:
            solve_tridiagonal([0.0, 1.0, 1.0], [1.0, 1.0, 1.0], [1.0, 1.0, 0.0], [1.0, 2.0, 3.0])
        assert excinfo.value.row == 1

    def test_zero_last_pivot(self):
        with pytest.raises(SingularSystemError) as excinfo:
            solve_tridiagonal([0.0, 1.0], [1.0, 1.0], [1.0, 0.0], [1.0, 1.0])
        assert excinfo.value.row == 1

    def test_length_mismatch(self):
        with pytest.raises(ValidationError, match="equal length"):
            solve_tridiagonal([0.0, 1.0], [1.0, 1.0, 1.0], [1.0, 0.0, 0.0], [1.0, 1.0, 1.0])

    def test_empty_system(self):
        with pytest.raises(ValidationError, match="at least one row"):
            solve_tridiagonal([], [], [], [])

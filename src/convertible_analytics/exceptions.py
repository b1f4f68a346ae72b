"""Custom exception hierarchy for the convertible_analytics library.

All library-specific exceptions inherit from :class:`ConvertibleAnalyticsError`,
enabling callers to catch *any* library error with a single ``except`` clause::

    try:
        pv = ConvertibleBondValuation(spec, spot=50.5).present_value()
    except ConvertibleAnalyticsError as exc:
        log.error("Library error: %s", exc)

Callers that need to tell bad inputs apart from numerical failures catch the
narrower classes below.
"""

from __future__ import annotations


class ConvertibleAnalyticsError(Exception):
    """Base exception for all library errors."""


# ── Input validation ────────────────────────────────────────────────


class ValidationError(ConvertibleAnalyticsError):
    """Invalid input values (out-of-range, non-finite, mismatched lengths, etc.)."""


class ConfigurationError(ConvertibleAnalyticsError):
    """Invalid numerical configuration (grid resolution, interpolation order, ...)."""


# ── Numerical issues ────────────────────────────────────────────────


class NumericalError(ConvertibleAnalyticsError):
    """Base for errors arising from numerical computation."""


class ConvergenceError(NumericalError):
    """The penalty iteration failed to converge within the allowed iterations.

    Attributes
    ----------
    time_level : int | None
        Time level index at which the iteration gave up.
    iterations : int | None
        Number of penalty iterations performed.
    residual : float | None
        Last sum-of-squares change between successive iterates.
    """

    def __init__(
        self,
        message: str,
        *,
        time_level: int | None = None,
        iterations: int | None = None,
        residual: float | None = None,
    ) -> None:
        super().__init__(message)
        self.time_level = time_level
        self.iterations = iterations
        self.residual = residual


class SingularSystemError(NumericalError):
    """A zero pivot was met while solving a tridiagonal system."""

    def __init__(self, message: str, *, row: int | None = None) -> None:
        super().__init__(message)
        self.row = row

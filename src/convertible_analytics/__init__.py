from .exceptions import (
    ConfigurationError,
    ConvergenceError,
    ConvertibleAnalyticsError,
    NumericalError,
    SingularSystemError,
    ValidationError,
)
from .interpolation import lagrange_interpolate
from .tridiagonal import solve_tridiagonal
from .valuation import (
    ConvertibleBondSpec,
    ConvertibleBondValuation,
    PDEParams,
    crank_nicolson_penalty,
    price_convertible_bond_pde,
)


__all__ = [
    "ConfigurationError",
    "ConvergenceError",
    "ConvertibleAnalyticsError",
    "NumericalError",
    "SingularSystemError",
    "ValidationError",
    "lagrange_interpolate",
    "solve_tridiagonal",
    "ConvertibleBondSpec",
    "ConvertibleBondValuation",
    "PDEParams",
    "crank_nicolson_penalty",
    "price_convertible_bond_pde",
]

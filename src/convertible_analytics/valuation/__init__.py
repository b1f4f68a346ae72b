"""Convertible bond and option portfolio valuation.

Public API
----------
Contract and parameter classes:
    ConvertibleBondSpec: Contract and model terms of a convertible bond
    PDEParams: Configuration for the Crank-Nicolson penalty solver
    MonteCarloParams: Configuration for Monte Carlo portfolio pricing

PDE valuation:
    ConvertibleBondValuation: Class front end (present value, grid, diagnostics)
    crank_nicolson_penalty: Backward sweep returning the full solution
    price_convertible_bond_pde: Function-style pricing

Monte Carlo:
    PortfolioPosition, MonteCarloEstimate
    monte_carlo_portfolio_value, monte_carlo_confidence_interval
"""

from .params import ConvertibleBondSpec, MonteCarloParams, PDEParams
from .pde import (
    ConvertibleBondValuation,
    PDESolution,
    PenaltyStepResult,
    crank_nicolson_penalty,
    price_convertible_bond_pde,
)
from .monte_carlo import (
    MonteCarloEstimate,
    PortfolioPosition,
    monte_carlo_confidence_interval,
    monte_carlo_portfolio_value,
)

__all__ = [
    # Contract and parameter classes
    "ConvertibleBondSpec",
    "PDEParams",
    "MonteCarloParams",
    # PDE valuation
    "ConvertibleBondValuation",
    "PDESolution",
    "PenaltyStepResult",
    "crank_nicolson_penalty",
    "price_convertible_bond_pde",
    # Monte Carlo
    "MonteCarloEstimate",
    "PortfolioPosition",
    "monte_carlo_confidence_interval",
    "monte_carlo_portfolio_value",
]

"""Monte Carlo valuation of static option portfolios under GBM.

Only the terminal price matters for the instruments supported here, so each
path is a single draw of S_T. Randomness always comes from an explicitly
passed ``numpy.random.Generator`` so that runs are reproducible.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import logging

import numpy as np
from scipy.stats import norm

from ..enums import Instrument
from ..exceptions import ConfigurationError, ValidationError
from .params import MonteCarloParams

logger = logging.getLogger(__name__)

__all__ = [
    "PortfolioPosition",
    "MonteCarloEstimate",
    "instrument_payoff",
    "portfolio_payoff",
    "simulate_terminal_prices",
    "monte_carlo_portfolio_value",
    "monte_carlo_confidence_interval",
]


@dataclass(frozen=True, slots=True)
class PortfolioPosition:
    """A signed holding of one instrument."""

    instrument: Instrument
    quantity: float
    strike: float = 0.0

    def __post_init__(self) -> None:
        if not isinstance(self.instrument, Instrument):
            raise ConfigurationError(
                f"instrument must be Instrument enum, got {type(self.instrument).__name__}"
            )
        if not np.isfinite(self.quantity):
            raise ValidationError("quantity must be finite")
        if not np.isfinite(self.strike) or self.strike < 0.0:
            raise ValidationError(f"strike must be finite and >= 0, got {self.strike}")


@dataclass(frozen=True, slots=True)
class MonteCarloEstimate:
    """Batch-mean estimate with a normal confidence interval."""

    mean: float
    std_error: float
    lower: float
    upper: float
    num_batches: int
    num_paths: int


def instrument_payoff(instrument: Instrument, strike: float, spot: np.ndarray) -> np.ndarray:
    """Vectorized payoff of a single instrument at maturity."""
    spot = np.asarray(spot, dtype=float)
    if instrument is Instrument.PUT:
        return np.maximum(strike - spot, 0.0)
    if instrument is Instrument.CALL:
        return np.maximum(spot - strike, 0.0)
    if instrument is Instrument.BINARY_PUT:
        return (spot <= strike).astype(float)
    if instrument is Instrument.BINARY_CALL:
        return (spot > strike).astype(float)
    if instrument is Instrument.ZERO_STRIKE_CALL:
        return spot.copy()
    raise ConfigurationError(f"Unsupported instrument: {instrument}")


def portfolio_payoff(positions: Sequence[PortfolioPosition], spot: np.ndarray) -> np.ndarray:
    """Quantity-weighted sum of instrument payoffs."""
    spot = np.asarray(spot, dtype=float)
    total = np.zeros_like(spot)
    for position in positions:
        total += position.quantity * instrument_payoff(position.instrument, position.strike, spot)
    return total


def _validate_market_inputs(spot: float, volatility: float, maturity: float) -> None:
    if spot <= 0:
        raise ValidationError(f"spot must be positive, got {spot}")
    if volatility < 0:
        raise ValidationError(f"volatility must be >= 0, got {volatility}")
    if maturity < 0:
        raise ValidationError(f"maturity must be >= 0, got {maturity}")


def simulate_terminal_prices(
    spot: float,
    risk_free_rate: float,
    dividend_yield: float,
    volatility: float,
    maturity: float,
    num_paths: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """Draw GBM terminal prices S_T = S_0 exp((r - q - sigma^2/2) T + sigma sqrt(T) Z)."""
    _validate_market_inputs(spot, volatility, maturity)
    if num_paths < 1:
        raise ValidationError(f"num_paths must be >= 1, got {num_paths}")
    z = rng.standard_normal(num_paths)
    drift = (risk_free_rate - dividend_yield - 0.5 * volatility**2) * maturity
    return spot * np.exp(drift + volatility * np.sqrt(maturity) * z)


def monte_carlo_portfolio_value(
    positions: Sequence[PortfolioPosition],
    spot: float,
    risk_free_rate: float,
    dividend_yield: float,
    volatility: float,
    maturity: float,
    num_paths: int,
    rng: np.random.Generator,
) -> float:
    """Discounted mean portfolio payoff over ``num_paths`` simulated prices."""
    terminal = simulate_terminal_prices(
        spot, risk_free_rate, dividend_yield, volatility, maturity, num_paths, rng
    )
    payoff = portfolio_payoff(positions, terminal)
    return float(np.exp(-risk_free_rate * maturity) * payoff.mean())


def monte_carlo_confidence_interval(
    positions: Sequence[PortfolioPosition],
    spot: float,
    risk_free_rate: float,
    dividend_yield: float,
    volatility: float,
    maturity: float,
    params: MonteCarloParams | None = None,
) -> MonteCarloEstimate:
    """Confidence interval from ``num_batches`` independent batch estimates.

    The standard error is the sample standard deviation of the batch means
    divided by sqrt(num_batches).
    """
    params = MonteCarloParams() if params is None else params
    rng = np.random.default_rng(params.random_seed)

    samples = np.array(
        [
            monte_carlo_portfolio_value(
                positions,
                spot,
                risk_free_rate,
                dividend_yield,
                volatility,
                maturity,
                params.num_paths,
                rng,
            )
            for _ in range(params.num_batches)
        ]
    )
    mean = float(samples.mean())
    std_error = float(np.sqrt(samples.var(ddof=1) / params.num_batches))
    z = float(norm.ppf(0.5 + 0.5 * params.confidence_level))
    logger.debug(
        "MC portfolio batches=%d paths=%d mean=%.6g std_error=%.6g",
        params.num_batches,
        params.num_paths,
        mean,
        std_error,
    )
    return MonteCarloEstimate(
        mean=mean,
        std_error=std_error,
        lower=mean - z * std_error,
        upper=mean + z * std_error,
        num_batches=params.num_batches,
        num_paths=params.num_paths,
    )

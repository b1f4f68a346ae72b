"""Contract and method-specific parameter classes.

The contract terms of the convertible bond live in :class:`ConvertibleBondSpec`;
each pricing method has its own parameter class that explicitly documents the
configuration options available for that method.
"""

from dataclasses import dataclass, fields
import math

from ..exceptions import ConfigurationError, ValidationError


@dataclass(frozen=True, slots=True)
class ConvertibleBondSpec:
    """Contract and model terms of a convertible bond.

    The bond pays ``face_value`` at maturity unless converted into
    ``conversion_ratio`` units of the underlying, which may happen at any
    time (American-style). The underlying follows a mean-reverting process
    with CEV-type diffusion ``sigma * S**beta``.

    Attributes
    ==========
    maturity:
        Time to maturity T in years.
    face_value:
        Principal F repaid at maturity.
    conversion_ratio:
        Units R of the underlying received on conversion.
    risk_free_rate:
        Continuously compounded rate r.
    kappa:
        Mean-reversion speed of the underlying.
    mu:
        Growth rate of the mean-reversion level theta(t).
    reference_level:
        Reference level X that anchors theta(t) = (1 + mu) X exp(mu t).
    coupon:
        Continuous coupon rate C.
    alpha:
        Decay exponent of the coupon stream C exp(-alpha t).
    beta:
        Elasticity of the diffusion term.
    volatility:
        Diffusion scale sigma.
    """

    maturity: float
    face_value: float
    conversion_ratio: float
    risk_free_rate: float
    kappa: float
    mu: float
    reference_level: float
    coupon: float
    alpha: float
    beta: float
    volatility: float

    def __post_init__(self):
        for field in fields(self):
            name = field.name
            value = getattr(self, name)
            try:
                value = float(value)
            except (TypeError, ValueError) as exc:
                raise ValidationError(f"{name} must be numeric, got {value!r}") from exc
            if not math.isfinite(value):
                raise ValidationError(f"{name} must be finite, got {value}")
            object.__setattr__(self, name, value)
        if self.maturity <= 0:
            raise ValidationError(f"maturity must be positive, got {self.maturity}")
        if self.face_value < 0:
            raise ValidationError(f"face_value must be >= 0, got {self.face_value}")
        if self.conversion_ratio < 0:
            raise ValidationError(f"conversion_ratio must be >= 0, got {self.conversion_ratio}")
        if self.volatility < 0:
            raise ValidationError(f"volatility must be >= 0, got {self.volatility}")


@dataclass(frozen=True, slots=True)
class PDEParams:
    """Parameters for the Crank-Nicolson penalty solver.

    Attributes:
        time_steps: Number of time levels i_max. Default: 100.
        spot_steps: Number of spatial steps j_max; the grid has spot_steps + 1
                    nodes. Default: 100.
        s_max: Upper edge of the asset grid. If None, five times the face
               value is used. Default: None.
        penalty: Penalty constant rho added to rows violating the conversion
                 constraint. Larger values enforce the constraint more
                 tightly. Default: 1e8
        tol: Convergence tolerance of the penalty iteration. The iteration
             stops once the sum of squared changes drops below tol**2.
             Default: 1e-4
        max_iter: Maximum penalty iterations per time level. Default: 10_000
        interpolation_order: Number of Lagrange stencil points used to read
                             off the value at the current asset level.
                             Default: 8
        log_timings: Emit a DEBUG timing line around present_value.
    """

    time_steps: int = 100
    spot_steps: int = 100
    s_max: float | None = None
    penalty: float = 1e8
    tol: float = 1e-4
    max_iter: int = 10_000
    interpolation_order: int = 8
    log_timings: bool = False

    def __post_init__(self):
        if self.time_steps < 1:
            raise ConfigurationError(f"time_steps must be >= 1, got {self.time_steps}")
        if self.spot_steps < 1:
            raise ConfigurationError(f"spot_steps must be >= 1, got {self.spot_steps}")
        if self.s_max is not None and not self.s_max > 0:
            raise ConfigurationError(f"s_max must be positive, got {self.s_max}")
        if not self.penalty > 0:
            raise ConfigurationError(f"penalty must be positive, got {self.penalty}")
        if not self.tol > 0:
            raise ConfigurationError(f"tol must be positive, got {self.tol}")
        if self.max_iter < 1:
            raise ConfigurationError(f"max_iter must be >= 1, got {self.max_iter}")
        if self.interpolation_order < 1:
            raise ConfigurationError(
                f"interpolation_order must be >= 1, got {self.interpolation_order}"
            )

    def resolve_s_max(self, face_value: float) -> float:
        """Upper grid edge, defaulting to five times the face value."""
        if self.s_max is not None:
            return float(self.s_max)
        s_max = 5.0 * face_value
        if not s_max > 0:
            raise ConfigurationError("s_max cannot default from a zero face_value; set it explicitly")
        return s_max


@dataclass(frozen=True, slots=True)
class MonteCarloParams:
    """Parameters for Monte Carlo portfolio valuation.

    Attributes
    ==========
    num_paths:
        Terminal prices simulated per batch. Default: 200_000.
    num_batches:
        Independent batch estimates used for the confidence interval.
        Default: 100.
    random_seed:
        Random seed for reproducibility. If None, uses fresh OS entropy.
    confidence_level:
        Two-sided coverage of the reported interval. Default: 0.95.
    """

    num_paths: int = 200_000
    num_batches: int = 100
    random_seed: int | None = None
    confidence_level: float = 0.95

    def __post_init__(self):
        if self.num_paths < 1:
            raise ValidationError(f"num_paths must be >= 1, got {self.num_paths}")
        if self.num_batches < 2:
            raise ValidationError(f"num_batches must be >= 2, got {self.num_batches}")
        if not (0.0 < self.confidence_level < 1.0):
            raise ValidationError(
                f"confidence_level must be in (0, 1), got {self.confidence_level}"
            )

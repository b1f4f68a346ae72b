"""Shared pytest fixtures for convertible_analytics tests."""

import pytest

from convertible_analytics.valuation import ConvertibleBondSpec, PDEParams


# ---------------------------------------------------------------------------
# Scalar constants
# ---------------------------------------------------------------------------

SPOT = 50.5
FACE_VALUE = 50.0
S_MAX = 250.0


@pytest.fixture()
def spot() -> float:
    return SPOT


@pytest.fixture()
def face_value() -> float:
    return FACE_VALUE


# ---------------------------------------------------------------------------
# Contract / solver settings
# ---------------------------------------------------------------------------


@pytest.fixture()
def bond_spec() -> ConvertibleBondSpec:
    """Two-year convertible with conversion ratio 1, as in the reference scenario."""
    return ConvertibleBondSpec(
        maturity=2.0,
        face_value=FACE_VALUE,
        conversion_ratio=1.0,
        risk_free_rate=0.0114,
        kappa=0.125,
        mu=0.0174,
        reference_level=50.5,
        coupon=0.285,
        alpha=0.01,
        beta=0.869,
        volatility=0.668,
    )


@pytest.fixture()
def reference_params() -> PDEParams:
    return PDEParams(
        time_steps=100,
        spot_steps=100,
        s_max=S_MAX,
        penalty=1e8,
        tol=1e-4,
        max_iter=10_000,
    )


@pytest.fixture()
def coarse_params() -> PDEParams:
    """Small grid for tests that only need qualitative behaviour."""
    return PDEParams(time_steps=20, spot_steps=40, s_max=S_MAX)

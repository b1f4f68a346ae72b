"""Enums for portfolio valuation."""

from enum import Enum

__all__ = [
    "Instrument",
]


class Instrument(Enum):
    PUT = "put"
    CALL = "call"
    BINARY_PUT = "binary_put"
    BINARY_CALL = "binary_call"
    ZERO_STRIKE_CALL = "zero_strike_call"

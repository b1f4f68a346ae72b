"""Visualization module for convertible analytics.

This module provides plotting functions for:
- PDE value profiles against the conversion value
- Penalty iteration diagnostics
"""

from .profiles import plot_penalty_iterations, plot_value_profile

__all__ = [
    "plot_value_profile",
    "plot_penalty_iterations",
]

"""Plot PDE solution profiles and penalty iteration diagnostics."""

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes


def plot_value_profile(
    S: np.ndarray,
    V: np.ndarray,
    conversion_ratio: float,
    face_value: float | None = None,
    spot: float | None = None,
    figsize: tuple[float, float] = (10, 6),
) -> tuple[Figure, Axes]:
    """Plot the bond value on the asset grid against the conversion value.

    Parameters
    ----------
    S : np.ndarray
        Asset grid
    V : np.ndarray
        Bond values on the grid
    conversion_ratio : float
        Units R of the underlying received on conversion
    face_value : float, optional
        Draws a horizontal reference line at the face value when given
    spot : float, optional
        Marks the current asset level when given
    figsize : tuple[float, float], optional
        Figure size (default: (10, 6))

    Returns
    -------
    tuple[Figure, Axes]
        Matplotlib figure and axes objects
    """
    fig, ax = plt.subplots(figsize=figsize)

    ax.plot(S, V, label="Bond Value", linewidth=2)
    ax.plot(S, conversion_ratio * S, label="Conversion Value", linewidth=2, linestyle="--", alpha=0.7)
    if face_value is not None:
        ax.axhline(y=face_value, color="k", linestyle=":", alpha=0.5, label="Face Value")
    if spot is not None:
        ax.axvline(x=spot, color="r", linestyle=":", alpha=0.5, label="Spot")

    ax.set_xlabel("Underlying Level")
    ax.set_ylabel("Value")
    ax.set_title("Convertible Bond Value at t = 0")
    ax.legend()
    ax.grid(True, alpha=0.3)

    return fig, ax


def plot_penalty_iterations(
    diagnostics: pd.DataFrame,
    figsize: tuple[float, float] = (10, 6),
) -> tuple[Figure, Axes]:
    """Plot penalty iterations needed at each time level.

    ``diagnostics`` is the frame returned by
    ``ConvertibleBondValuation.penalty_diagnostics``.
    """
    fig, ax = plt.subplots(figsize=figsize)

    ax.step(diagnostics["time"], diagnostics["iterations"], where="mid", linewidth=2)
    ax.set_xlabel("Time (years)")
    ax.set_ylabel("Penalty Iterations")
    ax.set_title("Penalty Iterations per Time Level")
    ax.grid(True, alpha=0.3)

    return fig, ax

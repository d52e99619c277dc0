#!/usr/bin/env python3
"""
Rendering of (x, y) series to PNG charts.
"""

import logging
from pathlib import Path
from typing import Sequence, Tuple, Union

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from .discrete_signal import DiscreteSignal
from .errors import EmptySignalError

RESOLUTION = (2048, 1280)
DPI = 100
WIDTH = 4
P_SIZE = 6

log = logging.getLogger(__name__)


def get_min_max(data: Sequence[float]) -> Tuple[float, float]:
    """Return the minimum and maximum of *data*."""
    values = np.asarray(data, dtype=np.float64)
    return float(np.min(values)), float(np.max(values))


def chart_filename(title: str) -> str:
    return "_".join(title.split(" ")) + ".png"


def plot_data(
    x: Sequence[float],
    y: Sequence[float],
    title: str,
    labels: Tuple[str, str] = ("x", "y"),
    output_dir: Union[str, Path] = "."
) -> Path:
    """
    Draw *y* against *x* as a line with point markers and save it.

    Parameters
    ----------
    x, y : sequence of float
        Abscissae and ordinates, equal length
    title : str
        Chart caption; also names the file (spaces become underscores)
    labels : (str, str)
        Axis labels
    output_dir : path
        Directory receiving the PNG

    Returns
    -------
    Path
        Location of the written chart
    """
    if len(x) == 0:
        raise EmptySignalError(f"nothing to plot for '{title}'")
    if len(x) != len(y):
        raise ValueError(f"x and y differ in length: {len(x)} != {len(y)}")

    lo, hi = get_min_max(y)
    if lo == hi:
        lo, hi = lo - 0.5, hi + 0.5

    path = Path(output_dir) / chart_filename(title)
    fig, ax = plt.subplots(figsize=(RESOLUTION[0] / DPI, RESOLUTION[1] / DPI), dpi=DPI)
    try:
        ax.plot(x, y, color="magenta", linewidth=WIDTH,
                marker="o", markersize=P_SIZE, label=title)
        ax.set_title(title, fontsize=30)
        ax.set_xlabel(labels[0])
        ax.set_ylabel(labels[1])
        if x[0] != x[-1]:
            ax.set_xlim(x[0], x[-1])
        ax.set_ylim(lo, hi)
        ax.grid(True, alpha=0.3)
        ax.legend(facecolor="white", framealpha=0.8, edgecolor="black")
        fig.savefig(path)
    finally:
        plt.close(fig)

    log.info("Saved chart %s", path)
    return path


def plot_signal(
    signal: DiscreteSignal,
    title: str,
    labels: Tuple[str, str] = ("Time [s]", "Value"),
    output_dir: Union[str, Path] = "."
) -> Path:
    data = signal.as_array()
    return plot_data(data[:, 0], data[:, 1], title, labels, output_dir)

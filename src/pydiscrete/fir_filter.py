#!/usr/bin/env python3
"""
FIR convolution and coefficient generation
==========================================

Valid-mode convolution of a :class:`DiscreteSignal` with a tap sequence,
plus two coefficient generators:

- averaging (boxcar): every tap ``1/L`` with ``L = max(size, capacity)``
- low-pass: the legacy sampled sinc kernel with ``L = min(size, capacity)``,

      a = i / (0.2·F·L),  h[i-1] = 2F · sin(2πF·a) / (2πF·a),  i = 1 … L

  where ``F`` is the reference frequency (1000 by default). The formula is
  kept exactly; an optional window may be applied on top of it.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Sequence

import numpy as np
from scipy.special import i0 as bessel_i0

from .discrete_signal import DiscreteSignal
from .errors import EmptySignalError, FilterLongerThanSignalError

LEGACY_REFERENCE_FREQUENCY = 1000.0

WINDOWS = ("rectangular", "hann", "hamming", "blackman-harris", "kaiser")

log = logging.getLogger(__name__)


# ───────────────────────── windows ────────────────────────── #

def build_window(M: int, win_type: str = "rectangular", beta: float = 8.6) -> np.ndarray:
    """
    Return an M-point full window.

    Parameters
    ----------
    M : int
        Window length
    win_type : str
        One of ``WINDOWS``
    beta : float
        Kaiser window beta parameter (only for kaiser)
    """
    if win_type not in WINDOWS:
        raise ValueError(f"Unsupported window type: {win_type}")
    n = np.arange(M, dtype=np.float64)
    if win_type == "rectangular" or M == 1:
        return np.ones_like(n)

    if win_type == "hann":
        w = 0.5 - 0.5 * np.cos(2 * np.pi * n / (M - 1))
    elif win_type == "hamming":
        w = 0.54 - 0.46 * np.cos(2 * np.pi * n / (M - 1))
    elif win_type == "blackman-harris":
        a0, a1, a2, a3 = 0.35875, 0.48829, 0.14128, 0.01168
        x = 2 * np.pi * n / (M - 1)
        w = a0 - a1*np.cos(x) + a2*np.cos(2*x) - a3*np.cos(3*x)
    else:  # kaiser
        w = bessel_i0(beta * np.sqrt(1 - (2*n/(M-1) - 1)**2)) / bessel_i0(beta)
    return w


# ─────────────────────── coefficient sets ─────────────────────── #

def _length(size: int, capacity: Optional[int], pick) -> int:
    if size < 1:
        raise ValueError(f"Filter size must be positive, got {size}")
    if capacity is None:
        return size
    if capacity < 1:
        raise ValueError(f"Coefficient capacity must be positive, got {capacity}")
    return pick(size, capacity)


def averaging_coefficients(size: int, capacity: Optional[int] = None) -> np.ndarray:
    """Moving-average taps, all equal to ``1/L`` with ``L = max(size, capacity)``."""
    length = _length(size, capacity, max)
    return np.full(length, 1.0 / length, dtype=np.float64)


def lowpass_coefficients(
    size: int,
    capacity: Optional[int] = None,
    reference_frequency: float = LEGACY_REFERENCE_FREQUENCY,
    window: str = "rectangular",
    beta: float = 8.6
) -> np.ndarray:
    """
    Sampled sinc low-pass taps of length ``L = min(size, capacity)``.

    Parameters
    ----------
    size : int
        Requested number of taps
    capacity : int, optional
        Capacity of the caller's coefficient buffer
    reference_frequency : float
        Design constant ``F`` of the legacy kernel
    window : str
        Window multiplied onto the kernel; ``rectangular`` leaves it untouched
    beta : float
        Kaiser window beta parameter
    """
    if not reference_frequency > 0:
        raise ValueError(f"Reference frequency must be positive, got {reference_frequency}")
    length = _length(size, capacity, min)
    F = reference_frequency

    i = np.arange(1, length + 1, dtype=np.float64)
    a = i / (0.2 * F * length)
    arg = 2 * np.pi * F * a
    taps = 2 * F * np.sin(arg) / arg

    if window != "rectangular":
        taps = taps * build_window(length, window, beta)
    return taps


@dataclass
class FilterDesign:
    """Complete description of a coefficient set."""
    kind: str = "lowpass"  # 'averaging' or 'lowpass'
    size: int = 32
    capacity: Optional[int] = None
    reference_frequency: float = LEGACY_REFERENCE_FREQUENCY
    window: str = "rectangular"
    beta: float = 8.6

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'FilterDesign':
        return cls(**d)

    def coefficients(self) -> np.ndarray:
        if self.kind == "averaging":
            taps = averaging_coefficients(self.size, self.capacity)
        elif self.kind == "lowpass":
            taps = lowpass_coefficients(self.size, self.capacity,
                                        self.reference_frequency, self.window, self.beta)
        else:
            raise ValueError(f"Unsupported filter kind: {self.kind}")
        log.debug("Designed %s filter: %d taps", self.kind, len(taps))
        return taps


# ───────────────────────── filtering ────────────────────────── #

def fir_filter(signal: DiscreteSignal, coefficients: Sequence[float]) -> DiscreteSignal:
    """
    Valid-mode convolution of *signal* with *coefficients*.

    Output sample ``k`` is ``Σ c[i] · x[k + L - 1 - i]`` stamped with the
    timestamp of ``x[k]``, the oldest sample of its window, so the result has
    ``len(signal) - len(coefficients) + 1`` samples.

    Raises
    ------
    EmptySignalError
        If *signal* has no samples.
    FilterLongerThanSignalError
        If there are more taps than samples.
    """
    taps = np.asarray(coefficients, dtype=np.float64)
    if taps.ndim != 1 or len(taps) == 0:
        raise ValueError("Coefficients must be a non-empty 1-D sequence")
    if len(signal) == 0:
        raise EmptySignalError("cannot filter a signal with no samples")
    signal.validate()
    if len(taps) > len(signal):
        raise FilterLongerThanSignalError(len(taps), len(signal))

    y = np.convolve(signal.values(), taps, mode="valid")
    stamps = signal.timestamps()[:len(y)]
    log.debug("Filtered %d samples with %d taps -> %d samples",
              len(signal), len(taps), len(y))
    return DiscreteSignal.from_arrays(stamps, y)

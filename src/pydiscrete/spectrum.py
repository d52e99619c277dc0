#!/usr/bin/env python3
"""
Memoized Discrete Fourier Transform
===================================

Direct O(N²) DFT of a uniformly sampled signal producing its one-sided
magnitude spectrum.

Every product ``w[(i·j) mod N] · x[j]`` needed by the summation is taken
from a table indexed by twiddle index and sample index, so pairs ``(i, j)``
that collapse onto the same twiddle index share one multiplication instead
of repeating it per output bin. The table is held for the lifetime of one
:class:`SpectralEngine` and costs O(N²) memory, which is the scalability
ceiling of this design: the engine refuses to build a table that would not
fit into available memory unless forced.
"""

import logging
import math
import os
import time
from typing import List, Optional

import numpy as np

try:
    import psutil
except ImportError:
    psutil = None

from .complex_number import ComplexNumber
from .discrete_signal import DiscreteSignal
from .errors import EmptySignalError, SpectrumTooLargeError

# approximate footprint of one table entry: ComplexNumber instance,
# its two floats and the list slot referencing it
TABLE_ENTRY_BYTES = 120

# relative spread of sample spacing tolerated before warning
UNIFORMITY_TOLERANCE = 1e-6


# ───────────────────────── helpers ────────────────────────── #

def bytes_free() -> int:
    if psutil:
        return psutil.virtual_memory().available
    if hasattr(os, "sysconf"):
        pages = os.sysconf("SC_AVPHYS_PAGES")
        size = os.sysconf("SC_PAGE_SIZE")
        return pages * size
    return 0


def human_size(bytes_: float) -> str:
    if bytes_ < 1024:
        return f"{bytes_:.1f} B"
    elif bytes_ < 1024**2:
        return f"{bytes_/1024:.1f} KB"
    elif bytes_ < 1024**3:
        return f"{bytes_/1024**2:.1f} MB"
    else:
        return f"{bytes_/1024**3:.2f} GB"


def table_size(n: int) -> int:
    """Estimated bytes held by the product table for *n* samples."""
    return n * n * TABLE_ENTRY_BYTES


def sampling_rate_of(signal: DiscreteSignal,
                     log: Optional[logging.Logger] = None) -> Optional[float]:
    """
    Derive the sampling rate from the mean timestamp spacing.

    Returns ``None`` for a single-sample signal, whose spacing is undefined.
    Logs a warning when the grid is not uniform.
    """
    if log is None:
        log = logging.getLogger(__name__)

    stamps = signal.timestamps()
    if len(stamps) < 2:
        return None

    steps = np.diff(stamps)
    period = (stamps[-1] - stamps[0]) / (len(stamps) - 1)
    spread = np.ptp(steps) / period
    if spread > UNIFORMITY_TOLERANCE:
        log.warning("Non-uniform sampling (spacing spread %.2e); spectrum "
                    "assumes mean period %.6g s", spread, period)
    return 1.0 / period


# ──────────────────────── engine ──────────────────────── #

class SpectralEngine:
    """
    Product table and parameters for the DFT of one signal.

    Parameters
    ----------
    signal : DiscreteSignal
        Uniformly sampled input with at least one sample.
    sampling_rate : float, optional
        Sampling rate in Hz. Derived from the timestamp spacing if omitted.
    force : bool
        Build the table even if it exceeds available memory.
    log : Logger
        Optional logger
    """

    def __init__(
        self,
        signal: DiscreteSignal,
        sampling_rate: Optional[float] = None,
        force: bool = False,
        log: Optional[logging.Logger] = None
    ):
        self.log = log if log is not None else logging.getLogger(__name__)

        if len(signal) == 0:
            raise EmptySignalError("cannot compute the spectrum of a signal with no samples")
        signal.validate()
        if sampling_rate is not None and not sampling_rate > 0:
            raise ValueError(f"Sampling rate must be positive, got {sampling_rate}")

        self.n = len(signal)
        self.two_pi_by_n = 2.0 * math.pi / self.n

        if sampling_rate is None:
            sampling_rate = sampling_rate_of(signal, self.log)
        self.sampling_rate = sampling_rate
        # a lone sample has no spacing; only its DC bin (at 0 Hz) is emitted
        self.resolution = sampling_rate / self.n if sampling_rate else 0.0

        self._check_memory(force)

        t0 = time.perf_counter()
        self.wn: List[ComplexNumber] = [
            ComplexNumber(math.cos(self.two_pi_by_n * k),
                          -math.sin(self.two_pi_by_n * k))
            for k in range(self.n)
        ]
        values = signal.values().tolist()
        self.snk: List[List[ComplexNumber]] = [
            [w * v for v in values] for w in self.wn
        ]
        self.log.debug("Product table %d×%d built in %.3f s",
                       self.n, self.n, time.perf_counter() - t0)

    def _check_memory(self, force: bool) -> None:
        needed = table_size(self.n)
        free = bytes_free()
        self.log.info("DFT of %d samples: product table ≈ %s", self.n, human_size(needed))
        if free and needed > free:
            if not force:
                raise SpectrumTooLargeError(
                    f"DFT of {self.n} samples needs ≈{human_size(needed)} for its "
                    f"product table but only {human_size(free)} is available"
                )
            self.log.warning("Product table (%s) exceeds free memory (%s); continuing as forced",
                             human_size(needed), human_size(free))

    def bin(self, i: int) -> ComplexNumber:
        """Unscaled DFT coefficient ``X[i]``."""
        acc = ComplexNumber()
        for j in range(self.n):
            acc = acc + self.snk[(i * j) % self.n][j]
        return acc

    def spectrum(self) -> DiscreteSignal:
        """
        One-sided magnitude spectrum, bins ``0 … N // 2``.

        DC is scaled by ``1/N``; every other bin by ``2/N`` to fold in its
        negative-frequency mirror.
        """
        t0 = time.perf_counter()
        result = DiscreteSignal()
        for i in range(self.n // 2 + 1):
            scale = 1.0 / self.n if i == 0 else 2.0 / self.n
            result.push(i * self.resolution, self.bin(i).modulus() * scale)
        self.log.info("Spectrum: %d bins, Δf = %.6g Hz in %.3f s",
                      len(result), self.resolution, time.perf_counter() - t0)
        return result


def fft(signal: DiscreteSignal,
        sampling_rate: Optional[float] = None,
        force: bool = False,
        log: Optional[logging.Logger] = None) -> DiscreteSignal:
    """
    Compute the one-sided magnitude spectrum of *signal*.

    The returned signal maps frequency (Hz) to magnitude. The product table
    is released before returning.
    """
    engine = SpectralEngine(signal, sampling_rate, force, log)
    spectrum = engine.spectrum()
    del engine
    return spectrum

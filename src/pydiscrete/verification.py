#!/usr/bin/env python3
"""
Verification tools for filter coefficients.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

import numpy as np
from scipy import signal
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt


def verify_filter_response(
    coefficients: Sequence[float],
    sample_rate: float = 1.0,
    plot: bool = False,
    output_dir: Union[str, Path] = ".",
    log: Optional[logging.Logger] = None
) -> Dict[str, Any]:
    """
    Measure the frequency response of a coefficient set.

    Parameters
    ----------
    coefficients : sequence of float
        Filter taps
    sample_rate : float
        Sample rate in Hz the taps will run at
    plot : bool
        Whether to save a magnitude/phase response chart
    output_dir : path
        Directory receiving the chart
    log : Logger
        Optional logger

    Returns
    -------
    dict
        ``dc_gain``, ``peak_gain``, ``peak_freq``, ``f_3db`` (None if the
        response never falls 3 dB below its peak) and ``chart`` when plotted
    """
    if log is None:
        log = logging.getLogger(__name__)

    taps = np.asarray(coefficients, dtype=np.float64)
    if taps.ndim != 1 or len(taps) == 0:
        raise ValueError("Coefficients must be a non-empty 1-D sequence")
    if not sample_rate > 0:
        raise ValueError(f"Sample rate must be positive, got {sample_rate}")

    w, h = signal.freqz(taps, worN=8192, fs=sample_rate)
    mag = np.abs(h)
    mag_db = 20 * np.log10(mag + 1e-300)
    phase = np.unwrap(np.angle(h))

    peak_idx = int(np.argmax(mag))
    peak_db = mag_db[peak_idx]
    below = np.nonzero(mag_db[peak_idx:] <= peak_db - 3.0)[0]
    f_3db = float(w[peak_idx + below[0]]) if len(below) else None

    results = {
        'dc_gain': float(np.sum(taps)),
        'peak_gain': float(mag[peak_idx]),
        'peak_freq': float(w[peak_idx]),
        'f_3db': f_3db,
    }

    log.info("Filter of %d taps: DC gain %.6g, peak %.6g @ %.6g Hz, -3 dB %s",
             len(taps), results['dc_gain'], results['peak_gain'], results['peak_freq'],
             f"@ {f_3db:.6g} Hz" if f_3db is not None else "not reached")

    if plot:
        fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(10, 8))
        try:
            ax1.plot(w, mag_db)
            if f_3db is not None:
                ax1.axvline(f_3db, color='g', linestyle='--', label=f'-3dB: {f_3db:.1f} Hz')
                ax1.legend()
            ax1.set_xlabel('Frequency (Hz)')
            ax1.set_ylabel('Magnitude (dB)')
            ax1.set_title('Frequency Response')
            ax1.grid(True, alpha=0.3)

            ax2.plot(w, phase)
            ax2.set_xlabel('Frequency (Hz)')
            ax2.set_ylabel('Phase (radians)')
            ax2.set_title('Phase Response')
            ax2.grid(True, alpha=0.3)

            fig.tight_layout()
            path = Path(output_dir) / f"filter_response_{len(taps)}taps.png"
            fig.savefig(path)
        finally:
            plt.close(fig)
        results['chart'] = str(path)
        log.info("Saved response chart %s", path)

    return results

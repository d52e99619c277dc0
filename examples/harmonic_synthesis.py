#!/usr/bin/env python3
"""
Example: add a fundamental and two harmonics sampled on different grids,
then inspect the spectrum of the merged signal and smooth it with a
moving average.
"""

import logging

import numpy as np

from pydiscrete import (
    DiscreteSignal,
    Shape,
    WaveformSpec,
    averaging_coefficients,
    fft,
    fir_filter,
    plot_signal,
    synthesize,
)


def main():
    logging.basicConfig(
        level=logging.INFO,
        format='%(levelname)s: %(message)s'
    )

    # fundamental on a 400 Hz grid, harmonics on their own grids
    merged = synthesize([
        WaveformSpec(Shape.SINE, amplitude=1.0, frequency=10.0, periods=10, sampling_rate=400.0),
        WaveformSpec(Shape.SINE, amplitude=0.5, frequency=30.0, periods=30, sampling_rate=1000.0),
        WaveformSpec(Shape.SINE, amplitude=0.25, frequency=50.0, periods=50, sampling_rate=800.0),
    ])
    print(f"Merged signal: {len(merged)} samples on the union of three grids")

    # the DFT wants a uniform grid: resample the merged signal at 400 Hz
    t = np.arange(400) / 400.0
    uniform = DiscreteSignal.from_arrays(
        t, np.interp(t, merged.timestamps(), merged.values()))
    spectrum = fft(uniform)

    print("\nStrongest bins:")
    print("Frequency (Hz) | Magnitude")
    print("---------------|----------")
    for i in np.argsort(spectrum.values())[::-1][:3]:
        f, m = spectrum[i]
        print(f"{f:14.1f} | {m:.4f}")

    smoothed = fir_filter(uniform, averaging_coefficients(8))
    plot_signal(merged, "Merged harmonics")
    plot_signal(spectrum, "Merged harmonics spectrum", ("Frequency [Hz]", "Magnitude"))
    plot_signal(smoothed, "Merged harmonics smoothed")


if __name__ == '__main__':
    main()

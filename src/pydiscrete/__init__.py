"""
Pydiscrete - signal algebra, spectra and FIR filtering on irregular time grids.
"""

__version__ = "0.1.0"

from .complex_number import ComplexNumber
from .discrete_signal import DiscreteSignal, linear_coefficients
from .errors import (
    SignalError,
    EmptySignalError,
    NonMonotonicTimestampsError,
    FilterLongerThanSignalError,
    DegenerateInterpolationError,
    SpectrumTooLargeError,
)
from .spectrum import SpectralEngine, fft
from .fir_filter import (
    FilterDesign,
    fir_filter,
    averaging_coefficients,
    lowpass_coefficients,
)
from .generators import Shape, WaveformSpec, synthesize
from .signal_io import save_signal, load_signal
from .plotter import plot_data, plot_signal
from .verification import verify_filter_response

__all__ = [
    "ComplexNumber",
    "DiscreteSignal",
    "linear_coefficients",
    "SignalError",
    "EmptySignalError",
    "NonMonotonicTimestampsError",
    "FilterLongerThanSignalError",
    "DegenerateInterpolationError",
    "SpectrumTooLargeError",
    "SpectralEngine",
    "fft",
    "FilterDesign",
    "fir_filter",
    "averaging_coefficients",
    "lowpass_coefficients",
    "Shape",
    "WaveformSpec",
    "synthesize",
    "save_signal",
    "load_signal",
    "plot_data",
    "plot_signal",
    "verify_filter_response",
]

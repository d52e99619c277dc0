#!/usr/bin/env python3
"""
Exceptions raised when a signal violates the preconditions of an operation.
"""


class SignalError(ValueError):
    """Base class for all signal precondition failures."""


class EmptySignalError(SignalError):
    """An operation received a signal with zero samples."""


class NonMonotonicTimestampsError(SignalError):
    """Timestamps of a signal are not strictly increasing."""

    def __init__(self, index: int, previous: float, current: float):
        self.index = index
        self.previous = previous
        self.current = current
        super().__init__(
            f"timestamps must be strictly increasing: sample {index} "
            f"at t={current!r} follows t={previous!r}"
        )


class FilterLongerThanSignalError(SignalError):
    """FIR coefficient count exceeds the number of samples."""

    def __init__(self, n_taps: int, n_samples: int):
        self.n_taps = n_taps
        self.n_samples = n_samples
        super().__init__(
            f"filter has {n_taps} taps but signal has only {n_samples} samples"
        )


class DegenerateInterpolationError(SignalError):
    """Both interpolation points share the same timestamp."""


class SpectrumTooLargeError(SignalError, MemoryError):
    """The DFT product table would not fit into available memory."""

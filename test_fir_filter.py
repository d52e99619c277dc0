#!/usr/bin/env python3
"""
Tests for FIR convolution and coefficient generation.
"""

import math

import numpy as np
import pytest

from pydiscrete import (
    DiscreteSignal,
    EmptySignalError,
    FilterDesign,
    FilterLongerThanSignalError,
    NonMonotonicTimestampsError,
    averaging_coefficients,
    fir_filter,
    lowpass_coefficients,
)
from pydiscrete.fir_filter import build_window


def test_timestamps_are_copied_from_window_start():
    stamps = [1.0, 3.2, 4.4, 65.2, 99.4, 23213.14]
    signal = DiscreteSignal((t, t) for t in stamps)
    out = fir_filter(signal, [1.0])
    assert out.get_data() == tuple((t, t) for t in stamps)


def test_output_length_law():
    for sig_len, fir_len in [(1154, 32), (10, 10), (5, 1), (7, 3)]:
        signal = DiscreteSignal.from_arrays(np.arange(sig_len, dtype=float), np.zeros(sig_len))
        out = fir_filter(signal, np.zeros(fir_len))
        assert len(out) == sig_len - fir_len + 1


def test_reference_convolution():
    signal = DiscreteSignal([(0.0, 0.0), (1.0, 1.0), (2.0, 0.0), (3.0, -1.0),
                             (4.0, 0.0), (5.0, 1.0), (6.0, 0.0), (7.0, -1.0)])
    out = fir_filter(signal, [0.1, 2.0, 10.0])
    np.testing.assert_array_equal(out.timestamps(), [0.0, 1.0, 2.0, 3.0, 4.0, 5.0])
    np.testing.assert_allclose(out.values(), [2.0, 9.9, -2.0, -9.9, 2.0, 9.9])


def test_boxcar_preserves_constant_signal():
    signal = DiscreteSignal.from_arrays(np.linspace(0, 1, 40), np.full(40, 4.2))
    for size in (1, 3, 8, 40):
        out = fir_filter(signal, averaging_coefficients(size))
        np.testing.assert_allclose(out.values(), 4.2)


def test_filter_does_not_mutate_input():
    signal = DiscreteSignal([(0.0, 1.0), (1.0, 2.0), (2.0, 3.0)])
    before = signal.clone()
    fir_filter(signal, [0.5, 0.5])
    assert signal == before


def test_filter_longer_than_signal_fails():
    with pytest.raises(FilterLongerThanSignalError):
        fir_filter(DiscreteSignal([(0.0, 1.0), (1.0, 1.0)]), [1.0, 1.0, 1.0])


def test_empty_signal_fails():
    with pytest.raises(EmptySignalError):
        fir_filter(DiscreteSignal(), [1.0])


def test_empty_coefficients_fail():
    with pytest.raises(ValueError):
        fir_filter(DiscreteSignal([(0.0, 1.0)]), [])


def test_non_monotonic_signal_fails():
    with pytest.raises(NonMonotonicTimestampsError):
        fir_filter(DiscreteSignal([(1.0, 1.0), (0.0, 1.0)]), [1.0])


# ─────────────────────── coefficients ─────────────────────── #

def test_averaging_length_is_larger_of_size_and_capacity():
    assert len(averaging_coefficients(4)) == 4
    assert len(averaging_coefficients(4, capacity=10)) == 10
    assert len(averaging_coefficients(12, capacity=10)) == 12
    np.testing.assert_array_equal(averaging_coefficients(5), np.full(5, 0.2))


def test_lowpass_length_is_smaller_of_size_and_capacity():
    assert len(lowpass_coefficients(4, capacity=10)) == 4
    assert len(lowpass_coefficients(12, capacity=10)) == 10


def test_lowpass_formula():
    F, L = 1000.0, 5
    taps = lowpass_coefficients(L)
    for i in range(1, L + 1):
        a = i / (0.2 * F * L)
        expected = 2 * F * math.sin(2 * math.pi * F * a) / (2 * math.pi * F * a)
        assert taps[i - 1] == pytest.approx(expected, rel=1e-12)


def test_lowpass_reference_frequency_is_configurable():
    taps = lowpass_coefficients(8, reference_frequency=50.0)
    a = np.arange(1, 9) / (0.2 * 50.0 * 8)
    arg = 2 * np.pi * 50.0 * a
    # taps 4 and 8 sit on sinc zero crossings
    np.testing.assert_allclose(taps, 100.0 * np.sin(arg) / arg, atol=1e-9)


def test_lowpass_window_tapers_kernel():
    plain = lowpass_coefficients(16)
    windowed = lowpass_coefficients(16, window="hann")
    np.testing.assert_allclose(windowed, plain * build_window(16, "hann"))
    assert windowed[0] == pytest.approx(0.0, abs=1e-12)


def test_invalid_sizes_fail():
    with pytest.raises(ValueError):
        averaging_coefficients(0)
    with pytest.raises(ValueError):
        lowpass_coefficients(4, capacity=0)
    with pytest.raises(ValueError):
        build_window(8, "triangular")


def test_filter_design_dispatch_and_round_trip():
    design = FilterDesign(kind="averaging", size=3, capacity=6)
    np.testing.assert_array_equal(design.coefficients(), averaging_coefficients(3, 6))
    assert FilterDesign.from_dict(design.to_dict()) == design
    with pytest.raises(ValueError):
        FilterDesign(kind="highpass").coefficients()

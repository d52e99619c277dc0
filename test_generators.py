#!/usr/bin/env python3
"""
Tests for waveform synthesis.
"""

import numpy as np
import pytest

from pydiscrete import Shape, WaveformSpec, synthesize


def test_sine_samples():
    signal = WaveformSpec(Shape.SINE, amplitude=2.0, frequency=1.0, periods=1.0,
                          sampling_rate=8.0).generate()
    assert len(signal) == 8
    np.testing.assert_allclose(signal.timestamps(), np.arange(8) / 8.0)
    np.testing.assert_allclose(signal.values(), 2.0 * np.sin(2 * np.pi * np.arange(8) / 8.0),
                               atol=1e-12)


def test_duration_follows_periods_and_frequency():
    signal = WaveformSpec(frequency=4.0, periods=3.0, sampling_rate=100.0).generate()
    assert signal.timestamps()[-1] < 0.75
    assert len(signal) == 75
    signal.validate()


def test_phase_shift():
    signal = WaveformSpec(frequency=1.0, sampling_rate=4.0, phase_shift=np.pi / 2).generate()
    np.testing.assert_allclose(signal.values(), [1.0, 0.0, -1.0, 0.0], atol=1e-12)


def test_rectangle_duty_cycle():
    signal = WaveformSpec(Shape.RECTANGLE, amplitude=3.0, sampling_rate=10.0,
                          duty_cycle=0.35).generate()
    np.testing.assert_array_equal(signal.values(), [3.0] * 4 + [-3.0] * 6)


def test_triangle_range_and_peaks():
    signal = WaveformSpec(Shape.TRIANGLE, sampling_rate=4.0).generate()
    np.testing.assert_allclose(signal.values(), [0.0, 1.0, 0.0, -1.0], atol=1e-12)


def test_impulse_once_per_cycle():
    signal = WaveformSpec(Shape.IMPULSE, amplitude=5.0, frequency=1.0, periods=3.0,
                          sampling_rate=10.0).generate()
    values = signal.values()
    assert values.sum() == 15.0
    np.testing.assert_array_equal(np.nonzero(values)[0], [0, 10, 20])


@pytest.mark.parametrize("field, value", [
    ("sampling_rate", 0.0),
    ("sampling_rate", -10.0),
    ("frequency", 0.0),
    ("periods", 0.0),
    ("duty_cycle", 1.0),
])
def test_generate_rejects_invalid_configuration(field, value):
    spec = WaveformSpec(**{field: value})
    with pytest.raises(ValueError):
        spec.generate()


def test_unknown_shape_rejected():
    with pytest.raises(ValueError):
        WaveformSpec(shape="sawtooth").generate()


def test_spec_round_trip():
    spec = WaveformSpec(Shape.TRIANGLE, amplitude=0.5, frequency=3.0)
    d = spec.to_dict()
    assert d['shape'] == "triangle"
    assert WaveformSpec.from_dict(d) == spec


def test_synthesize_merges_grids():
    slow = WaveformSpec(frequency=1.0, periods=1.0, sampling_rate=4.0)
    fast = WaveformSpec(frequency=2.0, periods=2.0, sampling_rate=8.0, amplitude=0.0)
    total = synthesize([slow, fast])
    # the silent term samples the sine linearly between its own samples and
    # passes through unchanged once the sine has ended
    np.testing.assert_allclose(total.timestamps(), np.arange(8) / 8.0)
    np.testing.assert_allclose(total.values(), [0.0, 0.5, 1.0, 0.5, 0.0, -0.5, -1.0, 0.0],
                               atol=1e-12)


def test_synthesize_needs_a_waveform():
    with pytest.raises(ValueError):
        synthesize([])

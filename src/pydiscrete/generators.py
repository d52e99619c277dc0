#!/usr/bin/env python3
"""
Parametric waveform synthesis.

Waveforms are described by a :class:`WaveformSpec` and produced by its
``generate()`` step, which validates the parameters first. The set of shapes
is closed; each has a single function mapping phase angle to a unit-amplitude
value.
"""

import logging
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Iterable

import numpy as np

from .discrete_signal import DiscreteSignal

log = logging.getLogger(__name__)


class Shape(str, Enum):
    SINE = "sine"
    RECTANGLE = "rectangle"
    TRIANGLE = "triangle"
    IMPULSE = "impulse"


def _sine(theta: np.ndarray, duty_cycle: float) -> np.ndarray:
    return np.sin(theta)


def _rectangle(theta: np.ndarray, duty_cycle: float) -> np.ndarray:
    cycle = np.mod(theta / (2 * np.pi), 1.0)
    return np.where(cycle < duty_cycle, 1.0, -1.0)


def _triangle(theta: np.ndarray, duty_cycle: float) -> np.ndarray:
    return (2 / np.pi) * np.arcsin(np.sin(theta))


def _impulse(theta: np.ndarray, duty_cycle: float) -> np.ndarray:
    # 1 on the first sample and wherever a new cycle begins
    cycles = np.floor(theta / (2 * np.pi))
    out = np.zeros_like(theta)
    if len(theta):
        out[0] = 1.0
        out[1:][np.diff(cycles) > 0] = 1.0
    return out


_SHAPES = {
    Shape.SINE: _sine,
    Shape.RECTANGLE: _rectangle,
    Shape.TRIANGLE: _triangle,
    Shape.IMPULSE: _impulse,
}


@dataclass
class WaveformSpec:
    """Parameters of one periodic waveform."""
    shape: Shape = Shape.SINE
    amplitude: float = 1.0
    frequency: float = 1.0        # Hz
    periods: float = 1.0          # number of cycles to synthesise
    sampling_rate: float = 100.0  # Hz
    phase_shift: float = 0.0      # radians
    duty_cycle: float = 0.5       # rectangle only

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d['shape'] = Shape(self.shape).value
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'WaveformSpec':
        d = dict(d)
        d['shape'] = Shape(d.get('shape', Shape.SINE))
        return cls(**d)

    def validate(self) -> None:
        Shape(self.shape)
        if not self.sampling_rate > 0:
            raise ValueError(f"Sampling rate must be positive, got {self.sampling_rate}")
        if not self.frequency > 0:
            raise ValueError(f"Frequency must be positive, got {self.frequency}")
        if not self.periods > 0:
            raise ValueError(f"Number of periods must be positive, got {self.periods}")
        if not 0 < self.duty_cycle < 1:
            raise ValueError(f"Duty cycle must lie in (0, 1), got {self.duty_cycle}")

    def generate(self) -> DiscreteSignal:
        """Validate and sample the waveform at ``t = n / sampling_rate``."""
        self.validate()
        duration = self.periods / self.frequency
        count = int(np.ceil(duration * self.sampling_rate))
        t = np.arange(count, dtype=np.float64) / self.sampling_rate
        t = t[t < duration]

        theta = 2 * np.pi * self.frequency * t + self.phase_shift
        y = self.amplitude * _SHAPES[Shape(self.shape)](theta, self.duty_cycle)
        log.debug("Generated %s: %d samples over %.6g s",
                  Shape(self.shape).value, len(t), duration)
        return DiscreteSignal.from_arrays(t, y)


def synthesize(specs: Iterable[WaveformSpec]) -> DiscreteSignal:
    """Merge-add the waveforms of *specs*, each on its own sampling grid."""
    total = None
    for spec in specs:
        wave = spec.generate()
        total = wave if total is None else total + wave
    if total is None:
        raise ValueError("At least one waveform is required")
    return total

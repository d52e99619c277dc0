#!/usr/bin/env python3
"""
Timestamp-indexed discrete signal with grid-merging addition.

A signal is an ordered sequence of ``(timestamp, value)`` pairs whose
timestamps are strictly increasing. Two signals sampled on different grids
can be added: the sum contains every distinct timestamp of either input and,
inside the other signal's covered range, its value is estimated by linear
interpolation between the two bracketing samples.
"""

from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .errors import (
    DegenerateInterpolationError,
    EmptySignalError,
    NonMonotonicTimestampsError,
)

Sample = Tuple[float, float]


def linear_coefficients(p1: Sample, p2: Sample) -> Tuple[float, float]:
    """
    Return ``(slope, intercept)`` of the line through two samples.

    Raises
    ------
    DegenerateInterpolationError
        If both samples share a timestamp.
    """
    (x1, y1), (x2, y2) = p1, p2
    if x1 == x2:
        raise DegenerateInterpolationError(
            f"cannot interpolate between two samples at t={x1!r}"
        )
    slope = (y1 - y2) / (x1 - x2)
    intercept = y1 - slope * x1
    return slope, intercept


class DiscreteSignal:
    """
    Ordered, exclusively owned sequence of ``(timestamp, value)`` samples.

    Parameters
    ----------
    data : iterable of (float, float), optional
        Initial samples. They are copied; the signal never aliases
        caller-owned storage.
    """

    def __init__(self, data: Optional[Iterable[Sample]] = None):
        self._data: List[Sample] = []
        if data is not None:
            for x, y in data:
                self.push(x, y)

    @classmethod
    def from_arrays(cls, x: Sequence[float], y: Sequence[float]) -> "DiscreteSignal":
        """Build a signal from parallel timestamp and value arrays."""
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        if x.shape != y.shape or x.ndim != 1:
            raise ValueError(
                f"timestamp and value arrays must be 1-D and equal length, "
                f"got {x.shape} and {y.shape}"
            )
        return cls(zip(x.tolist(), y.tolist()))

    # ─────────────────────── container protocol ─────────────────────── #

    def push(self, x: float, y: float) -> None:
        self._data.append((float(x), float(y)))

    def get_data(self) -> Tuple[Sample, ...]:
        """Read-only view of the samples, in timestamp order."""
        return tuple(self._data)

    def clear(self) -> None:
        self._data = []

    def clone(self) -> "DiscreteSignal":
        copy = DiscreteSignal()
        copy._data = list(self._data)
        return copy

    def timestamps(self) -> np.ndarray:
        return np.array([x for x, _ in self._data], dtype=np.float64)

    def values(self) -> np.ndarray:
        return np.array([y for _, y in self._data], dtype=np.float64)

    def as_array(self) -> np.ndarray:
        """Samples as an ``(N, 2)`` float64 array."""
        return np.array(self._data, dtype=np.float64).reshape(-1, 2)

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self._data)

    def __getitem__(self, index):
        return self._data[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, DiscreteSignal):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"DiscreteSignal({self._data!r})"

    def validate(self) -> None:
        """
        Check that timestamps are strictly increasing.

        Raises
        ------
        NonMonotonicTimestampsError
            Naming the first sample that does not advance in time.
        """
        for i in range(1, len(self._data)):
            previous, current = self._data[i - 1][0], self._data[i][0]
            if not current > previous:
                raise NonMonotonicTimestampsError(i, previous, current)

    # ──────────────────────── merge-add helpers ─────────────────────── #

    def _extend_until(self, data: List[Sample], offset: int, stamp: float) -> int:
        """Copy samples earlier than *stamp*; return the first index not copied."""
        while offset < len(data) and data[offset][0] < stamp:
            self._data.append(data[offset])
            offset += 1
        return offset

    def _extend_from(self, data: List[Sample], offset: int) -> None:
        self._data.extend(data[offset:])

    def _extend_interpolated(self, data: List[Sample], offset: int,
                             p1: Sample, p2: Sample) -> int:
        """
        Emit samples of *data* that lie before ``p2``, each summed with the
        line through ``p1`` and ``p2`` evaluated at its timestamp.
        """
        slope, intercept = linear_coefficients(p1, p2)
        while offset < len(data):
            x, y = data[offset]
            if x >= p2[0]:
                return offset
            self._data.append((x, y + slope * x + intercept))
            offset += 1
        return offset

    # ─────────────────────────── merge-add ──────────────────────────── #

    def add(self, other: "DiscreteSignal") -> "DiscreteSignal":
        """
        Sum two signals sampled on arbitrary grids.

        Neither operand is modified. Where a timestamp of one signal falls
        strictly between two samples of the other, the other's value is
        linearly interpolated; outside the other's range samples pass
        through unchanged.

        Raises
        ------
        EmptySignalError
            If either operand has no samples.
        NonMonotonicTimestampsError
            If either operand violates the timestamp ordering.
        """
        if not self._data or not other._data:
            raise EmptySignalError("cannot add a signal with no samples")
        self.validate()
        other.validate()

        left, right = self._data, other._data
        result = DiscreteSignal()
        l = r = 0

        # leading samples of whichever signal starts first
        if left[0][0] > right[0][0]:
            r = result._extend_until(right, r, left[0][0])
        else:
            l = result._extend_until(left, l, right[0][0])

        while l < len(left) and r < len(right):
            lx, ly = left[l]
            rx, ry = right[r]
            if lx == rx:
                result._data.append((lx, ly + ry))
                l += 1
                r += 1
            elif lx > rx:
                r = result._extend_interpolated(right, r, left[l - 1], left[l])
            else:
                l = result._extend_interpolated(left, l, right[r - 1], right[r])

        if l < len(left):
            result._extend_from(left, l)
        else:
            result._extend_from(right, r)
        return result

    def __add__(self, other):
        if not isinstance(other, DiscreteSignal):
            return NotImplemented
        return self.add(other)

#!/usr/bin/env python3
"""
Immutable complex value used by the spectral engine.
"""

import math
from dataclasses import dataclass
from numbers import Real
from typing import Union


def _fmt(value: float) -> str:
    """
    Render a float without a redundant trailing '.0'.

    Negative zero prints as 0. Magnitudes that repr() writes in exponent
    form keep it, e.g. 1e+20.
    """
    text = repr(value + 0.0)
    return text[:-2] if text.endswith(".0") else text


@dataclass(frozen=True)
class ComplexNumber:
    """
    A (re, im) pair with value semantics.

    Every operation returns a new instance. Equality is exact and
    component-wise.
    """
    re: float = 0.0
    im: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "re", float(self.re))
        object.__setattr__(self, "im", float(self.im))

    def add(self, other: Union["ComplexNumber", float]) -> "ComplexNumber":
        """Componentwise sum; a real scalar only shifts the real part."""
        if isinstance(other, ComplexNumber):
            return ComplexNumber(self.re + other.re, self.im + other.im)
        return ComplexNumber(self.re + other, self.im)

    def multiply(self, other: Union["ComplexNumber", float]) -> "ComplexNumber":
        """Complex product; a real scalar scales both components."""
        if isinstance(other, ComplexNumber):
            return ComplexNumber(self.re * other.re - self.im * other.im,
                                 self.re * other.im + self.im * other.re)
        return ComplexNumber(self.re * other, self.im * other)

    def modulus(self) -> float:
        return math.sqrt(self.re * self.re + self.im * self.im)

    def to_complex(self) -> complex:
        return complex(self.re, self.im)

    def __add__(self, other):
        if isinstance(other, (ComplexNumber, Real)):
            return self.add(other)
        return NotImplemented

    def __radd__(self, other):
        if isinstance(other, Real):
            return self.add(other)
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, (ComplexNumber, Real)):
            return self.multiply(other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Real):
            return self.multiply(other)
        return NotImplemented

    def __abs__(self) -> float:
        return self.modulus()

    def __str__(self) -> str:
        if self.im < 0.0:
            return f"{_fmt(self.re)} - i{_fmt(abs(self.im))}"
        return f"{_fmt(self.re)} + i{_fmt(self.im)}"

    __repr__ = __str__

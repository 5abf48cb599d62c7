"""Scalar and interval values with their arithmetic.

A worksheet value is either a ``Scalar`` or an ``Interval``. Every operation
dispatches on both shapes explicitly; an interval never turns into a scalar
on its own.
"""

import math
from dataclasses import dataclass
from typing import Union

NAN = float("nan")


@dataclass(frozen=True)
class Scalar:
    """A single number."""

    value: float

    def __str__(self) -> str:
        return str(self.value)

    @property
    def is_nan(self) -> bool:
        return math.isnan(self.value)

    def mul(self, k: float) -> "Scalar":
        return Scalar(self.value * k)

    def div(self, k: float) -> "Scalar":
        if k == 0:
            raise ZeroDivisionError(f"cannot divide {self.value} by zero")
        return Scalar(self.value / k)

    def add(self, other: "Value") -> "Value":
        if isinstance(other, Scalar):
            return Scalar(self.value + other.value)
        if isinstance(other, Interval):
            return Interval(self.value + other.low, self.value + other.high)
        raise TypeError(f"Unsupported operand: {other!r}")

    def sub(self, other: "Value") -> "Value":
        if isinstance(other, Scalar):
            return Scalar(self.value - other.value)
        if isinstance(other, Interval):
            return Interval(self.value - other.high, self.value - other.low)
        raise TypeError(f"Unsupported operand: {other!r}")

    def rounded(self, precision: int) -> "Scalar":
        return Scalar(round(self.value, precision))

    def nan_like(self) -> "Scalar":
        return Scalar(NAN)


@dataclass(frozen=True)
class Interval:
    """A closed range ``[low, high]``.

    Literal intervals are stored exactly as written. Multiplication and
    division re-sort the bounds, since a negative operand swaps them.
    """

    low: float
    high: float

    @classmethod
    def ordered(cls, a: float, b: float) -> "Interval":
        """Build an interval from two bounds in any order."""
        return cls(min(a, b), max(a, b))

    @property
    def is_nan(self) -> bool:
        return math.isnan(self.low) or math.isnan(self.high)

    def mul(self, k: float) -> "Interval":
        return Interval.ordered(self.low * k, self.high * k)

    def div(self, k: float) -> "Interval":
        if k == 0:
            raise ZeroDivisionError(f"cannot divide {self} by zero")
        return Interval.ordered(self.low / k, self.high / k)

    def add(self, other: "Value") -> "Interval":
        # Addition keeps the operands' ordering, no re-sort.
        if isinstance(other, Scalar):
            return Interval(self.low + other.value, self.high + other.value)
        if isinstance(other, Interval):
            return Interval(self.low + other.low, self.high + other.high)
        raise TypeError(f"Unsupported operand: {other!r}")

    def sub(self, other: "Value") -> "Interval":
        if isinstance(other, Scalar):
            return Interval(self.low - other.value, self.high - other.value)
        if isinstance(other, Interval):
            return Interval(self.low - other.high, self.high - other.low)
        raise TypeError(f"Unsupported operand: {other!r}")

    def rounded(self, precision: int) -> "Interval":
        return Interval(round(self.low, precision), round(self.high, precision))

    def nan_like(self) -> "Interval":
        return Interval(NAN, NAN)

    def __str__(self) -> str:
        return f"[{self.low}, {self.high}]"


Value = Union[Scalar, Interval]

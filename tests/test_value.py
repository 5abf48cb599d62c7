from __future__ import annotations

import math

import pytest

from tallysheet.models import Interval, Scalar


def test_scalar_multiply_and_divide() -> None:
    assert Scalar(3.0).mul(4) == Scalar(12.0)
    assert Scalar(100.0).div(4) == Scalar(25.0)


def test_scalar_divide_by_zero_raises() -> None:
    with pytest.raises(ZeroDivisionError):
        Scalar(10.0).div(0)


@pytest.mark.parametrize("k", [-3.0, -0.5, 2.0, 0.25])
def test_interval_bounds_stay_ordered(k: float) -> None:
    for value in (Interval(10.0, 50.0).mul(k), Interval(10.0, 50.0).div(k)):
        assert value.low <= value.high


def test_negative_multiplier_swaps_bounds() -> None:
    assert Interval(10.0, 50.0).mul(-2) == Interval(-100.0, -20.0)


def test_interval_divide_by_zero_raises() -> None:
    with pytest.raises(ZeroDivisionError):
        Interval(1.0, 2.0).div(0)


def test_addition_broadcasts_scalars() -> None:
    assert Scalar(1000.0).add(Interval(10.0, 50.0)) == Interval(1010.0, 1050.0)
    assert Interval(10.0, 50.0).add(Scalar(5.0)) == Interval(15.0, 55.0)
    assert Interval(1.0, 2.0).add(Interval(10.0, 20.0)) == Interval(11.0, 22.0)
    assert Scalar(1.0).add(Scalar(2.0)) == Scalar(3.0)


def test_addition_does_not_reorder_literal_bounds() -> None:
    assert Interval(5.0, 1.0).add(Scalar(1.0)) == Interval(6.0, 2.0)


def test_subtraction_of_intervals() -> None:
    assert Scalar(1000.0).sub(Interval(10.0, 50.0)) == Interval(950.0, 990.0)
    assert Interval(950.0, 990.0).sub(Scalar(10.0)) == Interval(940.0, 980.0)
    assert Interval(10.0, 20.0).sub(Interval(1.0, 2.0)) == Interval(8.0, 19.0)


def test_nan_like_keeps_shape() -> None:
    assert math.isnan(Scalar(1.0).nan_like().value)
    nan_interval = Interval(1.0, 2.0).nan_like()
    assert isinstance(nan_interval, Interval)
    assert nan_interval.is_nan


def test_rounded() -> None:
    assert Scalar(100 / 12).rounded(2) == Scalar(8.33)
    assert Interval(1.005, 2.499).rounded(1) == Interval(1.0, 2.5)

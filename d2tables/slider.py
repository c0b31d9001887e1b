"""Mapping between a percentage value and a slider position with an exponential upper half."""

from __future__ import annotations

import math

SLIDER_MIN = 0
SLIDER_MAX = 1000
SLIDER_AVERAGE = 500
VALUE_AVERAGE = 100

_E_SQUARED_MINUS_ONE = math.e * math.e - 1.0


def exp_growth(value: float) -> float:
    """Map [0, 1] onto [0, 1] along an exponential curve."""
    return (math.exp(value * 2) - 1.0) / _E_SQUARED_MINUS_ONE


def exp_growth_rev(value: float) -> float:
    """Inverse of :func:`exp_growth`."""
    return math.log(value * _E_SQUARED_MINUS_ONE + 1.0) / 2


def _trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator >= 0) else -quotient


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


class SliderScale:
    """Converts between slider positions (0..1000) and percentage values.

    The slider midpoint stands for 100%. The lower half maps linearly down to
    ``100 / denom``; the upper half grows exponentially up to ``100 * mult``.
    """

    def __init__(self, mult: float, denom: float) -> None:
        if denom == 0:
            raise ValueError("denom must not be zero")
        self.mult = float(mult)
        self.denom = float(denom)
        self.min = int(VALUE_AVERAGE / self.denom)
        self.max = int(VALUE_AVERAGE * self.mult)
        if self.min > self.max:
            raise ValueError("value range is empty")

    def slider_to_value(self, position: int) -> int:
        """Return the percentage shown for a slider position."""
        position = _clamp(int(position), SLIDER_MIN, SLIDER_MAX)
        if position == SLIDER_AVERAGE:
            value = VALUE_AVERAGE
        elif position < SLIDER_AVERAGE:
            low_range = VALUE_AVERAGE - self.min
            value = self.min + _trunc_div(position * low_range, SLIDER_AVERAGE)
        else:
            high_range = self.max - VALUE_AVERAGE
            ratio = (position - SLIDER_AVERAGE) / SLIDER_AVERAGE
            value = VALUE_AVERAGE + int(exp_growth(ratio) * high_range)
        return _clamp(value, self.min, self.max)

    def value_to_slider(self, value: int) -> int:
        """Return the slider position for a percentage value."""
        value = _clamp(int(value), self.min, self.max)
        if value == VALUE_AVERAGE:
            position = SLIDER_AVERAGE
        elif value < VALUE_AVERAGE:
            low_range = VALUE_AVERAGE - self.min
            position = _trunc_div((value - self.min) * SLIDER_AVERAGE, low_range)
        else:
            high_range = self.max - VALUE_AVERAGE
            ratio = (value - VALUE_AVERAGE) / high_range
            position = int(SLIDER_AVERAGE + exp_growth_rev(ratio) * SLIDER_AVERAGE)
        return _clamp(position, SLIDER_MIN, SLIDER_MAX)
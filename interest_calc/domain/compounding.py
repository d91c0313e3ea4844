"""Compounding converter - pure math between period rates, percentages and gains"""

import math

from interest_calc.domain.exceptions import DegenerateConversionError
from interest_calc.domain.models import Period


def _pow(base: float, exponent: float) -> float:
    """IEEE-754 style power: NaN for a negative base with a fractional exponent, inf on overflow"""
    try:
        return math.pow(base, exponent)
    except ValueError:
        return math.nan
    except OverflowError:
        return math.inf


def period_rate(period: Period, yearly: float) -> float:
    """Growth factor over one period, given the yearly growth factor"""
    return _pow(yearly, period.exponent)


def inverse_rate(period: Period, rate: float) -> float:
    """Yearly growth factor that produces `rate` over one period"""
    return _pow(rate, period.inverse_exponent)


def to_percent(rate: float) -> float:
    """1.07 -> 7.0"""
    return (rate - 1.0) * 100.0


def from_percent(percent: float) -> float:
    """7.0 -> 1.07"""
    return percent / 100.0 + 1.0


def gain(period: Period, yearly: float, amount: float) -> float:
    """Money earned on `amount` over one period"""
    return (period_rate(period, yearly) - 1.0) * amount


def amount_from_gain(period: Period, yearly: float, gain_value: float) -> float:
    """
    Principal that earns `gain_value` over one period.

    Raises:
        DegenerateConversionError: When the period rate is exactly 1 (no growth),
            so any principal earns nothing, or the quotient is not finite
    """
    denominator = period_rate(period, yearly) - 1.0
    if denominator == 0.0:
        raise DegenerateConversionError(f"{period.value} rate has no growth, amount cannot be recovered")

    amount = gain_value / denominator
    if not math.isfinite(amount):
        raise DegenerateConversionError(f"Amount recovered from {period.value} gain is not finite")
    return amount

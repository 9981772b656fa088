"""Decimal helpers shared by every calculator.

Rounding policy: money leaves the engine quantized to cents, ROUND_HALF_UP.
Derived payments round up so a schedule never falls a cent short.
"""

from decimal import Decimal, ROUND_HALF_UP, ROUND_UP

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")
ZERO = Decimal("0")
MONTHS_PER_YEAR = 12


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert without binary float artifacts (0.1 -> Decimal("0.1"))."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_currency(amount: Decimal) -> Decimal:
    return amount.quantize(TWO_PLACES, ROUND_HALF_UP)


def ceil_currency(amount: Decimal) -> Decimal:
    return amount.quantize(TWO_PLACES, ROUND_UP)


def round_rate(rate: Decimal) -> Decimal:
    return rate.quantize(FOUR_PLACES, ROUND_HALF_UP)


def percent_to_fraction(percent: Decimal) -> Decimal:
    """4.5 -> 0.045"""
    return percent / 100


def apr_to_monthly_rate(apr_percent: Decimal) -> Decimal:
    """22 -> 0.018333..."""
    return percent_to_fraction(apr_percent) / MONTHS_PER_YEAR


def clamp(value: Decimal, low: Decimal, high: Decimal) -> Decimal:
    return max(low, min(high, value))


def clamp_min(value: Decimal, low: Decimal = ZERO) -> Decimal:
    return max(low, value)

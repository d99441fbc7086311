"""Decimal helpers shared by the payslip calculators."""

from __future__ import annotations

from decimal import ROUND_DOWN, ROUND_FLOOR, ROUND_HALF_UP, Context, Decimal, localcontext

MONTHS_PER_YEAR = 12
RATE_SCALE = 99

# Enough significant digits for a 99-place rate times any realistic salary.
MONEY_CONTEXT = Context(prec=250, rounding=ROUND_HALF_UP)
_WHOLE = Decimal(1)
_HUNDRED = Decimal(100)


def round_half_up(value: Decimal) -> int:
    """Round ``value`` to the nearest whole number, halves away from zero."""

    with localcontext(MONEY_CONTEXT):
        return int(value.quantize(_WHOLE, rounding=ROUND_HALF_UP))


def divide_half_up(numerator: Decimal | int, divisor: Decimal | int) -> int:
    """Divide and round once, half-up, to a whole number."""

    with localcontext(MONEY_CONTEXT):
        return round_half_up(Decimal(numerator) / Decimal(divisor))


def truncate(value: Decimal) -> int:
    """Drop the fractional part of ``value`` (towards zero)."""

    with localcontext(MONEY_CONTEXT):
        return int(value.to_integral_value(rounding=ROUND_DOWN))


def floor_whole(value: Decimal) -> int:
    """Largest whole number not greater than ``value``."""

    with localcontext(MONEY_CONTEXT):
        return int(value.to_integral_value(rounding=ROUND_FLOOR))


def percentage_to_rate(percentage: Decimal) -> Decimal:
    """Convert percentage points to a fraction, half-up at ``RATE_SCALE`` places."""

    with localcontext(MONEY_CONTEXT):
        quantum = _WHOLE.scaleb(-RATE_SCALE)
        return (percentage / _HUNDRED).quantize(quantum, rounding=ROUND_HALF_UP)

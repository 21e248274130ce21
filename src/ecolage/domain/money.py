"""Ariary amount helpers shared by the calculation modules."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any


def round_half_up(value: Decimal) -> int:
    """Round to the nearest ariary, halves away from zero."""
    return int(value.to_integral_value(rounding=ROUND_HALF_UP))


def to_amount(value: Any) -> int:
    """Coerce an input into a non-negative whole ariary amount.

    Missing, non-numeric, NaN, infinite and negative values become 0.
    Fractional amounts are rounded half-up.
    """
    if value is None or isinstance(value, bool):
        return 0
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return 0
    if not amount.is_finite() or amount <= 0:
        return 0
    return round_half_up(amount)

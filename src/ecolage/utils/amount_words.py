"""Spell out ariary amounts the way receipts print them."""

from typing import Any

from ecolage.domain.money import to_amount


def amount_to_words(amount: Any) -> str:
    """Verbalize an amount in thousands/millions of ariary.

    Examples:
        150000  -> "150 mille ariary exactement"
        150500  -> "150 mille 500 ariary"
        2350000 -> "2 millions 350 mille ariary exactement"
    """
    amount = to_amount(amount)

    if amount < 1000000:
        thousands = amount // 1000
        remainder = amount % 1000
        if remainder == 0:
            return f"{thousands} mille ariary exactement"
        return f"{thousands} mille {remainder} ariary"

    millions = amount // 1000000
    thousands = (amount % 1000000) // 1000
    remainder = amount % 1000

    result = f"{millions} million{'s' if millions > 1 else ''}"
    if thousands > 0:
        result += f" {thousands} mille"
    if remainder > 0:
        result += f" {remainder}"
    return result + " ariary exactement"

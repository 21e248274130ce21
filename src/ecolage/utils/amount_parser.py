"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an ariary amount string into a Decimal.

    Handles various formats:
    - "150000"
    - "150 000" (space or non-breaking space as thousands separator)
    - "150,000"
    - "150 000 Ar", "150000 MGA", "MGA 150000"
    - "150000.50"

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed or is negative
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Remove currency markers
    cleaned = re.sub(r"(?i)(ariary|mga|ar)\.?", "", amount_str)

    # Remove thousands separators
    cleaned = re.sub(r"[\s,]", "", cleaned)

    try:
        amount = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e!r}")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if amount < 0:
        raise ValueError(f"Amount cannot be negative: '{amount_str}'")
    return amount

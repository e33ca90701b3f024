"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re
from typing import Optional

_FIRST_NUMBER = re.compile(r"\d+(?:\.\d{1,2})?")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "-123.45"
    - "₹1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and thousands separators
    amount_str = re.sub(r"[$€£¥₹,]", "", amount_str).strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount


def find_amount(text: str) -> Optional[tuple[Decimal, tuple[int, int]]]:
    """Find the first number in free text.

    Up to two fraction digits are taken; no currency symbol is required.

    Returns:
        ``(amount, span)`` or None if the text holds no number
    """
    match = _FIRST_NUMBER.search(text)
    if match is None:
        return None
    return Decimal(match.group(0)), match.span()

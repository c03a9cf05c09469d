"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

# Exclusive bound on amount magnitude
MAX_AMOUNT = Decimal("1e18")


def _check_bounds(amount: Decimal, original) -> Decimal:
    if not amount.is_finite():
        raise ValueError(f"Amount '{original}' is not a finite number")
    if abs(amount) >= MAX_AMOUNT:
        raise ValueError(f"Amount '{original}' is too large")
    return amount


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a finite Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "-123.45"
    - "-$123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed, is not finite or exceeds MAX_AMOUNT
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols
    amount_str = re.sub(r"[$€£¥]", "", amount_str)

    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e!r}")

    _check_bounds(amount, amount_str)

    if is_negative:
        amount = -amount
    return amount


def to_amount(value) -> Decimal:
    """Coerce a user supplied amount (str, int, float or Decimal) to Decimal.

    Floats go through ``str`` so that 3.5 becomes Decimal("3.5") rather than
    its binary expansion.

    Raises:
        ValueError: If the value is not a finite number below MAX_AMOUNT
    """
    if isinstance(value, bool):
        raise ValueError(f"Amount '{value}' is not a number")
    if isinstance(value, str):
        return parse_amount(value)
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    else:
        raise ValueError(f"Amount '{value}' is not a number")
    return _check_bounds(amount, value)

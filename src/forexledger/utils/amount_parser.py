"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse a foreign-currency amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45", "¥1000", "€20"
    - "1,234.56"
    - "USD 1,234.56"

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

    # Remove a leading ISO currency code
    amount_str = re.sub(r"^[A-Za-z]{3}\s+", "", amount_str)

    # Remove currency symbols
    amount_str = re.sub(r"[$€£¥]", "", amount_str)

    # Remove commas
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return amount


def parse_twd_amount(amount_str: str) -> int:
    """Parse a TWD amount, which is always a whole number of dollars.

    Raises:
        ValueError: If the string is not a whole amount
    """
    amount_str = re.sub(r"^(TWD|NT\$?)\s*", "", amount_str.strip(), flags=re.IGNORECASE)
    amount = parse_amount(amount_str)
    if amount != amount.to_integral_value():
        raise ValueError(f"TWD amount must be a whole number, got '{amount_str}'")
    return int(amount)

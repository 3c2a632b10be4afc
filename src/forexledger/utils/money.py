"""Rounding helpers for TWD and foreign amounts."""

from decimal import Decimal, ROUND_HALF_UP

# Decimal places stored for foreign-currency amounts and balances
FOREIGN_AMOUNT_PLACES = 4


def round_twd(amount: Decimal) -> int:
    """Round a TWD value to whole dollars, halves away from zero."""
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def to_twd(foreign_amount: Decimal, rate: Decimal) -> int:
    """Convert a foreign amount to whole TWD at the given rate."""
    return round_twd(foreign_amount * rate)


def fits_foreign_scale(amount: Decimal) -> bool:
    """Return True if the amount needs no more than FOREIGN_AMOUNT_PLACES decimals."""
    return amount.normalize().as_tuple().exponent >= -FOREIGN_AMOUNT_PLACES

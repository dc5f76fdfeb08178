"""
Money Utilities - Decimal handling for unit prices.

The cart never computes totals in currency; it only needs prices stored
and restored without float drift.
"""
from decimal import Decimal, InvalidOperation
from typing import Union

from marketplace.errors import ERROR_INVALID_PRICE


def to_decimal(value: Union[str, int, float, Decimal, None]) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        # Convert via string to avoid float precision issues
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def parse_price(value: Union[str, int, float, Decimal]) -> Decimal:
    """
    Strict variant of to_decimal for unit prices.

    Raises:
        ValueError: value is missing, not numeric, not finite or negative
    """
    if value is None or isinstance(value, bool):
        raise ValueError(ERROR_INVALID_PRICE)

    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValueError(ERROR_INVALID_PRICE)

    if not price.is_finite() or price < 0:
        raise ValueError(ERROR_INVALID_PRICE)
    return price


def price_to_str(value: Union[str, int, float, Decimal]) -> str:
    """Serialize a price without exponent notation."""
    return format(to_decimal(value), "f")

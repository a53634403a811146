"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")
WHOLE = Decimal("1")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_money(value) -> Decimal:
    """Normalize a stored amount to a two-digit Decimal."""
    return coerce_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def round_whole(value: Decimal) -> Decimal:
    """Round an amount to the nearest whole currency unit.

    Args:
        value: Full precision amount.

    Returns:
        Decimal: Amount without fractional digits, halves rounded away
        from zero.
    """
    return value.quantize(WHOLE, rounding=ROUND_HALF_UP)


__all__ = ["CENT", "coerce_decimal", "to_money", "round_whole"]

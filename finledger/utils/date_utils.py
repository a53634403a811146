"""Helpers for calendar date handling."""

from calendar import monthrange
from datetime import date, datetime


def coerce_date(value) -> date:
    """Normalize a stored date value to a date.

    Args:
        value: date, datetime or ISO formatted string from SQL.

    Returns:
        date: Calendar date without time.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def month_start(value: date) -> date:
    """Return the first day of the month containing value."""
    return value.replace(day=1)


def month_end(value: date) -> date:
    """Return the last day of the month containing value."""
    return value.replace(day=monthrange(value.year, value.month)[1])


def add_months(value: date, months: int) -> date:
    """Shift a date by whole months, clamping the day to the month length.

    Args:
        value: Date to shift.
        months: Number of months, negative to go back.

    Returns:
        date: Shifted date.
    """
    total = value.year * 12 + (value.month - 1) + months
    year, month = divmod(total, 12)
    month += 1
    day = min(value.day, monthrange(year, month)[1])
    return date(year, month, day)


def month_key(value: date) -> str:
    """Return the YYYY-MM key of the month containing value."""
    return f"{value.year:04d}-{value.month:02d}"


__all__ = [
    "coerce_date",
    "month_start",
    "month_end",
    "add_months",
    "month_key",
]

"""Domain services aggregating transactions over calendar periods."""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from enum import Enum

from finledger.domain.errors import InvalidInput
from finledger.domain.models import (
    Category,
    CategoryTotal,
    EntryKind,
    MonthlyTrendPoint,
    PaymentMethod,
    PaymentMethodTotal,
    PeriodSummary,
    Transaction,
)
from finledger.utils.date_utils import add_months, month_end, month_key


class ReportPeriod(str, Enum):
    THIS_MONTH = "this_month"
    LAST_MONTH = "last_month"
    THIS_YEAR = "this_year"
    LAST_3_MONTHS = "last_3_months"
    ALL_TIME = "all_time"


def month_period(year: int, month: int) -> tuple[date, date]:
    """Return the first and last day of a calendar month.

    Raises:
        InvalidInput: If month is outside 1..12 or year is not positive.
    """
    if isinstance(month, bool) or not isinstance(month, int):
        raise InvalidInput("month", "must be an integer")
    if not 1 <= month <= 12:
        raise InvalidInput("month", "must be between 1 and 12")
    if isinstance(year, bool) or not isinstance(year, int) or year < 1:
        raise InvalidInput("year", "must be a positive integer")
    start = date(year, month, 1)
    return start, month_end(start)


def resolve_report_period(
    period: ReportPeriod | str,
    today: date,
) -> tuple[date | None, date | None]:
    """Return the inclusive bounds of a preset report period.

    Raises:
        InvalidInput: If period names no known preset.
    """
    try:
        period = ReportPeriod(period)
    except ValueError:
        allowed = ", ".join(member.value for member in ReportPeriod)
        raise InvalidInput("period", f"must be one of: {allowed}") from None
    if period is ReportPeriod.THIS_MONTH:
        return today.replace(day=1), today
    if period is ReportPeriod.LAST_MONTH:
        previous = add_months(today.replace(day=1), -1)
        return previous, month_end(previous)
    if period is ReportPeriod.THIS_YEAR:
        return date(today.year, 1, 1), today
    if period is ReportPeriod.LAST_3_MONTHS:
        return add_months(today, -3), today
    if period is ReportPeriod.ALL_TIME:
        return None, None
    raise InvalidInput("period", f"unsupported preset {period.value}")


def in_period(
    value: date,
    start_date: date | None,
    end_date: date | None,
) -> bool:
    """Return True when value lies in the inclusive range."""
    if start_date is not None and value < start_date:
        return False
    if end_date is not None and value > end_date:
        return False
    return True


def compute_period_summary(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    start_date: date | None,
    end_date: date | None,
) -> PeriodSummary:
    """Compute income, expenses and expense totals per category.

    Categories are inner-joined: an expense whose category is unknown is
    counted in total_expenses but left out of by_category. Categories
    without expenses in the period are omitted.

    Args:
        transactions: Transactions of a single user.
        categories: Categories of the same user.
        start_date: First day included, None for unbounded.
        end_date: Last day included, None for unbounded.

    Returns:
        PeriodSummary: Totals, zero when nothing matches.
    """
    names = {category.guid: category.name for category in categories}
    total_income = Decimal("0")
    total_expenses = Decimal("0")
    category_totals: dict[str, Decimal] = {}
    for transaction in transactions:
        if not in_period(transaction.date, start_date, end_date):
            continue
        if transaction.kind is EntryKind.INCOME:
            total_income += transaction.value
            continue
        total_expenses += transaction.value
        if transaction.category_guid not in names:
            continue
        category_totals[transaction.category_guid] = (
            category_totals.get(transaction.category_guid, Decimal("0"))
            + transaction.value
        )

    by_category = [
        CategoryTotal(
            category_guid=guid,
            category_name=names[guid],
            total=total,
        )
        for guid, total in category_totals.items()
        if total != 0
    ]
    by_category.sort(key=lambda item: (-item.total, item.category_name))
    return PeriodSummary(
        start_date=start_date,
        end_date=end_date,
        total_income=total_income,
        total_expenses=total_expenses,
        by_category=by_category,
    )


def compute_monthly_trend(
    transactions: Iterable[Transaction],
) -> list[MonthlyTrendPoint]:
    """Group transactions by calendar month, oldest first."""
    income: dict[str, Decimal] = {}
    expenses: dict[str, Decimal] = {}
    for transaction in transactions:
        key = month_key(transaction.date)
        income.setdefault(key, Decimal("0"))
        expenses.setdefault(key, Decimal("0"))
        if transaction.kind is EntryKind.INCOME:
            income[key] += transaction.value
        else:
            expenses[key] += transaction.value
    return [
        MonthlyTrendPoint(month=key, income=income[key], expenses=expenses[key])
        for key in sorted(income)
    ]


def compute_payment_method_breakdown(
    transactions: Iterable[Transaction],
) -> list[PaymentMethodTotal]:
    """Sum transaction values per payment method."""
    totals = {method: Decimal("0") for method in PaymentMethod}
    for transaction in transactions:
        totals[transaction.payment_method] += transaction.value
    return [
        PaymentMethodTotal(payment_method=method, total=total)
        for method, total in totals.items()
        if total != 0
    ]


__all__ = [
    "ReportPeriod",
    "month_period",
    "resolve_report_period",
    "in_period",
    "compute_period_summary",
    "compute_monthly_trend",
    "compute_payment_method_breakdown",
]

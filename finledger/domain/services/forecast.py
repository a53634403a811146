"""Domain services projecting future balances from recent history."""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from finledger.domain.errors import InvalidInput
from finledger.domain.models import (
    BaselineRates,
    EntryKind,
    ForecastPeriod,
    Transaction,
)
from finledger.domain.policies.variation import VariationSource
from finledger.domain.services.periods import in_period
from finledger.utils.date_utils import add_months, month_key, month_start


def validate_months(months) -> int:
    """Return months when it is a positive integer.

    Raises:
        InvalidInput: For zero, negative or non-integer values.
    """
    if isinstance(months, bool) or not isinstance(months, int):
        raise InvalidInput("months", "must be an integer")
    if months < 1:
        raise InvalidInput("months", "must be a positive integer")
    return months


def compute_baseline_rates(
    transactions: Iterable[Transaction],
    today: date,
    trailing_months: int,
) -> BaselineRates:
    """Average monthly income and expenses over the trailing window.

    The window runs from today minus trailing_months up to today, both
    inclusive. Sums are always divided by trailing_months, so sparse
    history lowers the averages instead of being extrapolated.

    Args:
        transactions: Every transaction of the user, across accounts.
        today: Reference date of the projection.
        trailing_months: Length of the history window in months.

    Returns:
        BaselineRates: Averages at full precision, zero without history.
    """
    window_start = add_months(today, -trailing_months)
    income = Decimal("0")
    expenses = Decimal("0")
    for transaction in transactions:
        if not in_period(transaction.date, window_start, today):
            continue
        if transaction.kind is EntryKind.INCOME:
            income += transaction.value
        else:
            expenses += transaction.value
    return BaselineRates(
        window_start=window_start,
        window_end=today,
        average_income=income / trailing_months,
        average_expenses=expenses / trailing_months,
    )


def project_balances(
    starting_balance: Decimal,
    baseline: BaselineRates,
    months: int,
    first_month: date,
    variation: VariationSource,
    income_variation: Decimal,
    expense_variation: Decimal,
) -> list[ForecastPeriod]:
    """Project month by month balances starting at first_month.

    Each month income and expenses equal the baseline averages, each
    perturbed by an independent draw within its bound. The running
    balance accumulates income minus expenses without rounding.

    Args:
        starting_balance: Sum of current account balances.
        baseline: Average monthly flows.
        months: Number of periods to project.
        first_month: Any day of the first projected month.
        variation: Source of relative perturbations.
        income_variation: Bound of the income perturbation.
        expense_variation: Bound of the expense perturbation.

    Returns:
        list[ForecastPeriod]: Exactly months periods.
    """
    validate_months(months)
    anchor = month_start(first_month)
    running = starting_balance
    periods: list[ForecastPeriod] = []
    for index in range(months):
        month = add_months(anchor, index)
        income = baseline.average_income * (
            1 + variation.draw(income_variation)
        )
        expenses = baseline.average_expenses * (
            1 + variation.draw(expense_variation)
        )
        running += income - expenses
        periods.append(
            ForecastPeriod(
                month=month,
                label=month_key(month),
                income=income,
                expenses=expenses,
                balance=running,
            )
        )
    return periods


__all__ = ["validate_months", "compute_baseline_rates", "project_balances"]

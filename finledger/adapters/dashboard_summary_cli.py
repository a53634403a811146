"""CLI adapter printing the dashboard summary of a user.

The user is read from LEDGER_USER_ID, standing in for the authenticated
session of the web front end.
"""

import os
from datetime import date

from finledger.application.use_cases.balances import GetCardsWithUsageUseCase
from finledger.application.use_cases.get_monthly_summary import (
    GetDashboardSummaryUseCase,
)
from finledger.domain.errors import LedgerError
from finledger.infrastructure.container import (
    build_derived_cache,
    build_ledger_repository,
)
from finledger.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Print this month's totals, balances and card usage."""
    logger = get_app_logger()
    user_id = os.getenv("LEDGER_USER_ID")
    repository = build_ledger_repository()
    cache = build_derived_cache()
    today = date.today()

    try:
        summary = GetDashboardSummaryUseCase(
            repository,
            cache=cache,
            logger=logger,
        ).execute(user_id, today=today)
        portfolio = GetCardsWithUsageUseCase(
            repository,
            cache=cache,
            logger=logger,
        ).execute(user_id)
    except LedgerError as exc:
        logger.error(f"Dashboard failed: {exc}")
        raise SystemExit(1) from exc

    print(f"Dashboard for {today:%Y-%m}")
    print(f"  Total balance:   {summary.total_balance:>12.2f}")
    print(f"  Income:          {summary.total_income:>12.2f}")
    print(f"  Expenses:        {summary.total_expenses:>12.2f}")
    print(f"  Savings:         {summary.monthly_savings:>12.2f}")
    for item in summary.transactions_by_category:
        print(f"    {item.category_name:<20} {item.total:>12.2f}")
    for card in portfolio.cards:
        print(
            f"  Card {card.name}: {card.current_usage:.2f} of "
            f"{card.credit_limit:.2f} ({card.utilization_percent:.0f}%)"
        )


if __name__ == "__main__":  # pragma: no cover
    main()

"""Use cases aggregating a calendar month and the dashboard."""

from datetime import date

from finledger.application.ports.derived_cache import DerivedCachePort
from finledger.application.ports.ledger_repository import LedgerRepositoryPort
from finledger.application.use_cases.balances import GetAccountBalancesUseCase
from finledger.application.use_cases.caching import cached
from finledger.domain.models import DashboardSummary, PeriodSummary
from finledger.domain.policies import Aggregate, require_user
from finledger.domain.services import compute_period_summary, month_period
from finledger.infrastructure.logging.logger import get_app_logger


class GetMonthlySummaryUseCase:
    """Compute income, expenses and category totals for one month."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        cache: DerivedCachePort | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing ledger rows.
            cache: Optional derived-value cache.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._ledger_repository = ledger_repository
        self._cache = cache
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_id: str | None,
        year: int,
        month: int,
    ) -> PeriodSummary:
        """Return the summary of [first day, last day] of the month.

        Args:
            user_id: Authenticated caller.
            year: Calendar year.
            month: Calendar month, 1 to 12.

        Returns:
            PeriodSummary: Totals, zero when the month has no rows.
        """
        owner = require_user(user_id)
        start_date, end_date = month_period(year, month)
        return cached(
            self._cache,
            (Aggregate.PERIOD_SUMMARY, owner, year, month),
            lambda: self._compute(owner, start_date, end_date),
        )

    def _compute(
        self,
        owner: str,
        start_date: date,
        end_date: date,
    ) -> PeriodSummary:
        transactions = self._ledger_repository.fetch_transactions(
            owner,
            start_date=start_date,
            end_date=end_date,
        )
        categories = self._ledger_repository.fetch_categories(owner)
        summary = compute_period_summary(
            transactions,
            categories,
            start_date,
            end_date,
        )
        self._logger.info(
            f"Summary {start_date}..{end_date} for user={owner}: "
            f"income={summary.total_income}, "
            f"expenses={summary.total_expenses}"
        )
        return summary


class GetDashboardSummaryUseCase:
    """Combine the current month summary with the total balance."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        cache: DerivedCachePort | None = None,
        logger=None,
    ) -> None:
        self._logger = logger or get_app_logger()
        self._monthly = GetMonthlySummaryUseCase(
            ledger_repository,
            cache=cache,
            logger=self._logger,
        )
        self._accounts = GetAccountBalancesUseCase(
            ledger_repository,
            cache=cache,
            logger=self._logger,
        )

    def execute(
        self,
        user_id: str | None,
        today: date | None = None,
    ) -> DashboardSummary:
        """Return the dashboard figures for the month containing today."""
        reference = today or date.today()
        summary = self._monthly.execute(
            user_id,
            reference.year,
            reference.month,
        )
        total_balance = self._accounts.total_balance(user_id)
        return DashboardSummary(
            total_income=summary.total_income,
            total_expenses=summary.total_expenses,
            total_balance=total_balance,
            monthly_savings=summary.net,
            transactions_by_category=summary.by_category,
        )


__all__ = ["GetMonthlySummaryUseCase", "GetDashboardSummaryUseCase"]

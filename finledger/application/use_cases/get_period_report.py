"""Use case building filtered reports over arbitrary periods."""

from datetime import date

from finledger.application.ports.ledger_repository import LedgerRepositoryPort
from finledger.domain.errors import InvalidInput
from finledger.domain.models import PeriodReport
from finledger.domain.policies import ensure_owned, require_user
from finledger.domain.services import (
    ReportPeriod,
    compute_monthly_trend,
    compute_payment_method_breakdown,
    compute_period_summary,
    resolve_report_period,
)
from finledger.infrastructure.logging.logger import get_app_logger


class GetPeriodReportUseCase:
    """Report totals, trend and payment methods for a filtered period."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_id: str | None,
        start_date: date | None = None,
        end_date: date | None = None,
        account_guid: str | None = None,
        category_guid: str | None = None,
    ) -> PeriodReport:
        """Return the report of the inclusive [start_date, end_date] range.

        Args:
            user_id: Authenticated caller.
            start_date: Optional first day included.
            end_date: Optional last day included.
            account_guid: Optional account filter.
            category_guid: Optional category filter.

        Returns:
            PeriodReport: Summary, count, monthly trend and methods.

        Raises:
            InvalidInput: If start_date is after end_date.
            NotFound: If a filter names an entity the caller does not own.
        """
        owner = require_user(user_id)
        if start_date and end_date and start_date > end_date:
            raise InvalidInput("start_date", "must not be after end_date")
        if account_guid is not None:
            ensure_owned(
                self._ledger_repository.fetch_account(account_guid),
                owner,
                "account",
                account_guid,
            )
        if category_guid is not None:
            ensure_owned(
                self._ledger_repository.fetch_category(category_guid),
                owner,
                "category",
                category_guid,
            )

        transactions = [
            transaction
            for transaction in self._ledger_repository.fetch_transactions(
                owner,
                start_date=start_date,
                end_date=end_date,
            )
            if (account_guid is None or transaction.account_guid == account_guid)
            and (
                category_guid is None
                or transaction.category_guid == category_guid
            )
        ]
        summary = compute_period_summary(
            transactions,
            self._ledger_repository.fetch_categories(owner),
            start_date,
            end_date,
        )
        self._logger.info(
            f"Report for user={owner} over {start_date}..{end_date}: "
            f"{len(transactions)} transactions"
        )
        return PeriodReport(
            summary=summary,
            transaction_count=len(transactions),
            monthly_trend=compute_monthly_trend(transactions),
            payment_methods=compute_payment_method_breakdown(transactions),
        )

    def execute_preset(
        self,
        user_id: str | None,
        period: ReportPeriod | str,
        today: date | None = None,
        account_guid: str | None = None,
        category_guid: str | None = None,
    ) -> PeriodReport:
        """Return the report of a preset period relative to today."""
        start_date, end_date = resolve_report_period(
            period,
            today or date.today(),
        )
        return self.execute(
            user_id,
            start_date=start_date,
            end_date=end_date,
            account_guid=account_guid,
            category_guid=category_guid,
        )


__all__ = ["GetPeriodReportUseCase"]

"""Use case projecting future balances from recent history."""

from datetime import date

from finledger.application.ports.derived_cache import DerivedCachePort
from finledger.application.ports.ledger_repository import LedgerRepositoryPort
from finledger.application.use_cases.balances import GetAccountBalancesUseCase
from finledger.domain.models import (
    BaselineRates,
    ForecastPeriod,
    ForecastPoint,
    ForecastProjection,
)
from finledger.domain.policies import (
    RandomVariationSource,
    VariationSource,
    require_user,
)
from finledger.domain.services import (
    compute_baseline_rates,
    project_balances,
    validate_months,
)
from finledger.infrastructure.logging.logger import get_app_logger
from finledger.infrastructure.settings import ForecastSettings


class ProjectBalancesUseCase:
    """Extrapolate the total balance of a user month by month.

    Projections are stochastic unless the variation source is seeded or
    replaced, and they are never cached.
    """

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        settings: ForecastSettings | None = None,
        variation_source: VariationSource | None = None,
        cache: DerivedCachePort | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing ledger rows.
            settings: Variation bounds and trailing window.
            variation_source: Source of perturbations, seeded from
                settings when omitted.
            cache: Optional cache used for the starting account balances.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._ledger_repository = ledger_repository
        self._settings = settings or ForecastSettings()
        self._variation = variation_source or RandomVariationSource(
            seed=self._settings.seed
        )
        self._logger = logger or get_app_logger()
        self._accounts = GetAccountBalancesUseCase(
            ledger_repository,
            cache=cache,
            logger=self._logger,
        )

    def project(
        self,
        user_id: str | None,
        months: int,
        today: date | None = None,
    ) -> tuple[ForecastProjection, list[ForecastPeriod]]:
        """Return the rounded projection and its full precision periods.

        Args:
            user_id: Authenticated caller.
            months: Number of periods, a positive integer.
            today: Reference date, defaults to the current date.

        Returns:
            tuple[ForecastProjection, list[ForecastPeriod]]: Display
            projection and the unrounded periods it was rounded from.

        Raises:
            Unauthorized: If the caller has no identity.
            InvalidInput: If months is not a positive integer.
        """
        owner = require_user(user_id)
        validate_months(months)
        reference = today or date.today()

        starting_balance = self._accounts.total_balance(owner)
        baseline = self._baseline(owner, reference)
        periods = project_balances(
            starting_balance,
            baseline,
            months,
            first_month=reference,
            variation=self._variation,
            income_variation=self._settings.income_variation,
            expense_variation=self._settings.expense_variation,
        )
        projection = ForecastProjection(
            starting_balance=starting_balance,
            baseline=baseline,
            points=[ForecastPoint.from_period(period) for period in periods],
        )
        self._logger.info(
            f"Projected {months} months for user={owner}: "
            f"start={starting_balance}, "
            f"avg_income={baseline.average_income:.2f}, "
            f"avg_expenses={baseline.average_expenses:.2f}"
        )
        return projection, periods

    def execute(
        self,
        user_id: str | None,
        months: int,
        today: date | None = None,
    ) -> ForecastProjection:
        """Return the projection rounded to whole currency units."""
        projection, _ = self.project(user_id, months, today=today)
        return projection

    def _baseline(self, owner: str, today: date) -> BaselineRates:
        transactions = self._ledger_repository.fetch_transactions(owner)
        return compute_baseline_rates(
            transactions,
            today,
            self._settings.trailing_months,
        )


__all__ = ["ProjectBalancesUseCase"]

"""CLI adapter printing the balance projection of a user.

LEDGER_USER_ID selects the user and FORECAST_MONTHS the horizon
(default 12). Active simulations are overlaid on the printed projection.
"""

import os

from finledger.application.use_cases.simulate_scenario import (
    SimulateScenarioUseCase,
)
from finledger.domain.constants import DEFAULT_SCENARIO_MONTHS
from finledger.domain.errors import LedgerError
from finledger.infrastructure.container import (
    build_forecast_use_case,
    build_ledger_repository,
)
from finledger.infrastructure.logging.logger import get_app_logger
from finledger.utils.decimal_utils import round_whole


def _read_months(logger) -> int:
    raw = os.getenv("FORECAST_MONTHS", "").strip()
    if not raw:
        return DEFAULT_SCENARIO_MONTHS
    try:
        return int(raw)
    except ValueError:
        logger.warning(
            f"Invalid FORECAST_MONTHS={raw!r}, "
            f"using {DEFAULT_SCENARIO_MONTHS}"
        )
        return DEFAULT_SCENARIO_MONTHS


def main() -> None:
    """Print the projected balances and the simulated scenario."""
    logger = get_app_logger()
    user_id = os.getenv("LEDGER_USER_ID")
    months = _read_months(logger)
    repository = build_ledger_repository()
    projector = build_forecast_use_case(repository)

    try:
        projection, periods = projector.project(user_id, months)
        overlay = SimulateScenarioUseCase(
            repository,
            projector=projector,
            logger=logger,
        ).execute(user_id, base=periods)
    except LedgerError as exc:
        logger.error(f"Forecast failed: {exc}")
        raise SystemExit(1) from exc

    print(f"Starting balance: {projection.starting_balance:.2f}")
    for point in projection.points:
        print(
            f"  {point.label}  balance={point.balance}  "
            f"income={point.income}  expenses={point.expenses}  "
            f"net={point.net_flow}"
        )
    print(f"Projected growth: {projection.projected_growth:.2f}")
    negative = projection.first_negative_point
    if negative is not None:
        print(f"Balance turns negative in {negative.label}")

    if overlay.simulation_guids:
        print(f"Scenario with {len(overlay.simulation_guids)} simulations:")
        for period in overlay.periods:
            print(
                f"  {period.label}  base={round_whole(period.base_balance)}  "
                f"simulated={round_whole(period.simulated_balance)}  "
                f"difference={round_whole(period.difference)}"
            )
        print(f"Total impact: {round_whole(overlay.total_impact)}")


if __name__ == "__main__":  # pragma: no cover
    main()

"""Use case comparing the base forecast with simulated scenarios."""

from datetime import date

from finledger.application.use_cases.project_balances import (
    ProjectBalancesUseCase,
)
from finledger.application.ports.ledger_repository import LedgerRepositoryPort
from finledger.domain.constants import DEFAULT_SCENARIO_MONTHS
from finledger.domain.models import ForecastPeriod, SimulationOverlay
from finledger.domain.policies import ensure_owned, require_user
from finledger.domain.services import apply_simulations
from finledger.infrastructure.logging.logger import get_app_logger


class SimulateScenarioUseCase:
    """Overlay simulations onto a base forecast.

    The base is projected on demand unless the caller passes the periods
    it already projected.
    """

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        projector: ProjectBalancesUseCase | None = None,
        logger=None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()
        self._projector = projector or ProjectBalancesUseCase(
            ledger_repository,
            logger=self._logger,
        )

    def execute(
        self,
        user_id: str | None,
        months: int = DEFAULT_SCENARIO_MONTHS,
        simulation_guids: list[str] | None = None,
        today: date | None = None,
        base: list[ForecastPeriod] | None = None,
    ) -> SimulationOverlay:
        """Return base and simulated trajectories side by side.

        Args:
            user_id: Authenticated caller.
            months: Number of projected periods.
            simulation_guids: Simulations to overlay. When None every
                simulation flagged active is used.
            today: Reference date, defaults to the current date.
            base: Full precision periods from
                ProjectBalancesUseCase.project. When given, months and
                today are not used and no new projection is drawn.

        Returns:
            SimulationOverlay: Periods with base and simulated figures.

        Raises:
            NotFound: If a named simulation is unknown or not owned.
        """
        owner = require_user(user_id)
        simulations = self._ledger_repository.fetch_simulations(owner)
        if simulation_guids is None:
            selected = [sim.guid for sim in simulations if sim.is_active]
        else:
            owned = {sim.guid: sim for sim in simulations}
            for guid in simulation_guids:
                ensure_owned(owned.get(guid), owner, "simulation", guid)
            selected = list(simulation_guids)

        if base is None:
            _, base = self._projector.project(owner, months, today=today)
        overlay = apply_simulations(base, simulations, selected)
        self._logger.info(
            f"Overlaid {len(overlay.simulation_guids)} simulations on "
            f"{len(overlay.periods)} months for user={owner}: "
            f"impact={overlay.total_impact:.2f}"
        )
        return overlay


__all__ = ["SimulateScenarioUseCase"]

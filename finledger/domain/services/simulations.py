"""Domain services overlaying simulations onto a base forecast."""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from finledger.domain.models import (
    EntryKind,
    ForecastPeriod,
    OverlaidPeriod,
    Simulation,
    SimulationOverlay,
)
from finledger.utils.date_utils import month_end, month_start


def simulation_applies(simulation: Simulation, month: date) -> bool:
    """Return True when the simulation window touches the calendar month.

    The window is [start_date, end_date] inclusive, open ended when
    end_date is None.
    """
    first_day = month_start(month)
    if simulation.start_date > month_end(first_day):
        return False
    if simulation.end_date is not None and simulation.end_date < first_day:
        return False
    return True


def apply_simulations(
    base: list[ForecastPeriod],
    simulations: Iterable[Simulation],
    active_guids: Iterable[str],
) -> SimulationOverlay:
    """Overlay the selected simulations onto a base projection.

    Every selected simulation adds its monthly value to the income or
    expenses of each period it applies to. Contributions accumulate into
    the simulated running balance across periods. Simulations stack
    additively without capping.

    Args:
        base: Full precision base projection.
        simulations: Candidate simulations of the user.
        active_guids: Guids of the simulations to apply.

    Returns:
        SimulationOverlay: Base and simulated figures, same length as base.
    """
    selected_guids = set(active_guids)
    selected = [
        simulation
        for simulation in simulations
        if simulation.guid in selected_guids
    ]

    cumulative = Decimal("0")
    periods: list[OverlaidPeriod] = []
    for period in base:
        extra_income = Decimal("0")
        extra_expenses = Decimal("0")
        for simulation in selected:
            if not simulation_applies(simulation, period.month):
                continue
            if simulation.kind is EntryKind.INCOME:
                extra_income += simulation.value
            else:
                extra_expenses += simulation.value
        cumulative += extra_income - extra_expenses
        periods.append(
            OverlaidPeriod(
                month=period.month,
                label=period.label,
                base_income=period.income,
                base_expenses=period.expenses,
                base_balance=period.balance,
                simulated_income=period.income + extra_income,
                simulated_expenses=period.expenses + extra_expenses,
                simulated_balance=period.balance + cumulative,
            )
        )
    return SimulationOverlay(
        simulation_guids=[simulation.guid for simulation in selected],
        periods=periods,
    )


__all__ = ["simulation_applies", "apply_simulations"]

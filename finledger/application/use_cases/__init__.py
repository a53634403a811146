"""Application use cases package."""

from .balances import (
    ComputeAccountBalanceUseCase,
    ComputeCardUsageUseCase,
    GetAccountBalancesUseCase,
    GetCardsWithUsageUseCase,
)
from .get_monthly_summary import (
    GetDashboardSummaryUseCase,
    GetMonthlySummaryUseCase,
)
from .get_period_report import GetPeriodReportUseCase
from .ledger_reads import (
    ListCategoriesUseCase,
    ListSimulationsUseCase,
    ListTransactionsUseCase,
    ListTransfersUseCase,
)
from .ledger_writes import (
    CreateAccountUseCase,
    CreateCardUseCase,
    CreateCategoryUseCase,
    CreateSimulationUseCase,
    CreateTransactionUseCase,
    CreateTransferUseCase,
    DeleteSimulationUseCase,
    DeleteTransactionUseCase,
    UpdateSimulationUseCase,
)
from .project_balances import ProjectBalancesUseCase
from .simulate_scenario import SimulateScenarioUseCase

__all__ = [
    "ComputeAccountBalanceUseCase",
    "ComputeCardUsageUseCase",
    "GetAccountBalancesUseCase",
    "GetCardsWithUsageUseCase",
    "GetDashboardSummaryUseCase",
    "GetMonthlySummaryUseCase",
    "GetPeriodReportUseCase",
    "ListCategoriesUseCase",
    "ListSimulationsUseCase",
    "ListTransactionsUseCase",
    "ListTransfersUseCase",
    "CreateAccountUseCase",
    "CreateCardUseCase",
    "CreateCategoryUseCase",
    "CreateSimulationUseCase",
    "CreateTransactionUseCase",
    "CreateTransferUseCase",
    "DeleteSimulationUseCase",
    "DeleteTransactionUseCase",
    "UpdateSimulationUseCase",
    "ProjectBalancesUseCase",
    "SimulateScenarioUseCase",
]

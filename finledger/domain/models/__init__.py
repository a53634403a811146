"""Domain models package."""

from .finance import (
    AccountWithBalance,
    BaselineRates,
    CardPortfolio,
    CardWithUsage,
    CategoryTotal,
    DashboardSummary,
    ForecastPeriod,
    ForecastPoint,
    ForecastProjection,
    MonthlyTrendPoint,
    OverlaidPeriod,
    PaymentMethodTotal,
    PeriodReport,
    PeriodSummary,
    SimulationOverlay,
)
from .ledger import (
    Account,
    AccountType,
    Card,
    CardBrand,
    CardTransaction,
    Category,
    EntryKind,
    PaymentMethod,
    Simulation,
    Transaction,
    Transfer,
)

__all__ = [
    "Account",
    "AccountType",
    "Card",
    "CardBrand",
    "CardTransaction",
    "Category",
    "EntryKind",
    "PaymentMethod",
    "Simulation",
    "Transaction",
    "Transfer",
    "AccountWithBalance",
    "BaselineRates",
    "CardPortfolio",
    "CardWithUsage",
    "CategoryTotal",
    "DashboardSummary",
    "ForecastPeriod",
    "ForecastPoint",
    "ForecastProjection",
    "MonthlyTrendPoint",
    "OverlaidPeriod",
    "PaymentMethodTotal",
    "PeriodReport",
    "PeriodSummary",
    "SimulationOverlay",
]

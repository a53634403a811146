"""Domain package for ledger rules and core models."""

from .constants import (
    DEFAULT_EXPENSE_VARIATION,
    DEFAULT_INCOME_VARIATION,
    DEFAULT_SCENARIO_MONTHS,
    DEFAULT_TRAILING_MONTHS,
)
from .errors import (
    InvalidInput,
    LedgerError,
    NotFound,
    StorageFailure,
    Unauthorized,
)
from .models import (
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
from .services import (
    apply_simulations,
    compute_account_balance,
    compute_baseline_rates,
    compute_card_usage,
    compute_period_summary,
    project_balances,
)

__all__ = [
    "DEFAULT_EXPENSE_VARIATION",
    "DEFAULT_INCOME_VARIATION",
    "DEFAULT_SCENARIO_MONTHS",
    "DEFAULT_TRAILING_MONTHS",
    "InvalidInput",
    "LedgerError",
    "NotFound",
    "StorageFailure",
    "Unauthorized",
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
    "apply_simulations",
    "compute_account_balance",
    "compute_baseline_rates",
    "compute_card_usage",
    "compute_period_summary",
    "project_balances",
]

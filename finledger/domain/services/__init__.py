"""Domain services package."""

from .balances import (
    compute_account_balance,
    compute_card_usage,
    summarize_card_portfolio,
)
from .forecast import compute_baseline_rates, project_balances, validate_months
from .periods import (
    ReportPeriod,
    compute_monthly_trend,
    compute_payment_method_breakdown,
    compute_period_summary,
    in_period,
    month_period,
    resolve_report_period,
)
from .simulations import apply_simulations, simulation_applies
from .validation import (
    validate_account_payload,
    validate_card_payload,
    validate_category_payload,
    validate_simulation_payload,
    validate_simulation_window,
    validate_transaction_payload,
    validate_transfer_payload,
)

__all__ = [
    "compute_account_balance",
    "compute_card_usage",
    "summarize_card_portfolio",
    "compute_baseline_rates",
    "project_balances",
    "validate_months",
    "ReportPeriod",
    "compute_monthly_trend",
    "compute_payment_method_breakdown",
    "compute_period_summary",
    "in_period",
    "month_period",
    "resolve_report_period",
    "apply_simulations",
    "simulation_applies",
    "validate_account_payload",
    "validate_card_payload",
    "validate_category_payload",
    "validate_simulation_payload",
    "validate_simulation_window",
    "validate_transaction_payload",
    "validate_transfer_payload",
]

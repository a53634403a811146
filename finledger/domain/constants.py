"""Domain constants for ledger aggregation and forecasting."""

from decimal import Decimal

DEFAULT_INCOME_VARIATION = Decimal("0.10")
DEFAULT_EXPENSE_VARIATION = Decimal("0.15")
DEFAULT_TRAILING_MONTHS = 3
DEFAULT_SCENARIO_MONTHS = 12

MIN_CARD_DAY = 1
MAX_CARD_DAY = 31

# Largest magnitude a NUMERIC(12, 2) column holds.
MAX_MONEY = Decimal("9999999999.99")


__all__ = [
    "DEFAULT_INCOME_VARIATION",
    "DEFAULT_EXPENSE_VARIATION",
    "DEFAULT_TRAILING_MONTHS",
    "DEFAULT_SCENARIO_MONTHS",
    "MIN_CARD_DAY",
    "MAX_CARD_DAY",
    "MAX_MONEY",
]

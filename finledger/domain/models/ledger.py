"""Domain models for ledger entities.

Balances and card usage are never stored on these models; they are
derived from the transaction log by the domain services.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class AccountType(str, Enum):
    CHECKING = "checking"
    SAVINGS = "savings"


class EntryKind(str, Enum):
    """Direction of a transaction, category or simulation."""

    INCOME = "income"
    EXPENSE = "expense"


class PaymentMethod(str, Enum):
    CASH = "cash"
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    PIX = "pix"


class CardBrand(str, Enum):
    VISA = "visa"
    MASTERCARD = "mastercard"
    ELO = "elo"
    AMERICAN_EXPRESS = "american_express"


@dataclass(frozen=True)
class Account:
    """Bank account owned by a user."""

    guid: str
    user_id: str
    name: str
    bank: str
    account_type: AccountType
    initial_balance: Decimal


@dataclass(frozen=True)
class Category:
    guid: str
    user_id: str
    name: str
    kind: EntryKind
    color: str = "#1976D2"


@dataclass(frozen=True)
class Transaction:
    """Dated income or expense entry against an account.

    Attributes:
        value: Positive amount; the sign comes from kind.
        parcel_number: 1-indexed installment number.
        total_parcels: Installment count, 1 when not parceled.
    """

    guid: str
    user_id: str
    account_guid: str
    category_guid: str
    kind: EntryKind
    value: Decimal
    date: date
    description: str
    payment_method: PaymentMethod
    is_fixed: bool = False
    is_parceled: bool = False
    total_parcels: int = 1
    parcel_number: int = 1

    @property
    def signed_value(self) -> Decimal:
        """Return value with income positive and expense negative."""
        if self.kind is EntryKind.INCOME:
            return self.value
        return -self.value


@dataclass(frozen=True)
class Card:
    guid: str
    user_id: str
    name: str
    brand: CardBrand
    credit_limit: Decimal
    close_day: int
    due_day: int


@dataclass(frozen=True)
class CardTransaction:
    """Link between a card and a transaction charged on it."""

    guid: str
    card_guid: str
    transaction_guid: str
    parcel_number: int = 1


@dataclass(frozen=True)
class Transfer:
    guid: str
    user_id: str
    from_account_guid: str
    to_account_guid: str
    value: Decimal
    date: date
    description: str | None = None


@dataclass(frozen=True)
class Simulation:
    """Hypothetical recurring monthly adjustment applied to forecasts."""

    guid: str
    user_id: str
    name: str
    kind: EntryKind
    value: Decimal
    start_date: date
    end_date: date | None = None
    is_active: bool = True


__all__ = [
    "AccountType",
    "EntryKind",
    "PaymentMethod",
    "CardBrand",
    "Account",
    "Category",
    "Transaction",
    "Card",
    "CardTransaction",
    "Transfer",
    "Simulation",
]

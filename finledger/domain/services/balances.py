"""Domain services deriving balances and card usage from the ledger."""

from collections.abc import Iterable
from decimal import Decimal

from finledger.domain.models import (
    Account,
    CardPortfolio,
    CardWithUsage,
    Transaction,
    Transfer,
)


def compute_account_balance(
    account: Account,
    transactions: Iterable[Transaction],
    transfers: Iterable[Transfer] = (),
) -> Decimal:
    """Fold the signed transaction history onto the initial balance.

    Transfers leaving the account are debited and transfers reaching it
    are credited. Entries referencing other accounts are ignored.

    Args:
        account: Account whose balance is derived.
        transactions: Transactions of the account, in any order.
        transfers: Transfers touching the account, in any order.

    Returns:
        Decimal: Current balance at full precision.
    """
    balance = account.initial_balance
    for transaction in transactions:
        if transaction.account_guid != account.guid:
            continue
        balance += transaction.signed_value
    for transfer in transfers:
        if transfer.from_account_guid == account.guid:
            balance -= transfer.value
        if transfer.to_account_guid == account.guid:
            balance += transfer.value
    return balance


def compute_card_usage(linked_transactions: Iterable[Transaction]) -> Decimal:
    """Sum every transaction charged on a card, whatever its kind.

    The result is not clamped and may exceed the credit limit.
    """
    return sum(
        (transaction.value for transaction in linked_transactions),
        Decimal("0"),
    )


def summarize_card_portfolio(cards: list[CardWithUsage]) -> CardPortfolio:
    """Return limit and usage totals across cards."""
    return CardPortfolio(
        cards=cards,
        total_limit=sum((card.credit_limit for card in cards), Decimal("0")),
        total_usage=sum((card.current_usage for card in cards), Decimal("0")),
    )


__all__ = [
    "compute_account_balance",
    "compute_card_usage",
    "summarize_card_portfolio",
]

"""Tests for the balance and card usage use cases."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from finledger.application.use_cases.balances import (
    ComputeAccountBalanceUseCase,
    ComputeCardUsageUseCase,
    GetAccountBalancesUseCase,
    GetCardsWithUsageUseCase,
)
from finledger.application.use_cases.ledger_writes import (
    CreateTransactionUseCase,
    CreateTransferUseCase,
)
from finledger.domain.errors import NotFound, Unauthorized
from finledger.domain.models import EntryKind
from finledger.infrastructure.derived_cache import DerivedValueCache


def test_account_balance_folds_history(ledger, logger) -> None:
    """1000.00 + 500.00 - 200.50 should give 1299.50."""
    ledger.add_account(initial="1000.00")
    ledger.add_transaction("t1", EntryKind.INCOME, "500.00", date(2024, 1, 2))
    ledger.add_transaction("t2", EntryKind.EXPENSE, "200.50", date(2024, 1, 3))
    use_case = ComputeAccountBalanceUseCase(ledger, logger=logger)

    assert use_case.execute("user-1", "acc-1") == Decimal("1299.50")
    assert use_case.execute("user-1", "acc-1") == Decimal("1299.50")
    logger.info.assert_called()


def test_account_balance_of_foreign_account_is_not_found(ledger, logger) -> None:
    ledger.add_account(user_id="user-2")
    use_case = ComputeAccountBalanceUseCase(ledger, logger=logger)

    with pytest.raises(NotFound):
        use_case.execute("user-1", "acc-1")
    with pytest.raises(NotFound):
        use_case.execute("user-1", "missing")


def test_account_balance_requires_identity(ledger, logger) -> None:
    ledger.add_account()

    with pytest.raises(Unauthorized):
        ComputeAccountBalanceUseCase(ledger, logger=logger).execute(
            None,
            "acc-1",
        )


def test_list_accounts_with_balances_and_total(ledger, logger) -> None:
    ledger.add_account("acc-1", initial="100.00")
    ledger.add_account("acc-2", initial="50.00")
    ledger.add_account("acc-3", user_id="user-2", initial="999.00")
    ledger.add_transaction(
        "t1",
        EntryKind.EXPENSE,
        "30.00",
        date(2024, 1, 2),
        account_guid="acc-2",
    )
    use_case = GetAccountBalancesUseCase(ledger, logger=logger)

    accounts = use_case.execute("user-1")

    assert [(a.guid, a.current_balance) for a in accounts] == [
        ("acc-1", Decimal("100.00")),
        ("acc-2", Decimal("20.00")),
    ]
    assert use_case.total_balance("user-1") == Decimal("120.00")


def test_cached_balance_is_refreshed_after_transaction_write(
    ledger,
    logger,
) -> None:
    """A cached balance must not survive a write to its account."""
    ledger.add_account(initial="10.00")
    ledger.add_category(kind=EntryKind.INCOME)
    cache = DerivedValueCache(logger=logger)
    balances = ComputeAccountBalanceUseCase(ledger, cache=cache, logger=logger)

    assert balances.execute("user-1", "acc-1") == Decimal("10.00")
    assert balances.execute("user-1", "acc-1") == Decimal("10.00")
    assert ledger.calls.count("fetch_account_transactions") == 1

    CreateTransactionUseCase(
        ledger,
        cache=cache,
        logger=logger,
        usage_logger=MagicMock(),
    ).execute(
        "user-1",
        {
            "account_guid": "acc-1",
            "category_guid": "cat-1",
            "kind": "income",
            "value": "5.00",
            "date": "2024-01-05",
            "description": "Refund",
            "payment_method": "pix",
        },
    )

    assert balances.execute("user-1", "acc-1") == Decimal("15.00")
    assert ledger.calls.count("fetch_account_transactions") == 2


def test_cached_balances_are_refreshed_after_transfer(ledger, logger) -> None:
    ledger.add_account("acc-1", initial="100.00")
    ledger.add_account("acc-2", initial="0.00")
    cache = DerivedValueCache(logger=logger)
    accounts = GetAccountBalancesUseCase(ledger, cache=cache, logger=logger)
    assert accounts.total_balance("user-1") == Decimal("100.00")

    CreateTransferUseCase(
        ledger,
        cache=cache,
        logger=logger,
        usage_logger=MagicMock(),
    ).execute(
        "user-1",
        {
            "from_account_guid": "acc-1",
            "to_account_guid": "acc-2",
            "value": "40.00",
            "date": "2024-01-05",
        },
    )

    balances = {a.guid: a.current_balance for a in accounts.execute("user-1")}
    assert balances == {"acc-1": Decimal("60.00"), "acc-2": Decimal("40.00")}
    assert accounts.total_balance("user-1") == Decimal("100.00")


def test_card_usage_without_links_is_zero(ledger, logger) -> None:
    ledger.add_card()

    usage = ComputeCardUsageUseCase(ledger, logger=logger).execute(
        "user-1",
        "card-1",
    )

    assert usage == Decimal("0")


def test_card_usage_of_foreign_card_is_not_found(ledger, logger) -> None:
    ledger.add_card(user_id="user-2")

    with pytest.raises(NotFound):
        ComputeCardUsageUseCase(ledger, logger=logger).execute(
            "user-1",
            "card-1",
        )


def test_cards_with_usage_report_portfolio(ledger, logger) -> None:
    ledger.add_account()
    ledger.add_card("card-1", limit="1000.00")
    ledger.add_card("card-2", limit="500.00")
    ledger.add_transaction(
        "t1",
        EntryKind.EXPENSE,
        "1200.00",
        date(2024, 1, 2),
        card_guid="card-1",
    )
    ledger.add_transaction(
        "t2",
        EntryKind.EXPENSE,
        "100.00",
        date(2024, 1, 3),
        card_guid="card-2",
    )

    portfolio = GetCardsWithUsageUseCase(ledger, logger=logger).execute(
        "user-1"
    )

    by_guid = {card.guid: card for card in portfolio.cards}
    assert by_guid["card-1"].current_usage == Decimal("1200.00")
    assert by_guid["card-1"].utilization_percent == Decimal("100")
    assert by_guid["card-2"].utilization_percent == Decimal("20")
    assert portfolio.total_usage == Decimal("1300.00")
    assert portfolio.total_available == Decimal("200.00")

"""Tests for the ledger write use cases."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from finledger.application.use_cases.ledger_writes import (
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
from finledger.domain.errors import InvalidInput, NotFound, Unauthorized
from finledger.domain.models import AccountType, CardBrand, EntryKind
from finledger.domain.policies import Aggregate, MutationKind
from finledger.infrastructure.derived_cache import DerivedValueCache


@pytest.fixture
def usage_logger() -> MagicMock:
    return MagicMock()


@pytest.fixture
def cache() -> MagicMock:
    fake = MagicMock()
    fake.invalidate.return_value = 0
    return fake


def _build(use_case_cls, ledger, logger, usage_logger, cache=None):
    return use_case_cls(
        ledger,
        cache=cache,
        logger=logger,
        usage_logger=usage_logger,
    )


def _transaction_payload(**overrides) -> dict:
    payload = {
        "account_guid": "acc-1",
        "category_guid": "cat-1",
        "kind": "expense",
        "value": "89.90",
        "date": "2024-06-10",
        "description": "Groceries",
        "payment_method": "debit_card",
    }
    payload.update(overrides)
    return payload


def test_create_account_persists_and_audits(
    ledger,
    logger,
    usage_logger,
) -> None:
    account = _build(
        CreateAccountUseCase,
        ledger,
        logger,
        usage_logger,
    ).execute(
        "user-1",
        {
            "name": "Checking",
            "bank": "Nubank",
            "account_type": "checking",
            "initial_balance": "1500.00",
        },
    )

    assert len(account.guid) == 32
    assert ledger.accounts[account.guid] == account
    assert account.account_type is AccountType.CHECKING
    assert account.initial_balance == Decimal("1500.00")
    usage_logger.info.assert_called_once_with(
        f"user=user-1 created account={account.guid}"
    )


def test_create_category_and_card(ledger, logger, usage_logger) -> None:
    category = _build(
        CreateCategoryUseCase,
        ledger,
        logger,
        usage_logger,
    ).execute("user-1", {"name": "Food", "kind": "expense"})
    card = _build(CreateCardUseCase, ledger, logger, usage_logger).execute(
        "user-1",
        {
            "name": "Black",
            "brand": "elo",
            "credit_limit": "5000",
            "close_day": 28,
            "due_day": 5,
        },
    )

    assert ledger.categories[category.guid].color == "#1976D2"
    assert ledger.cards[card.guid].brand is CardBrand.ELO


def test_writes_require_identity(ledger, logger, usage_logger) -> None:
    with pytest.raises(Unauthorized):
        _build(CreateAccountUseCase, ledger, logger, usage_logger).execute(
            None,
            {"name": "A"},
        )
    assert ledger.accounts == {}
    usage_logger.info.assert_not_called()


def test_create_transaction_links_card_and_invalidates(
    ledger,
    logger,
    usage_logger,
    cache,
) -> None:
    ledger.add_account()
    ledger.add_category()
    ledger.add_card()

    transaction = _build(
        CreateTransactionUseCase,
        ledger,
        logger,
        usage_logger,
        cache,
    ).execute(
        "user-1",
        _transaction_payload(
            payment_method="credit_card",
            card_guid="card-1",
            is_parceled=True,
            total_parcels=3,
            parcel_number=2,
        ),
    )

    assert ledger.transactions[transaction.guid] == transaction
    assert transaction.date == date(2024, 6, 10)
    [link] = ledger.card_links
    assert link.card_guid == "card-1"
    assert link.transaction_guid == transaction.guid
    assert link.parcel_number == 2
    mutation = cache.invalidate.call_args.args[0]
    assert mutation.kind is MutationKind.TRANSACTION_CREATED
    assert mutation.account_guids == ("acc-1",)
    assert mutation.card_guids == ("card-1",)


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"account_guid": "foreign-acc"}, "account_guid"),
        ({"account_guid": "missing"}, "account_guid"),
        ({"category_guid": "cat-income"}, "category_guid"),
        ({"category_guid": "missing"}, "category_guid"),
        (
            {"payment_method": "credit_card", "card_guid": "foreign-card"},
            "card_guid",
        ),
        ({"value": "-1.00"}, "value"),
    ],
)
def test_create_transaction_rejects_bad_references(
    ledger,
    logger,
    usage_logger,
    cache,
    overrides,
    field,
) -> None:
    """Nothing is written when a reference or field is invalid."""
    ledger.add_account()
    ledger.add_account("foreign-acc", user_id="user-2")
    ledger.add_category()
    ledger.add_category("cat-income", kind=EntryKind.INCOME)
    ledger.add_card("foreign-card", user_id="user-2")

    with pytest.raises(InvalidInput) as excinfo:
        _build(
            CreateTransactionUseCase,
            ledger,
            logger,
            usage_logger,
            cache,
        ).execute("user-1", _transaction_payload(**overrides))

    assert excinfo.value.field == field
    assert ledger.transactions == {}
    cache.invalidate.assert_not_called()


def test_delete_transaction_removes_links_and_invalidates(
    ledger,
    logger,
    usage_logger,
    cache,
) -> None:
    ledger.add_account()
    ledger.add_card()
    ledger.add_transaction(
        "t1",
        EntryKind.EXPENSE,
        "10.00",
        date(2024, 6, 1),
        card_guid="card-1",
    )

    _build(
        DeleteTransactionUseCase,
        ledger,
        logger,
        usage_logger,
        cache,
    ).execute("user-1", "t1")

    assert ledger.transactions == {}
    assert ledger.card_links == []
    mutation = cache.invalidate.call_args.args[0]
    assert mutation.kind is MutationKind.TRANSACTION_DELETED
    assert mutation.card_guids == ("card-1",)
    usage_logger.info.assert_called_once_with(
        "user=user-1 deleted transaction=t1"
    )


def test_delete_foreign_transaction_is_not_found(
    ledger,
    logger,
    usage_logger,
) -> None:
    ledger.add_transaction(
        "t1",
        EntryKind.EXPENSE,
        "10.00",
        date(2024, 6, 1),
        user_id="user-2",
    )

    with pytest.raises(NotFound):
        _build(
            DeleteTransactionUseCase,
            ledger,
            logger,
            usage_logger,
        ).execute("user-1", "t1")
    assert "t1" in ledger.transactions


def test_create_transfer_checks_both_accounts(
    ledger,
    logger,
    usage_logger,
    cache,
) -> None:
    ledger.add_account("acc-1")
    ledger.add_account("acc-2")
    ledger.add_account("acc-3", user_id="user-2")
    use_case = _build(
        CreateTransferUseCase,
        ledger,
        logger,
        usage_logger,
        cache,
    )

    transfer = use_case.execute(
        "user-1",
        {
            "from_account_guid": "acc-1",
            "to_account_guid": "acc-2",
            "value": "75.00",
            "date": "2024-06-03",
            "description": "Savings",
        },
    )

    assert ledger.transfers[transfer.guid] == transfer
    mutation = cache.invalidate.call_args.args[0]
    assert mutation.kind is MutationKind.TRANSFER_CREATED
    assert mutation.account_guids == ("acc-1", "acc-2")

    with pytest.raises(InvalidInput) as excinfo:
        use_case.execute(
            "user-1",
            {
                "from_account_guid": "acc-1",
                "to_account_guid": "acc-3",
                "value": "1.00",
                "date": "2024-06-03",
            },
        )
    assert excinfo.value.field == "to_account_guid"


def test_simulation_lifecycle(ledger, logger, usage_logger) -> None:
    simulation = _build(
        CreateSimulationUseCase,
        ledger,
        logger,
        usage_logger,
    ).execute(
        "user-1",
        {
            "name": "Freelance",
            "kind": "income",
            "value": "800.00",
            "start_date": "2024-07-01",
            "end_date": "2024-12-31",
        },
    )
    assert simulation.is_active is True

    updated = _build(
        UpdateSimulationUseCase,
        ledger,
        logger,
        usage_logger,
    ).execute("user-1", simulation.guid, {"is_active": False, "value": "900"})

    assert updated.is_active is False
    assert updated.value == Decimal("900")
    assert updated.name == "Freelance"
    assert ledger.simulations[simulation.guid] == updated

    _build(DeleteSimulationUseCase, ledger, logger, usage_logger).execute(
        "user-1",
        simulation.guid,
    )
    assert ledger.simulations == {}


def test_simulation_window_is_validated(ledger, logger, usage_logger) -> None:
    existing = ledger.add_simulation(
        "s1",
        EntryKind.EXPENSE,
        "50",
        date(2024, 3, 1),
        date(2024, 5, 31),
    )
    create = _build(CreateSimulationUseCase, ledger, logger, usage_logger)
    update = _build(UpdateSimulationUseCase, ledger, logger, usage_logger)

    with pytest.raises(InvalidInput):
        create.execute(
            "user-1",
            {
                "name": "Bad",
                "kind": "expense",
                "value": "1",
                "start_date": "2024-05-01",
                "end_date": "2024-04-30",
            },
        )
    with pytest.raises(InvalidInput):
        update.execute("user-1", "s1", {"start_date": "2024-06-01"})
    assert ledger.simulations["s1"] == existing


def test_update_or_delete_foreign_simulation_is_not_found(
    ledger,
    logger,
    usage_logger,
) -> None:
    ledger.add_simulation(
        "s1",
        EntryKind.EXPENSE,
        "50",
        date(2024, 3, 1),
        user_id="user-2",
    )

    with pytest.raises(NotFound):
        _build(UpdateSimulationUseCase, ledger, logger, usage_logger).execute(
            "user-1",
            "s1",
            {"name": "Mine"},
        )
    with pytest.raises(NotFound):
        _build(DeleteSimulationUseCase, ledger, logger, usage_logger).execute(
            "user-1",
            "s1",
        )


def test_invalidation_uses_period_summary_scope(ledger, logger) -> None:
    """Transaction writes drop summaries of the writing user only."""
    cache = DerivedValueCache(logger=logger)
    for user_id, value in (("user-1", 1), ("user-2", 2)):
        cache.get_or_compute(
            (Aggregate.PERIOD_SUMMARY, user_id, 2024, 6),
            lambda value=value: value,
        )
    ledger.add_account()
    ledger.add_category()

    _build(
        CreateTransactionUseCase,
        ledger,
        logger,
        MagicMock(),
        cache,
    ).execute("user-1", _transaction_payload())

    assert len(cache) == 1
    assert cache.get_or_compute(
        (Aggregate.PERIOD_SUMMARY, "user-2", 2024, 6),
        lambda: 99,
    ) == 2

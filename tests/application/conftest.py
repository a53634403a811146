"""Shared fixtures for application use case tests."""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from finledger.domain.models import (
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


class InMemoryLedgerRepository:
    """LedgerRepositoryPort implementation keeping rows in dictionaries."""

    def __init__(self) -> None:
        self.accounts: dict[str, Account] = {}
        self.categories: dict[str, Category] = {}
        self.transactions: dict[str, Transaction] = {}
        self.cards: dict[str, Card] = {}
        self.card_links: list[CardTransaction] = []
        self.transfers: dict[str, Transfer] = {}
        self.simulations: dict[str, Simulation] = {}
        self.calls: list[str] = []

    # Seeding helpers

    def add_account(self, guid="acc-1", user_id="user-1", initial="0.00"):
        account = Account(
            guid=guid,
            user_id=user_id,
            name=f"Account {guid}",
            bank="Bank",
            account_type=AccountType.CHECKING,
            initial_balance=Decimal(initial),
        )
        self.accounts[guid] = account
        return account

    def add_category(self, guid="cat-1", user_id="user-1", kind=EntryKind.EXPENSE):
        category = Category(guid, user_id, f"Category {guid}", kind)
        self.categories[guid] = category
        return category

    def add_transaction(
        self,
        guid,
        kind,
        value,
        on,
        account_guid="acc-1",
        category_guid="cat-1",
        user_id="user-1",
        card_guid=None,
    ):
        transaction = Transaction(
            guid=guid,
            user_id=user_id,
            account_guid=account_guid,
            category_guid=category_guid,
            kind=kind,
            value=Decimal(value),
            date=on,
            description=guid,
            payment_method=(
                PaymentMethod.CREDIT_CARD if card_guid else PaymentMethod.PIX
            ),
        )
        self.transactions[guid] = transaction
        if card_guid:
            self.card_links.append(
                CardTransaction(f"link-{guid}", card_guid, guid)
            )
        return transaction

    def add_card(self, guid="card-1", user_id="user-1", limit="1000.00"):
        card = Card(
            guid=guid,
            user_id=user_id,
            name=f"Card {guid}",
            brand=CardBrand.MASTERCARD,
            credit_limit=Decimal(limit),
            close_day=5,
            due_day=15,
        )
        self.cards[guid] = card
        return card

    def add_simulation(
        self,
        guid,
        kind,
        value,
        start,
        end=None,
        is_active=True,
        user_id="user-1",
    ):
        simulation = Simulation(
            guid=guid,
            user_id=user_id,
            name=guid,
            kind=kind,
            value=Decimal(value),
            start_date=start,
            end_date=end,
            is_active=is_active,
        )
        self.simulations[guid] = simulation
        return simulation

    # Port

    def fetch_account(self, account_guid):
        return self.accounts.get(account_guid)

    def fetch_accounts(self, user_id):
        return sorted(
            (a for a in self.accounts.values() if a.user_id == user_id),
            key=lambda a: a.name,
        )

    def fetch_category(self, category_guid):
        return self.categories.get(category_guid)

    def fetch_categories(self, user_id):
        return [c for c in self.categories.values() if c.user_id == user_id]

    def fetch_transactions(
        self,
        user_id,
        start_date=None,
        end_date=None,
        limit=None,
    ):
        self.calls.append("fetch_transactions")
        rows = [
            t
            for t in self.transactions.values()
            if t.user_id == user_id
            and (start_date is None or t.date >= start_date)
            and (end_date is None or t.date <= end_date)
        ]
        rows.sort(key=lambda t: t.date, reverse=True)
        return rows[:limit] if limit is not None else rows

    def fetch_transaction(self, transaction_guid):
        return self.transactions.get(transaction_guid)

    def fetch_account_transactions(self, account_guid):
        self.calls.append("fetch_account_transactions")
        return [
            t
            for t in self.transactions.values()
            if t.account_guid == account_guid
        ]

    def fetch_account_transfers(self, account_guid):
        return [
            t
            for t in self.transfers.values()
            if account_guid in (t.from_account_guid, t.to_account_guid)
        ]

    def fetch_card(self, card_guid):
        return self.cards.get(card_guid)

    def fetch_cards(self, user_id):
        return [c for c in self.cards.values() if c.user_id == user_id]

    def fetch_card_transactions(self, card_guid):
        self.calls.append("fetch_card_transactions")
        return [
            self.transactions[link.transaction_guid]
            for link in self.card_links
            if link.card_guid == card_guid
        ]

    def fetch_transaction_card_guids(self, transaction_guid):
        return [
            link.card_guid
            for link in self.card_links
            if link.transaction_guid == transaction_guid
        ]

    def fetch_transfers(self, user_id):
        return [t for t in self.transfers.values() if t.user_id == user_id]

    def fetch_simulation(self, simulation_guid):
        return self.simulations.get(simulation_guid)

    def fetch_simulations(self, user_id):
        return [s for s in self.simulations.values() if s.user_id == user_id]

    def insert_account(self, account):
        self.accounts[account.guid] = account

    def insert_category(self, category):
        self.categories[category.guid] = category

    def insert_card(self, card):
        self.cards[card.guid] = card

    def insert_transaction(self, transaction, card_link=None):
        self.transactions[transaction.guid] = transaction
        if card_link is not None:
            self.card_links.append(card_link)

    def delete_transaction(self, transaction_guid):
        self.transactions.pop(transaction_guid)
        self.card_links = [
            link
            for link in self.card_links
            if link.transaction_guid != transaction_guid
        ]

    def insert_transfer(self, transfer):
        self.transfers[transfer.guid] = transfer

    def insert_simulation(self, simulation):
        self.simulations[simulation.guid] = simulation

    def update_simulation(self, simulation):
        self.simulations[simulation.guid] = replace(simulation)

    def delete_simulation(self, simulation_guid):
        self.simulations.pop(simulation_guid)


@pytest.fixture
def ledger() -> InMemoryLedgerRepository:
    """Return an empty in-memory ledger."""
    return InMemoryLedgerRepository()


@pytest.fixture
def logger() -> MagicMock:
    return MagicMock()


@pytest.fixture
def today() -> date:
    return date(2024, 6, 15)

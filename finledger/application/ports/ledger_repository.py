"""Port for reading and writing the ledger store."""

from datetime import date
from typing import Protocol

from finledger.domain.models import (
    Account,
    Card,
    CardTransaction,
    Category,
    Simulation,
    Transaction,
    Transfer,
)


class LedgerRepositoryPort(Protocol):
    """Port exposing the persisted ledger of every user.

    Single-entity fetches return None when the guid is unknown; ownership
    checks are left to the use cases.
    """

    def fetch_account(self, account_guid: str) -> Account | None:
        """Return an account by guid."""

    def fetch_accounts(self, user_id: str) -> list[Account]:
        """Return the accounts of a user ordered by name."""

    def fetch_category(self, category_guid: str) -> Category | None:
        """Return a category by guid."""

    def fetch_categories(self, user_id: str) -> list[Category]:
        """Return the categories of a user ordered by name."""

    def fetch_transactions(
        self,
        user_id: str,
        start_date: date | None = None,
        end_date: date | None = None,
        limit: int | None = None,
    ) -> list[Transaction]:
        """Return user transactions in the inclusive range, newest first."""

    def fetch_transaction(self, transaction_guid: str) -> Transaction | None:
        """Return a transaction by guid."""

    def fetch_account_transactions(
        self,
        account_guid: str,
    ) -> list[Transaction]:
        """Return every transaction referencing an account."""

    def fetch_account_transfers(self, account_guid: str) -> list[Transfer]:
        """Return every transfer leaving or reaching an account."""

    def fetch_card(self, card_guid: str) -> Card | None:
        """Return a card by guid."""

    def fetch_cards(self, user_id: str) -> list[Card]:
        """Return the cards of a user ordered by name."""

    def fetch_card_transactions(self, card_guid: str) -> list[Transaction]:
        """Return the transactions linked to a card."""

    def fetch_transaction_card_guids(self, transaction_guid: str) -> list[str]:
        """Return the guids of the cards a transaction is linked to."""

    def fetch_transfers(self, user_id: str) -> list[Transfer]:
        """Return the transfers of a user, newest first."""

    def fetch_simulation(self, simulation_guid: str) -> Simulation | None:
        """Return a simulation by guid."""

    def fetch_simulations(self, user_id: str) -> list[Simulation]:
        """Return the simulations of a user, newest first."""

    def insert_account(self, account: Account) -> None:
        """Persist a new account."""

    def insert_category(self, category: Category) -> None:
        """Persist a new category."""

    def insert_card(self, card: Card) -> None:
        """Persist a new card."""

    def insert_transaction(
        self,
        transaction: Transaction,
        card_link: CardTransaction | None = None,
    ) -> None:
        """Persist a transaction and its optional card link atomically."""

    def delete_transaction(self, transaction_guid: str) -> None:
        """Delete a transaction and its card links atomically."""

    def insert_transfer(self, transfer: Transfer) -> None:
        """Persist a new transfer."""

    def insert_simulation(self, simulation: Simulation) -> None:
        """Persist a new simulation."""

    def update_simulation(self, simulation: Simulation) -> None:
        """Replace the stored fields of a simulation."""

    def delete_simulation(self, simulation_guid: str) -> None:
        """Delete a simulation."""


__all__ = ["LedgerRepositoryPort"]

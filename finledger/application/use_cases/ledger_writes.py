"""Use cases writing ledger entities.

Every write validates its payload and the ownership of the entities it
references before touching the store. Once the store commits, the
derived values depending on the touched entities are invalidated and the
write is recorded on the usage log.
"""

from collections.abc import Mapping
from dataclasses import replace
from typing import Any
from uuid import uuid4

from finledger.application.ports.derived_cache import DerivedCachePort
from finledger.application.ports.ledger_repository import LedgerRepositoryPort
from finledger.domain.errors import InvalidInput
from finledger.domain.models import (
    Account,
    Card,
    CardTransaction,
    Category,
    Simulation,
    Transaction,
    Transfer,
)
from finledger.domain.policies import (
    Mutation,
    MutationKind,
    ensure_owned,
    require_user,
)
from finledger.domain.services import (
    validate_account_payload,
    validate_card_payload,
    validate_category_payload,
    validate_simulation_payload,
    validate_simulation_window,
    validate_transaction_payload,
    validate_transfer_payload,
)
from finledger.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


def new_guid() -> str:
    """Return a fresh 32-character hex identifier."""
    return uuid4().hex


class _LedgerWriteUseCase:
    """Shared wiring of the write use cases."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        cache: DerivedCachePort | None = None,
        logger=None,
        usage_logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port persisting ledger rows.
            cache: Optional derived-value cache to invalidate.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional audit logger for committed writes.
        """
        self._ledger_repository = ledger_repository
        self._cache = cache
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()

    def _committed(
        self,
        mutation: Mutation,
        action: str,
        entity: str,
        guid: str,
    ) -> None:
        if self._cache is not None:
            dropped = self._cache.invalidate(mutation)
            if dropped:
                self._logger.info(
                    f"Invalidated {dropped} cached values after {action} "
                    f"{entity}={guid}"
                )
        self._usage_logger.info(
            f"user={mutation.user_id} {action} {entity}={guid}"
        )

    def _owned_reference(self, entity, owner: str, field: str, guid: str):
        """Return a referenced entity or reject the payload field."""
        if entity is None or entity.user_id != owner:
            raise InvalidInput(field, f"unknown reference {guid}")
        return entity


class CreateAccountUseCase(_LedgerWriteUseCase):
    def execute(self, user_id: str | None, payload: Mapping[str, Any]) -> Account:
        """Create an account for the caller."""
        owner = require_user(user_id)
        fields = validate_account_payload(payload)
        account = Account(guid=new_guid(), user_id=owner, **fields)
        self._ledger_repository.insert_account(account)
        self._committed(
            Mutation(MutationKind.ACCOUNT_CREATED, owner),
            "created",
            "account",
            account.guid,
        )
        return account


class CreateCategoryUseCase(_LedgerWriteUseCase):
    def execute(
        self,
        user_id: str | None,
        payload: Mapping[str, Any],
    ) -> Category:
        """Create a category for the caller."""
        owner = require_user(user_id)
        fields = validate_category_payload(payload)
        category = Category(guid=new_guid(), user_id=owner, **fields)
        self._ledger_repository.insert_category(category)
        self._committed(
            Mutation(MutationKind.CATEGORY_CREATED, owner),
            "created",
            "category",
            category.guid,
        )
        return category


class CreateCardUseCase(_LedgerWriteUseCase):
    def execute(self, user_id: str | None, payload: Mapping[str, Any]) -> Card:
        """Create a card for the caller."""
        owner = require_user(user_id)
        fields = validate_card_payload(payload)
        card = Card(guid=new_guid(), user_id=owner, **fields)
        self._ledger_repository.insert_card(card)
        self._committed(
            Mutation(MutationKind.CARD_CREATED, owner),
            "created",
            "card",
            card.guid,
        )
        return card


class CreateTransactionUseCase(_LedgerWriteUseCase):
    """Record an income or expense, optionally charged on a card."""

    def execute(
        self,
        user_id: str | None,
        payload: Mapping[str, Any],
    ) -> Transaction:
        """Create a transaction for the caller.

        Args:
            user_id: Authenticated caller.
            payload: Transaction fields, plus an optional card_guid for
                credit card charges.

        Returns:
            Transaction: The stored transaction.

        Raises:
            Unauthorized: If the caller has no identity.
            InvalidInput: If a field is invalid, a referenced account,
                category or card is unknown, or the category kind differs
                from the transaction kind.
        """
        owner = require_user(user_id)
        fields = validate_transaction_payload(payload)
        card_guid = fields.pop("card_guid")

        self._owned_reference(
            self._ledger_repository.fetch_account(fields["account_guid"]),
            owner,
            "account_guid",
            fields["account_guid"],
        )
        category = self._owned_reference(
            self._ledger_repository.fetch_category(fields["category_guid"]),
            owner,
            "category_guid",
            fields["category_guid"],
        )
        if category.kind is not fields["kind"]:
            raise InvalidInput(
                "category_guid",
                f"category kind {category.kind.value} does not match "
                f"transaction kind {fields['kind'].value}",
            )
        if card_guid is not None:
            self._owned_reference(
                self._ledger_repository.fetch_card(card_guid),
                owner,
                "card_guid",
                card_guid,
            )

        transaction = Transaction(guid=new_guid(), user_id=owner, **fields)
        card_link = None
        if card_guid is not None:
            card_link = CardTransaction(
                guid=new_guid(),
                card_guid=card_guid,
                transaction_guid=transaction.guid,
                parcel_number=transaction.parcel_number,
            )
        self._ledger_repository.insert_transaction(
            transaction,
            card_link=card_link,
        )
        self._committed(
            Mutation(
                MutationKind.TRANSACTION_CREATED,
                owner,
                account_guids=(transaction.account_guid,),
                card_guids=(card_guid,) if card_guid else (),
            ),
            "created",
            "transaction",
            transaction.guid,
        )
        return transaction


class DeleteTransactionUseCase(_LedgerWriteUseCase):
    def execute(self, user_id: str | None, transaction_guid: str) -> None:
        """Delete a transaction of the caller and its card links.

        Raises:
            NotFound: If the transaction is unknown or not owned.
        """
        owner = require_user(user_id)
        transaction = ensure_owned(
            self._ledger_repository.fetch_transaction(transaction_guid),
            owner,
            "transaction",
            transaction_guid,
        )
        card_guids = self._ledger_repository.fetch_transaction_card_guids(
            transaction_guid
        )
        self._ledger_repository.delete_transaction(transaction_guid)
        self._committed(
            Mutation(
                MutationKind.TRANSACTION_DELETED,
                owner,
                account_guids=(transaction.account_guid,),
                card_guids=tuple(card_guids),
            ),
            "deleted",
            "transaction",
            transaction_guid,
        )


class CreateTransferUseCase(_LedgerWriteUseCase):
    """Move money between two accounts of the same user."""

    def execute(
        self,
        user_id: str | None,
        payload: Mapping[str, Any],
    ) -> Transfer:
        """Create a transfer between two accounts of the caller.

        Raises:
            InvalidInput: If the accounts are equal, unknown or not owned.
        """
        owner = require_user(user_id)
        fields = validate_transfer_payload(payload)
        for field in ("from_account_guid", "to_account_guid"):
            self._owned_reference(
                self._ledger_repository.fetch_account(fields[field]),
                owner,
                field,
                fields[field],
            )
        transfer = Transfer(guid=new_guid(), user_id=owner, **fields)
        self._ledger_repository.insert_transfer(transfer)
        self._committed(
            Mutation(
                MutationKind.TRANSFER_CREATED,
                owner,
                account_guids=(
                    transfer.from_account_guid,
                    transfer.to_account_guid,
                ),
            ),
            "created",
            "transfer",
            transfer.guid,
        )
        return transfer


class CreateSimulationUseCase(_LedgerWriteUseCase):
    def execute(
        self,
        user_id: str | None,
        payload: Mapping[str, Any],
    ) -> Simulation:
        """Create a simulation for the caller."""
        owner = require_user(user_id)
        fields = validate_simulation_payload(payload)
        validate_simulation_window(fields["start_date"], fields["end_date"])
        simulation = Simulation(guid=new_guid(), user_id=owner, **fields)
        self._ledger_repository.insert_simulation(simulation)
        self._committed(
            Mutation(MutationKind.SIMULATION_CHANGED, owner),
            "created",
            "simulation",
            simulation.guid,
        )
        return simulation


class UpdateSimulationUseCase(_LedgerWriteUseCase):
    def execute(
        self,
        user_id: str | None,
        simulation_guid: str,
        payload: Mapping[str, Any],
    ) -> Simulation:
        """Update the present fields of a simulation of the caller.

        Raises:
            NotFound: If the simulation is unknown or not owned.
            InvalidInput: If a field is invalid or the merged window is
                inverted.
        """
        owner = require_user(user_id)
        current = ensure_owned(
            self._ledger_repository.fetch_simulation(simulation_guid),
            owner,
            "simulation",
            simulation_guid,
        )
        fields = validate_simulation_payload(payload, partial=True)
        updated = replace(current, **fields)
        validate_simulation_window(updated.start_date, updated.end_date)
        self._ledger_repository.update_simulation(updated)
        self._committed(
            Mutation(MutationKind.SIMULATION_CHANGED, owner),
            "updated",
            "simulation",
            simulation_guid,
        )
        return updated


class DeleteSimulationUseCase(_LedgerWriteUseCase):
    def execute(self, user_id: str | None, simulation_guid: str) -> None:
        """Delete a simulation of the caller."""
        owner = require_user(user_id)
        ensure_owned(
            self._ledger_repository.fetch_simulation(simulation_guid),
            owner,
            "simulation",
            simulation_guid,
        )
        self._ledger_repository.delete_simulation(simulation_guid)
        self._committed(
            Mutation(MutationKind.SIMULATION_CHANGED, owner),
            "deleted",
            "simulation",
            simulation_guid,
        )


__all__ = [
    "new_guid",
    "CreateAccountUseCase",
    "CreateCategoryUseCase",
    "CreateCardUseCase",
    "CreateTransactionUseCase",
    "DeleteTransactionUseCase",
    "CreateTransferUseCase",
    "CreateSimulationUseCase",
    "UpdateSimulationUseCase",
    "DeleteSimulationUseCase",
]

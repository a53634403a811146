"""Use cases listing ledger entities of a user."""

from finledger.application.ports.ledger_repository import LedgerRepositoryPort
from finledger.domain.errors import InvalidInput
from finledger.domain.models import Category, Simulation, Transaction, Transfer
from finledger.domain.policies import require_user
from finledger.infrastructure.logging.logger import get_app_logger


class ListTransactionsUseCase:
    """List the transactions of a user, most recent first."""

    def __init__(self, ledger_repository: LedgerRepositoryPort, logger=None):
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_id: str | None,
        limit: int | None = None,
    ) -> list[Transaction]:
        """Return transactions ordered by date then creation, newest first.

        Args:
            user_id: Authenticated caller.
            limit: Optional maximum number of rows, a positive integer.

        Returns:
            list[Transaction]: Transactions of the caller.

        Raises:
            InvalidInput: If limit is not a positive integer.
        """
        owner = require_user(user_id)
        if limit is not None and (
            isinstance(limit, bool) or not isinstance(limit, int) or limit < 1
        ):
            raise InvalidInput("limit", "must be a positive integer")
        transactions = self._ledger_repository.fetch_transactions(
            owner,
            limit=limit,
        )
        self._logger.info(
            f"Fetched {len(transactions)} transactions for user={owner}"
        )
        return transactions


class ListTransfersUseCase:
    def __init__(self, ledger_repository: LedgerRepositoryPort, logger=None):
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(self, user_id: str | None) -> list[Transfer]:
        """Return the transfers of the caller, newest first."""
        owner = require_user(user_id)
        transfers = self._ledger_repository.fetch_transfers(owner)
        self._logger.info(f"Fetched {len(transfers)} transfers for user={owner}")
        return transfers


class ListSimulationsUseCase:
    def __init__(self, ledger_repository: LedgerRepositoryPort, logger=None):
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(self, user_id: str | None) -> list[Simulation]:
        """Return the simulations of the caller, newest first."""
        owner = require_user(user_id)
        simulations = self._ledger_repository.fetch_simulations(owner)
        self._logger.info(
            f"Fetched {len(simulations)} simulations for user={owner}"
        )
        return simulations


class ListCategoriesUseCase:
    def __init__(self, ledger_repository: LedgerRepositoryPort, logger=None):
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(self, user_id: str | None) -> list[Category]:
        owner = require_user(user_id)
        categories = self._ledger_repository.fetch_categories(owner)
        self._logger.info(
            f"Fetched {len(categories)} categories for user={owner}"
        )
        return categories


__all__ = [
    "ListTransactionsUseCase",
    "ListTransfersUseCase",
    "ListSimulationsUseCase",
    "ListCategoriesUseCase",
]

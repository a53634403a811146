"""SQLAlchemy-backed repository for the ledger tables."""

from collections.abc import Iterable
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from finledger.application.ports.database import DatabaseEnginePort
from finledger.application.ports.ledger_repository import LedgerRepositoryPort
from finledger.domain.errors import StorageFailure
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
from finledger.infrastructure.logging.logger import get_app_logger
from finledger.utils.date_utils import coerce_date
from finledger.utils.decimal_utils import to_money

TRANSACTION_COLUMNS = """
    t.guid, t.user_id, t.account_guid, t.category_guid, t.kind, t.value,
    t.date, t.description, t.payment_method, t.is_fixed, t.is_parceled,
    t.total_parcels, t.parcel_number
"""

TRANSFER_COLUMNS = """
    guid, user_id, from_account_guid, to_account_guid, value, date,
    description
"""

SIMULATION_COLUMNS = """
    guid, user_id, name, kind, value, start_date, end_date, is_active
"""

INSERT_TRANSACTION_SQL = text(
    """
    INSERT INTO transactions (
        guid, user_id, account_guid, category_guid, kind, value, date,
        description, payment_method, is_fixed, is_parceled, total_parcels,
        parcel_number, created_at
    )
    VALUES (
        :guid, :user_id, :account_guid, :category_guid, :kind, :value, :date,
        :description, :payment_method, :is_fixed, :is_parceled,
        :total_parcels, :parcel_number, :created_at
    )
    """
)

INSERT_CARD_TRANSACTION_SQL = text(
    """
    INSERT INTO card_transactions (
        guid, card_guid, transaction_guid, parcel_number, created_at
    )
    VALUES (
        :guid, :card_guid, :transaction_guid, :parcel_number, :created_at
    )
    """
)


def _money_param(value: Decimal) -> str:
    return str(value)


def _date_param(value: date | None) -> str | None:
    if value is None:
        return None
    return coerce_date(value).isoformat()


def _now_param() -> str:
    return datetime.now(timezone.utc).isoformat()


class SqlAlchemyLedgerRepository(LedgerRepositoryPort):
    """Repository backed by SQLAlchemy Core for the ledger tables.

    Reads run on a plain connection; writes run inside engine.begin() so
    multi-row writes commit or roll back together. Every SQLAlchemy error
    surfaces as StorageFailure.
    """

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    # Accounts

    def fetch_account(self, account_guid: str) -> Account | None:
        rows = self._read(
            """
            SELECT guid, user_id, name, bank, account_type, initial_balance
            FROM accounts
            WHERE guid = :guid
            """,
            {"guid": account_guid},
        )
        return self._to_account(rows[0]) if rows else None

    def fetch_accounts(self, user_id: str) -> list[Account]:
        rows = self._read(
            """
            SELECT guid, user_id, name, bank, account_type, initial_balance
            FROM accounts
            WHERE user_id = :user_id
            ORDER BY name, guid
            """,
            {"user_id": user_id},
        )
        return [self._to_account(row) for row in rows]

    def insert_account(self, account: Account) -> None:
        self._write(
            [
                (
                    """
                    INSERT INTO accounts (
                        guid, user_id, name, bank, account_type,
                        initial_balance, created_at
                    )
                    VALUES (
                        :guid, :user_id, :name, :bank, :account_type,
                        :initial_balance, :created_at
                    )
                    """,
                    {
                        "guid": account.guid,
                        "user_id": account.user_id,
                        "name": account.name,
                        "bank": account.bank,
                        "account_type": account.account_type.value,
                        "initial_balance": _money_param(
                            account.initial_balance
                        ),
                        "created_at": _now_param(),
                    },
                )
            ]
        )

    # Categories

    def fetch_category(self, category_guid: str) -> Category | None:
        rows = self._read(
            """
            SELECT guid, user_id, name, kind, color
            FROM categories
            WHERE guid = :guid
            """,
            {"guid": category_guid},
        )
        return self._to_category(rows[0]) if rows else None

    def fetch_categories(self, user_id: str) -> list[Category]:
        rows = self._read(
            """
            SELECT guid, user_id, name, kind, color
            FROM categories
            WHERE user_id = :user_id
            ORDER BY name, guid
            """,
            {"user_id": user_id},
        )
        return [self._to_category(row) for row in rows]

    def insert_category(self, category: Category) -> None:
        self._write(
            [
                (
                    """
                    INSERT INTO categories (
                        guid, user_id, name, kind, color, created_at
                    )
                    VALUES (
                        :guid, :user_id, :name, :kind, :color, :created_at
                    )
                    """,
                    {
                        "guid": category.guid,
                        "user_id": category.user_id,
                        "name": category.name,
                        "kind": category.kind.value,
                        "color": category.color,
                        "created_at": _now_param(),
                    },
                )
            ]
        )

    # Transactions

    def fetch_transactions(
        self,
        user_id: str,
        start_date: date | None = None,
        end_date: date | None = None,
        limit: int | None = None,
    ) -> list[Transaction]:
        """Return user transactions in the inclusive range, newest first.

        Args:
            user_id: Owner of the transactions.
            start_date: Optional first day included.
            end_date: Optional last day included.
            limit: Optional maximum number of rows.

        Returns:
            list[Transaction]: Rows ordered by date then creation time.
        """
        clauses = ["t.user_id = :user_id"]
        params: dict[str, Any] = {"user_id": user_id}
        if start_date is not None:
            clauses.append("t.date >= :start_date")
            params["start_date"] = _date_param(start_date)
        if end_date is not None:
            clauses.append("t.date <= :end_date")
            params["end_date"] = _date_param(end_date)
        query = (
            f"SELECT {TRANSACTION_COLUMNS} FROM transactions t "
            f"WHERE {' AND '.join(clauses)} "
            "ORDER BY t.date DESC, t.created_at DESC"
        )
        if limit is not None:
            query += " LIMIT :limit"
            params["limit"] = limit
        rows = self._read(query, params)
        return [self._to_transaction(row) for row in rows]

    def fetch_transaction(self, transaction_guid: str) -> Transaction | None:
        rows = self._read(
            f"SELECT {TRANSACTION_COLUMNS} FROM transactions t "
            "WHERE t.guid = :guid",
            {"guid": transaction_guid},
        )
        return self._to_transaction(rows[0]) if rows else None

    def fetch_account_transactions(
        self,
        account_guid: str,
    ) -> list[Transaction]:
        rows = self._read(
            f"SELECT {TRANSACTION_COLUMNS} FROM transactions t "
            "WHERE t.account_guid = :account_guid",
            {"account_guid": account_guid},
        )
        return [self._to_transaction(row) for row in rows]

    def insert_transaction(
        self,
        transaction: Transaction,
        card_link: CardTransaction | None = None,
    ) -> None:
        """Persist a transaction and its optional card link atomically."""
        created_at = _now_param()
        statements = [
            (
                INSERT_TRANSACTION_SQL,
                {
                    "guid": transaction.guid,
                    "user_id": transaction.user_id,
                    "account_guid": transaction.account_guid,
                    "category_guid": transaction.category_guid,
                    "kind": transaction.kind.value,
                    "value": _money_param(transaction.value),
                    "date": _date_param(transaction.date),
                    "description": transaction.description,
                    "payment_method": transaction.payment_method.value,
                    "is_fixed": transaction.is_fixed,
                    "is_parceled": transaction.is_parceled,
                    "total_parcels": transaction.total_parcels,
                    "parcel_number": transaction.parcel_number,
                    "created_at": created_at,
                },
            )
        ]
        if card_link is not None:
            statements.append(
                (
                    INSERT_CARD_TRANSACTION_SQL,
                    {
                        "guid": card_link.guid,
                        "card_guid": card_link.card_guid,
                        "transaction_guid": card_link.transaction_guid,
                        "parcel_number": card_link.parcel_number,
                        "created_at": created_at,
                    },
                )
            )
        self._write(statements)

    def delete_transaction(self, transaction_guid: str) -> None:
        """Delete a transaction and its card links atomically."""
        params = {"guid": transaction_guid}
        self._write(
            [
                (
                    "DELETE FROM card_transactions "
                    "WHERE transaction_guid = :guid",
                    params,
                ),
                ("DELETE FROM transactions WHERE guid = :guid", params),
            ]
        )

    # Cards

    def fetch_card(self, card_guid: str) -> Card | None:
        rows = self._read(
            """
            SELECT guid, user_id, name, brand, credit_limit, close_day, due_day
            FROM cards
            WHERE guid = :guid
            """,
            {"guid": card_guid},
        )
        return self._to_card(rows[0]) if rows else None

    def fetch_cards(self, user_id: str) -> list[Card]:
        rows = self._read(
            """
            SELECT guid, user_id, name, brand, credit_limit, close_day, due_day
            FROM cards
            WHERE user_id = :user_id
            ORDER BY name, guid
            """,
            {"user_id": user_id},
        )
        return [self._to_card(row) for row in rows]

    def fetch_card_transactions(self, card_guid: str) -> list[Transaction]:
        rows = self._read(
            f"""
            SELECT {TRANSACTION_COLUMNS}
            FROM card_transactions ct
            JOIN transactions t ON t.guid = ct.transaction_guid
            WHERE ct.card_guid = :card_guid
            """,
            {"card_guid": card_guid},
        )
        return [self._to_transaction(row) for row in rows]

    def fetch_transaction_card_guids(self, transaction_guid: str) -> list[str]:
        rows = self._read(
            """
            SELECT DISTINCT card_guid
            FROM card_transactions
            WHERE transaction_guid = :guid
            """,
            {"guid": transaction_guid},
        )
        return [row.card_guid for row in rows]

    def insert_card(self, card: Card) -> None:
        self._write(
            [
                (
                    """
                    INSERT INTO cards (
                        guid, user_id, name, brand, credit_limit,
                        close_day, due_day, created_at
                    )
                    VALUES (
                        :guid, :user_id, :name, :brand, :credit_limit,
                        :close_day, :due_day, :created_at
                    )
                    """,
                    {
                        "guid": card.guid,
                        "user_id": card.user_id,
                        "name": card.name,
                        "brand": card.brand.value,
                        "credit_limit": _money_param(card.credit_limit),
                        "close_day": card.close_day,
                        "due_day": card.due_day,
                        "created_at": _now_param(),
                    },
                )
            ]
        )

    # Transfers

    def fetch_transfers(self, user_id: str) -> list[Transfer]:
        rows = self._read(
            f"""
            SELECT {TRANSFER_COLUMNS}
            FROM transfers
            WHERE user_id = :user_id
            ORDER BY date DESC, created_at DESC
            """,
            {"user_id": user_id},
        )
        return [self._to_transfer(row) for row in rows]

    def fetch_account_transfers(self, account_guid: str) -> list[Transfer]:
        rows = self._read(
            f"""
            SELECT {TRANSFER_COLUMNS}
            FROM transfers
            WHERE from_account_guid = :guid OR to_account_guid = :guid
            """,
            {"guid": account_guid},
        )
        return [self._to_transfer(row) for row in rows]

    def insert_transfer(self, transfer: Transfer) -> None:
        self._write(
            [
                (
                    """
                    INSERT INTO transfers (
                        guid, user_id, from_account_guid, to_account_guid,
                        value, date, description, created_at
                    )
                    VALUES (
                        :guid, :user_id, :from_account_guid, :to_account_guid,
                        :value, :date, :description, :created_at
                    )
                    """,
                    {
                        "guid": transfer.guid,
                        "user_id": transfer.user_id,
                        "from_account_guid": transfer.from_account_guid,
                        "to_account_guid": transfer.to_account_guid,
                        "value": _money_param(transfer.value),
                        "date": _date_param(transfer.date),
                        "description": transfer.description,
                        "created_at": _now_param(),
                    },
                )
            ]
        )

    # Simulations

    def fetch_simulation(self, simulation_guid: str) -> Simulation | None:
        rows = self._read(
            f"SELECT {SIMULATION_COLUMNS} FROM simulations WHERE guid = :guid",
            {"guid": simulation_guid},
        )
        return self._to_simulation(rows[0]) if rows else None

    def fetch_simulations(self, user_id: str) -> list[Simulation]:
        rows = self._read(
            f"""
            SELECT {SIMULATION_COLUMNS}
            FROM simulations
            WHERE user_id = :user_id
            ORDER BY created_at DESC
            """,
            {"user_id": user_id},
        )
        return [self._to_simulation(row) for row in rows]

    def insert_simulation(self, simulation: Simulation) -> None:
        params = self._simulation_params(simulation)
        params["created_at"] = _now_param()
        self._write(
            [
                (
                    """
                    INSERT INTO simulations (
                        guid, user_id, name, kind, value, start_date,
                        end_date, is_active, created_at
                    )
                    VALUES (
                        :guid, :user_id, :name, :kind, :value, :start_date,
                        :end_date, :is_active, :created_at
                    )
                    """,
                    params,
                )
            ]
        )

    def update_simulation(self, simulation: Simulation) -> None:
        self._write(
            [
                (
                    """
                    UPDATE simulations
                    SET name = :name,
                        kind = :kind,
                        value = :value,
                        start_date = :start_date,
                        end_date = :end_date,
                        is_active = :is_active
                    WHERE guid = :guid AND user_id = :user_id
                    """,
                    self._simulation_params(simulation),
                )
            ]
        )

    def delete_simulation(self, simulation_guid: str) -> None:
        self._write(
            [
                (
                    "DELETE FROM simulations WHERE guid = :guid",
                    {"guid": simulation_guid},
                )
            ]
        )

    # Plumbing

    def _read(self, query, params: dict[str, Any]) -> list:
        """Run a read query and return every row.

        Raises:
            StorageFailure: If the database call fails.
        """
        statement = text(query) if isinstance(query, str) else query
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.connect() as conn:
                return conn.execute(statement, params).all()
        except SQLAlchemyError as exc:
            self._logger.error(f"Ledger read failed: {exc}")
            raise StorageFailure("Ledger read failed") from exc

    def _write(self, statements: Iterable[tuple[Any, dict[str, Any]]]) -> None:
        """Run write statements in a single database transaction.

        Raises:
            StorageFailure: If any statement fails; nothing is committed.
        """
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                for query, params in statements:
                    statement = text(query) if isinstance(query, str) else query
                    conn.execute(statement, params)
        except SQLAlchemyError as exc:
            self._logger.error(f"Ledger write failed: {exc}")
            raise StorageFailure("Ledger write failed") from exc

    @staticmethod
    def _simulation_params(simulation: Simulation) -> dict[str, Any]:
        return {
            "guid": simulation.guid,
            "user_id": simulation.user_id,
            "name": simulation.name,
            "kind": simulation.kind.value,
            "value": _money_param(simulation.value),
            "start_date": _date_param(simulation.start_date),
            "end_date": _date_param(simulation.end_date),
            "is_active": simulation.is_active,
        }

    @staticmethod
    def _to_account(row) -> Account:
        return Account(
            guid=row.guid,
            user_id=row.user_id,
            name=row.name,
            bank=row.bank,
            account_type=AccountType(row.account_type),
            initial_balance=to_money(row.initial_balance),
        )

    @staticmethod
    def _to_category(row) -> Category:
        return Category(
            guid=row.guid,
            user_id=row.user_id,
            name=row.name,
            kind=EntryKind(row.kind),
            color=row.color,
        )

    @staticmethod
    def _to_transaction(row) -> Transaction:
        return Transaction(
            guid=row.guid,
            user_id=row.user_id,
            account_guid=row.account_guid,
            category_guid=row.category_guid,
            kind=EntryKind(row.kind),
            value=to_money(row.value),
            date=coerce_date(row.date),
            description=row.description,
            payment_method=PaymentMethod(row.payment_method),
            is_fixed=bool(row.is_fixed),
            is_parceled=bool(row.is_parceled),
            total_parcels=int(row.total_parcels),
            parcel_number=int(row.parcel_number),
        )

    @staticmethod
    def _to_card(row) -> Card:
        return Card(
            guid=row.guid,
            user_id=row.user_id,
            name=row.name,
            brand=CardBrand(row.brand),
            credit_limit=to_money(row.credit_limit),
            close_day=int(row.close_day),
            due_day=int(row.due_day),
        )

    @staticmethod
    def _to_transfer(row) -> Transfer:
        return Transfer(
            guid=row.guid,
            user_id=row.user_id,
            from_account_guid=row.from_account_guid,
            to_account_guid=row.to_account_guid,
            value=to_money(row.value),
            date=coerce_date(row.date),
            description=row.description,
        )

    @staticmethod
    def _to_simulation(row) -> Simulation:
        return Simulation(
            guid=row.guid,
            user_id=row.user_id,
            name=row.name,
            kind=EntryKind(row.kind),
            value=to_money(row.value),
            start_date=coerce_date(row.start_date),
            end_date=(
                coerce_date(row.end_date) if row.end_date is not None else None
            ),
            is_active=bool(row.is_active),
        )


__all__ = ["SqlAlchemyLedgerRepository"]

"""DDL for the ledger tables.

The statements are idempotent and portable between PostgreSQL and SQLite.
"""

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from finledger.domain.errors import StorageFailure
from finledger.infrastructure.logging.logger import get_app_logger

CREATE_ACCOUNTS_SQL = """
CREATE TABLE IF NOT EXISTS accounts (
    guid VARCHAR(32) PRIMARY KEY,
    user_id VARCHAR(255) NOT NULL,
    name TEXT NOT NULL,
    bank TEXT NOT NULL,
    account_type VARCHAR(16) NOT NULL,
    initial_balance NUMERIC(12, 2) NOT NULL,
    created_at TIMESTAMP NOT NULL
)
"""

CREATE_CATEGORIES_SQL = """
CREATE TABLE IF NOT EXISTS categories (
    guid VARCHAR(32) PRIMARY KEY,
    user_id VARCHAR(255) NOT NULL,
    name TEXT NOT NULL,
    kind VARCHAR(16) NOT NULL,
    color VARCHAR(16) NOT NULL,
    created_at TIMESTAMP NOT NULL
)
"""

CREATE_TRANSACTIONS_SQL = """
CREATE TABLE IF NOT EXISTS transactions (
    guid VARCHAR(32) PRIMARY KEY,
    user_id VARCHAR(255) NOT NULL,
    account_guid VARCHAR(32) NOT NULL REFERENCES accounts (guid),
    category_guid VARCHAR(32) NOT NULL,
    kind VARCHAR(16) NOT NULL,
    value NUMERIC(12, 2) NOT NULL,
    date DATE NOT NULL,
    description TEXT NOT NULL,
    payment_method VARCHAR(16) NOT NULL,
    is_fixed BOOLEAN NOT NULL,
    is_parceled BOOLEAN NOT NULL,
    total_parcels INTEGER NOT NULL,
    parcel_number INTEGER NOT NULL,
    created_at TIMESTAMP NOT NULL
)
"""

CREATE_CARDS_SQL = """
CREATE TABLE IF NOT EXISTS cards (
    guid VARCHAR(32) PRIMARY KEY,
    user_id VARCHAR(255) NOT NULL,
    name TEXT NOT NULL,
    brand VARCHAR(32) NOT NULL,
    credit_limit NUMERIC(12, 2) NOT NULL,
    close_day INTEGER NOT NULL,
    due_day INTEGER NOT NULL,
    created_at TIMESTAMP NOT NULL
)
"""

CREATE_CARD_TRANSACTIONS_SQL = """
CREATE TABLE IF NOT EXISTS card_transactions (
    guid VARCHAR(32) PRIMARY KEY,
    card_guid VARCHAR(32) NOT NULL REFERENCES cards (guid),
    transaction_guid VARCHAR(32) NOT NULL REFERENCES transactions (guid),
    parcel_number INTEGER NOT NULL,
    created_at TIMESTAMP NOT NULL
)
"""

CREATE_TRANSFERS_SQL = """
CREATE TABLE IF NOT EXISTS transfers (
    guid VARCHAR(32) PRIMARY KEY,
    user_id VARCHAR(255) NOT NULL,
    from_account_guid VARCHAR(32) NOT NULL REFERENCES accounts (guid),
    to_account_guid VARCHAR(32) NOT NULL REFERENCES accounts (guid),
    value NUMERIC(12, 2) NOT NULL,
    date DATE NOT NULL,
    description TEXT,
    created_at TIMESTAMP NOT NULL
)
"""

CREATE_SIMULATIONS_SQL = """
CREATE TABLE IF NOT EXISTS simulations (
    guid VARCHAR(32) PRIMARY KEY,
    user_id VARCHAR(255) NOT NULL,
    name TEXT NOT NULL,
    kind VARCHAR(16) NOT NULL,
    value NUMERIC(12, 2) NOT NULL,
    start_date DATE NOT NULL,
    end_date DATE,
    is_active BOOLEAN NOT NULL,
    created_at TIMESTAMP NOT NULL
)
"""

CREATE_INDEXES_SQL = (
    "CREATE INDEX IF NOT EXISTS ix_transactions_user_date "
    "ON transactions (user_id, date)",
    "CREATE INDEX IF NOT EXISTS ix_transactions_account "
    "ON transactions (account_guid)",
    "CREATE INDEX IF NOT EXISTS ix_card_transactions_card "
    "ON card_transactions (card_guid)",
    "CREATE INDEX IF NOT EXISTS ix_card_transactions_transaction "
    "ON card_transactions (transaction_guid)",
)

LEDGER_SCHEMA_SQL = (
    CREATE_ACCOUNTS_SQL,
    CREATE_CATEGORIES_SQL,
    CREATE_TRANSACTIONS_SQL,
    CREATE_CARDS_SQL,
    CREATE_CARD_TRANSACTIONS_SQL,
    CREATE_TRANSFERS_SQL,
    CREATE_SIMULATIONS_SQL,
) + CREATE_INDEXES_SQL


def ensure_ledger_schema(engine: Engine, logger=None) -> int:
    """Create the ledger tables and indexes when missing.

    Args:
        engine: Engine connected to the ledger database.
        logger: Optional logger compatible with logging.Logger-like API.

    Returns:
        int: Number of DDL statements executed.

    Raises:
        StorageFailure: If the database rejects a statement.
    """
    resolved_logger = logger or get_app_logger()
    try:
        with engine.begin() as conn:
            for statement in LEDGER_SCHEMA_SQL:
                conn.execute(text(statement))
    except SQLAlchemyError as exc:
        resolved_logger.error(f"Ledger schema creation failed: {exc}")
        raise StorageFailure("Could not create the ledger schema") from exc
    resolved_logger.info(
        f"Ledger schema ensured ({len(LEDGER_SCHEMA_SQL)} statements)"
    )
    return len(LEDGER_SCHEMA_SQL)


__all__ = ["LEDGER_SCHEMA_SQL", "ensure_ledger_schema"]

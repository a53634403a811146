"""CLI adapter creating the ledger tables.

This module wires the schema helper to the concrete database adapter and
provides a command-line entry point for preparing a fresh database.
"""

from finledger.domain.errors import LedgerError
from finledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from finledger.infrastructure.ledger_schema import ensure_ledger_schema
from finledger.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Create the ledger schema when missing."""
    logger = get_app_logger()
    db_adapter = SqlAlchemyDatabaseEngineAdapter()
    try:
        executed = ensure_ledger_schema(
            db_adapter.get_ledger_engine(),
            logger=logger,
        )
    except LedgerError as exc:
        logger.error(f"Schema creation failed: {exc}")
        raise SystemExit(1) from exc

    print(f"Ledger schema ready ({executed} statements applied).")


if __name__ == "__main__":  # pragma: no cover
    main()

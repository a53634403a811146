"""Tests for the init_ledger_db_cli adapter."""

from unittest.mock import MagicMock

import pytest

from finledger.adapters import init_ledger_db_cli
from finledger.domain.errors import StorageFailure


def _patch(monkeypatch, ensure):
    fake_logger = MagicMock()
    dummy_adapter = MagicMock()
    dummy_adapter.get_ledger_engine.return_value = "engine"
    monkeypatch.setattr(
        init_ledger_db_cli,
        "get_app_logger",
        lambda: fake_logger,
    )
    monkeypatch.setattr(
        init_ledger_db_cli,
        "SqlAlchemyDatabaseEngineAdapter",
        lambda: dummy_adapter,
    )
    monkeypatch.setattr(init_ledger_db_cli, "ensure_ledger_schema", ensure)
    return fake_logger


def test_main_creates_schema_and_prints_summary(monkeypatch, capsys):
    """The CLI should run the schema helper on the ledger engine."""
    calls = []

    def _fake_ensure(engine, logger):
        calls.append(engine)
        return 11

    _patch(monkeypatch, _fake_ensure)

    init_ledger_db_cli.main()

    assert calls == ["engine"]
    assert "11" in capsys.readouterr().out


def test_main_exits_non_zero_on_storage_failure(monkeypatch):
    def _failing_ensure(engine, logger):
        raise StorageFailure("boom")

    fake_logger = _patch(monkeypatch, _failing_ensure)

    with pytest.raises(SystemExit) as excinfo:
        init_ledger_db_cli.main()

    assert excinfo.value.code == 1
    fake_logger.error.assert_called_once()

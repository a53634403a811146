"""Composition root for wiring infrastructure adapters."""

from finledger.application.ports.database import DatabaseEnginePort
from finledger.application.ports.derived_cache import DerivedCachePort
from finledger.application.ports.ledger_repository import LedgerRepositoryPort
from finledger.application.use_cases.project_balances import (
    ProjectBalancesUseCase,
)
from finledger.domain.policies import RandomVariationSource, VariationSource
from finledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from finledger.infrastructure.derived_cache import DerivedValueCache
from finledger.infrastructure.logging.logger import get_app_logger
from finledger.infrastructure.settings import ForecastSettings
from finledger.infrastructure.sql_ledger_repository import (
    SqlAlchemyLedgerRepository,
)

_derived_cache: DerivedValueCache | None = None


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_ledger_repository(
    db_port: DatabaseEnginePort | None = None,
) -> LedgerRepositoryPort:
    """Return the SQL ledger repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyLedgerRepository(resolved_db, logger=get_app_logger())


def build_derived_cache() -> DerivedCachePort:
    """Return the process-wide derived-value cache."""
    global _derived_cache
    if _derived_cache is None:
        _derived_cache = DerivedValueCache(logger=get_app_logger())
    return _derived_cache


def build_variation_source(
    settings: ForecastSettings | None = None,
) -> VariationSource:
    """Return a variation source seeded from the forecast settings."""
    resolved = settings or ForecastSettings.from_env()
    return RandomVariationSource(seed=resolved.seed)


def build_forecast_use_case(
    repository: LedgerRepositoryPort | None = None,
) -> ProjectBalancesUseCase:
    """Return the projection use case configured from the environment."""
    settings = ForecastSettings.from_env()
    return ProjectBalancesUseCase(
        repository or build_ledger_repository(),
        settings=settings,
        variation_source=build_variation_source(settings),
        cache=build_derived_cache(),
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_ledger_repository",
    "build_derived_cache",
    "build_variation_source",
    "build_forecast_use_case",
]

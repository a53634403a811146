"""Application ports package."""

from .database import DatabaseEnginePort
from .derived_cache import DerivedCachePort
from .ledger_repository import LedgerRepositoryPort

__all__ = [
    "DatabaseEnginePort",
    "DerivedCachePort",
    "LedgerRepositoryPort",
]

"""In-process cache of derived ledger values."""

from collections.abc import Callable, Hashable
from threading import RLock
from typing import Any, TypeVar

from finledger.application.ports.derived_cache import DerivedCachePort
from finledger.domain.policies import Mutation, affected_scopes
from finledger.infrastructure.logging.logger import get_app_logger

T = TypeVar("T")


class DerivedValueCache(DerivedCachePort):
    """Thread-safe cache invalidated through the mutation table.

    Keys start with (Aggregate, scope id); an invalidated scope drops
    every key sharing that prefix. Entries never expire on their own.
    """

    def __init__(self, logger=None) -> None:
        self._entries: dict[tuple[Hashable, ...], Any] = {}
        self._lock = RLock()
        self._generation = 0
        self._logger = logger or get_app_logger()

    def get_or_compute(
        self,
        key: tuple[Hashable, ...],
        compute: Callable[[], T],
    ) -> T:
        """Return the cached value for key, computing it when missing.

        The value is computed outside the lock. A value computed while an
        invalidation ran is returned but not stored.
        """
        with self._lock:
            if key in self._entries:
                return self._entries[key]
            generation = self._generation
        value = compute()
        with self._lock:
            if generation == self._generation:
                self._entries[key] = value
        return value

    def invalidate(self, mutation: Mutation) -> int:
        """Drop every entry the mutation affects and return the count."""
        scopes = set(affected_scopes(mutation))
        if not scopes:
            return 0
        with self._lock:
            stale = [key for key in self._entries if tuple(key[:2]) in scopes]
            for key in stale:
                del self._entries[key]
            self._generation += 1
        self._logger.debug(
            f"Invalidated {len(stale)} entries for {mutation.kind.value}"
        )
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._generation += 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["DerivedValueCache"]

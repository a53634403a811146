"""Shared helper for optional derived-value caching."""

from collections.abc import Callable, Hashable
from typing import TypeVar

from finledger.application.ports.derived_cache import DerivedCachePort

T = TypeVar("T")


def cached(
    cache: DerivedCachePort | None,
    key: tuple[Hashable, ...],
    compute: Callable[[], T],
) -> T:
    """Read through the cache when one is configured."""
    if cache is None:
        return compute()
    return cache.get_or_compute(key, compute)


__all__ = ["cached"]

"""Port for caching derived ledger values."""

from collections.abc import Callable, Hashable
from typing import Protocol, TypeVar

from finledger.domain.policies.invalidation import Mutation

T = TypeVar("T")


class DerivedCachePort(Protocol):
    """Cache of derived values invalidated explicitly on writes."""

    def get_or_compute(
        self,
        key: tuple[Hashable, ...],
        compute: Callable[[], T],
    ) -> T:
        """Return the cached value for key, computing it when missing.

        Keys start with (Aggregate, scope id).
        """

    def invalidate(self, mutation: Mutation) -> int:
        """Drop every entry the mutation affects and return the count."""


__all__ = ["DerivedCachePort"]

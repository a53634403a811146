"""Tests for the in-process derived-value cache."""

from threading import Thread
from unittest.mock import MagicMock

from finledger.domain.policies import Aggregate, Mutation, MutationKind
from finledger.infrastructure.derived_cache import DerivedValueCache


def _cache() -> DerivedValueCache:
    return DerivedValueCache(logger=MagicMock())


def test_get_or_compute_memoizes_values() -> None:
    cache = _cache()
    calls = []

    def compute():
        calls.append(1)
        return 42

    key = (Aggregate.ACCOUNT_BALANCE, "acc-1")

    assert cache.get_or_compute(key, compute) == 42
    assert cache.get_or_compute(key, compute) == 42
    assert calls == [1]
    assert len(cache) == 1


def test_invalidate_drops_only_affected_scopes() -> None:
    cache = _cache()
    cache.get_or_compute((Aggregate.ACCOUNT_BALANCE, "acc-1"), lambda: 1)
    cache.get_or_compute((Aggregate.ACCOUNT_BALANCE, "acc-2"), lambda: 2)
    cache.get_or_compute((Aggregate.CARD_USAGE, "card-1"), lambda: 3)
    cache.get_or_compute((Aggregate.PERIOD_SUMMARY, "user-1", 2024, 1), lambda: 4)
    cache.get_or_compute((Aggregate.PERIOD_SUMMARY, "user-1", 2024, 2), lambda: 5)

    dropped = cache.invalidate(
        Mutation(
            MutationKind.TRANSACTION_CREATED,
            "user-1",
            account_guids=("acc-1",),
            card_guids=("card-1",),
        )
    )

    assert dropped == 4
    assert len(cache) == 1
    assert cache.get_or_compute(
        (Aggregate.ACCOUNT_BALANCE, "acc-2"),
        lambda: 99,
    ) == 2


def test_mutations_without_aggregates_keep_entries() -> None:
    cache = _cache()
    cache.get_or_compute((Aggregate.PERIOD_SUMMARY, "user-1", 2024, 1), lambda: 4)

    assert cache.invalidate(Mutation(MutationKind.SIMULATION_CHANGED, "user-1")) == 0
    assert len(cache) == 1


def test_value_computed_during_invalidation_is_not_stored() -> None:
    """A stale computation racing with a write must not be cached."""
    cache = _cache()
    key = (Aggregate.ACCOUNT_BALANCE, "acc-1")

    def compute():
        cache.invalidate(
            Mutation(
                MutationKind.TRANSFER_CREATED,
                "user-1",
                account_guids=("acc-1",),
            )
        )
        return "stale"

    assert cache.get_or_compute(key, compute) == "stale"
    assert len(cache) == 0


def test_concurrent_reads_share_the_cache() -> None:
    cache = _cache()
    results = []

    def worker():
        results.append(
            cache.get_or_compute((Aggregate.CARD_USAGE, "card-1"), lambda: 7)
        )

    threads = [Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results == [7] * 8
    assert len(cache) == 1
    cache.clear()
    assert len(cache) == 0

"""Mapping from ledger mutations to the derived values they invalidate."""

from dataclasses import dataclass
from enum import Enum


class Aggregate(str, Enum):
    """Derived values that may be cached."""

    ACCOUNT_BALANCE = "account_balance"
    CARD_USAGE = "card_usage"
    PERIOD_SUMMARY = "period_summary"


class MutationKind(str, Enum):
    ACCOUNT_CREATED = "account_created"
    CATEGORY_CREATED = "category_created"
    CARD_CREATED = "card_created"
    TRANSACTION_CREATED = "transaction_created"
    TRANSACTION_DELETED = "transaction_deleted"
    TRANSFER_CREATED = "transfer_created"
    SIMULATION_CHANGED = "simulation_changed"


INVALIDATION_TABLE: dict[MutationKind, tuple[Aggregate, ...]] = {
    MutationKind.ACCOUNT_CREATED: (),
    MutationKind.CATEGORY_CREATED: (),
    MutationKind.CARD_CREATED: (),
    MutationKind.TRANSACTION_CREATED: (
        Aggregate.ACCOUNT_BALANCE,
        Aggregate.CARD_USAGE,
        Aggregate.PERIOD_SUMMARY,
    ),
    MutationKind.TRANSACTION_DELETED: (
        Aggregate.ACCOUNT_BALANCE,
        Aggregate.CARD_USAGE,
        Aggregate.PERIOD_SUMMARY,
    ),
    MutationKind.TRANSFER_CREATED: (Aggregate.ACCOUNT_BALANCE,),
    MutationKind.SIMULATION_CHANGED: (),
}


@dataclass(frozen=True)
class Mutation:
    """A committed ledger write and the entities it touched."""

    kind: MutationKind
    user_id: str
    account_guids: tuple[str, ...] = ()
    card_guids: tuple[str, ...] = ()


def affected_scopes(mutation: Mutation) -> list[tuple[Aggregate, str]]:
    """Return the (aggregate, scope id) pairs a mutation invalidates.

    Account balances are scoped by account, card usage by card and period
    summaries by user.
    """
    scopes: list[tuple[Aggregate, str]] = []
    for aggregate in INVALIDATION_TABLE[mutation.kind]:
        if aggregate is Aggregate.ACCOUNT_BALANCE:
            scopes.extend((aggregate, guid) for guid in mutation.account_guids)
        elif aggregate is Aggregate.CARD_USAGE:
            scopes.extend((aggregate, guid) for guid in mutation.card_guids)
        elif aggregate is Aggregate.PERIOD_SUMMARY:
            scopes.append((aggregate, mutation.user_id))
    return scopes


__all__ = [
    "Aggregate",
    "MutationKind",
    "INVALIDATION_TABLE",
    "Mutation",
    "affected_scopes",
]

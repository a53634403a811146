"""Domain policies package."""

from .invalidation import (
    INVALIDATION_TABLE,
    Aggregate,
    Mutation,
    MutationKind,
    affected_scopes,
)
from .ownership import ensure_owned, require_user
from .variation import (
    NoVariationSource,
    RandomVariationSource,
    VariationSource,
)

__all__ = [
    "INVALIDATION_TABLE",
    "Aggregate",
    "Mutation",
    "MutationKind",
    "affected_scopes",
    "ensure_owned",
    "require_user",
    "NoVariationSource",
    "RandomVariationSource",
    "VariationSource",
]

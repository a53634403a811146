"""Sources of bounded random variation for forecasts."""

import random
from decimal import Decimal
from typing import Protocol


class VariationSource(Protocol):
    """Produce relative perturbations within a symmetric bound."""

    def draw(self, bound: Decimal) -> Decimal:
        """Return a factor in [-bound, bound]."""


class RandomVariationSource:
    """Uniform variation backed by random.Random.

    A seed makes the sequence of draws reproducible.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random(seed)

    def draw(self, bound: Decimal) -> Decimal:
        if bound == 0:
            return Decimal("0")
        raw = self._random.uniform(-float(bound), float(bound))
        factor = Decimal(str(round(raw, 6)))
        return min(max(factor, -bound), bound)


class NoVariationSource:
    """Flat projections, used when variation is disabled."""

    def draw(self, bound: Decimal) -> Decimal:
        return Decimal("0")


__all__ = ["VariationSource", "RandomVariationSource", "NoVariationSource"]

"""Policies used when no catalog entry scores above the confidence floor."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Optional, Sequence, Tuple

from .catalog import Catalog
from .types import CatalogEntry

RankedEntries = Sequence[Tuple[CatalogEntry, float]]


class UncertaintyPolicy(ABC):
    """Chooses an entry when the scores carry too little signal."""

    @abstractmethod
    def choose(self, catalog: Catalog, ranked: RankedEntries) -> CatalogEntry:
        """Return the entry to report for a low-signal observation set."""


class RandomCatalogPolicy(UncertaintyPolicy):
    """Samples uniformly from the full catalog."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def choose(self, catalog: Catalog, ranked: RankedEntries) -> CatalogEntry:
        return self._rng.choice(catalog.all_entries())


class BestGuessPolicy(UncertaintyPolicy):
    """Keeps the top-ranked entry even though its score is low."""

    def choose(self, catalog: Catalog, ranked: RankedEntries) -> CatalogEntry:
        return ranked[0][0]

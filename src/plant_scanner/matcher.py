"""Scores catalog entries against observed characteristics."""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from .catalog import Catalog
from .logging_config import get_logger
from .types import CatalogEntry, MatchResult, ObservationSet
from .uncertainty import RandomCatalogPolicy, UncertaintyPolicy

logger = get_logger(__name__)

DEFAULT_THRESHOLD = 0.3


class CharacteristicMatcher:
    """Resolves an observation set to the best-matching catalog entry.

    An entry's score is the fraction of its characteristics found in the
    observations (substring containment, case-insensitive) scaled by its base
    confidence. Scores below ``threshold`` are handed to the uncertainty
    policy instead.
    """

    def __init__(
        self,
        catalog: Catalog,
        uncertainty_policy: Optional[UncertaintyPolicy] = None,
        threshold: float = DEFAULT_THRESHOLD,
    ) -> None:
        if len(catalog) == 0:
            raise ValueError("Cannot match against an empty catalog")
        self.catalog = catalog
        self.uncertainty_policy = uncertainty_policy or RandomCatalogPolicy()
        self.threshold = threshold

    @staticmethod
    def match_count(entry: CatalogEntry, observations: Iterable[str]) -> int:
        observed = [tag.lower() for tag in observations]
        return sum(
            1
            for characteristic in entry.characteristics
            if any(characteristic.lower() in tag for tag in observed)
        )

    def score(self, entry: CatalogEntry, observations: Iterable[str]) -> float:
        coverage = self.match_count(entry, observations) / len(entry.characteristics)
        return coverage * entry.base_confidence

    def rank(self, observations: ObservationSet) -> List[Tuple[CatalogEntry, float]]:
        """All entries with their scores, best first; ties keep catalog order."""

        scored = [(entry, self.score(entry, observations)) for entry in self.catalog]
        # sorted() is stable, so equal scores stay in declaration order
        return sorted(scored, key=lambda pair: pair[1], reverse=True)

    def match(self, observations: ObservationSet) -> MatchResult:
        ranked = self.rank(observations)
        best, best_score = ranked[0]
        if best_score >= self.threshold:
            return MatchResult(entry=best, score=best_score, is_fallback=False)

        chosen = self.uncertainty_policy.choose(self.catalog, ranked)
        logger.debug(
            "Best score %.3f for %s below threshold %.2f, fell back to %s",
            best_score,
            best.id,
            self.threshold,
            chosen.id,
        )
        return MatchResult(
            entry=chosen,
            score=self.score(chosen, observations),
            is_fallback=True,
        )

"""Placeholder extractor that samples tags from the catalog."""

from __future__ import annotations

import random
from typing import List, Optional

import numpy as np

from ..catalog import Catalog
from ..types import ObservationSet, observations
from .base import CharacteristicExtractor


class RandomCharacteristicExtractor(CharacteristicExtractor):
    """Simulates image analysis by drawing random catalog tags.

    The image is ignored. A count ``k`` is drawn uniformly from
    ``[min_tags, max_tags]``, then tags are drawn uniformly from every distinct
    catalog tag, skipping repeats, until ``k`` distinct tags are collected or
    the universe runs out.
    """

    name = "random"

    def __init__(
        self,
        catalog: Catalog,
        min_tags: int = 3,
        max_tags: int = 5,
        rng: Optional[random.Random] = None,
    ) -> None:
        if min_tags < 0 or max_tags < min_tags:
            raise ValueError(f"Invalid tag count range: {min_tags}..{max_tags}")
        self.universe = catalog.characteristic_universe()
        self.min_tags = min_tags
        self.max_tags = max_tags
        self._rng = rng or random.Random()

    def extract(self, image: np.ndarray) -> ObservationSet:
        target = min(self._rng.randint(self.min_tags, self.max_tags), len(self.universe))
        selected: List[str] = []
        while len(selected) < target:
            tag = self._rng.choice(self.universe)
            if tag not in selected:
                selected.append(tag)
        return observations(selected)

"""Adapter for external image classifiers that emit text labels."""

from __future__ import annotations

from typing import Callable, Iterable, Sequence, Tuple

import numpy as np

from ..types import ObservationSet, observations
from .base import CharacteristicExtractor

LabelClassifier = Callable[[np.ndarray], Iterable[str]]

PLANT_KEYWORDS: Tuple[str, ...] = ("plant", "flower", "leaf", "tree", "potted", "grass")


class LabelKeywordExtractor(CharacteristicExtractor):
    """Uses a classifier's labels (e.g. ImageNet class names) as observations.

    Labels are lower-cased and passed through unchanged, so the matcher's
    substring rule applies to them directly.
    """

    name = "labels"

    def __init__(self, classify: LabelClassifier, keywords: Sequence[str] = PLANT_KEYWORDS) -> None:
        self._classify = classify
        self.keywords = tuple(keyword.lower() for keyword in keywords)

    def extract(self, image: np.ndarray) -> ObservationSet:
        return observations(self._classify(image))

    def looks_like_plant(self, tags: Iterable[str]) -> bool:
        """Broad keyword check over classifier labels."""

        return any(keyword in tag for tag in tags for keyword in self.keywords)

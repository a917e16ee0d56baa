"""Deterministic extractor returning a preset observation set."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from ..types import ObservationSet, observations
from .base import CharacteristicExtractor


class FixedCharacteristicExtractor(CharacteristicExtractor):
    name = "fixed"

    def __init__(self, tags: Iterable[str]) -> None:
        self.tags = observations(tags)

    def extract(self, image: np.ndarray) -> ObservationSet:
        return self.tags

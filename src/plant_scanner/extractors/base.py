"""Base extractor definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from ..types import ObservationSet


class CharacteristicExtractor(ABC):
    """Abstract base class turning an image into characteristic tags."""

    name: str = "extractor"

    @abstractmethod
    def extract(self, image: np.ndarray) -> ObservationSet:
        """Return the characteristic tags observed in the image."""

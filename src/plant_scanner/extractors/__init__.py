"""Extractor exports."""

from .base import CharacteristicExtractor
from .fixed import FixedCharacteristicExtractor
from .labels import PLANT_KEYWORDS, LabelKeywordExtractor
from .random_sampler import RandomCharacteristicExtractor

__all__ = [
    "CharacteristicExtractor",
    "FixedCharacteristicExtractor",
    "LabelKeywordExtractor",
    "PLANT_KEYWORDS",
    "RandomCharacteristicExtractor",
]

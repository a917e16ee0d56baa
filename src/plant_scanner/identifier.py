"""High level API that runs extraction and matching on an image."""

from __future__ import annotations

from typing import List, Optional

from .catalog import Catalog, load_catalog
from .extractors import CharacteristicExtractor, RandomCharacteristicExtractor
from .image_utils import ImageInput, load_image
from .matcher import CharacteristicMatcher
from .types import CatalogEntry, MatchResult


class LocalPlantIdentifier:
    """Extracts characteristics from an image and matches them to the catalog."""

    def __init__(
        self,
        catalog: Optional[Catalog] = None,
        extractor: Optional[CharacteristicExtractor] = None,
        matcher: Optional[CharacteristicMatcher] = None,
    ) -> None:
        self.catalog = catalog or (matcher.catalog if matcher else load_catalog())
        self.extractor = extractor or RandomCharacteristicExtractor(self.catalog)
        self.matcher = matcher or CharacteristicMatcher(self.catalog)

    def analyze(self, image_input: ImageInput) -> MatchResult:
        """Return the match for the provided image input."""

        image = load_image(image_input)
        observed = self.extractor.extract(image)
        return self.matcher.match(observed)

    def predict_label(self, image_input: ImageInput) -> str:
        """Convenience helper that only returns the matched entry id."""

        return self.analyze(image_input).entry.id

    def available_entries(self) -> List[CatalogEntry]:
        """Expose which entries can currently be detected."""

        return list(self.catalog.all_entries())

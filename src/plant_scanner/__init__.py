"""Public exports for the plant scanner package."""

from .catalog import Catalog, load_catalog
from .identifier import LocalPlantIdentifier
from .matcher import CharacteristicMatcher
from .pipeline import AcquisitionPipeline, ScanSession
from .types import Category, CatalogEntry, DetectionRecord, Location, MatchResult, ScanMode

__all__ = [
    "AcquisitionPipeline",
    "Catalog",
    "CatalogEntry",
    "Category",
    "CharacteristicMatcher",
    "DetectionRecord",
    "LocalPlantIdentifier",
    "Location",
    "MatchResult",
    "ScanMode",
    "ScanSession",
    "load_catalog",
]

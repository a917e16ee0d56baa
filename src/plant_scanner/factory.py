"""Wires a ready-to-use pipeline from a configuration dictionary."""

from __future__ import annotations

import random
from typing import Any, Dict, Optional

from .auth import EnvCredentials
from .camera import CameraSession
from .catalog import load_catalog
from .detection import Detector, LocalDetector, RemoteDetector
from .examples import ExampleAssetLoader
from .extractors import RandomCharacteristicExtractor
from .geolocation import LocationTracker, StaticLocationProvider
from .history import HistorySink, InMemoryHistory, JsonLinesHistory
from .identifier import LocalPlantIdentifier
from .logging_config import get_logger
from .matcher import CharacteristicMatcher
from .pipeline import AcquisitionPipeline
from .types import Location
from .uncertainty import RandomCatalogPolicy

logger = get_logger(__name__)


def build_pipeline(config: Dict[str, Any], history: Optional[HistorySink] = None) -> AcquisitionPipeline:
    """Build the acquisition pipeline described by ``config`` (see ``load_config``)."""

    catalog = load_catalog(config.get("CATALOG_PATH"))
    rng = random.Random(config.get("RANDOM_SEED"))

    detector: Detector
    endpoint = config.get("DETECTION_ENDPOINT")
    if endpoint:
        logger.info("Using remote detection endpoint %s", endpoint)
        detector = RemoteDetector(
            endpoint,
            credentials=EnvCredentials(),
            timeout=config.get("REQUEST_TIMEOUT", 30.0),
        )
    else:
        matcher = CharacteristicMatcher(
            catalog,
            uncertainty_policy=RandomCatalogPolicy(rng),
            threshold=config.get("FALLBACK_THRESHOLD", 0.3),
        )
        extractor = RandomCharacteristicExtractor(
            catalog,
            min_tags=config.get("MIN_OBSERVED_TAGS", 3),
            max_tags=config.get("MAX_OBSERVED_TAGS", 5),
            rng=rng,
        )
        detector = LocalDetector(LocalPlantIdentifier(catalog, extractor=extractor, matcher=matcher))

    location_data = config.get("LOCATION_DATA")
    tracker = LocationTracker(
        StaticLocationProvider(Location.from_dict(location_data) if location_data else None)
    )
    tracker.refresh()

    if history is None:
        history_path = config.get("HISTORY_PATH")
        history = JsonLinesHistory(history_path) if history_path else InMemoryHistory()

    return AcquisitionPipeline(
        detector,
        catalog,
        camera=CameraSession(config.get("CAMERA_SOURCE", 0)),
        location_tracker=tracker,
        history=history,
        example_loader=ExampleAssetLoader(config.get("EXAMPLES_DIR")),
        image_format=config.get("IMAGE_FORMAT", ".jpg"),
    )

"""Common types used throughout the scanning pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Optional

ObservationSet = FrozenSet[str]


class Category(str, Enum):
    """Whether a catalog entry is a plant or something else."""

    PLANT = "plant"
    NON_PLANT = "non_plant"

    @classmethod
    def parse(cls, value: str) -> "Category":
        return cls(value.strip().lower().replace("-", "_"))


class ScanMode(str, Enum):
    """Mutually exclusive ways of acquiring an image."""

    CAMERA = "camera"
    UPLOAD = "upload"
    EXAMPLE = "example"


class CameraState(str, Enum):
    IDLE = "idle"
    STREAMING = "streaming"
    CAPTURED = "captured"


def observations(tags: Iterable[str]) -> ObservationSet:
    """Normalize an iterable of tags into an observation set."""

    return frozenset(tag.strip().lower() for tag in tags if tag and tag.strip())


@dataclass(frozen=True)
class CatalogEntry:
    """One detectable item and its trait signature."""

    id: str
    name: str
    category: Category
    description: str
    characteristics: FrozenSet[str]
    base_confidence: float
    image: Optional[str] = None

    @property
    def is_plant(self) -> bool:
        return self.category is Category.PLANT


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching an observation set against the catalog."""

    entry: CatalogEntry
    score: float
    is_fallback: bool = False


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float
    address: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"latitude": self.latitude, "longitude": self.longitude}
        if self.address:
            data["address"] = self.address
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Location":
        return cls(
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
            address=data.get("address") or None,
        )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DetectionRecord:
    """A completed detection, ready to be rendered or stored in history."""

    is_plant: bool
    confidence: float
    plant_name: Optional[str] = None
    location: Optional[Location] = None
    timestamp: datetime = field(default_factory=_utcnow)

    @classmethod
    def from_match(
        cls,
        result: MatchResult,
        location: Optional[Location] = None,
        timestamp: Optional[datetime] = None,
    ) -> "DetectionRecord":
        is_plant = result.entry.is_plant
        return cls(
            is_plant=is_plant,
            confidence=result.score,
            plant_name=result.entry.name if is_plant else None,
            location=location,
            timestamp=timestamp or _utcnow(),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the wire names of the detection endpoint."""

        data: Dict[str, Any] = {
            "isPlant": self.is_plant,
            "confidence": self.confidence,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.plant_name is not None:
            data["plantName"] = self.plant_name
        if self.location is not None:
            data["location"] = self.location.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DetectionRecord":
        is_plant = bool(data["isPlant"])
        raw_location = data.get("location")
        raw_timestamp = data.get("timestamp")
        if raw_timestamp:
            timestamp = datetime.fromisoformat(str(raw_timestamp).replace("Z", "+00:00"))
        else:
            timestamp = _utcnow()
        return cls(
            is_plant=is_plant,
            confidence=float(data.get("confidence", 0.0)),
            plant_name=data.get("plantName") if is_plant else None,
            location=Location.from_dict(raw_location) if raw_location else None,
            timestamp=timestamp,
        )

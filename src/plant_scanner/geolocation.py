"""Best-effort geolocation for detection records."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from .errors import LocationUnavailable
from .logging_config import get_logger
from .types import Location

logger = get_logger(__name__)


class LocationProvider(ABC):
    @abstractmethod
    def locate(self) -> Location:
        """Return the current position or raise ``LocationUnavailable``."""


class StaticLocationProvider(LocationProvider):
    """Reports a fixed, configured position."""

    def __init__(self, location: Optional[Location]) -> None:
        self.location = location

    def locate(self) -> Location:
        if self.location is None:
            raise LocationUnavailable("No location configured")
        return self.location


class LocationTracker:
    """Caches the last known position; failures are logged, never raised."""

    def __init__(self, provider: Optional[LocationProvider] = None) -> None:
        self.provider = provider
        self._last: Optional[Location] = None

    def refresh(self) -> Optional[Location]:
        if self.provider is None:
            return self._last
        try:
            self._last = self.provider.locate()
        except LocationUnavailable as exc:
            logger.warning("Geolocation unavailable: %s", exc)
        return self._last

    def current(self) -> Optional[Location]:
        return self._last

"""Exceptions raised by the scanning pipeline."""

from __future__ import annotations

from typing import Optional


class PlantScannerError(Exception):
    """Base class for every error raised by this package."""


class CatalogError(PlantScannerError):
    """The catalog data source is malformed or violates an invariant."""


class DeviceUnavailable(PlantScannerError):
    """Camera permission denied, no device, or the device stopped delivering frames."""


class DecodeFailure(PlantScannerError):
    """An uploaded or example image could not be decoded."""


class SubmissionFailure(PlantScannerError):
    """The detection call failed."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class Busy(PlantScannerError):
    """A submission was attempted while another one is still in flight."""


class LocationUnavailable(PlantScannerError):
    """Geolocation is unavailable or was denied."""

"""Detectors that turn an encoded image payload into a detection record."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import requests

from .auth import CredentialProvider
from .errors import SubmissionFailure
from .identifier import LocalPlantIdentifier
from .image_utils import decode_image
from .logging_config import get_logger
from .types import DetectionRecord, Location

logger = get_logger(__name__)

GENERIC_FAILURE = "Detection failed"


class Detector(ABC):
    """Runs one detection for an encoded image blob."""

    @abstractmethod
    def detect(self, image_blob: bytes, location: Optional[Location] = None) -> DetectionRecord:
        """Return the detection record for the payload."""


class LocalDetector(Detector):
    """Self-contained detection: decode, extract, then match."""

    def __init__(self, identifier: LocalPlantIdentifier) -> None:
        self.identifier = identifier

    def detect(self, image_blob: bytes, location: Optional[Location] = None) -> DetectionRecord:
        image = decode_image(image_blob)
        result = self.identifier.analyze(image)
        logger.info(
            "Matched %s (score=%.3f, fallback=%s)",
            result.entry.id,
            result.score,
            result.is_fallback,
        )
        return DetectionRecord.from_match(result, location=location)


class RemoteDetector(Detector):
    """Posts the payload to a remote detection endpoint."""

    def __init__(
        self,
        endpoint: str,
        credentials: CredentialProvider,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
    ) -> None:
        self.endpoint = endpoint
        self.credentials = credentials
        self.session = session or requests.Session()
        self.timeout = timeout

    def detect(self, image_blob: bytes, location: Optional[Location] = None) -> DetectionRecord:
        token = self.credentials()
        if not token:
            raise SubmissionFailure("Not authenticated")

        data: Dict[str, str] = {}
        if location is not None:
            data["latitude"] = str(location.latitude)
            data["longitude"] = str(location.longitude)

        try:
            response = self.session.post(
                self.endpoint,
                headers={"Authorization": f"Bearer {token}"},
                files={"image": ("capture", image_blob)},
                data=data,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as exc:
            logger.warning("Detection request to %s failed: %s", self.endpoint, exc)
            raise SubmissionFailure(GENERIC_FAILURE) from exc

        if not response.ok:
            message = self._error_message(response)
            logger.warning("Detection endpoint returned HTTP %s: %s", response.status_code, message)
            raise SubmissionFailure(message, status_code=response.status_code)

        try:
            return DetectionRecord.from_dict(response.json())
        except (ValueError, KeyError, TypeError) as exc:
            raise SubmissionFailure("Malformed detection response", status_code=response.status_code) from exc

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            payload: Any = response.json()
        except ValueError:
            return GENERIC_FAILURE
        if isinstance(payload, dict) and payload.get("message"):
            return str(payload["message"])
        return GENERIC_FAILURE

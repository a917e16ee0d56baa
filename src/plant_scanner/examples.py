"""Loads the canned example images attached to catalog entries."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import numpy as np
import requests

from .errors import DecodeFailure
from .image_utils import decode_image
from .logging_config import get_logger
from .types import CatalogEntry

logger = get_logger(__name__)

LOAD_FAILURE = "Failed to load example image"


class ExampleAssetLoader:
    """Fetches an entry's example asset from disk or over HTTP and decodes it."""

    def __init__(
        self,
        base_dir: Optional[Union[str, Path]] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_dir = Path(base_dir) if base_dir else None
        self.session = session or requests.Session()
        self.timeout = timeout

    def load(self, entry: CatalogEntry) -> np.ndarray:
        if not entry.image:
            raise DecodeFailure(f"{LOAD_FAILURE}: {entry.id} has no example image")
        if entry.image.startswith(("http://", "https://")):
            data = self._fetch(entry.image)
        else:
            data = self._read(entry.image)
        return decode_image(data)

    def _fetch(self, url: str) -> bytes:
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as exc:
            logger.warning("Example download from %s failed: %s", url, exc)
            raise DecodeFailure(LOAD_FAILURE) from exc
        return response.content

    def _read(self, reference: str) -> bytes:
        path = Path(reference)
        if not path.is_absolute() and self.base_dir is not None:
            path = self.base_dir / path
        try:
            return path.read_bytes()
        except OSError as exc:
            raise DecodeFailure(f"{LOAD_FAILURE}: {path}") from exc

"""Exclusive ownership of a video capture device."""

from __future__ import annotations

from typing import Any, Callable, Optional, Union

import cv2
import numpy as np

from .errors import DeviceUnavailable
from .logging_config import get_logger

logger = get_logger(__name__)

DeviceFactory = Callable[[Union[int, str]], Any]


def _normalize_source(source: Union[int, str]) -> Union[int, str]:
    if isinstance(source, str) and source.strip().isdigit():
        return int(source.strip())
    return source


class CameraSession:
    """Opens a device, reads frames from it and guarantees its release.

    The device object follows the ``cv2.VideoCapture`` interface
    (``isOpened``, ``read``, ``release``).
    """

    def __init__(
        self,
        source: Union[int, str] = 0,
        device_factory: Optional[DeviceFactory] = None,
    ) -> None:
        self.source = _normalize_source(source)
        self._factory = device_factory or cv2.VideoCapture
        self._device: Any = None

    @property
    def is_open(self) -> bool:
        return self._device is not None

    def open(self) -> None:
        if self._device is not None:
            return
        try:
            device = self._factory(self.source)
        except (cv2.error, OSError, RuntimeError) as exc:
            raise DeviceUnavailable(f"Unable to open camera {self.source!r}: {exc}") from exc
        if device is None:
            raise DeviceUnavailable(f"No camera available at {self.source!r}")
        if not device.isOpened():
            device.release()
            raise DeviceUnavailable(f"Camera {self.source!r} could not be opened")
        self._device = device
        logger.debug("Camera %r opened", self.source)

    def read_frame(self) -> np.ndarray:
        if self._device is None:
            raise DeviceUnavailable("Camera is not streaming")
        ok, frame = self._device.read()
        if not ok or frame is None:
            raise DeviceUnavailable(f"Camera {self.source!r} returned no frame")
        return frame

    def release(self) -> None:
        device, self._device = self._device, None
        if device is not None:
            device.release()
            logger.debug("Camera %r released", self.source)

    def __enter__(self) -> "CameraSession":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

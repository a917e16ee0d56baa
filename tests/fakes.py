"""Test doubles for devices, detectors and HTTP sessions."""

from __future__ import annotations

import threading
from typing import Any, Dict, List, Optional

import numpy as np
import requests

from plant_scanner.catalog import Catalog
from plant_scanner.detection import Detector
from plant_scanner.types import Category, CatalogEntry, DetectionRecord, Location, observations

from . import image_factory as factory


def make_entry(
    entry_id: str,
    characteristics,
    confidence: float = 0.9,
    category: Category = Category.PLANT,
    image: Optional[str] = None,
) -> CatalogEntry:
    return CatalogEntry(
        id=entry_id,
        name=entry_id.replace("-", " ").title(),
        category=category,
        description=f"{entry_id} description",
        characteristics=observations(characteristics),
        base_confidence=confidence,
        image=image,
    )


def rose_catalog() -> Catalog:
    return Catalog([make_entry("rose", ["petals", "thorns", "green stem"], 0.92)])


class FakeDevice:
    """Mimics the ``cv2.VideoCapture`` interface."""

    def __init__(self, source, opened: bool = True, frame: Optional[np.ndarray] = None, ret: bool = True):
        self.source = source
        self._opened = opened
        self._ret = ret
        self._frame = frame if frame is not None else factory.create_flower_image()
        self.released = False

    def isOpened(self) -> bool:
        return self._opened and not self.released

    def read(self):
        return self._ret, self._frame

    def release(self) -> None:
        self.released = True


class DeviceFactory:
    def __init__(self, **device_kwargs: Any) -> None:
        self.device_kwargs = device_kwargs
        self.devices: List[FakeDevice] = []

    def __call__(self, source) -> FakeDevice:
        device = FakeDevice(source, **self.device_kwargs)
        self.devices.append(device)
        return device

    @property
    def active_tracks(self) -> int:
        return sum(1 for device in self.devices if device.isOpened())


class RecordingDetector(Detector):
    """Returns a fixed plant record and remembers what it was given."""

    def __init__(self, record: Optional[DetectionRecord] = None) -> None:
        self.record = record or DetectionRecord(is_plant=True, confidence=0.8, plant_name="Rose")
        self.calls: List[tuple] = []

    def detect(self, image_blob: bytes, location: Optional[Location] = None) -> DetectionRecord:
        self.calls.append((image_blob, location))
        return self.record


class BlockingDetector(RecordingDetector):
    """Blocks inside ``detect`` until released, to hold a submission in flight."""

    def __init__(self, record: Optional[DetectionRecord] = None) -> None:
        super().__init__(record)
        self.entered = threading.Event()
        self.proceed = threading.Event()
        self.on_enter = None

    def detect(self, image_blob: bytes, location: Optional[Location] = None) -> DetectionRecord:
        self.entered.set()
        if self.on_enter is not None:
            self.on_enter()
        self.proceed.wait(timeout=5)
        return super().detect(image_blob, location)


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, content: bytes = b"") -> None:
        self.status_code = status_code
        self._payload = payload
        self.content = content

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload

    def raise_for_status(self) -> None:
        if not self.ok:
            raise requests.exceptions.HTTPError(f"HTTP {self.status_code}", response=self)


class FakeSession:
    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[Exception] = None) -> None:
        self.response = response or FakeResponse()
        self.error = error
        self.requests: List[Dict[str, Any]] = []

    def _handle(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.requests.append({"method": method, "url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._handle("POST", url, **kwargs)

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._handle("GET", url, **kwargs)

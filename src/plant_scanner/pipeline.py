"""Acquisition pipeline: camera, upload and example modes feeding one detector."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Union

from .camera import CameraSession
from .catalog import Catalog
from .detection import Detector
from .errors import Busy, DecodeFailure, DeviceUnavailable, SubmissionFailure
from .examples import ExampleAssetLoader
from .geolocation import LocationTracker
from .history import HistorySink
from .image_utils import decode_image, encode_image
from .logging_config import get_logger
from .types import CameraState, DetectionRecord, Location, ScanMode

logger = get_logger(__name__)

CAMERA_ERROR = "Unable to access camera. Please check permissions."
CAPTURE_ERROR = "Error capturing image"
UPLOAD_ERROR = "Error processing image"

UploadInput = Union[str, Path, bytes, bytearray, BinaryIO]


@dataclass
class ScanSession:
    """User-visible state of the scanner, shared with the rendering layer.

    ``generation`` changes on every mode switch; results that resolve under
    an older generation are discarded.
    """

    mode: ScanMode = ScanMode.CAMERA
    camera_state: CameraState = CameraState.IDLE
    generation: int = 0
    is_loading: bool = False
    result: Optional[DetectionRecord] = None
    error: str = ""


class AcquisitionPipeline:
    """Normalizes every input mode into an encoded image and submits it once."""

    def __init__(
        self,
        detector: Detector,
        catalog: Catalog,
        camera: Optional[CameraSession] = None,
        location_tracker: Optional[LocationTracker] = None,
        history: Optional[HistorySink] = None,
        example_loader: Optional[ExampleAssetLoader] = None,
        image_format: str = ".jpg",
    ) -> None:
        self.detector = detector
        self.catalog = catalog
        self.camera = camera
        self.location_tracker = location_tracker or LocationTracker()
        self.history = history
        self.example_loader = example_loader or ExampleAssetLoader()
        self.image_format = image_format
        self.session = ScanSession()
        self._submit_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Mode handling
    # ------------------------------------------------------------------

    def switch_mode(self, mode: Union[ScanMode, str]) -> None:
        """Enter ``mode``, dropping the camera stream and any pending result."""

        mode = ScanMode(mode)
        self._release_camera()
        self.session.mode = mode
        self.session.generation += 1
        self.session.is_loading = False
        self.session.result = None
        self.session.error = ""
        logger.debug("Switched to %s mode (generation %d)", mode.value, self.session.generation)

    def _ensure_mode(self, mode: ScanMode) -> None:
        if self.session.mode is not mode:
            self.switch_mode(mode)

    # ------------------------------------------------------------------
    # Camera mode
    # ------------------------------------------------------------------

    def start_camera(self) -> bool:
        self._ensure_mode(ScanMode.CAMERA)
        self.session.result = None
        if self.camera is None:
            self.session.error = CAMERA_ERROR
            return False
        try:
            self.camera.open()
        except DeviceUnavailable as exc:
            logger.warning("Camera unavailable: %s", exc)
            self.session.error = CAMERA_ERROR
            self.session.camera_state = CameraState.IDLE
            return False
        self.session.error = ""
        self.session.camera_state = CameraState.STREAMING
        return True

    def stop_camera(self) -> None:
        self._release_camera()

    def capture(self) -> Optional[DetectionRecord]:
        """Grab the current frame and submit it."""

        if self.session.mode is not ScanMode.CAMERA or self.camera is None:
            return None
        if self.session.camera_state is not CameraState.STREAMING:
            logger.debug("Capture ignored, camera is %s", self.session.camera_state.value)
            return None
        if self._submit_lock.locked():
            logger.debug("Capture ignored, a detection is already in progress")
            return None

        try:
            frame = self.camera.read_frame()
            blob = encode_image(frame, self.image_format)
        except DeviceUnavailable as exc:
            logger.warning("Camera stopped delivering frames: %s", exc)
            self._release_camera()
            self.session.error = CAMERA_ERROR
            return None
        except DecodeFailure as exc:
            logger.warning("Unable to encode captured frame: %s", exc)
            self.session.error = CAPTURE_ERROR
            return None

        self.session.camera_state = CameraState.CAPTURED
        record = self._run(blob)
        if record is not None:
            self._release_camera()
        elif self.camera.is_open:
            self.session.camera_state = CameraState.STREAMING
        return record

    def _release_camera(self) -> None:
        if self.camera is not None:
            self.camera.release()
        self.session.camera_state = CameraState.IDLE

    # ------------------------------------------------------------------
    # Upload and example modes
    # ------------------------------------------------------------------

    def upload(self, file: UploadInput) -> Optional[DetectionRecord]:
        self._ensure_mode(ScanMode.UPLOAD)
        try:
            blob = self._read_upload(file)
            decode_image(blob)
        except DecodeFailure as exc:
            logger.warning("Rejected upload: %s", exc)
            self.session.error = UPLOAD_ERROR
            return None
        return self._run(blob)

    def scan_example(self, entry_id: str) -> Optional[DetectionRecord]:
        self._ensure_mode(ScanMode.EXAMPLE)
        if entry_id not in self.catalog:
            self.session.error = f"Unknown example: {entry_id}"
            return None
        try:
            image = self.example_loader.load(self.catalog.get(entry_id))
            blob = encode_image(image, self.image_format)
        except DecodeFailure as exc:
            logger.warning("Example %s could not be loaded: %s", entry_id, exc)
            self.session.error = str(exc)
            return None
        return self._run(blob)

    @staticmethod
    def _read_upload(file: UploadInput) -> bytes:
        if isinstance(file, (bytes, bytearray)):
            return bytes(file)
        if isinstance(file, (str, Path)):
            try:
                return Path(file).read_bytes()
            except OSError as exc:
                raise DecodeFailure(f"Unable to read upload {file}: {exc}") from exc
        try:
            return file.read()
        except (OSError, ValueError) as exc:
            raise DecodeFailure(f"Unable to read upload: {exc}") from exc

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def submit(self, image_blob: bytes, location: Optional[Location] = None) -> DetectionRecord:
        """Run detection for one payload; raises ``Busy`` if one is in flight."""

        if not self._submit_lock.acquire(blocking=False):
            raise Busy("A detection is already in progress")
        try:
            if location is None:
                location = self.location_tracker.current()
            return self.detector.detect(image_blob, location)
        finally:
            self._submit_lock.release()

    def _run(self, blob: bytes) -> Optional[DetectionRecord]:
        generation = self.session.generation
        previous = (self.session.is_loading, self.session.error)
        self.session.is_loading = True
        self.session.error = ""
        try:
            record = self.submit(blob)
        except Busy:
            logger.debug("Submission ignored, a detection is already in progress")
            self.session.is_loading, self.session.error = previous
            return None
        except (DecodeFailure, SubmissionFailure) as exc:
            if generation == self.session.generation:
                self.session.is_loading = False
                self.session.error = str(exc) or UPLOAD_ERROR
            return None
        except Exception:
            if generation == self.session.generation:
                self.session.is_loading = False
            raise

        if generation != self.session.generation:
            logger.info("Discarding detection that resolved after a mode switch")
            return None

        self.session.is_loading = False
        self.session.result = record
        if self.history is not None:
            try:
                self.history.record(record)
            except OSError as exc:
                logger.warning("Unable to store detection in history: %s", exc)
        return record

    def clear_result(self) -> None:
        self.session.result = None

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def close(self) -> None:
        self._release_camera()

    def __enter__(self) -> "AcquisitionPipeline":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

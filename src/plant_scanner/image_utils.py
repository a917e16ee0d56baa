"""Utility helpers for image loading, decoding and encoding."""

from __future__ import annotations

from pathlib import Path
from typing import Union

import cv2
import numpy as np
from PIL import Image

from .errors import DecodeFailure

ImageInput = Union[str, Path, bytes, bytearray, np.ndarray, Image.Image]


def load_image(image_input: ImageInput) -> np.ndarray:
    """Load an image input into an OpenCV-compatible BGR ndarray."""

    if isinstance(image_input, np.ndarray):
        image = image_input.copy()
    elif isinstance(image_input, Image.Image):
        image = cv2.cvtColor(np.array(image_input.convert("RGB")), cv2.COLOR_RGB2BGR)
    elif isinstance(image_input, (bytes, bytearray)):
        image = decode_image(bytes(image_input))
    else:
        path = Path(image_input)
        if not path.exists():
            raise FileNotFoundError(f"Image path not found: {path}")
        image = cv2.imread(str(path), cv2.IMREAD_COLOR)
        if image is None:
            raise DecodeFailure(f"Unable to read image from path: {path}")

    return ensure_color(image)


def decode_image(data: bytes) -> np.ndarray:
    """Decode an encoded image blob onto a BGR raster."""

    if not data:
        raise DecodeFailure("Image payload is empty")
    raw = np.frombuffer(data, dtype=np.uint8)
    image = cv2.imdecode(raw, cv2.IMREAD_COLOR)
    if image is None:
        raise DecodeFailure("Unable to decode image payload")
    return ensure_color(image)


def encode_image(image: np.ndarray, ext: str = ".jpg") -> bytes:
    """Encode a raster into an image blob (``.jpg`` or ``.png``)."""

    if image is None or image.size == 0:
        raise DecodeFailure("Cannot encode an empty frame")
    ok, buffer = cv2.imencode(ext, ensure_color(image))
    if not ok:
        raise DecodeFailure(f"Unable to encode frame as {ext}")
    return buffer.tobytes()


def ensure_color(image: np.ndarray) -> np.ndarray:
    """Ensure the ndarray is three-channel BGR."""

    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    return image

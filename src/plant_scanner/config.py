# config.py
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv

# Load environment variables from .env file.
load_dotenv()


def _optional(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


def _parse_location(location_str: Optional[str]) -> Optional[Dict[str, float]]:
    if not location_str:
        return None
    try:
        lat_str, lon_str = location_str.split(",")
        return {"latitude": float(lat_str), "longitude": float(lon_str)}
    except ValueError:
        return None


def load_config() -> Dict[str, Any]:
    """
    Loads configuration from environment variables and returns a dictionary.
    """
    seed = _optional("RANDOM_SEED")

    config = {
        # General Settings
        "DEBUG_MODE": os.getenv("DEBUG_MODE", "False").lower() == "true",
        "CATALOG_PATH": _optional("CATALOG_PATH"),

        # Matching Settings
        "FALLBACK_THRESHOLD": float(os.getenv("FALLBACK_THRESHOLD", 0.3)),
        "MIN_OBSERVED_TAGS": int(os.getenv("MIN_OBSERVED_TAGS", 3)),
        "MAX_OBSERVED_TAGS": int(os.getenv("MAX_OBSERVED_TAGS", 5)),
        "RANDOM_SEED": int(seed) if seed is not None else None,

        # Acquisition Settings
        "CAMERA_SOURCE": os.getenv("CAMERA_SOURCE", "0"),
        "IMAGE_FORMAT": os.getenv("IMAGE_FORMAT", ".jpg"),
        "EXAMPLES_DIR": _optional("EXAMPLES_DIR"),

        # Remote Detection Settings (unset = local matching)
        "DETECTION_ENDPOINT": _optional("DETECTION_ENDPOINT"),
        "REQUEST_TIMEOUT": float(os.getenv("REQUEST_TIMEOUT", 30)),

        # GPS Location
        "LOCATION_DATA": _parse_location(_optional("LOCATION_DATA")),

        # History
        "HISTORY_PATH": _optional("HISTORY_PATH"),
    }
    return config


if __name__ == "__main__":
    # For testing purposes, print the configuration
    from pprint import pprint

    pprint(load_config())

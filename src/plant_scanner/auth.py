"""Bearer credential providers for the detection endpoint."""

from __future__ import annotations

import os
from typing import Callable, Optional

CredentialProvider = Callable[[], Optional[str]]


class StaticCredentials:
    def __init__(self, token: Optional[str]) -> None:
        self._token = token

    def __call__(self) -> Optional[str]:
        return self._token


class EnvCredentials:
    """Reads the token from an environment variable on every call."""

    def __init__(self, var: str = "PLANT_SCANNER_TOKEN") -> None:
        self.var = var

    def __call__(self) -> Optional[str]:
        return os.getenv(self.var) or None

"""Sinks that receive completed detection records."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Protocol, Union

from .types import DetectionRecord


class HistorySink(Protocol):
    def record(self, detection: DetectionRecord) -> None:
        ...


class InMemoryHistory:
    def __init__(self) -> None:
        self._records: List[DetectionRecord] = []

    def record(self, detection: DetectionRecord) -> None:
        self._records.append(detection)

    def entries(self) -> List[DetectionRecord]:
        return list(self._records)


class JsonLinesHistory:
    """Appends one JSON object per detection; reads back newest first."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def record(self, detection: DetectionRecord) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(json.dumps(detection.to_dict(), ensure_ascii=False) + "\n")

    def entries(self) -> List[DetectionRecord]:
        if not self.path.exists():
            return []
        with open(self.path, "r", encoding="utf-8") as f:
            records = [DetectionRecord.from_dict(json.loads(line)) for line in f if line.strip()]
        records.sort(key=lambda record: record.timestamp, reverse=True)
        return records

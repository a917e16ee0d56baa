"""Static registry of detectable plants and non-plants."""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from .errors import CatalogError
from .logging_config import get_logger
from .types import Category, CatalogEntry

logger = get_logger(__name__)

CATALOG_VERSION = 1


class Catalog:
    """Immutable, ordered collection of catalog entries.

    Declaration order is preserved because the matcher breaks score ties by
    it. Adding entries means building a new catalog.
    """

    def __init__(self, entries: Sequence[CatalogEntry]) -> None:
        self._entries: Tuple[CatalogEntry, ...] = tuple(entries)
        self._by_id: Dict[str, CatalogEntry] = {}
        for entry in self._entries:
            if entry.id in self._by_id:
                raise CatalogError(f"Duplicate catalog id: {entry.id}")
            if not entry.characteristics:
                raise CatalogError(f"Catalog entry {entry.id} has no characteristics")
            if not 0.0 < entry.base_confidence <= 1.0:
                raise CatalogError(
                    f"Catalog entry {entry.id} has base confidence {entry.base_confidence} outside (0, 1]"
                )
            self._by_id[entry.id] = entry

    def all_entries(self) -> Tuple[CatalogEntry, ...]:
        return self._entries

    def get(self, entry_id: str) -> CatalogEntry:
        return self._by_id[entry_id]

    def plants(self) -> List[CatalogEntry]:
        return [entry for entry in self._entries if entry.category is Category.PLANT]

    def non_plants(self) -> List[CatalogEntry]:
        return [entry for entry in self._entries if entry.category is Category.NON_PLANT]

    def characteristic_universe(self) -> Tuple[str, ...]:
        """Distinct characteristic tags, entry by entry in catalog order, alphabetical within an entry."""

        seen: Dict[str, None] = {}
        for entry in self._entries:
            for tag in sorted(entry.characteristics):
                seen.setdefault(tag, None)
        return tuple(seen)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._by_id


def entry_from_dict(data: Dict[str, Any]) -> CatalogEntry:
    """Build a catalog entry from one record of the catalog document."""

    try:
        characteristics = frozenset(
            str(tag).strip().lower() for tag in data["characteristics"] if str(tag).strip()
        )
        return CatalogEntry(
            id=str(data["id"]),
            name=str(data["name"]),
            category=Category.parse(str(data["category"])),
            description=str(data.get("description", "")),
            characteristics=characteristics,
            base_confidence=float(data["confidence"]),
            image=data.get("image") or None,
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise CatalogError(f"Malformed catalog entry {data!r}: {exc}") from exc


def parse_catalog(document: Dict[str, Any]) -> Catalog:
    if not isinstance(document, dict) or "entries" not in document:
        raise CatalogError("Catalog document must be an object with an 'entries' list")
    version = document.get("version", CATALOG_VERSION)
    if version != CATALOG_VERSION:
        raise CatalogError(f"Unsupported catalog version: {version}")
    return Catalog([entry_from_dict(record) for record in document["entries"]])


def load_catalog(path: Optional[Union[str, Path]] = None) -> Catalog:
    """Load the catalog from ``path`` or from the packaged default."""

    try:
        if path is None:
            raw = resources.files("plant_scanner").joinpath("data").joinpath("catalog.json").read_text(encoding="utf-8")
        else:
            raw = Path(path).read_text(encoding="utf-8")
        document = json.loads(raw)
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogError(f"Unable to read catalog from {path or 'package data'}: {exc}") from exc

    catalog = parse_catalog(document)
    logger.debug("Loaded %d catalog entries from %s", len(catalog), path or "package data")
    return catalog

"""Read-only project catalog and its dataset loader."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Iterator, Sequence

from pydantic import ValidationError

from .models import ProjectModel, ProjectRecord

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path("data") / "projects.json"


class Catalog(Sequence[ProjectRecord]):
    """Immutable collection of projects, built once and shared by every request."""

    def __init__(self, records: Iterable[ProjectRecord] = (), raw_entries: Iterable[dict[str, Any]] = ()) -> None:
        self._records: tuple[ProjectRecord, ...] = tuple(records)
        self._raw: tuple[dict[str, Any], ...] = tuple(raw_entries)

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index):  # type: ignore[override]
        return self._records[index]

    def __iter__(self) -> Iterator[ProjectRecord]:
        return iter(self._records)

    @property
    def records(self) -> tuple[ProjectRecord, ...]:
        return self._records

    def as_payload(self) -> list[dict[str, Any]]:
        """Return the entries exactly as they were read from the dataset."""
        return list(self._raw)

    @classmethod
    def empty(cls) -> "Catalog":
        return cls()

    @classmethod
    def from_entries(cls, entries: Iterable[Any]) -> "Catalog":
        records: list[ProjectRecord] = []
        raw_entries: list[dict[str, Any]] = []
        for position, entry in enumerate(entries):
            if not isinstance(entry, dict):
                logger.warning("Skipping catalog entry %d: expected an object, got %s", position, type(entry).__name__)
                continue
            try:
                model = ProjectModel.model_validate(entry)
            except ValidationError as exc:
                logger.warning("Skipping catalog entry %d: %s", position, exc)
                continue
            records.append(model.to_record())
            raw_entries.append(entry)
        return cls(records, raw_entries)

    @classmethod
    def from_json(cls, path: str | Path) -> "Catalog":
        """Create a catalog from a JSON array on disk."""

        with open(path, "r", encoding="utf-8") as handle:
            entries = json.load(handle)
        if not isinstance(entries, list):
            raise ValueError(f"Catalog file '{path}' must contain a JSON array")
        return cls.from_entries(entries)


def load_catalog(path: str | Path | None = None) -> Catalog:
    """Load the catalog at startup, degrading to an empty one if the file is unusable."""
    resolved = Path(path) if path else DEFAULT_CATALOG_PATH
    try:
        catalog = Catalog.from_json(resolved)
    except (OSError, ValueError) as exc:
        logger.warning("Could not read %s, using an empty catalog: %s", resolved, exc)
        return Catalog.empty()
    logger.info("Loaded %d projects from %s", len(catalog), resolved)
    return catalog


__all__ = ["Catalog", "DEFAULT_CATALOG_PATH", "load_catalog"]

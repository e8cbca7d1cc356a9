"""Capacity-bounded history of generated websites, newest first."""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError as RecordValidationError

from webcraft.core.errors import DuplicateArtifactError
from webcraft.core.models import GenerationResult
from webcraft.utils.logger import logger

DEFAULT_CAPACITY = 50
ARTIFACTS_FILENAME = "generated-websites.json"


class ArtifactStore:
    """
    In-memory history backed by a pluggable durable medium.

    Subclasses override `_read` and `_write`; everything else (ordering,
    eviction, id uniqueness) lives here so every backend behaves the same.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._items: List[GenerationResult] = []
        self._lock = threading.Lock()

    # -- durable medium -------------------------------------------------
    def _read(self) -> Optional[List[dict]]:
        """Return stored records, or None if nothing has been stored yet."""
        return None

    def _write(self, records: List[dict]) -> None:
        pass

    # -- public API -----------------------------------------------------
    def load(self) -> List[GenerationResult]:
        """Restore from the durable medium. Malformed state counts as empty."""
        try:
            raw = self._read()
        except (OSError, ValueError) as exc:
            logger.warning("Artifact history unreadable, starting empty: {}", exc)
            raw = None

        items: List[GenerationResult] = []
        if raw is not None:
            items = self._parse(raw)

        with self._lock:
            self._items = items[: self.capacity]
            return list(self._items)

    def _parse(self, raw: object) -> List[GenerationResult]:
        if not isinstance(raw, list):
            logger.warning("Artifact history is not a list, starting empty")
            return []
        try:
            items = [GenerationResult.model_validate(record) for record in raw]
        except RecordValidationError as exc:
            logger.warning("Artifact history has malformed records, starting empty: {}", exc.error_count())
            return []
        if len({item.id for item in items}) != len(items):
            logger.warning("Artifact history has duplicate ids, starting empty")
            return []
        return items

    def append(self, result: GenerationResult) -> None:
        with self._lock:
            if any(item.id == result.id for item in self._items):
                raise DuplicateArtifactError(f"Artifact {result.id} already stored")
            items = [result, *self._items]
            evicted = len(items) - self.capacity
            if evicted > 0:
                del items[self.capacity:]
                logger.debug("Evicted {} oldest artifact(s)", evicted)
            self._write([item.to_record() for item in items])
            self._items = items

    def list(self) -> List[GenerationResult]:
        with self._lock:
            return list(self._items)

    def select(self, artifact_id: Optional[str]) -> Optional[GenerationResult]:
        if artifact_id is None:
            return None
        with self._lock:
            for item in self._items:
                if item.id == artifact_id:
                    return item
        return None

    def clear(self) -> None:
        with self._lock:
            self._write([])
            self._items = []

    def __len__(self) -> int:
        return len(self._items)


class MemoryArtifactStore(ArtifactStore):
    """History that lives only as long as the process."""


class JsonArtifactStore(ArtifactStore):
    """History persisted to a JSON file, rewritten atomically on every change."""

    def __init__(self, path: Path, capacity: int = DEFAULT_CAPACITY) -> None:
        super().__init__(capacity=capacity)
        self.path = Path(path)

    @classmethod
    def in_directory(cls, directory: Path, capacity: int = DEFAULT_CAPACITY) -> "JsonArtifactStore":
        return cls(Path(directory) / ARTIFACTS_FILENAME, capacity=capacity)

    def _read(self) -> Optional[List[dict]]:
        if not self.path.exists():
            return None
        with self.path.open("r", encoding="utf-8") as fp:
            return json.load(fp)

    def _write(self, records: List[dict]) -> None:
        write_json_atomic(self.path, records)


def write_json_atomic(path: Path, data: object) -> None:
    """Write JSON to a temp file in the same directory, then swap it in."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fp:
            json.dump(data, fp, ensure_ascii=False, indent=2)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


__all__ = [
    "ArtifactStore",
    "MemoryArtifactStore",
    "JsonArtifactStore",
    "write_json_atomic",
    "DEFAULT_CAPACITY",
    "ARTIFACTS_FILENAME",
]

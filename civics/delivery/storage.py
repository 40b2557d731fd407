"""
Storage port for persisted blobs.

Two independently keyed blobs are persisted (settings and progress). Stores
talk to a StoragePort so their logic can run against the in-memory double
in tests and against JSON files on disk in real use.

Files are stored in ~/.civics_coach/ by default, one {key}.json per blob.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Protocol, TypeVar, runtime_checkable

from loguru import logger
from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


@runtime_checkable
class StoragePort(Protocol):
    """Key/value storage for serialized blobs."""

    def read(self, key: str) -> str | None:
        """Return the stored blob, or None if nothing is stored under key."""
        ...

    def write(self, key: str, blob: str) -> None:
        """Store blob under key, replacing any previous value."""
        ...


class InMemoryStorage:
    """Dictionary-backed storage for tests and ephemeral use."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.blobs: dict[str, str] = dict(initial or {})
        self.writes = 0

    def read(self, key: str) -> str | None:
        return self.blobs.get(key)

    def write(self, key: str, blob: str) -> None:
        self.writes += 1
        self.blobs[key] = blob


class JsonFileStorage:
    """
    File-backed storage, one JSON file per key.

    Writes go to a temporary file in the same directory and are renamed
    into place so a crash never leaves a half-written blob.
    """

    DEFAULT_DIR = Path.home() / ".civics_coach"

    def __init__(self, data_dir: Path | None = None):
        self.data_dir = Path(data_dir) if data_dir is not None else self.DEFAULT_DIR
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            # reads and writes fail per call and are absorbed by load_model/save_model
            logger.warning(f"Could not create data dir {self.data_dir}: {e}")
        logger.debug(f"JsonFileStorage initialized at {self.data_dir}")

    def _path(self, key: str) -> Path:
        if not key or any(sep in key for sep in ("/", "\\")) or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.data_dir / f"{key}.json"

    def read(self, key: str) -> str | None:
        filepath = self._path(key)
        if not filepath.exists():
            return None

        with open(filepath, "r", encoding="utf-8") as f:
            return f.read()

    def write(self, key: str, blob: str) -> None:
        filepath = self._path(key)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(blob)
            os.replace(tmp_name, filepath)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


def load_model(storage: StoragePort, key: str, model_cls: type[ModelT], default: ModelT) -> ModelT:
    """
    Load and validate a pydantic model stored under key.

    Missing or corrupt data yields ``default``; the failure is logged, never raised.
    """
    try:
        blob = storage.read(key)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read '{key}', using defaults: {e}")
        return default

    if blob is None:
        return default

    try:
        return model_cls.model_validate_json(blob)
    except ValidationError as e:
        logger.warning(f"Stored '{key}' is corrupt, using defaults: {e.error_count()} error(s)")
        return default


def save_model(storage: StoragePort, key: str, model: BaseModel) -> bool:
    """Persist a model under key. Returns False (and logs) if the write failed."""
    try:
        storage.write(key, model.model_dump_json())
    except (OSError, ValueError, TypeError) as e:
        logger.error(f"Failed to save '{key}': {e}")
        return False
    return True

"""Key-value persistence primitives and the snapshot codec.

The gameshow treats storage as an external string-keyed, string-valued
collaborator. Two implementations ship with the package: an in-memory store
that several managers can share inside one process, and a JSON file store
that lets separate processes (a host laptop and a projector screen, for
example) follow the same game.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
import tempfile
from threading import Lock
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from gameshow_app.core.models import GameshowSnapshot

logger = logging.getLogger(__name__)

_SNAPSHOT_ADAPTER = TypeAdapter(GameshowSnapshot)


class SnapshotDecodeError(Exception):
    """Raised when a stored snapshot cannot be parsed."""


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryStore:
    """Dictionary-backed store; share one instance to simulate several tabs."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})
        self._lock = Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._values[key] = value


class StorageFileError(Exception):
    """Raised when the storage file exists but cannot be read as a JSON object."""


class JsonFileStore:
    """Persists every key into a single JSON object on disk.

    The file is re-read on each ``get`` so that writes made by another process
    become visible, and replaced whole on each ``set`` (last writer wins).
    Writes go through a temporary file and ``os.replace`` so readers never see
    a half-written file. ``set`` refuses to overwrite a file it cannot read,
    since that would drop keys written by other processes.
    """

    def __init__(self, file_path: Path) -> None:
        self._path = Path(file_path).resolve()
        self._lock = Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            try:
                return self._read_all().get(key)
            except StorageFileError:
                logger.warning("Ignoring unreadable storage file %s", self._path, exc_info=True)
                return None

    def set(self, key: str, value: str) -> None:
        with self._lock:
            values = self._read_all()
            values[key] = value
            self._write_all(values)

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        text = self._path.read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StorageFileError(f"Storage file {self._path} is not valid JSON.") from exc
        if not isinstance(data, dict):
            raise StorageFileError(f"Storage file {self._path} does not hold a JSON object.")
        return {str(key): str(value) for key, value in data.items()}

    def _write_all(self, values: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(values, handle)
            os.replace(temp_name, self._path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise


def encode_snapshot(snapshot: GameshowSnapshot) -> str:
    return _SNAPSHOT_ADAPTER.dump_json(snapshot).decode("utf-8")


def decode_snapshot(text: str) -> GameshowSnapshot:
    """Parse a stored snapshot; missing collections fall back to empty ones."""
    try:
        return _SNAPSHOT_ADAPTER.validate_json(text)
    except ValidationError as exc:
        raise SnapshotDecodeError(f"Stored gameshow state is invalid: {exc}") from exc

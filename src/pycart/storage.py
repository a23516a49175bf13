"""Persistent key/value storage for cart snapshots.

Both implementations store plain strings under string keys, the same
contract a browser's ``localStorage`` offers.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from pycart.exceptions import CartStorageError

_logger = logging.getLogger(__name__)


class PersistentStore(Protocol):
    """Structural interface for snapshot storage."""

    def read(self, key: str) -> str | None:
        ...

    def write(self, key: str, value: str) -> None:
        ...


class MemoryStorage:
    """Process-local storage. Useful for tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self._data.get(key)

    def write(self, key: str, value: str) -> None:
        self._data[key] = value


class FileStorage:
    """Storage backed by a single JSON object file.

    Every write rewrites the whole file through a temporary file and an
    atomic rename, so a crash never leaves a half-written snapshot.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError):
            _logger.warning("Could not read storage file %s", self._path, exc_info=True)
            return {}

        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            _logger.warning("Storage file %s is not valid JSON; ignoring it", self._path)
            return {}
        if not isinstance(data, dict):
            _logger.warning("Storage file %s does not hold an object; ignoring it", self._path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def read(self, key: str) -> str | None:
        return self._load().get(key)

    def write(self, key: str, value: str) -> None:
        """Store *value* under *key*.

        Raises
        ------
        CartStorageError
            If the file cannot be written.
        """
        data = self._load()
        data[key] = value
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, ensure_ascii=False)
                os.replace(tmp_name, self._path)
            except BaseException:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise CartStorageError(f"Could not write {self._path}: {exc}") from exc


def storage_for_config(storage_path: str | None) -> PersistentStore:
    """Return file-backed storage when a path is configured, memory otherwise."""
    if storage_path:
        return FileStorage(storage_path)
    return MemoryStorage()

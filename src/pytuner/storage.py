"""Durable blob storage for preferences and profiles.

A blob is a JSON object stored under a fixed identifier (``"preferences"``,
``"profiles"``).  Reads and writes are atomic at blob granularity.
"""

from __future__ import annotations

import contextlib
import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol

from pytuner.exceptions import TunerStorageError

_logger = logging.getLogger(__name__)


class BlobStorage(Protocol):
    """Structural storage interface used by the preference and profile layers.

    Implementations raise :class:`TunerStorageError` on failure.
    """

    def read(self, key: str) -> dict[str, Any] | None:
        ...

    def write(self, key: str, blob: dict[str, Any]) -> None:
        ...


class FileBlobStorage:
    """One JSON file per blob inside *directory*."""

    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory)

    @property
    def directory(self) -> Path:
        return self._dir

    def _path(self, key: str) -> Path:
        return self._dir / f"{key}.json"

    def read(self, key: str) -> dict[str, Any] | None:
        path = self._path(key)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise TunerStorageError(f"Unable to read {path}: {exc}", key=key) from exc

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise TunerStorageError(f"Invalid JSON in {path}: {exc}", key=key) from exc

        if not isinstance(data, dict):
            raise TunerStorageError(f"{path} does not hold a JSON object", key=key)
        return data

    def write(self, key: str, blob: dict[str, Any]) -> None:
        path = self._path(key)
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self._dir)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fp:
                    json.dump(blob, fp, indent=2, sort_keys=True)
                    fp.write("\n")
                os.replace(tmp_name, path)
            except BaseException:
                with contextlib.suppress(FileNotFoundError):
                    os.unlink(tmp_name)
                raise
        except (OSError, TypeError, ValueError) as exc:
            raise TunerStorageError(f"Unable to write {path}: {exc}", key=key) from exc
        _logger.debug("Wrote blob %s to %s", key, path)


class MemoryBlobStorage:
    """In-process blob storage; values are deep-copied in and out."""

    def __init__(self, initial: dict[str, dict[str, Any]] | None = None) -> None:
        self._blobs: dict[str, dict[str, Any]] = copy.deepcopy(initial) if initial else {}

    def read(self, key: str) -> dict[str, Any] | None:
        blob = self._blobs.get(key)
        return copy.deepcopy(blob) if blob is not None else None

    def write(self, key: str, blob: dict[str, Any]) -> None:
        self._blobs[key] = copy.deepcopy(blob)

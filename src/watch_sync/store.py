"""Process-wide key-value stores backing the sync state."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class StoreError(ValueError):
    """The persisted state cannot be read back."""


class KeyValueStore(Protocol):
    """Minimal preferences store: JSON-compatible values by string key."""

    def get(self, key: str, default: Any = None) -> Any: ...

    def put(self, key: str, value: Any) -> None: ...


class InMemoryStore:
    """Dict-backed store for tests and one-shot runs."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def put(self, key: str, value: Any) -> None:
        self._data[key] = value


class JsonFileStore:
    """Store persisted as one JSON object on disk.

    Every ``put`` rewrites the whole file through a temporary file and
    ``os.replace`` so readers never see a partial write. There is no
    locking between processes.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def put(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Wrote key %s to %s", key, self._path)

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path) as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise StoreError(f"Corrupt state file {self._path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StoreError(f"Expected a JSON object in {self._path}")
        return data

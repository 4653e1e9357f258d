from __future__ import annotations

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from threading import RLock
from typing import Dict, Optional

from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class KeyValueStore(ABC):
    """
    Storage area shared between the primary application and widget surfaces.

    Values are opaque byte blobs under string keys. By convention exactly one
    process writes; any number read.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """Return the blob stored under key, or None if the key is absent. Raises OSError on read failure."""

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """Store value under key, replacing any previous blob. Raises OSError on write failure."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove key if present."""


class InMemoryStore(KeyValueStore):
    """
    Thread-safe in-memory store suitable for testing and previews.
    """

    def __init__(self, initial: Optional[Dict[str, bytes]] = None) -> None:
        self._lock = RLock()
        self._items: Dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> Optional[bytes]:
        with self._lock:
            return self._items.get(key)

    def set(self, key: str, value: bytes) -> None:
        with self._lock:
            self._items[key] = bytes(value)

    def remove(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)


class JsonFileStore(KeyValueStore):
    """
    Store backed by a single JSON object file mapping keys to UTF-8 blobs.

    Writes go to a temporary file in the same directory which then replaces
    the existing file, so readers in other processes see either the old or the new
    content, never a partial write. A file holding invalid JSON reads as
    empty; a file that cannot be opened at all raises OSError.
    """

    def __init__(self, path: os.PathLike | str) -> None:
        self._path = Path(path)
        self._lock = RLock()

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> Dict[str, str]:
        try:
            with self._path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("Shared store %s is not valid JSON; treating it as empty", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Shared store %s does not hold a JSON object; treating it as empty", self._path)
            return {}
        return {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, str)}

    def _write_all(self, data: Dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=".shared-", suffix=".json", dir=self._path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp, self._path)
        except BaseException:
            try:
                os.unlink(tmp)
            except OSError:
                pass
            raise

    def get(self, key: str) -> Optional[bytes]:
        with self._lock:
            value = self._read_all().get(key)
        if value is None:
            return None
        try:
            return value.encode("utf-8")
        except UnicodeEncodeError:
            logger.warning("Value under %r in %s is not valid UTF-8 text; treating it as absent", key, self._path)
            return None

    def set(self, key: str, value: bytes) -> None:
        with self._lock:
            data = self._read_all()
            data[key] = value.decode("utf-8")
            self._write_all(data)

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._read_all()
            if data.pop(key, None) is not None:
                self._write_all(data)


# PUBLIC_INTERFACE
def get_store(settings: Optional[Settings] = None) -> KeyValueStore:
    """
    Factory to return the configured shared store based on settings.
    - memory: InMemoryStore
    - file: JsonFileStore at settings.store_path
    """
    settings = settings or get_settings()
    if settings.store_backend == "file":
        return JsonFileStore(settings.store_path)
    return InMemoryStore()

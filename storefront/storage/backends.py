"""
Key-value storage backends.

The storefront keeps its client-side state (cart, wishlist, newsletter flag)
in a flat string key-value store with synchronous get/set semantics:
- MemoryKeyValueStore for tests and ephemeral sessions
- JsonFileKeyValueStore for a per-user store on disk

Neither backend coordinates between processes. Two stores opened on the same
file overwrite each other's keys, last write wins.
"""

import json
import os
import tempfile
from typing import Dict, Optional, Protocol

from storefront import config
from storefront.errors import StorageError, ERROR_STORAGE_UNAVAILABLE
from storefront.logging import get_logger

logger = get_logger(__name__)


class KeyValueStore(Protocol):
    """String key-value store with synchronous semantics."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class MemoryKeyValueStore:
    """In-process store backed by a dict."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class JsonFileKeyValueStore:
    """
    Store persisted as one JSON object in a file.

    The file is re-read on every get so that a value written by another store
    instance on the same path is visible; writes replace the whole file.
    An unreadable or malformed file is treated as empty.
    """

    def __init__(self, path: str):
        self.path = path

    def _read_all(self) -> Dict[str, str]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Unreadable storage file {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Storage file {self.path} does not hold an object, ignoring it")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: Dict[str, str]) -> None:
        directory = os.path.dirname(self.path) or "."
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".storage-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            logger.error(f"Failed to write storage file {self.path}: {e}")
            raise StorageError(f"{ERROR_STORAGE_UNAVAILABLE}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def delete(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)


# Singleton instance
_default_store: Optional[KeyValueStore] = None


def get_default_store() -> KeyValueStore:
    """
    Get the configured key-value store (singleton).

    STOREFRONT_STORAGE selects the backend:
    - "memory": MemoryKeyValueStore
    - "file" (default): JsonFileKeyValueStore at STOREFRONT_STORAGE_PATH
    """
    global _default_store

    if _default_store is None:
        backend = config.STOREFRONT_STORAGE.lower()
        if backend == "memory":
            _default_store = MemoryKeyValueStore()
        elif backend == "file":
            _default_store = JsonFileKeyValueStore(config.STOREFRONT_STORAGE_PATH)
        else:
            raise ValueError(f"Unknown STOREFRONT_STORAGE backend: {config.STOREFRONT_STORAGE}")
        logger.info(f"Using {backend} storage backend")

    return _default_store


def reset_default_store() -> None:
    """Drop the cached store so the next call re-reads configuration."""
    global _default_store
    _default_store = None

"""Storage package: key-value backends and JSON snapshot binding."""
from .backends import (
    KeyValueStore,
    MemoryKeyValueStore,
    JsonFileKeyValueStore,
    get_default_store,
    reset_default_store,
)
from .snapshot import StorageKeys, SnapshotStorage, JsonSnapshotStorage, MemorySnapshotStorage

__all__ = [
    "KeyValueStore",
    "MemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "get_default_store",
    "reset_default_store",
    "StorageKeys",
    "SnapshotStorage",
    "JsonSnapshotStorage",
    "MemorySnapshotStorage",
]

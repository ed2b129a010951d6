"""Snapshot persistence: one JSON document under a fixed key."""

import json
from typing import Any, Optional, Protocol

from storefront.logging import get_logger
from .backends import KeyValueStore

logger = get_logger(__name__)


class StorageKeys:
    """Fixed keys for client-side state."""

    CART = "zen-z-cart"
    WISHLIST = "zen-z-wishlist"
    NEWSLETTER = "gen-zee-newsletter-subscribed"
    RATE_LIMIT = "rateLimit_"  # rateLimit_{action}

    @staticmethod
    def rate_limit_key(action: str) -> str:
        return f"{StorageKeys.RATE_LIMIT}{action}"


class SnapshotStorage(Protocol):
    """Load/save capability used by the stores."""

    def load(self) -> Optional[Any]:
        ...

    def save(self, snapshot: Any) -> None:
        ...


class JsonSnapshotStorage:
    """
    Binds a KeyValueStore and a key into a SnapshotStorage.

    load() never raises for bad content: a value that is not valid JSON is
    logged, deleted and reported as missing. Write failures from the
    underlying store propagate.
    """

    def __init__(self, store: KeyValueStore, key: str):
        self.store = store
        self.key = key

    def load(self) -> Optional[Any]:
        raw = self.store.get(self.key)
        if raw is None:
            return None

        try:
            return json.loads(raw)
        except (ValueError, TypeError, RecursionError) as e:
            # Corrupted data - clear it and start empty
            logger.warning(f"Corrupted snapshot under {self.key!r}: {e}")
            self.store.delete(self.key)
            return None

    def save(self, snapshot: Any) -> None:
        self.store.set(self.key, json.dumps(snapshot, ensure_ascii=False))

    def clear(self) -> None:
        self.store.delete(self.key)


class MemorySnapshotStorage:
    """Holds the encoded snapshot in memory. Handy as a test fake."""

    def __init__(self, raw: Optional[str] = None):
        self.raw = raw
        self.saves = 0

    def load(self) -> Optional[Any]:
        if self.raw is None:
            return None
        try:
            return json.loads(self.raw)
        except (ValueError, TypeError, RecursionError) as e:
            logger.warning(f"Corrupted in-memory snapshot: {e}")
            self.raw = None
            return None

    def save(self, snapshot: Any) -> None:
        self.raw = json.dumps(snapshot, ensure_ascii=False)
        self.saves += 1

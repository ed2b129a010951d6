"""Snapshot storage for the cart."""
from typing import Optional

from storefront.storage import (
    KeyValueStore,
    SnapshotStorage,
    JsonSnapshotStorage,
    StorageKeys,
    get_default_store,
)


def cart_snapshot_storage(store: Optional[KeyValueStore] = None) -> JsonSnapshotStorage:
    """Cart snapshot bound to StorageKeys.CART on the given or default store."""
    return JsonSnapshotStorage(store if store is not None else get_default_store(), StorageKeys.CART)


__all__ = ["SnapshotStorage", "cart_snapshot_storage"]

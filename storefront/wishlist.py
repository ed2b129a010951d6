"""
Wishlist Store

Saved products, unique by id, kept in insertion order and persisted after
every change like the cart.
"""
from typing import List, Optional

from pydantic import ValidationError

from storefront.errors import StorageError, ERROR_STORAGE_UNAVAILABLE
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.models import Product
from storefront.storage import (
    KeyValueStore,
    SnapshotStorage,
    JsonSnapshotStorage,
    StorageKeys,
    get_default_store,
)

logger = get_logger(__name__)


class WishlistStore:
    """Products the visitor has saved for later."""

    def __init__(self, storage: SnapshotStorage):
        self.storage = storage
        self._items: List[Product] = self._restore()

    def _restore(self) -> List[Product]:
        snapshot = self.storage.load()
        if snapshot is None:
            return []
        if not isinstance(snapshot, list):
            logger.warning("Discarding wishlist snapshot that is not a list")
            return []

        try:
            products = [Product.model_validate(entry) for entry in snapshot]
        except ValidationError as e:
            logger.warning(f"Discarding unreadable wishlist snapshot: {e.error_count()} error(s)")
            return []

        # Drop duplicates an older writer may have left behind
        seen = set()
        unique = []
        for product in products:
            if product.id not in seen:
                seen.add(product.id)
                unique.append(product)
        return unique

    def _persist(self) -> None:
        try:
            self.storage.save([p.model_dump(mode="json") for p in self._items])
        except StorageError:
            logger.error("Failed to save wishlist snapshot")
            raise
        except Exception as e:
            logger.error(f"Failed to save wishlist snapshot: {e}")
            raise StorageError(f"{ERROR_STORAGE_UNAVAILABLE}: {e}") from e

    @property
    def items(self) -> List[Product]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def is_in_wishlist(self, product_id: str) -> bool:
        return any(p.id == product_id for p in self._items)

    def add_to_wishlist(self, product: Product) -> None:
        """Add product unless a product with the same id is already saved."""
        if self.is_in_wishlist(product.id):
            return
        self._items.append(product)
        logger.info(f"Saved {sanitize_id_for_logging(product.id)} to wishlist")
        self._persist()

    def remove_from_wishlist(self, product_id: str) -> None:
        self._items = [p for p in self._items if p.id != product_id]
        self._persist()

    def toggle_wishlist(self, product: Product) -> bool:
        """Flip membership. Returns True if the product is now saved."""
        if self.is_in_wishlist(product.id):
            self.remove_from_wishlist(product.id)
            return False
        self.add_to_wishlist(product)
        return True


def create_wishlist_store(store: Optional[KeyValueStore] = None) -> WishlistStore:
    """WishlistStore on StorageKeys.WISHLIST of the given or default store."""
    kv = store if store is not None else get_default_store()
    return WishlistStore(JsonSnapshotStorage(kv, StorageKeys.WISHLIST))

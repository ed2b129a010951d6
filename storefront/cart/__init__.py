"""Cart package: models, storage, and store facade."""
from .models import LineItem, Cart, line_item_key
from .service import CartStore, create_cart_store
from .storage import cart_snapshot_storage

__all__ = [
    "LineItem",
    "Cart",
    "line_item_key",
    "CartStore",
    "create_cart_store",
    "cart_snapshot_storage",
]

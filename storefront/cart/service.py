"""Cart store: the mutation surface over a persisted Cart."""
from dataclasses import replace
from typing import Optional, List, Union

from storefront.errors import (
    StorageError,
    InvalidQuantityError,
    ERROR_INVALID_QUANTITY,
    ERROR_STORAGE_UNAVAILABLE,
)
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.models import Product, ProductColor
from storefront.services.money import to_float, format_money
from .models import Cart, LineItem, line_item_key
from .storage import SnapshotStorage, cart_snapshot_storage

logger = get_logger(__name__)

ColorInput = Union[ProductColor, dict, None]


def _validate_quantity(quantity) -> None:
    # bool is an int subclass; True is not a quantity
    if not isinstance(quantity, int) or isinstance(quantity, bool):
        raise InvalidQuantityError(ERROR_INVALID_QUANTITY)


class CartStore:
    """
    Shopping cart for one browser-like session.

    - Line items merge on (product id, size, color name)
    - remove_from_cart / update_quantity act on every variant of a product
    - The full item list is saved after every mutation
    - is_open is a UI flag and is never persisted

    Each store holds its own in-memory copy. Two stores on the same storage
    do not see each other's changes until reload(); whichever saves last wins.
    """

    def __init__(self, storage: SnapshotStorage, open_on_add: bool = True):
        self.storage = storage
        self.open_on_add = open_on_add
        self._is_open = False
        self._cart = self._restore()

    def _restore(self) -> Cart:
        snapshot = self.storage.load()
        if snapshot is None:
            return Cart()

        try:
            cart = Cart.from_list(snapshot)
        except (TypeError, KeyError, ValueError, AttributeError) as e:
            # Local cache only - start empty rather than fail
            logger.warning(f"Discarding unreadable cart snapshot: {e}")
            return Cart()

        logger.debug(f"Restored cart with {len(cart.items)} line items")
        return cart

    def _persist(self) -> None:
        try:
            self.storage.save(self._cart.to_list())
        except StorageError:
            logger.error("Failed to save cart snapshot")
            raise
        except Exception as e:
            logger.error(f"Failed to save cart snapshot: {e}")
            raise StorageError(f"{ERROR_STORAGE_UNAVAILABLE}: {e}") from e

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def items(self) -> List[LineItem]:
        # Copies; lines change only through the mutation methods
        return [replace(item) for item in self._cart.items]

    @property
    def total_items(self) -> int:
        return self._cart.total_items

    @property
    def total_price(self):
        return self._cart.total_price

    @property
    def is_open(self) -> bool:
        return self._is_open

    def open(self) -> None:
        self._is_open = True

    def close(self) -> None:
        self._is_open = False

    def set_open(self, is_open: bool) -> None:
        self._is_open = bool(is_open)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_to_cart(
        self,
        product: Product,
        quantity: int = 1,
        size: Optional[str] = None,
        color: ColorInput = None,
    ) -> None:
        """
        Add a product variant to the cart.

        An existing line with the same (product id, size, color name) gets
        its quantity increased; otherwise a new line is appended. Opens the
        cart.

        Raises:
            InvalidQuantityError: quantity is not a positive integer
        """
        _validate_quantity(quantity)
        if quantity < 1:
            raise InvalidQuantityError(ERROR_INVALID_QUANTITY)
        if isinstance(color, dict):
            color = ProductColor.model_validate(color)

        existing = self._cart.find(line_item_key(product.id, size, color))
        if existing is not None:
            existing.quantity += quantity
        else:
            self._cart.items.append(
                LineItem(product=product, quantity=quantity, selected_size=size, selected_color=color)
            )

        logger.info(
            f"Added {quantity} x {sanitize_id_for_logging(product.id)} to cart "
            f"(total units: {self._cart.total_items})"
        )

        if self.open_on_add:
            self._is_open = True
        self._persist()

    def remove_from_cart(self, product_id: str) -> None:
        """Remove every line for product_id, whatever its size or color."""
        before = len(self._cart.items)
        self._cart.items = [item for item in self._cart.items if item.product.id != product_id]
        removed = before - len(self._cart.items)
        if removed:
            logger.info(f"Removed {removed} line(s) for {sanitize_id_for_logging(product_id)}")
        self._persist()

    def update_quantity(self, product_id: str, quantity: int) -> None:
        """
        Set the quantity of every line for product_id.

        A quantity of zero or less removes the product, like remove_from_cart.

        Raises:
            InvalidQuantityError: quantity is not an integer
        """
        _validate_quantity(quantity)
        if quantity <= 0:
            self.remove_from_cart(product_id)
            return

        for item in self._cart.items:
            if item.product.id == product_id:
                item.quantity = quantity
        self._persist()

    def clear_cart(self) -> None:
        """Empty the cart."""
        self._cart.items = []
        logger.info("Cart cleared")
        self._persist()

    def reload(self) -> None:
        """Re-read the snapshot, dropping in-memory state."""
        self._cart = self._restore()

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def summary(self, currency: str = "BDT") -> dict:
        """Cart summary for rendering."""
        cart = self._cart
        if cart.is_empty:
            return {
                "is_empty": True,
                "total_items": 0,
                "items": [],
                "total_price": 0.0,
                "total_display": format_money(0, currency),
            }

        return {
            "is_empty": False,
            "total_items": cart.total_items,
            "items": [
                {
                    "product_id": item.product.id,
                    "name": item.product.name,
                    "size": item.selected_size,
                    "color": item.selected_color.name if item.selected_color else None,
                    "quantity": item.quantity,
                    "unit_price": to_float(item.product.price),
                    "total": to_float(item.line_total),
                }
                for item in cart.items
            ],
            "total_price": to_float(cart.total_price),
            "total_display": format_money(cart.total_price, currency),
        }


def create_cart_store(storage: Optional[SnapshotStorage] = None, open_on_add: bool = True) -> CartStore:
    """Build a CartStore on the configured default storage unless one is given."""
    if storage is None:
        storage = cart_snapshot_storage()
    return CartStore(storage, open_on_add=open_on_add)

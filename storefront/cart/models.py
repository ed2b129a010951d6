"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, List, Tuple

from storefront.models import Product, ProductColor
from storefront.services.money import multiply

# (product id, size, color name); None stands for "no selection"
LineItemKey = Tuple[str, Optional[str], Optional[str]]


def line_item_key(product_id: str, size: Optional[str], color: Optional[ProductColor]) -> LineItemKey:
    """Dedup key for a product variant."""
    return (product_id, size, color.name if color is not None else None)


@dataclass
class LineItem:
    """Single entry in the cart."""
    product: Product
    quantity: int
    selected_size: Optional[str] = None
    selected_color: Optional[ProductColor] = None

    @property
    def key(self) -> LineItemKey:
        return line_item_key(self.product.id, self.selected_size, self.selected_color)

    @property
    def line_total(self) -> Decimal:
        """Price for all units of this line."""
        return multiply(self.product.price, self.quantity)

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dictionary."""
        return {
            "product": self.product.model_dump(mode="json"),
            "quantity": self.quantity,
            "selected_size": self.selected_size,
            "selected_color": (
                self.selected_color.model_dump(mode="json") if self.selected_color is not None else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LineItem":
        """
        Create from dictionary.

        Raises TypeError for a non-object entry or a quantity that is not
        an integer; stored quantities are never coerced.
        """
        if not isinstance(data, dict):
            raise TypeError(f"line item must be an object, got {type(data).__name__}")
        quantity = data["quantity"]
        if not isinstance(quantity, int) or isinstance(quantity, bool):
            raise TypeError(f"line item quantity must be an integer, got {quantity!r}")

        size = data.get("selected_size")
        if size is not None and not isinstance(size, str):
            raise TypeError(f"line item size must be a string, got {size!r}")
        color = data.get("selected_color")
        return cls(
            product=Product.model_validate(data["product"]),
            quantity=quantity,
            selected_size=size,
            selected_color=ProductColor.model_validate(color) if color is not None else None,
        )


@dataclass
class Cart:
    """Ordered line items. Totals are recomputed on every read."""
    items: List[LineItem] = field(default_factory=list)

    @property
    def total_items(self) -> int:
        """Total number of units in cart."""
        return sum(item.quantity for item in self.items)

    @property
    def total_price(self) -> Decimal:
        """Sum of price * quantity over all lines."""
        return sum((item.line_total for item in self.items), Decimal("0"))

    @property
    def is_empty(self) -> bool:
        return not self.items

    def find(self, key: LineItemKey) -> Optional[LineItem]:
        return next((item for item in self.items if item.key == key), None)

    def to_list(self) -> list:
        """Snapshot form: a JSON array of line items."""
        return [item.to_dict() for item in self.items]

    @classmethod
    def from_list(cls, data: list) -> "Cart":
        """
        Rebuild a cart from its snapshot.

        Lines with a non-positive quantity are dropped. Anything else that
        does not fit the shape raises (TypeError, KeyError or ValueError).
        """
        if not isinstance(data, list):
            raise TypeError(f"cart snapshot must be a list, got {type(data).__name__}")
        items = [LineItem.from_dict(entry) for entry in data]
        return cls(items=[item for item in items if item.quantity >= 1])

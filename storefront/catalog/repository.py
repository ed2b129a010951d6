"""Product Repository - Product catalog reads."""
from typing import Optional, List, Dict, Any

from pydantic import ValidationError
from supabase import Client

from storefront.errors import CatalogError, ERROR_CATALOG_UNAVAILABLE
from storefront.logging import get_logger, sanitize_string_for_logging
from storefront.models import Product

logger = get_logger(__name__)

# Pseudo-categories the storefront navigation uses
ALL_CATEGORIES = "all"
NEW_ARRIVALS = "new-arrivals"


def product_from_row(row: Dict[str, Any]) -> Product:
    """Map a products table row, filling the defaults the UI expects for nulls."""
    return Product(
        id=row["id"],
        name=row["name"],
        price=row["price"],
        original_price=row.get("original_price"),
        category=row.get("category") or "",
        subcategory=row.get("subcategory") or "",
        images=row.get("images") or [],
        sizes=row.get("sizes") or None,
        colors=row.get("colors") or None,
        description=row.get("description") or "",
        details=[],
        in_stock=row["in_stock"] if row.get("in_stock") is not None else True,
        is_new=bool(row.get("is_new")),
        is_featured=bool(row.get("is_featured")),
        slug=row.get("slug"),
    )


class ProductRepository:
    """Product database operations."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def _run(self, query, what: str) -> List[Dict[str, Any]]:
        try:
            result = query.execute()
        except Exception as e:
            logger.error(f"Catalog query failed ({what}): {e}")
            raise CatalogError(f"{ERROR_CATALOG_UNAVAILABLE}: {e}") from e
        return result.data or []

    def _to_products(self, rows: List[Dict[str, Any]]) -> List[Product]:
        products = []
        for row in rows:
            try:
                products.append(product_from_row(row))
            except (KeyError, ValidationError) as e:
                logger.warning(f"Skipping malformed product row {row.get('id')}: {e}")
        return products

    def get_by_id(self, product_id: str) -> Optional[Product]:
        rows = self._run(
            self.client.table("products").select("*").eq("id", product_id).limit(1),
            "get_by_id",
        )
        products = self._to_products(rows)
        return products[0] if products else None

    def get_by_slug(self, slug: str) -> Optional[Product]:
        rows = self._run(
            self.client.table("products").select("*").eq("slug", slug).limit(1),
            f"get_by_slug {sanitize_string_for_logging(slug)}",
        )
        products = self._to_products(rows)
        return products[0] if products else None

    def list(self, category: Optional[str] = None) -> List[Product]:
        """
        Products for a listing page, newest first.

        Args:
            category: Category slug; None or "all" lists everything,
                "new-arrivals" lists products flagged as new
        """
        query = self.client.table("products").select("*")

        if category == NEW_ARRIVALS:
            query = query.eq("is_new", True)
        elif category and category != ALL_CATEGORIES:
            query = query.eq("category", category)

        rows = self._run(query.order("created_at", desc=True), f"list {category or ALL_CATEGORIES}")
        return self._to_products(rows)

    def featured(self, limit: int = 8) -> List[Product]:
        rows = self._run(
            self.client.table("products").select("*").eq("is_featured", True).limit(limit),
            "featured",
        )
        return self._to_products(rows)

    def new_arrivals(self, limit: int = 8) -> List[Product]:
        rows = self._run(
            self.client.table("products").select("*").eq("is_new", True)
            .order("created_at", desc=True).limit(limit),
            "new_arrivals",
        )
        return self._to_products(rows)

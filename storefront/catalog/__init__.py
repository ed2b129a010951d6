"""Catalog package: Supabase-backed product lookup."""
from .db import get_supabase_sync
from .repository import ProductRepository, product_from_row, ALL_CATEGORIES, NEW_ARRIVALS

__all__ = [
    "get_supabase_sync",
    "ProductRepository",
    "product_from_row",
    "ALL_CATEGORIES",
    "NEW_ARRIVALS",
]

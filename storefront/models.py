"""Catalog Models - Pydantic models for products as the storefront sees them."""
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, field_validator

from storefront.services.money import to_decimal as _to_decimal


class ProductColor(BaseModel):
    """Color variant offered for a product."""
    name: str
    hex: str

    class Config:
        frozen = True


class Product(BaseModel):
    """Product model.

    Owned by the catalog; a cart line item embeds it verbatim.
    """
    id: str = Field(min_length=1)
    name: str
    price: Decimal = Field(ge=0)
    original_price: Optional[Decimal] = None
    category: str = ""  # men | women | jewelry | accessories
    subcategory: str = ""
    images: List[str] = []
    sizes: Optional[List[str]] = None
    colors: Optional[List[ProductColor]] = None
    description: str = ""
    details: List[str] = []
    in_stock: bool = True
    is_new: bool = False
    is_featured: bool = False
    slug: Optional[str] = None

    class Config:
        extra = "ignore"  # Ignore unknown fields from DB
        frozen = True

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _to_decimal(v)

    @field_validator("original_price", mode="before")
    @classmethod
    def convert_original_price_to_decimal(cls, v):
        # 0 and null both mean "no compare-at price"
        return _to_decimal(v) if v else None

    @property
    def is_on_sale(self) -> bool:
        return self.original_price is not None and self.original_price > self.price

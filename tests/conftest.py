"""Pytest configuration and fixtures"""
import os
import pytest
from decimal import Decimal
from unittest.mock import Mock

# Set test environment variables
os.environ.setdefault("STOREFRONT_STORAGE", "memory")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test_anon_key")

from storefront.models import Product, ProductColor
from storefront.storage import MemoryKeyValueStore, JsonSnapshotStorage, StorageKeys


@pytest.fixture
def kv_store():
    """Empty in-memory key-value store"""
    return MemoryKeyValueStore()


@pytest.fixture
def cart_storage(kv_store):
    """Cart snapshot storage on the in-memory store"""
    return JsonSnapshotStorage(kv_store, StorageKeys.CART)


@pytest.fixture
def red():
    return ProductColor(name="Red", hex="#FF0000")


@pytest.fixture
def blue():
    return ProductColor(name="Blue", hex="#0000FF")


@pytest.fixture
def sample_product(red, blue):
    """Sample product with sizes and colors"""
    return Product(
        id="product-123",
        name="Oversized Linen Shirt",
        price=Decimal("100"),
        original_price=Decimal("140"),
        category="men",
        subcategory="shirts",
        images=["https://cdn.test/shirt-1.jpg"],
        sizes=["S", "M", "L"],
        colors=[red, blue],
        description="Relaxed fit linen shirt",
        slug="oversized-linen-shirt",
    )


@pytest.fixture
def other_product():
    """Second product without variants"""
    return Product(
        id="product-456",
        name="Silver Hoop Earrings",
        price=Decimal("50"),
        category="jewelry",
    )


@pytest.fixture
def sample_product_row():
    """Row as returned by the products table"""
    return {
        "id": "product-789",
        "name": "Pleated Midi Skirt",
        "price": 2450,
        "original_price": None,
        "category": "women",
        "subcategory": None,
        "images": ["https://cdn.test/skirt.jpg"],
        "sizes": ["S", "M"],
        "colors": [{"name": "Black", "hex": "#000000"}],
        "description": None,
        "in_stock": None,
        "is_new": True,
        "is_featured": None,
        "slug": "pleated-midi-skirt",
        "created_at": "2025-01-01T00:00:00Z",
    }


@pytest.fixture
def mock_supabase_client():
    """Mock Supabase client"""
    client = Mock()

    # Every builder call returns the same mock so chains end in one execute()
    table_mock = Mock()
    table_mock.select.return_value = table_mock
    table_mock.eq.return_value = table_mock
    table_mock.limit.return_value = table_mock
    table_mock.order.return_value = table_mock
    table_mock.lt.return_value = table_mock
    table_mock.execute.return_value = Mock(data=[])

    client.table.return_value = table_mock

    return client

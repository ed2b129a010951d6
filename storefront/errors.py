"""
Common Errors

Centralized error messages and the exception types raised by storefront
services.
"""

# Cart errors
ERROR_INVALID_QUANTITY = "quantity must be a positive integer"

# Subscription errors
ERROR_INVALID_EMAIL = "Invalid email address"

# Storage errors
ERROR_STORAGE_UNAVAILABLE = "Storage unavailable"

# Catalog errors
ERROR_CATALOG_UNAVAILABLE = "Catalog unavailable"


class StorefrontError(Exception):
    """Base class for storefront failures that callers may want to handle."""


class StorageError(StorefrontError):
    """Persistent storage could not be written."""


class CatalogError(StorefrontError):
    """Product catalog lookup failed."""


class InvalidQuantityError(ValueError):
    """Quantity argument outside the accepted domain."""


class InvalidEmailError(ValueError):
    """Email address failed validation."""

"""
Storefront Client State

This package contains the state the storefront keeps on the visitor's side:
- cart: line items, merge rules and totals, persisted as a snapshot
- wishlist: saved products
- newsletter: subscription flag
- storage: key-value backends the stores persist to
- ratelimit: throttle for repeated failed attempts
- catalog: Supabase product lookup
- admin: notification badge counts for the admin console
- models: Pydantic catalog schemas

Note: Imports are lazy so that using the cart does not require the
Supabase client to be importable.
"""

__all__ = [
    "create_cart_store",
    "create_wishlist_store",
    "create_newsletter_state",
    "create_rate_limiter",
    "get_default_store",
]


def __getattr__(name):
    """Lazy attribute access."""
    if name == "create_cart_store":
        from storefront.cart import create_cart_store
        return create_cart_store
    elif name == "create_wishlist_store":
        from storefront.wishlist import create_wishlist_store
        return create_wishlist_store
    elif name == "create_newsletter_state":
        from storefront.newsletter import create_newsletter_state
        return create_newsletter_state
    elif name == "create_rate_limiter":
        from storefront.ratelimit import create_rate_limiter
        return create_rate_limiter
    elif name == "get_default_store":
        from storefront.storage import get_default_store
        return get_default_store
    raise AttributeError(f"module 'storefront' has no attribute '{name}'")

"""
Database Module - Supabase client

The storefront only reads the public catalog, so the anon key is preferred;
the service role key is accepted for admin tooling.
"""

from typing import Optional

from supabase import create_client, Client

from storefront import config

_supabase_client: Optional[Client] = None


def get_supabase_sync() -> Client:
    """Get synchronous Supabase client (singleton)."""
    global _supabase_client

    if _supabase_client is None:
        key = config.SUPABASE_ANON_KEY or config.SUPABASE_SERVICE_ROLE_KEY
        if not config.SUPABASE_URL or not key:
            raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY (or SUPABASE_SERVICE_ROLE_KEY) must be set")
        _supabase_client = create_client(config.SUPABASE_URL, key)

    return _supabase_client

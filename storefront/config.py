"""
Configuration - environment driven settings.

Values are read once at import, as they are for the database clients.
"""

import os

# Local persistence ("memory" keeps everything in-process)
STOREFRONT_STORAGE = os.environ.get("STOREFRONT_STORAGE", "file")
STOREFRONT_STORAGE_PATH = os.environ.get(
    "STOREFRONT_STORAGE_PATH",
    os.path.join(os.path.expanduser("~"), ".storefront", "storage.json"),
)

# Supabase (catalog reads use the public anon key when it is set)
SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_ANON_KEY = os.environ.get("SUPABASE_ANON_KEY", "")
SUPABASE_SERVICE_ROLE_KEY = os.environ.get("SUPABASE_SERVICE_ROLE_KEY", "")

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
STOREFRONT_ENV = os.environ.get("STOREFRONT_ENV", "development")

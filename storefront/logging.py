"""
Logging setup for the storefront.

Every module takes its logger from here:

    from storefront.logging import get_logger
    logger = get_logger(__name__)

Product ids, slugs and emails come from visitors or the catalog; pass them
through the sanitize helpers before they reach a log line.
"""

import logging
import sys
from functools import cache

from storefront import config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"


def _log_format() -> str:
    return LOG_FORMAT_SIMPLE if config.STOREFRONT_ENV == "production" else LOG_FORMAT


def _configure_root_logger() -> None:
    """Attach a stdout handler to the root logger unless the host app already did."""
    root = logging.getLogger()
    if root.handlers:
        return

    level = getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_log_format()))
    root.addHandler(handler)

    # The Supabase client logs every request through httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _escape_control_chars(value: str) -> str:
    # Newlines would let a value fake extra log records (CWE-117)
    return (
        value.replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )


def sanitize_id_for_logging(id_value: str | None) -> str:
    """First 8 characters of an id, escaped; "N/A" when empty."""
    if not id_value:
        return "N/A"
    return _escape_control_chars(str(id_value))[:8]


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """Escaped value cut to max_length with a trailing "..."; "N/A" when empty."""
    if not value:
        return "N/A"
    safe_value = _escape_control_chars(str(value))
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


def mask_email_for_logging(email: str | None) -> str:
    """Keep the first character of the local part and the domain: j***@example.com."""
    if not email or "@" not in email:
        return "N/A"
    local, _, domain = email.partition("@")
    return sanitize_string_for_logging(f"{local[:1]}***@{domain}")


__all__ = [
    "get_logger",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
    "mask_email_for_logging",
]

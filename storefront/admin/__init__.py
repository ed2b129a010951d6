"""Admin console helpers."""
from .badges import NotificationBadges, NotificationBadgeService, LOW_STOCK_THRESHOLD, WATCHED_TABLES

__all__ = [
    "NotificationBadges",
    "NotificationBadgeService",
    "LOW_STOCK_THRESHOLD",
    "WATCHED_TABLES",
]

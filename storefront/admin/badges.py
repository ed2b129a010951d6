"""
Admin Notification Badges

Counts shown next to the admin sidebar entries:
- orders: orders with status "pending"
- inquiries: contact inquiries with status "pending"
- security: security events not yet resolved
- products: products with fewer than LOW_STOCK_THRESHOLD units in stock
- customers: always 0, there is nothing to flag for customers yet

Counts are recomputed from scratch on every refetch. Callers either poll
(refresh_if_stale) or forward table change events (handle_change).
"""
import time
from dataclasses import dataclass, asdict
from typing import Callable, Optional

from supabase import Client

from storefront.logging import get_logger

logger = get_logger(__name__)

LOW_STOCK_THRESHOLD = 5

# Changes to these tables can move a badge
WATCHED_TABLES = frozenset({"orders", "inquiries", "security_events", "products"})


@dataclass(frozen=True)
class NotificationBadges:
    orders: int = 0
    inquiries: int = 0
    products: int = 0
    customers: int = 0
    security: int = 0

    @property
    def total(self) -> int:
        return self.orders + self.inquiries + self.products + self.customers + self.security

    def to_dict(self) -> dict:
        return asdict(self)


class NotificationBadgeService:
    """Badge counts for the admin console."""

    def __init__(self, client: Client, clock: Callable[[], float] = time.monotonic) -> None:
        self.client = client
        self.clock = clock
        self._badges = NotificationBadges()
        self._fetched_at: Optional[float] = None
        self.loading = True
        self.last_error: Optional[Exception] = None

    @property
    def badges(self) -> NotificationBadges:
        return self._badges

    def _count(self, query) -> int:
        # count is None when the table is empty or not visible to this key
        return query.execute().count or 0

    def refetch(self) -> NotificationBadges:
        """
        Recount every badge.

        If any count fails, the previous badges are kept and the error is
        logged and kept in last_error; the admin UI keeps working.
        """
        try:
            orders = self._count(
                self.client.table("orders").select("id", count="exact").eq("status", "pending")
            )
            inquiries = self._count(
                self.client.table("inquiries").select("id", count="exact").eq("status", "pending")
            )
            security = self._count(
                self.client.table("security_events").select("id", count="exact").eq("resolved", False)
            )
            low_stock = self._count(
                self.client.table("products").select("id", count="exact").lt("stock_quantity", LOW_STOCK_THRESHOLD)
            )
        except Exception as e:
            logger.error(f"Error fetching notification badges: {e}", exc_info=True)
            self.last_error = e
        else:
            self._badges = NotificationBadges(
                orders=orders,
                inquiries=inquiries,
                products=low_stock,
                customers=0,
                security=security,
            )
            self._fetched_at = self.clock()
            self.last_error = None
        finally:
            self.loading = False

        return self._badges

    def handle_change(self, table: str) -> bool:
        """Refetch after a change event on table. Returns True if it refetched."""
        if table not in WATCHED_TABLES:
            return False
        self.refetch()
        return True

    def refresh_if_stale(self, max_age_seconds: float = 30) -> NotificationBadges:
        """Refetch when never fetched or older than max_age_seconds."""
        if self._fetched_at is None or self.clock() - self._fetched_at >= max_age_seconds:
            return self.refetch()
        return self._badges

"""
Tests for admin notification badges
"""

import pytest
from unittest.mock import Mock, call

from storefront.admin import NotificationBadges, NotificationBadgeService, LOW_STOCK_THRESHOLD


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def counts(*values):
    return [Mock(count=value) for value in values]


@pytest.fixture
def service(mock_supabase_client):
    return NotificationBadgeService(mock_supabase_client, clock=FakeClock())


class TestNotificationBadges:
    """Tests for the badge value object."""

    def test_defaults_to_zero(self):
        badges = NotificationBadges()

        assert badges.total == 0
        assert badges.to_dict() == {
            "orders": 0,
            "inquiries": 0,
            "products": 0,
            "customers": 0,
            "security": 0,
        }

    def test_total(self):
        assert NotificationBadges(orders=3, inquiries=1, products=2, security=4).total == 10


class TestRefetch:
    """Tests for counting the badges."""

    def test_maps_counts(self, service, mock_supabase_client):
        mock_supabase_client.table.return_value.execute.side_effect = counts(3, 1, 2, 4)

        badges = service.refetch()

        assert badges == NotificationBadges(orders=3, inquiries=1, security=2, products=4, customers=0)
        assert service.badges is badges
        assert service.loading is False
        assert service.last_error is None

    def test_missing_count_is_zero(self, service, mock_supabase_client):
        mock_supabase_client.table.return_value.execute.side_effect = counts(None, 2, None, None)

        badges = service.refetch()

        assert badges.orders == 0
        assert badges.inquiries == 2
        assert badges.total == 2

    def test_queries(self, service, mock_supabase_client):
        """Test each badge is an exact head count with its own filter."""
        table = mock_supabase_client.table.return_value
        table.execute.side_effect = counts(0, 0, 0, 0)

        service.refetch()

        assert mock_supabase_client.table.call_args_list == [
            call("orders"),
            call("inquiries"),
            call("security_events"),
            call("products"),
        ]
        table.select.assert_called_with("id", count="exact")
        assert table.select.call_count == 4
        assert table.eq.call_args_list == [
            call("status", "pending"),
            call("status", "pending"),
            call("resolved", False),
        ]
        table.lt.assert_called_once_with("stock_quantity", LOW_STOCK_THRESHOLD)

    def test_failure_keeps_previous_badges(self, service, mock_supabase_client):
        execute = mock_supabase_client.table.return_value.execute
        execute.side_effect = counts(5, 0, 0, 1)
        previous = service.refetch()

        error = RuntimeError("network down")
        execute.side_effect = [Mock(count=9), error]
        badges = service.refetch()

        assert badges is previous
        assert badges.orders == 5
        assert service.last_error is error
        assert service.loading is False

    def test_success_clears_last_error(self, service, mock_supabase_client):
        execute = mock_supabase_client.table.return_value.execute
        execute.side_effect = RuntimeError("boom")
        service.refetch()

        execute.side_effect = counts(1, 0, 0, 0)
        service.refetch()

        assert service.last_error is None
        assert service.badges.orders == 1

    def test_loading_until_first_fetch(self, service, mock_supabase_client):
        assert service.loading is True

        mock_supabase_client.table.return_value.execute.side_effect = RuntimeError("boom")
        service.refetch()

        assert service.loading is False
        assert service.badges == NotificationBadges()


class TestRefreshTriggers:
    """Tests for change events and polling."""

    @pytest.mark.parametrize("table", ["orders", "inquiries", "security_events", "products"])
    def test_watched_table_refetches(self, service, mock_supabase_client, table):
        mock_supabase_client.table.return_value.execute.side_effect = counts(1, 1, 1, 1)

        assert service.handle_change(table) is True
        assert service.badges.total == 4

    def test_other_table_ignored(self, service, mock_supabase_client):
        assert service.handle_change("users") is False
        mock_supabase_client.table.assert_not_called()

    def test_refresh_if_stale(self, mock_supabase_client):
        clock = FakeClock()
        service = NotificationBadgeService(mock_supabase_client, clock=clock)
        execute = mock_supabase_client.table.return_value.execute
        execute.side_effect = counts(1, 0, 0, 0) + counts(2, 0, 0, 0)

        assert service.refresh_if_stale().orders == 1

        clock.now += 10
        assert service.refresh_if_stale().orders == 1
        assert execute.call_count == 4

        clock.now += 20
        assert service.refresh_if_stale().orders == 2
        assert execute.call_count == 8

    def test_failed_fetch_stays_stale(self, mock_supabase_client):
        """Test a failed refetch is retried on the next poll."""
        service = NotificationBadgeService(mock_supabase_client, clock=FakeClock())
        execute = mock_supabase_client.table.return_value.execute
        execute.side_effect = [RuntimeError("boom")] + counts(3, 0, 0, 0)

        service.refresh_if_stale()
        badges = service.refresh_if_stale()

        assert badges.orders == 3

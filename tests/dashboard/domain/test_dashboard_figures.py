"""Tests for the pure dashboard calculations."""

from datetime import UTC, datetime
from types import SimpleNamespace
from zoneinfo import ZoneInfo

from storefront.dashboard.stats import orders_by_status, percent_change, revenue_by_day


def _order(created_at, total=10.0, status="PENDING", payment_status="PAID"):
    return SimpleNamespace(created_at=created_at, total=total, status=status, payment_status=payment_status)


class TestPercentChange:
    def test_growth(self):
        assert percent_change(150, 100) == 50.0

    def test_decline(self):
        assert percent_change(50, 100) == -50.0

    def test_rounded_to_one_decimal(self):
        assert percent_change(2, 3) == -33.3

    def test_from_nothing(self):
        assert percent_change(5, 0) == 100.0
        assert percent_change(0, 0) == 0.0


class TestRevenueByDay:
    def test_every_day_gets_a_bucket(self):
        start = datetime(2026, 3, 1, tzinfo=UTC)
        end = datetime(2026, 3, 4, tzinfo=UTC)

        days = revenue_by_day([], start, end, ZoneInfo("UTC"))

        assert [day.date for day in days] == ["2026-03-01", "2026-03-02", "2026-03-03", "2026-03-04"]
        assert all(day.revenue == 0.0 and day.orders == 0 for day in days)

    def test_orders_are_bucketed_by_local_date(self):
        start = datetime(2026, 3, 1, tzinfo=UTC)
        end = datetime(2026, 3, 3, tzinfo=UTC)
        late_evening_in_new_york = _order(datetime(2026, 3, 2, 3, 0, tzinfo=UTC), total=40.0)

        days = revenue_by_day([late_evening_in_new_york], start, end, ZoneInfo("America/New_York"))

        assert [day.date for day in days] == ["2026-02-28", "2026-03-01", "2026-03-02"]
        assert days[1].revenue == 40.0
        assert days[1].orders == 1

    def test_unpaid_orders_count_without_revenue(self):
        start = datetime(2026, 3, 1, tzinfo=UTC)
        end = datetime(2026, 3, 1, 23, tzinfo=UTC)
        orders = [
            _order(datetime(2026, 3, 1, 9, tzinfo=UTC), total=25.0),
            _order(datetime(2026, 3, 1, 10, tzinfo=UTC), total=99.0, payment_status="PENDING"),
        ]

        [day] = revenue_by_day(orders, start, end, ZoneInfo("UTC"))

        assert day.revenue == 25.0
        assert day.orders == 2

    def test_naive_timestamps_are_read_as_utc(self):
        start = datetime(2026, 3, 1, tzinfo=UTC)
        end = datetime(2026, 3, 2, tzinfo=UTC)

        days = revenue_by_day([_order(datetime(2026, 3, 2, 12, 0))], start, end, ZoneInfo("UTC"))

        assert days[-1].orders == 1


def test_orders_by_status_lists_every_status():
    orders = [_order(None, status="PENDING"), _order(None, status="PENDING"), _order(None, status="SHIPPED")]

    counts = {entry.status: entry.count for entry in orders_by_status(orders)}

    assert counts == {"PENDING": 2, "PROCESSING": 0, "SHIPPED": 1, "DELIVERED": 0, "CANCELLED": 0}

"""Application tests for the admin dashboard figures."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from storefront.dashboard.stats import RECENT_ORDERS, dashboard_stats
from storefront.ordering.cart.items import AddToCart
from storefront.ordering.order.placement import PlaceOrder
from storefront.payments.checkout.session import CreateCheckoutOrder


def _paid_order(user_id, product_id, quantity):
    current_domain.process(AddToCart(user_id=user_id, product_id=product_id, quantity=quantity), asynchronous=False)
    return current_domain.process(PlaceOrder(user_id=user_id, email="jane@example.com"), asynchronous=False)


def _pending_order(product_id):
    return current_domain.process(
        CreateCheckoutOrder(items=json.dumps([{"product_id": product_id, "quantity": 1}]), email="guest@example.com"),
        asynchronous=False,
    )


class TestDashboardStats:
    def test_empty_store(self):
        stats = dashboard_stats(days=7)

        assert stats.total_revenue == 0.0
        assert stats.total_orders == 0
        assert stats.average_order_value == 0.0
        assert stats.revenue_change == 0.0
        assert stats.recent_orders == []
        assert len(stats.revenue_by_day) == 8

    def test_revenue_counts_paid_orders_only(self, make_user, make_product):
        product_id = make_product(price=24.0)
        _paid_order(make_user(), product_id, 2)
        _pending_order(product_id)

        stats = dashboard_stats(days=30)

        assert stats.total_orders == 2
        assert stats.total_revenue == 48.0
        assert stats.average_order_value == 48.0
        assert stats.revenue_change == 100.0
        assert sum(day.revenue for day in stats.revenue_by_day) == 48.0
        assert sum(day.orders for day in stats.revenue_by_day) == 2

    def test_orders_by_status(self, make_user, make_product):
        product_id = make_product()
        _paid_order(make_user(), product_id, 1)

        counts = {entry.status: entry.count for entry in dashboard_stats().orders_by_status}
        assert counts["PENDING"] == 1
        assert counts["PROCESSING"] == 0

    def test_customers_exclude_admins(self, make_user):
        make_user()
        make_user(email="admin@example.com", role="ADMIN")

        stats = dashboard_stats()

        assert stats.total_customers == 1
        assert stats.customers_change == 100.0

    def test_products_and_low_stock(self, make_product):
        make_product(name="Stoneware Mug", quantity=10)
        make_product(name="Tea Bowl", quantity=3)

        stats = dashboard_stats()

        assert stats.total_products == 2
        assert stats.low_stock_count == 1

    def test_low_stock_threshold_is_configurable(self, make_product, monkeypatch):
        monkeypatch.setenv("LOW_STOCK_THRESHOLD", "20")
        make_product(quantity=10)

        assert dashboard_stats().low_stock_count == 1

    def test_recent_orders_are_capped(self, make_product):
        product_id = make_product(quantity=50)
        for _ in range(RECENT_ORDERS + 2):
            _pending_order(product_id)

        stats = dashboard_stats()

        assert len(stats.recent_orders) == RECENT_ORDERS
        assert stats.total_orders == RECENT_ORDERS + 2

    @pytest.mark.parametrize("days", [0, 366])
    def test_days_out_of_range(self, days):
        with pytest.raises(ValidationError) as exc:
            dashboard_stats(days=days)
        assert exc.value.messages["days"] == ["Days must be between 1 and 365"]

    def test_unknown_timezone(self):
        with pytest.raises(ValidationError) as exc:
            dashboard_stats(timezone="Mars/Olympus_Mons")
        assert exc.value.messages["timezone"] == ["Unknown timezone: Mars/Olympus_Mons"]

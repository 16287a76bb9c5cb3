"""Tests for the plain-text order log export."""

from datetime import UTC, datetime

from storefront.ordering.order.log_export import export_filename, render_order_log
from storefront.ordering.order.order import Order, OrderLogAction


def _make_order():
    order = Order.create(
        order_number="ORD-ABC-12345",
        email="jane@example.com",
        items_data=[{"product_id": "prod-001", "name": "Stoneware Mug", "price": 12.5, "quantity": 2}],
        first_name="Jane",
        last_name="Doe",
    )
    order.created_at = datetime(2024, 5, 1, 9, 30, 0, tzinfo=UTC)
    return order


class TestOrderLogExport:
    def test_filename(self):
        assert export_filename(_make_order()) == "order-ORD-ABC-12345-log.txt"

    def test_header(self):
        text = render_order_log(_make_order(), generated_at=datetime(2024, 5, 2, tzinfo=UTC))
        lines = text.splitlines()
        assert lines[0] == "ORDER LOG HISTORY"
        assert "Order Number: ORD-ABC-12345" in lines
        assert "Customer: Jane Doe (jane@example.com)" in lines
        assert "Order Date: 2024-05-01 09:30:00" in lines
        assert "Current Status: PENDING" in lines
        assert "Total: €25.00" in lines
        assert lines[-1] == "Generated at: 2024-05-02 00:00:00"

    def test_empty_log(self):
        assert "No logs available yet." in render_order_log(_make_order())

    def test_entries_in_chronological_order(self):
        order = _make_order()
        order.log(OrderLogAction.ORDER_CREATED, "Order created", performed_by="jane@example.com")
        order.log(OrderLogAction.STATUS_UPDATED, "Status changed to SHIPPED")

        text = render_order_log(order, customer_name="Jane From Account")
        assert "Customer: Jane From Account (jane@example.com)" in text
        assert text.index("ORDER_CREATED") < text.index("STATUS_UPDATED")
        assert "Performed by: jane@example.com" in text
        assert "Performed by: System" in text
        assert "No logs available yet." not in text

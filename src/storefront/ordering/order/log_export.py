"""Plain-text export of an order's audit log."""

from datetime import UTC, datetime

from storefront.ordering.order.order import Order
from storefront.shared.money import format_eur

_TIMESTAMP = "%Y-%m-%d %H:%M:%S"


def _stamp(moment: datetime | None) -> str:
    return moment.strftime(_TIMESTAMP) if moment else "N/A"


def export_filename(order: Order) -> str:
    return f"order-{order.order_number}-log.txt"


def render_order_log(order: Order, customer_name: str | None = None, generated_at: datetime | None = None) -> str:
    """Render the order header followed by every log entry, oldest first."""
    customer = customer_name or order.customer_name or "N/A"
    lines = [
        "ORDER LOG HISTORY",
        "==================",
        "",
        f"Order Number: {order.order_number}",
        f"Customer: {customer} ({order.email})",
        f"Order Date: {_stamp(order.created_at)}",
        f"Current Status: {order.status}",
        f"Payment Status: {order.payment_status}",
        f"Total: {format_eur(order.total)}",
        "",
        "LOG ENTRIES:",
    ]

    logs = order.sorted_logs()
    if not logs:
        lines.append("No logs available yet.")

    entries = [
        "\n".join(
            [
                f"[{_stamp(log.created_at)}] {log.action}",
                f"Performed by: {log.performed_by or 'System'}",
                f"Description: {log.description}",
                "---",
            ]
        )
        for log in logs
    ]
    if entries:
        lines.append("\n\n".join(entries))

    lines.extend(["", f"Generated at: {_stamp(generated_at or datetime.now(UTC))}"])
    return "\n".join(lines)

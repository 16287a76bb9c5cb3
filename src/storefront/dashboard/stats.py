"""Admin dashboard figures, aggregated at query time.

The last ``days`` days are compared with the window of equal length just
before them. Revenue only counts paid orders. Daily revenue is bucketed by
local date in the caller's timezone.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.identity.user.user import User
from storefront.ordering.order.order import Order, OrderStatus, PaymentStatus
from storefront.settings import get_settings
from storefront.shared.money import round_money

RECENT_ORDERS = 5
MAX_DAYS = 365


@dataclass
class DailyRevenue:
    date: str
    revenue: float
    orders: int


@dataclass
class StatusCount:
    status: str
    count: int


@dataclass
class DashboardStats:
    total_revenue: float = 0.0
    revenue_change: float = 0.0
    total_orders: int = 0
    orders_change: float = 0.0
    average_order_value: float = 0.0
    total_products: int = 0
    low_stock_count: int = 0
    total_customers: int = 0
    customers_change: float = 0.0
    revenue_by_day: list[DailyRevenue] = field(default_factory=list)
    orders_by_status: list[StatusCount] = field(default_factory=list)
    recent_orders: list[Order] = field(default_factory=list)


def percent_change(current: float, previous: float) -> float:
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return round((current - previous) / previous * 100, 1)


def _revenue(orders) -> float:
    return round_money(sum(order.total for order in orders if order.payment_status == PaymentStatus.PAID.value))


def _zone(timezone: str) -> ZoneInfo:
    try:
        return ZoneInfo(timezone or "UTC")
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError({"timezone": [f"Unknown timezone: {timezone}"]})


def dashboard_stats(days: int = 30, timezone: str = "UTC", now: datetime | None = None) -> DashboardStats:
    if not 1 <= days <= MAX_DAYS:
        raise ValidationError({"days": [f"Days must be between 1 and {MAX_DAYS}"]})
    zone = _zone(timezone)

    now = now or datetime.now(UTC)
    start = now - timedelta(days=days)
    previous_start = start - timedelta(days=days)

    order_repo = current_domain.repository_for(Order)
    user_repo = current_domain.repository_for(User)
    product_repo = current_domain.repository_for(Product)

    current_orders = order_repo.created_between(start, now)
    previous_orders = order_repo.created_between(previous_start, start)

    revenue = _revenue(current_orders)
    paid_orders = [order for order in current_orders if order.payment_status == PaymentStatus.PAID.value]

    customers = user_repo.count_customers_created_between(start, now)
    previous_customers = user_repo.count_customers_created_between(previous_start, start)

    return DashboardStats(
        total_revenue=revenue,
        revenue_change=percent_change(revenue, _revenue(previous_orders)),
        total_orders=len(current_orders),
        orders_change=percent_change(len(current_orders), len(previous_orders)),
        average_order_value=round_money(revenue / len(paid_orders)) if paid_orders else 0.0,
        total_products=product_repo.count_all(),
        low_stock_count=product_repo.count_low_stock(get_settings().low_stock_threshold),
        total_customers=customers,
        customers_change=percent_change(customers, previous_customers),
        revenue_by_day=revenue_by_day(current_orders, start, now, zone),
        orders_by_status=orders_by_status(current_orders),
        recent_orders=order_repo.newest_first(limit=RECENT_ORDERS),
    )


def revenue_by_day(orders, start: datetime, end: datetime, zone: ZoneInfo) -> list[DailyRevenue]:
    """One bucket per local calendar day in the window, including empty days."""
    buckets = {}
    day = start.astimezone(zone).date()
    last_day = end.astimezone(zone).date()
    while day <= last_day:
        buckets[day.isoformat()] = DailyRevenue(date=day.isoformat(), revenue=0.0, orders=0)
        day += timedelta(days=1)

    for order in orders:
        created = order.created_at if order.created_at.tzinfo else order.created_at.replace(tzinfo=UTC)
        bucket = buckets.get(created.astimezone(zone).date().isoformat())
        if bucket is None:
            continue
        bucket.orders += 1
        if order.payment_status == PaymentStatus.PAID.value:
            bucket.revenue = round_money(bucket.revenue + order.total)

    return list(buckets.values())


def orders_by_status(orders) -> list[StatusCount]:
    counts = Counter(order.status for order in orders)
    return [StatusCount(status=status.value, count=counts.get(status.value, 0)) for status in OrderStatus]

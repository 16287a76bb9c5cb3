"""Pydantic response schemas for the admin dashboard."""

from pydantic import BaseModel

from storefront.dashboard.stats import DashboardStats
from storefront.ordering.api.schemas import OrderResponse


class DailyRevenueResponse(BaseModel):
    date: str
    revenue: float
    orders: int


class StatusCountResponse(BaseModel):
    status: str
    count: int


class DashboardResponse(BaseModel):
    total_revenue: float
    revenue_change: float
    total_orders: int
    orders_change: float
    average_order_value: float
    total_products: int
    low_stock_count: int
    total_customers: int
    customers_change: float
    revenue_by_day: list[DailyRevenueResponse]
    orders_by_status: list[StatusCountResponse]
    recent_orders: list[OrderResponse]

    @classmethod
    def from_stats(cls, stats: DashboardStats) -> "DashboardResponse":
        return cls(
            total_revenue=stats.total_revenue,
            revenue_change=stats.revenue_change,
            total_orders=stats.total_orders,
            orders_change=stats.orders_change,
            average_order_value=stats.average_order_value,
            total_products=stats.total_products,
            low_stock_count=stats.low_stock_count,
            total_customers=stats.total_customers,
            customers_change=stats.customers_change,
            revenue_by_day=[
                DailyRevenueResponse(date=day.date, revenue=day.revenue, orders=day.orders)
                for day in stats.revenue_by_day
            ],
            orders_by_status=[
                StatusCountResponse(status=entry.status, count=entry.count) for entry in stats.orders_by_status
            ],
            recent_orders=[OrderResponse.from_order(order) for order in stats.recent_orders],
        )

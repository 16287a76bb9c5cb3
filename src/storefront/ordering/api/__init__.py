"""Ordering API package."""

from storefront.ordering.api.routes import admin_order_router, cart_router, order_router

__all__ = ["cart_router", "order_router", "admin_order_router"]

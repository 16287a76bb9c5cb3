"""Dashboard API package."""

from storefront.dashboard.api.routes import dashboard_router

__all__ = ["dashboard_router"]

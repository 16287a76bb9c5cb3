"""Activity API package."""

from storefront.activity.api.routes import activity_router

__all__ = ["activity_router"]

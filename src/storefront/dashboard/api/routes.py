"""FastAPI endpoint for the admin dashboard."""

from fastapi import APIRouter, Depends

from storefront.dashboard.api.schemas import DashboardResponse
from storefront.dashboard.stats import dashboard_stats
from storefront.identity.api.deps import admin_user
from storefront.identity.user.user import User

dashboard_router = APIRouter(prefix="/admin/dashboard", tags=["admin"])


@dashboard_router.get("", response_model=DashboardResponse)
async def get_dashboard(days: int = 30, timezone: str = "UTC", _: User = Depends(admin_user)) -> DashboardResponse:
    return DashboardResponse.from_stats(dashboard_stats(days=days, timezone=timezone))

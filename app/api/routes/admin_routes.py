"""
Admin Dashboard Routes

GET /dashboard/admin - System-wide counts and monthly registrations
GET /dashboard/admin/analytics - Scores, placement rate, distributions
"""

from datetime import datetime

from fastapi import APIRouter, Depends

from app.api.deps import get_now, get_repository
from app.api.errors import ERROR_RESPONSES, aggregation_guard
from app.core.auth import get_current_admin
from app.repositories.base import PlacementRepository
from app.schemas.schemas import AdminAnalyticsResponse, AdminDashboardResponse
from app.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard/admin", tags=["Admin Dashboard"], responses=ERROR_RESPONSES)


@router.get("", response_model=AdminDashboardResponse)
async def admin_dashboard(
    admin: dict = Depends(get_current_admin),
    repository: PlacementRepository = Depends(get_repository),
    now: datetime = Depends(get_now),
):
    """User counts by role, internship and evaluation totals."""
    with aggregation_guard("admin", "admin_dashboard", "Failed to fetch dashboard data"):
        return DashboardService(repository, now).admin_dashboard()


@router.get("/analytics", response_model=AdminAnalyticsResponse)
async def admin_analytics(
    admin: dict = Depends(get_current_admin),
    repository: PlacementRepository = Depends(get_repository),
    now: datetime = Depends(get_now),
):
    with aggregation_guard("admin", "admin_analytics", "Failed to fetch analytics data"):
        return DashboardService(repository, now).admin_analytics()

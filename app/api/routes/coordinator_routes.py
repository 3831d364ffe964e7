"""
Coordinator Dashboard Routes

GET /dashboard/coordinator - Student and placement overview
GET /dashboard/coordinator/analytics - Growth, success rates, company rankings
GET /dashboard/coordinator/placements - All placements (optional ?status=)
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends

from app.api.deps import get_now, get_repository
from app.api.errors import ERROR_RESPONSES, aggregation_guard
from app.core.auth import get_current_coordinator
from app.repositories.base import PlacementRepository
from app.schemas.schemas import (
    CoordinatorAnalyticsResponse, CoordinatorDashboardResponse, PlacementListResponse
)
from app.services.dashboard_service import DashboardService
from app.services.status_mapping import PlacementStatus

router = APIRouter(prefix="/dashboard/coordinator", tags=["Coordinator Dashboard"], responses=ERROR_RESPONSES)


@router.get("", response_model=CoordinatorDashboardResponse)
async def coordinator_dashboard(
    coordinator: dict = Depends(get_current_coordinator),
    repository: PlacementRepository = Depends(get_repository),
    now: datetime = Depends(get_now),
):
    with aggregation_guard("coordinator", "coordinator_dashboard", "Failed to fetch dashboard data"):
        return DashboardService(repository, now).coordinator_dashboard()


@router.get("/analytics", response_model=CoordinatorAnalyticsResponse)
async def coordinator_analytics(
    coordinator: dict = Depends(get_current_coordinator),
    repository: PlacementRepository = Depends(get_repository),
    now: datetime = Depends(get_now),
):
    """Semester growth, placement and completion rates, Top-10 companies."""
    with aggregation_guard("coordinator", "coordinator_analytics", "Failed to fetch analytics data"):
        return DashboardService(repository, now).coordinator_analytics()


@router.get("/placements", response_model=PlacementListResponse)
async def coordinator_placements(
    status: Optional[PlacementStatus] = None,
    coordinator: dict = Depends(get_current_coordinator),
    repository: PlacementRepository = Depends(get_repository),
    now: datetime = Depends(get_now),
):
    with aggregation_guard("coordinator", "coordinator_placements", "Failed to fetch placements"):
        return DashboardService(repository, now).coordinator_placements(status)

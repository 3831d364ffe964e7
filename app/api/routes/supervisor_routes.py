"""
Supervisor Dashboard Routes

GET /dashboard/supervisor - Intern count and review workload
GET /dashboard/supervisor/analytics - Weekly activity, top interns, score histogram
GET /dashboard/supervisor/interns - Active interns with latest rating
GET /dashboard/supervisor/evaluations - Own evaluations (optional ?status=)
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends

from app.api.deps import get_now, get_repository
from app.api.errors import ERROR_RESPONSES, aggregation_guard
from app.core.auth import get_current_supervisor
from app.repositories.base import PlacementRepository
from app.schemas.schemas import (
    InternListResponse, SupervisorAnalyticsResponse,
    SupervisorDashboardResponse, SupervisorEvaluationListResponse
)
from app.services.dashboard_service import DashboardService
from app.services.status_mapping import EvaluationDisplayStatus

router = APIRouter(prefix="/dashboard/supervisor", tags=["Supervisor Dashboard"], responses=ERROR_RESPONSES)


@router.get("", response_model=SupervisorDashboardResponse)
async def supervisor_dashboard(
    supervisor: dict = Depends(get_current_supervisor),
    repository: PlacementRepository = Depends(get_repository),
    now: datetime = Depends(get_now),
):
    with aggregation_guard("supervisor", "supervisor_dashboard", "Failed to fetch dashboard data"):
        return DashboardService(repository, now).supervisor_dashboard(supervisor["user_id"])


@router.get("/analytics", response_model=SupervisorAnalyticsResponse)
async def supervisor_analytics(
    supervisor: dict = Depends(get_current_supervisor),
    repository: PlacementRepository = Depends(get_repository),
    now: datetime = Depends(get_now),
):
    """Analytics over the supervisor's reviewed evaluations."""
    with aggregation_guard("supervisor", "supervisor_analytics", "Failed to fetch analytics data"):
        return DashboardService(repository, now).supervisor_analytics(supervisor["user_id"])


@router.get("/interns", response_model=InternListResponse)
async def supervisor_interns(
    supervisor: dict = Depends(get_current_supervisor),
    repository: PlacementRepository = Depends(get_repository),
    now: datetime = Depends(get_now),
):
    with aggregation_guard("supervisor", "supervisor_interns", "Failed to fetch interns"):
        return DashboardService(repository, now).supervisor_interns(supervisor["user_id"])


@router.get("/evaluations", response_model=SupervisorEvaluationListResponse)
async def supervisor_evaluations(
    status: Optional[EvaluationDisplayStatus] = None,
    supervisor: dict = Depends(get_current_supervisor),
    repository: PlacementRepository = Depends(get_repository),
    now: datetime = Depends(get_now),
):
    with aggregation_guard("supervisor", "supervisor_evaluations", "Failed to fetch evaluations"):
        return DashboardService(repository, now).supervisor_evaluations(supervisor["user_id"], status)

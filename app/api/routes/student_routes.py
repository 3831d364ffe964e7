"""
Student Dashboard Routes

GET /dashboard/student - Active internship, progress, attendance, rating
GET /dashboard/student/evaluations - Own evaluations (details once reviewed)
GET /dashboard/student/attendance - Attendance summary and weekly breakdown
"""

from datetime import datetime

from fastapi import APIRouter, Depends

from app.api.deps import get_now, get_repository
from app.api.errors import ERROR_RESPONSES, aggregation_guard
from app.core.auth import get_current_student
from app.repositories.base import PlacementRepository
from app.schemas.schemas import (
    StudentAttendanceResponse, StudentDashboardResponse, StudentEvaluationListResponse
)
from app.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard/student", tags=["Student Dashboard"], responses=ERROR_RESPONSES)


@router.get("", response_model=StudentDashboardResponse)
async def student_dashboard(
    student: dict = Depends(get_current_student),
    repository: PlacementRepository = Depends(get_repository),
    now: datetime = Depends(get_now),
):
    """Returns hasActiveInternship=false and empty sections when nothing is active."""
    with aggregation_guard("student", "student_dashboard", "Failed to fetch dashboard data"):
        return DashboardService(repository, now).student_dashboard(student["user_id"])


@router.get("/evaluations", response_model=StudentEvaluationListResponse)
async def student_evaluations(
    student: dict = Depends(get_current_student),
    repository: PlacementRepository = Depends(get_repository),
    now: datetime = Depends(get_now),
):
    with aggregation_guard("student", "student_evaluations", "Failed to fetch evaluations"):
        return DashboardService(repository, now).student_evaluations(student["user_id"])


@router.get("/attendance", response_model=StudentAttendanceResponse)
async def student_attendance(
    student: dict = Depends(get_current_student),
    repository: PlacementRepository = Depends(get_repository),
    now: datetime = Depends(get_now),
):
    with aggregation_guard("student", "student_attendance", "Failed to fetch attendance"):
        return DashboardService(repository, now).student_attendance(student["user_id"])

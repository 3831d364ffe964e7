"""
Pydantic Schemas - Dashboard Response Contracts

All dashboard payloads in one file for simplicity. Fields are declared in
snake_case and serialized in camelCase (``totalUsers``), which is what the
dashboard front-end reads.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================
# SHARED SERIES ROWS
# ============================================================

class MonthlyRegistration(CamelModel):
    month: str
    users: int

class MonthlyEvaluationCount(CamelModel):
    month: str
    evaluations: int

class SemesterGrowth(CamelModel):
    semester: str
    internships: int

class WeeklyActivity(CamelModel):
    week: str
    evaluations: int

class CompanyPlacements(CamelModel):
    company: str
    placements: int

class CompanyScore(CamelModel):
    company: str
    average_score: float
    evaluation_count: int

class ActiveVsCompleted(CamelModel):
    active: int = 0
    completed: int = 0

class DepartmentCount(CamelModel):
    department: str
    count: int

class RoleCount(CamelModel):
    name: str
    value: int


# ============================================================
# ADMIN
# ============================================================

class AdminDashboardResponse(CamelModel):
    total_users: int = 0
    students: int = 0
    coordinators: int = 0
    supervisors: int = 0
    admins: int = 0
    active_internships: int = 0
    completed_this_year: int = 0
    total_evaluations: int = 0
    monthly_registrations: List[MonthlyRegistration] = []

class AdminAnalyticsResponse(CamelModel):
    total_users: int = 0
    active_internships: int = 0
    completed_internships: int = 0
    average_score: Optional[float] = None
    placement_rate: int = 0
    monthly_registrations: List[MonthlyRegistration] = []
    monthly_evaluations: List[MonthlyEvaluationCount] = []
    department_distribution: List[DepartmentCount] = []
    role_distribution: List[RoleCount] = []
    total_evaluations: int = 0


# ============================================================
# COORDINATOR
# ============================================================

class CoordinatorDashboardResponse(CamelModel):
    total_students: int = 0
    new_students_this_semester: int = 0
    active_internships: int = 0
    placement_rate: int = 0
    completed_this_semester: int = 0
    average_rating: Optional[float] = None

class CoordinatorAnalyticsResponse(CamelModel):
    internship_growth: List[SemesterGrowth] = []
    placement_success_rate: int = 0
    evaluation_completion_rate: int = 0
    placements_per_company: List[CompanyPlacements] = []
    evaluation_scores_by_company: List[CompanyScore] = []
    active_vs_completed: ActiveVsCompleted = ActiveVsCompleted()

class PlacementRow(CamelModel):
    id: int
    student_name: str
    company: str
    position: str
    status: str
    start_date: datetime
    end_date: datetime
    internship_id: int

class PlacementListResponse(CamelModel):
    placements: List[PlacementRow] = []


# ============================================================
# SUPERVISOR
# ============================================================

class SupervisorDashboardResponse(CamelModel):
    intern_count: int = 0
    pending_reviews: int = 0
    completed_evaluations: int = 0
    average_performance: Optional[float] = None

class TopIntern(CamelModel):
    name: str
    average_rating: float
    evaluation_count: int

class CriteriaAverage(CamelModel):
    criteria: str
    average: float

class ScoreBucket(CamelModel):
    rating: int
    count: int

class SupervisorAnalyticsResponse(CamelModel):
    weekly_activity: List[WeeklyActivity] = []
    top_interns: List[TopIntern] = []
    average_by_criteria: List[CriteriaAverage] = []
    score_distribution: List[ScoreBucket] = []

class InternRow(CamelModel):
    id: int
    name: str
    email: str
    company: str
    position: str
    start_date: datetime
    performance_rating: Optional[float] = None

class InternListResponse(CamelModel):
    interns: List[InternRow] = []

class SupervisorEvaluationRow(CamelModel):
    id: int
    student_name: str
    position: str
    due_date: datetime
    submitted_date: Optional[datetime] = None
    status: str
    rating: Optional[float] = None

class SupervisorEvaluationListResponse(CamelModel):
    evaluations: List[SupervisorEvaluationRow] = []


# ============================================================
# STUDENT
# ============================================================

class ActiveInternshipSummary(CamelModel):
    id: int
    company_name: str
    position: str
    department: Optional[str] = None
    start_date: datetime
    end_date: datetime

class InternshipDuration(CamelModel):
    total_weeks: int
    weeks_completed: int

class AttendanceStats(CamelModel):
    percentage: int
    present: int
    total: int

class AttendanceWeek(CamelModel):
    week: str
    present: int = 0
    absent: int = 0
    leave: int = 0

class UpcomingEvaluation(CamelModel):
    due_date: datetime
    evaluation_date: datetime

class StudentDashboardResponse(CamelModel):
    has_active_internship: bool = False
    active_internship: Optional[ActiveInternshipSummary] = None
    duration: Optional[InternshipDuration] = None
    attendance: Optional[AttendanceStats] = None
    rating: Optional[float] = None
    attendance_chart: List[AttendanceWeek] = []
    upcoming_evaluation: Optional[UpcomingEvaluation] = None

class CategoryRating(CamelModel):
    name: str
    rating: float

class StudentEvaluationRow(CamelModel):
    id: int
    evaluator: str
    date: datetime
    overall_rating: Optional[float] = None
    status: str
    categories: List[CategoryRating] = []
    comments: str = ""

class StudentEvaluationListResponse(CamelModel):
    evaluations: List[StudentEvaluationRow] = []

class AttendanceSummary(CamelModel):
    present: int = 0
    absent: int = 0
    leave: int = 0

class StudentAttendanceResponse(CamelModel):
    attendance_summary: AttendanceSummary = AttendanceSummary()
    weekly_attendance: List[AttendanceWeek] = []
    attendance_percentage: float = 0


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class HealthResponse(CamelModel):
    status: str
    repository: str

class ErrorResponse(BaseModel):
    detail: str

"""
Dashboard Aggregation Service

PURPOSE:
Build every role's dashboard payload from repository snapshots.

HOW IT WORKS:
1. Read the role-scoped slice (users, internships, evaluations, attendance)
2. Reduce it: weighted/plain averages, time buckets, counts
3. Rank where a leaderboard is needed (stable Top-N)
4. Resolve the ids that survive ranking to names in one batch per kind
5. Shape the result into the response schema

Each DashboardService is built for one request around the caller's
repository and reference time. It keeps no state between requests, and an
empty slice always yields zero/empty defaults.
"""

import math
from collections import Counter, defaultdict
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional

from app.core.config import Settings, get_settings
from app.core.logging import get_logger
from app.models.entities import (
    AttendanceRecord,
    AttendanceStatus,
    Evaluation,
    EvaluationStatus,
    Internship,
    InternshipStatus,
    User,
    UserRole,
    utcnow,
)
from app.repositories.base import PlacementRepository
from app.services.ranking import top_n
from app.services.resolver import EntityResolver, ReferenceKind
from app.services.scoring import average, round_half_up
from app.services.status_mapping import (
    EvaluationDisplayStatus,
    PlacementStatus,
    evaluation_display_status,
    evaluation_status,
    internship_status,
    is_confirmed,
    placement_status,
)
from app.services.time_buckets import (
    bucket_by_month,
    bucket_by_semester,
    bucket_by_week,
    subtract_months,
    week_number,
)
from app.schemas.schemas import (
    ActiveInternshipSummary,
    ActiveVsCompleted,
    AdminAnalyticsResponse,
    AdminDashboardResponse,
    AttendanceStats,
    AttendanceSummary,
    AttendanceWeek,
    CategoryRating,
    CompanyPlacements,
    CompanyScore,
    CoordinatorAnalyticsResponse,
    CoordinatorDashboardResponse,
    CriteriaAverage,
    DepartmentCount,
    InternListResponse,
    InternRow,
    InternshipDuration,
    MonthlyEvaluationCount,
    MonthlyRegistration,
    PlacementListResponse,
    PlacementRow,
    RoleCount,
    ScoreBucket,
    SemesterGrowth,
    StudentAttendanceResponse,
    StudentDashboardResponse,
    StudentEvaluationListResponse,
    StudentEvaluationRow,
    SupervisorAnalyticsResponse,
    SupervisorDashboardResponse,
    SupervisorEvaluationListResponse,
    SupervisorEvaluationRow,
    TopIntern,
    UpcomingEvaluation,
    WeeklyActivity,
)

ONE_WEEK = timedelta(days=7)
# "This semester" on the coordinator dashboard means the last four months
SEMESTER_MONTHS = 4


# ============================================================
# PURE HELPERS
# ============================================================

def percent(part: int, whole: int) -> int:
    """Whole-number percentage, 0 when there is nothing to divide by."""
    if whole <= 0:
        return 0
    return int(round_half_up(part / whole * 100))


def mean_rating(evaluations: Iterable[Evaluation]) -> Optional[float]:
    """Average overall rating, or None when there are no evaluations."""
    ratings = [e.overall_rating for e in evaluations]
    if not ratings:
        return None
    return average(ratings)


def reviewed(evaluations: Iterable[Evaluation]) -> List[Evaluation]:
    return [e for e in evaluations if e.status == EvaluationStatus.reviewed]


def placement_rate(students: List[User], internships: Iterable[Internship]) -> int:
    """
    Share of students holding at least one confirmed placement.

    A student with both an active and a completed internship is counted
    once, so the rate never exceeds 100.
    """
    student_ids = {s.id for s in students}
    placed = {
        i.student_id for i in internships
        if is_confirmed(i.status) and i.student_id in student_ids
    }
    return percent(len(placed), len(student_ids))


def score_histogram(evaluations: Iterable[Evaluation]) -> List[ScoreBucket]:
    """Counts of overall ratings rounded half-up and clamped to 1..5."""
    counts = Counter(
        min(5, max(1, int(round_half_up(e.overall_rating)))) for e in evaluations
    )
    return [ScoreBucket(rating=r, count=counts[r]) for r in range(1, 6)]


def duration_weeks(start: datetime, end: datetime) -> int:
    """Whole weeks spanned by an internship, rounded up."""
    return max(0, math.ceil((end - start) / ONE_WEEK))


def attendance_by_week(
    records: Iterable[AttendanceRecord],
    now: datetime,
    weeks: int,
) -> List[AttendanceWeek]:
    """Weeks-ago buckets of attendance, split by status. Empty weeks are skipped."""
    per_week: Dict[int, Counter] = defaultdict(Counter)
    for record in records:
        k = week_number(record.date, now)
        if record.date <= now and 1 <= k <= weeks:
            per_week[k][record.status] += 1

    return [
        AttendanceWeek(
            week=f"Week {k}",
            present=per_week[k][AttendanceStatus.present],
            absent=per_week[k][AttendanceStatus.absent],
            leave=per_week[k][AttendanceStatus.leave],
        )
        for k in sorted(per_week)
    ]


# ============================================================
# DASHBOARD SERVICE
# ============================================================

class DashboardService:
    """
    Per-request aggregation over one repository.

    Usage:
        service = DashboardService(repository, now=utcnow())
        payload = service.supervisor_analytics(supervisor_id=7)
    """

    def __init__(
        self,
        repository: PlacementRepository,
        now: Optional[datetime] = None,
        settings: Optional[Settings] = None,
    ):
        self.repository = repository
        self.now = now or utcnow()
        self.settings = settings or get_settings()
        self.resolver = EntityResolver(repository)
        self.logger = get_logger(component="dashboard_service")

    # ------------------------------------------------------------
    # ADMIN
    # ------------------------------------------------------------

    def admin_dashboard(self) -> AdminDashboardResponse:
        users = self.repository.list_users()
        by_role = Counter(u.role for u in users)
        internships = self.repository.list_internships()
        evaluations = self.repository.list_evaluations()

        year_start = datetime(self.now.year, 1, 1)
        completed_this_year = sum(
            1 for i in internships
            if i.status == InternshipStatus.completed and i.updated_at >= year_start
        )

        monthly = bucket_by_month(
            [u.created_at for u in users], self.now, self.settings.monthly_window_months
        )

        self.logger.debug("admin_dashboard_built", users=len(users), internships=len(internships))
        return AdminDashboardResponse(
            total_users=len(users),
            students=by_role[UserRole.student],
            coordinators=by_role[UserRole.coordinator],
            supervisors=by_role[UserRole.supervisor],
            admins=by_role[UserRole.admin],
            active_internships=sum(1 for i in internships if i.status == InternshipStatus.active),
            completed_this_year=completed_this_year,
            total_evaluations=len(evaluations),
            monthly_registrations=[MonthlyRegistration(month=b.label, users=b.count) for b in monthly],
        )

    def admin_analytics(self) -> AdminAnalyticsResponse:
        users = self.repository.list_users()
        by_role = Counter(u.role for u in users)
        students = [u for u in users if u.role == UserRole.student]
        internships = self.repository.list_internships()
        evaluations = self.repository.list_evaluations()
        done = reviewed(evaluations)
        window = self.settings.monthly_window_months

        departments = Counter(i.department or "Unknown" for i in internships)
        ranked_departments = top_n(departments.items(), key=lambda item: item[1])

        return AdminAnalyticsResponse(
            total_users=len(users),
            active_internships=sum(1 for i in internships if i.status == InternshipStatus.active),
            completed_internships=sum(1 for i in internships if i.status == InternshipStatus.completed),
            average_score=mean_rating(done),
            placement_rate=placement_rate(students, internships),
            monthly_registrations=[
                MonthlyRegistration(month=b.label, users=b.count)
                for b in bucket_by_month([u.created_at for u in users], self.now, window)
            ],
            monthly_evaluations=[
                MonthlyEvaluationCount(month=b.label, evaluations=b.count)
                for b in bucket_by_month([e.created_at for e in done], self.now, window)
            ],
            department_distribution=[
                DepartmentCount(department=name, count=count) for name, count in ranked_departments
            ],
            role_distribution=[
                RoleCount(name="Students", value=by_role[UserRole.student]),
                RoleCount(name="Coordinators", value=by_role[UserRole.coordinator]),
                RoleCount(name="Supervisors", value=by_role[UserRole.supervisor]),
                RoleCount(name="Admins", value=by_role[UserRole.admin]),
            ],
            total_evaluations=len(evaluations),
        )

    # ------------------------------------------------------------
    # COORDINATOR
    # ------------------------------------------------------------

    def coordinator_dashboard(self) -> CoordinatorDashboardResponse:
        students = self.repository.list_by_role(UserRole.student)
        internships = self.repository.list_internships()
        done = reviewed(self.repository.list_evaluations())
        since = subtract_months(self.now, SEMESTER_MONTHS)

        return CoordinatorDashboardResponse(
            total_students=len(students),
            new_students_this_semester=sum(1 for s in students if s.created_at >= since),
            active_internships=sum(1 for i in internships if i.status == InternshipStatus.active),
            placement_rate=placement_rate(students, internships),
            completed_this_semester=sum(
                1 for i in internships
                if i.status == InternshipStatus.completed and i.updated_at >= since
            ),
            average_rating=mean_rating(done),
        )

    def coordinator_analytics(self) -> CoordinatorAnalyticsResponse:
        students = self.repository.list_by_role(UserRole.student)
        internships = self.repository.list_internships()
        evaluations = self.repository.list_evaluations()
        done = reviewed(evaluations)
        limit = self.settings.top_companies_limit

        growth = bucket_by_semester(
            [i.created_at for i in internships], self.now, self.settings.semester_window_years
        )

        # Placements per company, Top-N by count
        placements = Counter(i.company_id for i in internships)
        top_placements = top_n(placements.items(), limit, key=lambda item: item[1])

        # Reviewed evaluation scores per company via evaluation -> internship -> company
        internship_by_id = {i.id: i for i in internships}
        ratings_by_company: Dict[int, List[float]] = defaultdict(list)
        for evaluation in done:
            internship = internship_by_id.get(evaluation.internship_id)
            if internship is not None:
                ratings_by_company[internship.company_id].append(evaluation.overall_rating)

        company_scores = top_n(
            (
                (company_id, average(ratings), len(ratings))
                for company_id, ratings in ratings_by_company.items()
            ),
            limit,
            key=lambda row: row[1],
        )

        self.resolver.prefetch(
            ReferenceKind.company,
            [c for c, _ in top_placements] + [c for c, _, _ in company_scores],
        )

        return CoordinatorAnalyticsResponse(
            internship_growth=[SemesterGrowth(semester=b.label, internships=b.count) for b in growth],
            placement_success_rate=placement_rate(students, internships),
            evaluation_completion_rate=percent(len(done), len(evaluations)),
            placements_per_company=[
                CompanyPlacements(
                    company=self.resolver.display_name(ReferenceKind.company, company_id),
                    placements=count,
                )
                for company_id, count in top_placements
            ],
            evaluation_scores_by_company=[
                CompanyScore(
                    company=self.resolver.display_name(ReferenceKind.company, company_id),
                    average_score=score,
                    evaluation_count=count,
                )
                for company_id, score, count in company_scores
            ],
            active_vs_completed=ActiveVsCompleted(
                active=sum(1 for i in internships if i.status == InternshipStatus.active),
                completed=sum(1 for i in internships if i.status == InternshipStatus.completed),
            ),
        )

    def coordinator_placements(self, status: Optional[PlacementStatus] = None) -> PlacementListResponse:
        internships = self.repository.list_internships()
        if status is not None:
            wanted = internship_status(status)
            internships = [i for i in internships if i.status == wanted]

        self.resolver.prefetch(ReferenceKind.student, [i.student_id for i in internships])
        self.resolver.prefetch(ReferenceKind.company, [i.company_id for i in internships])

        return PlacementListResponse(placements=[
            PlacementRow(
                id=i.id,
                student_name=self.resolver.display_name(ReferenceKind.student, i.student_id),
                company=self.resolver.display_name(ReferenceKind.company, i.company_id),
                position=i.position,
                status=placement_status(i.status).value,
                start_date=i.start_date,
                end_date=i.end_date,
                internship_id=i.id,
            )
            for i in internships
        ])

    # ------------------------------------------------------------
    # SUPERVISOR
    # ------------------------------------------------------------

    def supervisor_dashboard(self, supervisor_id: int) -> SupervisorDashboardResponse:
        internships = self.repository.list_internships(supervisor_id=supervisor_id)
        evaluations = self.repository.list_evaluations(evaluator_id=supervisor_id)

        active_interns = {i.student_id for i in internships if i.status == InternshipStatus.active}
        horizon = self.now + ONE_WEEK
        due_this_week = [
            e for e in evaluations
            if e.status == EvaluationStatus.draft and self.now <= e.due_date <= horizon
        ]
        done = reviewed(evaluations)

        return SupervisorDashboardResponse(
            intern_count=len(active_interns),
            pending_reviews=len(due_this_week),
            completed_evaluations=len(done),
            average_performance=mean_rating(done),
        )

    def supervisor_analytics(self, supervisor_id: int) -> SupervisorAnalyticsResponse:
        done = reviewed(self.repository.list_evaluations(evaluator_id=supervisor_id))

        ratings_by_intern: Dict[int, List[float]] = defaultdict(list)
        ratings_by_criteria: Dict[str, List[float]] = defaultdict(list)
        for evaluation in done:
            ratings_by_intern[evaluation.student_id].append(evaluation.overall_rating)
            for category in evaluation.categories:
                ratings_by_criteria[category.name].append(category.rating)

        leaders = top_n(
            (
                (student_id, average(ratings), len(ratings))
                for student_id, ratings in ratings_by_intern.items()
            ),
            self.settings.top_interns_limit,
            key=lambda row: row[1],
        )
        self.resolver.prefetch(ReferenceKind.student, [s for s, _, _ in leaders])

        return SupervisorAnalyticsResponse(
            weekly_activity=[
                WeeklyActivity(week=b.label, evaluations=b.count)
                for b in bucket_by_week(
                    [e.created_at for e in done], self.now, self.settings.weekly_window_weeks
                )
            ],
            top_interns=[
                TopIntern(
                    name=self.resolver.display_name(ReferenceKind.student, student_id),
                    average_rating=score,
                    evaluation_count=count,
                )
                for student_id, score, count in leaders
            ],
            average_by_criteria=[
                CriteriaAverage(criteria=name, average=average(ratings))
                for name, ratings in ratings_by_criteria.items()
            ],
            score_distribution=score_histogram(done),
        )

    def supervisor_interns(self, supervisor_id: int) -> InternListResponse:
        active = [
            i for i in self.repository.list_internships(supervisor_id=supervisor_id)
            if i.status == InternshipStatus.active
        ]
        # Newest first, so the first reviewed evaluation is the latest
        latest_rating: Dict[int, float] = {}
        for internship in active:
            done = reviewed(self.repository.list_evaluations(internship_id=internship.id))
            if done:
                latest_rating[internship.id] = done[0].overall_rating

        self.resolver.prefetch(ReferenceKind.student, [i.student_id for i in active])
        self.resolver.prefetch(ReferenceKind.company, [i.company_id for i in active])

        interns = []
        for internship in active:
            student = self.resolver.resolve(ReferenceKind.student, internship.student_id)
            interns.append(InternRow(
                id=internship.id,
                name=self.resolver.display_name(ReferenceKind.student, internship.student_id),
                email=student.email if student else "Unknown Email",
                company=self.resolver.display_name(ReferenceKind.company, internship.company_id),
                position=internship.position,
                start_date=internship.start_date,
                performance_rating=latest_rating.get(internship.id),
            ))
        return InternListResponse(interns=interns)

    def supervisor_evaluations(
        self,
        supervisor_id: int,
        status: Optional[EvaluationDisplayStatus] = None,
    ) -> SupervisorEvaluationListResponse:
        evaluations = self.repository.list_evaluations(evaluator_id=supervisor_id)
        if status is not None:
            wanted = evaluation_status(status)
            evaluations = [e for e in evaluations if e.status == wanted]

        self.resolver.prefetch(ReferenceKind.student, [e.student_id for e in evaluations])
        self.resolver.prefetch(ReferenceKind.internship, [e.internship_id for e in evaluations])

        rows = []
        for evaluation in evaluations:
            internship = self.resolver.resolve(ReferenceKind.internship, evaluation.internship_id)
            rows.append(SupervisorEvaluationRow(
                id=evaluation.id,
                student_name=self.resolver.display_name(ReferenceKind.student, evaluation.student_id),
                position=internship.position if internship else "Unknown Position",
                due_date=evaluation.due_date,
                submitted_date=evaluation.updated_at if evaluation.is_reviewed else None,
                status=evaluation_display_status(evaluation.status).value,
                rating=evaluation.overall_rating if evaluation.is_reviewed else None,
            ))
        return SupervisorEvaluationListResponse(evaluations=rows)

    # ------------------------------------------------------------
    # STUDENT
    # ------------------------------------------------------------

    def _active_internship(self, student_id: int) -> Optional[Internship]:
        internships = self.repository.list_internships(student_id=student_id)
        return next((i for i in internships if i.status == InternshipStatus.active), None)

    def student_dashboard(self, student_id: int) -> StudentDashboardResponse:
        internship = self._active_internship(student_id)
        if internship is None:
            return StudentDashboardResponse()

        records = self.repository.list_attendance(internship_id=internship.id)
        present = sum(1 for r in records if r.status == AttendanceStatus.present)
        absent = sum(1 for r in records if r.status == AttendanceStatus.absent)

        evaluations = [
            e for e in self.repository.list_evaluations(student_id=student_id)
            if e.internship_id == internship.id
        ]
        upcoming = sorted(
            (
                e for e in evaluations
                if e.status == EvaluationStatus.draft and e.due_date > self.now
            ),
            key=lambda e: e.due_date,
        )

        return StudentDashboardResponse(
            has_active_internship=True,
            active_internship=ActiveInternshipSummary(
                id=internship.id,
                company_name=self.resolver.display_name(ReferenceKind.company, internship.company_id),
                position=internship.position,
                department=internship.department,
                start_date=internship.start_date,
                end_date=internship.end_date,
            ),
            duration=InternshipDuration(
                total_weeks=duration_weeks(internship.start_date, internship.end_date),
                weeks_completed=max(0, math.floor((self.now - internship.start_date) / ONE_WEEK)),
            ),
            attendance=AttendanceStats(
                percentage=percent(present, present + absent),
                present=present,
                total=present + absent,
            ),
            rating=mean_rating(reviewed(evaluations)),
            attendance_chart=attendance_by_week(
                records, self.now, self.settings.dashboard_attendance_weeks
            ),
            upcoming_evaluation=(
                UpcomingEvaluation(
                    due_date=upcoming[0].due_date,
                    evaluation_date=upcoming[0].evaluation_date,
                )
                if upcoming else None
            ),
        )

    def student_evaluations(self, student_id: int) -> StudentEvaluationListResponse:
        evaluations = self.repository.list_evaluations(student_id=student_id)
        self.resolver.prefetch(ReferenceKind.evaluator, [e.evaluator_id for e in evaluations])

        rows = []
        for evaluation in evaluations:
            visible = evaluation.is_reviewed
            rows.append(StudentEvaluationRow(
                id=evaluation.id,
                evaluator=self.resolver.display_name(ReferenceKind.evaluator, evaluation.evaluator_id),
                date=evaluation.evaluation_date,
                overall_rating=evaluation.overall_rating if visible else None,
                status=evaluation.status.value,
                categories=[
                    CategoryRating(name=c.name, rating=c.rating) for c in evaluation.categories
                ] if visible else [],
                comments=evaluation.feedback if visible else "",
            ))
        return StudentEvaluationListResponse(evaluations=rows)

    def student_attendance(self, student_id: int) -> StudentAttendanceResponse:
        internship = self._active_internship(student_id)
        if internship is None:
            return StudentAttendanceResponse()

        records = self.repository.list_attendance(internship_id=internship.id)
        summary = Counter(r.status for r in records)
        present = summary[AttendanceStatus.present]
        absent = summary[AttendanceStatus.absent]
        leave = summary[AttendanceStatus.leave]
        total = present + absent + leave

        return StudentAttendanceResponse(
            attendance_summary=AttendanceSummary(present=present, absent=absent, leave=leave),
            weekly_attendance=attendance_by_week(
                records, self.now, self.settings.attendance_window_weeks
            ),
            attendance_percentage=round_half_up(present / total * 100, 1) if total else 0,
        )

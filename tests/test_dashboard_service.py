"""
Tests for the dashboard aggregation service.

Most tests run against the seeded programme from conftest (NOW is
2025-10-15 12:00); the degenerate cases build their own repositories.
"""

from datetime import datetime
from unittest.mock import Mock

import pytest

from app.core.config import Settings
from app.models.entities import EvaluationStatus, InternshipStatus, UserRole
from app.repositories.memory import InMemoryRepository
from app.services.dashboard_service import (
    DashboardService,
    duration_weeks,
    percent,
    placement_rate,
    score_histogram,
)
from app.services.status_mapping import EvaluationDisplayStatus, PlacementStatus

from conftest import NOW


@pytest.fixture
def service(repository):
    return DashboardService(repository, now=NOW)


@pytest.fixture
def empty_service():
    return DashboardService(InMemoryRepository(), now=NOW)


# ============================================================================
# Helpers
# ============================================================================


class TestHelpers:

    def test_percent(self):
        assert percent(2, 3) == 67
        assert percent(1, 8) == 13
        assert percent(5, 0) == 0

    def test_duration_weeks_rounds_up(self):
        assert duration_weeks(datetime(2025, 9, 1), datetime(2025, 12, 1)) == 13
        assert duration_weeks(datetime(2025, 9, 1), datetime(2025, 9, 9)) == 2

    def test_histogram_rounds_half_up_and_clamps(self, factory):
        evaluations = [
            factory.evaluation(i, internship_id=1, student_id=1, overall_rating=r)
            for i, r in enumerate([4.4, 4.6, 1.0])
        ]
        counts = {b.rating: b.count for b in score_histogram(evaluations)}
        assert counts == {1: 1, 2: 0, 3: 0, 4: 1, 5: 1}

    def test_histogram_clamps_out_of_range(self, factory):
        evaluations = [
            factory.evaluation(1, internship_id=1, student_id=1, overall_rating=0.0),
            factory.evaluation(2, internship_id=1, student_id=1, overall_rating=6.2),
        ]
        counts = {b.rating: b.count for b in score_histogram(evaluations)}
        assert counts[1] == 1
        assert counts[5] == 1

    def test_empty_histogram_has_five_rows(self):
        assert [(b.rating, b.count) for b in score_histogram([])] == [(r, 0) for r in range(1, 6)]


class TestPlacementRate:

    def test_student_with_two_confirmed_internships_counts_once(self, factory):
        students = [factory.user(1)]
        internships = [
            factory.internship(10, student_id=1, status=InternshipStatus.active),
            factory.internship(11, student_id=1, status=InternshipStatus.completed),
        ]
        assert placement_rate(students, internships) == 100

    def test_no_confirmed_placements(self, factory):
        students = [factory.user(1), factory.user(2)]
        internships = [
            factory.internship(10, student_id=1, status=InternshipStatus.pending),
            factory.internship(11, student_id=2, status=InternshipStatus.terminated),
        ]
        assert placement_rate(students, internships) == 0

    def test_no_students(self):
        assert placement_rate([], []) == 0


# ============================================================================
# Admin
# ============================================================================


class TestAdmin:

    def test_dashboard_counts(self, service):
        result = service.admin_dashboard()

        assert result.total_users == 6
        assert (result.students, result.coordinators, result.supervisors, result.admins) == (3, 1, 1, 1)
        assert result.active_internships == 1
        assert result.completed_this_year == 1
        assert result.total_evaluations == 4

    def test_monthly_registrations_window(self, service):
        months = [(m.month, m.users) for m in service.admin_dashboard().monthly_registrations]
        # Cara (May 2024) is outside the 12-month window
        assert months == [
            ("Jan 2025", 1), ("Feb 2025", 1), ("Mar 2025", 1), ("Aug 2025", 1), ("Sep 2025", 1),
        ]

    def test_analytics(self, service):
        result = service.admin_analytics()

        assert result.average_score == 4.5
        assert result.placement_rate == 67
        assert result.completed_internships == 1
        assert [(m.month, m.evaluations) for m in result.monthly_evaluations] == [
            ("Jun 2025", 1), ("Oct 2025", 1),
        ]
        assert [(d.department, d.count) for d in result.department_distribution] == [
            ("Engineering", 1), ("Analytics", 1), ("Unknown", 1),
        ]
        assert [(r.name, r.value) for r in result.role_distribution] == [
            ("Students", 3), ("Coordinators", 1), ("Supervisors", 1), ("Admins", 1),
        ]

    def test_empty_repository(self, empty_service):
        result = empty_service.admin_analytics()

        assert result.total_users == 0
        assert result.average_score is None
        assert result.placement_rate == 0
        assert result.monthly_registrations == []
        assert empty_service.admin_dashboard().monthly_registrations == []


# ============================================================================
# Coordinator
# ============================================================================


class TestCoordinator:

    def test_dashboard(self, service):
        result = service.coordinator_dashboard()

        assert result.total_students == 3
        assert result.new_students_this_semester == 2
        assert result.active_internships == 1
        assert result.placement_rate == 67
        assert result.completed_this_semester == 0
        assert result.average_rating == 4.5

    def test_analytics(self, service):
        result = service.coordinator_analytics()

        assert [(g.semester, g.internships) for g in result.internship_growth] == [
            ("Fall 2024", 1), ("Spring 2025", 1), ("Fall 2025", 1),
        ]
        assert result.placement_success_rate == 67
        assert result.evaluation_completion_rate == 50
        assert [(p.company, p.placements) for p in result.placements_per_company] == [
            ("Acme Corp", 2), ("Globex", 1),
        ]
        assert [(s.company, s.average_score, s.evaluation_count)
                for s in result.evaluation_scores_by_company] == [
            ("Globex", 4.6, 1), ("Acme Corp", 4.4, 1),
        ]
        assert (result.active_vs_completed.active, result.active_vs_completed.completed) == (1, 1)

    def test_unknown_company_in_rankings(self, factory):
        repository = InMemoryRepository([
            factory.user(1),
            factory.internship(10, student_id=1, company_id=999),
        ])
        result = DashboardService(repository, now=NOW).coordinator_analytics()
        assert result.placements_per_company[0].company == "Unknown Company"

    def test_evaluation_without_internship_is_skipped(self, factory):
        repository = InMemoryRepository([
            factory.evaluation(1, internship_id=404, student_id=1, overall_rating=5.0),
        ])
        result = DashboardService(repository, now=NOW).coordinator_analytics()
        assert result.evaluation_scores_by_company == []
        assert result.evaluation_completion_rate == 100

    def test_placements(self, service):
        rows = service.coordinator_placements().placements

        assert [(r.id, r.student_name, r.company, r.status) for r in rows] == [
            (100, "Alice Student", "Acme Corp", "confirmed"),
            (101, "Bob Student", "Globex", "completed"),
            (102, "Bob Student", "Acme Corp", "pending"),
        ]

    def test_placements_filtered_by_status(self, service):
        rows = service.coordinator_placements(PlacementStatus.confirmed).placements
        assert [r.internship_id for r in rows] == [100]

    def test_empty_repository(self, empty_service):
        result = empty_service.coordinator_analytics()
        assert result.internship_growth == []
        assert result.placement_success_rate == 0
        assert result.evaluation_completion_rate == 0
        assert empty_service.coordinator_dashboard().average_rating is None


# ============================================================================
# Supervisor
# ============================================================================


class TestSupervisor:

    def test_dashboard(self, service):
        result = service.supervisor_dashboard(3)

        assert result.intern_count == 1
        assert result.pending_reviews == 1
        assert result.completed_evaluations == 2
        assert result.average_performance == 4.5

    def test_analytics(self, service):
        result = service.supervisor_analytics(3)

        assert [(w.week, w.evaluations) for w in result.weekly_activity] == [("Week 1", 1)]
        assert [(t.name, t.average_rating, t.evaluation_count) for t in result.top_interns] == [
            ("Bob Student", 4.6, 1), ("Alice Student", 4.4, 1),
        ]
        assert [(c.criteria, c.average) for c in result.average_by_criteria] == [
            ("Technical", 4.5), ("Communication", 4.5),
        ]
        assert {b.rating: b.count for b in result.score_distribution} == {1: 0, 2: 0, 3: 0, 4: 1, 5: 1}

    def test_top_interns_limited_to_five(self, factory):
        entities = [factory.user(i, UserRole.student, f"Student {i}") for i in range(1, 8)]
        entities += [
            factory.evaluation(100 + i, internship_id=1, student_id=i, overall_rating=float(i % 5 + 1))
            for i in range(1, 8)
        ]
        result = DashboardService(InMemoryRepository(entities), now=NOW).supervisor_analytics(3)
        assert len(result.top_interns) == 5
        assert result.top_interns[0].average_rating == 5.0

    def test_analytics_for_supervisor_without_evaluations(self, service):
        result = service.supervisor_analytics(99)

        assert result.weekly_activity == []
        assert result.top_interns == []
        assert result.average_by_criteria == []
        assert len(result.score_distribution) == 5

    def test_interns(self, service):
        interns = service.supervisor_interns(3).interns

        assert len(interns) == 1
        intern = interns[0]
        assert (intern.name, intern.email, intern.company, intern.position) == (
            "Alice Student", "user4@example.edu", "Acme Corp", "Backend Intern",
        )
        assert intern.performance_rating == 4.4

    def test_interns_read_only_their_internships_evaluations(self, repository):
        spy = Mock(wraps=repository)

        DashboardService(spy, now=NOW).supervisor_interns(3)

        spy.list_evaluations.assert_called_once_with(internship_id=100)

    def test_interns_use_latest_reviewed_rating(self, factory):
        repository = InMemoryRepository([
            factory.internship(1, student_id=7),
            factory.evaluation(1, internship_id=1, student_id=7, overall_rating=3.0,
                               created_at=datetime(2025, 9, 1)),
            factory.evaluation(2, internship_id=1, student_id=7, overall_rating=4.0,
                               created_at=datetime(2025, 10, 1)),
        ])
        intern = DashboardService(repository, now=NOW).supervisor_interns(3).interns[0]
        assert intern.performance_rating == 4.0
        assert intern.name == "Unknown Student"

    def test_evaluations(self, service):
        rows = service.supervisor_evaluations(3).evaluations

        assert [r.id for r in rows] == [200, 202, 201, 203]
        reviewed_row, draft_row = rows[0], rows[1]
        assert (reviewed_row.status, reviewed_row.rating, reviewed_row.position) == (
            "submitted", 4.4, "Backend Intern",
        )
        assert reviewed_row.submitted_date == datetime(2025, 10, 13)
        assert (draft_row.status, draft_row.rating, draft_row.submitted_date) == ("pending", None, None)
        assert rows[3].status == "awaiting_review"

    def test_evaluations_filtered_by_display_status(self, service):
        rows = service.supervisor_evaluations(3, EvaluationDisplayStatus.pending).evaluations
        assert [r.id for r in rows] == [202]

    def test_evaluation_for_missing_internship(self, factory):
        repository = InMemoryRepository([
            factory.evaluation(1, internship_id=404, student_id=7, status=EvaluationStatus.draft),
        ])
        row = DashboardService(repository, now=NOW).supervisor_evaluations(3).evaluations[0]
        assert row.position == "Unknown Position"
        assert row.student_name == "Unknown Student"


# ============================================================================
# Student
# ============================================================================


class TestStudent:

    def test_dashboard(self, service):
        result = service.student_dashboard(4)

        assert result.has_active_internship is True
        assert result.active_internship.company_name == "Acme Corp"
        assert (result.duration.total_weeks, result.duration.weeks_completed) == (13, 6)
        assert (result.attendance.percentage, result.attendance.present, result.attendance.total) == (75, 3, 4)
        assert result.rating == 4.4
        assert [(w.week, w.present, w.absent, w.leave) for w in result.attendance_chart] == [
            ("Week 1", 2, 0, 0), ("Week 2", 0, 1, 0), ("Week 3", 0, 0, 1),
        ]
        assert result.upcoming_evaluation.due_date == datetime(2025, 10, 18)

    def test_dashboard_chart_window_is_configurable(self, repository):
        settings = Settings(dashboard_attendance_weeks=2)
        result = DashboardService(repository, now=NOW, settings=settings).student_dashboard(4)

        assert [w.week for w in result.attendance_chart] == ["Week 1", "Week 2"]

    def test_dashboard_without_active_internship(self, service):
        result = service.student_dashboard(6)

        assert result.has_active_internship is False
        assert result.active_internship is None
        assert result.attendance_chart == []

    def test_evaluations_hide_details_until_reviewed(self, service):
        rows = {r.id: r for r in service.student_evaluations(4).evaluations}

        assert set(rows) == {200, 202}
        assert rows[200].evaluator == "Sam Supervisor"
        assert rows[200].overall_rating == 4.4
        assert [c.name for c in rows[200].categories] == ["Technical", "Communication"]
        assert rows[200].comments == "Solid sprint"
        assert (rows[202].overall_rating, rows[202].categories, rows[202].comments) == (None, [], "")

    def test_unknown_evaluator(self, factory):
        repository = InMemoryRepository([
            factory.evaluation(1, internship_id=1, student_id=7, evaluator_id=404, overall_rating=4.0),
        ])
        row = DashboardService(repository, now=NOW).student_evaluations(7).evaluations[0]
        assert row.evaluator == "Unknown Evaluator"

    def test_attendance(self, service):
        result = service.student_attendance(4)

        summary = result.attendance_summary
        assert (summary.present, summary.absent, summary.leave) == (3, 1, 1)
        assert result.attendance_percentage == 60.0
        # 2 Sep is seven weeks back, outside the six-week view
        assert [w.week for w in result.weekly_attendance] == ["Week 1", "Week 2", "Week 3"]

    def test_attendance_without_records(self, empty_service):
        result = empty_service.student_attendance(4)

        assert result.attendance_percentage == 0
        assert result.weekly_attendance == []

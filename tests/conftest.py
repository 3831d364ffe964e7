"""
Shared fixtures: entity factories, a seeded in-memory repository and an API
client wired to it with a fixed clock.
"""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_now, get_repository
from app.core.auth import create_access_token
from app.main import app
from app.models.entities import (
    AttendanceRecord,
    AttendanceStatus,
    Company,
    Evaluation,
    EvaluationStatus,
    Internship,
    InternshipStatus,
    User,
    UserRole,
)
from app.repositories.memory import InMemoryRepository

# Wednesday, mid-October
NOW = datetime(2025, 10, 15, 12, 0, 0)


class Factory:
    """Builds entities with sensible defaults so tests only state what matters."""

    @staticmethod
    def user(id, role=UserRole.student, name=None, created_at=datetime(2025, 1, 1), **kwargs):
        return User(
            id=id,
            name=name or f"User {id}",
            email=kwargs.pop("email", f"user{id}@example.edu"),
            role=role,
            created_at=created_at,
            **kwargs,
        )

    @staticmethod
    def company(id, name=None, **kwargs):
        return Company(id=id, name=name or f"Company {id}", **kwargs)

    @staticmethod
    def internship(
        id,
        student_id,
        company_id=10,
        supervisor_id=3,
        status=InternshipStatus.active,
        position="Intern",
        start_date=datetime(2025, 9, 1),
        end_date=datetime(2025, 12, 1),
        created_at=datetime(2025, 8, 1),
        updated_at=None,
        **kwargs,
    ):
        return Internship(
            id=id,
            student_id=student_id,
            company_id=company_id,
            supervisor_id=supervisor_id,
            status=status,
            position=position,
            start_date=start_date,
            end_date=end_date,
            created_at=created_at,
            updated_at=updated_at or created_at,
            **kwargs,
        )

    @staticmethod
    def evaluation(
        id,
        internship_id,
        student_id,
        evaluator_id=3,
        status=EvaluationStatus.reviewed,
        categories=(),
        created_at=datetime(2025, 10, 1),
        due_date=None,
        **kwargs,
    ):
        return Evaluation(
            id=id,
            internship_id=internship_id,
            student_id=student_id,
            evaluator_id=evaluator_id,
            status=status,
            categories=list(categories),
            evaluation_date=kwargs.pop("evaluation_date", created_at),
            due_date=due_date or created_at,
            created_at=created_at,
            updated_at=kwargs.pop("updated_at", created_at),
            **kwargs,
        )

    @staticmethod
    def attendance(id, internship_id, date, status=AttendanceStatus.present, **kwargs):
        return AttendanceRecord(id=id, internship_id=internship_id, date=date, status=status, **kwargs)


@pytest.fixture
def factory():
    return Factory


@pytest.fixture
def seeded_entities():
    """
    A small programme: one admin, one coordinator, one supervisor (id 3),
    three students (4, 5, 6), two companies (10, 11), three internships.
    """
    f = Factory
    return [
        f.user(1, UserRole.admin, "Ada Admin", datetime(2025, 1, 10)),
        f.user(2, UserRole.coordinator, "Cora Coordinator", datetime(2025, 3, 5)),
        f.user(3, UserRole.supervisor, "Sam Supervisor", datetime(2025, 2, 1)),
        f.user(4, UserRole.student, "Alice Student", datetime(2025, 9, 1)),
        f.user(5, UserRole.student, "Bob Student", datetime(2025, 8, 20)),
        f.user(6, UserRole.student, "Cara Student", datetime(2024, 5, 1)),
        f.company(10, "Acme Corp"),
        f.company(11, "Globex"),
        f.internship(
            100, student_id=4, company_id=10, position="Backend Intern", department="Engineering",
            created_at=datetime(2025, 8, 15), updated_at=datetime(2025, 9, 1),
        ),
        f.internship(
            101, student_id=5, company_id=11, position="Data Intern", department="Analytics",
            status=InternshipStatus.completed,
            start_date=datetime(2025, 3, 1), end_date=datetime(2025, 6, 1),
            created_at=datetime(2025, 2, 10), updated_at=datetime(2025, 6, 5),
        ),
        f.internship(
            102, student_id=5, company_id=10, position="Ops Intern",
            status=InternshipStatus.pending,
            start_date=datetime(2026, 1, 5), end_date=datetime(2026, 3, 5),
            created_at=datetime(2024, 11, 1),
        ),
        f.evaluation(
            200, internship_id=100, student_id=4,
            categories=[
                {"name": "Technical", "rating": 4, "weight": 0.6},
                {"name": "Communication", "rating": 5, "weight": 0.4},
            ],
            created_at=datetime(2025, 10, 13), evaluation_date=datetime(2025, 10, 10),
            due_date=datetime(2025, 10, 12), feedback="Solid sprint",
        ),
        f.evaluation(
            201, internship_id=101, student_id=5,
            categories=[
                {"name": "Technical", "rating": 5, "weight": 0.6},
                {"name": "Communication", "rating": 4, "weight": 0.4},
            ],
            created_at=datetime(2025, 6, 5),
        ),
        f.evaluation(
            202, internship_id=100, student_id=4, status=EvaluationStatus.draft,
            created_at=datetime(2025, 10, 1), due_date=datetime(2025, 10, 18),
            evaluation_date=datetime(2025, 10, 17),
        ),
        f.evaluation(
            203, internship_id=101, student_id=5, status=EvaluationStatus.submitted,
            created_at=datetime(2025, 5, 20), due_date=datetime(2025, 5, 25),
        ),
        f.attendance(300, 100, datetime(2025, 10, 14)),
        f.attendance(301, 100, datetime(2025, 10, 13)),
        f.attendance(302, 100, datetime(2025, 10, 6), AttendanceStatus.absent),
        f.attendance(303, 100, datetime(2025, 10, 1), AttendanceStatus.leave),
        f.attendance(304, 100, datetime(2025, 9, 2)),
    ]


@pytest.fixture
def repository(seeded_entities):
    return InMemoryRepository(seeded_entities)


@pytest.fixture
def client(repository):
    """TestClient bound to the seeded repository and the fixed clock."""
    app.dependency_overrides[get_repository] = lambda: repository
    app.dependency_overrides[get_now] = lambda: NOW
    app.state.repository = repository
    yield TestClient(app)
    app.dependency_overrides.clear()
    app.state.repository = None


@pytest.fixture
def auth_headers():
    """Bearer header for a user id (or any raw ``sub`` claim)."""
    def _headers(sub):
        token = create_access_token({"sub": str(sub)})
        return {"Authorization": f"Bearer {token}"}
    return _headers

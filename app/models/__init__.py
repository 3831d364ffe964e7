"""
Models module - immutable domain snapshots consumed by the analytics engine.

Difference from schemas:
- Models: internal records as the repository returns them
- Schemas: API contract (what the dashboards return)
"""

from app.models.entities import (
    AttendanceRecord,
    AttendanceStatus,
    Company,
    Evaluation,
    EvaluationCategory,
    EvaluationStatus,
    Internship,
    InternshipStatus,
    User,
    UserRole,
)

__all__ = [
    "AttendanceRecord",
    "AttendanceStatus",
    "Company",
    "Evaluation",
    "EvaluationCategory",
    "EvaluationStatus",
    "Internship",
    "InternshipStatus",
    "User",
    "UserRole",
]

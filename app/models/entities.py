"""
Domain Entities - immutable snapshots read from the repository.

Every record the analytics engine touches is one of these frozen pydantic
models. They are created by the persistence layer and never mutated while an
aggregation runs.

Timestamps are normalized to naive UTC so that comparisons against the
engine's clock never mix aware and naive datetimes.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    student = "student"
    coordinator = "coordinator"
    supervisor = "supervisor"
    admin = "admin"


class InternshipStatus(str, Enum):
    pending = "pending"
    active = "active"
    completed = "completed"
    terminated = "terminated"


class EvaluationStatus(str, Enum):
    draft = "draft"
    submitted = "submitted"
    reviewed = "reviewed"


class AttendanceStatus(str, Enum):
    present = "present"
    absent = "absent"
    leave = "leave"
    holiday = "holiday"


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are assumed UTC."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Snapshot(BaseModel):
    """Base for all entities: frozen, timestamps normalized to naive UTC."""

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    @field_validator("*", mode="after")
    @classmethod
    def _normalize_datetimes(cls, value):
        if isinstance(value, datetime):
            return to_naive_utc(value)
        return value


# ============================================================
# ENTITIES
# ============================================================

class User(Snapshot):
    id: int
    name: str
    email: str
    role: UserRole
    phone: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class Company(Snapshot):
    id: int
    name: str
    email: Optional[str] = None
    industry: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    website: Optional[str] = None


class Internship(Snapshot):
    id: int
    student_id: int
    company_id: int
    supervisor_id: int
    position: str
    department: Optional[str] = None
    start_date: datetime
    end_date: datetime
    status: InternshipStatus = InternshipStatus.pending
    created_at: datetime
    updated_at: datetime


class EvaluationCategory(Snapshot):
    name: str
    # Not clamped: out-of-range ratings are surfaced, not masked.
    rating: float
    weight: float = Field(0.0, ge=0)
    comments: Optional[str] = None


class Evaluation(Snapshot):
    id: int
    internship_id: int
    evaluator_id: int
    student_id: int
    evaluation_date: datetime
    due_date: datetime
    status: EvaluationStatus = EvaluationStatus.draft
    categories: List[EvaluationCategory] = []
    overall_rating: Optional[float] = None
    feedback: str = ""
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="before")
    @classmethod
    def _derive_overall_rating(cls, data):
        """Fill overall_rating from the weighted categories when absent."""
        if isinstance(data, dict) and data.get("overall_rating") is None:
            from app.services.scoring import weighted_score

            categories = [
                c if isinstance(c, EvaluationCategory) else EvaluationCategory(**c)
                for c in data.get("categories") or []
            ]
            data = {**data, "categories": categories, "overall_rating": weighted_score(categories)}
        return data

    @property
    def is_reviewed(self) -> bool:
        return self.status == EvaluationStatus.reviewed


class AttendanceRecord(Snapshot):
    id: int
    internship_id: int
    date: datetime
    status: AttendanceStatus
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    notes: Optional[str] = None
    marked_by: Optional[int] = None

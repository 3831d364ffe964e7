"""
Status Mapping - internal record states vs. statuses shown on dashboards.

Internships are presented to coordinators as "placements" and evaluations are
presented to supervisors with a simplified status. Both directions live in
one table each; the import-time checks fail loudly if a new enum member is
added without a mapping.
"""

from enum import Enum
from typing import Dict

from app.models.entities import EvaluationStatus, InternshipStatus


class PlacementStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    completed = "completed"
    rejected = "rejected"


class EvaluationDisplayStatus(str, Enum):
    pending = "pending"
    awaiting_review = "awaiting_review"
    submitted = "submitted"


INTERNSHIP_TO_PLACEMENT: Dict[InternshipStatus, PlacementStatus] = {
    InternshipStatus.pending: PlacementStatus.pending,
    InternshipStatus.active: PlacementStatus.confirmed,
    InternshipStatus.completed: PlacementStatus.completed,
    InternshipStatus.terminated: PlacementStatus.rejected,
}

EVALUATION_TO_DISPLAY: Dict[EvaluationStatus, EvaluationDisplayStatus] = {
    EvaluationStatus.draft: EvaluationDisplayStatus.pending,
    EvaluationStatus.submitted: EvaluationDisplayStatus.awaiting_review,
    EvaluationStatus.reviewed: EvaluationDisplayStatus.submitted,
}

PLACEMENT_TO_INTERNSHIP: Dict[PlacementStatus, InternshipStatus] = {
    v: k for k, v in INTERNSHIP_TO_PLACEMENT.items()
}

DISPLAY_TO_EVALUATION: Dict[EvaluationDisplayStatus, EvaluationStatus] = {
    v: k for k, v in EVALUATION_TO_DISPLAY.items()
}

# Placements that count as a confirmed placement for success-rate metrics.
CONFIRMED_PLACEMENTS = frozenset({PlacementStatus.confirmed, PlacementStatus.completed})


def _check_bijection(forward: dict, backward: dict, source: type, target: type) -> None:
    if set(forward) != set(source) or set(backward) != set(target):
        raise RuntimeError(f"Status mapping {source.__name__} <-> {target.__name__} is incomplete")


_check_bijection(INTERNSHIP_TO_PLACEMENT, PLACEMENT_TO_INTERNSHIP, InternshipStatus, PlacementStatus)
_check_bijection(EVALUATION_TO_DISPLAY, DISPLAY_TO_EVALUATION, EvaluationStatus, EvaluationDisplayStatus)


def placement_status(status: InternshipStatus) -> PlacementStatus:
    return INTERNSHIP_TO_PLACEMENT[InternshipStatus(status)]


def internship_status(status: PlacementStatus) -> InternshipStatus:
    return PLACEMENT_TO_INTERNSHIP[PlacementStatus(status)]


def evaluation_display_status(status: EvaluationStatus) -> EvaluationDisplayStatus:
    return EVALUATION_TO_DISPLAY[EvaluationStatus(status)]


def evaluation_status(status: EvaluationDisplayStatus) -> EvaluationStatus:
    return DISPLAY_TO_EVALUATION[EvaluationDisplayStatus(status)]


def is_confirmed(status: InternshipStatus) -> bool:
    return placement_status(status) in CONFIRMED_PLACEMENTS

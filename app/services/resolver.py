"""
Entity Resolver - turns foreign keys into display-ready records.

Aggregations first ``prefetch`` the id set they need (one repository call per
kind), then resolve from the in-memory map. A reference that cannot be
resolved returns the ``MISSING`` sentinel; ``display_name`` swaps in a fixed
human-readable fallback so one dangling id never aborts a report.
"""

from enum import Enum
from typing import Dict, Iterable, Set, Union

from app.models.entities import UserRole
from app.repositories.base import Entity, PlacementRepository, RecordKind


class ReferenceKind(str, Enum):
    student = "student"
    supervisor = "supervisor"
    evaluator = "evaluator"
    user = "user"
    company = "company"
    internship = "internship"


# Which table each reference points at
RECORD_KIND = {
    ReferenceKind.student: RecordKind.user,
    ReferenceKind.supervisor: RecordKind.user,
    ReferenceKind.evaluator: RecordKind.user,
    ReferenceKind.user: RecordKind.user,
    ReferenceKind.company: RecordKind.company,
    ReferenceKind.internship: RecordKind.internship,
}

FALLBACK_NAMES = {
    ReferenceKind.student: "Unknown Student",
    ReferenceKind.supervisor: "Unknown Supervisor",
    ReferenceKind.evaluator: "Unknown Evaluator",
    ReferenceKind.user: "Unknown User",
    ReferenceKind.company: "Unknown Company",
    ReferenceKind.internship: "Unknown Internship",
}

# A user reference of these kinds only resolves to a user holding that role.
# Evaluator and plain user references accept any role.
REQUIRED_ROLE = {
    ReferenceKind.student: UserRole.student,
    ReferenceKind.supervisor: UserRole.supervisor,
}


class _Missing:
    """Sentinel for an unresolvable reference. Falsy, single instance."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


class EntityResolver:
    """
    Per-aggregation lookup cache over a repository.

    Usage:
        resolver = EntityResolver(repo)
        resolver.prefetch(ReferenceKind.company, [i.company_id for i in internships])
        name = resolver.display_name(ReferenceKind.company, internship.company_id)
    """

    def __init__(self, repository: PlacementRepository):
        self.repository = repository
        self._cache: Dict[RecordKind, Dict[int, Entity]] = {}
        self._absent: Dict[RecordKind, Set[int]] = {}

    def prefetch(self, kind: ReferenceKind, ids: Iterable[int]) -> None:
        """Load every not-yet-seen id of this kind with a single batch read."""
        record_kind = RECORD_KIND[ReferenceKind(kind)]
        known = self._cache.setdefault(record_kind, {})
        absent = self._absent.setdefault(record_kind, set())
        wanted = {i for i in ids if i is not None} - set(known) - absent
        if wanted:
            known.update(self.repository.get_many(record_kind, wanted))
            absent.update(wanted - set(known))

    def resolve(self, kind: ReferenceKind, entity_id: int) -> Union[Entity, _Missing]:
        record_kind = RECORD_KIND[ReferenceKind(kind)]
        known = self._cache.setdefault(record_kind, {})
        if entity_id not in known and entity_id not in self._absent.get(record_kind, ()):
            self.prefetch(kind, [entity_id])
        entity = known.get(entity_id, MISSING)
        required = REQUIRED_ROLE.get(ReferenceKind(kind))
        if entity is not MISSING and required is not None and entity.role != required:
            return MISSING
        return entity

    def display_name(self, kind: ReferenceKind, entity_id: int) -> str:
        entity = self.resolve(kind, entity_id)
        if entity is MISSING:
            return FALLBACK_NAMES[ReferenceKind(kind)]
        return getattr(entity, "name", None) or FALLBACK_NAMES[ReferenceKind(kind)]

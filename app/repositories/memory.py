"""
In-memory repository.

Each instance owns its own dicts; nothing is shared at module level. Used by
the test-suite and by the app when ``repository_backend=memory``.
"""

from typing import Dict, Iterable, List, Optional

from app.models.entities import (
    AttendanceRecord,
    Company,
    Evaluation,
    Internship,
    User,
    UserRole,
)
from app.repositories.base import Entity, PlacementRepository, RecordKind, kind_of


class InMemoryRepository(PlacementRepository):

    def __init__(self, entities: Iterable[Entity] = ()):
        self._records: Dict[RecordKind, Dict[int, Entity]] = {kind: {} for kind in RecordKind}
        self.put_all(entities)

    def get_many(self, kind: RecordKind, ids: Iterable[int]) -> Dict[int, Entity]:
        table = self._records[RecordKind(kind)]
        return {i: table[i] for i in set(ids) if i in table}

    def list_users(self, role: Optional[UserRole] = None) -> List[User]:
        users = list(self._records[RecordKind.user].values())
        if role is not None:
            users = [u for u in users if u.role == role]
        return users

    def list_companies(self) -> List[Company]:
        return list(self._records[RecordKind.company].values())

    def list_internships(
        self,
        student_id: Optional[int] = None,
        supervisor_id: Optional[int] = None,
        company_id: Optional[int] = None,
    ) -> List[Internship]:
        return [
            i for i in self._records[RecordKind.internship].values()
            if (student_id is None or i.student_id == student_id)
            and (supervisor_id is None or i.supervisor_id == supervisor_id)
            and (company_id is None or i.company_id == company_id)
        ]

    def list_evaluations(
        self,
        evaluator_id: Optional[int] = None,
        student_id: Optional[int] = None,
        internship_id: Optional[int] = None,
    ) -> List[Evaluation]:
        matches = [
            e for e in self._records[RecordKind.evaluation].values()
            if (evaluator_id is None or e.evaluator_id == evaluator_id)
            and (student_id is None or e.student_id == student_id)
            and (internship_id is None or e.internship_id == internship_id)
        ]
        return sorted(matches, key=lambda e: e.created_at, reverse=True)

    def list_attendance(self, internship_id: Optional[int] = None) -> List[AttendanceRecord]:
        return [
            r for r in self._records[RecordKind.attendance].values()
            if internship_id is None or r.internship_id == internship_id
        ]

    def put(self, entity: Entity) -> Entity:
        self._records[kind_of(entity)][entity.id] = entity
        return entity

"""
Repository interface - the only way the analytics engine reads records.

The repository is owned by the caller (the app, a test, a script) and handed
to the engine per invocation. Implementations return immutable snapshots, so
the engine never has to worry about a record changing under it mid-report.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Iterable, List, Optional, Union

from app.models.entities import (
    AttendanceRecord,
    Company,
    Evaluation,
    Internship,
    User,
    UserRole,
)

Entity = Union[User, Company, Internship, Evaluation, AttendanceRecord]


class RecordKind(str, Enum):
    user = "user"
    company = "company"
    internship = "internship"
    evaluation = "evaluation"
    attendance = "attendance"


ENTITY_KINDS = {
    User: RecordKind.user,
    Company: RecordKind.company,
    Internship: RecordKind.internship,
    Evaluation: RecordKind.evaluation,
    AttendanceRecord: RecordKind.attendance,
}


def kind_of(entity: Entity) -> RecordKind:
    try:
        return ENTITY_KINDS[type(entity)]
    except KeyError:
        raise TypeError(f"Unsupported entity type: {type(entity).__name__}") from None


class PlacementRepository(ABC):
    """Read/put access to users, companies, internships, evaluations, attendance."""

    # ---- lookups by id ----

    @abstractmethod
    def get_many(self, kind: RecordKind, ids: Iterable[int]) -> Dict[int, Entity]:
        """Batch lookup. Ids with no record are simply absent from the result."""

    def get(self, kind: RecordKind, entity_id: int) -> Optional[Entity]:
        return self.get_many(kind, [entity_id]).get(entity_id)

    def get_user(self, user_id: int) -> Optional[User]:
        return self.get(RecordKind.user, user_id)

    def get_company(self, company_id: int) -> Optional[Company]:
        return self.get(RecordKind.company, company_id)

    def get_internship(self, internship_id: int) -> Optional[Internship]:
        return self.get(RecordKind.internship, internship_id)

    def get_evaluation(self, evaluation_id: int) -> Optional[Evaluation]:
        return self.get(RecordKind.evaluation, evaluation_id)

    # ---- listings ----

    @abstractmethod
    def list_users(self, role: Optional[UserRole] = None) -> List[User]:
        ...

    def list_by_role(self, role: UserRole) -> List[User]:
        return self.list_users(role=role)

    @abstractmethod
    def list_companies(self) -> List[Company]:
        ...

    @abstractmethod
    def list_internships(
        self,
        student_id: Optional[int] = None,
        supervisor_id: Optional[int] = None,
        company_id: Optional[int] = None,
    ) -> List[Internship]:
        ...

    @abstractmethod
    def list_evaluations(
        self,
        evaluator_id: Optional[int] = None,
        student_id: Optional[int] = None,
        internship_id: Optional[int] = None,
    ) -> List[Evaluation]:
        """Newest first (by created_at), like the dashboards display them."""

    @abstractmethod
    def list_attendance(self, internship_id: Optional[int] = None) -> List[AttendanceRecord]:
        ...

    # ---- writes ----

    @abstractmethod
    def put(self, entity: Entity) -> Entity:
        """Insert or replace a record by id."""

    def put_all(self, entities: Iterable[Entity]) -> None:
        for entity in entities:
            self.put(entity)

"""
SQL repository - reads snapshots through SQLAlchemy raw SQL.

Every query goes through ``execute_raw_sql`` against the engine handed in by
the caller, and rows are turned into frozen pydantic entities right away.
Batch lookups use one ``IN`` query per kind.
"""

import json
from typing import Dict, Iterable, List, Optional

from sqlalchemy import bindparam, text
from sqlalchemy.engine import Engine

from app.db.postgres import execute_raw_sql, get_db_session
from app.models.entities import (
    AttendanceRecord,
    Company,
    Evaluation,
    Internship,
    User,
    UserRole,
)
from app.repositories.base import Entity, PlacementRepository, RecordKind, kind_of

TABLE_FOR_KIND = {
    RecordKind.user: ("users", User),
    RecordKind.company: ("companies", Company),
    RecordKind.internship: ("internships", Internship),
    RecordKind.evaluation: ("evaluations", Evaluation),
    RecordKind.attendance: ("attendance_records", AttendanceRecord),
}


def _row_to_entity(kind: RecordKind, row: dict) -> Entity:
    model = TABLE_FOR_KIND[kind][1]
    if kind == RecordKind.evaluation and isinstance(row.get("categories"), str):
        row = {**row, "categories": json.loads(row["categories"])}
    return model(**row)


def _entity_to_row(entity: Entity) -> dict:
    row = entity.model_dump(mode="json")
    if isinstance(entity, Evaluation):
        row["categories"] = json.dumps(row["categories"])
    return row


class SqlRepository(PlacementRepository):
    """
    Repository backed by the users/companies/internships/evaluations tables.

    Usage:
        repo = SqlRepository(get_engine())
        students = repo.list_by_role(UserRole.student)
    """

    def __init__(self, engine: Optional[Engine] = None):
        self.engine = engine

    def _select(self, kind: RecordKind, where: Dict[str, object], order_by: str = "id") -> List[Entity]:
        table = TABLE_FOR_KIND[kind][0]
        clauses = [f"{column} = :{column}" for column, value in where.items() if value is not None]
        params = {column: value for column, value in where.items() if value is not None}

        sql = f"SELECT * FROM {table}"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += f" ORDER BY {order_by}"

        rows = execute_raw_sql(sql, params, engine=self.engine)
        return [_row_to_entity(kind, r) for r in rows]

    def get_many(self, kind: RecordKind, ids: Iterable[int]) -> Dict[int, Entity]:
        kind = RecordKind(kind)
        id_list = sorted(set(ids))
        if not id_list:
            return {}

        table = TABLE_FOR_KIND[kind][0]
        statement = text(f"SELECT * FROM {table} WHERE id IN :ids").bindparams(
            bindparam("ids", expanding=True)
        )
        rows = execute_raw_sql(statement, {"ids": id_list}, engine=self.engine)
        return {r["id"]: _row_to_entity(kind, r) for r in rows}

    def list_users(self, role: Optional[UserRole] = None) -> List[User]:
        return self._select(
            RecordKind.user,
            {"role": UserRole(role).value if role is not None else None},
        )

    def list_companies(self) -> List[Company]:
        return self._select(RecordKind.company, {})

    def list_internships(
        self,
        student_id: Optional[int] = None,
        supervisor_id: Optional[int] = None,
        company_id: Optional[int] = None,
    ) -> List[Internship]:
        return self._select(
            RecordKind.internship,
            {"student_id": student_id, "supervisor_id": supervisor_id, "company_id": company_id},
        )

    def list_evaluations(
        self,
        evaluator_id: Optional[int] = None,
        student_id: Optional[int] = None,
        internship_id: Optional[int] = None,
    ) -> List[Evaluation]:
        return self._select(
            RecordKind.evaluation,
            {"evaluator_id": evaluator_id, "student_id": student_id, "internship_id": internship_id},
            order_by="created_at DESC, id",
        )

    def list_attendance(self, internship_id: Optional[int] = None) -> List[AttendanceRecord]:
        return self._select(
            RecordKind.attendance,
            {"internship_id": internship_id},
            order_by="date, id",
        )

    def put(self, entity: Entity) -> Entity:
        table = TABLE_FOR_KIND[kind_of(entity)][0]
        row = _entity_to_row(entity)
        columns = list(row)
        updates = ", ".join(f"{c} = EXCLUDED.{c}" for c in columns if c != "id")

        with get_db_session(self.engine) as db:
            db.execute(
                text(f"""
                    INSERT INTO {table} ({', '.join(columns)})
                    VALUES ({', '.join(':' + c for c in columns)})
                    ON CONFLICT (id) DO UPDATE SET {updates}
                """),
                row
            )
        return entity

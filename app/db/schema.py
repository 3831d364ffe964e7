"""
Table definitions for the SQL repository.

Plain DDL kept portable between PostgreSQL and SQLite (used by the tests):
evaluation categories are stored as a JSON-encoded TEXT column.
"""

from typing import Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine

from app.db.postgres import get_db_session

TABLES = {
    "users": """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY,
            name VARCHAR(255) NOT NULL,
            email VARCHAR(255) NOT NULL UNIQUE,
            role VARCHAR(20) NOT NULL,
            phone VARCHAR(20),
            created_at TIMESTAMP NOT NULL,
            updated_at TIMESTAMP
        )
    """,
    "companies": """
        CREATE TABLE IF NOT EXISTS companies (
            id INTEGER PRIMARY KEY,
            name VARCHAR(255) NOT NULL,
            email VARCHAR(255),
            industry VARCHAR(100),
            city VARCHAR(100),
            state VARCHAR(100),
            country VARCHAR(100),
            website VARCHAR(255)
        )
    """,
    "internships": """
        CREATE TABLE IF NOT EXISTS internships (
            id INTEGER PRIMARY KEY,
            student_id INTEGER NOT NULL REFERENCES users(id),
            company_id INTEGER NOT NULL REFERENCES companies(id),
            supervisor_id INTEGER NOT NULL REFERENCES users(id),
            position VARCHAR(255) NOT NULL,
            department VARCHAR(100),
            start_date TIMESTAMP NOT NULL,
            end_date TIMESTAMP NOT NULL,
            status VARCHAR(20) NOT NULL DEFAULT 'pending',
            created_at TIMESTAMP NOT NULL,
            updated_at TIMESTAMP NOT NULL
        )
    """,
    "evaluations": """
        CREATE TABLE IF NOT EXISTS evaluations (
            id INTEGER PRIMARY KEY,
            internship_id INTEGER NOT NULL REFERENCES internships(id),
            evaluator_id INTEGER NOT NULL REFERENCES users(id),
            student_id INTEGER NOT NULL REFERENCES users(id),
            evaluation_date TIMESTAMP NOT NULL,
            due_date TIMESTAMP NOT NULL,
            status VARCHAR(20) NOT NULL DEFAULT 'draft',
            categories TEXT NOT NULL,
            overall_rating REAL,
            feedback TEXT NOT NULL DEFAULT '',
            created_at TIMESTAMP NOT NULL,
            updated_at TIMESTAMP NOT NULL
        )
    """,
    "attendance_records": """
        CREATE TABLE IF NOT EXISTS attendance_records (
            id INTEGER PRIMARY KEY,
            internship_id INTEGER NOT NULL REFERENCES internships(id),
            date TIMESTAMP NOT NULL,
            status VARCHAR(20) NOT NULL,
            check_in_time VARCHAR(10),
            check_out_time VARCHAR(10),
            notes TEXT,
            marked_by INTEGER REFERENCES users(id)
        )
    """,
}

INDEXES = [
    "CREATE INDEX IF NOT EXISTS ix_internships_student ON internships (student_id)",
    "CREATE INDEX IF NOT EXISTS ix_internships_supervisor ON internships (supervisor_id)",
    "CREATE INDEX IF NOT EXISTS ix_evaluations_evaluator ON evaluations (evaluator_id)",
    "CREATE INDEX IF NOT EXISTS ix_evaluations_student ON evaluations (student_id)",
    "CREATE INDEX IF NOT EXISTS ix_attendance_internship ON attendance_records (internship_id)",
]


def create_schema(engine: Optional[Engine] = None) -> None:
    """
    Create tables and indexes if missing.
    Call this once during app startup (or from a test fixture).
    """
    with get_db_session(engine) as db:
        for ddl in TABLES.values():
            db.execute(text(ddl))
        for ddl in INDEXES:
            db.execute(text(ddl))

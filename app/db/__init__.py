"""
Database module - PostgreSQL engine, sessions and schema.
"""
from app.db.postgres import get_engine, get_db_session, check_postgres_connection
from app.db.schema import create_schema

__all__ = [
    "get_engine",
    "get_db_session",
    "check_postgres_connection",
    "create_schema",
]

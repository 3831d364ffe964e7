from contextlib import contextmanager
from functools import lru_cache
from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.core.config import get_settings
from app.core.logging import get_logger

logger = get_logger(component="postgres")


@lru_cache()
def get_engine() -> Engine:
    """
    Engine for the configured PostgreSQL database.

    Created on first use so that importing the app never requires a driver.
    pool_size=5: maintain 5 connections ready
    max_overflow=10: allow 10 extra connections under load
    """
    settings = get_settings()
    return create_engine(
        settings.postgres_url,
        pool_size=5,
        max_overflow=10,
        echo=settings.debug  # Log SQL queries in debug mode
    )


@lru_cache()
def get_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def get_db_session(engine: Optional[Engine] = None):
    """
    Context manager for database sessions.
    Usage:
        with get_db_session() as db:
            db.execute(text("SELECT * FROM users"))
    """
    session = get_session_factory(engine or get_engine())()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def check_postgres_connection(engine: Optional[Engine] = None) -> bool:
    """
    Check that the database is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        with get_db_session(engine) as db:
            result = db.execute(text("SELECT 1 as test"))
            row = result.fetchone()
            return row[0] == 1
    except Exception as e:
        logger.warning("database_unreachable", error=str(e))
        return False


def execute_raw_sql(sql, params: dict = None, engine: Optional[Engine] = None) -> list:
    """
    Execute raw SQL and return results as list of dicts.
    Accepts a string or an already-built ``text()`` clause.
    """
    statement = text(sql) if isinstance(sql, str) else sql
    with get_db_session(engine) as db:
        result = db.execute(statement, params or {})
        # Convert rows to dicts
        columns = list(result.keys())
        return [dict(zip(columns, row)) for row in result.fetchall()]

"""
Shared FastAPI dependencies: the repository and the clock.

The repository lives on ``app.state`` (set up at startup) and is passed into
the dashboard service per request. Tests replace either dependency through
``app.dependency_overrides``.
"""

from datetime import datetime

from fastapi import Request

from app.core.config import Settings
from app.models.entities import utcnow
from app.repositories.base import PlacementRepository
from app.repositories.memory import InMemoryRepository


def build_repository(settings: Settings) -> PlacementRepository:
    """Create the repository selected by ``repository_backend``."""
    backend = settings.repository_backend.lower()
    if backend == "memory":
        return InMemoryRepository()
    if backend == "postgres":
        from app.db.postgres import get_engine
        from app.repositories.sql import SqlRepository

        return SqlRepository(get_engine())
    raise ValueError(f"Unknown repository backend: {settings.repository_backend}")


def get_repository(request: Request) -> PlacementRepository:
    return request.app.state.repository


def get_now() -> datetime:
    """Reference time for trailing windows (naive UTC)."""
    return utcnow()

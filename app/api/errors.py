"""
Error handling for dashboard routes.

Auth and validation failures are raised as HTTPException by the
dependencies and pass through untouched. Anything else that escapes an
aggregation is logged with the role and operation, then surfaced as a 500
with a fixed, role-specific message.
"""

from contextlib import contextmanager

from fastapi import HTTPException, status

from app.core.logging import get_logger
from app.schemas.schemas import ErrorResponse

# Documented on every dashboard router
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid user ID"},
    401: {"model": ErrorResponse, "description": "Unauthorized"},
    403: {"model": ErrorResponse, "description": "Wrong role for this dashboard"},
    500: {"model": ErrorResponse, "description": "Aggregation failed"},
}


@contextmanager
def aggregation_guard(role: str, operation: str, detail: str):
    """
    Wrap a dashboard aggregation.

    Usage:
        with aggregation_guard("admin", "admin_dashboard", "Failed to fetch dashboard data"):
            return service.admin_dashboard()
    """
    try:
        yield
    except HTTPException:
        raise
    except Exception as exc:
        logger = get_logger(component="api", role=role, operation=operation)
        logger.exception("aggregation_failed", error_type=type(exc).__name__)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail) from exc

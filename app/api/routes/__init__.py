"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from app.api.routes.admin_routes import router as admin_router
from app.api.routes.coordinator_routes import router as coordinator_router
from app.api.routes.supervisor_routes import router as supervisor_router
from app.api.routes.student_routes import router as student_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(admin_router)
api_router.include_router(coordinator_router)
api_router.include_router(supervisor_router)
api_router.include_router(student_router)

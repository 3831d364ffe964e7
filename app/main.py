"""
Internship Analytics Service - Main Application

FastAPI backend with:
- PostgreSQL (or in-memory) repository of placements data
- Role-scoped dashboards for admins, coordinators, supervisors and students
- JWT authentication
- structlog logging

Run: uvicorn app.main:app --reload
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import api_router
from app.api.deps import build_repository
from app.core.config import get_settings
from app.core.logging import configure_logging, get_logger
from app.repositories.sql import SqlRepository
from app.schemas.schemas import HealthResponse

settings = get_settings()
logger = get_logger(component="main")

# Create FastAPI app
app = FastAPI(
    title="Internship Analytics Service",
    description="""
    Analytics dashboards for an internship placement programme.

    ## Dashboards
    - **Admin**: user counts, monthly registrations, placement rate, distributions
    - **Coordinator**: semester growth, company rankings, placement list
    - **Supervisor**: weekly activity, top interns, score histogram, intern list
    - **Student**: active internship progress, evaluations, attendance

    All payloads are camelCase JSON under `/api/dashboard/<role>`.
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Configure logging and attach the repository (tests may attach their own)."""
    configure_logging(settings.log_level, settings.log_json)

    if getattr(app.state, "repository", None) is None:
        app.state.repository = build_repository(settings)
    logger.info("repository_ready", backend=type(app.state.repository).__name__)

    if settings.create_schema_on_startup and isinstance(app.state.repository, SqlRepository):
        from app.db.schema import create_schema

        create_schema(app.state.repository.engine)
        logger.info("schema_created")


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Detailed health check."""
    repository = getattr(app.state, "repository", None)
    if isinstance(repository, SqlRepository):
        from app.db.postgres import check_postgres_connection

        connected = check_postgres_connection(repository.engine)
        return HealthResponse(
            status="healthy" if connected else "degraded",
            repository="connected" if connected else "disconnected",
        )
    return HealthResponse(status="healthy", repository="memory" if repository else "not configured")

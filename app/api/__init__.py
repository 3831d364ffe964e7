"""
API module - FastAPI routers and shared dependencies.

Usage:
    from app.api.routes import api_router
    app.include_router(api_router, prefix="/api")
"""

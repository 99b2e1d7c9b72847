"""
API Package

Central package for all API endpoints.

Note: Routers are imported lazily to avoid circular import issues with application services.
"""

from fastapi import APIRouter


def create_api_router() -> APIRouter:
    """
    Create and configure the main API router.

    Uses lazy imports to avoid circular dependencies between:
    - Application layer services
    - API schemas
    - API dependencies
    - API routers
    """
    from app.api.v1.contact import router as contact_router
    from app.api.v1.search import router as search_router

    api_router = APIRouter()

    api_router.include_router(
        search_router,
        prefix="/api",
    )

    api_router.include_router(
        contact_router,
        prefix="/api",
    )

    return api_router


__all__ = ["create_api_router"]

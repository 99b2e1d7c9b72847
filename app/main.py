"""
LaneList - Main FastAPI Application
"""

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import create_api_router
from app.core.config import Settings, get_settings
from app.infrastructure.providers import (
    get_database_manager,
    get_openai_service,
    get_rate_limit_health,
    reset_all_providers,
)


def configure_logging(settings: Settings) -> None:
    """Configure structured logging"""
    if settings.LOG_FORMAT == "json":
        renderer = structlog.processors.JSONRenderer()
    elif settings.LOG_FORMAT == "console" or sys.stdout.isatty():
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging(get_settings())

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    settings = get_settings()
    logger.info(
        "Starting LaneList API",
        version=app.version,
        environment=settings.ENVIRONMENT,
    )

    # The carrier store connects on first search so a missing database
    # degrades to suggestions instead of blocking startup.
    try:
        rate_limit_health = await get_rate_limit_health()
        ai_service = await get_openai_service()
        logger.info(
            "Services initialized",
            ai_configured=ai_service is not None,
            postgres_configured=settings.is_postgres_configured(),
            mail_configured=settings.is_mail_configured(),
            rate_limiters=list(rate_limit_health),
        )
    except Exception as e:
        logger.error("Failed to initialize services", error=str(e))
        if settings.is_production():
            sys.exit(1)

    yield

    # Cleanup
    logger.info("Shutting down LaneList API")
    try:
        await reset_all_providers()
        logger.info("Service cleanup completed")
    except Exception as e:
        logger.error("Cleanup error", error=str(e))


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    settings = get_settings()

    app = FastAPI(
        title="LaneList API",
        description="Freight carrier directory with AI-assisted suggestions",
        version=settings.APP_VERSION,
        docs_url="/docs" if not settings.is_production() else None,
        redoc_url="/redoc" if not settings.is_production() else None,
        openapi_url="/openapi.json" if not settings.is_production() else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)

    # Include API routes
    app.include_router(create_api_router())

    # Basic health check endpoint
    @app.get("/health")
    async def health_check():
        """Basic health check endpoint"""
        return {
            "status": "healthy",
            "version": app.version,
            "environment": settings.ENVIRONMENT,
        }

    # Detailed health check with database
    @app.get("/health/detailed")
    async def detailed_health_check():
        """Detailed health check including database and services"""
        health_status = {
            "status": "healthy",
            "version": app.version,
            "environment": settings.ENVIRONMENT,
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "services": {}
        }

        # Database health
        try:
            db_manager = await get_database_manager()
            await db_manager.initialize()
            health_status["services"]["database"] = await db_manager.check_health()
        except Exception as e:
            health_status["services"]["database"] = {
                "status": "unhealthy",
                "error": str(e)
            }
        if health_status["services"]["database"].get("status") != "healthy":
            # Searches still resolve through suggestions
            health_status["status"] = "degraded"

        # AI provider health
        try:
            ai_service = await get_openai_service()
            health_status["services"]["ai"] = (
                await ai_service.check_health()
                if ai_service is not None
                else {"status": "not_configured"}
            )
        except Exception as e:
            health_status["services"]["ai"] = {
                "status": "unhealthy",
                "error": str(e)
            }

        health_status["services"]["rate_limiters"] = await get_rate_limit_health()

        return health_status

    # API root
    @app.get("/")
    async def root():
        """API root endpoint"""
        return {
            "message": "LaneList API",
            "version": app.version,
            "docs_url": "/docs" if not settings.is_production() else None
        }

    return app


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Setup all middleware during app creation"""
    cors_origins = settings.get_cors_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials="*" not in cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["x-duration-ms"],
    )

    logger.info("Middleware configured", cors_origins=cors_origins)


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development",
        log_config=None,  # Use our structured logging
    )

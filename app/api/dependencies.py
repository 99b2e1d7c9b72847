"""
API-specific dependencies for application services with dependency injection.

This module provides FastAPI dependency injection helpers for application services,
bridging the API layer with the hexagonal architecture's application services.
"""

from typing import Annotated, Dict, Optional, Type

import structlog
from fastapi import Depends, HTTPException, Request

from app.application.contact_service import ContactApplicationService
from app.application.search_service import CarrierSearchService
from app.domain.exceptions import (
    ConfigurationError,
    DomainException,
    NotificationError,
    ProcessingError,
    RateLimitExceededError,
    ValidationError,
)
from app.infrastructure.providers.contact_provider import (
    get_contact_service as provide_contact_service,
)
from app.infrastructure.providers.search_provider import (
    get_search_service as provide_search_service,
)

logger = structlog.get_logger(__name__)


# Application Service Dependencies
async def get_search_service() -> CarrierSearchService:
    """Return the CarrierSearchService singleton."""
    try:
        return await provide_search_service()
    except Exception as e:
        logger.error("Failed to create search service", error=str(e))
        raise HTTPException(
            status_code=500,
            detail="Search service unavailable"
        ) from e


async def get_contact_service() -> ContactApplicationService:
    """Return the ContactApplicationService singleton."""
    try:
        return await provide_contact_service()
    except Exception as e:
        logger.error("Failed to create contact service", error=str(e))
        raise HTTPException(
            status_code=500,
            detail="Contact service unavailable"
        ) from e


# Type aliases for dependency injection
SearchServiceDep = Annotated[CarrierSearchService, Depends(get_search_service)]
ContactServiceDep = Annotated[ContactApplicationService, Depends(get_contact_service)]


# Caller identity
def _first_forwarded_for(request: Request) -> Optional[str]:
    forwarded = request.headers.get("x-forwarded-for")
    if not forwarded:
        return None
    return forwarded.split(",")[0].strip() or None


def get_search_rate_key(request: Request) -> str:
    """Rate limit key for AI suggestions.

    Trusts client-supplied forwarding headers, so a caller can rotate keys
    by rewriting them.
    """
    return (
        _first_forwarded_for(request)
        or request.headers.get("cf-connecting-ip")
        or "local"
    )


def get_contact_client_ip(request: Request) -> str:
    """Client address for the contact form rate limit and mail footer."""
    return _first_forwarded_for(request) or "unknown"


SearchRateKeyDep = Annotated[str, Depends(get_search_rate_key)]
ContactClientIpDep = Annotated[str, Depends(get_contact_client_ip)]


# Domain Exception Handlers
def map_domain_exception_to_http(
    exception: Exception,
    public_messages: Optional[Dict[Type[Exception], str]] = None,
) -> HTTPException:
    """Map domain exceptions to appropriate HTTP responses.

    ``public_messages`` overrides the detail for an exception class so an
    endpoint can choose what callers see.
    """

    def detail_for(default: str) -> str:
        for exc_type, message in (public_messages or {}).items():
            if isinstance(exception, exc_type):
                return message
        return default

    # ValidationError hierarchy - 400 Bad Request
    if isinstance(exception, ValidationError):
        return HTTPException(status_code=400, detail=detail_for(str(exception)))

    # RateLimitExceededError - 429 Too Many Requests
    elif isinstance(exception, RateLimitExceededError):
        return HTTPException(status_code=429, detail=detail_for(str(exception)))

    # ConfigurationError - 500 Internal Server Error (configuration issues)
    elif isinstance(exception, ConfigurationError):
        logger.error("Configuration error", error=str(exception))
        return HTTPException(status_code=500, detail=detail_for("Service configuration error"))

    # NotificationError - 500, the relay is an unrecoverable dependency
    elif isinstance(exception, NotificationError):
        logger.error("Notification error", error=str(exception))
        return HTTPException(status_code=500, detail=detail_for("Notification delivery failed"))

    # ProcessingError hierarchy - 422 Unprocessable Entity
    elif isinstance(exception, ProcessingError):
        return HTTPException(status_code=422, detail=detail_for(str(exception)))

    # Generic DomainException - 500 Internal Server Error
    elif isinstance(exception, DomainException):
        logger.error("Unhandled domain exception", exception_type=type(exception).__name__, error=str(exception))
        return HTTPException(status_code=500, detail=detail_for("Domain operation failed"))

    else:
        # Non-domain exception - log and return generic error
        logger.error("Non-domain exception in mapping", exception_type=type(exception).__name__, error=str(exception))
        return HTTPException(status_code=500, detail=detail_for("Internal server error"))


__all__ = [
    "ContactClientIpDep",
    "ContactServiceDep",
    "SearchRateKeyDep",
    "SearchServiceDep",
    "get_contact_client_ip",
    "get_contact_service",
    "get_search_rate_key",
    "get_search_service",
    "map_domain_exception_to_http",
]

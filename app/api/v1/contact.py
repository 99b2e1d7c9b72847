"""
Contact API Endpoints

Relays the public contact form by email. Errors are answered with an
``{"error": ...}`` body.
"""

import structlog
from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from app.api.dependencies import (
    ContactClientIpDep,
    ContactServiceDep,
    map_domain_exception_to_http,
)
from app.api.schemas.contact_schemas import (
    ContactErrorResponse,
    ContactRequest,
    ContactResponse,
)
from app.domain.exceptions import (
    ConfigurationError,
    DomainException,
    NotificationError,
    RateLimitExceededError,
    ValidationError,
)

logger = structlog.get_logger(__name__)
router = APIRouter(tags=["contact"])

CONTACT_ERROR_MESSAGES = {
    RateLimitExceededError: "Too many requests. Please try again later.",
    ValidationError: "Invalid form data.",
    ConfigurationError: "Email not configured on server.",
    NotificationError: "Failed to send message.",
}


@router.post(
    "/contact",
    response_model=ContactResponse,
    responses={
        400: {"model": ContactErrorResponse},
        429: {"model": ContactErrorResponse},
        500: {"model": ContactErrorResponse},
    },
)
async def submit_contact(
    contact_request: ContactRequest,
    contact_service: ContactServiceDep,
    client_ip: ContactClientIpDep,
):
    """Validate a contact submission and forward it to the team inbox."""
    try:
        await contact_service.submit(contact_request.to_form(), client_ip)
    except DomainException as domain_exc:
        http_exc = map_domain_exception_to_http(domain_exc, CONTACT_ERROR_MESSAGES)
        return _error(http_exc)
    except Exception as exc:
        logger.error("Contact request failed", error=str(exc))
        return JSONResponse(status_code=500, content={"error": "Failed to send message."})

    return ContactResponse(ok=True)


def _error(http_exc: HTTPException) -> JSONResponse:
    return JSONResponse(status_code=http_exc.status_code, content={"error": http_exc.detail})

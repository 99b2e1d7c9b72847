"""
Rate Limiting Provider

Owns the in-process limiters guarding AI suggestion calls and contact
submissions. Each limiter is a separate instance with its own buckets.
"""

from typing import Any, Dict, Optional

import structlog

from app.core.config import get_settings
from app.domain.interfaces import IRateLimiter
from app.infrastructure.security.rate_limit_service import FixedWindowRateLimiter

logger = structlog.get_logger(__name__)

# Global singleton instances
_ai_rate_limiter: Optional[IRateLimiter] = None
_contact_rate_limiter: Optional[IRateLimiter] = None


async def get_ai_rate_limiter() -> IRateLimiter:
    """
    Get or create the limiter for AI suggestion calls.

    Returns:
        IRateLimiter: Limiter keyed by client address
    """
    global _ai_rate_limiter

    if _ai_rate_limiter is None:
        settings = get_settings()
        _ai_rate_limiter = FixedWindowRateLimiter(
            max_calls=settings.AI_RATE_LIMIT_MAX_CALLS,
            window_seconds=settings.AI_RATE_LIMIT_WINDOW_SECONDS,
            name="ai_suggestions",
        )
        logger.info(
            "AI rate limiter initialized",
            max_calls=settings.AI_RATE_LIMIT_MAX_CALLS,
            window_seconds=settings.AI_RATE_LIMIT_WINDOW_SECONDS,
        )

    return _ai_rate_limiter


async def get_contact_rate_limiter() -> IRateLimiter:
    """
    Get or create the limiter for contact form submissions.

    Returns:
        IRateLimiter: Limiter keyed by client address
    """
    global _contact_rate_limiter

    if _contact_rate_limiter is None:
        settings = get_settings()
        _contact_rate_limiter = FixedWindowRateLimiter(
            max_calls=settings.CONTACT_RATE_LIMIT_MAX,
            window_seconds=settings.CONTACT_RATE_LIMIT_WINDOW_SECONDS,
            name="contact",
        )
        logger.info(
            "Contact rate limiter initialized",
            max_calls=settings.CONTACT_RATE_LIMIT_MAX,
            window_seconds=settings.CONTACT_RATE_LIMIT_WINDOW_SECONDS,
        )

    return _contact_rate_limiter


async def reset_rate_limiters() -> None:
    """Reset both limiter singletons."""
    global _ai_rate_limiter, _contact_rate_limiter

    _ai_rate_limiter = None
    _contact_rate_limiter = None
    logger.debug("Rate limiters reset")


async def get_rate_limit_health() -> Dict[str, Any]:
    """
    Get health status of both limiters.

    Returns:
        dict: Health status information per limiter
    """
    try:
        ai_limiter = await get_ai_rate_limiter()
        contact_limiter = await get_contact_rate_limiter()
        return {
            "ai_suggestions": await ai_limiter.check_health(),
            "contact": await contact_limiter.check_health(),
        }
    except Exception as e:
        logger.error("Failed to get rate limiter health", error=str(e))
        return {
            "status": "unhealthy",
            "error": str(e)
        }


__all__ = [
    "get_ai_rate_limiter",
    "get_contact_rate_limiter",
    "get_rate_limit_health",
    "reset_rate_limiters",
]

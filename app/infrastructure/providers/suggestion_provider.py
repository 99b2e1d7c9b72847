"""
Suggestion Provider

Provider for CarrierSuggestionService with dependency injection.
"""

import asyncio
from typing import Optional

import structlog

from app.application.suggestion.suggestion_service import CarrierSuggestionService
from app.core.config import get_settings
from app.infrastructure.providers.ai_provider import get_openai_service
from app.infrastructure.providers.rate_limit_provider import get_ai_rate_limiter

logger = structlog.get_logger(__name__)

_suggestion_service: Optional[CarrierSuggestionService] = None
_lock = asyncio.Lock()


async def get_suggestion_service() -> CarrierSuggestionService:
    """
    Provide initialized CarrierSuggestionService.

    Singleton pattern - initializes once and reuses. The AI service is
    None when no credential is configured, which the engine treats as
    its credential gate.

    Returns:
        Configured CarrierSuggestionService instance
    """
    global _suggestion_service

    if _suggestion_service is not None:
        return _suggestion_service

    async with _lock:
        if _suggestion_service is not None:
            return _suggestion_service

        settings = get_settings()
        _suggestion_service = CarrierSuggestionService(
            ai_service=await get_openai_service(),
            rate_limiter=await get_ai_rate_limiter(),
            enabled=settings.AI_FALLBACK_ENABLED,
            min_filters=settings.AI_MIN_FILTERS,
            max_items=settings.AI_MAX_SUGGESTIONS,
            confidence=settings.AI_SUGGESTION_CONFIDENCE,
        )
        logger.info(
            "Suggestion service initialized",
            ai_enabled=settings.AI_FALLBACK_ENABLED,
            strategies=[s.name for s in _suggestion_service.strategies],
        )
        return _suggestion_service


async def reset_suggestion_service() -> None:
    """Reset suggestion service singleton (for testing)."""
    global _suggestion_service
    async with _lock:
        _suggestion_service = None


__all__ = ["get_suggestion_service", "reset_suggestion_service"]

"""Provider utilities for AI-related services."""

from __future__ import annotations

import asyncio
from typing import Optional

import structlog

from app.core.config import get_settings
from app.domain.interfaces import IAIService
from app.infrastructure.ai.openai_service import OpenAIService

logger = structlog.get_logger(__name__)

_openai_service: Optional[OpenAIService] = None
_openai_lock = asyncio.Lock()


async def get_openai_service() -> Optional[IAIService]:
    """Return singleton OpenAI service, or None when no credential is configured."""
    global _openai_service

    if _openai_service is not None:
        return _openai_service

    settings = get_settings()
    if not settings.is_openai_configured():
        logger.debug("OpenAI credential missing; AI suggestions disabled")
        return None

    async with _openai_lock:
        if _openai_service is not None:
            return _openai_service

        _openai_service = await OpenAIService.create(settings=settings)
        return _openai_service


async def reset_ai_services() -> None:
    """Reset cached AI service instances (primarily for tests)."""
    global _openai_service

    async with _openai_lock:
        _openai_service = None


__all__ = ["get_openai_service", "reset_ai_services"]

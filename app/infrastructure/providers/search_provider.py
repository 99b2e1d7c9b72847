"""Providers for search-related services."""

from __future__ import annotations

import asyncio
from typing import Optional

from app.application.search_service import CarrierSearchService
from app.core.config import get_settings
from app.infrastructure.providers.repository_provider import get_carrier_repository
from app.infrastructure.providers.suggestion_provider import get_suggestion_service

_search_service: Optional[CarrierSearchService] = None
_search_lock = asyncio.Lock()


async def get_search_service() -> CarrierSearchService:
    """Return singleton carrier search service."""
    global _search_service

    if _search_service is not None:
        return _search_service

    async with _search_lock:
        if _search_service is not None:
            return _search_service

        _search_service = CarrierSearchService(
            repository=await get_carrier_repository(),
            suggestion_service=await get_suggestion_service(),
            max_results=get_settings().SEARCH_MAX_RESULTS,
        )
        return _search_service


async def reset_search_service() -> None:
    global _search_service
    async with _search_lock:
        _search_service = None


__all__ = ["get_search_service", "reset_search_service"]

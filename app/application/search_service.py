"""Application layer orchestrator for carrier searches following hexagonal architecture."""

from __future__ import annotations

import time
from typing import List

import structlog

from app.application.suggestion.suggestion_service import CarrierSuggestionService
from app.domain.entities.carrier import CarrierOutput, SearchFilter, SearchResult
from app.domain.repositories.carrier_repository import ICarrierRepository

logger = structlog.get_logger(__name__)

NOTICE_DATABASE_UNAVAILABLE = "Database unavailable. Showing unverified AI suggestions."
NOTICE_NO_VERIFIED_CARRIERS = (
    "No verified carriers found for these filters. Showing unverified AI suggestions."
)
NOTICE_QUERY_ERROR = "We hit an error querying the database. Showing unverified AI suggestions."


class CarrierSearchService:
    """Coordinates the carrier store and the AI suggestion fallback.

    Every path resolves to a ``SearchResult``: store hits when there are
    any, otherwise suggestions with a notice explaining why.
    """

    def __init__(
        self,
        repository: ICarrierRepository,
        suggestion_service: CarrierSuggestionService,
        max_results: int = 50,
    ) -> None:
        self._repository = repository
        self._suggestions = suggestion_service
        self._max_results = max_results

    async def search(self, search_filter: SearchFilter, rate_key: str) -> SearchResult:
        """Run the search and fall back to suggestions when the store has nothing to offer."""
        started = time.perf_counter()
        result = await self._search(search_filter, rate_key)
        logger.info(
            "Carrier search completed",
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
            used_ai=result.used_ai,
            results=len(result.suggestions if result.used_ai else result.carriers),
            **search_filter.to_log_dict(),
        )
        return result

    async def _search(self, search_filter: SearchFilter, rate_key: str) -> SearchResult:
        try:
            await self._repository.connect()
        except Exception as e:
            logger.error("Carrier store connection failed", error=str(e))
            return await self._fallback(search_filter, rate_key, NOTICE_DATABASE_UNAVAILABLE)

        try:
            carriers = await self._repository.find(search_filter, limit=self._max_results)
        except Exception as e:
            logger.error("Carrier store query failed", error=str(e))
            return await self._fallback(search_filter, rate_key, NOTICE_QUERY_ERROR)

        if carriers:
            outputs: List[CarrierOutput] = [CarrierOutput.from_carrier(c) for c in carriers]
            return SearchResult.from_database(outputs)

        return await self._fallback(search_filter, rate_key, NOTICE_NO_VERIFIED_CARRIERS)

    async def _fallback(self, search_filter: SearchFilter, rate_key: str, notice: str) -> SearchResult:
        suggestions = await self._suggestions.suggest(search_filter, rate_key)
        return SearchResult.from_suggestions(suggestions, notice)


__all__ = [
    "CarrierSearchService",
    "NOTICE_DATABASE_UNAVAILABLE",
    "NOTICE_NO_VERIFIED_CARRIERS",
    "NOTICE_QUERY_ERROR",
]

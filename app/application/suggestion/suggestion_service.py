"""
AI carrier suggestion engine.

Runs the guardrail gates, then the ordered strategy chain, and falls back to
the deterministic stub. ``suggest`` never raises and never returns an empty
list.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import structlog

from app.application.suggestion.prompts import PromptManager
from app.application.suggestion.strategies import (
    FunctionCallStrategy,
    JsonObjectStrategy,
    JsonSchemaStrategy,
    SuggestionStrategy,
)
from app.domain.entities.carrier import CarrierOutput, SearchFilter
from app.domain.interfaces import IAIService, IRateLimiter
from app.domain.services.carrier_payload import CarrierPayloadValidator
from app.domain.services.stub_suggestion import StubSuggestionGenerator

logger = structlog.get_logger(__name__)


def build_default_strategies(
    ai_service: IAIService,
    max_items: int = 5,
    confidence: float = 0.55,
) -> List[SuggestionStrategy]:
    """Function call first, then strict schema, then freeform JSON object."""
    prompt_manager = PromptManager(max_items=max_items)
    validator = CarrierPayloadValidator()
    return [
        strategy_cls(
            ai_service,
            prompt_manager,
            validator,
            max_items=max_items,
            confidence=confidence,
        )
        for strategy_cls in (FunctionCallStrategy, JsonSchemaStrategy, JsonObjectStrategy)
    ]


class CarrierSuggestionService:
    """
    Application service producing unverified carrier suggestions.

    Gates are checked in order and the first failing one returns the stub:
    feature toggle, filter completeness, rate limit, provider credential.
    Strategies then run strictly one after another; the first non-empty
    result wins.
    """

    def __init__(
        self,
        *,
        ai_service: Optional[IAIService],
        rate_limiter: IRateLimiter,
        stub_generator: Optional[StubSuggestionGenerator] = None,
        strategies: Optional[Sequence[SuggestionStrategy]] = None,
        enabled: bool = True,
        min_filters: int = 2,
        max_items: int = 5,
        confidence: float = 0.55,
    ):
        self.ai_service = ai_service
        self.rate_limiter = rate_limiter
        self.stub_generator = stub_generator or StubSuggestionGenerator(confidence=confidence)
        self.enabled = enabled
        self.min_filters = min_filters
        if strategies is None and ai_service is not None:
            strategies = build_default_strategies(ai_service, max_items, confidence)
        self.strategies: List[SuggestionStrategy] = list(strategies or [])

    async def suggest(self, search_filter: SearchFilter, rate_key: str) -> List[CarrierOutput]:
        """Return at least one suggestion for the filter; never raises."""
        try:
            return await self._suggest(search_filter, rate_key)
        except Exception as e:
            logger.error("Suggestion engine error", error=str(e), exc_info=True)
            return self._stub("engine_error", search_filter)

    async def _suggest(self, search_filter: SearchFilter, rate_key: str) -> List[CarrierOutput]:
        if not self.enabled:
            return self._stub("ai_disabled", search_filter)

        filled = search_filter.populated_count()
        if filled < self.min_filters:
            return self._stub("min_filters", search_filter, filled=filled)

        if not await self.rate_limiter.allow(rate_key):
            return self._stub("rate_limited", search_filter)

        if self.ai_service is None or not self.strategies:
            return self._stub("no_key", search_filter)

        for strategy in self.strategies:
            result = await strategy.run(search_filter)
            if result.ok:
                return result.items
            if result.halt:
                return self._stub("invalid_output", search_filter, strategy=strategy.name)

        return self._stub("strategies_exhausted", search_filter)

    def _stub(self, reason: str, search_filter: SearchFilter, **context) -> List[CarrierOutput]:
        logger.warning(
            "Returning stub suggestion",
            reason=reason,
            **search_filter.to_log_dict(),
            **context,
        )
        return self.stub_generator.generate(search_filter)


__all__ = ["CarrierSuggestionService", "build_default_strategies"]

"""
Ordered generation strategies for AI carrier suggestions.

Each strategy turns a ``SearchFilter`` into a ``StrategyResult`` and never
raises: provider errors, unparsable text and schema mismatches all come back
as a failed result so the caller can move on to the next strategy.
"""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import structlog

from app.application.suggestion.prompts import FUNCTION_NAME, PromptManager, PromptType
from app.domain.entities.carrier import CarrierOutput, Lane, SearchFilter
from app.domain.exceptions import SuggestionError
from app.domain.interfaces import IAIService
from app.domain.services.carrier_payload import (
    CarrierPayloadValidator,
    SuggestedCarrier,
    carrier_json_schema,
)

logger = structlog.get_logger(__name__)

EMPTY_PAYLOAD = '{"items":[]}'

_LEADING_FENCE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\s*```$")


def sanitize_json_text(text: Optional[str]) -> str:
    """Strip markdown fences and drop anything after the last closing brace or bracket."""
    if not text:
        return ""
    cleaned = _TRAILING_FENCE.sub("", _LEADING_FENCE.sub("", text.strip())).strip()
    cut = max(cleaned.rfind("}"), cleaned.rfind("]"))
    if cut > 0:
        cleaned = cleaned[: cut + 1]
    return cleaned


@dataclass
class StrategyResult:
    """Outcome of one strategy attempt.

    ``halt`` asks the engine to stop trying further strategies and use the stub.
    """

    items: List[CarrierOutput] = field(default_factory=list)
    error: Optional[str] = None
    halt: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.items)

    @classmethod
    def success(cls, items: List[CarrierOutput]) -> "StrategyResult":
        return cls(items=items)

    @classmethod
    def failure(cls, error: str, halt: bool = False) -> "StrategyResult":
        return cls(error=error, halt=halt)


class SuggestionStrategy(ABC):
    """Shared request/parse/validate/map pipeline; subclasses pick the provider mode."""

    name: str = "base"
    prompt_type: PromptType
    halt_on_invalid: bool = False

    def __init__(
        self,
        ai_service: IAIService,
        prompt_manager: PromptManager,
        validator: Optional[CarrierPayloadValidator] = None,
        max_items: int = 5,
        confidence: float = 0.55,
    ):
        self.ai_service = ai_service
        self.prompt_manager = prompt_manager
        self.validator = validator or CarrierPayloadValidator()
        self.max_items = max_items
        self.confidence = confidence

    @abstractmethod
    def request_options(self) -> Dict[str, Any]:
        """Provider mode arguments (tools or response format)."""

    @abstractmethod
    def extract_text(self, response: Dict[str, Any]) -> str:
        """Pull the JSON text out of a standardized completion response."""

    async def run(self, search_filter: SearchFilter) -> StrategyResult:
        try:
            prompt = self.prompt_manager.create_prompt(self.prompt_type, search_filter)
            response = await self.ai_service.chat_completion(
                messages=prompt["messages"],
                max_tokens=prompt["max_tokens"],
                temperature=prompt["temperature"],
                **self.request_options(),
            )
            text = self.extract_text(response)
            logger.debug("Provider output", strategy=self.name, raw=text)
            payload = json.loads(text)
        except Exception as e:
            logger.error("Suggestion strategy failed", strategy=self.name, error=str(e))
            return StrategyResult.failure(str(e))

        outcome = self.validator.validate(payload)
        if not outcome.is_valid:
            logger.error(
                "Suggestion strategy failed",
                strategy=self.name,
                error="validation_failed",
                validation_errors=outcome.errors,
            )
            return StrategyResult.failure("validation_failed", halt=self.halt_on_invalid)

        items = [self._to_output(item) for item in outcome.items[: self.max_items]]
        if not items:
            logger.warning("Suggestion strategy returned no items", strategy=self.name)
            return StrategyResult.failure("empty_model_output")

        logger.info("Suggestion strategy succeeded", strategy=self.name, count=len(items))
        return StrategyResult.success(items)

    def _to_output(self, item: SuggestedCarrier) -> CarrierOutput:
        return CarrierOutput.suggestion(
            id=item.id,
            name=item.name,
            types=item.types,
            lanes=[Lane(origin=lane.origin, destination=lane.destination) for lane in item.lanes],
            description=item.description,
            logo_emoji=item.logo_emoji,
            confidence=self.confidence,
        )

    def _first_message(self, response: Dict[str, Any]) -> Dict[str, Any]:
        choices = response.get("choices") or []
        if not choices:
            raise SuggestionError(self.name, "no_choices")
        return choices[0].get("message") or {}


class FunctionCallStrategy(SuggestionStrategy):
    """Forces the provider to call ``return_carriers`` with schema-typed arguments."""

    name = "function_call"
    prompt_type = PromptType.FUNCTION_CALL

    def request_options(self) -> Dict[str, Any]:
        return {
            "tools": [
                {
                    "type": "function",
                    "function": {
                        "name": FUNCTION_NAME,
                        "description": "Return carrier suggestions as structured JSON.",
                        "parameters": carrier_json_schema(),
                    },
                }
            ],
            "tool_choice": {"type": "function", "function": {"name": FUNCTION_NAME}},
        }

    def extract_text(self, response: Dict[str, Any]) -> str:
        tool_calls = self._first_message(response).get("tool_calls") or []
        call = next((tc for tc in tool_calls if tc.get("type") == "function"), None)
        if call is None:
            raise SuggestionError(self.name, "no_function_tool_call")
        arguments = (call.get("function") or {}).get("arguments")
        if not arguments:
            raise SuggestionError(self.name, "no_tool_call_arguments")
        return arguments


class JsonSchemaStrategy(SuggestionStrategy):
    """Completion constrained by the strict JSON schema."""

    name = "json_schema"
    prompt_type = PromptType.JSON_SCHEMA

    def request_options(self) -> Dict[str, Any]:
        return {
            "response_format": {
                "type": "json_schema",
                "json_schema": {
                    "name": "CarriersResponse",
                    "schema": carrier_json_schema(strict=True),
                    "strict": True,
                },
            }
        }

    def extract_text(self, response: Dict[str, Any]) -> str:
        return sanitize_json_text(self._first_message(response).get("content") or EMPTY_PAYLOAD)


class JsonObjectStrategy(JsonSchemaStrategy):
    """Freeform JSON object; the shape is described in the prompt only."""

    name = "json_object"
    prompt_type = PromptType.JSON_OBJECT
    halt_on_invalid = True

    def request_options(self) -> Dict[str, Any]:
        return {"response_format": {"type": "json_object"}}


__all__ = [
    "FunctionCallStrategy",
    "JsonObjectStrategy",
    "JsonSchemaStrategy",
    "StrategyResult",
    "SuggestionStrategy",
    "sanitize_json_text",
]

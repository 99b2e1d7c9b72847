"""
Prompt templates for carrier suggestion requests.

Every strategy shares the same system message and filter summary and adds
its own instruction suffix. Shape fragments come from the payload schema so
the prompt text never drifts from what the validator accepts.
"""

from enum import Enum
from typing import Any, Dict, List

import structlog

from app.domain.entities.carrier import SearchFilter
from app.domain.services.carrier_payload import describe_payload_shape

logger = structlog.get_logger(__name__)

FUNCTION_NAME = "return_carriers"

SYSTEM_PROMPT = (
    "You are LaneList's matching engine. Produce plausible, generic EU carrier suggestions. "
    "Never invent real contact info. Output only structured data."
)

USER_PROMPT = """Filters:
- type: {type}
- origin: {origin}
- destination: {destination}
Return at most {max_items} items. Keep descriptions ≤ 120 chars. No newlines in fields."""


class PromptType(Enum):
    """Prompt variants, one per generation strategy"""
    FUNCTION_CALL = "function_call"
    JSON_SCHEMA = "json_schema"
    JSON_OBJECT = "json_object"


class PromptManager:
    """
    Builds chat messages and sampling parameters for each strategy.
    """

    def __init__(self, max_items: int = 5):
        self.max_items = max_items
        self._prompt_templates = self._initialize_templates()

    def _initialize_templates(self) -> Dict[str, Dict[str, Any]]:
        """Initialize prompt templates"""
        return {
            PromptType.FUNCTION_CALL.value: {
                "suffix": f" Use the function '{FUNCTION_NAME}'.",
                "temperature": 0.2,
                "max_tokens": 450,
            },
            PromptType.JSON_SCHEMA.value: {
                "suffix": " JSON shape:\n{shape}",
                "temperature": 0.2,
                "max_tokens": 350,
            },
            PromptType.JSON_OBJECT.value: {
                "suffix": " Return JSON ONLY (no extra keys) exactly as:\n{shape}",
                "temperature": 0.2,
                "max_tokens": 300,
            },
        }

    def create_prompt(self, prompt_type: PromptType, search_filter: SearchFilter) -> Dict[str, Any]:
        """
        Generate messages and sampling parameters for one strategy.

        Args:
            prompt_type: Strategy the prompt is built for
            search_filter: Filters echoed into the user message

        Returns:
            Dictionary with ``messages``, ``temperature`` and ``max_tokens``
        """
        template = self._prompt_templates[prompt_type.value]
        user_message = self._format_filters(search_filter) + template["suffix"].format(
            shape=describe_payload_shape()
        )

        logger.debug("Generated prompt", prompt_type=prompt_type.value)

        return {
            "messages": self._messages(user_message),
            "temperature": template["temperature"],
            "max_tokens": template["max_tokens"],
        }

    def _format_filters(self, search_filter: SearchFilter) -> str:
        return USER_PROMPT.format(
            type=search_filter.type.value if search_filter.type else "ANY",
            origin=search_filter.origin or "ANY",
            destination=search_filter.destination or "ANY",
            max_items=self.max_items,
        )

    @staticmethod
    def _messages(user_message: str) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": user_message},
        ]


__all__ = ["FUNCTION_NAME", "PromptManager", "PromptType", "SYSTEM_PROMPT"]

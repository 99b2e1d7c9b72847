"""
Single definition of the AI suggestion payload.

The pydantic models below are the only description of what a language model
may return. Everything else is derived from them:

- ``CarrierPayloadValidator`` checks untyped provider output and strips
  unknown properties at every object level;
- ``carrier_json_schema`` produces the JSON schema sent as function-call
  parameters or as a strict response format;
- ``describe_payload_shape`` renders the shape fragment embedded in prompts.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from app.domain.entities.carrier import TransportType


class SuggestedLane(BaseModel):
    """Lane served by a suggested carrier."""

    model_config = ConfigDict(extra="ignore")

    origin: str
    destination: str


class SuggestedCarrier(BaseModel):
    """Carrier suggestion as produced by the model."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    name: str
    types: List[TransportType]
    lanes: List[SuggestedLane]
    description: Optional[str] = None
    logo_emoji: Optional[str] = Field(default=None, alias="logoEmoji")


class SuggestionPayload(BaseModel):
    """Envelope wrapping the suggested carriers."""

    model_config = ConfigDict(extra="ignore")

    items: List[SuggestedCarrier]


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating a provider payload."""

    is_valid: bool
    payload: Optional[Dict[str, Any]] = None
    errors: List[str] = field(default_factory=list)
    parsed: Optional[SuggestionPayload] = None

    @property
    def items(self) -> List[SuggestedCarrier]:
        return list(self.parsed.items) if self.parsed else []


class CarrierPayloadValidator:
    """Schema-checked, property-stripping validator for AI output.

    Structural problems (wrong types, missing required fields, unknown
    transport types) make the payload invalid. Unknown properties are
    dropped, never rejected.
    """

    def validate(self, payload: Any) -> ValidationOutcome:
        try:
            parsed = SuggestionPayload.model_validate(payload)
        except PydanticValidationError as exc:
            return ValidationOutcome(is_valid=False, errors=_format_errors(exc))

        normalized = parsed.model_dump(mode="json", by_alias=True, exclude_none=True)
        return ValidationOutcome(is_valid=True, payload=normalized, parsed=parsed)


def _format_errors(exc: PydanticValidationError) -> List[str]:
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "payload"
        errors.append(f"{location}: {error.get('msg', 'invalid value')}")
    return errors


_DROPPED_KEYWORDS = {"title", "default"}


def _inline(node: Any, defs: Dict[str, Any], strict: bool) -> Any:
    if isinstance(node, list):
        return [_inline(item, defs, strict) for item in node]
    if not isinstance(node, dict):
        return node
    if "$ref" in node:
        return _inline(defs[node["$ref"].rsplit("/", 1)[-1]], defs, strict)

    result: Dict[str, Any] = {}
    for key, value in node.items():
        if key in _DROPPED_KEYWORDS or key == "$defs":
            continue
        if key == "properties":
            result[key] = {name: _inline(prop, defs, strict) for name, prop in value.items()}
        else:
            result[key] = _inline(value, defs, strict)

    if result.get("type") == "object":
        result["additionalProperties"] = False
        if strict:
            # strict response formats require every property; optional ones stay nullable
            result["required"] = list(result.get("properties", {}))
    return result


@lru_cache(maxsize=2)
def _schema(strict: bool) -> str:
    raw = SuggestionPayload.model_json_schema(by_alias=True)
    return json.dumps(_inline(raw, raw.get("$defs", {}), strict))


def carrier_json_schema(strict: bool = False) -> Dict[str, Any]:
    """JSON schema of the suggestion payload with references inlined."""
    return json.loads(_schema(strict))


def _non_null(node: Dict[str, Any]) -> Dict[str, Any]:
    for option in node.get("anyOf", ()):
        if option.get("type") != "null":
            return option
    return node


def _render(node: Dict[str, Any], depth: int) -> str:
    node = _non_null(node)
    if "enum" in node:
        return "|".join(json.dumps(value) for value in node["enum"])
    kind = node.get("type")
    if kind == "array":
        return "[" + _render(node.get("items", {}), depth) + "]"
    if kind == "object":
        pad = "  " * (depth + 1)
        fields = [
            f'{pad}"{name}": {_render(prop, depth + 1)}'
            for name, prop in node.get("properties", {}).items()
        ]
        return "{\n" + ",\n".join(fields) + "\n" + "  " * depth + "}"
    return json.dumps(kind or "string")


@lru_cache(maxsize=1)
def describe_payload_shape() -> str:
    """Human-readable shape of the payload, used inside prompt text."""
    return _render(carrier_json_schema(), 0)


__all__ = [
    "CarrierPayloadValidator",
    "SuggestedCarrier",
    "SuggestedLane",
    "SuggestionPayload",
    "ValidationOutcome",
    "carrier_json_schema",
    "describe_payload_shape",
]

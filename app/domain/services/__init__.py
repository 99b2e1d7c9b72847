"""Domain services package."""

from .carrier_payload import (
    CarrierPayloadValidator,
    ValidationOutcome,
    carrier_json_schema,
    describe_payload_shape,
)
from .stub_suggestion import StubSuggestionGenerator

__all__ = [
    "CarrierPayloadValidator",
    "ValidationOutcome",
    "carrier_json_schema",
    "describe_payload_shape",
    "StubSuggestionGenerator",
]

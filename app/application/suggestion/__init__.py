"""AI carrier suggestion engine: prompts, strategies and orchestration."""

from app.application.suggestion.strategies import (
    FunctionCallStrategy,
    JsonObjectStrategy,
    JsonSchemaStrategy,
    StrategyResult,
    SuggestionStrategy,
    sanitize_json_text,
)
from app.application.suggestion.suggestion_service import (
    CarrierSuggestionService,
    build_default_strategies,
)

__all__ = [
    "CarrierSuggestionService",
    "FunctionCallStrategy",
    "JsonObjectStrategy",
    "JsonSchemaStrategy",
    "StrategyResult",
    "SuggestionStrategy",
    "build_default_strategies",
    "sanitize_json_text",
]

"""AI infrastructure services.

This module contains AI-related infrastructure implementations:
- OpenAI service for chat completions used by the suggestion fallback
"""

from app.infrastructure.ai.openai_service import OpenAIService

__all__ = [
    "OpenAIService",
]

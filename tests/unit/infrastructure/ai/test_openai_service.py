"""Tests for OpenAI Service infrastructure implementation."""

import pytest
from unittest.mock import AsyncMock, patch
from openai.types.chat import ChatCompletion

from app.core.config import Settings
from app.domain.exceptions import ConfigurationError
from app.infrastructure.ai.openai_service import OpenAIService


@pytest.fixture
def settings():
    return Settings(_env_file=None, OPENAI_API_KEY="sk-test", OPENAI_MODEL="gpt-test", OPENAI_TIMEOUT=7)


@pytest.fixture
def openai_service(settings):
    """Create OpenAI service with a mocked SDK client."""
    service = OpenAIService(settings)
    service._client = AsyncMock()
    return service


def completion(message, finish_reason="stop") -> ChatCompletion:
    return ChatCompletion.model_validate(
        {
            "id": "chatcmpl-1",
            "object": "chat.completion",
            "created": 1700000000,
            "model": "gpt-test",
            "choices": [{"index": 0, "message": message, "finish_reason": finish_reason}],
            "usage": {"prompt_tokens": 12, "completion_tokens": 30, "total_tokens": 42},
        }
    )


class TestOpenAIServiceInitialization:
    """Test OpenAI service initialization."""

    async def test_create_builds_client(self, settings):
        with patch("app.infrastructure.ai.openai_service.AsyncOpenAI") as client_cls:
            service = await OpenAIService.create(settings)

        assert service.model == "gpt-test"
        client_cls.assert_called_once_with(api_key="sk-test", timeout=7.0, max_retries=0)

    def test_custom_base_url_passed_through(self):
        settings = Settings(_env_file=None, OPENAI_API_KEY="k", OPENAI_BASE_URL="http://proxy/v1")
        with patch("app.infrastructure.ai.openai_service.AsyncOpenAI") as client_cls:
            _ = OpenAIService(settings).client

        assert client_cls.call_args.kwargs["base_url"] == "http://proxy/v1"

    def test_missing_key_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            OpenAIService(Settings(_env_file=None, OPENAI_API_KEY=None))


class TestChatCompletion:
    """Test chat completion requests and response conversion."""

    async def test_plain_content(self, openai_service):
        message = {"role": "assistant", "content": '{"items": []}'}
        openai_service._client.chat.completions.create = AsyncMock(return_value=completion(message))

        result = await openai_service.chat_completion(
            [{"role": "user", "content": "hi"}],
            max_tokens=300,
            temperature=0.2,
            response_format={"type": "json_object"},
        )

        assert result["choices"][0]["message"]["content"] == '{"items": []}'
        assert result["choices"][0]["message"]["tool_calls"] == []
        assert result["usage"]["total_tokens"] == 42
        kwargs = openai_service._client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-test"
        assert kwargs["max_tokens"] == 300
        assert kwargs["response_format"] == {"type": "json_object"}
        assert (await openai_service.check_health())["metrics"]["chat"] == 1

    async def test_tool_calls_converted(self, openai_service):
        message = {
            "role": "assistant",
            "content": None,
            "tool_calls": [
                {
                    "id": "call_1",
                    "type": "function",
                    "function": {"name": "return_carriers", "arguments": '{"items": []}'},
                }
            ],
        }
        openai_service._client.chat.completions.create = AsyncMock(
            return_value=completion(message, "tool_calls")
        )

        result = await openai_service.chat_completion([{"role": "user", "content": "hi"}])

        [call] = result["choices"][0]["message"]["tool_calls"]
        assert call["type"] == "function"
        assert call["function"] == {"name": "return_carriers", "arguments": '{"items": []}'}
        assert "max_tokens" not in openai_service._client.chat.completions.create.call_args.kwargs

    async def test_empty_messages_rejected(self, openai_service):
        with pytest.raises(ValueError):
            await openai_service.chat_completion([])

    async def test_provider_error_wrapped(self, openai_service):
        openai_service._client.chat.completions.create = AsyncMock(side_effect=Exception("503"))

        with pytest.raises(RuntimeError, match="Chat completion failed"):
            await openai_service.chat_completion([{"role": "user", "content": "hi"}])

        assert openai_service._metrics["errors"] == 1


class TestHealth:

    async def test_health_does_not_call_provider(self, settings):
        service = OpenAIService(settings)
        health = await service.check_health()

        assert health["status"] == "healthy"
        assert health["model"] == "gpt-test"
        assert health["client_initialized"] is False

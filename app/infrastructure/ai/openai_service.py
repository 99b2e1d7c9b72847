"""
OpenAI Service Implementation

Chat-completion adapter used by the carrier suggestion fallback:
- Unified AsyncOpenAI client, created lazily
- Function calling, strict json_schema and json_object response modes
- Bounded per-call timeout; the SDK's own retries are disabled so a failed
  call degrades to the next suggestion strategy instead of repeating
- Call and error metrics for health reporting
"""

import time
from typing import Dict, List, Optional, Any
from datetime import datetime
import structlog
from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion

from app.domain.interfaces import IAIService
from app.core.config import Settings, get_settings

logger = structlog.get_logger(__name__)


class OpenAIService(IAIService):
    """
    Chat completion service backed by the OpenAI API.
    
    Responses are converted to plain dictionaries so the application layer
    never depends on SDK types.
    """
    
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._client: Optional[AsyncOpenAI] = None
        self._config = self._initialize_config()
        self._metrics = {"chat": 0, "errors": 0}
    
    @classmethod
    async def create(cls, settings: Optional[Settings] = None) -> "OpenAIService":
        """Create OpenAI service with validation and initialization"""
        try:
            service = cls(settings)
            
            # Test OpenAI client initialization
            _ = service.client
            
            logger.info("OpenAI service created successfully", model=service.model)
            return service
            
        except Exception as e:
            logger.error(f"Failed to create OpenAI service: {e}")
            raise
        
    def _initialize_config(self) -> Dict[str, Any]:
        """Initialize OpenAI configuration"""
        config = self.settings.get_openai_config()
        logger.info(
            "OpenAI configuration initialized",
            provider=config["provider"],
            model=config["model"],
            timeout=config["timeout"],
        )
        return config
    
    @property
    def model(self) -> str:
        return self._config["model"]
    
    @property
    def client(self) -> AsyncOpenAI:
        """Get or create OpenAI client"""
        if self._client is None:
            try:
                client_kwargs = {
                    "api_key": self._config["api_key"],
                    "timeout": self._config["timeout"],
                    "max_retries": 0
                }
                
                if self._config["base_url"] and self._config["base_url"] != "https://api.openai.com/v1":
                    client_kwargs["base_url"] = self._config["base_url"]
                
                self._client = AsyncOpenAI(**client_kwargs)
                logger.info(
                    "OpenAI client initialized successfully",
                    provider=self._config["provider"]
                )
            except Exception as e:
                logger.error(f"Failed to initialize OpenAI client: {e}")
                raise
        
        return self._client
    
    async def chat_completion(
        self,
        messages: List[Dict[str, str]],
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        **kwargs
    ) -> Dict[str, Any]:
        """
        Generate chat completion.
        
        Args:
            messages: List of message dictionaries
            model: Override model (optional)
            max_tokens: Override max tokens (optional)
            temperature: Override temperature (optional)
            **kwargs: Provider mode parameters (tools, tool_choice, response_format)
            
        Returns:
            Chat completion response as a plain dictionary
        """
        if not messages:
            raise ValueError("Messages cannot be empty")
        
        request: Dict[str, Any] = {
            "model": model or self._config["model"],
            "messages": messages,
            **kwargs,
        }
        if max_tokens is not None:
            request["max_tokens"] = max_tokens
        if temperature is not None:
            request["temperature"] = temperature
        
        try:
            start_time = time.time()
            
            response: ChatCompletion = await self.client.chat.completions.create(**request)
            
            self._metrics["chat"] += 1
            result = self._to_dict(response)
            
            duration = time.time() - start_time
            logger.debug(
                "Generated chat completion",
                model=request["model"],
                tokens=result["usage"]["total_tokens"],
                duration_ms=int(duration * 1000)
            )
            
            return result
            
        except Exception as e:
            self._metrics["errors"] += 1
            logger.error(f"Failed to generate chat completion: {e}")
            raise RuntimeError(f"Chat completion failed: {e}") from e
    
    @staticmethod
    def _to_dict(response: ChatCompletion) -> Dict[str, Any]:
        """Convert an SDK response to the standardized format"""
        choices = []
        for choice in response.choices:
            tool_calls = [
                {
                    "id": call.id,
                    "type": call.type,
                    "function": {
                        "name": call.function.name,
                        "arguments": call.function.arguments,
                    },
                }
                for call in (choice.message.tool_calls or [])
                if getattr(call, "function", None) is not None
            ]
            choices.append({
                "message": {
                    "role": choice.message.role,
                    "content": choice.message.content,
                    "tool_calls": tool_calls,
                },
                "finish_reason": choice.finish_reason,
                "index": choice.index
            })
        
        return {
            "choices": choices,
            "usage": {
                "prompt_tokens": response.usage.prompt_tokens if response.usage else 0,
                "completion_tokens": response.usage.completion_tokens if response.usage else 0,
                "total_tokens": response.usage.total_tokens if response.usage else 0
            },
            "model": response.model,
            "id": response.id
        }
    
    async def check_health(self) -> Dict[str, Any]:
        """Report configuration and call metrics without calling the provider"""
        return {
            "status": "healthy",
            "provider": self._config["provider"],
            "model": self._config["model"],
            "client_initialized": self._client is not None,
            "metrics": self._metrics.copy(),
            "timestamp": datetime.now().isoformat()
        }

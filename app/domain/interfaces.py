"""Domain-layer service interfaces.

These abstractions define the stable contracts that the application layer relies on,
while infrastructure adapters provide concrete implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class IHealthCheck:
    """Health check interface mixin."""

    @abstractmethod
    async def check_health(self) -> Dict[str, Any]:
        """Return health check details."""
        pass


class IAIService(IHealthCheck, ABC):
    """Chat-completion provider used for carrier suggestions."""

    @abstractmethod
    async def chat_completion(
        self,
        messages: List[Dict[str, str]],
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        **kwargs: Any,
    ) -> Dict[str, Any]:
        """Generate chat completion.

        ``kwargs`` carries provider modes such as ``tools``/``tool_choice`` or
        ``response_format``. The result is a standardized dict whose
        ``choices[i]["message"]`` holds ``content`` and ``tool_calls``.
        """
        pass


class IRateLimiter(IHealthCheck, ABC):
    """Per-key call budget guarding expensive operations."""

    @abstractmethod
    async def allow(self, key: str) -> bool:
        """Record a call for ``key`` and report whether it fits the current window."""
        pass

    @abstractmethod
    async def reset(self, key: Optional[str] = None) -> None:
        """Forget one key, or every key when ``key`` is None."""
        pass


class INotificationService(IHealthCheck, ABC):
    """Outbound mail relay interface."""

    @abstractmethod
    async def send_email(
        self,
        to: str,
        subject: str,
        body: str,
        *,
        html_body: Optional[str] = None,
        reply_to: Optional[str] = None,
    ) -> bool:
        """Send an email; raise NotificationError when delivery fails."""
        pass

    @abstractmethod
    def is_configured(self) -> bool:
        """Whether credentials and a recipient are available."""
        pass

    @abstractmethod
    def recipient(self) -> Optional[str]:
        """Default inbox for relayed messages."""
        pass


__all__ = [
    "IHealthCheck",
    "IAIService",
    "IRateLimiter",
    "INotificationService",
]

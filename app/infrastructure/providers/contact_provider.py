"""Provider for the contact form application service."""

from __future__ import annotations

import asyncio
from typing import Optional

from app.application.contact_service import ContactApplicationService
from app.core.config import get_settings
from app.infrastructure.providers.notification_provider import get_notification_service
from app.infrastructure.providers.rate_limit_provider import get_contact_rate_limiter

_contact_service: Optional[ContactApplicationService] = None
_lock = asyncio.Lock()


async def get_contact_service() -> ContactApplicationService:
    global _contact_service

    if _contact_service is not None:
        return _contact_service

    async with _lock:
        if _contact_service is not None:
            return _contact_service

        settings = get_settings()
        _contact_service = ContactApplicationService(
            notification_service=await get_notification_service(),
            rate_limiter=await get_contact_rate_limiter(),
            max_per_window=settings.CONTACT_RATE_LIMIT_MAX,
            window_seconds=settings.CONTACT_RATE_LIMIT_WINDOW_SECONDS,
        )
        return _contact_service


async def reset_contact_service() -> None:
    global _contact_service
    async with _lock:
        _contact_service = None


__all__ = ["get_contact_service", "reset_contact_service"]

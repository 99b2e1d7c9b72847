"""Notification service provider."""

from __future__ import annotations

import asyncio
from typing import Optional

from app.core.config import get_settings
from app.domain.interfaces import INotificationService
from app.infrastructure.adapters.notification_adapter import SMTPNotificationService

_notification_service: Optional[INotificationService] = None
_lock = asyncio.Lock()


async def get_notification_service() -> INotificationService:
    global _notification_service

    if _notification_service is not None:
        return _notification_service

    async with _lock:
        if _notification_service is not None:
            return _notification_service

        _notification_service = SMTPNotificationService(get_settings())
        return _notification_service


async def reset_notification_service() -> None:
    global _notification_service
    async with _lock:
        _notification_service = None


__all__ = ["get_notification_service", "reset_notification_service"]

"""Repository providers wiring persistence adapters to domain ports."""

from __future__ import annotations

import asyncio
from typing import Optional

from app.domain.repositories.carrier_repository import ICarrierRepository
from app.infrastructure.persistence.repositories.carrier_repository import (
    PostgresCarrierRepository,
)
from app.infrastructure.providers.database_provider import get_database_manager

_carrier_repository: Optional[ICarrierRepository] = None
_lock = asyncio.Lock()


async def get_carrier_repository() -> ICarrierRepository:
    """Return the carrier repository backed by the shared database manager."""
    global _carrier_repository

    if _carrier_repository is not None:
        return _carrier_repository

    async with _lock:
        if _carrier_repository is not None:
            return _carrier_repository

        db_manager = await get_database_manager()
        _carrier_repository = PostgresCarrierRepository(db_manager)
        return _carrier_repository


async def reset_carrier_repository() -> None:
    global _carrier_repository
    async with _lock:
        _carrier_repository = None


__all__ = ["get_carrier_repository", "reset_carrier_repository"]

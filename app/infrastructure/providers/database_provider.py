"""Database manager provider for the carrier store."""

from __future__ import annotations

import asyncio
from typing import Optional

from app.core.config import get_settings
from app.database.sqlmodel_engine import SQLModelDatabaseManager

_database_manager: Optional[SQLModelDatabaseManager] = None
_lock = asyncio.Lock()


async def get_database_manager() -> SQLModelDatabaseManager:
    """Return the shared manager; the engine itself is created on first connect."""
    global _database_manager

    if _database_manager is not None:
        return _database_manager

    async with _lock:
        if _database_manager is not None:
            return _database_manager

        _database_manager = SQLModelDatabaseManager(get_settings())
        return _database_manager


async def reset_database_manager() -> None:
    """Dispose the engine and forget the manager."""
    global _database_manager
    async with _lock:
        if _database_manager is not None:
            await _database_manager.close()
        _database_manager = None


__all__ = ["get_database_manager", "reset_database_manager"]

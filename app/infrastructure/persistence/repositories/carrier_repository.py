"""PostgreSQL implementation of ICarrierRepository using CarrierMapper."""

from __future__ import annotations

from typing import List, Optional, Sequence

import structlog
from sqlalchemy import delete
from sqlmodel import select

from app.database.sqlmodel_engine import SQLModelDatabaseManager
from app.domain.entities.carrier import Carrier, SearchFilter
from app.domain.exceptions import SearchError
from app.domain.repositories.carrier_repository import ICarrierRepository
from app.infrastructure.persistence.mappers.carrier_mapper import CarrierMapper
from app.infrastructure.persistence.models.carrier_table import CarrierTable

logger = structlog.get_logger(__name__)


def build_carrier_query(search_filter: SearchFilter, limit: int = 50):
    """
    Build the directory query for the given filters.

    Lane filters use JSONB containment on the lanes array, so origin and
    destination each match when any lane satisfies them, independently.
    """
    stmt = select(CarrierTable)
    if search_filter.type:
        stmt = stmt.where(CarrierTable.types.contains([search_filter.type.value]))
    if search_filter.origin:
        stmt = stmt.where(CarrierTable.lanes.contains([{"origin": search_filter.origin}]))
    if search_filter.destination:
        stmt = stmt.where(CarrierTable.lanes.contains([{"destination": search_filter.destination}]))
    if search_filter.verified_only:
        stmt = stmt.where(CarrierTable.verified.is_(True))
    return stmt.limit(limit)


class PostgresCarrierRepository(ICarrierRepository):
    """PostgreSQL adapter implementation of ICarrierRepository."""

    def __init__(self, db_manager: SQLModelDatabaseManager):
        self._db_manager = db_manager

    async def connect(self) -> None:
        """Initialize the engine; failures propagate and are retried on the next call."""
        await self._db_manager.initialize()

    async def find(self, search_filter: SearchFilter, limit: int = 50) -> List[Carrier]:
        stmt = build_carrier_query(search_filter, limit)
        try:
            async with self._db_manager.get_session() as session:
                result = await session.execute(stmt)
                rows = result.scalars().all()
        except Exception as e:
            raise SearchError(f"Failed to query carriers: {str(e)}") from e

        carriers: List[Carrier] = []
        for row in rows:
            try:
                carriers.append(CarrierMapper.to_domain(row))
            except (TypeError, ValueError) as e:
                logger.warning("Skipping unmappable carrier row", carrier_id=str(row.id), error=str(e))
        return carriers

    async def add_many(self, carriers: Sequence[Carrier]) -> int:
        tables = [CarrierMapper.to_table(carrier) for carrier in carriers]
        async with self._db_manager.get_session() as session:
            session.add_all(tables)
        logger.info("Carriers stored", count=len(tables))
        return len(tables)

    async def delete_all(self) -> int:
        async with self._db_manager.get_session() as session:
            result = await session.execute(delete(CarrierTable))
            deleted: Optional[int] = result.rowcount
        logger.info("Carriers deleted", count=deleted)
        return deleted or 0


__all__ = ["PostgresCarrierRepository", "build_carrier_query"]

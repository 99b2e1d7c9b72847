"""Domain repository contract for carrier aggregates."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence

from app.domain.entities.carrier import Carrier, SearchFilter


class ICarrierRepository(ABC):
    """Domain-facing abstraction for the carrier document store."""

    @abstractmethod
    async def connect(self) -> None:
        """Establish or reuse the store connection; raise when unreachable or unconfigured."""
        raise NotImplementedError

    @abstractmethod
    async def find(self, search_filter: SearchFilter, limit: int = 50) -> List[Carrier]:
        """Return carriers matching every populated filter field, capped at ``limit``."""
        raise NotImplementedError

    @abstractmethod
    async def add_many(self, carriers: Sequence[Carrier]) -> int:
        """Insert carriers and return the number stored."""
        raise NotImplementedError

    @abstractmethod
    async def delete_all(self) -> int:
        """Remove every carrier and return the number deleted."""
        raise NotImplementedError

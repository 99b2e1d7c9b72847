"""
Mock repository implementations for testing.

These mocks implement the repository interfaces and keep test data in
memory while tracking method calls for verification.
"""

from typing import List, Optional, Sequence

from app.domain.entities.carrier import Carrier, SearchFilter
from app.domain.repositories.carrier_repository import ICarrierRepository


def _serves(carrier: Carrier, origin: Optional[str], destination: Optional[str]) -> bool:
    """Origin and destination each match when any lane satisfies them."""
    if origin and not any(lane.origin == origin for lane in carrier.lanes):
        return False
    if destination and not any(lane.destination == destination for lane in carrier.lanes):
        return False
    return True


class MockCarrierRepository(ICarrierRepository):
    """In-memory carrier store applying the same filter semantics as the database."""

    def __init__(self, carriers: Optional[Sequence[Carrier]] = None):
        self.carriers: List[Carrier] = list(carriers or [])
        self.call_log: List[tuple] = []
        self.should_fail_on_connect = False
        self.should_fail_on_find = False

    async def connect(self) -> None:
        self.call_log.append(("connect",))
        if self.should_fail_on_connect:
            raise ConnectionError("Mock carrier store unreachable")

    async def find(self, search_filter: SearchFilter, limit: int = 50) -> List[Carrier]:
        self.call_log.append(("find", search_filter, limit))
        if self.should_fail_on_find:
            raise RuntimeError("Mock carrier query failure")

        matches = [
            carrier
            for carrier in self.carriers
            if (search_filter.type is None or search_filter.type in carrier.types)
            and _serves(carrier, search_filter.origin, search_filter.destination)
            and (not search_filter.verified_only or carrier.verified)
        ]
        return matches[:limit]

    async def add_many(self, carriers: Sequence[Carrier]) -> int:
        self.call_log.append(("add_many", len(carriers)))
        self.carriers.extend(carriers)
        return len(carriers)

    async def delete_all(self) -> int:
        self.call_log.append(("delete_all",))
        deleted = len(self.carriers)
        self.carriers.clear()
        return deleted

    def get_call_count(self, method: str) -> int:
        """Get number of calls to specific method."""
        return len([call for call in self.call_log if call[0] == method])

    def clear_call_log(self):
        """Clear call log."""
        self.call_log.clear()

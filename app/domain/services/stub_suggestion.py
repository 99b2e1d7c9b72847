"""Deterministic, offline last-resort carrier suggestion."""

from __future__ import annotations

import time
from typing import Callable, List

from app.domain.entities.carrier import CarrierOutput, Lane, SearchFilter, TransportType

STUB_CONFIDENCE = 0.55
DEFAULT_STUB_TYPE = TransportType.TRUCK
DEFAULT_STUB_ORIGIN = "FR"
DEFAULT_STUB_DESTINATION = "ES"


class StubSuggestionGenerator:
    """Produce a single unverified placeholder carrier echoing the filter.

    Never performs I/O and never fails; the only non-deterministic part is
    the identifier, derived from the injected clock.
    """

    def __init__(self, clock: Callable[[], float] = time.time, confidence: float = STUB_CONFIDENCE):
        self._clock = clock
        self._confidence = confidence

    def generate(self, search_filter: SearchFilter) -> List[CarrierOutput]:
        lane = Lane(
            origin=search_filter.origin or DEFAULT_STUB_ORIGIN,
            destination=search_filter.destination or DEFAULT_STUB_DESTINATION,
        )
        return [
            CarrierOutput.suggestion(
                id=f"ai-stub-{int(self._clock() * 1000)}",
                name="Regional Carrier Suggestion",
                types=[search_filter.type or DEFAULT_STUB_TYPE],
                lanes=[lane],
                description="Unverified suggestion based on similar lanes in the region.",
                logo_emoji="🧭",
                confidence=self._confidence,
            )
        ]


__all__ = ["StubSuggestionGenerator", "STUB_CONFIDENCE"]

"""Pure domain representation of carriers, lanes and search results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from app.domain.value_objects import CarrierId


class TransportType(str, Enum):
    """Equipment tags a carrier can operate."""

    TRUCK = "truck"
    REEFER = "reefer"
    CONTAINER = "container"
    FLATBED = "flatbed"
    TANKER = "tanker"


class CarrierSource(str, Enum):
    """Provenance of a carrier record returned to callers."""

    DB = "db"
    AI = "ai"


@dataclass(frozen=True)
class Lane:
    """Directed origin -> destination pair of two-letter country codes."""

    origin: str
    destination: str

    def to_dict(self) -> Dict[str, str]:
        return {"origin": self.origin, "destination": self.destination}


@dataclass
class Contact:
    """Optional public contact block of a carrier."""

    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None

    def is_empty(self) -> bool:
        return not (self.email or self.phone or self.website)

    def to_dict(self) -> Dict[str, str]:
        data = {"email": self.email, "phone": self.phone, "website": self.website}
        return {key: value for key, value in data.items() if value is not None}


@dataclass
class Carrier:
    """Aggregate root for a listed freight carrier."""

    id: CarrierId
    name: str
    types: List[TransportType]
    lanes: List[Lane] = field(default_factory=list)
    verified: bool = False
    rating: Optional[float] = None
    description: Optional[str] = None
    contact: Optional[Contact] = None
    logo_emoji: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Carrier name cannot be empty")
        if not self.types:
            raise ValueError("Carrier must operate at least one transport type")


@dataclass
class CarrierOutput:
    """Response-only view of a carrier tagged with its provenance."""

    id: str
    name: str
    types: List[TransportType]
    lanes: List[Lane]
    verified: bool
    source: CarrierSource
    description: Optional[str] = None
    logo_emoji: Optional[str] = None
    rating: Optional[float] = None
    contact: Optional[Contact] = None
    confidence: Optional[float] = None

    @classmethod
    def from_carrier(cls, carrier: Carrier) -> "CarrierOutput":
        return cls(
            id=str(carrier.id),
            name=carrier.name,
            types=list(carrier.types),
            lanes=list(carrier.lanes),
            verified=carrier.verified,
            source=CarrierSource.DB,
            description=carrier.description,
            logo_emoji=carrier.logo_emoji,
            rating=carrier.rating,
            contact=carrier.contact,
        )

    @classmethod
    def suggestion(
        cls,
        *,
        id: str,
        name: str,
        types: List[TransportType],
        lanes: List[Lane],
        confidence: float,
        description: Optional[str] = None,
        logo_emoji: Optional[str] = None,
    ) -> "CarrierOutput":
        """Build an AI-sourced record; these are never verified and carry no contact block."""
        return cls(
            id=id,
            name=name,
            types=list(types),
            lanes=list(lanes),
            verified=False,
            source=CarrierSource.AI,
            description=description,
            logo_emoji=logo_emoji,
            confidence=confidence,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "types": [t.value for t in self.types],
            "lanes": [lane.to_dict() for lane in self.lanes],
            "verified": self.verified,
            "source": self.source.value,
            "description": self.description,
            "logoEmoji": self.logo_emoji,
            "rating": self.rating,
            "contact": self.contact.to_dict() if self.contact else None,
            "confidence": self.confidence,
        }
        return {key: value for key, value in data.items() if value is not None}


@dataclass(frozen=True)
class SearchFilter:
    """User filters; every field is optional and absent fields impose no constraint."""

    type: Optional[TransportType] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    verified_only: bool = False

    @classmethod
    def create(
        cls,
        type: Optional[Any] = None,
        origin: Optional[str] = None,
        destination: Optional[str] = None,
        verified_only: bool = False,
    ) -> "SearchFilter":
        """Normalize raw input: blank strings become absent, country codes are upper-cased."""
        transport_type = TransportType(type) if type else None
        return cls(
            type=transport_type,
            origin=_normalize_code(origin),
            destination=_normalize_code(destination),
            verified_only=bool(verified_only),
        )

    def populated_count(self) -> int:
        """Number of populated fields among type, origin and destination."""
        return sum(1 for value in (self.type, self.origin, self.destination) if value)

    def to_log_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value if self.type else None,
            "origin": self.origin,
            "destination": self.destination,
            "verified_only": self.verified_only,
        }


@dataclass
class SearchResult:
    """Outcome of a carrier search: database hits or AI suggestions with a notice."""

    carriers: List[CarrierOutput]
    used_ai: bool
    suggestions: Optional[List[CarrierOutput]] = None
    notice: Optional[str] = None

    @classmethod
    def from_database(cls, carriers: List[CarrierOutput]) -> "SearchResult":
        return cls(carriers=carriers, used_ai=False)

    @classmethod
    def from_suggestions(cls, suggestions: List[CarrierOutput], notice: str) -> "SearchResult":
        return cls(carriers=[], used_ai=True, suggestions=suggestions, notice=notice)


def _normalize_code(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip().upper()
    return value or None


__all__ = [
    "Carrier",
    "CarrierOutput",
    "CarrierSource",
    "Contact",
    "Lane",
    "SearchFilter",
    "SearchResult",
    "TransportType",
]

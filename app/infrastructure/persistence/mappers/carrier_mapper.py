"""
Mapper between Carrier domain entities and CarrierTable persistence models.

Handles bidirectional conversion of lanes and contact blocks to and from JSONB.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog

from app.domain.entities.carrier import Carrier, Contact, Lane, TransportType
from app.domain.value_objects import CarrierId
from app.infrastructure.persistence.models.carrier_table import CarrierTable

logger = structlog.get_logger(__name__)


class CarrierMapper:
    """Maps between Carrier domain entities and CarrierTable persistence models."""

    @staticmethod
    def to_domain(table: CarrierTable) -> Carrier:
        """Convert CarrierTable (persistence) to Carrier (domain entity)."""
        return Carrier(
            id=CarrierId(table.id),
            name=table.name,
            types=CarrierMapper._map_types_to_domain(table.types or [], table.name),
            lanes=CarrierMapper._map_lanes_to_domain(table.lanes or []),
            verified=bool(table.verified),
            rating=table.rating,
            description=table.description,
            contact=CarrierMapper._map_contact_to_domain(table.contact),
            logo_emoji=table.logo_emoji,
            created_at=table.created_at,
            updated_at=table.updated_at,
        )

    @staticmethod
    def to_table(entity: Carrier) -> CarrierTable:
        """Convert Carrier (domain entity) to CarrierTable (persistence)."""
        return CarrierTable(
            id=entity.id.value,
            name=entity.name,
            types=[t.value for t in entity.types],
            lanes=[lane.to_dict() for lane in entity.lanes],
            verified=entity.verified,
            rating=entity.rating,
            description=entity.description,
            contact=entity.contact.to_dict() if entity.contact and not entity.contact.is_empty() else None,
            logo_emoji=entity.logo_emoji,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    @staticmethod
    def _map_types_to_domain(raw_types: List[str], carrier_name: str) -> List[TransportType]:
        types: List[TransportType] = []
        for raw in raw_types:
            try:
                types.append(TransportType(raw))
            except ValueError:
                logger.warning("Skipping unknown transport type", carrier=carrier_name, type=raw)
        return types

    @staticmethod
    def _map_lanes_to_domain(raw_lanes: List[Dict[str, Any]]) -> List[Lane]:
        return [
            Lane(origin=str(lane.get("origin", "")), destination=str(lane.get("destination", "")))
            for lane in raw_lanes
            if isinstance(lane, dict)
        ]

    @staticmethod
    def _map_contact_to_domain(raw: Optional[Dict[str, Any]]) -> Optional[Contact]:
        if not raw:
            return None
        return Contact(
            email=raw.get("email"),
            phone=raw.get("phone"),
            website=raw.get("website"),
        )


__all__ = ["CarrierMapper"]

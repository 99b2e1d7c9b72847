"""Reference carriers loaded by the seeding script."""

from __future__ import annotations

from typing import List

import structlog

from app.domain.entities.carrier import Carrier, Contact, Lane, TransportType
from app.domain.repositories.carrier_repository import ICarrierRepository
from app.domain.value_objects import CarrierId

logger = structlog.get_logger(__name__)


def build_seed_carriers() -> List[Carrier]:
    return [
        Carrier(
            id=CarrierId.generate(),
            name="Alpine Logistics",
            verified=True,
            rating=4.7,
            types=[TransportType.TRUCK, TransportType.REEFER],
            lanes=[Lane("FR", "ES"), Lane("FR", "DE")],
            description="EU road freight with temperature control.",
            contact=Contact(email="hello@alpine.example", phone="+33 1 23 45 67 89", website="#"),
            logo_emoji="⛰️",
        ),
        Carrier(
            id=CarrierId.generate(),
            name="Iberia Freight",
            verified=True,
            rating=4.6,
            types=[TransportType.TRUCK, TransportType.FLATBED],
            lanes=[Lane("ES", "FR"), Lane("PT", "ES")],
            description="Iberian peninsula specialists.",
            contact=Contact(phone="+34 91 000 22 33", website="#"),
            logo_emoji="🚛",
        ),
    ]


async def seed_carriers(repository: ICarrierRepository) -> int:
    """Replace every stored carrier with the reference set and return the count."""
    await repository.connect()
    deleted = await repository.delete_all()
    stored = await repository.add_many(build_seed_carriers())
    logger.info("Seeded carriers", deleted=deleted, stored=stored)
    return stored


__all__ = ["build_seed_carriers", "seed_carriers"]

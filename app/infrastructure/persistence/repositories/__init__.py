"""PostgreSQL repository implementations of domain repository ports."""

from app.infrastructure.persistence.repositories.carrier_repository import (
    PostgresCarrierRepository,
    build_carrier_query,
)

__all__ = ["PostgresCarrierRepository", "build_carrier_query"]

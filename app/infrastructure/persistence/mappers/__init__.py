"""
Mappers for converting between domain entities and persistence models.
"""

from app.infrastructure.persistence.mappers.carrier_mapper import CarrierMapper

__all__ = ["CarrierMapper"]

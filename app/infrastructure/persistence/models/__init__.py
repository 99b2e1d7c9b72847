"""
Infrastructure persistence models module.

Database table definitions, separated from domain models and business logic.
"""

from app.infrastructure.persistence.models.carrier_table import CarrierTable

__all__ = ["CarrierTable"]

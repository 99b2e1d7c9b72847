"""Domain repository abstractions."""

from .carrier_repository import ICarrierRepository

__all__ = [
    "ICarrierRepository",
]

"""Domain value objects used across aggregates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import UUID, uuid4


def _coerce_uuid(value: Any, *, field_name: str) -> UUID:
    """Convert strings to UUID instances while validating type."""
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        return UUID(value)
    raise TypeError(f"{field_name} must be a UUID-compatible value")


@dataclass(frozen=True)
class CarrierId:
    """Aggregate identifier for persisted Carrier entities."""

    value: UUID

    def __init__(self, value: Any):
        object.__setattr__(self, "value", _coerce_uuid(value, field_name="carrier_id"))

    @classmethod
    def generate(cls) -> "CarrierId":
        return cls(uuid4())

    def __str__(self) -> str:
        return str(self.value)


__all__ = ["CarrierId"]

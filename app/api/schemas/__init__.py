"""
API Schemas - DTOs for REST API following hexagonal architecture.

Request/response models for the API layer, separated from domain entities
and persistence tables:
- search_schemas: carrier search DTOs
- contact_schemas: contact form DTOs
"""

from app.api.schemas.contact_schemas import (
    ContactErrorResponse,
    ContactRequest,
    ContactResponse,
)
from app.api.schemas.search_schemas import (
    CarrierOutputSchema,
    ContactSchema,
    LaneSchema,
    SearchRequest,
    SearchResponse,
)

__all__ = [
    "CarrierOutputSchema",
    "ContactErrorResponse",
    "ContactRequest",
    "ContactResponse",
    "ContactSchema",
    "LaneSchema",
    "SearchRequest",
    "SearchResponse",
]

"""Domain entities exposed for application layer use."""

from .carrier import (
    Carrier,
    CarrierOutput,
    CarrierSource,
    Contact,
    Lane,
    SearchFilter,
    SearchResult,
    TransportType,
)
from .contact_message import ContactMessage

__all__ = [
    # Carrier
    "Carrier",
    "CarrierOutput",
    "CarrierSource",
    "Contact",
    "Lane",
    "SearchFilter",
    "SearchResult",
    "TransportType",
    # Contact
    "ContactMessage",
]

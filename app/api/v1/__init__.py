"""
API v1 Routes

Carrier search and contact form endpoints.
"""

from .contact import router as contact_router
from .search import router as search_router

__all__ = [
    "contact_router",
    "search_router",
]

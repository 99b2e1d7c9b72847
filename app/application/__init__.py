"""Application layer entry points.

Holds orchestrators and use-case services that coordinate domain logic with adapters.

Note: Services are imported directly from their modules to avoid circular imports.
Use:
    from app.application.search_service import CarrierSearchService
    from app.application.contact_service import ContactApplicationService
    from app.application.suggestion import CarrierSuggestionService
"""

__all__: list = []

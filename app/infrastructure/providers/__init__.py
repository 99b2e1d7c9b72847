"""Infrastructure provider accessors package."""

from .ai_provider import get_openai_service, reset_ai_services  # noqa: F401
from .contact_provider import get_contact_service, reset_contact_service  # noqa: F401
from .database_provider import (  # noqa: F401
    get_database_manager,
    reset_database_manager,
)
from .notification_provider import (  # noqa: F401
    get_notification_service,
    reset_notification_service,
)
from .rate_limit_provider import (  # noqa: F401
    get_ai_rate_limiter,
    get_contact_rate_limiter,
    get_rate_limit_health,
    reset_rate_limiters,
)
from .repository_provider import (  # noqa: F401
    get_carrier_repository,
    reset_carrier_repository,
)
from .search_provider import get_search_service, reset_search_service  # noqa: F401
from .suggestion_provider import (  # noqa: F401
    get_suggestion_service,
    reset_suggestion_service,
)


async def reset_all_providers() -> None:
    """Drop every cached singleton, disposing the database engine."""
    await reset_search_service()
    await reset_suggestion_service()
    await reset_contact_service()
    await reset_notification_service()
    await reset_rate_limiters()
    await reset_ai_services()
    await reset_carrier_repository()
    await reset_database_manager()


__all__ = [
    "get_ai_rate_limiter",
    "get_carrier_repository",
    "get_contact_rate_limiter",
    "get_contact_service",
    "get_database_manager",
    "get_notification_service",
    "get_openai_service",
    "get_rate_limit_health",
    "get_search_service",
    "get_suggestion_service",
    "reset_ai_services",
    "reset_all_providers",
    "reset_carrier_repository",
    "reset_contact_service",
    "reset_database_manager",
    "reset_notification_service",
    "reset_rate_limiters",
    "reset_search_service",
    "reset_suggestion_service",
]

"""Infrastructure adapters for external services."""

from .notification_adapter import SMTPNotificationService

__all__ = [
    # Notifications
    "SMTPNotificationService",
]

"""Application service relaying contact form submissions by email."""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Any, Mapping

import structlog

from app.domain.entities.contact_message import DEFAULT_SUBJECT, ContactMessage
from app.domain.exceptions import (
    ConfigurationError,
    NotificationError,
    RateLimitExceededError,
    ValidationError,
)
from app.domain.interfaces import INotificationService, IRateLimiter

logger = structlog.get_logger(__name__)

HONEYPOT_FIELD = "companyWebsite"


@dataclass(frozen=True)
class ContactOutcome:
    """Result of a contact submission that did not fail."""

    delivered: bool
    honeypot: bool = False


class ContactApplicationService:
    """Coordinates rate limiting, sanitizing and delivery of contact messages.

    Failures surface as domain exceptions for the API layer to translate:
    ``RateLimitExceededError``, ``ValidationError``, ``ConfigurationError``
    and ``NotificationError``.
    """

    def __init__(
        self,
        notification_service: INotificationService,
        rate_limiter: IRateLimiter,
        max_per_window: int = 5,
        window_seconds: float = 3600.0,
    ) -> None:
        self._notifications = notification_service
        self._rate_limiter = rate_limiter
        self._max_per_window = max_per_window
        self._window_seconds = window_seconds

    async def submit(self, form: Mapping[str, Any], client_ip: str) -> ContactOutcome:
        """Validate and relay one submission.

        Args:
            form: Raw form fields keyed by their public names
            client_ip: Caller address, used as rate limit key and shown in the mail

        Returns:
            ContactOutcome; honeypot hits report success without sending
        """
        if not await self._rate_limiter.allow(client_ip):
            logger.warning("Contact submission rate limited", client_ip=client_ip)
            raise RateLimitExceededError(
                limit_type="contact",
                limit_value=self._max_per_window,
                time_window=f"{int(self._window_seconds)}s",
                identifier=client_ip,
            )

        if form.get(HONEYPOT_FIELD):
            logger.info("Contact honeypot triggered", client_ip=client_ip)
            return ContactOutcome(delivered=False, honeypot=True)

        message = ContactMessage.from_raw(
            name=form.get("name") or "",
            email=form.get("email") or "",
            company=form.get("company") or "",
            phone=form.get("phone") or "",
            subject=form.get("subject") or DEFAULT_SUBJECT,
            message=form.get("message") or "",
            consent=form.get("consent") or False,
        )
        errors = message.validation_errors()
        if errors:
            logger.info("Contact submission rejected", errors=errors)
            raise ValidationError("Invalid form data: " + ", ".join(errors))

        recipient = self._notifications.recipient() if self._notifications.is_configured() else None
        if not recipient:
            logger.error("Contact mail relay not configured")
            raise ConfigurationError("Email not configured on server.")

        try:
            await self._notifications.send_email(
                to=recipient,
                subject=f"[LaneList] {message.subject} — {message.name}",
                body=render_text_body(message),
                html_body=render_html_body(message, client_ip),
                reply_to=message.email,
            )
        except NotificationError:
            logger.error("Contact message delivery failed", client_ip=client_ip)
            raise
        except Exception as e:
            logger.error("Contact message delivery failed", client_ip=client_ip, error=str(e))
            raise NotificationError(f"Failed to send message: {e}") from e

        logger.info("Contact message sent", client_ip=client_ip, subject=message.subject)
        return ContactOutcome(delivered=True)


def render_text_body(message: ContactMessage) -> str:
    return (
        f"Name: {message.name}\n"
        f"Email: {message.email}\n"
        f"Company: {message.company}\n"
        f"Phone: {message.phone}\n"
        f"Subject: {message.subject}\n"
        f"\n"
        f"Message:\n"
        f"{message.message}"
    )


def render_html_body(message: ContactMessage, client_ip: str) -> str:
    esc = html.escape
    optional = ""
    if message.company:
        optional += f"<p><strong>Company:</strong> {esc(message.company)}</p>"
    if message.phone:
        optional += f"<p><strong>Phone:</strong> {esc(message.phone)}</p>"
    return (
        '<div style="font-family:Inter,system-ui,Segoe UI,Roboto,Arial,sans-serif">'
        "<h2>New contact from LaneList</h2>"
        f"<p><strong>Name:</strong> {esc(message.name)}</p>"
        f"<p><strong>Email:</strong> {esc(message.email)}</p>"
        f"{optional}"
        f"<p><strong>Subject:</strong> {esc(message.subject)}</p>"
        "<p><strong>Message:</strong></p>"
        '<div style="white-space:pre-wrap;border:1px solid #e5e7eb;border-radius:12px;'
        f'padding:12px;background:#fafafa">{esc(message.message)}</div>'
        '<hr style="margin:16px 0;border:none;border-top:1px solid #e5e7eb"/>'
        f'<p style="color:#6b7280;font-size:12px">IP: {esc(client_ip)}</p>'
        "</div>"
    )


__all__ = [
    "ContactApplicationService",
    "ContactOutcome",
    "HONEYPOT_FIELD",
    "render_html_body",
    "render_text_body",
]

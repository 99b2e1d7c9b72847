"""SMTP notification adapter relaying contact messages."""

from __future__ import annotations

import asyncio
import smtplib
import ssl
from email.message import EmailMessage
from email.utils import formataddr
from typing import Any, Dict, Optional

import structlog

from app.core.config import Settings, get_settings
from app.domain.exceptions import ConfigurationError, NotificationError
from app.domain.interfaces import INotificationService

logger = structlog.get_logger(__name__)

SENDER_NAME = "LaneList Contact"


class SMTPNotificationService(INotificationService):
    """Sends mail through an authenticated SMTP relay.

    Port 465 uses implicit TLS, any other port upgrades with STARTTLS. The
    blocking smtplib session runs in a worker thread.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._sent_email_count = 0
        self._failed_email_count = 0

    def is_configured(self) -> bool:
        return self.settings.is_mail_configured()

    def recipient(self) -> Optional[str]:
        return self.settings.get_contact_recipient()

    async def check_health(self) -> Dict[str, Any]:
        """Check service health (configuration only, no connection)."""
        return {
            "status": "healthy" if self.is_configured() else "not_configured",
            "service": "SMTPNotificationService",
            "host": self.settings.SMTP_HOST,
            "port": self.settings.SMTP_PORT,
            "emails_sent": self._sent_email_count,
            "emails_failed": self._failed_email_count,
        }

    async def send_email(
        self,
        to: str,
        subject: str,
        body: str,
        *,
        html_body: Optional[str] = None,
        reply_to: Optional[str] = None,
    ) -> bool:
        """Send email through the relay; raise NotificationError on failure."""
        if not self.is_configured():
            raise ConfigurationError("SMTP relay is not configured")

        message = self.build_message(to, subject, body, html_body=html_body, reply_to=reply_to)
        try:
            await asyncio.to_thread(self._deliver, message)
        except (smtplib.SMTPException, OSError) as err:
            self._failed_email_count += 1
            logger.error("Failed to send email", recipient=to, error=str(err))
            raise NotificationError(f"SMTP delivery failed: {err}") from err

        self._sent_email_count += 1
        logger.info("Email dispatched", recipient=to, subject=subject, body_length=len(body))
        return True

    def build_message(
        self,
        to: str,
        subject: str,
        body: str,
        *,
        html_body: Optional[str] = None,
        reply_to: Optional[str] = None,
    ) -> EmailMessage:
        message = EmailMessage()
        message["From"] = formataddr((SENDER_NAME, self.settings.SMTP_USER))
        message["To"] = to
        message["Subject"] = subject
        if reply_to:
            message["Reply-To"] = reply_to
        message.set_content(body)
        if html_body:
            message.add_alternative(html_body, subtype="html")
        return message

    def _deliver(self, message: EmailMessage) -> None:
        host = self.settings.SMTP_HOST
        port = self.settings.SMTP_PORT
        timeout = self.settings.SMTP_TIMEOUT
        context = ssl.create_default_context()

        if port == 465:
            with smtplib.SMTP_SSL(host, port, timeout=timeout, context=context) as client:
                client.login(self.settings.SMTP_USER, self.settings.SMTP_PASSWORD)
                client.send_message(message)
        else:
            with smtplib.SMTP(host, port, timeout=timeout) as client:
                client.starttls(context=context)
                client.login(self.settings.SMTP_USER, self.settings.SMTP_PASSWORD)
                client.send_message(message)


__all__ = ["SMTPNotificationService"]

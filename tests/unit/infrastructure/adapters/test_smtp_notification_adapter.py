"""Tests for the SMTP contact relay adapter."""

import smtplib
from unittest.mock import MagicMock, patch

import pytest

from app.core.config import Settings
from app.domain.exceptions import ConfigurationError, NotificationError
from app.infrastructure.adapters.notification_adapter import SMTPNotificationService


def make_settings(**overrides):
    values = dict(SMTP_USER="relay@lanelist.example", SMTP_PASSWORD="secret", SMTP_PORT=465)
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def service():
    return SMTPNotificationService(make_settings())


class TestConfiguration:

    def test_recipient_defaults_to_smtp_user(self, service):
        assert service.is_configured()
        assert service.recipient() == "relay@lanelist.example"

    def test_contact_to_overrides_recipient(self):
        service = SMTPNotificationService(make_settings(CONTACT_TO="team@lanelist.example"))
        assert service.recipient() == "team@lanelist.example"

    def test_missing_password_is_unconfigured(self):
        assert not SMTPNotificationService(make_settings(SMTP_PASSWORD=None)).is_configured()

    async def test_send_when_unconfigured_raises(self):
        service = SMTPNotificationService(make_settings(SMTP_USER=None))

        with pytest.raises(ConfigurationError):
            await service.send_email("to@x.io", "s", "b")

        assert (await service.check_health())["status"] == "not_configured"


class TestMessage:

    def test_headers_and_alternatives(self, service):
        message = service.build_message(
            "team@lanelist.example", "[LaneList] Hi", "plain", html_body="<p>html</p>", reply_to="ana@x.io"
        )

        assert message["From"] == "LaneList Contact <relay@lanelist.example>"
        assert message["Reply-To"] == "ana@x.io"
        assert message.get_body(("plain",)).get_content().strip() == "plain"
        assert "<p>html</p>" in message.get_body(("html",)).get_content()


class TestDelivery:

    async def test_implicit_tls_on_465(self, service):
        with patch("app.infrastructure.adapters.notification_adapter.smtplib.SMTP_SSL") as smtp_ssl:
            client = smtp_ssl.return_value.__enter__.return_value

            assert await service.send_email("team@x.io", "s", "b") is True

        assert smtp_ssl.call_args.args[:2] == ("smtp.zoho.eu", 465)
        client.login.assert_called_once_with("relay@lanelist.example", "secret")
        client.send_message.assert_called_once()
        assert (await service.check_health())["emails_sent"] == 1

    async def test_starttls_on_other_ports(self):
        service = SMTPNotificationService(make_settings(SMTP_PORT=587))
        with patch("app.infrastructure.adapters.notification_adapter.smtplib.SMTP") as smtp:
            client = smtp.return_value.__enter__.return_value

            await service.send_email("team@x.io", "s", "b")

        client.starttls.assert_called_once()
        client.send_message.assert_called_once()

    async def test_smtp_failure_becomes_notification_error(self, service):
        with patch("app.infrastructure.adapters.notification_adapter.smtplib.SMTP_SSL") as smtp_ssl:
            client = smtp_ssl.return_value.__enter__.return_value
            client.login.side_effect = smtplib.SMTPAuthenticationError(535, b"bad credentials")

            with pytest.raises(NotificationError):
                await service.send_email("team@x.io", "s", "b")

        assert (await service.check_health())["emails_failed"] == 1

    async def test_connection_refused(self, service):
        with patch(
            "app.infrastructure.adapters.notification_adapter.smtplib.SMTP_SSL",
            MagicMock(side_effect=ConnectionRefusedError("refused")),
        ):
            with pytest.raises(NotificationError, match="refused"):
                await service.send_email("team@x.io", "s", "b")

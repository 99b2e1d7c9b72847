"""Tests for the contact relay application service."""

import pytest

from app.application.contact_service import (
    ContactApplicationService,
    render_html_body,
    render_text_body,
)
from app.domain.entities.contact_message import ContactMessage
from app.domain.exceptions import (
    ConfigurationError,
    NotificationError,
    RateLimitExceededError,
    ValidationError,
)
from tests.mocks.mock_services import MockNotificationService, MockRateLimiter


@pytest.fixture
def form():
    return {
        "name": "Ana Lopez",
        "email": "ana@carrier.eu",
        "company": "Lopez Trans",
        "subject": "Partnership",
        "message": "We run FR-ES reefer lanes.",
        "consent": True,
    }


@pytest.fixture
def notifications():
    return MockNotificationService()


@pytest.fixture
def limiter():
    return MockRateLimiter()


@pytest.fixture
def service(notifications, limiter):
    return ContactApplicationService(notifications, limiter)


class TestSubmit:

    async def test_delivers_message(self, service, notifications, limiter, form):
        outcome = await service.submit(form, "203.0.113.7")

        assert outcome.delivered is True
        assert limiter.call_log == ["203.0.113.7"]
        [mail] = notifications.sent_emails
        assert mail["to"] == "team@lanelist.example"
        assert mail["reply_to"] == "ana@carrier.eu"
        assert mail["subject"].startswith("[LaneList] Partnership")
        assert mail["subject"].endswith("Ana Lopez")
        assert "Company: Lopez Trans" in mail["body"]
        assert "IP: 203.0.113.7" in mail["html_body"]

    async def test_default_subject(self, service, notifications, form):
        del form["subject"]

        await service.submit(form, "ip")

        assert "General question" in notifications.sent_emails[0]["subject"]

    async def test_rate_limit_checked_first(self, notifications, form):
        service = ContactApplicationService(notifications, MockRateLimiter(allowed=False))

        with pytest.raises(RateLimitExceededError) as exc_info:
            await service.submit({"companyWebsite": "spam"}, "ip")

        assert exc_info.value.limit_value == 5
        assert notifications.sent_emails == []

    async def test_honeypot_accepted_silently(self, service, notifications, form):
        form["companyWebsite"] = "https://spam.example"

        outcome = await service.submit(form, "ip")

        assert outcome.honeypot is True
        assert outcome.delivered is False
        assert notifications.sent_emails == []

    @pytest.mark.parametrize(
        "field,value",
        [("name", "   "), ("email", "not-an-email"), ("message", ""), ("consent", False)],
    )
    async def test_invalid_form(self, service, notifications, form, field, value):
        form[field] = value

        with pytest.raises(ValidationError):
            await service.submit(form, "ip")

        assert notifications.sent_emails == []

    async def test_unconfigured_relay(self, limiter, form):
        service = ContactApplicationService(MockNotificationService(configured=False), limiter)

        with pytest.raises(ConfigurationError):
            await service.submit(form, "ip")

    async def test_missing_recipient(self, limiter, form):
        service = ContactApplicationService(MockNotificationService(recipient=None), limiter)

        with pytest.raises(ConfigurationError):
            await service.submit(form, "ip")

    async def test_delivery_failure(self, service, notifications, form):
        notifications.should_fail = True

        with pytest.raises(NotificationError):
            await service.submit(form, "ip")

    async def test_unexpected_delivery_error_wrapped(self, service, notifications, form):
        async def explode(*args, **kwargs):
            raise OSError("connection reset")

        notifications.send_email = explode

        with pytest.raises(NotificationError, match="connection reset"):
            await service.submit(form, "ip")


class TestRendering:

    def test_html_escapes_user_input(self):
        message = ContactMessage.from_raw(
            name="<b>Eve</b>", email="eve@x.io", message="<script>alert(1)</script>", consent=True
        )

        body = render_html_body(message, "1.1.1.1")

        assert "<script>" not in body
        assert "&lt;script&gt;" in body
        assert "Company:" not in body

    def test_text_body_lists_all_fields(self):
        message = ContactMessage.from_raw(name="Ana", email="a@b.co", message="Hi", consent=True)

        text = render_text_body(message)

        assert text.splitlines()[:2] == ["Name: Ana", "Email: a@b.co"]
        assert text.endswith("Message:\nHi")

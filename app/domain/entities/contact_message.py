"""Contact form submission as accepted by the mail relay."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, List

_CONTROL_CHARS = re.compile(r"[\u0000-\u001f\u007f-\u009f]")
_EMAIL_SHAPE = re.compile(r".+@.+\..+")

# Field length caps applied after sanitizing
MAX_NAME_LENGTH = 80
MAX_EMAIL_LENGTH = 120
MAX_COMPANY_LENGTH = 120
MAX_PHONE_LENGTH = 40
MAX_SUBJECT_LENGTH = 60
MAX_MESSAGE_LENGTH = 2000

DEFAULT_SUBJECT = "General question"


def sanitize_field(value: Any, max_length: int) -> str:
    """Strip control characters, trim and truncate a raw form value."""
    if value is None:
        return ""
    text = _CONTROL_CHARS.sub("", str(value)).strip()
    return text[:max_length]


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_SHAPE.search(email))


@dataclass(frozen=True)
class ContactMessage:
    """Sanitized contact inquiry."""

    name: str
    email: str
    message: str
    consent: bool
    subject: str = DEFAULT_SUBJECT
    company: str = ""
    phone: str = ""

    @classmethod
    def from_raw(
        cls,
        *,
        name: Any = "",
        email: Any = "",
        message: Any = "",
        consent: Any = False,
        subject: Any = DEFAULT_SUBJECT,
        company: Any = "",
        phone: Any = "",
    ) -> "ContactMessage":
        return cls(
            name=sanitize_field(name, MAX_NAME_LENGTH),
            email=sanitize_field(email, MAX_EMAIL_LENGTH),
            company=sanitize_field(company, MAX_COMPANY_LENGTH),
            phone=sanitize_field(phone, MAX_PHONE_LENGTH),
            subject=sanitize_field(subject, MAX_SUBJECT_LENGTH),
            message=sanitize_field(message, MAX_MESSAGE_LENGTH),
            consent=bool(consent),
        )

    def validation_errors(self) -> List[str]:
        errors = []
        if not self.name:
            errors.append("name is required")
        if not is_valid_email(self.email):
            errors.append("email is invalid")
        if not self.message:
            errors.append("message is required")
        if not self.consent:
            errors.append("consent is required")
        return errors

    def is_valid(self) -> bool:
        return not self.validation_errors()


__all__ = ["ContactMessage", "sanitize_field", "is_valid_email", "DEFAULT_SUBJECT"]

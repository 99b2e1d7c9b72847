"""
Contact form DTOs.

Fields are accepted loosely so that malformed input reaches the application
service and is answered with the form's own 400 response.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities.contact_message import DEFAULT_SUBJECT


class ContactRequest(BaseModel):
    """Contact form submission."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Any = ""
    email: Any = ""
    company: Any = ""
    phone: Any = ""
    subject: Any = DEFAULT_SUBJECT
    message: Any = ""
    consent: Any = False
    company_website: Any = Field(
        default="",
        alias="companyWebsite",
        description="Honeypot; real users leave it empty",
    )

    def to_form(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "company": self.company,
            "phone": self.phone,
            "subject": self.subject,
            "message": self.message,
            "consent": self.consent,
            "companyWebsite": self.company_website,
        }


class ContactResponse(BaseModel):
    ok: bool = True


class ContactErrorResponse(BaseModel):
    error: str


__all__ = ["ContactErrorResponse", "ContactRequest", "ContactResponse"]

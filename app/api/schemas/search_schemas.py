"""
Carrier search DTOs.

Request and response models for ``POST /api/search``. Public field names
are camelCase (``verifiedOnly``, ``logoEmoji``, ``usedAi``); absent values
are omitted from responses.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain.entities.carrier import (
    CarrierOutput,
    CarrierSource,
    SearchFilter,
    SearchResult,
    TransportType,
)


class SearchRequest(BaseModel):
    """Search filters; every field is optional and blank strings count as absent."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: Optional[TransportType] = Field(default=None, description="Transport type tag")
    origin: Optional[str] = Field(default=None, max_length=8, description="Origin country code")
    destination: Optional[str] = Field(
        default=None, max_length=8, description="Destination country code"
    )
    verified_only: Optional[bool] = Field(
        default=False, alias="verifiedOnly", description="Restrict to verified carriers"
    )

    @field_validator("type", mode="before")
    @classmethod
    def blank_type_is_absent(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("origin", "destination", mode="before")
    @classmethod
    def normalize_country_code(cls, v: Any) -> Any:
        if v is None:
            return None
        v = str(v).strip().upper()
        return v or None

    def to_filter(self) -> SearchFilter:
        return SearchFilter.create(
            type=self.type,
            origin=self.origin,
            destination=self.destination,
            verified_only=bool(self.verified_only),
        )


class LaneSchema(BaseModel):
    origin: str
    destination: str


class ContactSchema(BaseModel):
    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None


class CarrierOutputSchema(BaseModel):
    """Carrier record tagged with its provenance."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    types: List[TransportType]
    lanes: List[LaneSchema]
    verified: bool
    source: CarrierSource
    description: Optional[str] = None
    logo_emoji: Optional[str] = Field(default=None, alias="logoEmoji")
    rating: Optional[float] = None
    contact: Optional[ContactSchema] = None
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)

    @classmethod
    def from_domain(cls, output: CarrierOutput) -> "CarrierOutputSchema":
        return cls.model_validate(output.to_dict())


class SearchResponse(BaseModel):
    """Store hits, or suggestions with a notice when the store had nothing to offer."""

    model_config = ConfigDict(populate_by_name=True)

    carriers: List[CarrierOutputSchema] = Field(default_factory=list)
    used_ai: bool = Field(alias="usedAi")
    suggestions: Optional[List[CarrierOutputSchema]] = None
    notice: Optional[str] = None

    @classmethod
    def from_domain(cls, result: SearchResult) -> "SearchResponse":
        suggestions = None
        if result.suggestions is not None:
            suggestions = [CarrierOutputSchema.from_domain(s) for s in result.suggestions]
        return cls(
            carriers=[CarrierOutputSchema.from_domain(c) for c in result.carriers],
            used_ai=result.used_ai,
            suggestions=suggestions,
            notice=result.notice,
        )


__all__ = [
    "CarrierOutputSchema",
    "ContactSchema",
    "LaneSchema",
    "SearchRequest",
    "SearchResponse",
]

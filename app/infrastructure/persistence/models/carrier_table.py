"""
SQLModel Carrier table definition with JSONB lane and contact storage.

Lanes are stored as a JSONB array of ``{"origin", "destination"}`` objects so
that containment queries match a carrier when any one of its lanes matches.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import Boolean, Column, Float, Index, String, Text
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlmodel import Field

from app.infrastructure.persistence.models.base import TimestampedModel


class CarrierTable(TimestampedModel, table=True):
    """
    Listed carrier with database persistence.

    Transport types live in a text array, lanes and contact in JSONB, each
    indexed for the directory filters.
    """
    __tablename__ = "carriers"

    __table_args__ = (
        Index("idx_carriers_types", "types", postgresql_using="gin"),
        Index(
            "idx_carriers_lanes",
            "lanes",
            postgresql_using="gin",
            postgresql_ops={"lanes": "jsonb_path_ops"},
        ),
        Index("idx_carriers_verified", "verified"),
    )

    name: str = Field(
        sa_column=Column(String(200), nullable=False),
        description="Carrier display name"
    )
    types: List[str] = Field(
        default_factory=list,
        sa_column=Column(ARRAY(String), nullable=False, default=list),
        description="Transport types operated by the carrier"
    )
    lanes: List[Dict[str, str]] = Field(
        default_factory=list,
        sa_column=Column(JSONB, nullable=False, default=list),
        description="Served lanes as origin/destination objects"
    )
    verified: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False),
        description="Whether the listing has been verified"
    )
    rating: Optional[float] = Field(
        default=None,
        sa_column=Column(Float, nullable=True),
        description="Average rating between 0 and 5"
    )
    description: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Short public description"
    )
    contact: Optional[Dict[str, Any]] = Field(
        default=None,
        sa_column=Column(JSONB, nullable=True),
        description="Public contact block (email, phone, website)"
    )
    logo_emoji: Optional[str] = Field(
        default=None,
        sa_column=Column(String(16), nullable=True),
        description="Emoji shown in place of a logo"
    )


__all__ = ["CarrierTable"]

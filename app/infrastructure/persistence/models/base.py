"""
SQLModel base classes shared by the carrier store tables.

Provides common model configuration and automatic timestamp management.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class BaseModel(SQLModel):
    """
    Base SQLModel with common configuration.
    """
    
    model_config = {
        # Enable arbitrary types for JSONB payloads
        "arbitrary_types_allowed": True,
        # Populate by name for aliases
        "populate_by_name": True,
    }


class TimestampedModel(BaseModel):
    """
    Base model with a UUID primary key and automatic timestamps.
    """
    
    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        description="Unique identifier"
    )
    
    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Record creation timestamp"
    )
    
    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Record last update timestamp"
    )

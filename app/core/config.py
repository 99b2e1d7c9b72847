"""
Configuration management for the LaneList carrier directory.

This module provides centralized configuration management supporting:
- Environment variables and .env files
- Carrier store (PostgreSQL) connection settings
- OpenAI suggestion fallback and its guardrails
- SMTP relay for the contact form
"""

from functools import lru_cache
from typing import Any, Dict, List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import structlog

from app.domain.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)


class Settings(BaseSettings):
    """
    Main application settings. Nothing is required at startup: missing
    secrets degrade the feature that needs them.
    """
    
    # Environment Detection
    ENVIRONMENT: str = Field(
        default="local",
        description="Environment (local/development/staging/production)"
    )
    DEBUG: bool = Field(
        default=False,
        description="Debug mode"
    )
    
    # Core Application Settings
    APP_NAME: str = Field(
        default="LaneList",
        description="Application name"
    )
    APP_VERSION: str = Field(
        default="1.0.0",
        description="Application version"
    )
    
    # Server Configuration
    HOST: str = Field(
        default="0.0.0.0",
        description="Server host"
    )
    PORT: int = Field(
        default=8000,
        description="Server port"
    )
    
    # CORS Configuration
    CORS_ORIGINS: str = Field(
        default="*",
        description="Comma-separated CORS origins"
    )
    
    # Logging
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )
    LOG_FORMAT: str = Field(
        default="console",
        description="Log format (json/console)"
    )
    
    # Carrier store (PostgreSQL)
    POSTGRES_URL: Optional[str] = Field(
        default=None,
        description="PostgreSQL connection URL for the carrier store"
    )
    DATABASE_CONNECT_TIMEOUT: float = Field(
        default=5.0,
        gt=0,
        description="Seconds allowed for establishing the store connection"
    )
    SEARCH_MAX_RESULTS: int = Field(
        default=50,
        gt=0,
        description="Maximum carriers returned from the store"
    )
    
    # OpenAI Configuration
    OPENAI_API_KEY: Optional[str] = Field(
        default=None,
        description="OpenAI API key"
    )
    OPENAI_BASE_URL: Optional[str] = Field(
        default="https://api.openai.com/v1",
        description="OpenAI API base URL"
    )
    OPENAI_MODEL: str = Field(
        default="gpt-4.1-mini",
        description="OpenAI chat model name"
    )
    OPENAI_TIMEOUT: float = Field(
        default=20.0,
        gt=0,
        description="Seconds allowed for a single provider call"
    )
    
    # AI suggestion fallback
    AI_FALLBACK_ENABLED: bool = Field(
        default=True,
        description="Enable AI-generated suggestions when the store has no match"
    )
    AI_MIN_FILTERS: int = Field(
        default=2,
        ge=0,
        description="Populated filters (type/origin/destination) required before calling the provider"
    )
    AI_MAX_SUGGESTIONS: int = Field(
        default=5,
        gt=0,
        description="Maximum suggestions kept from a provider response"
    )
    AI_SUGGESTION_CONFIDENCE: float = Field(
        default=0.55,
        ge=0.0,
        le=1.0,
        description="Fixed confidence attached to AI-sourced records"
    )
    AI_RATE_LIMIT_MAX_CALLS: int = Field(
        default=20,
        gt=0,
        description="Provider calls allowed per client within one window"
    )
    AI_RATE_LIMIT_WINDOW_SECONDS: float = Field(
        default=60.0,
        gt=0,
        description="Length of the provider rate limit window"
    )
    
    # Contact mail relay
    SMTP_HOST: str = Field(
        default="smtp.zoho.eu",
        description="SMTP relay host"
    )
    SMTP_PORT: int = Field(
        default=465,
        description="SMTP relay port (465 uses implicit TLS, others STARTTLS)"
    )
    SMTP_USER: Optional[str] = Field(
        default=None,
        description="SMTP username, also used as sender address"
    )
    SMTP_PASSWORD: Optional[str] = Field(
        default=None,
        description="SMTP password"
    )
    SMTP_TIMEOUT: float = Field(
        default=15.0,
        gt=0,
        description="SMTP socket timeout in seconds"
    )
    CONTACT_TO: Optional[str] = Field(
        default=None,
        description="Recipient of contact form messages (defaults to SMTP_USER)"
    )
    CONTACT_RATE_LIMIT_MAX: int = Field(
        default=5,
        gt=0,
        description="Contact submissions allowed per client within one window"
    )
    CONTACT_RATE_LIMIT_WINDOW_SECONDS: float = Field(
        default=3600.0,
        gt=0,
        description="Length of the contact rate limit window"
    )
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    @field_validator('ENVIRONMENT')
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate and normalize environment name."""
        v = v.lower()
        if v not in ('local', 'development', 'staging', 'production'):
            logger.warning(f"Unknown environment: {v}, defaulting to 'local'")
            return 'local'
        return v
    
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == 'production'
    
    def is_local(self) -> bool:
        """Check if running in local environment."""
        return self.ENVIRONMENT == 'local'
    
    def get_cors_origins(self) -> List[str]:
        """Get CORS origins as a list."""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]
    
    def is_postgres_configured(self) -> bool:
        """Check if the carrier store connection string is set."""
        return bool(self.POSTGRES_URL)
    
    def get_postgres_url(self) -> str:
        """Get PostgreSQL connection URL."""
        if not self.POSTGRES_URL:
            raise ConfigurationError("Missing POSTGRES_URL")
        return self.POSTGRES_URL
    
    def is_openai_configured(self) -> bool:
        """Check if an OpenAI credential is available."""
        return bool(self.OPENAI_API_KEY)
    
    def get_openai_config(self) -> Dict[str, Any]:
        """Get OpenAI client configuration."""
        if not self.OPENAI_API_KEY:
            raise ConfigurationError("No OpenAI configuration found. Set OPENAI_API_KEY.")
        return {
            "api_key": self.OPENAI_API_KEY,
            "base_url": self.OPENAI_BASE_URL,
            "model": self.OPENAI_MODEL,
            "timeout": self.OPENAI_TIMEOUT,
            "provider": "openai",
        }
    
    def get_contact_recipient(self) -> Optional[str]:
        """Recipient of contact messages, falling back to the SMTP user."""
        return self.CONTACT_TO or self.SMTP_USER
    
    def is_mail_configured(self) -> bool:
        """Check if the SMTP relay can send contact messages."""
        return bool(self.SMTP_USER and self.SMTP_PASSWORD and self.get_contact_recipient())


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings.
    
    Loads settings from environment variables and .env file once and
    logs which optional integrations are available.
    """
    settings = Settings()
    
    logger.info(
        "Configuration ready",
        environment=settings.ENVIRONMENT,
        debug=settings.DEBUG,
        postgres_configured=settings.is_postgres_configured(),
        openai_configured=settings.is_openai_configured(),
        ai_fallback_enabled=settings.AI_FALLBACK_ENABLED,
        mail_configured=settings.is_mail_configured(),
    )
    
    return settings

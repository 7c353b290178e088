"""Centralized configuration management using pydantic-settings.

Configuration is loaded from environment variables with sensible defaults.
All settings can be overridden via environment variables or a .env file.
"""

from decimal import Decimal
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gst_billing.domain.value_objects import QuantityPolicy, SplitGranularity


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Log level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults for development. Override via
    environment variables (prefixed with GSTB_) or .env file.

    Examples:
        GSTB_QUANTITY_POLICY=allow_zero
        GSTB_SPLIT_GRANULARITY=by_rate
        GSTB_ORGANIZATION_STATE="Karnataka"
        GSTB_LOG_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix="GSTB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "GST Billing"
    app_version: str = "0.1.0"
    environment: Environment = Environment.DEVELOPMENT

    # Logging
    log_level: LogLevel = LogLevel.INFO
    log_format: Literal["json", "console"] = Field(
        default=None,
        validate_default=True,
        description="Log output format: 'json' for production, 'console' for development",
    )
    log_file: Path | None = Field(default=None, description="Optional log file path")

    # Calculation policy
    quantity_policy: QuantityPolicy = Field(
        default=QuantityPolicy.DEFAULT_TO_ONE,
        description="How missing or invalid line quantities are resolved",
    )
    split_granularity: SplitGranularity = Field(
        default=SplitGranularity.DOCUMENT,
        description="Split aggregated tax once per document or per tax-rate group",
    )
    snapshot_tolerance: Decimal = Field(
        default=Decimal("0.01"),
        ge=0,
        description="Allowed drift between a stored total and its recomputed value",
    )

    # Display
    currency_symbol: str = "₹"
    number_grouping: Literal["indian", "international"] = "indian"
    display_precision: int = Field(default=2, ge=0, le=6)

    # Ambient defaults normally supplied by the organization/auth collaborators
    organization_name: str = "My Organization"
    organization_state: str = Field(
        default="Maharashtra",
        description="Source state used when a document does not carry one",
    )
    default_actor: str = "Admin User"

    @field_validator("log_format", mode="before")
    @classmethod
    def set_log_format_from_environment(cls, v: str | None, info) -> str:
        """Default to JSON logging in production, console everywhere else."""
        if v is None:
            env = info.data.get("environment")
            if env == Environment.PRODUCTION:
                return "json"
        return v or "console"

    @field_validator("organization_state", mode="after")
    @classmethod
    def strip_organization_state(cls, v: str) -> str:
        return " ".join(v.split())

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == Environment.TESTING


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings.

    Returns:
        Configured Settings instance.
    """
    return Settings()

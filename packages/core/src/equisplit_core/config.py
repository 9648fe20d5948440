"""Configuration system for EquiSplit Core.

This module provides Pydantic Settings-based configuration with environment
variable support and defaults suitable for the division engine.

Usage:
    from equisplit_core.config import EquiSplitSettings

    # Load from environment variables and .env file
    settings = EquiSplitSettings()

    # Owner assumed for separate items with no sole titleholder
    print(settings.default_separate_owner)
"""

from decimal import Decimal

import pydantic
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError
from .models import Spouse


class EquiSplitSettings(BaseSettings):
    """Root configuration for EquiSplit Core.

    Environment Variables:
        EQUISPLIT_ENV: Environment name (development, staging, production, test)
        EQUISPLIT_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        EQUISPLIT_LOG_JSON: Render logs as JSON lines instead of console output
        EQUISPLIT_DEFAULT_SEPARATE_OWNER: Owner assumed for separate items with
            no sole owner (spouse1 or spouse2)
        EQUISPLIT_EQUALIZATION_THRESHOLD: Equalization payments at or below
            this amount are not reported

    Example:
        # Override specific settings
        settings = EquiSplitSettings(
            default_separate_owner="spouse2",
            equalization_threshold="100",
        )
    """

    model_config = SettingsConfigDict(
        env_prefix="EQUISPLIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment settings
    env: str = Field(
        default="development",
        description="Environment name (development, staging, production, test)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Render structured logs as JSON",
    )

    # Engine settings
    default_separate_owner: Spouse = Field(
        default=Spouse.SPOUSE1,
        description="Owner of a separate item whose owned_by is missing or joint",
    )
    equalization_threshold: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Minimum equalization payment worth reporting",
    )

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment name."""
        valid_envs = {"development", "staging", "production", "test"}
        v_lower = v.lower().strip()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of: {valid_envs}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper().strip()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {valid_levels}")
        return v_upper

    @field_validator("default_separate_owner", mode="before")
    @classmethod
    def normalize_owner(cls, v):
        if isinstance(v, str):
            return v.lower().strip()
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"

    @property
    def is_debug(self) -> bool:
        return self.log_level == "DEBUG"


def get_settings(**overrides) -> EquiSplitSettings:
    """
    Load settings from the environment, applying keyword overrides.

    Raises:
        ConfigurationError: If any setting is invalid
    """
    try:
        return EquiSplitSettings(**overrides)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first.get("loc", ()))
        raise ConfigurationError(
            f"Invalid configuration: {first.get('msg', 'validation failed')}",
            config_key=f"EQUISPLIT_{key.upper()}" if key else None,
            actual=first.get("input"),
        ) from e

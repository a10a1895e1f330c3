"""
Centralized settings configuration using Pydantic BaseSettings.

All environment variables are defined here with types, defaults, and validation.
Use get_settings() to share one cached instance per process.

Usage:
    from backend.settings import get_settings, Settings

    settings = get_settings()
    print(settings.insights_window_size)

    # Tests: explicit values, no .env
    settings = Settings(environment="test", random_seed=7, _env_file=None)
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from backend.core.catalog import DEFAULT_CATALOG_PATH
from domain.models import Framework


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, staging, production, test",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level used by the CLI logging configuration",
    )

    # -------------------------------------------------------------------------
    # Catalog
    # -------------------------------------------------------------------------
    catalog_path: Path = Field(
        default=DEFAULT_CATALOG_PATH,
        description="YAML file holding the exercise catalog",
    )

    # -------------------------------------------------------------------------
    # Personalization / Generation
    # -------------------------------------------------------------------------
    insights_window_size: int = Field(
        default=8,
        ge=1,
        description="Number of most recent sessions used for insights",
    )
    default_skill_score: int = Field(
        default=50,
        ge=0,
        le=100,
        description="Skill score assigned at onboarding",
    )
    default_framework: Framework = Field(
        default=Framework.EMOM,
        description="Framework used when no goal bias applies",
    )
    random_seed: Optional[int] = Field(
        default=None,
        description="Seed for the engine random source (None = nondeterministic)",
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is a valid value."""
        valid_environments = {"development", "staging", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {valid_environments}"
            )
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return v.upper()

    # -------------------------------------------------------------------------
    # Helper Properties
    # -------------------------------------------------------------------------
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == "test"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    For testing, you can clear the cache with get_settings.cache_clear().

    Returns:
        Settings: Application settings instance
    """
    return Settings()

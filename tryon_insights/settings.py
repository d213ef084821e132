"""
Module: settings

Purpose: Centralized configuration management for the survey insights engine.

Key Functions:
- get_settings: Load settings from environment variables
- Settings: Pydantic settings model with validation

Architecture Notes:
- Uses pydantic-settings for type-safe configuration
- All settings have sensible defaults matching the dashboard assumptions
- Environment variables (prefix TRYON_) override defaults
- Engine functions never read settings directly; callers convert them into
  MarketSizingAssumptions / MetricsConfig via from_settings()
"""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for metrics computation and the CLI."""

    model_config = SettingsConfigDict(
        env_prefix="TRYON_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Market sizing
    users_per_response: Annotated[int, Field(gt=0)] = 1000
    average_order_value: Annotated[Decimal, Field(ge=0)] = Decimal("75")
    assumed_conversion_rate: Annotated[float, Field(ge=0.0, le=1.0)] = 0.03

    # Distributions
    top_concerns_limit: Annotated[int, Field(gt=0)] = 8
    day_bucket_timezone: str = "UTC"

    # I/O
    responses_path: Path | None = None
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value!r}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()

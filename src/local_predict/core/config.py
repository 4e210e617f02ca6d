"""
Configuration management for local predictions.

Uses Pydantic settings for type-safe configuration with environment variable support.
All settings can be overridden via environment variables prefixed with LOCAL_PREDICT_.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Example: LOCAL_PREDICT_MODEL_STORAGE_PATH=/var/cache/models
    """

    model_config = SettingsConfigDict(
        env_prefix="LOCAL_PREDICT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # Model Storage
    # ==========================================================================
    model_storage_path: Path = Field(
        default=Path("models"),
        description="Directory holding cached model documents as <resource-id>.json",
    )

    # ==========================================================================
    # Missing Data
    # ==========================================================================
    honor_missing_branches: bool = Field(
        default=True,
        description="Let predicates flagged as missing branches match absent values",
    )
    missing_operator_suffix: str = Field(
        default="*",
        min_length=1,
        description="Operator suffix marking a missing branch, e.g. '>*'",
    )

    # ==========================================================================
    # Logging
    # ==========================================================================
    log_level: str = Field(default="INFO", description="DEBUG, INFO, WARNING, ERROR")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()

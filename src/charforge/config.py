"""Configuration management for charforge using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="CHARFORGE_",
        extra="ignore",
    )

    debug: bool = Field(default=False, description="Enable debug mode")

    # Remote store
    api_url: str = Field(
        default="https://recruiting.verylongdomaintotestwith.ca/api/{samiatoui}/character",
        description="Endpoint used to load and save a single character",
    )
    request_timeout_seconds: float = Field(
        default=30.0, description="Total timeout for one remote request, in seconds"
    )

    # Character rules
    attribute_budget: int = Field(
        default=70, description="Maximum sum of a character's attribute scores"
    )
    default_attribute_score: int = Field(
        default=10, description="Score given to every attribute of a new character"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Log format (console or json)")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

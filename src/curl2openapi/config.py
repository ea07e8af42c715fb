"""
Configuration management for curl2openapi.

Settings are read from CURL2OPENAPI_* environment variables or a .env
file. Command-line options take precedence over anything set here.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="CURL2OPENAPI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Document metadata
    default_title: str = Field(default="Generated API", description="info.title when none is given")
    default_description: str = Field(
        default="Generated from cURL commands", description="info.description when none is given"
    )
    spec_version: str = Field(default="1.0.0", description="info.version of generated documents")

    # Output
    output_format: Literal["yaml", "json"] = Field(default="yaml", description="Serialization format")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING", description="Log level"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()

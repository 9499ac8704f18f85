"""
Configuration settings for Movie Manager.

This module provides configuration management using Pydantic settings
with support for environment variables and .env files.
"""

from typing import Optional, Dict, Any
from pathlib import Path
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MovieManagerSettings(BaseSettings):
    """
    Main configuration settings for Movie Manager.

    Settings are loaded from multiple sources in order of preference:
    1. Environment variables (prefixed with MOVIE_MANAGER_)
    2. .env file in the working directory
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="MOVIE_MANAGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Configuration
    api_key: Optional[str] = Field(
        default=None,
        description="TMDb v3 API key"
    )

    base_url: str = Field(
        default="https://api.themoviedb.org/3",
        description="TMDb API base URL"
    )

    auth_url: str = Field(
        default="https://www.themoviedb.org",
        description="Site that hosts the browser approval page"
    )

    image_base_url: str = Field(
        default="https://image.tmdb.org/t/p/w500",
        description="Poster image CDN prefix"
    )

    redirect_scheme: str = Field(
        default="themoviemanager",
        description="URL scheme TMDb redirects to after browser approval"
    )

    timeout: int = Field(
        default=30,
        description="Request timeout in seconds",
        gt=0
    )

    # Account Configuration
    username: Optional[str] = Field(
        default=None,
        description="TMDb username used by the login command"
    )

    password: Optional[str] = Field(
        default=None,
        description="TMDb password used by the login command"
    )

    session_id: Optional[str] = Field(
        default=None,
        description="Existing session id to reuse instead of logging in"
    )

    account_id: int = Field(
        default=0,
        description="TMDb account id used in account endpoint paths",
        ge=0
    )

    # Directory Configuration
    config_dir: Path = Field(
        default_factory=lambda: Path.home() / ".config" / "movie-manager",
        description="Configuration directory path"
    )

    # Logging Configuration
    log_level: str = Field(
        default="WARNING",
        description="Logging level"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level '{v}'. Valid levels: {', '.join(sorted(valid_levels))}")
        return v_upper

    @field_validator("base_url", "auth_url", "image_base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Require an absolute http(s) URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid URL '{v}'. Expected http:// or https://")
        return v.rstrip("/")

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level

    @property
    def is_configured(self) -> bool:
        """Check if an API key is available."""
        return self.api_key is not None

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.password)

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary, excluding sensitive data."""
        data = self.model_dump()
        for key in ("api_key", "password", "session_id"):
            if data.get(key):
                data[key] = "***masked***"
        return data


def get_settings() -> MovieManagerSettings:
    """Get the current Movie Manager settings."""
    return MovieManagerSettings()

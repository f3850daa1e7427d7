"""
Configuration management for storedash.

Provides centralized, validated configuration from environment variables
with proper type checking and defaults.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TokenStrategy(str, Enum):
    """How the route guard hands credentials to the API client."""

    GETTER = "getter"
    STATIC = "static"


class TokenFailurePolicy(str, Enum):
    """What the request interceptor does when the token getter fails."""

    DEGRADE = "degrade"
    RAISE = "raise"


def _parse_bool(v) -> bool:
    if isinstance(v, str):
        return v.strip().lower() in ("1", "true", "yes", "y")
    return bool(v)


class ApiConfig(BaseSettings):
    """Backend API configuration."""

    base_url: str = Field(default="http://localhost:3000", alias="API_BASE_URL")
    with_credentials: bool = Field(default=True, alias="API_WITH_CREDENTIALS")
    request_timeout: Optional[float] = Field(default=None, alias="REQUEST_TIMEOUT")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("with_credentials", mode="before")
    @classmethod
    def parse_with_credentials(cls, v):
        return _parse_bool(v)

    @field_validator("request_timeout", mode="before")
    @classmethod
    def parse_request_timeout(cls, v):
        # An empty value means "no timeout"
        if isinstance(v, str) and not v.strip():
            return None
        return v

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


class AuthConfig(BaseSettings):
    """Identity and token handling configuration."""

    token: Optional[str] = Field(default=None, alias="API_TOKEN")
    token_file: Optional[str] = Field(default=None, alias="API_TOKEN_FILE")
    strategy: TokenStrategy = Field(default=TokenStrategy.GETTER, alias="TOKEN_STRATEGY")
    failure_policy: TokenFailurePolicy = Field(
        default=TokenFailurePolicy.DEGRADE, alias="TOKEN_FAILURE_POLICY"
    )

    @field_validator("strategy", "failure_policy", mode="before")
    @classmethod
    def lower_enum_values(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


class Settings(BaseSettings):
    """Main application settings."""

    # Environment
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")

    # Data fetching
    query_retries: int = Field(default=0, ge=0, le=10, alias="QUERY_RETRIES")
    placeholder_on_error: bool = Field(default=False, alias="PLACEHOLDER_ON_ERROR")

    # Component configurations
    api: ApiConfig = Field(default_factory=ApiConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)

    @field_validator("debug", "placeholder_on_error", mode="before")
    @classmethod
    def parse_flags(cls, v):
        return _parse_bool(v)

    def model_post_init(self, __context) -> None:
        # Initialize sub-configurations
        self.api = ApiConfig()
        self.auth = AuthConfig()

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reset_settings() -> None:
    """Forget the cached settings so the next access re-reads the environment."""
    global settings
    settings = None


def validate_required_settings() -> List[str]:
    """
    Validate that the settings needed to reach the backend are present.

    Returns:
        List of missing or invalid settings
    """
    missing = []
    try:
        config = get_settings()

        if not config.api.base_url.startswith(("http://", "https://")):
            missing.append("API_BASE_URL (must be an absolute http(s) URL)")

        if not config.auth.token and not config.auth.token_file:
            missing.append("API_TOKEN or API_TOKEN_FILE")

    except Exception as e:
        missing.append(f"Configuration error: {e}")

    return missing


def configuration_summary() -> List[tuple]:
    """Return (label, value) pairs describing the active configuration."""
    config = get_settings()
    timeout = config.api.request_timeout
    return [
        ("Environment", config.environment),
        ("Debug Mode", str(config.debug)),
        ("API Base URL", config.api.base_url),
        ("Send Credentials", str(config.api.with_credentials)),
        ("Request Timeout", f"{timeout}s" if timeout else "none"),
        ("Static Token", "✓" if config.auth.token else "✗"),
        ("Token File", config.auth.token_file or "✗"),
        ("Token Strategy", config.auth.strategy.value),
        ("Token Failure Policy", config.auth.failure_policy.value),
        ("Query Retries", str(config.query_retries)),
        ("Placeholder On Error", str(config.placeholder_on_error)),
    ]

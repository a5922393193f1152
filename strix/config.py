"""Configuration management for the application."""

import re
from datetime import timedelta
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "strix-secret-key"  # noqa: S105

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$", re.IGNORECASE)
_DURATION_UNITS = {"": "seconds", "s": "seconds", "m": "minutes", "h": "hours", "d": "days"}


def parse_duration(value: str) -> timedelta:
    """Parse a duration such as ``24h``, ``30m``, ``7d`` or ``3600`` (seconds)."""
    match = _DURATION_RE.match(value)
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit.lower()]: int(amount)})


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(default="sqlite:///./strix.db")
    run_migrations: bool = Field(default=True)

    # Server
    host: str = Field(default="localhost")
    port: int = Field(default=3000)

    # JWT
    jwt_secret: str = Field(default=DEFAULT_JWT_SECRET)
    jwt_algorithm: str = Field(default="HS256")
    token_expiration: str = Field(default="24h")

    # API
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    @field_validator("token_expiration")
    @classmethod
    def validate_token_expiration(cls, value: str) -> str:
        """Reject expiration windows that cannot be parsed or are empty."""
        if parse_duration(value) <= timedelta(0):
            raise ValueError("TOKEN_EXPIRATION must be a positive duration")
        return value

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if self.environment == "production" and self.jwt_secret == DEFAULT_JWT_SECRET:
            raise ValueError("JWT_SECRET must be changed in production")
        return self

    @property
    def token_lifetime(self) -> timedelta:
        """Token expiration window as a timedelta."""
        return parse_duration(self.token_expiration)

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

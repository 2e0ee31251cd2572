"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

_DEVELOPMENT_ENVIRONMENTS = {"local", "development"}
DEVELOPMENT_API_URL = "http://localhost:3000/api"
PRODUCTION_API_URL = "https://api-production.example.com/api"


class Settings(BaseSettings):
    """API server settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    jwt_secret: str
    access_token_expire_minutes: int = 120
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


class ClientSettings(BaseSettings):
    """Mobile client settings, read from ``PHOTOGRAM_*`` variables."""

    environment: str = _ENVIRONMENT
    api_url: str | None = None
    request_timeout: float = 10.0
    credentials_path: Path = Path.home() / ".photogram" / "credentials.json"

    model_config = SettingsConfigDict(
        env_prefix="PHOTOGRAM_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def base_url(self) -> str:
        """Return the API host for the current environment."""
        return resolve_api_url(self.environment, self.api_url)


def resolve_api_url(environment: str, override: str | None = None) -> str:
    """Pick the API base URL, honouring an explicit override."""
    if override and override.strip():
        return override.strip().rstrip("/")
    if environment.strip().lower() in _DEVELOPMENT_ENVIRONMENTS:
        return DEVELOPMENT_API_URL
    return PRODUCTION_API_URL

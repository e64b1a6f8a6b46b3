"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")
_ENV_FILES = (f".env.{_ENVIRONMENT}", ".env")


class Settings(BaseSettings):
    """Server settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    hotels_table: str = "hotels"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(env_file=_ENV_FILES, extra="ignore")


class ClientSettings(BaseSettings):
    """Settings for the hotel list client."""

    api_base_url: str = "http://localhost:8000"
    admin_token: str
    search_debounce_seconds: float = 0.5
    request_timeout_seconds: float = 15.0

    model_config = SettingsConfigDict(
        env_prefix="HOTEL_CLIENT_",
        env_file=_ENV_FILES,
        extra="ignore",
    )

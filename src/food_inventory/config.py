"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

SUPPORTED_LANGUAGES = (
    "English",
    "Spanish",
    "French",
    "German",
    "Italian",
    "Portuguese",
)
DEFAULT_LANGUAGE = "English"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    api_token: str
    recommendations_ttl_seconds: int = 10 * 60 * 60
    event_log_limit: int = 200
    consumption_epsilon: float = 1e-6
    default_language: str = DEFAULT_LANGUAGE
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_language(raw: str | None, fallback: str = DEFAULT_LANGUAGE) -> str:
    """Normalize a language name to one of the supported languages."""
    if raw is None:
        return fallback
    cleaned = raw.strip().lower()
    for language in SUPPORTED_LANGUAGES:
        if language.lower() == cleaned:
            return language
    return fallback

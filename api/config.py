"""
API Configuration

Manages environment-based configuration for the API server.
"""

import os
from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:8080"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Settings can be overridden with environment variables or .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # API Settings
    app_version: str = "1.0.0"

    # Database
    database_url: str

    # Sessions
    session_timeout_minutes: int = 30

    # Logging
    log_level: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded once and reused.
    """
    return Settings()


def get_cors_origins() -> List[str]:
    """
    Allowed CORS origins from the comma-separated CORS_ORIGINS variable.

    Read when the app module is imported, before any Settings exist, so
    the app can be imported without DATABASE_URL.
    """
    origins = os.getenv('CORS_ORIGINS', DEFAULT_CORS_ORIGINS).split(',')
    return [origin.strip() for origin in origins if origin.strip()]

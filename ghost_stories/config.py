"""Configuration management using Pydantic Settings.

Priority order:
1. Environment variables (highest priority, for Cloud Run)
2. Google Cloud Secret Manager (for secrets like OPENAI_API_KEY)
3. .env file (for local development fallback)

The provider credential is resolved again on every generation call through
get_openai_api_key(), so rotating the key does not require a restart.
"""

import os
from functools import lru_cache
from typing import Any

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _get_secret_value(key: str) -> str | None:
    """Lazy import to avoid circular dependency."""
    # Only try Secret Manager if we have a project ID
    project_id = os.environ.get("GOOGLE_PROJECT_ID")
    if not project_id:
        return None

    try:
        from ghost_stories.secret_manager import get_app_secret

        return get_app_secret(key)
    except Exception:
        return None


class Settings(BaseSettings):
    """Application settings with Secret Manager integration.

    Configuration is loaded from:
    1. Environment variables (highest priority)
    2. Secret Manager (for sensitive values)
    3. .env file (local development fallback)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = "dev"
    log_level: str = "INFO"

    # Text generation provider
    openai_api_key: str | None = None
    llm_model: str = "gpt-3.5-turbo"
    llm_temperature: float = 0.8
    llm_top_p: float = 0.9
    llm_max_tokens: int = 1000

    # Generation timing
    generation_timeout_seconds: float = 25.0  # Deadline for a single provider call
    slow_warning_seconds: float = 15.0  # Delay before the "still working" notice

    # Prompt bounds
    prompt_min_length: int = 3
    prompt_max_length: int = 200

    # Web UI
    session_secret_key: str | None = None
    api_url: str = "http://localhost:8000"

    @model_validator(mode="before")
    @classmethod
    def load_secrets_from_secret_manager(cls, data: dict[str, Any]) -> dict[str, Any]:
        """Load secret values from Secret Manager if not already set.

        This allows Secret Manager to be the single source of truth while
        still allowing environment variables to override.
        """
        secret_fields = ["openai_api_key", "session_secret_key"]

        for field in secret_fields:
            # Skip if already set via env var or .env
            if data.get(field):
                continue

            value = _get_secret_value(field)
            if value:
                data[field] = value

        return data

    @property
    def is_production(self) -> bool:
        """Whether the app runs in the production environment."""
        return self.environment == "prod"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def get_openai_api_key() -> str | None:
    """Resolve the provider credential at call time.

    Returns:
        The API key, or None when no source provides one.
    """
    key = os.environ.get("OPENAI_API_KEY")
    if key:
        return key

    key = _get_secret_value("openai_api_key")
    if key:
        return key

    return get_settings().openai_api_key or None


# Default settings instance
settings = get_settings()

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Runtime configuration for the API, the Claude client and the UI.

    Read from environment variables, with `.env` as a fallback source.
    """

    # API Keys
    anthropic_api_key: str = ""

    # Generation
    llm_model: str = "claude-sonnet-4-20250514"
    max_tokens: int = 2000
    request_timeout: float = 60.0  # seconds, per Claude call

    # App config
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"

    # UI
    api_url: str = "http://localhost:8000"
    access_password: str = ""  # empty disables the session gate

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide Settings.

    A missing `.env` is skipped by pydantic-settings; an unreadable one falls
    back to environment variables and defaults.
    """
    try:
        return Settings()
    except (OSError, UnicodeDecodeError):
        # .env unreadable or not UTF-8: build settings from env vars only.
        # Validation errors still propagate.
        return Settings(_env_file=None)  # type: ignore[call-arg]


settings = get_settings()

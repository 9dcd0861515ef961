"""Configuration for the HTTP service."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """HTTP service settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file='.env', extra='ignore')

    # OpenAI (optional: without it only proposal extraction is served)
    OPENAI_API_KEY: str = ''
    OPENAI_CHAT_MODEL: str = 'gpt-4.1-mini'
    OPENAI_TIMEOUT_SECONDS: float = 30.0

    # Logging
    LOG_JSON: bool = False
    LOG_LEVEL: str = 'INFO'


@lru_cache
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()

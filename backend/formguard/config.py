"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    # Form layout
    GROUP_TAGS: list[str] = ["li"]  # Container tags that act as error-reporting groups
    STRICT_GROUPS: bool = False     # Reject forms with fields outside any group

    # Registry
    MAX_FORMS: int = 100

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()

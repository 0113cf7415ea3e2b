"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    page_size: int = 20
    shown_pages: int = 1
    feed_photo_count: int = 19
    fallback_photo_url: str = "images/no-panda-portrait.jpg"
    reserved_credits: str | None = None
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_reserved_credits(raw: str | None) -> frozenset[str]:
    """Parse house/placeholder photo credits from env."""
    if raw is None:
        return frozenset()
    credits = set()
    for chunk in raw.split(","):
        value = chunk.strip()
        if value:
            credits.add(value)
    return frozenset(credits)

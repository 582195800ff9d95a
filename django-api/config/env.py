"""Environment configuration via pydantic settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def split_list(value: str) -> list[str]:
    """Split a comma-separated environment value."""
    return [item.strip() for item in value.split(",") if item.strip()]


class EnvSettings(BaseSettings):
    """Typed environment for the booking API."""

    secret_key: str = Field("insecure-development-key", alias="DJANGO_SECRET_KEY")
    debug: bool = Field(False, alias="DJANGO_DEBUG")
    allowed_hosts: str = Field("localhost,127.0.0.1", alias="DJANGO_ALLOWED_HOSTS")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    booking_api_base_url: str = Field("http://localhost:5000/api", alias="BOOKING_API_BASE_URL")
    booking_http_timeout: float = Field(10.0, alias="BOOKING_HTTP_TIMEOUT")
    booking_event_cache_ttl: int = Field(60, alias="BOOKING_EVENT_CACHE_TTL")
    booking_draft_ttl: int = Field(1800, alias="BOOKING_DRAFT_TTL")
    booking_suggested_coupons: str = Field(
        "WELCOME10,SAVE20,EARLYBIRD", alias="BOOKING_SUGGESTED_COUPONS"
    )

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[2] / ".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_env() -> EnvSettings:
    """Return a cached settings instance."""
    return EnvSettings()  # type: ignore[call-arg]

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Venue Ops Backend"
    environment: str = "development"
    api_prefix: str = "/api/v1"
    cors_allow_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    supabase_url: str = Field(..., alias="SUPABASE_URL")
    supabase_service_role_key: Optional[str] = Field(
        default=None, alias="SUPABASE_SERVICE_ROLE_KEY"
    )
    supabase_anon_key: Optional[str] = Field(default=None, alias="SUPABASE_ANON_KEY")

    analytics_default_timeframe: str = Field(default="month", alias="ANALYTICS_DEFAULT_TIMEFRAME")
    analytics_top_artists: int = Field(default=10, alias="ANALYTICS_TOP_ARTISTS", ge=1)
    events_fetch_page_size: int = Field(default=1000, alias="EVENTS_FETCH_PAGE_SIZE", ge=1)


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_cors_origins() -> list[str]:
    settings = get_settings()
    return [origin.strip() for origin in settings.cors_allow_origins.split(",") if origin.strip()]

"""Application settings parsed from environment variables and defaults."""

import json
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from discvault.catalog.statistics import (
    DEFAULT_UNKNOWN_PRICE_FALLBACK,
    SpotlightBasis,
    StatisticsOptions,
    UnknownPricePolicy,
)

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    app_name: str = "DiscVault API"
    environment: str = "development"
    api_prefix: str = "/api/v1"

    database_url: str
    test_database_url: Optional[str] = None

    access_token_expires_minutes: int = 60 * 24
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"

    tmdb_api_key: Optional[str] = None
    tmdb_api_auth_header: Optional[str] = None
    tmdb_base_url: str = "https://api.themoviedb.org/3"
    barcode_lookup_url: str = "https://api.upcitemdb.com/prod/trial/lookup"
    dvdfr_lookup_url: str = "http://www.dvdfr.com/api/search.php"
    metadata_user_agent: str = "DiscVault/1.0"

    log_level: str = "INFO"
    cors_origins: list[str] | str = Field(default_factory=lambda: DEFAULT_CORS_ORIGINS.copy())
    default_page_size: int = 20
    max_page_size: int = 200
    notification_list_limit: int = 50
    guest_account_enabled: bool = True
    guest_email: str = "guest@discvault.app"
    guest_password: str = "guest"

    stats_unknown_price_policy: UnknownPricePolicy = UnknownPricePolicy.AS_RECORDED
    stats_unknown_price_fallback: float = DEFAULT_UNKNOWN_PRICE_FALLBACK
    stats_spotlight_basis: SpotlightBasis = SpotlightBasis.PURCHASE_DATE

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_cors_origins(cls, value: str | list[str] | None) -> list[str]:
        """Normalize CORS origins from JSON, CSV, or list inputs."""
        if isinstance(value, list):
            cleaned = [origin.strip() for origin in value if isinstance(origin, str) and origin.strip()]
            return cleaned or DEFAULT_CORS_ORIGINS.copy()
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped:
                return DEFAULT_CORS_ORIGINS.copy()
            try:
                parsed = json.loads(stripped)
            except json.JSONDecodeError:
                parsed = None
            if isinstance(parsed, list):
                cleaned = [str(origin).strip() for origin in parsed if str(origin).strip()]
                if cleaned:
                    return cleaned
            origins = [origin.strip() for origin in stripped.split(",") if origin.strip()]
            if origins:
                return origins
        return DEFAULT_CORS_ORIGINS.copy()

    @field_validator("stats_unknown_price_fallback")
    @classmethod
    def _non_negative_fallback(cls, value: float) -> float:
        if value < 0:
            raise ValueError("STATS_UNKNOWN_PRICE_FALLBACK must be non-negative")
        return value

    @property
    def statistics_options(self) -> StatisticsOptions:
        """Statistics policies derived from settings."""
        return StatisticsOptions(
            unknown_price_policy=self.stats_unknown_price_policy,
            unknown_price_fallback=self.stats_unknown_price_fallback,
            spotlight_basis=self.stats_spotlight_basis,
        )

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings to avoid re-parsing environment variables."""
    return Settings()


settings = get_settings()

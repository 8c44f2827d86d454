"""Application configuration using pydantic-settings."""

import json
from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated, Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_PERFORMERS_EXT_URL = "https://performersext-api.pcvdaa.com/performers-ext"
DEFAULT_PERFORMERS_LOOKUP_URL = "https://performers-api.pcvdaa.com/v2/performers"
DEFAULT_LISTING_USER_AGENT = "nitevelour/1.0"
DEFAULT_LOOKUP_USER_AGENT = "nitevelour"
DEFAULT_BRANDS: tuple[str, ...] = ("stripchat", "chaturbate", "awempire", "streamate")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = "Nitevelour Live"
    app_version: str = "0.1.0"
    response_version: str = "livefix5"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    # API
    api_prefix: str = "/api"
    cors_origins: Annotated[list[str], NoDecode] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8788",
    ]

    # CrakRevenue performer APIs
    crak_performers_url: str | None = None
    crak_lookup_url: str | None = None
    crak_token: str | None = None
    crak_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("crak_api_key", "crak_key"),
    )
    crak_ua: str | None = None

    # Local catalog of allowed performer item ids
    catalog_path: str = "data/catalog.json"

    @field_validator("crak_performers_url", "crak_lookup_url", "crak_token", "crak_api_key", "crak_ua", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        """Treat empty environment values as unset."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_cors_origins(cls, value: object) -> object:
        """Accept a JSON list or comma-separated values for CORS_ORIGINS."""
        if isinstance(value, list):
            return [str(origin).strip() for origin in value if str(origin).strip()]
        if not isinstance(value, str):
            return value

        raw = value.strip()
        if not raw:
            return []
        if raw.startswith("["):
            try:
                parsed = json.loads(raw)
            except json.JSONDecodeError:
                parsed = None
            if isinstance(parsed, list):
                return [str(origin).strip() for origin in parsed if str(origin).strip()]
        return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass(frozen=True)
class LiveUpstreamConfig:
    """Resolved connection settings for the paginated performers-ext API."""

    base_url: str
    token: str | None
    api_key: str | None
    user_agent: str

    @classmethod
    def from_settings(cls, source: Settings) -> "LiveUpstreamConfig":
        return cls(
            base_url=source.crak_performers_url or DEFAULT_PERFORMERS_EXT_URL,
            token=source.crak_token,
            api_key=source.crak_api_key,
            user_agent=source.crak_ua or DEFAULT_LISTING_USER_AGENT,
        )

    @property
    def is_complete(self) -> bool:
        """Whether both the query token and the API key are present."""
        return bool(self.token and self.api_key)


@dataclass(frozen=True)
class LookupUpstreamConfig:
    """Resolved connection settings for the single-performer lookup API."""

    base_url: str
    api_key: str | None
    user_agent: str

    @classmethod
    def from_settings(cls, source: Settings) -> "LookupUpstreamConfig":
        return cls(
            base_url=(source.crak_lookup_url or DEFAULT_PERFORMERS_LOOKUP_URL).rstrip("/"),
            api_key=source.crak_api_key,
            user_agent=source.crak_ua or DEFAULT_LOOKUP_USER_AGENT,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    settings = Settings()

    return settings


settings = get_settings()

"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, HttpUrl, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LookupSettings(BaseModel):
    base_url: HttpUrl | None = Field(
        default=None,
        description="Root URL of the ID validation and holiday lookup service.",
    )
    api_key: SecretStr | None = None
    request_timeout_seconds: int = Field(default=10, ge=1, le=60)
    max_attempts: int = Field(default=3, ge=1, le=10)
    retry_base_delay: float = Field(default=0.5, ge=0)

    @field_validator("base_url", "api_key", mode="before")
    @classmethod
    def _empty_str_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class CheckerSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CHECKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    debounce_delay_seconds: float = Field(default=0.5, ge=0)
    min_validation_length: int = Field(default=10, ge=1)
    id_length: int = Field(default=13, ge=1)

    lookup: LookupSettings = Field(default_factory=LookupSettings)


@lru_cache
def get_settings() -> CheckerSettings:
    """Return cached settings instance."""

    return CheckerSettings()


__all__ = [
    "CheckerSettings",
    "LookupSettings",
    "get_settings",
]

from __future__ import annotations

from functools import lru_cache
from typing import ClassVar

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .shard import constants as C


class Settings(BaseSettings):
    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(env_nested_delimiter="__", extra="ignore")

    gamma_api_key: str | None = Field(default=None, description="API key for the Gamma generation API")
    gamma_api_base: str = Field(default=C.DEFAULT_API_BASE, description="Base URL of the Gamma public API")
    gamma_request_timeout: float = Field(default=C.DEFAULT_REQUEST_TIMEOUT, gt=0, description="Per-request HTTP timeout in seconds")
    gamma_poll_interval_seconds: float = Field(default=C.POLL_INTERVAL_SECONDS, gt=0, description="Delay between status checks while polling")

    log_level: str = Field(default="INFO", description="Minimum loguru level written to stderr")


@lru_cache
def get_settings() -> Settings:
    return Settings()

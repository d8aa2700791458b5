"""Process configuration, read once at startup from the environment or .env."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Upstream API keys; a missing key only disables the tools backed by that provider.
    skyscanner_api_key: str = ""
    met_office_api_key: str = ""
    tripadvisor_api_key: str = ""
    tripadvisor_referer: str = "http://localhost:3000"
    nominatim_user_agent: str = "travel-guide-mcp/1.0 (local)"

    # Transport
    http_mode: bool = False
    port: Optional[int] = None
    default_port: int = 3000
    host: str = "0.0.0.0"

    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", env_ignore_empty=True)

    @property
    def use_http(self) -> bool:
        return self.http_mode or self.port is not None

    @property
    def listen_port(self) -> int:
        return self.port if self.port is not None else self.default_port


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

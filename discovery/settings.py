"""
settings.py — Typed settings for the discovery server.

What this does:
  - Loads configuration from DISCOVERY_* environment variables and an optional .env file.
  - Decides, once per process, which relation groups the root document advertises.
  - Exposes a cached accessor get_settings() for FastAPI and the tools.

Common examples:

  # Serve hrefs under the public hostname, without the stream relations
  export DISCOVERY_PUBLIC_BASE_URL=https://dataflow.example.com
  export DISCOVERY_STREAMS_ENABLED=false

  # Replace the built-in registry with a JSON file
  export DISCOVERY_REGISTRY_FILE=./relations.json

Notes:
  - A registry file that is missing, unreadable or malformed stops startup with
    RegistryError. The server never comes up serving a partial link map built
    from a broken file; an empty JSON list is valid and serves {}.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class Settings(BaseSettings):
    # App
    app_name: str = "Data Flow Discovery"
    api_version: str = "0.1.0"
    env: Literal["dev", "test", "prod"] = "dev"
    log_level: str = "INFO"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Root document
    public_base_url: str = "http://localhost"
    api_revision: int = 14
    registry_file: Optional[Path] = None

    # Feature toggles (decide which relation groups are registered)
    streams_enabled: bool = True
    tasks_enabled: bool = True
    metrics_enabled: bool = True

    model_config = SettingsConfigDict(
        env_prefix="DISCOVERY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _log_level(cls, v: str) -> str:
        v = str(v).upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return v

    @field_validator("port")
    @classmethod
    def _port_range(cls, v: int) -> int:
        if not (1 <= v <= 65535):
            raise ValueError("PORT must be between 1 and 65535")
        return v

    @field_validator("public_base_url")
    @classmethod
    def _strip_slash(cls, v: str) -> str:
        # hrefs are base + "/path"
        return v.rstrip("/")

    @property
    def features(self) -> frozenset[str]:
        enabled = {"core"}
        if self.streams_enabled:
            enabled.add("streams")
        if self.tasks_enabled:
            enabled.add("tasks")
        if self.metrics_enabled:
            enabled.add("metrics")
        return frozenset(enabled)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

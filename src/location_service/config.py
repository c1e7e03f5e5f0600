"""Environment-driven settings for the location service."""

from __future__ import annotations

import json
from typing import List, Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from location_service.exceptions import ConfigError

DEFAULT_CORS_ORIGINS = [
    "https://finndore.dev",
    "http://localhost:3000",
]
# Preview deployments: https://<anything>finnnn.vercel.app
DEFAULT_CORS_ORIGIN_REGEX = r"https://.*finnnn\.vercel\.app"


def _parse_cors_any(v: Optional[str]) -> List[str]:
    if not v:
        return []
    s = v.strip()
    if s.startswith("["):
        try:
            arr = json.loads(s)
        except ValueError:
            arr = None
        if isinstance(arr, list):
            return [str(x).strip() for x in arr if str(x).strip()]
    return [x.strip() for x in s.split(",") if x.strip()]


class Settings(BaseSettings):
    # ---------- Credentials (required) ----------
    pirate_weather_token: str
    auth_token: str

    # ---------- Server ----------
    port: int = Field(default=3002, ge=1, le=65535)
    env: str = "production"

    # ---------- Logging ----------
    log_level: str = "DEBUG"

    # ---------- Upstream ----------
    upstream_timeout: float = Field(default=30.0, gt=0)

    # ---------- CORS ----------
    cors_origins: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def cors_list(self) -> List[str]:
        return _parse_cors_any(self.cors_origins) or list(DEFAULT_CORS_ORIGINS)

    @property
    def cors_origin_regex(self) -> Optional[str]:
        # An explicit allow-list replaces the defaults, preview regex included.
        return None if self.cors_origins else DEFAULT_CORS_ORIGIN_REGEX


def load_settings(**overrides) -> Settings:
    """Build Settings, turning missing required variables into ConfigError."""
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        missing = [
            str(err["loc"][0]).upper()
            for err in exc.errors()
            if err.get("type") == "missing" and err.get("loc")
        ]
        if missing:
            raise ConfigError(f"{', '.join(missing)} env var not set") from exc
        raise ConfigError(str(exc)) from exc

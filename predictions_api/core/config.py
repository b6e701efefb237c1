# predictions_api/core/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from fastapi import Request

from predictions_api.core.errors import ConfigError

PROVIDERS = ("apisports", "sportradar", "rapidapi")

# Env var holding the key for each provider
API_KEY_ENV = {
    "apisports": "API_SPORTS_KEY",
    "sportradar": "SPORTRADAR_API_KEY",
    "rapidapi": "X_RAPIDAPI_KEY",
}

DEFAULT_PORT = 4000
DEFAULT_TIMEOUT_S = 10.0
DEFAULT_SPORTRADAR_BASE = "https://api.sportradar.com"


def _clean(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = v.strip()
    return v or None


@dataclass(frozen=True)
class Settings:
    """
    Process configuration, read once at startup.

    Routes never touch os.environ; they get this object through
    `get_settings` (see main.create_app).
    """

    port: int = DEFAULT_PORT
    provider: str = "apisports"
    api_sports_key: Optional[str] = None
    sportradar_api_key: Optional[str] = None
    sportradar_base_url: str = DEFAULT_SPORTRADAR_BASE
    rapidapi_key: Optional[str] = None
    upstream_timeout_s: float = DEFAULT_TIMEOUT_S
    log_level: str = "INFO"

    def __post_init__(self):
        if self.provider not in PROVIDERS:
            raise ConfigError(
                f"PREDICTIONS_PROVIDER must be one of {', '.join(PROVIDERS)}, got {self.provider!r}"
            )

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env

        provider = (env.get("PREDICTIONS_PROVIDER") or "apisports").strip().lower()

        try:
            port = int(env.get("PORT") or DEFAULT_PORT)
        except ValueError:
            raise ConfigError(f"PORT must be an integer, got {env.get('PORT')!r}")

        try:
            timeout = float(env.get("UPSTREAM_TIMEOUT_S") or DEFAULT_TIMEOUT_S)
        except ValueError:
            raise ConfigError(
                f"UPSTREAM_TIMEOUT_S must be a number, got {env.get('UPSTREAM_TIMEOUT_S')!r}"
            )
        if timeout <= 0:
            raise ConfigError("UPSTREAM_TIMEOUT_S must be positive")

        return cls(
            port=port,
            provider=provider,
            api_sports_key=_clean(env.get("API_SPORTS_KEY")),
            sportradar_api_key=_clean(env.get("SPORTRADAR_API_KEY")),
            sportradar_base_url=(
                _clean(env.get("SPORTRADAR_BASE_URL")) or DEFAULT_SPORTRADAR_BASE
            ).rstrip("/"),
            rapidapi_key=_clean(env.get("X_RAPIDAPI_KEY")),
            upstream_timeout_s=timeout,
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        )

    @property
    def api_key_env(self) -> str:
        return API_KEY_ENV[self.provider]

    @property
    def api_key(self) -> Optional[str]:
        return {
            "apisports": self.api_sports_key,
            "sportradar": self.sportradar_api_key,
            "rapidapi": self.rapidapi_key,
        }[self.provider]


def get_settings(request: Request) -> Settings:
    """FastAPI dependency: the Settings attached to the running app."""
    return request.app.state.settings

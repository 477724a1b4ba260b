"""Application settings loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env(key: str, default: str = "") -> str:
    return os.environ.get(key, default)


def _env_int(key: str, default: int) -> int:
    raw = _env(key)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        msg = f"{key} must be an integer, got {raw!r}"
        raise ValueError(msg) from exc


@dataclass(frozen=True)
class CosmosConfig:
    endpoint: str = field(default_factory=lambda: _env("COSMOS_ENDPOINT"))
    key: str = field(default_factory=lambda: _env("COSMOS_KEY"))
    content_database: str = field(
        default_factory=lambda: _env("COSMOS_CONTENT_DATABASE", "inkwell")
    )
    live_database: str = field(
        default_factory=lambda: _env("COSMOS_LIVE_DATABASE", "inkwell-live")
    )
    timeout: int = field(default_factory=lambda: _env_int("COSMOS_TIMEOUT", 10))


@dataclass(frozen=True)
class AuthConfig:
    secret: str = field(default_factory=lambda: _env("INKWELL_SECRET"))
    token_ttl_hours: int = field(
        default_factory=lambda: _env_int("INKWELL_TOKEN_TTL_HOURS", 24)
    )
    algorithm: str = "HS256"


@dataclass(frozen=True)
class AppConfig:
    env: str = field(default_factory=lambda: _env("APP_ENV", "development"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
    commit_retries: int = field(
        default_factory=lambda: _env_int("INKWELL_COMMIT_RETRIES", 3)
    )

    @property
    def is_development(self) -> bool:
        return self.env == "development"


@dataclass(frozen=True)
class MonitorConfig:
    connection_string: str = field(
        default_factory=lambda: _env("APPLICATIONINSIGHTS_CONNECTION_STRING")
    )


@dataclass(frozen=True)
class Settings:
    cosmos: CosmosConfig = field(default_factory=CosmosConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    app: AppConfig = field(default_factory=AppConfig)
    monitor: MonitorConfig = field(default_factory=MonitorConfig)


def load_settings() -> Settings:
    """Build settings from the current environment."""
    settings = Settings()
    if not settings.auth.secret:
        msg = "INKWELL_SECRET is not set — tokens cannot be signed"
        raise ValueError(msg)
    return settings

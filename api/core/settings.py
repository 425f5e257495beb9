"""
Environment-driven settings.

Every value is read from the process environment, which `main` populates
from a `.env` file when it is imported. Invalid numbers fall back to their
defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_PORT = 10000
DEFAULT_HOST = "0.0.0.0"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in _TRUE_VALUES


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL env var is not set")
    return url


def port() -> int:
    return _env_int("PORT", DEFAULT_PORT)


def host() -> str:
    return os.environ.get("HOST", DEFAULT_HOST).strip() or DEFAULT_HOST


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "*")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"


def _env_timeout(name: str, default: int) -> float | None:
    # 0 or a negative value means "wait forever".
    value = _env_int(name, default)
    return value if value > 0 else None


@dataclass(frozen=True)
class DatabaseSettings:
    url: str
    min_size: int = 1
    max_size: int = 10
    command_timeout: float | None = 30
    acquire_timeout: float | None = 30
    # Accept self-signed/unverified server certificates. Some hosted Postgres
    # providers need this; it disables certificate verification entirely.
    # When off, sslmode=require/verify-ca/verify-full connections are verified.
    ssl_no_verify: bool = False


def database_settings() -> DatabaseSettings:
    min_size = max(_env_int("DB_POOL_MIN_SIZE", 1), 0)
    max_size = max(_env_int("DB_POOL_MAX_SIZE", 10), 1)
    return DatabaseSettings(
        url=database_url(),
        min_size=min(min_size, max_size),
        max_size=max_size,
        command_timeout=_env_timeout("DB_COMMAND_TIMEOUT", 30),
        acquire_timeout=_env_timeout("DB_POOL_ACQUIRE_TIMEOUT", 30),
        ssl_no_verify=_env_bool("DATABASE_SSL_NO_VERIFY"),
    )

"""
Environment-backed settings.

Values are read on access, not cached, so tests can monkeypatch `os.environ`.
"""

from __future__ import annotations

import os

DEFAULT_JWT_SECRET = "dev-change-this-secret"
DEFAULT_CORS_ORIGINS = "http://localhost:3000"


def env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def log_level() -> str:
    return env_str("LOG_LEVEL", "INFO").upper()


def jwt_secret() -> str:
    # In production, set JWT_SECRET in environment.
    return env_str("JWT_SECRET", DEFAULT_JWT_SECRET)


def jwt_algorithm() -> str:
    return env_str("JWT_ALG", "HS256")


def access_token_expire_minutes() -> int:
    return env_int("ACCESS_TOKEN_EXPIRE_MIN", 60)


def cors_origins() -> list[str]:
    raw = env_str("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]

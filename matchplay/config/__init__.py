"""Configuration helpers for engine defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


__all__ = [
    "Settings",
    "env_bool",
    "get_settings",
    "reset_settings_cache",
]


@dataclass(frozen=True)
class Settings:
    default_course_par: int = 72
    default_points_value: float = 1.0
    api_key: str | None = None
    cors_allow_origins: tuple[str, ...] = ("http://localhost", "http://127.0.0.1")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached engine settings."""

    par = _int_env("MATCHPLAY_DEFAULT_COURSE_PAR", 72)
    points = _float_env("MATCHPLAY_DEFAULT_POINTS", 1.0)
    origins = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost,http://127.0.0.1")
    return Settings(
        default_course_par=par if par > 0 else 72,
        default_points_value=points,
        api_key=os.getenv("API_KEY") or None,
        cors_allow_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
    )


def reset_settings_cache() -> None:
    """Clear cached settings (primarily for tests)."""

    get_settings.cache_clear()


def env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default

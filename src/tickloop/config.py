# src/tickloop/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole library, built on first use.
- Nothing required at import time; every field has a default.
- A .env file is read, never loaded into os.environ: real environment variables win.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values, find_dotenv

ENV_PREFIX = "TICKLOOP"

DEFAULT_PERIOD_MS = 1000


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _read_env() -> dict[str, str]:
    """.env values (from the current directory upwards) overlaid by os.environ."""
    file_values = dotenv_values(find_dotenv(usecwd=True))
    merged = {k: v for k, v in file_values.items() if v is not None}
    merged.update(os.environ)
    return merged


def _env(env: Mapping[str, str], name: str, default: str = "") -> str:
    v = env.get(name)
    return default if v is None else v


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(env: Mapping[str, str], name: str, default: Path | None) -> Path | None:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- Scheduling ----
    default_period_ms: int

    # ---- Logging ----
    log_level: str
    log_dir: Path | None

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> "Settings":
        if env is None:
            env = _read_env()

        default_period_ms = _env_int(env, _k("DEFAULT_PERIOD_MS"), DEFAULT_PERIOD_MS)
        if default_period_ms <= 0:
            default_period_ms = DEFAULT_PERIOD_MS

        log_level = _env(env, _k("LOG_LEVEL"), "INFO").strip().upper() or "INFO"
        log_dir = _env_path(env, _k("LOG_DIR"), None)

        return Settings(
            default_period_ms=default_period_ms,
            log_level=log_level,
            log_dir=log_dir,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS

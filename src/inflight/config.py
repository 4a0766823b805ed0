# src/inflight/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Read once, at startup; the scheduler capacity is fixed for the process lifetime.
"""

from __future__ import annotations

import functools
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "INFLIGHT"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_file_enabled: bool

    # ---- Front end ----
    console_enabled: bool

    # ---- Scheduler ----
    max_concurrent_tasks: int
    wait_timeout_seconds: float
    shutdown_timeout_seconds: float

    # ---- Local data paths (ignored by git) ----
    data_dir: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "inflight").strip() or "inflight"
        log_level = _env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO"
        log_file_enabled = _env_bool(_k("LOG_FILE_ENABLED"), True)

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        # A gate needs at least one permit; 1 means strictly serial execution.
        max_concurrent_tasks = max(1, _env_int(_k("MAX_CONCURRENT_TASKS"), 1))
        wait_timeout_seconds = max(0.0, _env_float(_k("WAIT_TIMEOUT_SECONDS"), 30.0))
        shutdown_timeout_seconds = max(0.0, _env_float(_k("SHUTDOWN_TIMEOUT_SECONDS"), 10.0))

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/inflight"))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_file_enabled=log_file_enabled,
            console_enabled=console_enabled,
            max_concurrent_tasks=max_concurrent_tasks,
            wait_timeout_seconds=wait_timeout_seconds,
            shutdown_timeout_seconds=shutdown_timeout_seconds,
            data_dir=data_dir,
        )


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load .env (without overriding real env vars) and build Settings once."""
    load_dotenv(override=False)
    return Settings.from_env()

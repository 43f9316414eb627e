# src/collab_todo/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

- One Settings object for the whole app.
- Malformed values fall back to defaults instead of failing at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "COLLAB_TODO"

load_dotenv(override=False)


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
    observer_log_level: str

    # ---- Local paths (ignored by git) ----
    data_dir: Path
    log_dir: Path

    # ---- Observer ----
    observer_interval_seconds: float
    observer_stop_timeout_seconds: float

    # ---- Driver ----
    demo_step_seconds: float
    console_enabled: bool
    seed_demo_data: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "collab-todo").strip() or "collab-todo"
        log_level = _env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO"
        observer_log_level = _env(_k("OBSERVER_LOG_LEVEL"), "INFO").strip().upper() or "INFO"

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/collab_todo"))
        log_dir = _env_path(_k("LOG_DIR"), data_dir)

        observer_interval_seconds = _env_float(_k("OBSERVER_INTERVAL_SECONDS"), 3.0)
        if observer_interval_seconds <= 0:
            observer_interval_seconds = 3.0
        observer_stop_timeout_seconds = _env_float(_k("OBSERVER_STOP_TIMEOUT_SECONDS"), 5.0)
        if observer_stop_timeout_seconds < 0:
            observer_stop_timeout_seconds = 5.0

        demo_step_seconds = max(0.0, _env_float(_k("DEMO_STEP_SECONDS"), 5.0))
        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), False)
        seed_demo_data = _env_bool(_k("SEED_DEMO_DATA"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            observer_log_level=observer_log_level,
            data_dir=data_dir,
            log_dir=log_dir,
            observer_interval_seconds=observer_interval_seconds,
            observer_stop_timeout_seconds=observer_stop_timeout_seconds,
            demo_step_seconds=demo_step_seconds,
            console_enabled=console_enabled,
            seed_demo_data=seed_demo_data,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS

# src/smart_tasks/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing required at import time; every value has a default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "SMART_TASKS"

STORAGE_BACKENDS = ("file", "sqlite", "memory")


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


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    return value if value in choices else default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_to_file: bool

    # ---- Local data (ignored by git) ----
    data_dir: Path

    # ---- Persistence slot ----
    storage_backend: str
    storage_path: Path
    storage_key: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "Smart Task Manager").strip() or "Smart Task Manager"
        log_level = _env(_k("LOG_LEVEL"), "WARNING")
        log_to_file = _env_bool(_k("LOG_TO_FILE"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/smart_tasks"))

        storage_backend = _env_choice(_k("STORAGE"), STORAGE_BACKENDS, "file")
        # file backend -> directory of slot files; sqlite backend -> database file
        default_storage_path = data_dir / "tasks.sqlite3" if storage_backend == "sqlite" else data_dir
        storage_path = _env_path(_k("STORAGE_PATH"), default_storage_path)
        storage_key = _env(_k("STORAGE_KEY"), "tasks").strip() or "tasks"

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_to_file=log_to_file,
            data_dir=data_dir,
            storage_backend=storage_backend,
            storage_path=storage_path,
            storage_key=storage_key,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Load .env locally; values already present in the environment win.
    load_dotenv(override=False)
    return Settings.from_env()

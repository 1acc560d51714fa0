# src/task_manager/config.py

"""Settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object, built once at startup and passed to whoever needs it.
- No reads at import time: nothing here touches the environment until
  Settings.from_env() is called.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .tasks.task_models import Priority

ENV_PREFIX = "TASKS"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def load_env_file(path: str | Path | None = None) -> bool:
    """
    Load a .env file without overriding variables already set.

    Without an explicit path the file is searched from the current directory
    upwards, so the CLI picks up the .env of the project it runs in.
    """
    if path is None:
        path = find_dotenv(usecwd=True)
    return load_dotenv(dotenv_path=path, override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
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


def _env_priority(name: str, default: Priority) -> Priority:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return Priority(raw.strip().lower())
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_dir: Path
    log_to_file: bool

    # ---- Storage ----
    data_dir: Path
    tasks_path: Path
    lock_enabled: bool
    lock_timeout_seconds: float

    # ---- Behaviour ----
    default_priority: Priority

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "task-manager") or "task-manager"
        log_level = _env(_k("LOG_LEVEL"), "WARNING").upper()

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/task-manager"))
        tasks_path = _env_path(_k("FILE"), data_dir / "tasks.json")
        log_dir = _env_path(_k("LOG_DIR"), data_dir)
        log_to_file = _env_bool(_k("LOG_TO_FILE"), True)

        lock_enabled = _env_bool(_k("LOCK_ENABLED"), True)
        lock_timeout_seconds = max(0.0, _env_float(_k("LOCK_TIMEOUT"), 5.0))

        default_priority = _env_priority(_k("DEFAULT_PRIORITY"), Priority.MEDIUM)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=log_dir,
            log_to_file=log_to_file,
            data_dir=data_dir,
            tasks_path=tasks_path,
            lock_enabled=lock_enabled,
            lock_timeout_seconds=lock_timeout_seconds,
            default_priority=default_priority,
        )

    def with_tasks_path(self, path: str | Path) -> "Settings":
        return replace(self, tasks_path=Path(path).expanduser())

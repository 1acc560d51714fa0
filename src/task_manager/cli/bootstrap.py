# src/task_manager/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads .env and settings once,
- configures logging,
- wires the concrete TaskStore into AppState.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import Settings, load_env_file
from ..core.state import AppState
from ..logging_setup import setup_logging
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def load_settings(*, tasks_file: str | Path | None = None) -> Settings:
    load_env_file()
    settings = Settings.from_env()
    if tasks_file is not None:
        settings = settings.with_tasks_path(tasks_file)
    return settings


def configure_logging(settings: Settings, *, verbose: bool = False) -> None:
    if verbose:
        console_level = logging.DEBUG
    else:
        console_level = getattr(logging, settings.log_level.upper(), logging.WARNING)
    log_dir = settings.log_dir if settings.log_to_file else None
    setup_logging(log_dir=log_dir, console_level=console_level)


def create_initial_state(*, settings: Settings | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easy to test and avoids hidden
    global config reads. If settings is None, they are loaded from the env.
    """
    if settings is None:
        settings = load_settings()

    state = AppState(settings=settings, task_store=TaskStore.from_settings(settings))
    logger.debug("Using %s (app=%s)", settings.tasks_path, settings.app_name)
    return state

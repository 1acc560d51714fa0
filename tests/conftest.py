# tests/conftest.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from fakes import FakeClock
from task_manager.config import Settings
from task_manager.tasks.task_models import Priority
from task_manager.tasks.task_store import TaskStore


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """The CLI reconfigures the root logger; put pytest's handlers back."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture()
def tasks_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "tasks.json"


@pytest.fixture()
def settings(tmp_path: Path, tasks_path: Path) -> Settings:
    """
    Settings built directly rather than from the environment,
    to keep unit tests isolated and deterministic.
    """
    return Settings(
        app_name="task-manager-test",
        log_level="WARNING",
        log_dir=tmp_path / "logs",
        log_to_file=False,
        data_dir=tmp_path / "data",
        tasks_path=tasks_path,
        lock_enabled=True,
        lock_timeout_seconds=0.2,
        default_priority=Priority.MEDIUM,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(settings: Settings, clock: FakeClock) -> TaskStore:
    return TaskStore.from_settings(settings, clock=clock)

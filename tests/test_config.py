# tests/test_config.py

from __future__ import annotations

import os
from pathlib import Path

import pytest

from task_manager.config import Settings, load_env_file
from task_manager.tasks.task_models import Priority

_VARS = [
    "TASKS_APP_NAME",
    "TASKS_LOG_LEVEL",
    "TASKS_DATA_DIR",
    "TASKS_FILE",
    "TASKS_LOG_DIR",
    "TASKS_LOG_TO_FILE",
    "TASKS_LOCK_ENABLED",
    "TASKS_LOCK_TIMEOUT",
    "TASKS_DEFAULT_PRIORITY",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = Settings.from_env()
    assert s.app_name == "task-manager"
    assert s.log_level == "WARNING"
    assert s.data_dir == Path(".local/task-manager")
    assert s.tasks_path == Path(".local/task-manager/tasks.json")
    assert s.log_dir == s.data_dir
    assert s.log_to_file is True
    assert s.lock_enabled is True
    assert s.lock_timeout_seconds == 5.0
    assert s.default_priority is Priority.MEDIUM


def test_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKS_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TASKS_LOG_LEVEL", "debug")
    monkeypatch.setenv("TASKS_LOCK_ENABLED", "no")
    monkeypatch.setenv("TASKS_LOCK_TIMEOUT", "1.5")
    monkeypatch.setenv("TASKS_DEFAULT_PRIORITY", "High")

    s = Settings.from_env()
    assert s.tasks_path == tmp_path / "tasks.json"
    assert s.log_level == "DEBUG"
    assert s.lock_enabled is False
    assert s.lock_timeout_seconds == 1.5
    assert s.default_priority is Priority.HIGH


def test_bad_values_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASKS_LOCK_TIMEOUT", "soon")
    monkeypatch.setenv("TASKS_DEFAULT_PRIORITY", "urgent")

    s = Settings.from_env()
    assert s.lock_timeout_seconds == 5.0
    assert s.default_priority is Priority.MEDIUM


def test_with_tasks_path_returns_copy(tmp_path: Path) -> None:
    s = Settings.from_env()
    other = s.with_tasks_path(tmp_path / "elsewhere.json")
    assert other.tasks_path == tmp_path / "elsewhere.json"
    assert s.tasks_path == Path(".local/task-manager/tasks.json")


def test_env_file_does_not_override_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("TASKS_APP_NAME=from-file\nTASKS_LOG_LEVEL=ERROR\n", "utf-8")
    monkeypatch.setenv("TASKS_LOG_LEVEL", "INFO")

    try:
        assert load_env_file(env_file) is True
        s = Settings.from_env()
    finally:
        # load_dotenv writes straight into os.environ.
        os.environ.pop("TASKS_APP_NAME", None)

    assert s.app_name == "from-file"
    assert s.log_level == "INFO"

# tests/test_task_api.py

from __future__ import annotations

from datetime import datetime

import pytest

from task_manager.errors import ValidationError
from task_manager.tasks.task_api import add_from_input, build_filter, parse_due_date
from task_manager.tasks.task_models import Priority, TaskStatus
from task_manager.tasks.task_store import TaskStore


def test_parse_due_date() -> None:
    due = parse_due_date("2026-10-20")
    assert due is not None
    assert due.tzinfo is not None
    assert (due.year, due.month, due.day, due.hour) == (2026, 10, 20, 0)
    assert due == datetime(2026, 10, 20).astimezone()


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_parse_due_date_blank_is_none(raw) -> None:
    assert parse_due_date(raw) is None


@pytest.mark.parametrize("raw", ["20/10/2026", "2026-13-01", "tomorrow"])
def test_parse_due_date_rejects_other_formats(raw) -> None:
    with pytest.raises(ValidationError, match="YYYY-MM-DD"):
        parse_due_date(raw)


def test_build_filter_defaults_to_pending() -> None:
    f = build_filter()
    assert f.status is TaskStatus.PENDING
    assert f.priority is None


def test_build_filter_all_and_explicit_status() -> None:
    assert build_filter(include_all=True).status is None
    f = build_filter(status="completed", priority="high", include_all=True)
    assert f.status is TaskStatus.COMPLETED
    assert f.priority is Priority.HIGH


def test_add_from_input_validates_before_writing(store: TaskStore, tasks_path) -> None:
    with pytest.raises(ValidationError):
        add_from_input(store, description="Pay rent", due="next week")
    assert not tasks_path.exists()


def test_add_from_input_uses_default_priority(store: TaskStore) -> None:
    task = add_from_input(
        store, description="Pay rent", due="2026-11-01", default_priority=Priority.LOW
    )
    assert task.priority is Priority.LOW
    assert task.due_date == parse_due_date("2026-11-01")

    explicit = add_from_input(store, description="Call bank", priority="high")
    assert explicit.priority is Priority.HIGH

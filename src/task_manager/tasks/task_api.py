# src/task_manager/tasks/task_api.py

"""
Helpers that turn raw user input (strings from the CLI or prompts) into
store calls.
"""

from __future__ import annotations

import logging
from datetime import datetime

from ..errors import ValidationError
from .task_models import Priority, Task, TaskFilter, TaskStatus
from .task_store import TaskStore

logger = logging.getLogger(__name__)

DUE_DATE_FORMAT = "%Y-%m-%d"


def parse_due_date(raw: str | None) -> datetime | None:
    """Parse YYYY-MM-DD into local midnight; blank input means no due date."""
    if raw is None or not raw.strip():
        return None
    try:
        day = datetime.strptime(raw.strip(), DUE_DATE_FORMAT)
    except ValueError:
        raise ValidationError(f"invalid due date {raw!r} (expected YYYY-MM-DD)") from None
    return day.astimezone()


def build_filter(
    *,
    status: str | None = None,
    priority: str | None = None,
    include_all: bool = False,
) -> TaskFilter:
    """
    Listing filter from CLI-style options.

    Without an explicit status and without include_all only pending tasks
    are selected.
    """
    if status:
        task_status: TaskStatus | None = TaskStatus.parse(status)
    elif include_all:
        task_status = None
    else:
        task_status = TaskStatus.PENDING
    return TaskFilter(
        status=task_status,
        priority=Priority.parse(priority) if priority else None,
    )


def add_from_input(
    store: TaskStore,
    *,
    description: str,
    priority: str | None = None,
    due: str | None = None,
    default_priority: Priority = Priority.MEDIUM,
) -> Task:
    """Validate every raw field before touching the store."""
    due_date = parse_due_date(due)
    prio = Priority.parse(priority) if priority else default_priority
    return store.add_task(description, priority=prio, due_date=due_date)

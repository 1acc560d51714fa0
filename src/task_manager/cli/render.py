# src/task_manager/cli/render.py

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from datetime import datetime

import click

from ..tasks.task_models import Priority, Task, TaskStatus

PRIORITY_COLORS: dict[Priority, str] = {
    Priority.LOW: "cyan",
    Priority.MEDIUM: "yellow",
    Priority.HIGH: "red",
}


def _day(value: datetime) -> str:
    return value.strftime("%Y-%m-%d")


def format_task(task: Task) -> str:
    """One listing line, e.g. ` 2. [x] Write report (high) due 2026-10-20`."""
    mark = "[x]" if task.is_completed else "[ ]"
    ident = click.style(f"{task.id:>2}.", bold=True)
    prio = click.style(f"({task.priority.value})", fg=PRIORITY_COLORS[task.priority])
    text = task.description
    if task.is_completed:
        text = click.style(text, dim=True)

    parts = [ident, mark, text, prio]
    if task.due_date is not None:
        parts.append(f"due {_day(task.due_date)}")
    if task.completed_at is not None:
        parts.append(click.style(f"done {_day(task.completed_at)}", fg="green"))
    return " ".join(parts)


def format_summary(tasks: Iterable[Task]) -> str:
    counts = Counter(t.status for t in tasks)
    return (
        f"{counts[TaskStatus.PENDING]} pending, "
        f"{counts[TaskStatus.COMPLETED]} completed"
    )

# src/task_manager/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any

from ..errors import ValidationError


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    pending -> completed is the only transition; completed is terminal.
    """

    PENDING = "pending"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, raw: str | TaskStatus) -> TaskStatus:
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            choices = ", ".join(s.value for s in cls)
            raise ValidationError(f"unknown status {raw!r} (expected one of: {choices})") from None


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, raw: str | Priority) -> Priority:
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ValidationError(f"unknown priority {raw!r} (expected one of: {choices})") from None


def _ts_to_str(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _str_to_ts(raw: Any, field_name: str) -> datetime | None:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise ValueError(f"{field_name} must be a timestamp string, got {type(raw).__name__}")
    value = datetime.fromisoformat(raw)
    # Naive stamps (hand-edited files) are read as local time.
    return value if value.tzinfo is not None else value.astimezone()


@dataclass(slots=True)
class Task:
    id: int
    description: str
    priority: Priority
    status: TaskStatus
    created_at: datetime

    completed_at: datetime | None = None
    due_date: datetime | None = None

    @property
    def is_completed(self) -> bool:
        return self.status is TaskStatus.COMPLETED

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping; optional timestamps are left out while absent."""
        data: dict[str, Any] = {
            "id": self.id,
            "description": self.description,
            "priority": self.priority.value,
            "status": self.status.value,
            "created_at": _ts_to_str(self.created_at),
        }
        if self.completed_at is not None:
            data["completed_at"] = _ts_to_str(self.completed_at)
        if self.due_date is not None:
            data["due_date"] = _ts_to_str(self.due_date)
        return data

    @classmethod
    def from_dict(cls, raw: Any) -> Task:
        """
        Build a Task from one decoded JSON object.

        Raises ValueError/TypeError/KeyError on malformed input; the store
        turns those into CorruptStoreError.
        """
        if not isinstance(raw, dict):
            raise TypeError(f"task entry must be an object, got {type(raw).__name__}")

        task_id = raw["id"]
        if not isinstance(task_id, int) or isinstance(task_id, bool) or task_id <= 0:
            raise ValueError(f"invalid id {task_id!r}")

        description = raw["description"]
        if not isinstance(description, str) or not description.strip():
            raise ValueError(f"task {task_id}: description must be a non-empty string")

        created_at = _str_to_ts(raw["created_at"], "created_at")
        if created_at is None:
            raise ValueError(f"task {task_id}: created_at is required")

        task = cls(
            id=task_id,
            description=description,
            priority=Priority(raw.get("priority") or Priority.MEDIUM),
            status=TaskStatus(raw["status"]),
            created_at=created_at,
            completed_at=_str_to_ts(raw.get("completed_at"), "completed_at"),
            due_date=_str_to_ts(raw.get("due_date"), "due_date"),
        )
        if task.is_completed != (task.completed_at is not None):
            raise ValueError(f"task {task_id}: completed_at must be set iff status is completed")
        if task.completed_at is not None and task.completed_at < task.created_at:
            raise ValueError(f"task {task_id}: completed_at is earlier than created_at")
        return task


@dataclass(frozen=True, slots=True)
class TaskFilter:
    """Restrict listings by status and/or priority; None means any."""

    status: TaskStatus | None = None
    priority: Priority | None = None

    def matches(self, task: Task) -> bool:
        if self.status is not None and task.status is not self.status:
            return False
        if self.priority is not None and task.priority is not self.priority:
            return False
        return True


@dataclass(frozen=True, slots=True)
class CompleteResult:
    task: Task
    # False when the task was already completed and nothing was written.
    changed: bool

# src/task_manager/errors.py

"""Error taxonomy raised by the task store and its helpers."""

from __future__ import annotations

from pathlib import Path


class TaskStoreError(Exception):
    """Base class for every error the store reports to its callers."""


class ValidationError(TaskStoreError):
    """Caller supplied bad input (empty description, unknown priority, bad date)."""


class NotFoundError(TaskStoreError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"task {task_id} not found")
        self.task_id = task_id


class CorruptStoreError(TaskStoreError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"cannot decode task store {path}: {reason}")
        self.path = path
        self.reason = reason


class PersistenceError(TaskStoreError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"cannot access task store {path}: {reason}")
        self.path = path
        self.reason = reason

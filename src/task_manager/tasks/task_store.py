# src/task_manager/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import stat
import tempfile
import time
from collections.abc import Callable, Iterator
from datetime import datetime
from pathlib import Path

from ..errors import CorruptStoreError, NotFoundError, PersistenceError, ValidationError
from .task_models import CompleteResult, Priority, Task, TaskFilter, TaskStatus

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

DEFAULT_FILE_MODE = 0o644


def local_now() -> datetime:
    return datetime.now().astimezone()


class TaskStore:
    """
    JSON file task store.

    The whole collection lives in one pretty-printed JSON array:
    - a missing or empty file is an empty store
    - every mutation rewrites the file via temp file + os.replace
    - nothing is cached between calls (load, mutate, persist)

    Concurrency:
    - mutations hold an exclusive-create lock file (<file>.lock) when
      lock_timeout is not None; readers never lock
    """

    def __init__(
        self,
        path: str | Path = "tasks.json",
        *,
        lock_timeout: float | None = 5.0,
        clock: Clock = local_now,
    ) -> None:
        self._path = Path(path)
        self._lock_path = self._path.with_name(self._path.name + ".lock")
        self._lock_timeout = lock_timeout
        self._clock = clock
        logger.debug("TaskStore ready path=%s lock_timeout=%s", self._path, lock_timeout)

    @classmethod
    def from_settings(cls, settings, *, clock: Clock = local_now) -> TaskStore:
        lock_timeout = settings.lock_timeout_seconds if settings.lock_enabled else None
        return cls(settings.tasks_path, lock_timeout=lock_timeout, clock=clock)

    # ---- low-level helpers ----

    def _load(self) -> list[Task]:
        try:
            text = self._path.read_text("utf-8")
        except FileNotFoundError:
            return []
        except UnicodeDecodeError as exc:
            raise CorruptStoreError(self._path, f"invalid UTF-8: {exc}") from exc
        except OSError as exc:
            raise PersistenceError(self._path, str(exc)) from exc

        if not text.strip():
            return []

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise CorruptStoreError(self._path, f"invalid JSON: {exc}") from exc
        except RecursionError as exc:
            raise CorruptStoreError(self._path, "JSON nested too deeply") from exc

        if not isinstance(data, list):
            raise CorruptStoreError(
                self._path, f"expected a JSON array, got {type(data).__name__}"
            )

        tasks: list[Task] = []
        seen: set[int] = set()
        for index, raw in enumerate(data):
            try:
                task = Task.from_dict(raw)
            except (KeyError, TypeError, ValueError) as exc:
                raise CorruptStoreError(self._path, f"entry #{index}: {exc!r}") from exc
            if task.id in seen:
                raise CorruptStoreError(self._path, f"duplicate id {task.id}")
            seen.add(task.id)
            tasks.append(task)
        return tasks

    def _persist(self, tasks: list[Task]) -> None:
        payload = json.dumps([t.to_dict() for t in tasks], ensure_ascii=False, indent=2) + "\n"
        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            # mkstemp creates 0600; keep the existing mode or use 0644.
            os.chmod(tmp_name, self._file_mode())
            os.replace(tmp_name, self._path)
            tmp_name = None
        except OSError as exc:
            raise PersistenceError(self._path, str(exc)) from exc
        finally:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
        logger.debug("Persisted %d tasks to %s", len(tasks), self._path)

    def _file_mode(self) -> int:
        try:
            return stat.S_IMODE(self._path.stat().st_mode)
        except FileNotFoundError:
            return DEFAULT_FILE_MODE

    @contextlib.contextmanager
    def _locked(self) -> Iterator[None]:
        if self._lock_timeout is None:
            yield
            return

        try:
            self._lock_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise PersistenceError(self._path, str(exc)) from exc

        deadline = time.monotonic() + max(0.0, self._lock_timeout)
        while True:
            try:
                fd = os.open(self._lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
                break
            except FileExistsError:
                if time.monotonic() >= deadline:
                    raise PersistenceError(
                        self._path,
                        f"lock {self._lock_path} held by another process "
                        f"(waited {self._lock_timeout:.1f}s)",
                    ) from None
                time.sleep(0.05)
            except OSError as exc:
                raise PersistenceError(self._path, str(exc)) from exc

        try:
            with contextlib.suppress(OSError):
                os.write(fd, str(os.getpid()).encode("ascii"))
            os.close(fd)
            yield
        finally:
            with contextlib.suppress(OSError):
                os.unlink(self._lock_path)

    # ---- public API ----

    def list_tasks(self, task_filter: TaskFilter | None = None) -> list[Task]:
        tasks = self._load()
        if task_filter is None:
            return tasks
        return [t for t in tasks if task_filter.matches(t)]

    def add_task(
        self,
        description: str,
        *,
        priority: Priority | str = Priority.MEDIUM,
        due_date: datetime | None = None,
    ) -> Task:
        if not description or not description.strip():
            raise ValidationError("description is required")
        prio = Priority.parse(priority)
        if due_date is not None and due_date.tzinfo is None:
            due_date = due_date.astimezone()

        with self._locked():
            tasks = self._load()
            # Size-based ids; the max() guard only matters for hand-edited files.
            next_id = max(len(tasks), max((t.id for t in tasks), default=0)) + 1
            task = Task(
                id=next_id,
                description=description.strip(),
                priority=prio,
                status=TaskStatus.PENDING,
                created_at=self._clock(),
                due_date=due_date,
            )
            self._persist([*tasks, task])

        logger.info("Task added id=%s priority=%s due=%s", task.id, prio.value, due_date)
        return task

    def complete_task(self, task_id: int) -> CompleteResult:
        """
        Mark a task completed.

        Completing an already completed task is a no-op: the file is not
        rewritten and completed_at keeps its first value.
        """
        with self._locked():
            tasks = self._load()
            task = next((t for t in tasks if t.id == task_id), None)
            if task is None:
                raise NotFoundError(task_id)

            if task.is_completed:
                logger.info("Task id=%s already completed at %s", task_id, task.completed_at)
                return CompleteResult(task=task, changed=False)

            now = self._clock()
            task.status = TaskStatus.COMPLETED
            task.completed_at = max(now, task.created_at)
            self._persist(tasks)

        logger.info("Task completed id=%s", task_id)
        return CompleteResult(task=task, changed=True)

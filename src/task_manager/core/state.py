# src/task_manager/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..config import Settings
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Settings are kept on the state so commands never re-read the environment.
    settings: Settings
    task_store: TaskStore

from .task_models import CompleteResult, Priority, Task, TaskFilter, TaskStatus
from .task_store import TaskStore

__all__ = [
    "CompleteResult",
    "Priority",
    "Task",
    "TaskFilter",
    "TaskStatus",
    "TaskStore",
]

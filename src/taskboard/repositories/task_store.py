# Rev 0.7.0
"""Task Store contract shared by the board engine and the concrete repositories."""
from __future__ import annotations
from typing import Optional, Protocol, Sequence

from ..models.entities import Task, TaskFilters


class TaskStoreError(RuntimeError):
    """Raised when the store cannot complete a read or write."""


class TaskNotFoundError(TaskStoreError):
    def __init__(self, task_id: str):
        super().__init__(f"task {task_id} not found")
        self.task_id = task_id


class TaskStore(Protocol):
    """The two calls the board needs; any backend exposing them can drive it."""

    def fetch_tasks(self, filters: Optional[TaskFilters] = None) -> Sequence[Task]: ...

    def update_task_status(self, task_id: str, status: str) -> Task: ...

# Rev 0.7.0: list view + CRUD commands with success/error notices
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from PySide6.QtCore import QObject, Signal

from ..models.entities import CreateTaskInput, Task, TaskFilters, UpdateTaskInput
from ..repositories.task_store import TaskStoreError

log = logging.getLogger(__name__)


def normalize_filter(value: Optional[str]) -> Optional[str]:
    # combos use "all" for "no filter"
    return None if value in (None, "", "all") else value


class TasksViewModel(QObject):
    tasksReloaded = Signal(list)
    statsLoaded = Signal(dict)
    changed = Signal()
    notice = Signal(str)
    errorRaised = Signal(str)

    def __init__(self, tasks_repo):
        super().__init__()
        self._tasks = tasks_repo
        self._filters = TaskFilters()

    # ---- filters
    def set_filters(self, *, status: Optional[str] = None, priority: Optional[str] = None, tags: Optional[List[str]] = None,
                    archived: bool = False) -> None:
        self._filters = TaskFilters(
            status=normalize_filter(status),
            priority=normalize_filter(priority),
            tags=list(tags or []),
            archived=archived,
        )

    @property
    def filters(self) -> TaskFilters:
        return self._filters

    # ---- queries
    def reload(self) -> None:
        try:
            rows = self._tasks.fetch_tasks(self._filters)
        except TaskStoreError as e:
            log.warning("Task list reload failed: %s", e)
            self.errorRaised.emit(f"Failed to load tasks: {e}")
            return
        self.tasksReloaded.emit(list(rows))

    def load_stats(self) -> None:
        try:
            stats = self._tasks.task_stats()
        except TaskStoreError as e:
            log.warning("Stats load failed: %s", e)
            return
        self.statsLoaded.emit(dict(stats))

    def get_task(self, task_id: str) -> Optional[Task]:
        try:
            return self._tasks.fetch_task_by_id(task_id)
        except TaskStoreError:
            return None

    # ---- commands
    def create_task(self, *, title: str, description: str = "", status: str = "todo", priority: str = "medium",
                    tags: Optional[List[str]] = None, image_url: Optional[str] = None) -> Optional[Task]:
        data = CreateTaskInput(title=title, description=description, status=status, priority=priority,
                               tags=list(tags or []), image_url=image_url or None)
        return self._mutate("create", "Task created successfully", lambda: self._tasks.create_task(data))

    def quick_add(self, title: str) -> Optional[Task]:
        if not title.strip():
            return None
        return self.create_task(title=title.strip())

    def update_task(self, task_id: str, **fields: Any) -> Optional[Task]:
        data = UpdateTaskInput(**fields)
        return self._mutate("update", "Task updated successfully", lambda: self._tasks.update_task(task_id, data))

    def delete_task(self, task_id: str) -> bool:
        done = self._mutate("delete", "Task deleted successfully", lambda: self._tasks.delete_task(task_id) or True)
        return bool(done)

    def archive_task(self, task_id: str) -> Optional[Task]:
        return self._mutate("archive", "Task archived successfully", lambda: self._tasks.archive_task(task_id))

    def unarchive_task(self, task_id: str) -> Optional[Task]:
        return self._mutate("unarchive", "Task unarchived successfully", lambda: self._tasks.unarchive_task(task_id))

    # ---- internals
    def _mutate(self, action: str, success: str, fn: Callable[[], Any]) -> Any:
        try:
            result = fn()
        except (TaskStoreError, ValueError) as e:
            log.warning("Failed to %s task: %s", action, e)
            self.errorRaised.emit(f"Failed to {action} task: {e}")
            return None
        self.notice.emit(success)
        self.changed.emit()
        self.reload()
        self.load_stats()
        return result

    @staticmethod
    def stats_percentages(stats: Dict[str, int]) -> Dict[str, int]:
        """Share of the non-archived total per bucket, rounded."""
        total = stats.get("total", 0)
        return {k: (round(v * 100 / total) if total else 0) for k, v in stats.items() if k != "total"}

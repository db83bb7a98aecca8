# Rev 0.7.0
"""Lightweight entities for the task board (schema Rev 0.7.0)"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from .types import TaskStatus, TaskPriority


@dataclass
class Task:
    id: str
    title: str
    description: str = ""
    status: TaskStatus = "todo"
    priority: TaskPriority = "medium"
    tags: list[str] = field(default_factory=list)
    created_at: str = ""          # ISO-8601 UTC
    is_archived: bool = False
    image_url: Optional[str] = None


@dataclass
class TaskFilters:
    """Fetch filters. ``None`` means "any"; archived tasks are hidden unless asked for."""
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    tags: list[str] = field(default_factory=list)
    archived: bool = False


@dataclass
class CreateTaskInput:
    title: str
    description: str = ""
    status: TaskStatus = "todo"
    priority: TaskPriority = "medium"
    tags: list[str] = field(default_factory=list)
    image_url: Optional[str] = None


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()

# None clears these columns; leave them UNSET to keep the stored value
_NULLABLE = frozenset({"image_url"})


@dataclass
class UpdateTaskInput:
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    tags: Optional[list[str]] = None
    is_archived: Optional[bool] = None
    image_url: Optional[str] = UNSET

    def changes(self) -> dict:
        """Only the fields that were actually provided.

        ``None`` means "not provided" except for nullable columns, where it
        clears the stored value.
        """
        return {
            k: v for k, v in self.__dict__.items()
            if v is not UNSET and (v is not None or k in _NULLABLE)
        }


# ---- drop targets -----------------------------------------------------------

@dataclass(frozen=True)
class ColumnTarget:
    """Dropped on a column's empty area."""
    status: TaskStatus


@dataclass(frozen=True)
class TaskTarget:
    """Dropped on another card."""
    task_id: str


DropTarget = Union[ColumnTarget, TaskTarget]

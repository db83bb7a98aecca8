# taskBoard type definitions
# Rev 0.7.0

from __future__ import annotations
from typing import Literal

# Workflow columns, left to right on the board
TaskStatus = Literal["todo", "in_progress", "code_review", "done"]
TaskPriority = Literal["low", "medium", "high", "critical"]
ViewMode = Literal["list", "board"]

STATUSES: tuple[str, ...] = ("todo", "in_progress", "code_review", "done")
PRIORITIES: tuple[str, ...] = ("low", "medium", "high", "critical")

STATUS_LABELS: dict[str, str] = {
    "todo": "To Do",
    "in_progress": "In Progress",
    "code_review": "Code Review",
    "done": "Done",
}

PRIORITY_LABELS: dict[str, str] = {
    "low": "Low",
    "medium": "Medium",
    "high": "High",
    "critical": "Critical",
}


def is_status(value: object) -> bool:
    return value in STATUSES


def is_priority(value: object) -> bool:
    return value in PRIORITIES

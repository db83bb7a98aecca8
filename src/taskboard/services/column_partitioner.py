# Rev 0.7.0
"""Group tasks into the four fixed board columns."""
from __future__ import annotations
from typing import Dict, Iterable, List

from ..models.entities import Task
from ..models.types import STATUSES

Columns = Dict[str, List[Task]]


def empty_columns() -> Columns:
    return {s: [] for s in STATUSES}


def partition(tasks: Iterable[Task]) -> Columns:
    """Every task lands in exactly one column; input order is kept within a column."""
    grouped = empty_columns()
    for task in tasks:
        bucket = grouped.get(task.status)
        if bucket is None:
            raise ValueError(f"task {task.id} has unknown status {task.status!r}")
        bucket.append(task)
    return grouped


def column_ids(columns: Columns) -> Dict[str, List[str]]:
    return {status: [t.id for t in tasks] for status, tasks in columns.items()}

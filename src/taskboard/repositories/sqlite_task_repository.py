# Rev 0.7.0
from __future__ import annotations

import json
import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from ..models.entities import CreateTaskInput, Task, TaskFilters, UpdateTaskInput
from ..models.types import STATUSES, is_priority, is_status
from .task_store import TaskNotFoundError, TaskStoreError

log = logging.getLogger(__name__)

_COLUMNS = "id, title, description, status, priority, tags, created_at, is_archived, image_url"


class SQLiteTaskRepository:
    """
    Task CRUD + filtered listing + stats.
    Every sqlite failure is logged and re-raised as TaskStoreError.
    """

    def __init__(self, db_or_conn: Union[sqlite3.Connection, Any]):
        self._db_or_conn = db_or_conn

    # -------------------------
    # Connection handling
    # -------------------------
    def _conn(self) -> sqlite3.Connection:
        if isinstance(self._db_or_conn, sqlite3.Connection):
            return self._db_or_conn
        conn = getattr(self._db_or_conn, "conn", None)
        if isinstance(conn, sqlite3.Connection):
            return conn
        raise TaskStoreError(
            "SQLiteTaskRepository: could not obtain sqlite3.Connection "
            "(expected .conn on wrapper, or a raw Connection)."
        )

    def _execute(self, action: str, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        try:
            return self._conn().execute(sql, params)
        except sqlite3.Error as e:
            log.error("Error %s: %s", action, e)
            raise TaskStoreError(f"{action} failed: {e}") from e

    @staticmethod
    def _row_to_task(row: Union[sqlite3.Row, tuple]) -> Task:
        (tid, title, description, status, priority, tags, created_at, is_archived, image_url) = tuple(row)
        return Task(
            id=tid,
            title=title,
            description=description or "",
            status=status,
            priority=priority,
            tags=list(json.loads(tags or "[]")),
            created_at=created_at,
            is_archived=bool(is_archived),
            image_url=image_url,
        )

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    @staticmethod
    def _clean_tags(tags: List[str]) -> List[str]:
        out: List[str] = []
        for t in tags:
            t = t.strip()
            if t and t not in out:
                out.append(t)
        return out

    # -------------------------
    # Reads
    # -------------------------
    def fetch_tasks(self, filters: Optional[TaskFilters] = None) -> List[Task]:
        f = filters or TaskFilters()
        where, params = ["is_archived = ?"], [1 if f.archived else 0]
        if f.status is not None:
            where.append("status = ?")
            params.append(f.status)
        if f.priority is not None:
            where.append("priority = ?")
            params.append(f.priority)

        cur = self._execute(
            "fetching tasks",
            f"""
            SELECT {_COLUMNS}
            FROM tasks
            WHERE {' AND '.join(where)}
            ORDER BY created_at DESC, rowid DESC
            """,
            tuple(params),
        )
        tasks = [self._row_to_task(r) for r in cur.fetchall()]
        if f.tags:
            wanted = set(f.tags)
            tasks = [t for t in tasks if wanted.issubset(t.tags)]
        return tasks

    def fetch_task_by_id(self, task_id: str) -> Task:
        cur = self._execute("fetching task", f"SELECT {_COLUMNS} FROM tasks WHERE id = ?", (task_id,))
        row = cur.fetchone()
        if row is None:
            raise TaskNotFoundError(task_id)
        return self._row_to_task(row)

    def task_stats(self) -> Dict[str, int]:
        cur = self._execute(
            "fetching task stats",
            "SELECT status, is_archived, COUNT(*) FROM tasks GROUP BY status, is_archived",
        )
        stats = {"total": 0, "archived": 0, **{s: 0 for s in STATUSES}}
        for status, archived, count in cur.fetchall():
            if archived:
                stats["archived"] += count
                continue
            stats["total"] += count
            stats[status] += count
        return stats

    # -------------------------
    # Writes
    # -------------------------
    def create_task(self, data: CreateTaskInput) -> Task:
        title = (data.title or "").strip()
        if not title:
            raise ValueError("title required")
        self._check_enums(data.status, data.priority)
        task = Task(
            id=str(uuid.uuid4()),
            title=title,
            description=data.description or "",
            status=data.status,
            priority=data.priority,
            tags=self._clean_tags(data.tags),
            created_at=self._now(),
            is_archived=False,
            image_url=data.image_url or None,
        )
        self._execute(
            "creating task",
            f"INSERT INTO tasks({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (task.id, task.title, task.description, task.status, task.priority,
             json.dumps(task.tags), task.created_at, 0, task.image_url),
        )
        log.info("Created task %s (%s)", task.id, task.status)
        return task

    def update_task(self, task_id: str, data: UpdateTaskInput) -> Task:
        changes = data.changes()
        if "title" in changes:
            changes["title"] = changes["title"].strip()
            if not changes["title"]:
                raise ValueError("title required")
        self._check_enums(changes.get("status"), changes.get("priority"))
        if "tags" in changes:
            changes["tags"] = json.dumps(self._clean_tags(changes["tags"]))
        if "is_archived" in changes:
            changes["is_archived"] = 1 if changes["is_archived"] else 0
        if "image_url" in changes:
            changes["image_url"] = (changes["image_url"] or "").strip() or None

        if changes:
            sets = ", ".join(f"{k} = ?" for k in changes)
            cur = self._execute(
                "updating task",
                f"UPDATE tasks SET {sets} WHERE id = ?",
                (*changes.values(), task_id),
            )
            if cur.rowcount == 0:
                raise TaskNotFoundError(task_id)
            log.info("Updated task %s: %s", task_id, ", ".join(changes))
        return self.fetch_task_by_id(task_id)

    def update_task_status(self, task_id: str, status: str) -> Task:
        return self.update_task(task_id, UpdateTaskInput(status=status))

    def delete_task(self, task_id: str) -> None:
        cur = self._execute("deleting task", "DELETE FROM tasks WHERE id = ?", (task_id,))
        if cur.rowcount == 0:
            raise TaskNotFoundError(task_id)
        log.info("Deleted task %s", task_id)

    # Archive a task (soft delete)
    def archive_task(self, task_id: str) -> Task:
        return self.update_task(task_id, UpdateTaskInput(is_archived=True))

    def unarchive_task(self, task_id: str) -> Task:
        return self.update_task(task_id, UpdateTaskInput(is_archived=False))

    @staticmethod
    def _check_enums(status: Optional[str], priority: Optional[str]) -> None:
        if status is not None and not is_status(status):
            raise ValueError(f"unknown status: {status!r}")
        if priority is not None and not is_priority(priority):
            raise ValueError(f"unknown priority: {priority!r}")

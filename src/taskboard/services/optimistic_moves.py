# Rev 0.7.0

"""Optimistic status overrides (Rev 0.7.0)
Masks the round trip of a status update: a dragged card shows in its new
column until a fetched task list reports the same status.
"""
from __future__ import annotations
import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from ..models.entities import Task

log = logging.getLogger(__name__)


class OptimisticMoves:
    def __init__(self, pending: Optional[Dict[str, str]] = None):
        # task_id -> target status; the dict is owned by the caller
        self._pending: Dict[str, str] = pending if pending is not None else {}

    def record_move(self, task_id: str, target_status: str) -> None:
        self._pending[task_id] = target_status

    def pending(self, task_id: str) -> Optional[str]:
        return self._pending.get(task_id)

    def reconcile(self, authoritative: Iterable[Task]) -> List[str]:
        """
        Drop entries the store has caught up with, plus entries whose task is
        gone from the list (archived, deleted or filtered out). Entries for a
        task whose status is anything other than the target stay pending.
        Returns the dropped task ids.
        """
        current = {t.id: t.status for t in authoritative}
        dropped = []
        for task_id, target in list(self._pending.items()):
            status = current.get(task_id)
            if status is None or status == target:
                del self._pending[task_id]
                dropped.append(task_id)
        if dropped:
            log.debug("Reconciled optimistic moves: %s", dropped)
        return dropped

    def apply(self, authoritative: Iterable[Task]) -> List[Task]:
        out: List[Task] = []
        for task in authoritative:
            target = self._pending.get(task.id)
            if target is not None and target != task.status:
                task = replace(task, status=target)
            out.append(task)
        return out

    def clear(self) -> None:
        self._pending.clear()

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._pending

    def __len__(self) -> int:
        return len(self._pending)

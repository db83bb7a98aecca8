# Rev 0.7.0

"""Board drag & drop controller (Rev 0.7.0)

Idle ──drag_start(T)──▶ Dragging(T) ──drag_end(...)──▶ Idle

A drop either reorders cards inside one column (local only) or moves the
card to another column, which records an optimistic override and asks the
store for exactly one status update.
"""
from __future__ import annotations
import logging
from enum import Enum
from typing import Callable, Iterable, Optional

from ..models.entities import ColumnTarget, DropTarget, Task, TaskTarget
from ..models.types import is_status
from .column_partitioner import partition
from .local_reorder import LocalReorder, array_move
from .optimistic_moves import OptimisticMoves

log = logging.getLogger(__name__)

StatusChangeCallback = Callable[[str, str], None]


class DropOutcome(Enum):
    IGNORED = "ignored"
    REORDERED = "reordered"
    MOVED = "moved"


class DragController:
    def __init__(
        self,
        moves: OptimisticMoves,
        reorder: LocalReorder,
        on_status_change_requested: Optional[StatusChangeCallback] = None,
    ):
        self._moves = moves
        self._reorder = reorder
        self._on_status_change_requested = on_status_change_requested
        self._active: Optional[Task] = None

    # ---- state
    @property
    def active_task(self) -> Optional[Task]:
        return self._active

    @property
    def is_dragging(self) -> bool:
        return self._active is not None

    # ---- transitions
    def drag_start(self, task_id: str, tasks: Iterable[Task]) -> bool:
        """Grab ``task_id`` as it is currently displayed. Returns False if refused."""
        if self._active is not None:
            log.debug("drag_start(%s) ignored: %s already being dragged", task_id, self._active.id)
            return False
        for task in self._moves.apply(tasks):
            if task.id == task_id:
                self._active = task
                return True
        log.debug("drag_start(%s) ignored: unknown task", task_id)
        return False

    def cancel(self) -> None:
        self._active = None

    def drag_end(self, active_id: str, target: Optional[DropTarget], tasks: Iterable[Task]) -> DropOutcome:
        active, self._active = self._active, None
        if active is None or active.id != active_id:
            log.debug("drag_end(%s) ignored: no matching drag in progress", active_id)
            return DropOutcome.IGNORED
        if target is None:
            return DropOutcome.IGNORED

        effective = self._moves.apply(tasks)
        by_id = {t.id: t for t in effective}
        dragged = by_id.get(active_id)
        if dragged is None:
            # removed by a refresh while the pointer was down
            return DropOutcome.IGNORED

        if isinstance(target, TaskTarget):
            if target.task_id == active_id:
                return DropOutcome.IGNORED
            over = by_id.get(target.task_id)
            if over is None:
                return DropOutcome.IGNORED
            if over.status == dragged.status:
                return self._reorder_within(dragged, over, effective)
            target_status = over.status
        elif isinstance(target, ColumnTarget):
            if not is_status(target.status):
                return DropOutcome.IGNORED
            target_status = target.status
        else:
            return DropOutcome.IGNORED

        if target_status == dragged.status:
            return DropOutcome.IGNORED
        return self._move_across(dragged, target_status)

    # ---- branches
    def _reorder_within(self, dragged: Task, over: Task, effective: list[Task]) -> DropOutcome:
        column = dragged.status
        ids = [t.id for t in self._reorder.materialize(column, partition(effective)[column])]
        try:
            old_index, new_index = ids.index(dragged.id), ids.index(over.id)
        except ValueError:
            return DropOutcome.IGNORED
        if old_index == new_index:
            return DropOutcome.IGNORED
        self._reorder.set_order(column, array_move(ids, old_index, new_index))
        log.debug("Reordered %s: %s %d -> %d", column, dragged.id, old_index, new_index)
        return DropOutcome.REORDERED

    def _move_across(self, dragged: Task, target_status: str) -> DropOutcome:
        self._moves.record_move(dragged.id, target_status)
        # both orders may now reference a missing card or omit a new one
        self._reorder.clear(dragged.status)
        self._reorder.clear(target_status)
        log.info("Task %s moved %s -> %s", dragged.id, dragged.status, target_status)
        if self._on_status_change_requested is not None:
            self._on_status_change_requested(dragged.id, target_status)
        return DropOutcome.MOVED

# Rev 0.7.0: Board columns with optimistic moves + local reorder
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from PySide6.QtCore import QObject, Signal

from ..models.entities import DropTarget, Task, TaskFilters
from ..repositories.task_store import TaskStore, TaskStoreError
from ..services.board_columns import build_columns
from ..services.column_partitioner import Columns
from ..services.drag_controller import DragController, DropOutcome
from ..services.local_reorder import LocalReorder
from ..services.optimistic_moves import OptimisticMoves
from .tasks_viewmodel import normalize_filter

log = logging.getLogger(__name__)


class BoardViewModel(QObject):
    columnsChanged = Signal(object)           # status -> list[Task]
    statusChangeRequested = Signal(str, str)  # task_id, new status
    statusChanged = Signal(str, str)          # confirmed by the store
    errorRaised = Signal(str)

    def __init__(self, tasks_repo: TaskStore):
        super().__init__()
        self._tasks_repo = tasks_repo
        self._filters = TaskFilters()
        self._tasks: List[Task] = []

        # board state: two plain maps, wrapped by the overlay services
        self._pending_moves: Dict[str, str] = {}
        self._column_orders: Dict[str, List[str]] = {}
        self._moves = OptimisticMoves(self._pending_moves)
        self._reorder = LocalReorder(self._column_orders)
        self._drag = DragController(self._moves, self._reorder, self._queue_status_change)
        self._outbox: List[tuple[str, str]] = []

    # ---- filters
    def set_filters(self, *, status: Optional[str] = None, priority: Optional[str] = None, tags: Optional[List[str]] = None) -> None:
        self._filters = TaskFilters(status=normalize_filter(status), priority=normalize_filter(priority), tags=list(tags or []))

    # ---- queries
    def reload(self) -> None:
        try:
            tasks = self._tasks_repo.fetch_tasks(self._filters)
        except TaskStoreError as e:
            log.warning("Board reload failed: %s", e)
            self.errorRaised.emit(f"Failed to load tasks: {e}")
            return
        self._tasks = list(tasks)
        self._moves.reconcile(self._tasks)
        self._emit_columns()

    def columns(self) -> Columns:
        return build_columns(self._tasks, self._moves, self._reorder)

    def pending_moves(self) -> Dict[str, str]:
        return dict(self._pending_moves)

    def column_orders(self) -> Dict[str, List[str]]:
        return {k: list(v) for k, v in self._column_orders.items()}

    @property
    def active_task(self) -> Optional[Task]:
        return self._drag.active_task

    # ---- drag lifecycle
    def on_drag_start(self, task_id: str) -> bool:
        return self._drag.drag_start(task_id, self._tasks)

    def on_drag_end(self, active_id: str, target: Optional[DropTarget]) -> DropOutcome:
        outcome = self._drag.drag_end(active_id, target, self._tasks)
        if outcome is not DropOutcome.IGNORED:
            self._emit_columns()
        self._flush_status_changes()
        return outcome

    def cancel_drag(self) -> None:
        self._drag.cancel()

    # ---- internals
    def _emit_columns(self) -> None:
        self.columnsChanged.emit(self.columns())

    def _queue_status_change(self, task_id: str, status: str) -> None:
        self._outbox.append((task_id, status))
        self.statusChangeRequested.emit(task_id, status)

    def _flush_status_changes(self) -> None:
        # The override stays pending on failure; the next reload reconciles it.
        while self._outbox:
            task_id, status = self._outbox.pop(0)
            try:
                self._tasks_repo.update_task_status(task_id, status)
            except (TaskStoreError, ValueError) as e:
                log.error("Status update %s -> %s failed: %s", task_id, status, e)
                self.errorRaised.emit(f"Failed to update task: {e}")
                continue
            self.statusChanged.emit(task_id, status)
            self.reload()

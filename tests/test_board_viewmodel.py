# tests/test_board_viewmodel.py
from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Optional, Tuple

import pytest

from taskboard.models.entities import ColumnTarget, Task, TaskFilters, TaskTarget
from taskboard.repositories.task_store import TaskNotFoundError, TaskStoreError
from taskboard.services.column_partitioner import column_ids
from taskboard.services.drag_controller import DropOutcome
from taskboard.viewmodels.board_viewmodel import BoardViewModel

# --- A tiny in-memory stub store just for unit tests ---------------------------

class _StubStore:
    def __init__(self, *tasks: Task):
        self.tasks: Dict[str, Task] = {t.id: t for t in tasks}
        self.updates: List[Tuple[str, str]] = []
        self.fail_updates = False
        self.apply_updates = True
        self.fail_fetch = False
        self.last_filters: Optional[TaskFilters] = None

    def fetch_tasks(self, filters: Optional[TaskFilters] = None) -> List[Task]:
        if self.fail_fetch:
            raise TaskStoreError("offline")
        self.last_filters = filters
        out = [t for t in self.tasks.values() if not t.is_archived]
        if filters and filters.status:
            out = [t for t in out if t.status == filters.status]
        return out

    def update_task_status(self, task_id: str, status: str) -> Task:
        self.updates.append((task_id, status))
        if self.fail_updates:
            raise TaskStoreError("network down")
        if task_id not in self.tasks:
            raise TaskNotFoundError(task_id)
        if self.apply_updates:
            self.tasks[task_id] = replace(self.tasks[task_id], status=status)
        return self.tasks[task_id]


def _task(tid: str, status: str) -> Task:
    return Task(id=tid, title=tid, status=status)


@pytest.fixture()
def store() -> _StubStore:
    return _StubStore(_task("A", "todo"), _task("B", "todo"), _task("C", "done"))


@pytest.fixture()
def vm(qapp, store) -> BoardViewModel:
    model = BoardViewModel(store)
    model.reload()
    return model


def _collect(signal) -> list:
    got: list = []
    signal.connect(lambda *args: got.append(args))
    return got


# --- Tests ---------------------------------------------------------------------

def test_reload_emits_partitioned_columns(vm):
    emitted = _collect(vm.columnsChanged)
    vm.reload()
    (cols,), = emitted
    assert column_ids(cols) == {"todo": ["A", "B"], "in_progress": [], "code_review": [], "done": ["C"]}


def test_filters_map_all_to_none(vm, store):
    vm.set_filters(status="all", priority="high")
    vm.reload()
    assert store.last_filters.status is None
    assert store.last_filters.priority == "high"


def test_cross_column_drop_sends_one_update_and_reconciles(vm, store):
    requested = _collect(vm.statusChangeRequested)
    confirmed = _collect(vm.statusChanged)

    assert vm.on_drag_start("A")
    assert vm.on_drag_end("A", ColumnTarget("in_progress")) is DropOutcome.MOVED

    assert store.updates == [("A", "in_progress")]
    assert requested == [("A", "in_progress")]
    assert confirmed == [("A", "in_progress")]
    assert vm.pending_moves() == {}
    ids = column_ids(vm.columns())
    assert ids["todo"] == ["B"] and ids["in_progress"] == ["A"]


def test_failed_update_keeps_override_pending(vm, store):
    store.fail_updates = True
    errors = _collect(vm.errorRaised)

    vm.on_drag_start("A")
    vm.on_drag_end("A", ColumnTarget("done"))

    assert errors == [("Failed to update task: network down",)]
    assert vm.pending_moves() == {"A": "done"}
    assert column_ids(vm.columns())["done"] == ["A", "C"]

    # still pending after a refresh that shows the old status
    vm.reload()
    assert vm.pending_moves() == {"A": "done"}


def test_lagging_store_is_reconciled_on_later_reload(vm, store):
    store.apply_updates = False
    vm.on_drag_start("B")
    vm.on_drag_end("B", ColumnTarget("code_review"))
    assert vm.pending_moves() == {"B": "code_review"}
    assert column_ids(vm.columns())["code_review"] == ["B"]

    store.tasks["B"] = replace(store.tasks["B"], status="code_review")
    vm.reload()
    assert vm.pending_moves() == {}


def test_archived_task_drops_its_pending_move(vm, store):
    store.fail_updates = True
    vm.on_drag_start("A")
    vm.on_drag_end("A", ColumnTarget("done"))
    store.tasks["A"] = replace(store.tasks["A"], is_archived=True)
    vm.reload()
    assert vm.pending_moves() == {}


def test_same_column_drop_is_local_only(vm, store):
    emitted = _collect(vm.columnsChanged)
    vm.on_drag_start("B")
    assert vm.on_drag_end("B", TaskTarget("A")) is DropOutcome.REORDERED
    assert store.updates == []
    assert vm.column_orders() == {"todo": ["B", "A"]}
    (cols,), = emitted
    assert column_ids(cols)["todo"] == ["B", "A"]


def test_move_clears_orders_of_both_columns(vm, store):
    vm.on_drag_start("B")
    vm.on_drag_end("B", TaskTarget("A"))
    vm.on_drag_start("A")
    vm.on_drag_end("A", TaskTarget("C"))
    assert vm.column_orders() == {}
    assert column_ids(vm.columns())["done"] == ["A", "C"]


def test_drop_outside_board_is_a_noop(vm, store):
    emitted = _collect(vm.columnsChanged)
    vm.on_drag_start("A")
    assert vm.on_drag_end("A", None) is DropOutcome.IGNORED
    assert emitted == [] and store.updates == []
    assert vm.active_task is None


def test_reload_failure_is_reported(vm, store):
    store.fail_fetch = True
    errors = _collect(vm.errorRaised)
    vm.reload()
    assert errors == [("Failed to load tasks: offline",)]

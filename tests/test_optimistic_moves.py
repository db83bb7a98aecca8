# Rev 0.7.0

from __future__ import annotations

from taskboard.models.entities import Task
from taskboard.services.optimistic_moves import OptimisticMoves


def _task(tid: str, status: str, **kw) -> Task:
    return Task(id=tid, title=tid.upper(), status=status, **kw)


def test_record_move_overwrites_previous_target():
    moves = OptimisticMoves()
    moves.record_move("a", "in_progress")
    moves.record_move("a", "done")
    assert moves.pending("a") == "done"
    assert len(moves) == 1


def test_reconcile_drops_entry_once_store_matches():
    moves = OptimisticMoves()
    moves.record_move("a", "in_progress")
    dropped = moves.reconcile([_task("a", "in_progress")])
    assert dropped == ["a"]
    assert "a" not in moves


def test_entry_stays_pending_while_store_lags():
    moves = OptimisticMoves()
    moves.record_move("a", "in_progress")
    authoritative = [_task("a", "todo"), _task("b", "todo")]
    assert moves.reconcile(authoritative) == []
    assert "a" in moves
    view = {t.id: t.status for t in moves.apply(authoritative)}
    assert view == {"a": "in_progress", "b": "todo"}


def test_third_status_keeps_stale_override():
    moves = OptimisticMoves()
    moves.record_move("a", "in_progress")
    moves.reconcile([_task("a", "code_review")])
    assert moves.pending("a") == "in_progress"


def test_vanished_task_is_garbage_collected():
    moves = OptimisticMoves()
    moves.record_move("a", "in_progress")
    moves.record_move("b", "done")
    dropped = moves.reconcile([_task("b", "todo")])
    assert dropped == ["a"]
    assert "a" not in moves and "b" in moves


def test_apply_only_substitutes_status():
    original = _task("a", "todo", description="d", priority="high", tags=["bug"])
    moves = OptimisticMoves()
    moves.record_move("a", "done")
    (shown,) = moves.apply([original])
    assert shown.status == "done"
    assert (shown.id, shown.description, shown.priority, shown.tags) == ("a", "d", "high", ["bug"])
    assert original.status == "todo"


def test_shares_the_callers_mapping():
    pending: dict[str, str] = {}
    OptimisticMoves(pending).record_move("a", "done")
    assert pending == {"a": "done"}

# Rev 0.7.0
from __future__ import annotations
from typing import Iterable

from ..models.entities import Task
from .column_partitioner import Columns, partition
from .local_reorder import LocalReorder
from .optimistic_moves import OptimisticMoves


def build_columns(authoritative: Iterable[Task], moves: OptimisticMoves, reorder: LocalReorder) -> Columns:
    """Store list → optimistic statuses → partition → manual order, per column."""
    grouped = partition(moves.apply(authoritative))
    return {status: reorder.materialize(status, tasks) for status, tasks in grouped.items()}

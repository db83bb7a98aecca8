# Rev 0.7.0
"""Manual card ordering inside a column, kept in memory only."""
from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Sequence, TypeVar

from ..models.entities import Task

T = TypeVar("T")


def array_move(items: Sequence[T], old_index: int, new_index: int) -> List[T]:
    """Remove the item at ``old_index`` and insert it at ``new_index``."""
    out = list(items)
    out.insert(new_index, out.pop(old_index))
    return out


class LocalReorder:
    def __init__(self, orders: Optional[Dict[str, List[str]]] = None):
        # column status -> ordered task ids; the dict is owned by the caller
        self._orders: Dict[str, List[str]] = orders if orders is not None else {}

    def set_order(self, column: str, ordered_ids: Iterable[str]) -> None:
        self._orders[column] = list(ordered_ids)

    def clear(self, column: str) -> None:
        self._orders.pop(column, None)

    def order_for(self, column: str) -> Optional[List[str]]:
        ids = self._orders.get(column)
        return list(ids) if ids is not None else None

    def materialize(self, column: str, tasks: Sequence[Task]) -> List[Task]:
        """
        Remembered order first (stale ids skipped), then every task the order
        does not mention, in its original relative order. Output is always a
        permutation of ``tasks``.
        """
        remembered = self._orders.get(column)
        if not remembered:
            return list(tasks)
        index: Dict[str, int] = {}
        for i, t in enumerate(tasks):
            index.setdefault(t.id, i)
        used = [False] * len(tasks)
        out: List[Task] = []
        for tid in remembered:
            i = index.get(tid)
            if i is not None and not used[i]:
                out.append(tasks[i])
                used[i] = True
        out.extend(t for i, t in enumerate(tasks) if not used[i])
        return out

    def __contains__(self, column: object) -> bool:
        return column in self._orders

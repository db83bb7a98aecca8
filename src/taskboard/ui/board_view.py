# src/taskboard/ui/board_view.py
# Rev 0.7.0: four droppable columns driven by BoardViewModel
from __future__ import annotations

from PySide6.QtCore import Qt, Signal, QMimeData
from PySide6.QtGui import QDrag, QColor, QBrush
from PySide6.QtWidgets import (
    QWidget, QHBoxLayout, QVBoxLayout, QLabel, QListWidget, QListWidgetItem,
    QAbstractItemView, QFrame
)

from ..models.entities import ColumnTarget, TaskTarget, Task
from ..models.types import STATUSES, STATUS_LABELS, PRIORITY_LABELS
from ..viewmodels.board_viewmodel import BoardViewModel

TASK_MIME = "application/x-taskboard-task"

_PRIORITY_COLORS = {"low": "#64748b", "medium": "#2563eb", "high": "#d97706", "critical": "#dc2626"}


class _CardList(QListWidget):
    """One column's cards. Qt drag events are translated into view-model calls."""
    taskActivated = Signal(str)

    def __init__(self, status: str, vm: BoardViewModel, parent=None):
        super().__init__(parent)
        self._status = status
        self._vm = vm
        self.setSelectionMode(QAbstractItemView.SingleSelection)
        self.setDragEnabled(True)
        self.setAcceptDrops(True)
        self.setDropIndicatorShown(True)
        self.setDragDropMode(QAbstractItemView.DragDrop)
        self.setDefaultDropAction(Qt.MoveAction)
        self.setWordWrap(True)
        self.setSpacing(4)
        self.setMinimumHeight(420)
        self.itemDoubleClicked.connect(self._on_double_clicked)

    def set_tasks(self, tasks: list[Task]) -> None:
        self.clear()
        for t in tasks:
            lines = [t.title, PRIORITY_LABELS.get(t.priority, t.priority)]
            if t.tags:
                lines[-1] += "  ·  " + ", ".join(f"#{tag}" for tag in t.tags)
            item = QListWidgetItem("\n".join(lines))
            item.setData(Qt.UserRole, t.id)
            item.setToolTip(t.description or t.title)
            item.setForeground(QBrush(QColor(_PRIORITY_COLORS.get(t.priority, "#111827"))))
            self.addItem(item)

    # ---- drag source
    def startDrag(self, supported_actions):
        item = self.currentItem()
        if item is None:
            return
        task_id = item.data(Qt.UserRole)
        if not self._vm.on_drag_start(task_id):
            return
        mime = QMimeData()
        mime.setData(TASK_MIME, task_id.encode("utf-8"))
        drag = QDrag(self)
        drag.setMimeData(mime)
        drag.setPixmap(self.viewport().grab(self.visualItemRect(item)))
        drag.exec(Qt.MoveAction)
        # released outside every column
        if self._vm.active_task is not None:
            self._vm.on_drag_end(task_id, None)

    # ---- drop target
    def dragEnterEvent(self, e):
        if e.mimeData().hasFormat(TASK_MIME):
            e.acceptProposedAction()
        else:
            e.ignore()

    def dragMoveEvent(self, e):
        if e.mimeData().hasFormat(TASK_MIME):
            e.acceptProposedAction()
        else:
            e.ignore()

    def dropEvent(self, e):
        if not e.mimeData().hasFormat(TASK_MIME):
            e.ignore()
            return
        task_id = bytes(e.mimeData().data(TASK_MIME)).decode("utf-8")
        over = self.itemAt(e.position().toPoint())
        target = TaskTarget(over.data(Qt.UserRole)) if over is not None else ColumnTarget(self._status)
        e.acceptProposedAction()
        self._vm.on_drag_end(task_id, target)

    def _on_double_clicked(self, item: QListWidgetItem):
        self.taskActivated.emit(item.data(Qt.UserRole))


class BoardView(QWidget):
    taskActivated = Signal(str)

    def __init__(self, vm: BoardViewModel, parent=None):
        super().__init__(parent)
        self._vm = vm
        self._lists: dict[str, _CardList] = {}
        self._counts: dict[str, QLabel] = {}

        root = QHBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        for status in STATUSES:
            frame = QFrame(self)
            frame.setFrameShape(QFrame.StyledPanel)
            col = QVBoxLayout(frame)

            header = QHBoxLayout()
            title = QLabel(f"<b>{STATUS_LABELS[status]}</b>")
            count = QLabel("0")
            count.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
            header.addWidget(title, 1)
            header.addWidget(count)
            col.addLayout(header)

            cards = _CardList(status, vm, frame)
            cards.taskActivated.connect(self.taskActivated)
            col.addWidget(cards, 1)

            self._lists[status] = cards
            self._counts[status] = count
            root.addWidget(frame, 1)

        self._vm.columnsChanged.connect(self._on_columns_changed)

    def _on_columns_changed(self, columns: dict) -> None:
        for status in STATUSES:
            tasks = columns.get(status, [])
            self._lists[status].set_tasks(tasks)
            self._counts[status].setText(str(len(tasks)))

# src/taskboard/ui/tasks_view.py
# Rev 0.7.0: list view: Title | Status | Priority | Tags | Created
from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QBrush, QColor
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QTableWidget, QTableWidgetItem, QHeaderView,
    QHBoxLayout, QPushButton, QMessageBox
)

from ..models.entities import Task
from ..models.types import STATUS_LABELS, PRIORITY_LABELS
from ..utils.tag_colors import tag_color
from ..viewmodels.tasks_viewmodel import TasksViewModel


class TasksView(QWidget):
    editRequested = Signal(str)

    def __init__(self, vm: TasksViewModel, parent=None):
        super().__init__(parent)
        self._vm = vm
        self._archived: set[str] = set()

        # ---------- Controls ----------
        self._btn_edit = QPushButton("Edit")
        self._btn_archive = QPushButton("Archive")
        self._btn_delete = QPushButton("Delete")
        for b in (self._btn_edit, self._btn_archive, self._btn_delete):
            b.setEnabled(False)

        # ---------- Table ----------
        self._table = QTableWidget(0, 5)
        self._table.setHorizontalHeaderLabels(["Title", "Status", "Priority", "Tags", "Created"])
        self._table.setEditTriggers(QTableWidget.NoEditTriggers)
        self._table.setSelectionBehavior(QTableWidget.SelectRows)
        self._table.setSelectionMode(QTableWidget.SingleSelection)
        self._table.setAlternatingRowColors(True)
        self._table.setWordWrap(False)
        self._table.verticalHeader().setVisible(False)
        self._table.itemDoubleClicked.connect(self._on_item_double_clicked)
        self._table.itemSelectionChanged.connect(self._on_selection_changed)

        hdr = self._table.horizontalHeader()
        hdr.setSectionResizeMode(0, QHeaderView.Stretch)            # Title
        hdr.setSectionResizeMode(1, QHeaderView.ResizeToContents)   # Status
        hdr.setSectionResizeMode(2, QHeaderView.ResizeToContents)   # Priority
        hdr.setSectionResizeMode(3, QHeaderView.ResizeToContents)   # Tags
        hdr.setSectionResizeMode(4, QHeaderView.ResizeToContents)   # Created

        top_bar = QHBoxLayout()
        top_bar.addWidget(self._btn_edit)
        top_bar.addWidget(self._btn_archive)
        top_bar.addWidget(self._btn_delete)
        top_bar.addStretch(1)

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.addLayout(top_bar)
        root.addWidget(self._table, 1)

        self._btn_edit.clicked.connect(self._on_edit_clicked)
        self._btn_archive.clicked.connect(self._on_archive_clicked)
        self._btn_delete.clicked.connect(self._on_delete_clicked)

        self._vm.tasksReloaded.connect(self._render)

    # ---------- Internals ----------
    def _render(self, rows: list[Task]):
        self._archived = {t.id for t in rows if t.is_archived}
        self._table.setRowCount(len(rows))
        for r, task in enumerate(rows):
            cells = [
                task.title,
                STATUS_LABELS.get(task.status, task.status),
                PRIORITY_LABELS.get(task.priority, task.priority),
                ", ".join(task.tags),
                (task.created_at or "").split("T")[0],
            ]
            for c, text in enumerate(cells):
                it = QTableWidgetItem(text)
                it.setData(Qt.UserRole, task.id)
                if c == 0 and task.description:
                    it.setToolTip(task.description)
                if c == 3 and task.tags:
                    bg, fg = tag_color(task.tags[0])
                    it.setBackground(QBrush(QColor(bg)))
                    it.setForeground(QBrush(QColor(fg)))
                self._table.setItem(r, c, it)
        self._on_selection_changed()

    def _selected_task_id(self) -> str | None:
        items = self._table.selectedItems()
        return items[0].data(Qt.UserRole) if items else None

    def _on_selection_changed(self):
        tid = self._selected_task_id()
        for b in (self._btn_edit, self._btn_archive, self._btn_delete):
            b.setEnabled(tid is not None)
        self._btn_archive.setText("Unarchive" if tid in self._archived else "Archive")

    def _on_item_double_clicked(self, item: QTableWidgetItem):
        if item:
            self.editRequested.emit(item.data(Qt.UserRole))

    def _on_edit_clicked(self):
        tid = self._selected_task_id()
        if tid is not None:
            self.editRequested.emit(tid)

    def _on_archive_clicked(self):
        tid = self._selected_task_id()
        if tid in self._archived:
            self._vm.unarchive_task(tid)
        elif tid is not None:
            self._vm.archive_task(tid)

    def _on_delete_clicked(self):
        tid = self._selected_task_id()
        if tid is None:
            return
        answer = QMessageBox.question(
            self, "Delete Task",
            "Are you sure you want to delete this task? This action cannot be undone.",
        )
        if answer == QMessageBox.Yes:
            self._vm.delete_task(tid)

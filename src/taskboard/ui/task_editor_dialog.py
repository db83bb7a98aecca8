# src/taskboard/ui/task_editor_dialog.py
# Rev 0.7.0: create / edit form
from __future__ import annotations
from typing import Optional

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QTextEdit,
    QDialogButtonBox, QComboBox, QLabel, QWidget
)
from PySide6.QtCore import Qt

from ..models.entities import Task
from ..models.types import STATUSES, STATUS_LABELS, PRIORITIES, PRIORITY_LABELS
from .window_mode import lock_dialog_fixed


def parse_tags(text: str) -> list[str]:
    """Comma separated input → unique, trimmed tags in entry order."""
    out: list[str] = []
    for raw in text.split(","):
        tag = raw.strip()
        if tag and tag not in out:
            out.append(tag)
    return out


class TaskEditorDialog(QDialog):
    """
    values() returns a dict with:
      title, description, status, priority, tags, image_url
    """

    def __init__(self, parent: QWidget | None = None, *, task: Optional[Task] = None):
        super().__init__(parent)
        self.setWindowTitle("Edit Task" if task else "Create New Task")

        self._title = QLineEdit(task.title if task else "")
        self._title.setPlaceholderText("Enter task title...")

        self._desc = QTextEdit()
        self._desc.setAcceptRichText(False)
        self._desc.setPlainText(task.description if task else "")
        self._desc.setPlaceholderText("Add a detailed description (Markdown supported)...")

        self._cmb_status = QComboBox()
        for s in STATUSES:
            self._cmb_status.addItem(STATUS_LABELS[s], s)
        self._cmb_status.setCurrentIndex(max(0, self._cmb_status.findData(task.status if task else "todo")))

        self._cmb_priority = QComboBox()
        for p in PRIORITIES:
            self._cmb_priority.addItem(PRIORITY_LABELS[p], p)
        self._cmb_priority.setCurrentIndex(max(0, self._cmb_priority.findData(task.priority if task else "medium")))

        self._tags = QLineEdit(", ".join(task.tags) if task else "")
        self._tags.setPlaceholderText("bug, feature, refactor")

        self._image = QLineEdit((task.image_url or "") if task else "")
        self._image.setPlaceholderText("https://…")

        self._error = QLabel("")
        self._error.setStyleSheet("color: #dc2626;")

        form = QFormLayout()
        form.addRow("Title:", self._title)
        form.addRow("Description:", self._desc)
        form.addRow(QLabel("<hr/>"))
        form.addRow("Status:", self._cmb_status)
        form.addRow("Priority:", self._cmb_priority)
        form.addRow("Tags:", self._tags)
        form.addRow("Image URL:", self._image)

        btns = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        btns.button(QDialogButtonBox.Ok).setText("Update Task" if task else "Create Task")
        btns.accepted.connect(self._on_accept)
        btns.rejected.connect(self.reject)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addWidget(self._error)
        root.addWidget(btns)

        lock_dialog_fixed(self, width_ratio=0.45, height_ratio=0.6)
        self._title.setFocus(Qt.OtherFocusReason)

    def _on_accept(self):
        if not self._title.text().strip():
            self._error.setText("Title is required")
            return
        self.accept()

    def values(self) -> dict:
        return {
            "title": self._title.text().strip(),
            "description": self._desc.toPlainText().strip(),
            "status": self._cmb_status.currentData(),
            "priority": self._cmb_priority.currentData(),
            "tags": parse_tags(self._tags.text()),
            "image_url": self._image.text().strip() or None,
        }

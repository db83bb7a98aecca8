# Rev 0.7.0

# src/taskboard/ui/quick_add.py
from PySide6.QtCore import Signal
from PySide6.QtWidgets import QWidget, QHBoxLayout, QLineEdit, QPushButton


class QuickAddBar(QWidget):
    """Single-line "type a title, press Enter" task creation."""
    submitted = Signal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.title = QLineEdit(self);  self.title.setPlaceholderText("Quick add a task... (press Enter)")
        self.btn = QPushButton("Add", self);  self.btn.setEnabled(False)
        self.title.textChanged.connect(lambda t: self.btn.setEnabled(bool(t.strip())))
        self.title.returnPressed.connect(self._submit); self.btn.clicked.connect(self._submit)

        lay = QHBoxLayout(self)
        lay.setContentsMargins(0, 0, 0, 0)
        lay.addWidget(self.title, 1); lay.addWidget(self.btn)

    def _submit(self):
        text = self.title.text().strip()
        if not text:
            return
        self.submitted.emit(text)
        self.title.clear()

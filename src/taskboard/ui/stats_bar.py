# Rev 0.7.0
from __future__ import annotations

from PySide6.QtWidgets import QWidget, QHBoxLayout, QFrame, QVBoxLayout, QLabel, QProgressBar

from ..viewmodels.tasks_viewmodel import TasksViewModel

# (stats key, label, accent)
_CARDS = (
    ("total", "Total", "#7c3aed"),
    ("todo", "To Do", "#64748b"),
    ("in_progress", "In Progress", "#2563eb"),
    ("code_review", "Code Review", "#d97706"),
    ("done", "Done", "#059669"),
    ("archived", "Archived", "#e11d48"),
)


class StatsBar(QWidget):
    def __init__(self, vm: TasksViewModel, parent=None):
        super().__init__(parent)
        self._values: dict[str, QLabel] = {}
        self._bars: dict[str, QProgressBar] = {}
        self._total_hint = QLabel("")

        row = QHBoxLayout(self)
        row.setContentsMargins(0, 0, 0, 0)
        for key, label, accent in _CARDS:
            card = QFrame(self)
            card.setFrameShape(QFrame.StyledPanel)
            card.setStyleSheet(f"QFrame {{ border-left: 4px solid {accent}; }}")
            lay = QVBoxLayout(card)
            lay.addWidget(QLabel(label.upper()))
            value = QLabel("–")
            value.setStyleSheet(f"font-size: 22px; font-weight: 800; color: {accent}; border: none;")
            lay.addWidget(value)
            self._values[key] = value
            if key == "total":
                lay.addWidget(self._total_hint)
            else:
                bar = QProgressBar(card)
                bar.setRange(0, 100)
                bar.setTextVisible(True)
                bar.setMaximumHeight(10)
                lay.addWidget(bar)
                self._bars[key] = bar
            row.addWidget(card, 1)

        vm.statsLoaded.connect(self.set_stats)

    def set_stats(self, stats: dict) -> None:
        percentages = TasksViewModel.stats_percentages(stats)
        for key, value in self._values.items():
            value.setText(str(stats.get(key, 0)))
        for key, bar in self._bars.items():
            bar.setValue(percentages.get(key, 0))
        self._total_hint.setText(f"{stats.get('done', 0)} completed")

# Rev 0.7.0
# taskBoard main window: stats, quick add, filters, list/board views

from __future__ import annotations
import logging
from pathlib import Path

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QComboBox,
    QStackedWidget, QDockWidget, QButtonGroup, QDialog, QLabel, QCheckBox
)

from ..models.types import STATUSES, STATUS_LABELS, PRIORITIES, PRIORITY_LABELS
from ..utils.config import save_settings
from ..viewmodels.board_viewmodel import BoardViewModel
from ..viewmodels.tasks_viewmodel import TasksViewModel
from .board_view import BoardView
from .diagnostics_panel import DiagnosticsPanel
from .quick_add import QuickAddBar
from .stats_bar import StatsBar
from .task_editor_dialog import TaskEditorDialog
from .tasks_view import TasksView

log = logging.getLogger(__name__)

_NOTICE_MS = 4000


class MainWindow(QMainWindow):
    def __init__(self, *, tasks_repo, settings: dict, logfile: Path | str | None = None, parent=None):
        super().__init__(parent)
        self._settings = settings
        self.setWindowTitle("taskBoard")

        self._tasks_vm = TasksViewModel(tasks_repo)
        self._board_vm = BoardViewModel(tasks_repo)

        # ---- central ----
        central = QWidget(self)
        v = QVBoxLayout(central)

        v.addWidget(StatsBar(self._tasks_vm, central))

        self._quick_add = QuickAddBar(central)
        self._quick_add.submitted.connect(self._tasks_vm.quick_add)
        v.addWidget(self._quick_add)

        # filters | view toggle | new
        bar = QHBoxLayout()
        self._cmb_status = QComboBox()
        self._cmb_status.addItem("All Statuses", "all")
        for s in STATUSES:
            self._cmb_status.addItem(STATUS_LABELS[s], s)
        self._cmb_priority = QComboBox()
        self._cmb_priority.addItem("All Priorities", "all")
        for p in PRIORITIES:
            self._cmb_priority.addItem(PRIORITY_LABELS[p], p)
        self._cmb_status.currentIndexChanged.connect(self._apply_filters)
        self._cmb_priority.currentIndexChanged.connect(self._apply_filters)
        bar.addWidget(self._cmb_status)
        bar.addWidget(self._cmb_priority)
        # list view only; the board always shows live tasks
        self._chk_archived = QCheckBox("Show archived")
        self._chk_archived.toggled.connect(self._apply_filters)
        bar.addWidget(self._chk_archived)
        bar.addStretch(1)

        self._btn_list = QPushButton("List")
        self._btn_board = QPushButton("Board")
        self._view_group = QButtonGroup(self)
        for i, b in enumerate((self._btn_list, self._btn_board)):
            b.setCheckable(True)
            self._view_group.addButton(b, i)
            bar.addWidget(b)
        self._view_group.idClicked.connect(self._set_view_index)

        self._btn_new = QPushButton("New Task")
        self._btn_new.clicked.connect(self._on_new_task)
        bar.addWidget(self._btn_new)
        v.addLayout(bar)

        # views
        self._stack = QStackedWidget(central)
        self._list_view = TasksView(self._tasks_vm, self._stack)
        self._board_view = BoardView(self._board_vm, self._stack)
        self._stack.addWidget(self._list_view)
        self._stack.addWidget(self._board_view)
        v.addWidget(self._stack, 1)
        self.setCentralWidget(central)

        self._list_view.editRequested.connect(self._on_edit_task)
        self._board_view.taskActivated.connect(self._on_edit_task)

        # ---- notices (toast analog) ----
        self._notice = QLabel("")
        self.statusBar().addPermanentWidget(self._notice, 1)
        self._tasks_vm.notice.connect(self._show_notice)
        self._tasks_vm.errorRaised.connect(self._show_error)
        self._board_vm.errorRaised.connect(self._show_error)

        # keep both views fed from the same store
        self._tasks_vm.changed.connect(self._board_vm.reload)
        self._board_vm.statusChanged.connect(self._on_board_status_changed)

        # ---- diagnostics dock ----
        self._dock = QDockWidget("Diagnostics", self)
        self._dock.setObjectName("DiagnosticsDock")
        self._dock.setAllowedAreas(Qt.BottomDockWidgetArea | Qt.TopDockWidgetArea)
        self._dock.setWidget(DiagnosticsPanel(logfile, self))
        self.addDockWidget(Qt.BottomDockWidgetArea, self._dock)
        self._dock.setVisible(bool(settings["ui"].get("diagnostics_dock_visible")))

        # initial state
        mode = settings["ui"].get("view_mode", "list")
        self._set_view_index(1 if mode == "board" else 0)
        self._apply_filters()
        self._tasks_vm.load_stats()

    # -------------------- views / filters --------------------

    def _set_view_index(self, index: int) -> None:
        self._stack.setCurrentIndex(index)
        self._view_group.button(index).setChecked(True)
        self._settings["ui"]["view_mode"] = "board" if index == 1 else "list"

    def _apply_filters(self, *_):
        status = self._cmb_status.currentData()
        priority = self._cmb_priority.currentData()
        self._tasks_vm.set_filters(status=status, priority=priority, archived=self._chk_archived.isChecked())
        self._board_vm.set_filters(status=status, priority=priority)
        self._tasks_vm.reload()
        self._board_vm.reload()

    def _on_board_status_changed(self, task_id: str, status: str):
        self._tasks_vm.reload()
        self._tasks_vm.load_stats()

    # -------------------- dialogs --------------------

    def _on_new_task(self):
        dlg = TaskEditorDialog(self)
        if dlg.exec() == QDialog.Accepted:
            self._tasks_vm.create_task(**dlg.values())

    def _on_edit_task(self, task_id: str):
        task = self._tasks_vm.get_task(task_id)
        if task is None:
            self._show_error("Task no longer exists")
            return
        dlg = TaskEditorDialog(self, task=task)
        if dlg.exec() == QDialog.Accepted:
            self._tasks_vm.update_task(task_id, **dlg.values())

    # -------------------- notices --------------------

    def _show_notice(self, text: str):
        self._notice.setStyleSheet("")
        self._notice.setText(text)
        QTimer.singleShot(_NOTICE_MS, lambda: self._notice.setText(""))

    def _show_error(self, text: str):
        self._notice.setStyleSheet("color: #dc2626;")
        self._notice.setText(text)

    # -------------------- lifecycle --------------------

    def closeEvent(self, ev):
        self._settings["main_window"].update(
            width=self.width(), height=self.height(), is_maximized=self.isMaximized()
        )
        self._settings["ui"]["diagnostics_dock_visible"] = self._dock.isVisible()
        try:
            save_settings(self._settings)
        except OSError as e:
            log.warning("Could not save settings: %s", e)
        super().closeEvent(ev)

# Rev 0.7.0

# src/taskboard/main.py  (Rev 0.7.0)
import logging
import sys
from PySide6.QtGui import QGuiApplication, QFont
from PySide6.QtCore import Qt, QCoreApplication
from PySide6.QtWidgets import QApplication

from .repositories.db import Database
from .repositories.sqlite_task_repository import SQLiteTaskRepository
from .ui.main_window import MainWindow
from .ui.window_mode import restore_window
from .utils.config import load_settings
from .utils.logging_setup import setup_logging
from .utils.paths import DB_PATH, ensure_dirs

log = logging.getLogger(__name__)


def _build_repository(db_path) -> tuple[Database, SQLiteTaskRepository]:
    db = Database(db_path)
    db.run_migrations()
    return db, SQLiteTaskRepository(db)


def main():
    QGuiApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )
    app = QApplication(sys.argv)
    QCoreApplication.setOrganizationName("taskboard")
    QCoreApplication.setApplicationName("taskBoard")

    ensure_dirs()
    logfile = setup_logging("taskBoard")
    settings = load_settings()

    # --- DI wiring ---
    db, tasks_repo = _build_repository(DB_PATH)

    # --- UI ---
    win = MainWindow(tasks_repo=tasks_repo, settings=settings, logfile=logfile)
    restore_window(win, settings["main_window"])
    app.setFont(QFont("Sans Serif", 10))

    try:
        return app.exec()
    finally:
        db.close()
        log.info("taskBoard closed")

if __name__ == "__main__":
    sys.exit(main())

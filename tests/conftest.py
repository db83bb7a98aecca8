# Rev 0.7.0

"""Pytest fixtures for taskBoard (Rev 0.7.0)"""
from __future__ import annotations
import os
import pytest
from pathlib import Path

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication

from taskboard.repositories.db import Database
from taskboard.repositories.sqlite_task_repository import SQLiteTaskRepository




@pytest.fixture(scope="session")
def qapp():
    # widgets need a full QApplication; offscreen keeps CI headless
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture()
def db(tmp_path: Path):
    database = Database(path=tmp_path / "test.db")
    try:
        database.run_migrations()
        yield database
    finally:
        database.close()


@pytest.fixture()
def repo(db: Database) -> SQLiteTaskRepository:
    return SQLiteTaskRepository(db)

# tests/test_sqlite_task_repository.py
# Integration test for SQLiteTaskRepository against the real migrations

from __future__ import annotations

import sqlite3

import pytest

from taskboard.models.entities import CreateTaskInput, TaskFilters, UpdateTaskInput
from taskboard.repositories.sqlite_task_repository import SQLiteTaskRepository
from taskboard.repositories.task_store import TaskNotFoundError, TaskStoreError


def seed(repo: SQLiteTaskRepository, title: str, **kw):
    return repo.create_task(CreateTaskInput(title=title, **kw))


# --- migrations ----------------------------------------------------------------

def test_migrations_are_recorded_once(db):
    assert "0001_tasks.sql" in db.applied()
    assert db.run_migrations() == []


# --- create / read -------------------------------------------------------------

def test_create_applies_defaults(repo):
    t = seed(repo, "  Write docs  ")
    assert t.title == "Write docs"
    assert (t.description, t.status, t.priority, t.tags, t.is_archived) == ("", "todo", "medium", [], False)
    assert t.id and t.created_at
    assert repo.fetch_task_by_id(t.id) == t


def test_create_rejects_blank_title_and_bad_enums(repo):
    with pytest.raises(ValueError):
        seed(repo, "   ")
    with pytest.raises(ValueError):
        seed(repo, "x", status="blocked")
    with pytest.raises(ValueError):
        seed(repo, "x", priority="urgent")


def test_tags_are_trimmed_and_unique(repo):
    t = seed(repo, "Tagged", tags=["bug", " bug", "ui", ""])
    assert repo.fetch_task_by_id(t.id).tags == ["bug", "ui"]


def test_fetch_newest_first_and_hides_archived(repo):
    a = seed(repo, "A")
    b = seed(repo, "B")
    c = seed(repo, "C")
    repo.archive_task(b.id)
    assert [t.id for t in repo.fetch_tasks()] == [c.id, a.id]
    assert [t.id for t in repo.fetch_tasks(TaskFilters(archived=True))] == [b.id]


def test_fetch_filters(repo):
    seed(repo, "A", status="done", priority="high", tags=["bug", "ui"])
    seed(repo, "B", status="done", priority="low", tags=["bug"])
    seed(repo, "C", status="todo", priority="high", tags=["ui"])

    def titles(**kw):
        return sorted(t.title for t in repo.fetch_tasks(TaskFilters(**kw)))

    assert titles(status="done") == ["A", "B"]
    assert titles(priority="high") == ["A", "C"]
    assert titles(tags=["bug"]) == ["A", "B"]
    assert titles(tags=["bug", "ui"]) == ["A"]
    assert titles(status="todo", priority="low") == []


def test_fetch_missing_raises_not_found(repo):
    with pytest.raises(TaskNotFoundError):
        repo.fetch_task_by_id("missing")


# --- update / delete -----------------------------------------------------------

def test_update_only_touches_provided_fields(repo):
    t = seed(repo, "A", description="keep", priority="low")
    updated = repo.update_task(t.id, UpdateTaskInput(title="A2", tags=["x"]))
    assert (updated.title, updated.description, updated.priority, updated.tags) == ("A2", "keep", "low", ["x"])


def test_update_image_url_keep_set_and_clear(repo):
    t = seed(repo, "A", image_url="https://a/b.png")
    assert repo.update_task(t.id, UpdateTaskInput(title="A2")).image_url == "https://a/b.png"
    assert repo.update_task(t.id, UpdateTaskInput(image_url="https://c/d.png")).image_url == "https://c/d.png"
    assert repo.update_task(t.id, UpdateTaskInput(image_url=None)).image_url is None
    assert repo.fetch_task_by_id(t.id).image_url is None


def test_update_input_changes_distinguishes_unset_from_none():
    assert UpdateTaskInput(title="x").changes() == {"title": "x"}
    assert UpdateTaskInput(title=None, image_url=None).changes() == {"image_url": None}


def test_update_task_status(repo):
    t = seed(repo, "A")
    assert repo.update_task_status(t.id, "code_review").status == "code_review"
    with pytest.raises(ValueError):
        repo.update_task_status(t.id, "shipped")
    with pytest.raises(TaskNotFoundError):
        repo.update_task_status("missing", "done")


def test_archive_roundtrip_and_delete(repo):
    t = seed(repo, "A")
    assert repo.archive_task(t.id).is_archived is True
    assert repo.unarchive_task(t.id).is_archived is False
    repo.delete_task(t.id)
    with pytest.raises(TaskNotFoundError):
        repo.delete_task(t.id)


def test_stats_split_archived_from_workflow(repo):
    seed(repo, "A")
    seed(repo, "B", status="in_progress")
    seed(repo, "C", status="done")
    d = seed(repo, "D", status="done")
    repo.archive_task(d.id)
    assert repo.task_stats() == {
        "total": 3, "archived": 1,
        "todo": 1, "in_progress": 1, "code_review": 0, "done": 1,
    }


def test_sqlite_errors_are_wrapped(db):
    repo = SQLiteTaskRepository(db)
    db.conn.execute("DROP TABLE tasks")
    with pytest.raises(TaskStoreError) as ei:
        repo.fetch_tasks()
    assert isinstance(ei.value.__cause__, sqlite3.Error)

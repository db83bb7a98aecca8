# tests/test_tasks_viewmodel.py
from __future__ import annotations

import pytest

from taskboard.viewmodels.tasks_viewmodel import TasksViewModel


def _collect(signal) -> list:
    got: list = []
    signal.connect(lambda *args: got.append(args))
    return got


@pytest.fixture()
def vm(qapp, repo) -> TasksViewModel:
    return TasksViewModel(repo)


def test_create_emits_notice_and_refreshes(vm, repo):
    notices = _collect(vm.notice)
    lists = _collect(vm.tasksReloaded)
    stats = _collect(vm.statsLoaded)
    changed = _collect(vm.changed)

    task = vm.create_task(title="Ship it", priority="high", tags=["feature"])

    assert task is not None and task.priority == "high"
    assert notices == [("Task created successfully",)]
    assert changed == [()]
    ((rows,),) = lists
    assert [t.title for t in rows] == ["Ship it"]
    ((s,),) = stats
    assert s["total"] == 1 and s["todo"] == 1


def test_quick_add_ignores_blank_titles(vm, repo):
    assert vm.quick_add("   ") is None
    assert vm.quick_add("  Buy milk ").title == "Buy milk"
    assert [t.title for t in repo.fetch_tasks()] == ["Buy milk"]


def test_validation_failure_surfaces_as_error(vm):
    errors = _collect(vm.errorRaised)
    assert vm.create_task(title="") is None
    assert errors == [("Failed to create task: title required",)]


def test_update_archive_and_delete(vm, repo):
    t = vm.create_task(title="A")
    assert vm.update_task(t.id, status="done", description="finished").status == "done"
    assert vm.archive_task(t.id).is_archived
    assert repo.fetch_tasks() == []
    assert vm.unarchive_task(t.id).is_archived is False
    assert vm.delete_task(t.id) is True
    assert vm.get_task(t.id) is None


def test_editing_can_clear_image_url(vm, repo):
    t = vm.create_task(title="A", image_url="https://a/b.png")
    notices = _collect(vm.notice)
    vm.update_task(t.id, title="A", description="", status="todo", priority="medium", tags=[], image_url=None)
    assert notices == [("Task updated successfully",)]
    assert repo.fetch_task_by_id(t.id).image_url is None


def test_archived_filter_lists_only_archived_tasks(vm, repo):
    keep = vm.create_task(title="Keep")
    gone = vm.create_task(title="Gone")
    vm.archive_task(gone.id)
    lists = _collect(vm.tasksReloaded)
    vm.set_filters(archived=True)
    vm.reload()
    ((rows,),) = lists
    assert [t.title for t in rows] == ["Gone"]
    assert vm.filters.archived is True

    vm.unarchive_task(gone.id)
    assert {t.id for t in repo.fetch_tasks()} == {keep.id, gone.id}


def test_missing_task_reports_error(vm):
    errors = _collect(vm.errorRaised)
    assert vm.delete_task("missing") is False
    assert errors == [("Failed to delete task: task missing not found",)]


def test_filters_apply_to_reload(vm, repo):
    vm.create_task(title="A", status="done")
    vm.create_task(title="B")
    lists = _collect(vm.tasksReloaded)
    vm.set_filters(status="done", priority="all")
    vm.reload()
    ((rows,),) = lists
    assert [t.title for t in rows] == ["A"]
    assert vm.filters.priority is None


def test_stats_percentages():
    stats = {"total": 4, "todo": 1, "in_progress": 0, "code_review": 0, "done": 3, "archived": 2}
    assert TasksViewModel.stats_percentages(stats) == {
        "todo": 25, "in_progress": 0, "code_review": 0, "done": 75, "archived": 50,
    }
    assert TasksViewModel.stats_percentages({"total": 0, "done": 0}) == {"done": 0}

# tests/test_task_query.py

from __future__ import annotations

from smart_tasks.tasks.task_models import Category, Priority, Task
from smart_tasks.tasks.task_query import filter_tasks, iter_matching, matches

TASKS = [
    Task("1", "Write report", False, Category.WORK, Priority.HIGH, "2025-06-01T10:00"),
    Task("2", "Buy milk", False, Category.GENERAL, Priority.LOW, "2025-06-01T10:00"),
    Task("3", "Homework", True, Category.SCHOOL, Priority.MEDIUM, "2025-06-02T09:00"),
    Task("4", "Call mom", False, Category.PERSONAL, Priority.LOW, "2025-06-03T18:00"),
]


def test_empty_search_matches_everything_in_order() -> None:
    assert filter_tasks(TASKS, "") == TASKS
    assert filter_tasks(TASKS) == TASKS


def test_search_matches_category_regardless_of_title() -> None:
    # "wor" hits the Work category and also "Homework" by title.
    assert [t.id for t in filter_tasks(TASKS, "wor")] == ["1", "3"]
    assert [t.id for t in filter_tasks(TASKS, "WORK")] == ["1", "3"]


def test_search_matches_category_only() -> None:
    assert [t.id for t in filter_tasks(TASKS, "perso")] == ["4"]


def test_search_is_case_insensitive_on_title() -> None:
    assert [t.id for t in filter_tasks(TASKS, "MILK")] == ["2"]


def test_search_without_hits() -> None:
    assert filter_tasks(TASKS, "zzz") == []


def test_matches_single_task() -> None:
    assert matches(TASKS[2], "school")
    assert not matches(TASKS[2], "milk")


def test_filter_is_restartable_and_pure() -> None:
    first = filter_tasks(TASKS, "o")
    second = filter_tasks(TASKS, "o")
    assert first == second
    assert len(TASKS) == 4


def test_iter_matching_is_lazy() -> None:
    seen: list[str] = []

    def source():
        for t in TASKS:
            seen.append(t.id)
            yield t

    it = iter_matching(source(), "milk")
    assert seen == []
    assert next(it).id == "2"
    assert seen == ["1", "2"]

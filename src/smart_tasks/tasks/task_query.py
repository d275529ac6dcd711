# src/smart_tasks/tasks/task_query.py

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .task_models import Task


def matches(task: Task, search_text: str) -> bool:
    """Case-insensitive substring match on title or category."""
    needle = search_text.lower()
    return needle in task.title.lower() or needle in task.category.value.lower()


def iter_matching(tasks: Iterable[Task], search_text: str) -> Iterator[Task]:
    for t in tasks:
        if matches(t, search_text):
            yield t


def filter_tasks(tasks: Iterable[Task], search_text: str = "") -> list[Task]:
    if not search_text:
        return list(tasks)
    return list(iter_matching(tasks, search_text))

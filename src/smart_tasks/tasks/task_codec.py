# src/smart_tasks/tasks/task_codec.py

"""
Persistence slot format for the task list.

The slot holds a JSON array of task records:
  {"id", "title", "completed", "category", "priority", "dueDate"}
written compactly (no whitespace between tokens) in that key order.
"""

from __future__ import annotations

import json
from collections.abc import Iterable

from .task_models import Task

STORAGE_KEY = "tasks"


class TaskDecodeError(ValueError):
    """The slot value is not a valid task list."""


def encode_tasks(tasks: Iterable[Task]) -> str:
    records = [t.to_record() for t in tasks]
    return json.dumps(records, ensure_ascii=False, separators=(",", ":"))


def decode_tasks(raw: str) -> list[Task]:
    try:
        data = json.loads(raw)
    except (TypeError, RecursionError, json.JSONDecodeError) as e:
        raise TaskDecodeError(f"slot is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise TaskDecodeError(f"slot must hold a JSON array, got {type(data).__name__}")

    out: list[Task] = []
    seen: set[str] = set()
    for i, rec in enumerate(data):
        try:
            task = Task.from_record(rec)
        except ValueError as e:
            raise TaskDecodeError(f"record #{i}: {e}") from e
        if task.id in seen:
            raise TaskDecodeError(f"record #{i}: duplicate id {task.id!r}")
        seen.add(task.id)
        out.append(task)
    return out

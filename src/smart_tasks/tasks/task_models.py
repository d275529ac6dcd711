# src/smart_tasks/tasks/task_models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any, Self


class _Choice(StrEnum):
    @classmethod
    def from_raw(cls, raw: Any) -> Self:
        """
        Normalize a free-form value into a member.

        Accepts a member, its exact value, or a case-insensitive match with
        surrounding whitespace ignored. Anything else raises ValueError.
        """
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            raise ValueError(f"{cls.__name__} must be a string, got {type(raw).__name__}")
        text = raw.strip()
        for member in cls:
            if member.value == text or member.value.lower() == text.lower():
                return member
        allowed = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown {cls.__name__.lower()} {raw!r} (expected one of: {allowed})")


class Category(_Choice):
    GENERAL = "General"
    WORK = "Work"
    PERSONAL = "Personal"
    SCHOOL = "School"


class Priority(_Choice):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


DEFAULT_CATEGORY = Category.GENERAL
DEFAULT_PRIORITY = Priority.LOW


def new_task_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    completed: bool
    category: Category
    priority: Priority

    # Kept verbatim as entered (datetime-local style "YYYY-MM-DDTHH:MM").
    due_date: str

    def due_at(self) -> datetime | None:
        if not self.due_date:
            return None
        try:
            return datetime.fromisoformat(self.due_date)
        except ValueError:
            return None

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "completed": self.completed,
            "category": self.category.value,
            "priority": self.priority.value,
            "dueDate": self.due_date,
        }

    @classmethod
    def from_record(cls, raw: Any) -> Task:
        if not isinstance(raw, dict):
            raise ValueError(f"task record must be an object, got {type(raw).__name__}")

        def field_of(name: str, kind: type) -> Any:
            if name not in raw:
                raise ValueError(f"task record is missing {name!r}")
            value = raw[name]
            if not isinstance(value, kind):
                raise ValueError(f"task field {name!r} must be {kind.__name__}")
            return value

        task_id = field_of("id", str)
        if not task_id:
            raise ValueError("task id must not be empty")

        return cls(
            id=task_id,
            title=field_of("title", str),
            completed=field_of("completed", bool),
            category=Category.from_raw(field_of("category", str)),
            priority=Priority.from_raw(field_of("priority", str)),
            due_date=field_of("dueDate", str),
        )

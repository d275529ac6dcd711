# src/smart_tasks/tasks/task_stats.py

"""
Derived dashboard numbers.

Nothing here is stored: every value is recomputed from the task list.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .task_models import Category, Task

COMPLETED_LABEL = "Completed"
PENDING_LABEL = "Pending"


@dataclass(frozen=True, slots=True)
class CompletionSummary:
    completed: int = 0
    pending: int = 0

    @property
    def total(self) -> int:
        return self.completed + self.pending


def completion_summary(tasks: Iterable[Task]) -> CompletionSummary:
    completed = 0
    total = 0
    for t in tasks:
        total += 1
        if t.completed:
            completed += 1
    return CompletionSummary(completed=completed, pending=total - completed)


def category_breakdown(tasks: Iterable[Task]) -> dict[Category, int]:
    """Count per category, only for categories present, in first-seen order."""
    counts: dict[Category, int] = {}
    for t in tasks:
        counts[t.category] = counts.get(t.category, 0) + 1
    return counts


def completion_chart(summary: CompletionSummary) -> list[tuple[str, int]]:
    return [(COMPLETED_LABEL, summary.completed), (PENDING_LABEL, summary.pending)]


def category_chart(tasks: Iterable[Task]) -> list[tuple[Category, int]]:
    return list(category_breakdown(tasks).items())


@dataclass(frozen=True, slots=True)
class Dashboard:
    completion: CompletionSummary = field(default_factory=CompletionSummary)
    categories: dict[Category, int] = field(default_factory=dict)

    @classmethod
    def from_tasks(cls, tasks: Sequence[Task]) -> Dashboard:
        return cls(
            completion=completion_summary(tasks),
            categories=category_breakdown(tasks),
        )

    @property
    def total(self) -> int:
        return self.completion.total

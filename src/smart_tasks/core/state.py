# src/smart_tasks/core/state.py

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_models import Task
from ..tasks.task_query import filter_tasks
from ..tasks.task_stats import Dashboard
from ..tasks.task_store import TaskStore
from .ports import TaskSnapshot


@dataclass
class AppState:
    """
    Everything a front-end needs, passed around explicitly.

    The dashboard follows the store: it is rebuilt from every new snapshot
    the store emits, so it never has to be refreshed by hand.
    """

    # Settings object (real Settings or a test double with the same attributes).
    settings: Any

    task_store: TaskStore

    search_text: str = ""
    dashboard: Dashboard = field(default_factory=Dashboard)

    _unsubscribe: Callable[[], None] | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.dashboard = Dashboard.from_tasks(self.task_store.tasks)
        self._unsubscribe = self.task_store.subscribe(self._on_snapshot)

    def _on_snapshot(self, tasks: TaskSnapshot) -> None:
        self.dashboard = Dashboard.from_tasks(tasks)

    def visible_tasks(self) -> list[Task]:
        return filter_tasks(self.task_store.tasks, self.search_text)

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.task_store.close()

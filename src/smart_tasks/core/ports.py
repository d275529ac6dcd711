# src/smart_tasks/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on Protocols instead of concrete implementations.
This keeps storage backends swappable and makes testing easier.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Task

TaskSnapshot = tuple["Task", ...]
# Immutable view of the task list, in insertion order.

SnapshotListener = Callable[[TaskSnapshot], None]


class SlotStore(Protocol):
    """
    Key-value blob store holding serialized state between runs.

    get() returns None when nothing was ever stored under the key.
    """

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def close(self) -> None: ...


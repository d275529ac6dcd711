# src/smart_tasks/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import replace

from ..core.ports import SlotStore, SnapshotListener, TaskSnapshot
from .task_codec import STORAGE_KEY, TaskDecodeError, decode_tasks, encode_tasks
from .task_models import Category, Priority, Task, new_task_id

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Authoritative in-memory task list with write-through persistence.

    - initialize() hydrates once from the slot (empty list if absent/unreadable)
    - every mutation that changes the list writes the full list back
      before returning, then notifies subscribers with the new snapshot
    - mutations that change nothing (rejected add, unknown id) do not write

    Snapshots are tuples of frozen Task objects, safe to hold on to.
    """

    def __init__(self, slots: SlotStore, *, key: str = STORAGE_KEY) -> None:
        self._slots = slots
        self._key = key
        self._tasks: TaskSnapshot = ()
        self._listeners: list[SnapshotListener] = []

    def initialize(self) -> TaskSnapshot:
        # Undecodable bytes and bad JSON both mean "no prior state".
        try:
            raw = self._slots.get(self._key)
            self._tasks = () if raw is None else tuple(decode_tasks(raw))
        except (TaskDecodeError, UnicodeDecodeError):
            logger.debug("Stored tasks unreadable key=%s; starting empty.", self._key, exc_info=True)
            self._tasks = ()
        logger.info("TaskStore ready key=%s total=%d", self._key, len(self._tasks))
        self._notify()
        return self._tasks

    def close(self) -> None:
        self._listeners.clear()
        self._slots.close()

    # ---- read side ----

    @property
    def tasks(self) -> TaskSnapshot:
        return self._tasks

    def snapshot(self) -> TaskSnapshot:
        return self._tasks

    def get(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    # ---- observation ----

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it again."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ---- mutations ----

    def add(
        self,
        title: str,
        category: Category | str,
        priority: Priority | str,
        due_date: str,
    ) -> TaskSnapshot:
        # Choices are checked before presence: out-of-set values always raise.
        cat = Category.from_raw(category)
        prio = Priority.from_raw(priority)

        if not title or not title.strip() or not due_date:
            logger.debug("Add ignored: empty title or due date.")
            return self._tasks

        task = Task(
            id=new_task_id(),
            title=title,
            completed=False,
            category=cat,
            priority=prio,
            due_date=due_date,
        )
        self._commit((*self._tasks, task))
        logger.debug("Task added id=%s category=%s priority=%s due=%s", task.id, cat, prio, due_date)
        return self._tasks

    def toggle_complete(self, task_id: str) -> TaskSnapshot:
        return self._replace(task_id, lambda t: replace(t, completed=not t.completed), "toggled")

    def edit_title(self, task_id: str, new_title: str | None) -> TaskSnapshot:
        # None (cancelled) and "" are both treated as "no edit".
        if not new_title:
            return self._tasks
        return self._replace(task_id, lambda t: replace(t, title=new_title), "renamed")

    def delete(self, task_id: str) -> TaskSnapshot:
        kept = tuple(t for t in self._tasks if t.id != task_id)
        if len(kept) == len(self._tasks):
            return self._tasks
        self._commit(kept)
        logger.debug("Task deleted id=%s", task_id)
        return self._tasks

    # ---- internals ----

    def _replace(self, task_id: str, change: Callable[[Task], Task], verb: str) -> TaskSnapshot:
        found = False
        updated: list[Task] = []
        for t in self._tasks:
            if t.id == task_id:
                found = True
                updated.append(change(t))
            else:
                updated.append(t)
        if not found:
            return self._tasks
        self._commit(tuple(updated))
        logger.debug("Task %s id=%s", verb, task_id)
        return self._tasks

    def _commit(self, new_tasks: TaskSnapshot) -> None:
        # Persist first: if the write fails, in-memory state stays as it was.
        self._slots.set(self._key, encode_tasks(new_tasks))
        self._tasks = new_tasks
        self._notify()

    def _notify(self) -> None:
        snapshot = self._tasks
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Task listener failed.")

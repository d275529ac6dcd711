# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field

from smart_tasks.core.ports import TaskSnapshot


class RecordingSlotStore:
    """
    In-memory SlotStore that records every write.

    - `writes` keeps (key, value) pairs in call order
    - `fail_writes` makes set() raise, to exercise storage failures
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})
        self.writes: list[tuple[str, str]] = []
        self.reads: list[str] = []
        self.fail_writes = False
        self.closed = False

    def get(self, key: str) -> str | None:
        self.reads.append(key)
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise OSError("disk full")
        self.writes.append((key, value))
        self.data[key] = value

    def close(self) -> None:
        self.closed = True


@dataclass(slots=True)
class SnapshotRecorder:
    """Listener that keeps every snapshot it receives."""

    snapshots: list[TaskSnapshot] = field(default_factory=list)

    def __call__(self, tasks: TaskSnapshot) -> None:
        self.snapshots.append(tasks)

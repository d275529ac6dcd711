# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from smart_tasks.core.state import AppState
from smart_tasks.tasks.task_store import TaskStore

from .fakes import RecordingSlotStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="Smart Task Manager",
        log_level="WARNING",
        log_to_file=False,
        data_dir=tmp_path / "data",
        storage_backend="file",
        storage_path=tmp_path / "data",
        storage_key="tasks",
    )


@pytest.fixture()
def slots() -> RecordingSlotStore:
    return RecordingSlotStore()


@pytest.fixture()
def store(slots: RecordingSlotStore) -> TaskStore:
    s = TaskStore(slots)
    s.initialize()
    return s


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    return AppState(settings=settings, task_store=store)

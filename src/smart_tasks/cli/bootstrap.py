# src/smart_tasks/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- opens the slot store and hydrates the task store from it,
- wires both into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..storage.slot_store import open_slot_store
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    if settings.storage_backend == "sqlite":
        settings.storage_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    slots = open_slot_store(settings)
    task_store = TaskStore(slots, key=settings.storage_key)
    task_store.initialize()

    logger.debug(
        "Bootstrap done backend=%s path=%s key=%s",
        settings.storage_backend,
        settings.storage_path,
        settings.storage_key,
    )
    return AppState(settings=settings, task_store=task_store)

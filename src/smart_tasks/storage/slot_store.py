# src/smart_tasks/storage/slot_store.py

from __future__ import annotations

import contextlib
import logging
import os
import re
import sqlite3
import time
from pathlib import Path

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


def _check_key(key: str) -> str:
    if not key or not _KEY_RE.match(key) or key in (".", ".."):
        raise ValueError(f"invalid slot key: {key!r}")
    return key


class MemorySlotStore:
    """Process-local slots. Nothing survives a restart."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def close(self) -> None:
        return


class FileSlotStore:
    """
    One UTF-8 file per key: <directory>/<key>.json

    Writes go to a temporary file first and are moved into place with
    os.replace, so a crash never leaves a half-written slot behind.
    """

    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory)
        self._dir.mkdir(parents=True, exist_ok=True)
        logger.info("FileSlotStore ready dir=%s", self._dir)

    def path_for(self, key: str) -> Path:
        return self._dir / f"{_check_key(key)}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text("utf-8")

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(value, "utf-8")
        os.replace(tmp, path)
        with contextlib.suppress(OSError):
            os.chmod(path, 0o600)
        logger.debug("Slot written key=%s bytes=%d", key, len(value))

    def close(self) -> None:
        return


class SqliteSlotStore:
    """
    SQLite-backed slots.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "slots.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("SqliteSlotStore ready db=%s", self._db_path)

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS slots (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    def get(self, key: str) -> str | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT value FROM slots WHERE key = ?", (key,)).fetchone()
            return None if row is None else str(row[0])
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO slots(key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value, time.time()),
            )
            conn.commit()
            logger.debug("Slot written key=%s bytes=%d", key, len(value))
        finally:
            conn.close()

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return


def open_slot_store(settings) -> MemorySlotStore | FileSlotStore | SqliteSlotStore:
    """Build the slot store selected by settings.storage_backend."""
    backend = str(getattr(settings, "storage_backend", "file")).strip().lower()

    if backend == "memory":
        return MemorySlotStore()
    if backend == "file":
        return FileSlotStore(settings.storage_path)
    if backend == "sqlite":
        return SqliteSlotStore(settings.storage_path)

    raise ValueError(f"unknown storage backend: {backend!r} (expected file, sqlite or memory)")

# tests/test_bootstrap.py

from __future__ import annotations

import logging
from pathlib import Path

from smart_tasks.cli.bootstrap import create_initial_state
from smart_tasks.config import Settings
from smart_tasks.logging_setup import setup_logging


def test_create_initial_state_hydrates_from_disk(settings) -> None:
    state = create_initial_state(settings=settings)
    state.task_store.add("Buy milk", "General", "Low", "2025-06-01T10:00")
    state.close()

    again = create_initial_state(settings=settings)
    assert [t.title for t in again.task_store.tasks] == ["Buy milk"]
    assert again.dashboard.total == 1
    assert (settings.storage_path / "tasks.json").exists()


def test_create_initial_state_ignores_corrupt_slot(settings) -> None:
    settings.storage_path.mkdir(parents=True)
    (settings.storage_path / "tasks.json").write_text("{oops", "utf-8")

    state = create_initial_state(settings=settings)
    assert state.task_store.tasks == ()


def test_create_initial_state_ignores_undecodable_bytes(settings) -> None:
    settings.storage_path.mkdir(parents=True)
    (settings.storage_path / "tasks.json").write_bytes(b'[{"title":"\xff\xfe"}]')

    state = create_initial_state(settings=settings)
    assert state.task_store.tasks == ()

    state.task_store.add("fresh", "General", "Low", "2025-06-01T10:00")
    again = create_initial_state(settings=settings)
    assert [t.title for t in again.task_store.tasks] == ["fresh"]


def test_create_initial_state_sqlite(settings, tmp_path: Path) -> None:
    settings.storage_backend = "sqlite"
    settings.storage_path = tmp_path / "db" / "tasks.sqlite3"

    state = create_initial_state(settings=settings)
    state.task_store.add("x", "School", "High", "2025-06-01T10:00")
    assert settings.storage_path.exists()


def test_settings_from_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SMART_TASKS_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("SMART_TASKS_STORAGE", "SQLITE")
    monkeypatch.setenv("SMART_TASKS_LOG_TO_FILE", "no")
    monkeypatch.delenv("SMART_TASKS_STORAGE_PATH", raising=False)
    monkeypatch.delenv("SMART_TASKS_STORAGE_KEY", raising=False)

    s = Settings.from_env()
    assert s.storage_backend == "sqlite"
    assert s.storage_path == tmp_path / "tasks.sqlite3"
    assert s.storage_key == "tasks"
    assert s.log_to_file is False


def test_settings_fall_back_on_bad_values(monkeypatch) -> None:
    monkeypatch.setenv("SMART_TASKS_STORAGE", "redis")
    monkeypatch.setenv("SMART_TASKS_STORAGE_KEY", "  ")
    monkeypatch.delenv("SMART_TASKS_DATA_DIR", raising=False)
    monkeypatch.delenv("SMART_TASKS_STORAGE_PATH", raising=False)

    s = Settings.from_env()
    assert s.storage_backend == "file"
    assert s.storage_path == s.data_dir
    assert s.storage_key == "tasks"


def test_setup_logging_writes_file(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved = list(root.handlers)
    try:
        log_file = setup_logging(log_dir=tmp_path)
        logging.getLogger("smart_tasks.test").debug("hello file")
        for h in root.handlers:
            h.flush()
        assert log_file == tmp_path / "smart_tasks.log"
        assert "hello file" in log_file.read_text("utf-8")
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved:
            root.addHandler(h)
        logging.captureWarnings(False)


def test_setup_logging_without_file() -> None:
    root = logging.getLogger()
    saved = list(root.handlers)
    try:
        assert setup_logging(log_dir=None) is None
        assert len(root.handlers) == 1
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
        for h in saved:
            root.addHandler(h)
        logging.captureWarnings(False)

# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from task_journal.tasks.task_store import JournalStore

from .fakes import FakeClock


@pytest.fixture()
def journal_path(tmp_path: Path) -> Path:
    return tmp_path / "journal.json"


@pytest.fixture()
def settings(journal_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the CLI.

    We intentionally use a SimpleNamespace rather than Settings.from_env(),
    so tests never read the developer's environment or home directory.
    """
    return SimpleNamespace(
        app_name="task-journal-test",
        log_level="WARNING",
        log_dir=None,
        journal_file=journal_path,
        default_file_name=".rusty-journal.json",
        atomic_writes=True,
    )


@pytest.fixture()
def store(journal_path: Path) -> JournalStore:
    return JournalStore(journal_path)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def lines() -> list[str]:
    """Collects emitted output lines instead of printing them."""
    return []

# src/task_journal/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- decides which journal file a command works on,
- wires settings into the concrete JournalStore.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import DEFAULT_FILE_NAME, get_settings
from ..errors import JournalPathError
from ..tasks.task_store import JournalStore

logger = logging.getLogger(__name__)


def find_default_journal_file(settings=None) -> Path | None:
    """`<home>/.rusty-journal.json`, or None when the home directory is unknown."""
    if settings is None:
        settings = get_settings()
    try:
        home = Path.home()
    except (RuntimeError, KeyError):
        return None
    return home / (getattr(settings, "default_file_name", None) or DEFAULT_FILE_NAME)


def resolve_journal_path(override: str | Path | None = None, *, settings=None) -> Path:
    """
    Pick the journal file:
      1. explicit --journal-file
      2. JOURNAL_FILE from settings
      3. the default file in the home directory
    """
    if settings is None:
        settings = get_settings()

    if override is not None:
        return Path(override).expanduser()

    configured = getattr(settings, "journal_file", None)
    if configured is not None:
        return Path(configured).expanduser()

    default = find_default_journal_file(settings)
    if default is None:
        raise JournalPathError("Failed to find journal file: no home directory and no --journal-file given")
    return default


def create_store(override: str | Path | None = None, *, settings=None) -> JournalStore:
    """
    Create the JournalStore for this invocation.

    Keeping settings injectable makes the CLI easy to test without touching
    the user's real home directory.
    """
    if settings is None:
        settings = get_settings()

    path = resolve_journal_path(override, settings=settings)
    atomic = bool(getattr(settings, "atomic_writes", True))
    logger.debug("Using journal file %s (atomic_writes=%s)", path, atomic)
    return JournalStore(path, atomic_writes=atomic)

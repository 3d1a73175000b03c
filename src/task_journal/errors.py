# src/task_journal/errors.py

"""Errors raised by the journal. Every one of them ends the current command."""

from __future__ import annotations

from pathlib import Path


class JournalError(Exception):
    """Base class; `main()` reports these as a one-line message with exit status 1."""


class JournalPathError(JournalError):
    pass


class JournalIOError(JournalError):
    def __init__(self, path: Path, action: str, cause: OSError) -> None:
        self.path = path
        self.action = action
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"failed to {action} journal file {path}: {reason}")


class JournalDecodeError(JournalError):
    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"journal file {path} is not a valid task list: {detail}")


class InvalidPositionError(JournalError):
    def __init__(self, position: int, available: int) -> None:
        self.position = position
        self.available = available
        hint = f"valid positions: 1..{available}" if available else "no incomplete tasks"
        super().__init__(f"invalid task position {position} ({hint})")

# src/task_journal/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from rich.cells import cell_len

TEXT_COLUMN_WIDTH = 80
LOCAL_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Derived from `completed_at`, never stored. The only transition is
    INCOMPLETE -> COMPLETED.
    """

    INCOMPLETE = "incomplete"
    COMPLETED = "completed"


def utc_now() -> datetime:
    # Stored with second precision, so drop microseconds up front.
    return datetime.now(UTC).replace(microsecond=0)


def to_epoch(ts: datetime) -> int:
    return int(ts.timestamp())


def from_epoch(seconds: int) -> datetime:
    return datetime.fromtimestamp(seconds, UTC)


def format_local(ts: datetime) -> str:
    return ts.astimezone().strftime(LOCAL_TIME_FORMAT)


@dataclass(slots=True)
class Task:
    text: str
    created_at: datetime
    completed_at: datetime | None = None

    @classmethod
    def new(cls, text: str, *, now: datetime | None = None) -> Task:
        return cls(text=text, created_at=(now or utc_now()).replace(microsecond=0))

    @property
    def status(self) -> TaskStatus:
        return TaskStatus.INCOMPLETE if self.completed_at is None else TaskStatus.COMPLETED

    def to_json(self) -> dict[str, Any]:
        """
        On-disk shape. Key order is part of the file format:
        text, create_at, completed_at (omitted, not null, when absent).
        """
        out: dict[str, Any] = {
            "text": self.text,
            "create_at": to_epoch(self.created_at),
        }
        if self.completed_at is not None:
            out["completed_at"] = to_epoch(self.completed_at)
        return out

    @classmethod
    def from_json(cls, raw: Any) -> Task:
        """Build a Task from one decoded array item; raises ValueError on bad shape."""
        if not isinstance(raw, dict):
            raise ValueError(f"expected an object, got {type(raw).__name__}")

        text = raw.get("text")
        if not isinstance(text, str):
            raise ValueError("missing or non-string 'text'")

        created = raw.get("create_at")
        if not _is_epoch(created):
            raise ValueError("missing or non-integer 'create_at'")

        completed = raw.get("completed_at")
        if completed is not None and not _is_epoch(completed):
            raise ValueError("non-integer 'completed_at'")

        return cls(
            text=text,
            created_at=from_epoch(created),
            completed_at=from_epoch(completed) if completed is not None else None,
        )

    def __str__(self) -> str:
        padding = max(0, TEXT_COLUMN_WIDTH - cell_len(self.text))
        line = f"{self.text}{' ' * padding} [{format_local(self.created_at)}]"
        if self.completed_at is not None:
            line += f" (completed at {format_local(self.completed_at)})"
        return line


def _is_epoch(value: Any) -> bool:
    # bool is an int subclass; true/false are not timestamps.
    return isinstance(value, int) and not isinstance(value, bool)

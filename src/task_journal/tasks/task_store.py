# src/task_journal/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import shutil
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from pathlib import Path

from ..errors import InvalidPositionError, JournalDecodeError, JournalIOError
from .task_models import Task, TaskStatus, utc_now

logger = logging.getLogger(__name__)

Emitter = Callable[[str], None]

EMPTY_NOTICE = "Task list is empty!"


class DecodeKind(StrEnum):
    EMPTY = "empty"
    TASKS = "tasks"
    MALFORMED = "malformed"


@dataclass(slots=True)
class DecodeResult:
    kind: DecodeKind
    tasks: list[Task] = field(default_factory=list)
    error: str | None = None

    @classmethod
    def empty(cls) -> DecodeResult:
        return cls(DecodeKind.EMPTY)

    @classmethod
    def of(cls, tasks: list[Task]) -> DecodeResult:
        return cls(DecodeKind.TASKS, tasks=tasks)

    @classmethod
    def malformed(cls, error: str) -> DecodeResult:
        return cls(DecodeKind.MALFORMED, error=error)


def decode(raw: str) -> DecodeResult:
    """
    Decode the journal file content.

    - zero bytes / whitespace only -> EMPTY (a fresh journal, not an error)
    - JSON array of task objects  -> TASKS
    - anything else                -> MALFORMED
    """
    if not raw.strip():
        return DecodeResult.empty()

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        return DecodeResult.malformed(f"invalid JSON at line {e.lineno} column {e.colno}: {e.msg}")

    if not isinstance(data, list):
        return DecodeResult.malformed(f"expected a JSON array, got {type(data).__name__}")

    tasks: list[Task] = []
    for i, item in enumerate(data):
        try:
            tasks.append(Task.from_json(item))
        except (ValueError, OverflowError, OSError) as e:
            return DecodeResult.malformed(f"item {i}: {e}")
    return DecodeResult.of(tasks)


def encode(tasks: list[Task]) -> str:
    return json.dumps([t.to_json() for t in tasks], ensure_ascii=False, separators=(",", ":"))


def filtered_view(tasks: list[Task], status: TaskStatus) -> list[tuple[int, Task]]:
    """
    Order-preserving sub-sequence of `tasks` with the given status.

    Each entry carries its index in the full sequence, so a position in the
    view can be mapped back without filtering twice.
    """
    return [(i, t) for i, t in enumerate(tasks) if t.status == status]


class JournalStore:
    """
    JSON-file task journal.

    Every public method does a full load / (mutate / rewrite) cycle; nothing is
    cached between calls. Positions are 1-based ranks in a filtered view, never
    raw indexes into the file.
    """

    def __init__(self, path: str | Path, *, atomic_writes: bool = True) -> None:
        self._path = Path(path)
        self._atomic_writes = atomic_writes

    @property
    def path(self) -> Path:
        return self._path

    @property
    def atomic_writes(self) -> bool:
        return self._atomic_writes

    # ---- low-level helpers ----

    def _read_raw(self) -> str | None:
        try:
            return self._path.read_text("utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as e:
            raise JournalDecodeError(self._path, "file is not valid UTF-8") from e
        except OSError as e:
            raise JournalIOError(self._path, "read", e) from e

    def _write(self, tasks: list[Task]) -> None:
        content = encode(tasks)
        # Write through symlinks: the link stays, its target gets the new content.
        target = self._path.resolve()
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            if self._atomic_writes:
                self._replace(target, content)
            else:
                # Truncate-and-rewrite: a crash mid-write can corrupt the journal.
                with target.open("w", encoding="utf-8") as f:
                    f.write(content)
        except OSError as e:
            raise JournalIOError(self._path, "write", e) from e
        logger.debug("Journal written path=%s tasks=%d atomic=%s", target, len(tasks), self._atomic_writes)

    @staticmethod
    def _replace(target: Path, content: str) -> None:
        tmp = target.with_name(target.name + ".tmp")
        try:
            tmp.write_text(content, "utf-8")
            if target.exists():
                # Keep a private (0600) journal private.
                shutil.copymode(target, tmp)
            os.replace(tmp, target)
        except OSError:
            with contextlib.suppress(FileNotFoundError):
                tmp.unlink()
            raise

    def _locate(self, tasks: list[Task], position: int) -> int:
        """Map a 1-based position in the incomplete view to an index in `tasks`."""
        view = filtered_view(tasks, TaskStatus.INCOMPLETE)
        if position < 1 or position > len(view):
            raise InvalidPositionError(position, len(view))
        index, _ = view[position - 1]
        return index

    # ---- public API ----

    def load(self) -> list[Task]:
        raw = self._read_raw()
        if raw is None:
            logger.debug("Journal %s does not exist yet; treating as empty.", self._path)
            return []

        result = decode(raw)
        if result.kind is DecodeKind.MALFORMED:
            raise JournalDecodeError(self._path, result.error or "unknown error")

        logger.debug("Journal loaded path=%s kind=%s tasks=%d", self._path, result.kind, len(result.tasks))
        return result.tasks

    def add_task(self, task: Task) -> None:
        tasks = self.load()
        tasks.append(task)
        self._write(tasks)
        logger.info("Task added position=%d", len(filtered_view(tasks, TaskStatus.INCOMPLETE)))

    def complete_task(self, position: int, *, now: datetime | None = None) -> Task:
        tasks = self.load()
        index = self._locate(tasks, position)

        task = tasks[index]
        task.completed_at = (now or utc_now()).replace(microsecond=0)
        self._write(tasks)
        logger.info("Task completed position=%d index=%d", position, index)
        return task

    def edit_task(self, position: int, text: str) -> Task:
        tasks = self.load()
        index = self._locate(tasks, position)

        task = tasks[index]
        task.text = text
        self._write(tasks)
        logger.info("Task edited position=%d index=%d", position, index)
        return task

    def list_tasks(self, emit: Emitter = print) -> int:
        """Emit incomplete tasks as '<rank>. <task>'. Returns the number of tasks emitted."""
        return self._emit_view(TaskStatus.INCOMPLETE, emit)

    def list_completed_tasks(self, emit: Emitter = print) -> int:
        """Emit completed tasks as '<rank>. <task>'. Returns the number of tasks emitted."""
        return self._emit_view(TaskStatus.COMPLETED, emit)

    def _emit_view(self, status: TaskStatus, emit: Emitter) -> int:
        tasks = self.load()

        # Only an empty journal gets the notice; an empty view over a
        # non-empty journal prints nothing.
        if not tasks:
            emit(EMPTY_NOTICE)
            return 0

        view = filtered_view(tasks, status)
        for rank, (_, task) in enumerate(view, start=1):
            emit(f"{rank}. {task}")
        return len(view)

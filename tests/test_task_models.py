# tests/test_task_models.py

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from task_journal.tasks.task_models import Task, TaskStatus, format_local, utc_now

from .fakes import T0


def test_new_task_is_incomplete_and_second_precision() -> None:
    task = Task.new("buy milk")
    assert task.status is TaskStatus.INCOMPLETE
    assert task.completed_at is None
    assert task.created_at.microsecond == 0
    assert task.created_at.tzinfo is not None
    assert utc_now().microsecond == 0


def test_to_json_omits_missing_completed_at() -> None:
    task = Task("a", created_at=T0)
    data = task.to_json()
    assert list(data) == ["text", "create_at"]
    assert data["create_at"] == int(T0.timestamp())

    task.completed_at = T0 + timedelta(minutes=5)
    assert task.status is TaskStatus.COMPLETED
    assert list(task.to_json()) == ["text", "create_at", "completed_at"]
    assert task.to_json()["completed_at"] == int(T0.timestamp()) + 300


def test_from_json_accepts_null_completed_at() -> None:
    task = Task.from_json({"text": "a", "create_at": 1700000000, "completed_at": None})
    assert task.completed_at is None
    assert task.created_at == datetime.fromtimestamp(1700000000, UTC)


@pytest.mark.parametrize(
    "raw",
    [
        "not an object",
        {"create_at": 1},
        {"text": 5, "create_at": 1},
        {"text": "a"},
        {"text": "a", "create_at": "yesterday"},
        {"text": "a", "create_at": True},
        {"text": "a", "create_at": 1.5},
        {"text": "a", "create_at": 1, "completed_at": "later"},
    ],
)
def test_from_json_rejects_bad_shapes(raw) -> None:
    with pytest.raises(ValueError):
        Task.from_json(raw)


def test_display_pads_text_to_80_cells() -> None:
    line = str(Task("buy milk", created_at=T0))
    assert line == "buy milk" + " " * 72 + f" [{format_local(T0)}]"


def test_display_counts_wide_characters_as_two_cells() -> None:
    # 3 CJK characters occupy 6 terminal cells.
    line = str(Task("日本語", created_at=T0))
    assert line.startswith("日本語" + " " * 74 + " [")


def test_display_never_truncates_long_text() -> None:
    text = "x" * 100
    assert str(Task(text, created_at=T0)) == f"{text} [{format_local(T0)}]"


def test_display_completed_suffix() -> None:
    done_at = T0 + timedelta(hours=1)
    line = str(Task("a", created_at=T0, completed_at=done_at))
    assert line.endswith(f"[{format_local(T0)}] (completed at {format_local(done_at)})")

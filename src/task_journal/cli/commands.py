# src/task_journal/cli/commands.py

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..tasks.task_models import Task
from ..tasks.task_store import Emitter, JournalStore

CommandHandler = Callable[[JournalStore, argparse.Namespace, Emitter], None]
ArgumentsConfigurer = Callable[[argparse.ArgumentParser], None]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Command:
    name: str
    handler: CommandHandler
    help_text: str
    configure: ArgumentsConfigurer | None = None


class CommandRegistry:
    """Subcommand registry: the argparse subparsers and the dispatch table come from here."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        configure: ArgumentsConfigurer | None = None,
    ) -> None:
        self._commands[name.lower()] = Command(name.lower(), handler, help_text, configure)

    def names(self) -> list[str]:
        return list(self._commands)

    def add_subparsers(self, parser: argparse.ArgumentParser) -> None:
        sub = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)
        for cmd in self._commands.values():
            p = sub.add_parser(cmd.name, help=cmd.help_text, description=cmd.help_text)
            if cmd.configure is not None:
                cmd.configure(p)

    def handle(self, store: JournalStore, args: argparse.Namespace, emit: Emitter = print) -> None:
        name = str(getattr(args, "command", "") or "").lower()
        cmd = self._commands.get(name)
        if cmd is None:
            # argparse rejects unknown subcommands before we get here.
            raise ValueError(f"Unknown command: {name!r}")
        logger.debug("Dispatching command=%s journal=%s", name, store.path)
        cmd.handler(store, args, emit)


def position_arg(raw: str) -> int:
    """argparse type for positions: a non-negative integer (0 is rejected later, by the store)."""
    # Plain ASCII digits only: int() would also take " 2 ", "1_0" and non-Latin digits.
    if not (raw.isascii() and raw.isdigit()):
        raise argparse.ArgumentTypeError(f"invalid position {raw!r}: expected a non-negative integer")
    return int(raw)


def cmd_add(store: JournalStore, args: argparse.Namespace, emit: Emitter) -> None:
    store.add_task(Task.new(args.text))


def cmd_done(store: JournalStore, args: argparse.Namespace, emit: Emitter) -> None:
    store.complete_task(args.position)


def cmd_list(store: JournalStore, args: argparse.Namespace, emit: Emitter) -> None:
    store.list_tasks(emit)


def cmd_edit(store: JournalStore, args: argparse.Namespace, emit: Emitter) -> None:
    store.edit_task(args.position, args.text)


def cmd_list_completed(store: JournalStore, args: argparse.Namespace, emit: Emitter) -> None:
    store.list_completed_tasks(emit)


def _text_argument(p: argparse.ArgumentParser) -> None:
    p.add_argument("text", help="The task description text.")


def _position_argument(p: argparse.ArgumentParser) -> None:
    p.add_argument("position", type=position_arg, help="Position of the task in `list` output.")


def _edit_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument("position", type=position_arg, help="The position of the task to edit.")
    p.add_argument("text", help="The new text to replace the old text.")


registry = CommandRegistry()

registry.register("add", cmd_add, help_text="Write a task to the journal file.", configure=_text_argument)
registry.register(
    "done", cmd_done, help_text="Mark a task as completed by its position.", configure=_position_argument
)
registry.register("list", cmd_list, help_text="List incomplete tasks in the journal file.")
registry.register(
    "edit", cmd_edit, help_text="Modify an incomplete task using its position.", configure=_edit_arguments
)
registry.register("list-completed", cmd_list_completed, help_text="List completed tasks in the journal file.")

# src/task_journal/cli/main.py

"""
CLI entrypoint.

Parses arguments, initializes logging, resolves the journal file, then runs
exactly one command against it.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from .. import __version__
from ..cli.bootstrap import create_store
from ..cli.commands import CommandRegistry, registry as command_registry
from ..config import get_settings
from ..errors import JournalError
from ..logging_setup import level_from_name, setup_logging
from ..tasks.task_store import Emitter

logger = logging.getLogger(__name__)

PROG = "task-journal"


def build_parser(reg: CommandRegistry | None = None) -> argparse.ArgumentParser:
    reg = reg or command_registry
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="A command line to-do journal kept in a single JSON file.",
    )
    parser.add_argument(
        "-j",
        "--journal-file",
        metavar="PATH",
        default=None,
        help="Use a different journal file.",
    )
    parser.add_argument(
        "--log-level",
        metavar="LEVEL",
        default=None,
        help="Console log level (DEBUG, INFO, WARNING, ...). Overrides JOURNAL_LOG_LEVEL.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    reg.add_subparsers(parser)
    return parser


def main(argv: Sequence[str] | None = None, *, settings=None, emit: Emitter = print) -> int:
    """Run one command. Returns the process exit status; usage errors exit via argparse (2)."""
    args = build_parser().parse_args(argv)

    if settings is None:
        settings = get_settings()

    console_level = level_from_name(args.log_level or getattr(settings, "log_level", None))
    log_dir = getattr(settings, "log_dir", None)
    try:
        setup_logging(log_dir=log_dir, console_level=console_level)
    except OSError as e:
        print(f"error: cannot set up log directory {log_dir}: {e.strerror or e}", file=sys.stderr)
        return 1

    try:
        store = create_store(args.journal_file, settings=settings)
        command_registry.handle(store, args, emit)
    except JournalError as e:
        logger.debug("Command %s failed.", args.command, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 0


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()

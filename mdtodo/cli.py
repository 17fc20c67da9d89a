"""Command-line interface for mdtodo.

Usage:
    mdtodo create
    mdtodo add "buy milk"
    mdtodo select 0
    mdtodo check 0
    mdtodo uncheck 0 --select
    mdtodo list --incomplete
    mdtodo status

The document defaults to ./TODO.md; use -f/--file or $MDTODO_FILE to pick
another one. With -q/--quiet nothing is printed and only the exit status
reports the outcome.
"""

from __future__ import annotations

import argparse
import contextlib
import io
import logging
import sys
from typing import Callable, List, Optional, Sequence

from .codec import encode_task
from .config import load_settings
from .engine import TaskBook
from .errors import (
    DOCUMENT_FORMAT_ERRORS,
    AlreadyExists,
    AlreadyInTargetState,
    InvalidTaskText,
    StorageError,
    TaskDocError,
    TaskNotFound,
)
from .models import ALL_STATUSES, TaskStatus
from .mdtodo_logging import setup_logging

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_DOCUMENT = 3
EXIT_NOT_FOUND = 4
EXIT_STATE = 5
EXIT_IO = 6
EXIT_EXISTS = 7
EXIT_TEXT = 8


def exit_code_for(error: Exception) -> int:
    """Map an engine error to the process exit status."""
    if isinstance(error, DOCUMENT_FORMAT_ERRORS):
        return EXIT_DOCUMENT
    if isinstance(error, TaskNotFound):
        return EXIT_NOT_FOUND
    if isinstance(error, AlreadyInTargetState):
        return EXIT_STATE
    if isinstance(error, AlreadyExists):
        return EXIT_EXISTS
    if isinstance(error, StorageError):
        return EXIT_IO
    if isinstance(error, InvalidTaskText):
        return EXIT_TEXT
    return EXIT_USAGE


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdtodo",
        description="Markdown task list with SELECTED, INCOMPLETE and COMPLETE sections",
    )
    parser.add_argument("-f", "--file", help="Task document (default: $MDTODO_FILE or ./TODO.md)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Print nothing; report through the exit status only")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR or CRITICAL")

    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("create", help="Create an empty task document")

    add_p = subparsers.add_parser("add", help="Add a task")
    add_p.add_argument("text", nargs="+", help="Task description")
    add_p.add_argument(
        "--status",
        default=TaskStatus.INCOMPLETE.value,
        choices=[status.value for status in ALL_STATUSES],
    )

    check_p = subparsers.add_parser("check", help="Mark a task complete")
    check_p.add_argument("task_id", type=int)

    uncheck_p = subparsers.add_parser("uncheck", help="Reopen a complete task")
    uncheck_p.add_argument("task_id", type=int)
    uncheck_p.add_argument("--select", action="store_true", help="Reopen into SELECTED instead of INCOMPLETE")

    select_p = subparsers.add_parser("select", help="Move an incomplete task to SELECTED")
    select_p.add_argument("task_id", type=int)

    deselect_p = subparsers.add_parser("deselect", help="Move a selected task back to INCOMPLETE")
    deselect_p.add_argument("task_id", type=int)

    list_p = subparsers.add_parser("list", help="List tasks (all sections unless filtered)")
    list_p.add_argument("--selected", action="store_true")
    list_p.add_argument("--incomplete", action="store_true")
    list_p.add_argument("--complete", action="store_true")

    subparsers.add_parser("status", help="Show task counts per section")

    return parser


def _list_filter(args: argparse.Namespace) -> Optional[List[TaskStatus]]:
    chosen = [
        status
        for status, flag in (
            (TaskStatus.SELECTED, args.selected),
            (TaskStatus.INCOMPLETE, args.incomplete),
            (TaskStatus.COMPLETE, args.complete),
        )
        if flag
    ]
    return chosen or None


def run(args: argparse.Namespace, book: TaskBook, echo: Callable[[str], None]) -> None:
    """Execute one parsed command against ``book``."""
    if args.command == "create":
        path = book.create()
        echo(f"Created task document {path}")
    elif args.command == "add":
        text = " ".join(args.text)
        task_id = book.add(text, args.status)
        echo(f"Added task {task_id}: {text}")
    elif args.command == "check":
        task = book.check(args.task_id)
        echo(f"Checked task {task.id}: {task.text}")
    elif args.command == "uncheck":
        task = book.uncheck(args.task_id, select=args.select)
        echo(f"Unchecked task {task.id} into {task.section}: {task.text}")
    elif args.command == "select":
        task = book.select(args.task_id)
        echo(f"Selected task {task.id}: {task.text}")
    elif args.command == "deselect":
        task = book.deselect(args.task_id)
        echo(f"Deselected task {task.id}: {task.text}")
    elif args.command == "list":
        tasks = book.list_tasks(_list_filter(args))
        current = None
        for task in tasks:
            if task.section != current:
                if current is not None:
                    echo("")
                current = task.section
                echo(current)
            echo(f"  {encode_task(task)}")
        if not tasks:
            echo("No tasks.")
    elif args.command == "status":
        summary = book.summary()
        counts = summary["counts"]
        echo(f"{summary['path']}")
        for status in ALL_STATUSES:
            echo(f"  {status.section:<11} {counts[status.value]}")
        echo(f"  {'TOTAL':<11} {summary['total']}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    argv = sys.argv[1:] if argv is None else list(argv)
    if "-q" in argv or "--quiet" in argv:
        # argparse reports usage errors itself; silence it and keep the status
        try:
            with contextlib.redirect_stdout(io.StringIO()), contextlib.redirect_stderr(io.StringIO()):
                args = parser.parse_args(argv)
        except SystemExit as e:
            return EXIT_USAGE if e.code else EXIT_OK
    else:
        args = parser.parse_args(argv)

    if not args.command:
        if not args.quiet:
            parser.print_help()
        return EXIT_USAGE

    try:
        settings = load_settings(args.file, args.log_level)
    except ValueError as e:
        if not args.quiet:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    setup_logging(logging.CRITICAL if args.quiet else settings.log_level, settings.log_file)

    def echo(message: str) -> None:
        if not args.quiet:
            print(message)

    book = TaskBook(settings.document_path)
    try:
        run(args, book, echo)
    except (TaskDocError, ValueError) as e:
        if not args.quiet:
            kind = getattr(e, "kind", "invalid_argument")
            print(f"Error ({kind}): {e}", file=sys.stderr)
        return exit_code_for(e)

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

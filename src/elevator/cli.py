"""Command line entry point: ``elevator COMMAND [ARGS...]``."""
from __future__ import annotations

import argparse
import logging
from typing import Sequence

from rich.console import Console
from rich.table import Table

from . import __version__
from . import platform as platform_state
from .config import get_settings
from .errors import ElevationError, ElevatorError
from .executor import ElevationBackend, ShellExecuteBackend, default_backend
from .logging_config import setup_logging
from .outcome import ElevationOutcome
from .binding import execute
from .privileges import is_elevated

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2
EXIT_CANCELLED = 3


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="elevator",
        description="Run a command with administrator privileges and wait for it to finish",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--show-window",
        action="store_true",
        default=get_settings().show_window,
        help="Show the elevated program's window (Windows only)",
    )
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--outcomes", action="store_true", help="List every outcome and its description"
    )
    mode.add_argument(
        "--check", action="store_true", help="Report whether this process is elevated"
    )
    parser.add_argument("command", nargs="?", help="Executable to run elevated")
    parser.add_argument("arguments", nargs=argparse.REMAINDER, help="Arguments for the command")
    return parser.parse_args(argv)


def make_outcome_table() -> Table:
    table = Table(title="Elevation outcomes", expand=False)
    table.add_column("Outcome")
    table.add_column("Error", justify="center")
    table.add_column("Description")
    for outcome in ElevationOutcome:
        table.add_row(outcome.value, "yes" if outcome.is_error else "no", outcome.description)
    return table


def _backend_for(args: argparse.Namespace) -> ElevationBackend:
    if platform_state.IS_WINDOWS:
        return ShellExecuteBackend(show_window=args.show_window)
    return default_backend()


def run_cli(args: argparse.Namespace, console: Console | None = None) -> int:
    console = console or Console()
    if args.outcomes:
        console.print(make_outcome_table())
        return EXIT_OK
    if args.check:
        elevated = is_elevated()
        console.print("elevated" if elevated else "not elevated")
        return EXIT_OK if elevated else EXIT_ERROR
    if not args.command:
        console.print("[red]error:[/] a command is required")
        return EXIT_USAGE

    argv = [args.command, *args.arguments]
    try:
        result = execute(argv, backend=_backend_for(args))
    except ElevationError as exc:
        console.print(f"[red]Elevation failed:[/] {exc}")
        return EXIT_ERROR
    except ElevatorError as exc:
        logger.debug("Elevation aborted", exc_info=True)
        console.print(f"[red]error:[/] {exc}")
        return EXIT_ERROR

    if result.cancelled:
        console.print("[yellow]Elevation cancelled by the user[/]")
        return EXIT_CANCELLED
    console.print(f"[green]{args.command} finished with administrator privileges[/]")
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else None, args.log_file)
    return run_cli(args)


__all__ = ["main", "make_outcome_table", "parse_args", "run_cli"]

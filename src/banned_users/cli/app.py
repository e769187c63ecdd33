"""CLI application entry point and command routing for banned-users.

This module is the **sole error boundary** for the entire application.
It catches :class:`~banned_users.exceptions.BannedUsersError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the command,
  core and infrastructure layers.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

from banned_users.cli import exit_codes
from banned_users.cli.console import console, escape
from banned_users.core.models import COLUMN_HEADERS, DEFAULT_SORT_FIELD
from banned_users.exceptions import BannedUsersError, ValidationError
from banned_users.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _add_get_parser(subparsers: Any) -> None:
    get_parser = subparsers.add_parser(
        "get",
        help="Get banned users.",
        description="Get banned users.",
    )
    get_parser.add_argument(
        "save_to",
        nargs="?",
        default=None,
        help="The filepath in which to store the output.",
    )
    get_parser.add_argument(
        "sort_by",
        nargs="?",
        default=DEFAULT_SORT_FIELD,
        help=f"The field to use when sorting the output ({', '.join(COLUMN_HEADERS)}).",
    )
    get_parser.add_argument(
        "--active-users-only",
        action="store_true",
        help="Only show banned users that have been previously activated.",
    )
    get_parser.add_argument(
        "--with-trashed",
        action="store_true",
        help="Show banned users, including the deleted ones.",
    )
    get_parser.add_argument(
        "--trashed-only",
        action="store_true",
        help="Only show banned users that have been deleted.",
    )
    get_parser.add_argument(
        "--no-admin",
        action="store_true",
        help="Show banned users excluding the `admin` users.",
    )
    get_parser.add_argument(
        "--admin-only",
        action="store_true",
        help="Only show banned users that are `admin`.",
    )
    get_parser.add_argument(
        "--with-headers",
        action="store_true",
        help="Print and save column headers.",
    )
    get_parser.add_argument(
        "--force",
        action="store_true",
        help="Override an existing output file without asking.",
    )
    get_parser.add_argument(
        "--database-url",
        default=None,
        help="SQLAlchemy database URL (default: $BANNED_USERS_DATABASE_URL).",
    )


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``banned-users get [save_to] [sort_by] [flags]`` — list banned users
    * ``banned-users doctor`` — environment diagnostics
    * ``banned-users --version``
    """
    parser = argparse.ArgumentParser(
        prog="banned-users",
        description="List banned users from the user database.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log diagnostics to stderr.",
    )
    subparsers = parser.add_subparsers(dest="command")
    _add_get_parser(subparsers)

    doctor_parser = subparsers.add_parser("doctor", help="Run environment diagnostics.")
    doctor_parser.add_argument(
        "--database-url",
        default=None,
        help="SQLAlchemy database URL (default: $BANNED_USERS_DATABASE_URL).",
    )
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _load_settings(database_url: str | None, *, verbose: bool) -> Any:
    """Load settings and apply their log level unless ``--verbose`` is set."""
    from banned_users.config import load_settings
    from banned_users.logging_config import configure_logging

    settings = load_settings(database_url=database_url)
    if not verbose:
        configure_logging(settings.log_level)
    return settings


def _handle_get(raw_input: dict[str, Any], *, verbose: bool = False) -> int:
    """Dispatch ``get``.

    Flow:
    1. Validate the input, so flag and path errors win over a bad
       ``--database-url``.
    2. Load settings (``--database-url`` wins over the environment).
    3. Open a session and run :class:`GetBannedUsersCommand`.
    """
    from banned_users.cli.banned_users_command import GetBannedUsersCommand
    from banned_users.cli.output import CommandOutput
    from banned_users.core.input_validator import InputValidator
    from banned_users.infra.database import build_engine, build_session_factory, session_scope
    from banned_users.infra.filesystem import is_writable_recursive, nearest_existing_ancestor
    from banned_users.infra.user_repository import SqlUserRepository

    database_url = raw_input.pop("database_url", None)
    validator = InputValidator(is_writable_recursive, nearest_existing_ancestor)
    validator.validate(raw_input)

    settings = _load_settings(database_url, verbose=verbose)
    engine = build_engine(settings.database_url)
    try:
        with session_scope(build_session_factory(engine)) as session:
            command = GetBannedUsersCommand(
                validator,
                SqlUserRepository(session),
                CommandOutput(),
                separator=settings.output_separator,
                output_filename=settings.output_filename,
            )
            command.handle(raw_input)
    finally:
        engine.dispose()
    return exit_codes.SUCCESS


def _handle_doctor(database_url: str | None, *, verbose: bool = False) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from banned_users.cli.doctor import run_doctor

    return run_doctor(_load_settings(database_url, verbose=verbose))


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the banned-users CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    from banned_users.config import DEFAULT_LOG_LEVEL
    from banned_users.logging_config import configure_logging

    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else DEFAULT_LOG_LEVEL)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    if args.command == "doctor":
        return _handle_doctor(args.database_url, verbose=args.verbose)

    raw_input = vars(args)
    raw_input.pop("command", None)
    verbose = bool(raw_input.pop("verbose", False))
    return _handle_get(raw_input, verbose=verbose)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def _print_error(exc: BannedUsersError) -> None:
    if isinstance(exc, ValidationError) and len(exc.errors) > 0:
        console.print("[bold red]Invalid input:[/bold red]")
        for messages in exc.errors.values():
            for message in messages:
                console.print(f"  • {escape(message)}")
    else:
        console.print(f"[bold red]Error:[/bold red] {escape(exc)}")
    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")


def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except BannedUsersError as exc:
        logger.debug("Command failed", exc_info=exc)
        _print_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(exc)}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)

"""``banned-users doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment can run ``banned-users get``: Python
version, SQLAlchemy, and a reachable database holding a ``users``
table.

This module lives in the CLI layer, so it may import from ``infra``
and ``core``, and it renders via Rich.
"""

from __future__ import annotations

import logging
import platform
import sys

from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError

from banned_users.cli import exit_codes
from banned_users.cli.console import console, escape
from banned_users.cli.output import load_rich_table_class
from banned_users.config import Settings
from banned_users.exceptions import DatabaseError
from banned_users.infra.database import build_engine
from banned_users.version import __version__

logger = logging.getLogger(__name__)

OK = "[green]OK[/green]"
WARN = "[yellow]WARN[/yellow]"
FAIL = "[red]FAIL[/red]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    major, minor = sys.version_info[:2]
    ok = (major, minor) >= (3, 10)
    status = OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _sqlalchemy_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the SQLAlchemy row."""
    import sqlalchemy

    major = int(sqlalchemy.__version__.split(".")[0])
    status = OK if major >= 2 else "[red]FAIL (>=2.0 required)[/red]"
    return "SQLAlchemy", sqlalchemy.__version__, status


def _database_check(database_url: str) -> tuple[str, str, str]:
    """Return (label, value, status) for the database row.

    FAIL when the database cannot be reached, WARN when it is reachable
    but has no ``users`` table yet.
    """
    try:
        engine = build_engine(database_url)
    except DatabaseError as exc:
        return "Database", str(exc), FAIL

    display_url = engine.url.render_as_string(hide_password=True)
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
            has_users = inspect(connection).has_table("users")
    except SQLAlchemyError as exc:
        logger.debug("Database check failed: %s", exc)
        return "Database", f"{display_url} (unreachable)", FAIL
    finally:
        engine.dispose()

    if not has_users:
        return "Database", f"{display_url} (no users table)", WARN
    return "Database", display_url, OK


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, OK


def _banned_users_version_check() -> tuple[str, str, str]:
    return "banned-users", __version__, OK


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(settings: Settings) -> int:
    """Execute all diagnostic checks and render a Rich summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check fails,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    table_class = load_rich_table_class()

    checks = [
        _banned_users_version_check(),
        _python_version_check(),
        _sqlalchemy_version_check(),
        _database_check(settings.database_url),
        _os_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    table = table_class(
        title="banned-users doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, escape(value), status)

    console.print()
    console.print(table)
    console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS

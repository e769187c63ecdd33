"""CLI console helpers.

Rich is imported lazily so bootstrap paths (``--help``, ``--version``)
stay cheap. Tables fail with an :class:`EnvironmentError` when Rich is
missing; plain messages fall back to ``print`` on stderr so the error
boundary can always report.

Messages go to stderr; the result table goes to stdout so it can be
piped.
"""

from __future__ import annotations

import sys
from typing import Any

from banned_users.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console(*, stderr: bool = True) -> Any:
    """Create a Rich console instance targeting stderr (default) or stdout."""
    console_class = _load_rich_console_class()
    return console_class(stderr=stderr)


def escape(value: object) -> str:
    """Escape Rich markup in user-supplied text such as paths or error messages.

    Without Rich nothing parses markup, so the text is returned as is.
    """
    try:
        from rich.markup import escape as rich_escape
    except ModuleNotFoundError:
        return str(value)
    return rich_escape(str(value))


class _ConsoleProxy:
    """``print``-compatible proxy that renders messages on stderr."""

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain stderr print."""
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects)


console = _ConsoleProxy()

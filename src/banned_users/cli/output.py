"""Console table and delimited-file output for query results.

This module is responsible for:

* Rendering records as a compact Rich table on stdout.
* Writing the same records as delimited text, guarded against silently
  overriding an existing file.

It never prompts: an existing target surfaces as
:class:`~banned_users.exceptions.OverwriteConflictError` and the
command decides whether to ask the user.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from banned_users.cli.console import escape, get_rich_console
from banned_users.core.delimited import encode_rows, format_value
from banned_users.core.models import UserRecord
from banned_users.exceptions import EnvironmentError, OverwriteConflictError
from banned_users.infra.filesystem import get_final_filepath, write_text

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_FILE = "no-name.txt"


def load_rich_table_class() -> type[Any]:
    """Import rich table lazily for result rendering."""
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table


class CommandOutput:
    """Print records to the console and save them to disk.

    Parameters
    ----------
    console:
        Rich console used for the table.  Defaults to a stdout console
        created on first use.
    """

    def __init__(self, console: Any | None = None) -> None:
        self._console = console

    @property
    def console(self) -> Any:
        if self._console is None:
            self._console = get_rich_console(stderr=False)
        return self._console

    # ------------------------------------------------------------------
    # Console
    # ------------------------------------------------------------------

    def print_table(self, records: Sequence[UserRecord], headers: Sequence[str] = ()) -> None:
        """Print *records* as a table; an empty *headers* hides the header row."""
        table_class = load_rich_table_class()

        column_count = len(headers) or (len(records[0].columns) if records else 0)
        table = table_class(
            show_header=bool(headers),
            header_style="bold magenta",
            box=None,
            pad_edge=False,
        )
        for index in range(column_count):
            table.add_column(headers[index] if headers else "")

        for record in records:
            table.add_row(*(escape(format_value(value)) for value in record.as_row()))

        self.console.print(table)

    # ------------------------------------------------------------------
    # File
    # ------------------------------------------------------------------

    def print_file(
        self,
        path: str,
        records: Sequence[UserRecord],
        headers: Sequence[str] = (),
        separator: str = " ",
        default_filename: str = DEFAULT_OUTPUT_FILE,
        force_override: bool = False,
    ) -> str:
        """Write *records* as delimited text and return the final path.

        Raises
        ------
        OverwriteConflictError
            If the resolved file exists and *force_override* is false.
            Nothing is written in that case.
        """
        filepath = get_final_filepath(path, default_filename)

        if Path(filepath).exists() and not force_override:
            raise OverwriteConflictError(filepath)

        write_text(filepath, encode_rows(records, headers, separator))
        logger.info("Saved %d record(s) to %s", len(records), filepath)
        return filepath

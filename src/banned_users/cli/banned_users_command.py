"""``banned-users get`` — list banned users and optionally save them.

Flow:

1. Validate the raw input (all violations reported together).
2. Resolve flags into the three query filters.
3. Query the repository.
4. Print the table.
5. When a destination is given, write the file; on an existing target
   ask for confirmation and retry with the override forced, or report
   that nothing was saved.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from banned_users.cli.console import console, escape
from banned_users.cli.output import CommandOutput
from banned_users.cli.prompts import confirm_overwrite
from banned_users.config import DEFAULT_OUTPUT_FILENAME, DEFAULT_OUTPUT_SEPARATOR
from banned_users.core.input_validator import InputValidator
from banned_users.core.models import COLUMN_HEADERS, ResolvedOptions, UserRecord
from banned_users.core.options_resolver import resolve_options
from banned_users.core.protocols import UserRepository
from banned_users.exceptions import OverwriteConflictError

logger = logging.getLogger(__name__)

NOT_SAVED_MESSAGE = "File not overridden. Content not saved to file."


class GetBannedUsersCommand:
    """Wire validation, resolution, query and output for one run.

    Collaborators are injected so each step can be replaced in tests.
    """

    def __init__(
        self,
        validator: InputValidator,
        repository: UserRepository,
        output: CommandOutput,
        *,
        resolver: Callable[[Mapping[str, Any]], ResolvedOptions] = resolve_options,
        confirm: Callable[[str], bool] = confirm_overwrite,
        separator: str = DEFAULT_OUTPUT_SEPARATOR,
        output_filename: str = DEFAULT_OUTPUT_FILENAME,
    ) -> None:
        self._validator = validator
        self._repository = repository
        self._output = output
        self._resolver = resolver
        self._confirm = confirm
        self._separator = separator
        self._output_filename = output_filename

    def handle(self, raw_input: Mapping[str, Any]) -> str | None:
        """Run the command; return the saved file path, if any."""
        self._validator.validate(raw_input)
        options = self._resolver(raw_input)

        records = self._repository.get_banned_users(
            COLUMN_HEADERS,
            options.trashed,
            options.admin,
            options.active,
            options.sort_by,
        )

        headers = list(COLUMN_HEADERS) if raw_input.get("with_headers") else []
        self._output.print_table(records, headers)

        save_to = raw_input.get("save_to")
        if not save_to:
            return None
        return self._save(save_to, records, headers, force=bool(raw_input.get("force")))

    def _save(
        self,
        path: str,
        records: Sequence[UserRecord],
        headers: Sequence[str],
        *,
        force: bool,
    ) -> str | None:
        try:
            filepath = self._write(path, records, headers, force_override=force)
        except OverwriteConflictError as exc:
            if not self._confirm(exc.path):
                logger.info("Override of %s declined", exc.path)
                console.print(f"[yellow]{NOT_SAVED_MESSAGE}[/yellow]")
                return None
            filepath = self._write(path, records, headers, force_override=True)

        console.print(f"[bold green]Content saved to[/bold green] `{escape(filepath)}`.")
        return filepath

    def _write(
        self,
        path: str,
        records: Sequence[UserRecord],
        headers: Sequence[str],
        *,
        force_override: bool,
    ) -> str:
        return self._output.print_file(
            path,
            records,
            headers,
            self._separator,
            self._output_filename,
            force_override=force_override,
        )

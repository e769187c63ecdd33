"""Tests for CommandOutput (cli/output.py).

The table is rendered into an in-memory Rich console; files are written
under ``tmp_path``.
"""

from __future__ import annotations

import io
from datetime import datetime
from pathlib import Path

import pytest
from rich.console import Console

from banned_users.cli.output import DEFAULT_OUTPUT_FILE, CommandOutput
from banned_users.core.models import COLUMN_HEADERS, UserRecord
from banned_users.exceptions import OverwriteConflictError


def _record(user_id: int = 1, email: str = "alice@example.com") -> UserRecord:
    return UserRecord(
        columns=COLUMN_HEADERS,
        values=(user_id, email, datetime(2024, 1, 1, 12, 0, 0)),
    )


def _output() -> tuple[CommandOutput, io.StringIO]:
    buffer = io.StringIO()
    return CommandOutput(Console(file=buffer, width=120, color_system=None)), buffer


# ---------------------------------------------------------------------------
# print_table
# ---------------------------------------------------------------------------

class TestPrintTable:
    def test_rows_and_headers(self) -> None:
        output, buffer = _output()
        output.print_table([_record()], list(COLUMN_HEADERS))

        rendered = buffer.getvalue()
        assert "banned_at" in rendered
        assert "alice@example.com" in rendered
        assert "2024-01-01 12:00:00" in rendered

    def test_headers_omitted(self) -> None:
        output, buffer = _output()
        output.print_table([_record()], [])

        rendered = buffer.getvalue()
        assert "banned_at" not in rendered
        assert "alice@example.com" in rendered

    def test_markup_is_printed_verbatim(self) -> None:
        output, buffer = _output()
        output.print_table([_record(email="[bold]x@example.com")])
        assert "[bold]x@example.com" in buffer.getvalue()

    def test_empty_result(self) -> None:
        output, buffer = _output()
        output.print_table([], list(COLUMN_HEADERS))
        assert "email" in buffer.getvalue()


# ---------------------------------------------------------------------------
# print_file
# ---------------------------------------------------------------------------

class TestPrintFile:
    def test_writes_new_file_and_returns_path(self, tmp_path: Path) -> None:
        output, _ = _output()
        target = str(tmp_path / "out" / "file.csv")

        final = output.print_file(target, [_record()], [], ";", "banned_users.csv")

        assert final == target
        assert Path(target).read_text(encoding="utf-8") == "1;alice@example.com;2024-01-01 12:00:00\n"

    def test_header_row(self, tmp_path: Path) -> None:
        output, _ = _output()
        target = str(tmp_path / "file.csv")

        output.print_file(target, [_record()], list(COLUMN_HEADERS), ";")

        assert Path(target).read_text(encoding="utf-8").splitlines()[0] == "id;email;banned_at"

    def test_directory_gets_default_filename(self, tmp_path: Path) -> None:
        output, _ = _output()

        final = output.print_file(str(tmp_path / "exports"), [_record()], [], ";", "banned_users.csv")

        assert final == f"{tmp_path}/exports/banned_users.csv"
        assert Path(final).is_file()

    def test_fallback_default_filename(self, tmp_path: Path) -> None:
        output, _ = _output()
        final = output.print_file(str(tmp_path), [_record()])
        assert final.endswith("/" + DEFAULT_OUTPUT_FILE)

    def test_existing_file_without_force_raises_and_keeps_content(self, tmp_path: Path) -> None:
        output, _ = _output()
        target = tmp_path / "file.csv"
        target.write_text("original", encoding="utf-8")

        with pytest.raises(OverwriteConflictError) as exc_info:
            output.print_file(str(target), [_record()], [], ";")

        assert exc_info.value.path == str(target)
        assert target.read_text(encoding="utf-8") == "original"

    def test_existing_file_with_force_is_overwritten(self, tmp_path: Path) -> None:
        output, _ = _output()
        target = tmp_path / "file.csv"
        target.write_text("original", encoding="utf-8")

        final = output.print_file(str(target), [_record()], [], ";", force_override=True)

        assert final == str(target)
        assert target.read_text(encoding="utf-8") == "1;alice@example.com;2024-01-01 12:00:00\n"

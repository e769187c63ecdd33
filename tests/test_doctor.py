"""Tests for the ``banned-users doctor`` command (cli/doctor.py).

Databases are throwaway SQLite files; no server is contacted.

Coverage:
* Doctor returns SUCCESS when every check passes.
* Doctor returns GENERAL_ERROR when a check fails.
* Individual check functions return correct tuples.
* CLI routing dispatches to ``run_doctor``.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from sqlalchemy import Engine

from banned_users.cli import exit_codes
from banned_users.cli.doctor import (
    OK,
    _database_check,
    _os_check,
    _python_version_check,
    _sqlalchemy_version_check,
    run_doctor,
)
from banned_users.config import Settings


class TestChecks:
    def test_python_row(self) -> None:
        label, _value, status = _python_version_check()
        assert label == "Python"
        assert "OK" in status

    def test_sqlalchemy_row(self) -> None:
        label, value, status = _sqlalchemy_version_check()
        assert label == "SQLAlchemy"
        assert value.startswith("2.")
        assert "OK" in status

    def test_os_row(self) -> None:
        assert _os_check()[0] == "OS"

    def test_database_ok(self, engine: Engine, database_url: str) -> None:
        _label, _value, status = _database_check(database_url)
        assert "OK" in status

    def test_database_without_users_table_warns(self, tmp_path: Path) -> None:
        _label, value, status = _database_check(f"sqlite:///{tmp_path / 'empty.sqlite3'}")
        assert "WARN" in status
        assert "no users table" in value

    def test_invalid_url_fails(self) -> None:
        _label, _value, status = _database_check("not a url")
        assert "FAIL" in status

    def test_unreachable_database_fails(self, tmp_path: Path) -> None:
        url = f"sqlite:///{tmp_path / 'missing-dir' / 'db.sqlite3'}"
        _label, value, status = _database_check(url)
        assert "FAIL" in status
        assert "unreachable" in value


class TestRunDoctor:
    def test_success(self, engine: Engine, database_url: str) -> None:
        assert run_doctor(Settings(database_url=database_url)) == exit_codes.SUCCESS

    def test_failure(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch(
            "banned_users.cli.doctor._python_version_check",
            return_value=("Python", "3.8.0", "[red]FAIL (>=3.10 required)[/red]"),
        ):
            code = run_doctor(Settings(database_url="sqlite://"))
        assert code == exit_codes.GENERAL_ERROR
        assert "Some checks failed." in capsys.readouterr().err

    def test_warning_is_not_failure(self, tmp_path: Path) -> None:
        settings = Settings(database_url=f"sqlite:///{tmp_path / 'empty.sqlite3'}")
        assert run_doctor(settings) == exit_codes.SUCCESS


def test_cli_routes_database_url(database_url: str, engine: Engine) -> None:
    from banned_users.cli.app import main

    assert main(["doctor", "--database-url", database_url]) == exit_codes.SUCCESS


def test_database_value_with_brackets_is_printed_verbatim(
    capsys: pytest.CaptureFixture[str],
) -> None:
    with patch(
        "banned_users.cli.doctor._database_check",
        return_value=("Database", "sqlite:///[/x].db", OK),
    ):
        code = run_doctor(Settings(database_url="sqlite://"))

    assert code == exit_codes.SUCCESS
    assert "[/x]" in capsys.readouterr().err

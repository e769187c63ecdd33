"""Tests for filesystem helpers (infra/filesystem.py).

All paths live under ``tmp_path``; relative-path cases chdir into it.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from banned_users.infra.filesystem import (
    get_final_filepath,
    is_writable_recursive,
    looks_like_file,
    nearest_existing_ancestor,
    write_text,
)

DEFAULT_FILENAME = "banned_users.csv"


# ---------------------------------------------------------------------------
# get_final_filepath
# ---------------------------------------------------------------------------

class TestGetFinalFilepath:
    def test_existing_file_unchanged(self, tmp_path: Path) -> None:
        target = tmp_path / "report"
        target.write_text("x")
        assert get_final_filepath(str(target), DEFAULT_FILENAME) == str(target)

    def test_existing_directory_gets_default_filename(self, tmp_path: Path) -> None:
        assert get_final_filepath(str(tmp_path), DEFAULT_FILENAME) == f"{tmp_path}/{DEFAULT_FILENAME}"

    def test_missing_path_with_extension_unchanged(self, tmp_path: Path) -> None:
        target = str(tmp_path / "out" / "file.csv")
        assert get_final_filepath(target, DEFAULT_FILENAME) == target

    def test_missing_path_without_extension_is_directory(self, tmp_path: Path) -> None:
        target = str(tmp_path / "out")
        assert get_final_filepath(target, DEFAULT_FILENAME) == f"{target}/{DEFAULT_FILENAME}"

    def test_trailing_slash_not_doubled(self, tmp_path: Path) -> None:
        target = str(tmp_path / "out") + "/"
        assert get_final_filepath(target, DEFAULT_FILENAME) == f"{tmp_path}/out/{DEFAULT_FILENAME}"

    def test_relative_paths(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert get_final_filepath("out/file.csv", DEFAULT_FILENAME) == "out/file.csv"
        assert get_final_filepath("out", DEFAULT_FILENAME) == f"out/{DEFAULT_FILENAME}"


class TestLooksLikeFile:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("file.csv", True),
            ("out/archive.tar.gz", True),
            ("out", False),
            (".hidden", False),
            ("out/.config", False),
            # Directories with a dot are taken for files.
            ("reports.d", True),
        ],
    )
    def test_heuristic(self, path: str, expected: bool) -> None:
        assert looks_like_file(path) is expected


# ---------------------------------------------------------------------------
# Writability
# ---------------------------------------------------------------------------

class TestNearestExistingAncestor:
    def test_existing_path_is_its_own_ancestor(self, tmp_path: Path) -> None:
        assert nearest_existing_ancestor(tmp_path) == str(tmp_path)

    def test_walks_up_to_first_existing_parent(self, tmp_path: Path) -> None:
        (tmp_path / "a").mkdir()
        assert nearest_existing_ancestor(tmp_path / "a" / "b" / "c.csv") == str(tmp_path / "a")

    def test_relative_path_stops_at_current_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.chdir(tmp_path)
        assert nearest_existing_ancestor("no/such/dir/file.csv") == "."

    def test_terminates_when_nothing_exists(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Regression: the walk must end at the root even if no ancestor exists."""
        monkeypatch.setattr(Path, "exists", lambda self, **_kwargs: False)
        assert nearest_existing_ancestor("a/b/c/d") == "."
        assert nearest_existing_ancestor("/a/b/c/d") == "/"


class TestIsWritableRecursive:
    def test_missing_path_under_writable_directory(self, tmp_path: Path) -> None:
        assert is_writable_recursive(tmp_path / "new" / "dir" / "file.csv") is True

    def test_relative_path_uses_current_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.chdir(tmp_path)
        assert is_writable_recursive("out/file.csv") is True

    def test_checks_the_nearest_existing_ancestor(self, tmp_path: Path) -> None:
        with patch("banned_users.infra.filesystem.os.access", return_value=False) as access:
            assert is_writable_recursive(tmp_path / "x" / "y.csv") is False
        assert access.call_args[0][0] == str(tmp_path)


# ---------------------------------------------------------------------------
# write_text
# ---------------------------------------------------------------------------

def test_write_text_creates_missing_directories(tmp_path: Path) -> None:
    target = tmp_path / "deep" / "er" / "file.csv"
    write_text(str(target), "1;a@example.com\n")
    assert target.read_text(encoding="utf-8") == "1;a@example.com\n"

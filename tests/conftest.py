"""Shared pytest fixtures and configuration for the banned-users test suite.

Guidelines
----------
* No network access in any test.
* Databases are throwaway SQLite files under ``tmp_path``.
* Prompts are mocked at the questionary boundary.
* Core tests must be pure — no side effects.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import datetime, timedelta
from pathlib import Path

import pytest
from sqlalchemy import Engine, select
from sqlalchemy.orm import Session

from banned_users.infra.database import (
    ADMIN_ROLE,
    Role,
    User,
    build_engine,
    build_session_factory,
    create_schema,
    session_scope,
)

BANNED_AT = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of the tests."""
    for name in (
        "BANNED_USERS_DATABASE_URL",
        "BANNED_USERS_OUTPUT_SEPARATOR",
        "BANNED_USERS_OUTPUT_FILENAME",
        "BANNED_USERS_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'users.sqlite3'}"


@pytest.fixture
def engine(database_url: str) -> Iterator[Engine]:
    eng = build_engine(database_url)
    create_schema(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    with session_scope(build_session_factory(engine)) as sess:
        yield sess


@pytest.fixture
def add_user(session: Session) -> Callable[..., User]:
    """Factory inserting a user; banned, active, not trashed, not admin by default."""

    def _add(
        email: str,
        *,
        banned: bool = True,
        trashed: bool = False,
        activated: bool = True,
        admin: bool = False,
        banned_offset_days: int = 0,
    ) -> User:
        user = User(
            email=email,
            banned_at=BANNED_AT + timedelta(days=banned_offset_days) if banned else None,
            activated_at=BANNED_AT - timedelta(days=30) if activated else None,
            deleted_at=BANNED_AT + timedelta(days=1) if trashed else None,
        )
        if admin:
            role = session.scalars(select(Role).where(Role.name == ADMIN_ROLE)).first()
            if role is None:
                role = Role(name=ADMIN_ROLE)
            user.roles.append(role)
        session.add(user)
        session.commit()
        return user

    return _add

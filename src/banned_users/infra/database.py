"""SQLAlchemy schema and session handling for the user store.

The tool only reads users; the schema is declared here so the queries
are typed and so tests (and ``doctor``) can build a database from it.

Tables
------
* ``users``: ``banned_at``, ``activated_at`` and the soft-delete
  timestamp ``deleted_at`` drive every filter.
* ``roles``: named roles; the admin role is :data:`ADMIN_ROLE`.
* ``roles_users``: many-to-many association between the two.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from sqlalchemy import Column, DateTime, Engine, ForeignKey, Integer, String, Table, create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, relationship, sessionmaker

from banned_users.exceptions import DatabaseError

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"


class Base(DeclarativeBase):
    """Declarative base for the user-store tables."""


roles_users = Table(
    "roles_users",
    Base.metadata,
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class Role(Base):
    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    users: Mapped[list[User]] = relationship(secondary=roles_users, back_populates="roles")


class User(Base):
    """A stored account.

    A user is *banned* when ``banned_at`` is set and *trashed*
    (soft-deleted) when ``deleted_at`` is set.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    banned_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    activated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    roles: Mapped[list[Role]] = relationship(secondary=roles_users, back_populates="users")


QUERYABLE_COLUMNS: dict[str, Any] = {
    "id": User.id,
    "email": User.email,
    "banned_at": User.banned_at,
    "activated_at": User.activated_at,
    "deleted_at": User.deleted_at,
}
"""User attributes that may be projected or sorted on, by column name."""


def build_engine(database_url: str, *, echo: bool = False) -> Engine:
    """Create an engine for *database_url*, mapping URL errors to ours."""
    try:
        return create_engine(database_url, echo=echo)
    except (SQLAlchemyError, ValueError) as exc:
        raise DatabaseError(
            f"Invalid database URL: {exc}",
            hint="Set BANNED_USERS_DATABASE_URL or pass --database-url.",
        ) from exc


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, expire_on_commit=False)


def create_schema(engine: Engine) -> None:
    """Create every table that does not exist yet."""
    logger.debug("Creating user-store schema on %s", engine.url)
    Base.metadata.create_all(engine)


@contextmanager
def session_scope(factory: sessionmaker[Session]) -> Iterator[Session]:
    """Yield a read session that is always closed, rolled back on error."""
    session = factory()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

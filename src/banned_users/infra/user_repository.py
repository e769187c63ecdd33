"""SQLAlchemy backed implementation of :class:`~banned_users.core.protocols.UserRepository`.

This module is the **only** place in the codebase that builds user
queries.  SQLAlchemy exceptions are caught here and re-raised as
:class:`~banned_users.exceptions.DatabaseError`; nothing raw escapes
the infrastructure boundary.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy import Select, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from banned_users.core.models import QueryFilter, UserRecord
from banned_users.exceptions import DatabaseError
from banned_users.infra.database import ADMIN_ROLE, QUERYABLE_COLUMNS, Role, User

logger = logging.getLogger(__name__)

BANNED_AT_COLUMN = "banned_at"


class SqlUserRepository:
    """Concrete :class:`UserRepository` reading from a SQLAlchemy session.

    Usage::

        with session_scope(factory) as session:
            records = SqlUserRepository(session).get_banned_users(COLUMN_HEADERS)
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def get_banned_users(
        self,
        columns: Sequence[str],
        trashed: QueryFilter = QueryFilter.EXCLUDE,
        admin: QueryFilter = QueryFilter.INCLUDE,
        active: QueryFilter = QueryFilter.INCLUDE,
        sort_by: str = "email",
    ) -> list[UserRecord]:
        """Return banned users matching every filter, ascending by *sort_by*.

        Raises
        ------
        DatabaseError
            For unknown column names or any failure while querying.
        """
        projection = self._projection(columns)
        stmt = self.build_query(projection, trashed, admin, active, sort_by)
        logger.debug(
            "Querying banned users trashed=%s admin=%s active=%s sort_by=%s",
            trashed.value, admin.value, active.value, sort_by,
        )

        try:
            rows = self._session.execute(stmt).all()
        except SQLAlchemyError as exc:
            raise DatabaseError(
                f"Could not query banned users: {exc}",
                hint="Check that the database is reachable and migrated.",
            ) from exc

        logger.debug("Fetched %d banned user(s)", len(rows))
        return [UserRecord(columns=projection, values=tuple(row)) for row in rows]

    # ------------------------------------------------------------------
    # Query construction
    # ------------------------------------------------------------------

    @staticmethod
    def build_query(
        projection: Sequence[str],
        trashed: QueryFilter,
        admin: QueryFilter,
        active: QueryFilter,
        sort_by: str,
    ) -> Select[Any]:
        """Compose the SELECT for the given filters (no I/O)."""
        if sort_by not in QUERYABLE_COLUMNS:
            raise DatabaseError(f"Cannot sort by unknown column `{sort_by}`.")

        stmt = select(*(QUERYABLE_COLUMNS[name] for name in projection)).where(
            User.banned_at.is_not(None),
        )

        if trashed is QueryFilter.EXCLUDE:
            stmt = stmt.where(User.deleted_at.is_(None))
        elif trashed is QueryFilter.ONLY:
            stmt = stmt.where(User.deleted_at.is_not(None))

        is_admin = User.roles.any(Role.name == ADMIN_ROLE)
        if admin is QueryFilter.EXCLUDE:
            stmt = stmt.where(~is_admin)
        elif admin is QueryFilter.ONLY:
            stmt = stmt.where(is_admin)

        if active is QueryFilter.ONLY:
            stmt = stmt.where(User.activated_at.is_not(None))

        return stmt.order_by(QUERYABLE_COLUMNS[sort_by].asc())

    @staticmethod
    def _projection(columns: Sequence[str]) -> tuple[str, ...]:
        """Deduplicate *columns*, reject unknown names, append ``banned_at``."""
        projection: list[str] = []
        for name in columns:
            if name not in QUERYABLE_COLUMNS:
                raise DatabaseError(f"Cannot select unknown column `{name}`.")
            if name not in projection:
                projection.append(name)
        if BANNED_AT_COLUMN not in projection:
            projection.append(BANNED_AT_COLUMN)
        return tuple(projection)

"""Protocols (interfaces) consumed by the core and CLI layers.

These define the contracts that infrastructure adapters must satisfy.
Callers depend ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from banned_users.core.models import QueryFilter, UserRecord


class UserRepository(Protocol):
    """Contract for user-store query backends.

    Any object that implements :meth:`get_banned_users` with the correct
    signature satisfies this protocol structurally (no explicit
    inheritance required).
    """

    def get_banned_users(
        self,
        columns: Sequence[str],
        trashed: QueryFilter = QueryFilter.EXCLUDE,
        admin: QueryFilter = QueryFilter.INCLUDE,
        active: QueryFilter = QueryFilter.INCLUDE,
        sort_by: str = "email",
    ) -> list[UserRecord]:
        """Return banned users matching every filter, ordered by *sort_by*.

        The ``banned_at`` column is part of every returned record, even
        when *columns* omits it.

        Raises
        ------
        DatabaseError
            When the backend fails to run the query.
        """
        ...  # pragma: no cover

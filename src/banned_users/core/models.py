"""Domain models for banned-users.

All models are **frozen** dataclasses or enums — immutable value objects
with no behaviour beyond data access.  They carry zero I/O and no
dependency on the storage or console libraries.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

COLUMN_HEADERS: tuple[str, ...] = ("id", "email", "banned_at")
"""Columns printed and saved by ``banned-users get``; also the sort whitelist."""

DEFAULT_SORT_FIELD = "email"


# ---------------------------------------------------------------------------
# Three-valued query filter
# ---------------------------------------------------------------------------

class QueryFilter(enum.Enum):
    """How a query axis treats the records it is about."""

    EXCLUDE = "exclude"
    """Leave the matching records out."""

    INCLUDE = "include"
    """Return the matching records alongside the others."""

    ONLY = "only"
    """Return the matching records and nothing else."""


# ---------------------------------------------------------------------------
# Resolved command options
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ResolvedOptions:
    """Normalised filter settings for one invocation."""

    trashed: QueryFilter = QueryFilter.EXCLUDE
    """Soft-deleted users."""

    admin: QueryFilter = QueryFilter.INCLUDE
    """Users holding the ``admin`` role."""

    active: QueryFilter = QueryFilter.INCLUDE
    """Users with a non-null activation timestamp."""

    sort_by: str = DEFAULT_SORT_FIELD
    """Column the result is ordered by, ascending."""


# ---------------------------------------------------------------------------
# Query result row
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class UserRecord:
    """Read-only projection of one stored user.

    ``columns`` and ``values`` are parallel tuples in projection order.
    """

    columns: tuple[str, ...]
    values: tuple[Any, ...]

    def __post_init__(self) -> None:
        if len(self.columns) != len(self.values):
            raise ValueError(
                f"{len(self.columns)} columns but {len(self.values)} values",
            )

    def __getitem__(self, column: str) -> Any:
        try:
            return self.values[self.columns.index(column)]
        except ValueError:
            raise KeyError(column) from None

    def get(self, column: str, default: Any = None) -> Any:
        if column in self.columns:
            return self[column]
        return default

    def as_row(self) -> tuple[Any, ...]:
        return self.values

    def as_dict(self) -> dict[str, Any]:
        return dict(zip(self.columns, self.values))

"""Pure resolution of raw CLI flags into :class:`ResolvedOptions`.

Every function in this module is a **pure** transformation; no I/O,
no side effects, fully deterministic.

Resolution rules, per axis and independent of each other:

* trashed: default EXCLUDE; ``--with-trashed`` → INCLUDE;
  ``--trashed-only`` → ONLY.
* admin: default INCLUDE; ``--no-admin`` → EXCLUDE;
  ``--admin-only`` → ONLY.
* active: default INCLUDE; ``--active-users-only`` → ONLY.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from banned_users.core.models import DEFAULT_SORT_FIELD, QueryFilter, ResolvedOptions
from banned_users.exceptions import IncompatibleOptionsError

EXCLUSIVE_OPTION_PAIRS: tuple[tuple[str, str], ...] = (
    ("with_trashed", "trashed_only"),
    ("no_admin", "admin_only"),
)
"""Raw-input keys that must never both be truthy."""


def option_flag(key: str) -> str:
    """Render a raw-input key as the flag the user typed (``--no-admin``)."""
    return "--" + key.replace("_", "-")


def find_incompatible_pairs(raw: Mapping[str, Any]) -> list[tuple[str, str]]:
    """Return every exclusive pair whose members are both set in *raw*."""
    return [
        (first, second)
        for first, second in EXCLUSIVE_OPTION_PAIRS
        if raw.get(first) and raw.get(second)
    ]


def _resolve_trashed(raw: Mapping[str, Any]) -> QueryFilter:
    if raw.get("trashed_only"):
        return QueryFilter.ONLY
    if raw.get("with_trashed"):
        return QueryFilter.INCLUDE
    return QueryFilter.EXCLUDE


def _resolve_admin(raw: Mapping[str, Any]) -> QueryFilter:
    if raw.get("admin_only"):
        return QueryFilter.ONLY
    if raw.get("no_admin"):
        return QueryFilter.EXCLUDE
    return QueryFilter.INCLUDE


def _resolve_active(raw: Mapping[str, Any]) -> QueryFilter:
    if raw.get("active_users_only"):
        return QueryFilter.ONLY
    return QueryFilter.INCLUDE


def resolve_options(raw: Mapping[str, Any]) -> ResolvedOptions:
    """Resolve raw flags into the filters applied to the user query.

    Raises
    ------
    IncompatibleOptionsError
        If both members of an exclusive pair are set.  The first
        offending pair is reported.
    """
    conflicts = find_incompatible_pairs(raw)
    if conflicts:
        first, second = conflicts[0]
        raise IncompatibleOptionsError(option_flag(first), option_flag(second))

    sort_by = raw.get("sort_by")
    return ResolvedOptions(
        trashed=_resolve_trashed(raw),
        admin=_resolve_admin(raw),
        active=_resolve_active(raw),
        sort_by=DEFAULT_SORT_FIELD if sort_by is None else sort_by,
    )

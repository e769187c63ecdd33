"""Core layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or database I/O; probes are injected.
* No imports from ``cli`` or ``infra``.
"""

from banned_users.core.delimited import encode_rows
from banned_users.core.input_validator import InputValidator
from banned_users.core.models import COLUMN_HEADERS, QueryFilter, ResolvedOptions, UserRecord
from banned_users.core.options_resolver import resolve_options
from banned_users.core.protocols import UserRepository

__all__: list[str] = [
    "COLUMN_HEADERS",
    "InputValidator",
    "QueryFilter",
    "ResolvedOptions",
    "UserRecord",
    "UserRepository",
    "encode_rows",
    "resolve_options",
]

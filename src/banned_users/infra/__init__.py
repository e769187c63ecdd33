"""Infrastructure layer — external system integration.

This layer wraps all interaction with the user database (SQLAlchemy)
and the operating system.  Every raw third-party exception is caught
here and re-raised as a
:class:`~banned_users.exceptions.BannedUsersError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from banned_users.infra.database import (
    ADMIN_ROLE,
    Role,
    User,
    build_engine,
    build_session_factory,
    create_schema,
    session_scope,
)
from banned_users.infra.filesystem import (
    get_final_filepath,
    is_writable_recursive,
    nearest_existing_ancestor,
    write_text,
)
from banned_users.infra.user_repository import SqlUserRepository

__all__: list[str] = [
    "ADMIN_ROLE",
    "Role",
    "SqlUserRepository",
    "User",
    "build_engine",
    "build_session_factory",
    "create_schema",
    "get_final_filepath",
    "is_writable_recursive",
    "nearest_existing_ancestor",
    "session_scope",
    "write_text",
]

"""Custom exception hierarchy for banned-users.

All exceptions that cross layer boundaries must inherit from
:class:`BannedUsersError`.  Raw third-party exceptions (e.g. from
SQLAlchemy) must NEVER propagate beyond the infrastructure layer — they
are caught and re-raised as a typed subclass defined here.

Hierarchy
---------
BannedUsersError
├── ValidationError
│   └── IncompatibleOptionsError
├── OverwriteConflictError
├── DatabaseError
├── ConfigurationError
└── EnvironmentError
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence


class BannedUsersError(Exception):
    """Base exception for all banned-users errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Input validation ------------------------------------------------------

class ValidationError(BannedUsersError):
    """Raised when the command input breaks one or more rules.

    ``errors`` maps each offending field to the list of messages
    collected for it, so the user sees every violation at once.
    """

    def __init__(
        self,
        errors: Mapping[str, Sequence[str]],
        *,
        hint: str | None = None,
    ) -> None:
        self.errors: dict[str, list[str]] = {
            field: list(messages) for field, messages in errors.items()
        }
        messages = [msg for field_msgs in self.errors.values() for msg in field_msgs]
        super().__init__("\n".join(messages) or "Invalid input.", hint=hint)


class IncompatibleOptionsError(ValidationError):
    """Raised when two mutually exclusive options are passed together."""

    def __init__(
        self,
        option_one: str,
        option_two: str,
        *,
        errors: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        self.option_one = option_one
        self.option_two = option_two
        pair_message = (
            f"The passed options `{option_one}` and `{option_two}` are "
            "incompatible. Please only pass one of them."
        )
        super().__init__(
            errors or {option_one: [pair_message]},
            hint=f"Pass either `{option_one}` or `{option_two}`, not both.",
        )


# --- Output ----------------------------------------------------------------

class OverwriteConflictError(BannedUsersError):
    """Raised when the output file exists and overriding was not forced."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Cannot override existing file {path}.",
            hint="Confirm the override or pass --force.",
        )
        self.path = path


# --- Storage ---------------------------------------------------------------

class DatabaseError(BannedUsersError):
    """Raised when the user store cannot be queried."""


# --- Environment / configuration --------------------------------------------

class ConfigurationError(BannedUsersError):
    """Raised when the settings read from the environment are invalid."""


class EnvironmentError(BannedUsersError):
    """Raised when a required runtime dependency is not available."""

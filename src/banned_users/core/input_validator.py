"""Input validation for ``banned-users get``.

The validator runs before option resolution so that the user sees every
problem with the invocation at once.  It is pure apart from the
writability probe, which is injected by the CLI layer
(dependency inversion, as for the repository).
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from banned_users.core.models import COLUMN_HEADERS
from banned_users.core.options_resolver import (
    EXCLUSIVE_OPTION_PAIRS,
    find_incompatible_pairs,
    option_flag,
)
from banned_users.exceptions import IncompatibleOptionsError, ValidationError

WITHOUT_FIELD_MESSAGE = "The option `{option}` is only allowed without the `{without}` option."
SORT_FIELD_REQUIRED_MESSAGE = "The sort-by field is required."
SORT_FIELD_IN_MESSAGE = "The sort-by field must be one of: {allowed}."
NOT_WRITABLE_MESSAGE = (
    "The path `{path}` nor its first existing parent directory `{ancestor}` is writable."
)


class InputValidator:
    """Check raw ``get`` input against the command rules.

    Parameters
    ----------
    is_writable:
        Returns whether the nearest existing ancestor of a path is
        writable.
    nearest_ancestor:
        Returns that nearest existing ancestor, used in the message.
    allowed_sort_fields:
        Whitelist for the ``sort_by`` field.
    """

    def __init__(
        self,
        is_writable: Callable[[str], bool],
        nearest_ancestor: Callable[[str], str],
        *,
        allowed_sort_fields: Sequence[str] = COLUMN_HEADERS,
    ) -> None:
        self._is_writable = is_writable
        self._nearest_ancestor = nearest_ancestor
        self._allowed_sort_fields: tuple[str, ...] = tuple(allowed_sort_fields)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate(self, raw: Mapping[str, Any]) -> None:
        """Validate *raw*, collecting every violation before raising.

        Raises
        ------
        IncompatibleOptionsError
            If an exclusive option pair is violated.  It still carries
            every other collected error.
        ValidationError
            For any other violation.
        """
        errors: dict[str, list[str]] = {}

        self._check_exclusive_pairs(raw, errors)
        self._check_sort_field(raw, errors)
        self._check_destination(raw, errors)

        conflicts = find_incompatible_pairs(raw)
        if conflicts:
            first, second = conflicts[0]
            raise IncompatibleOptionsError(
                option_flag(first), option_flag(second), errors=errors,
            )
        if errors:
            raise ValidationError(errors)

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    @staticmethod
    def _check_exclusive_pairs(raw: Mapping[str, Any], errors: dict[str, list[str]]) -> None:
        for first, second in EXCLUSIVE_OPTION_PAIRS:
            for option, without in ((first, second), (second, first)):
                if raw.get(option) and raw.get(without):
                    errors.setdefault(option, []).append(
                        WITHOUT_FIELD_MESSAGE.format(
                            option=option_flag(option), without=option_flag(without),
                        ),
                    )

    def _check_sort_field(self, raw: Mapping[str, Any], errors: dict[str, list[str]]) -> None:
        sort_by = raw.get("sort_by")
        if sort_by is None or (isinstance(sort_by, str) and not sort_by.strip()):
            errors.setdefault("sort_by", []).append(SORT_FIELD_REQUIRED_MESSAGE)
            return
        if sort_by not in self._allowed_sort_fields:
            errors.setdefault("sort_by", []).append(
                SORT_FIELD_IN_MESSAGE.format(allowed=", ".join(self._allowed_sort_fields)),
            )

    def _check_destination(self, raw: Mapping[str, Any], errors: dict[str, list[str]]) -> None:
        path = raw.get("save_to")
        if not path:
            return
        if not self._is_writable(path):
            errors.setdefault("save_to", []).append(
                NOT_WRITABLE_MESSAGE.format(path=path, ancestor=self._nearest_ancestor(path)),
            )

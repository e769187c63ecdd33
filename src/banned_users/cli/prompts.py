"""Interactive confirmation prompts for the CLI layer."""

from __future__ import annotations

import logging
from typing import Any

from banned_users.exceptions import EnvironmentError

logger = logging.getLogger(__name__)


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompts."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def confirm_overwrite(path: str) -> bool:
    """Ask whether the existing file at *path* may be overridden.

    Returns ``False`` when the user answers no or cancels the prompt
    (questionary returns ``None`` on Ctrl+C / Esc).
    """
    questionary = _import_questionary()
    answer: bool | None = questionary.confirm(
        f"The file `{path}` already exists and will be overridden. Do you want to continue?",
        default=False,
    ).ask()
    logger.debug("Overwrite confirmation for %s: %r", path, answer)
    return bool(answer)

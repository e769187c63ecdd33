"""Infrastructure: filesystem probes and writes for the file output.

Rules
-----
* Path walking is iterative and bounded by the depth of the path.
* No ``print()`` — callers handle user-facing output.
* OS errors (permission revoked mid-run, disk full) propagate unchanged.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Writability
# ---------------------------------------------------------------------------

def nearest_existing_ancestor(path: str | os.PathLike[str]) -> str:
    """Return *path* itself or its closest existing parent.

    The walk stops at the filesystem root for absolute paths and at
    ``.`` for relative ones, whether or not they exist.
    """
    current = Path(path)
    while not current.exists() and current != current.parent:
        current = current.parent
    return str(current)


def is_writable_recursive(path: str | os.PathLike[str]) -> bool:
    """Check whether the first existing entry on *path* is writable."""
    ancestor = nearest_existing_ancestor(path)
    writable = os.access(ancestor, os.W_OK)
    logger.debug("Nearest existing ancestor of %s is %s (writable=%s)", path, ancestor, writable)
    return writable


# ---------------------------------------------------------------------------
# Destination resolution
# ---------------------------------------------------------------------------

def looks_like_file(path: str | os.PathLike[str]) -> bool:
    """Guess from the last segment whether a missing *path* names a file.

    ``report.csv`` is a file, ``.hidden`` and ``out`` are directories.
    Directories whose names contain a dot are misclassified as files.
    """
    parts = Path(path).name.split(".")
    return len(parts) > 1 and bool(parts[0])


def get_final_filepath(path: str, default_filename: str) -> str:
    """Return the file to write for the user-supplied *path*.

    * an existing file is used as-is;
    * an existing directory gets *default_filename* appended;
    * a missing path is used as-is when :func:`looks_like_file`,
      otherwise treated as a directory.
    """
    target = Path(path)
    if target.exists():
        is_file = not target.is_dir()
    else:
        is_file = looks_like_file(path)

    if is_file:
        return path
    return path.rstrip("/") + "/" + default_filename


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

def write_text(filepath: str, content: str) -> None:
    """Create missing parent directories, then write *content*."""
    target = Path(filepath)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    logger.debug("Wrote %d characters to %s", len(content), filepath)

"""Delimiter-separated text encoding of query results.

Pure transforms: rows in, text out.  Writing the text to disk is the
output writer's job.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable, Sequence
from datetime import date, datetime
from typing import Any

from banned_users.core.models import UserRecord

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_value(value: Any) -> str:
    """Render one field: ``None`` → empty, datetimes without microseconds."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.strftime(DATETIME_FORMAT)
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def encode_rows(
    records: Iterable[UserRecord],
    headers: Sequence[str] = (),
    separator: str = ";",
) -> str:
    """Encode *records* as delimited text, one record per line.

    A header row is written only when *headers* is non-empty.  Fields
    containing the separator, quotes or newlines are quoted the way
    :mod:`csv` does it.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=separator, lineterminator="\n")
    if headers:
        writer.writerow(headers)
    for record in records:
        writer.writerow([format_value(value) for value in record.as_row()])
    return buffer.getvalue()

from __future__ import annotations
from datetime import date, datetime
from typing import Any


def normalize_str_or_none(value: Any) -> str | None:
    """Return a stripped string, or None for None and blank values."""

    if value is None:
        return None
    text = str(value).strip()
    return text or None

def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 date or timestamp coming from the API.

        Accepts datetime/date objects as-is, plain dates ("2024-01-10") and
        timestamps with a trailing "Z". Returns None when the value is missing
        or cannot be parsed.
        """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    text = str(value).strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None

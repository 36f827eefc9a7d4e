"""Timestamp coercion shared by the document models.

All timestamps are normalised to timezone-aware UTC datetimes, so calendar
years are the same for every viewer.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

# Integers up to this value are read as a bare calendar year, not epoch seconds.
_MAX_BARE_YEAR = 9999


def to_utc(value: Any) -> Optional[datetime]:
    """Coerce a stored timestamp into an aware UTC datetime.

    Accepts datetimes (naive ones are taken as UTC), ISO-8601 strings,
    epoch seconds, and bare year integers. Returns ``None`` for missing or
    unparseable values.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, int) and 0 < value <= _MAX_BARE_YEAR:
            return datetime(value, 1, 1, tzinfo=timezone.utc)
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if text.isdigit() and len(text) == 4:
            return datetime(int(text), 1, 1, tzinfo=timezone.utc)
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return to_utc(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


def to_iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def utc_now() -> datetime:
    return datetime.now(timezone.utc)

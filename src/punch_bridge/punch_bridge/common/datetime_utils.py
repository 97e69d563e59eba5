from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

# Same shapes SQLite's datetime() accepts for date/datetime strings.
_TIMESTAMP_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})"
    r"(?:[T ](\d{2}):(\d{2})(?::(\d{2})(?:\.\d+)?)?)?"
    r"\s*(Z|[+-]\d{2}:\d{2})?$",
    re.IGNORECASE,
)


def utc_now() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def to_iso_z(value: datetime) -> str:
    """Format as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` (UTC, millisecond precision)."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def now_iso() -> str:
    return to_iso_z(utc_now())


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a device timestamp into a naive UTC datetime truncated to seconds.

    Mirrors SQLite ``datetime()``: a trailing ``Z`` or ``+HH:MM`` offset is
    folded into UTC, a missing offset is taken as UTC, and anything that does
    not parse yields ``None``.
    """

    if not isinstance(value, str):
        return None

    m = _TIMESTAMP_RE.match(value.strip())
    if not m:
        return None

    year, month, day, hour, minute, second, tz = m.groups()
    try:
        parsed = datetime(
            int(year),
            int(month),
            int(day),
            int(hour or 0),
            int(minute or 0),
            int(second or 0),
        )
    except ValueError:
        return None

    if tz and tz.upper() != "Z":
        sign = 1 if tz[0] == "+" else -1
        hours, minutes = tz[1:].split(":")
        parsed -= sign * timedelta(hours=int(hours), minutes=int(minutes))

    return parsed

"""Resolve time ranges into lower timestamp bounds."""

import re
from datetime import datetime, timedelta

from token_watcher.types.sessions import TimeRange

_RANGE_DAYS = {
    TimeRange.WEEK: 7,
    TimeRange.MONTH: 30,
}

_FRACTION_RE = re.compile(r"(T\d{2}:\d{2}:\d{2})\.(\d+)")
_COMPACT_OFFSET_RE = re.compile(r"(T[\d:.]+[+-]\d{2})(\d{2})$")


def get_range_start(time_range: TimeRange, now: datetime | None = None) -> datetime | None:
    """Return the inclusive lower bound for a range, or None for all-time.

    "today" starts at local midnight; week and month are rolling windows
    ending at ``now``. The result is always timezone-aware.
    """
    if time_range == TimeRange.ALL:
        return None
    if now is None:
        now = datetime.now()
    now = now.astimezone()

    if time_range == TimeRange.TODAY:
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    return now - timedelta(days=_RANGE_DAYS[time_range])


def _normalize_iso(value: str) -> str:
    # fromisoformat before 3.11 wants exactly 3 or 6 fractional digits
    # and a colon in the UTC offset.
    value = value.replace("Z", "+00:00")
    value = _FRACTION_RE.sub(
        lambda m: m.group(1) + "." + (m.group(2) + "000000")[:6], value,
    )
    return _COMPACT_OFFSET_RE.sub(r"\1:\2", value)


def parse_timestamp(value) -> datetime | None:
    """Parse an ISO 8601 transcript timestamp into an aware datetime.

    Returns None when the value is missing or unparseable. Naive values
    are taken as local time. Fractions beyond microseconds are truncated.
    """
    if not isinstance(value, str) or not value:
        return None
    try:
        # ISO 8601 format: "2026-02-13T12:00:00.000Z"
        parsed = datetime.fromisoformat(_normalize_iso(value))
    except ValueError:
        return None
    return parsed if parsed.tzinfo is not None else parsed.astimezone()

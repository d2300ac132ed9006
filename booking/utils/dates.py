"""Calendar-day and duration helpers shared by the event workflow and config."""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, List, Union

DateLike = Union[str, date, datetime]

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
}


def to_calendar_day(value: DateLike) -> date:
    """Normalize an ISO-8601 string, date or datetime to a UTC calendar day.

    Datetimes carrying an offset are converted to UTC before the date part is
    taken; naive datetimes are treated as UTC. Plain dates pass through.

    Raises:
        ValueError: If the value cannot be interpreted as a date
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid date: {value!r}")
    raw = value.strip()
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        if "T" in raw or " " in raw:
            return to_calendar_day(datetime.fromisoformat(raw))
        return date.fromisoformat(raw)
    except ValueError:
        raise ValueError(f"Invalid date format, expected ISO 8601: {value!r}")


def find_duplicate_days(values: Iterable[DateLike]) -> List[date]:
    """Return the calendar days that occur more than once, in first-seen order."""
    seen = set()
    duplicates: List[date] = []
    for value in values:
        day = to_calendar_day(value)
        if day in seen and day not in duplicates:
            duplicates.append(day)
        seen.add(day)
    return duplicates


def parse_duration(value: Union[str, int, timedelta]) -> timedelta:
    """Parse durations such as '15m', '7d', '12h', '30s' or a bare seconds count."""
    if isinstance(value, timedelta):
        return value
    if isinstance(value, int):
        return timedelta(seconds=value)
    match = _DURATION_RE.match(value or "")
    if not match:
        raise ValueError(f"Invalid duration '{value}'. Use <number>[s|m|h|d], e.g. 15m or 7d")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})

"""Calendar-date helpers shared by the pricing and availability engines.

All comparisons are done on plain ``datetime.date`` values. Anything that
carries a time of day is reduced to a calendar day first:

- ``to_local_date`` drops the time of day in the value's own zone (used for
  "today", which is always a local notion).
- ``to_calendar_date`` recovers the calendar day a stored boundary was meant
  to be. Stores hand back date-only columns as UTC midnight instants, so an
  aware datetime is read in UTC before the time of day is dropped.
"""

import datetime as dt
from typing import Any

SATURDAY = 5
SUNDAY = 6


def to_local_date(value: dt.date | dt.datetime | str) -> dt.date:
    """Reduce a date-like value to its calendar day in its own timezone.

    Args:
        value: date, datetime (naive or aware) or ISO 8601 string

    Returns:
        Calendar date
    """
    if isinstance(value, str):
        value = _parse_iso(value)
    if isinstance(value, dt.datetime):
        return value.date()
    return value


def to_calendar_date(value: dt.date | dt.datetime | str) -> dt.date:
    """Map a stored range boundary to the calendar day it denotes.

    "2025-07-01", "2025-07-01T00:00:00Z" and a UTC-midnight datetime all map
    to 2025-07-01, whatever the local timezone of the caller.

    Args:
        value: date, datetime or ISO 8601 string

    Returns:
        Calendar date
    """
    if isinstance(value, str):
        value = _parse_iso(value)
    if isinstance(value, dt.datetime):
        if value.tzinfo is not None:
            value = value.astimezone(dt.timezone.utc)
        return value.date()
    return value


def _parse_iso(value: str) -> dt.date | dt.datetime:
    """Parse an ISO date or datetime string."""
    text = value.strip()
    if len(text) == 10:
        return dt.date.fromisoformat(text)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return dt.datetime.fromisoformat(text)


def parse_timestamp(value: Any) -> dt.datetime | None:
    """Parse a stored ISO timestamp; naive values are taken as UTC.

    Returns None for missing or empty values.
    """
    if not value:
        return None
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = dt.datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed


def each_day_of_interval(start: dt.date, end: dt.date) -> list[dt.date]:
    """List every calendar date from start to end, both inclusive.

    Returns an empty list when end is before start.
    """
    return [start + dt.timedelta(days=i) for i in range((end - start).days + 1)]


def stay_nights(check_in: dt.date, check_out: dt.date) -> list[dt.date]:
    """List the nights of a stay.

    The check-out day is never a night, so a stay from the 24th to the 26th
    has two nights (24th and 25th). Zero or negative intervals have none.

    Args:
        check_in: Check-in date
        check_out: Check-out date (exclusive)

    Returns:
        Ascending list of night dates
    """
    return [check_in + dt.timedelta(days=i) for i in range((check_out - check_in).days)]


def is_weekend(day: dt.date) -> bool:
    """Check whether a date falls on Saturday or Sunday."""
    return day.weekday() in (SATURDAY, SUNDAY)


def ranges_overlap_or_contain(
    point: dt.date,
    start: dt.date,
    end: dt.date,
) -> bool:
    """Check whether point lies in the inclusive interval [start, end]."""
    return start <= point <= end

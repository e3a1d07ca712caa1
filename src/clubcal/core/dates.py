"""Pure date-window logic - no I/O dependencies.

Weeks start on Monday and are numbered per ISO 8601, so a week belongs to the
year that owns its Thursday. Datetimes are normalized to a single reference
timezone (UTC unless told otherwise) before their calendar date is taken;
naive datetimes are assumed to already be in that timezone.
"""

import re
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Iterable

UTC = timezone.utc

_WEEK_KEY_PATTERN = re.compile(r"^(\d{4})-W(\d{2})$")


def to_local(dt: datetime, tz: tzinfo = UTC) -> datetime:
    """Express a datetime in the reference timezone."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(tz)


def to_aware(dt: datetime, tz: tzinfo = UTC) -> datetime:
    """Attach the reference timezone to a naive datetime."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz)
    return dt


def to_day(value: date | datetime, tz: tzinfo = UTC) -> date:
    """Calendar date of a date or datetime, after timezone normalization."""
    if isinstance(value, datetime):
        return to_local(value, tz).date()
    return value


def start_of_week(value: date | datetime, tz: tzinfo = UTC) -> date:
    """Monday of the week containing the given day."""
    d = to_day(value, tz)
    return d - timedelta(days=d.weekday())


def days_window(start: date | datetime, count: int, tz: tzinfo = UTC) -> list[date]:
    """`count` consecutive days beginning at `start`, inclusive."""
    first = to_day(start, tz)
    return [first + timedelta(days=i) for i in range(max(count, 0))]


def add_days(value, n: int):
    """Shift a date or datetime by n calendar days."""
    return value + timedelta(days=n)


def subtract_days(value, n: int):
    return add_days(value, -n)


def is_same_day(a: date | datetime, b: date | datetime, tz: tzinfo = UTC) -> bool:
    """Compare by calendar date only."""
    return to_day(a, tz) == to_day(b, tz)


def week_key(value: date | datetime, tz: tzinfo = UTC) -> str:
    """
    ISO 8601 week key, e.g. "2025-W01".

    The year is the ISO year, which differs from the calendar year around
    New Year: 2024-12-31 falls in the week of Thursday 2025-01-02 and is keyed
    "2025-W01".
    """
    iso_year, iso_week, _ = to_day(value, tz).isocalendar()
    return f"{iso_year}-W{iso_week:02d}"


def week_keys(days: Iterable[date | datetime], tz: tzinfo = UTC) -> list[str]:
    """Distinct week keys covering a sequence of days, in first-seen order."""
    keys: list[str] = []
    for d in days:
        key = week_key(d, tz)
        if key not in keys:
            keys.append(key)
    return keys


def parse_week_key(key: str) -> tuple[int, int]:
    """Split a week key into (year, week). Raises ValueError if malformed."""
    match = _WEEK_KEY_PATTERN.match(key.strip())
    if not match:
        raise ValueError(f"Invalid week key: {key!r} (expected YYYY-Www)")
    year, week = int(match.group(1)), int(match.group(2))
    # fromisocalendar rejects week 53 in 52-week years
    date.fromisocalendar(year, week, 1)
    return year, week


def week_start_from_key(key: str) -> date:
    """Monday of the week identified by a week key."""
    year, week = parse_week_key(key)
    return date.fromisocalendar(year, week, 1)

"""Pure event filtering - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from enum import Enum
from typing import Callable

from .dates import UTC, to_aware, to_day, to_local
from .events import Category, Event, EventClass, classify_by_organizer
from .search import SearchMode


class TimeOfDay(Enum):
    """
    Buckets of the event start hour (local to the reference timezone).

    morning 05:00-11:59, afternoon 12:00-16:59, evening 17:00-20:59,
    night 21:00-04:59.
    """

    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"


def time_of_day_for(hour: int) -> TimeOfDay:
    if 5 <= hour < 12:
        return TimeOfDay.MORNING
    if 12 <= hour < 17:
        return TimeOfDay.AFTERNOON
    if 17 <= hour < 21:
        return TimeOfDay.EVENING
    return TimeOfDay.NIGHT


@dataclass(frozen=True)
class DateRange:
    """Inclusive range. Bounds may be dates (whole days) or datetimes."""

    start: date | datetime
    end: date | datetime


@dataclass(frozen=True)
class EventTypes:
    club_events: bool = True
    social_events: bool = True

    def allows(self, event_class: EventClass) -> bool:
        if event_class is EventClass.CLUB:
            return self.club_events
        return self.social_events


@dataclass(frozen=True)
class FilterSpec:
    """Independent, AND-combined event predicates."""

    categories: frozenset[Category] = field(default_factory=frozenset)
    event_types: EventTypes = field(default_factory=EventTypes)
    search_query: str = ""
    search_mode: SearchMode = SearchMode.EXACT
    date_range: DateRange | None = None
    location: str | None = None
    time_of_day: TimeOfDay | None = None
    has_availability: bool | None = None


def _in_range(start: datetime, date_range: DateRange, tz: tzinfo) -> bool:
    lower, upper = date_range.start, date_range.end

    if isinstance(lower, datetime):
        if to_aware(start, tz) < to_aware(lower, tz):
            return False
    elif to_day(start, tz) < lower:
        return False

    if isinstance(upper, datetime):
        if to_aware(start, tz) > to_aware(upper, tz):
            return False
    elif to_day(start, tz) > upper:
        return False

    return True


def matches(
    event: Event,
    spec: FilterSpec,
    classify: Callable[[Event], EventClass] = classify_by_organizer,
    tz: tzinfo = UTC,
) -> bool:
    """Check a single event against every predicate of the spec."""
    if spec.categories and spec.categories.isdisjoint(event.categories):
        return False

    if not spec.event_types.allows(classify(event)):
        return False

    if spec.date_range and not _in_range(event.start, spec.date_range, tz):
        return False

    if spec.location and spec.location.lower() not in event.location.lower():
        return False

    if spec.time_of_day and time_of_day_for(to_local(event.start, tz).hour) is not spec.time_of_day:
        return False

    if spec.has_availability and not event.has_availability:
        return False

    return True


def apply_filters(
    events: list[Event],
    spec: FilterSpec,
    classify: Callable[[Event], EventClass] = classify_by_organizer,
    tz: tzinfo = UTC,
) -> list[Event]:
    """
    Filter events by a spec, keeping input order.

    Pure function - no I/O. The search query is not applied here; see
    search_events.
    """
    return [e for e in events if matches(e, spec, classify, tz)]


def active_filter_count(spec: FilterSpec) -> int:
    """Number of filter groups narrowing the result (search excluded)."""
    count = 0
    if spec.categories:
        count += 1
    if not spec.event_types.club_events or not spec.event_types.social_events:
        count += 1
    if spec.date_range:
        count += 1
    if spec.location:
        count += 1
    if spec.time_of_day:
        count += 1
    if spec.has_availability:
        count += 1
    return count

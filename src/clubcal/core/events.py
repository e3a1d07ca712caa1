"""Pure event domain logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from enum import Enum

from .dates import UTC, to_aware, to_day, to_local


class Category(Enum):
    """Closed set of event categories."""

    CAREER = "Career"
    FOOD = "Food"
    FUN = "Fun"
    AFTERNOON = "Afternoon"
    EVENTS = "Events"
    ACADEMIC = "Academic"
    NETWORKING = "Networking"
    SOCIAL = "Social"
    SPORTS = "Sports"
    ARTS = "Arts"
    TECH = "Tech"
    WELLNESS = "Wellness"

    @classmethod
    def parse(cls, value: "str | Category") -> "Category":
        """Case-insensitive lookup by value. Raises ValueError if unknown."""
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        raise ValueError(f"Unknown category: {value!r}")


class EventClass(Enum):
    """Club vs social split used by the event-type filter."""

    CLUB = "club"
    SOCIAL = "social"


class SortKey(Enum):
    DATE = "date"
    POPULARITY = "popularity"
    RECENT = "recent"


def _parse_datetime(value: str) -> datetime:
    # fromisoformat only accepts a trailing "Z" from Python 3.11 on
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def _parse_flag(data: dict, *keys: str) -> bool | None:
    for key in keys:
        if data.get(key) is not None:
            return bool(data[key])
    return None


@dataclass(frozen=True)
class Event:
    """
    An event record as supplied by the event source.

    `category` is the primary category; `categories` holds every category of
    the record and always starts with the primary one. `is_club_event` and
    `is_social_event` are the source's explicit flags, None when it sent none.
    """

    id: str
    start: datetime
    category: Category
    title: str = ""
    description: str = ""
    end: datetime | None = None
    location: str = ""
    organizer: str = ""
    organizer_type: str = "individual"
    tags: tuple[str, ...] = ()
    capacity: int | None = None
    attendee_count: int = 0
    created_at: datetime | None = None
    categories: tuple[Category, ...] = ()
    is_club_event: bool | None = None
    is_social_event: bool | None = None

    def __post_init__(self):
        ordered = dict.fromkeys((self.category, *self.categories))
        object.__setattr__(self, "categories", tuple(ordered))

    @property
    def has_availability(self) -> bool:
        """Open spots remain (events without a capacity are never full)."""
        if not self.capacity:
            return True
        return self.attendee_count < self.capacity

    def available_spots(self) -> int | None:
        """Spots left, or None if the event has no capacity."""
        if not self.capacity:
            return None
        return max(0, self.capacity - self.attendee_count)

    def duration_minutes(self) -> int | None:
        """Event duration in minutes, or None if no end time."""
        if not self.end:
            return None
        return int((self.end - self.start).total_seconds() / 60)

    def format_time(self, tz: tzinfo = UTC) -> str:
        """Format the start time for display."""
        return to_local(self.start, tz).strftime("%H:%M")

    @classmethod
    def from_dict(cls, data: dict) -> "Event":
        """
        Create Event from an event-source record.

        Accepts the camelCase API shape (startTime, rsvpCounts, ...) as well
        as snake_case keys. Raises ValueError/KeyError on unusable records.
        """
        start_raw = data.get("startTime") or data.get("start_time") or data["start"]
        end_raw = data.get("endTime") or data.get("end_time") or data.get("end")

        categories_raw = data.get("categories") or []
        category_raw = data.get("category")
        if not category_raw and categories_raw:
            category_raw = categories_raw[0]
        if not category_raw:
            raise ValueError(f"Event {data.get('id')!r} has no category")

        organizer = data.get("organizer") or {}
        if isinstance(organizer, dict):
            organizer_name = organizer.get("name", "")
            organizer_type = organizer.get("type", "individual")
        else:
            organizer_name = str(organizer)
            organizer_type = data.get("organizer_type", "individual")

        rsvp = data.get("rsvpCounts") or {}
        attendee_count = data.get("attendee_count")
        if attendee_count is None:
            attendee_count = rsvp.get("going", 0) + rsvp.get("maybe", 0)

        created_raw = data.get("createdAt") or data.get("created_at")

        return cls(
            id=str(data["id"]),
            start=_parse_datetime(start_raw),
            category=Category.parse(category_raw),
            title=data.get("title", "") or "",
            description=data.get("description", "") or "",
            end=_parse_datetime(end_raw) if end_raw else None,
            location=data.get("location", "") or "",
            organizer=organizer_name,
            organizer_type=organizer_type,
            tags=tuple(data.get("tags") or ()),
            capacity=data.get("capacity"),
            attendee_count=int(attendee_count),
            created_at=_parse_datetime(created_raw) if created_raw else None,
            categories=tuple(Category.parse(c) for c in categories_raw),
            is_club_event=_parse_flag(data, "isClubEvent", "is_club_event"),
            is_social_event=_parse_flag(data, "isSocialEvent", "is_social_event"),
        )

    def to_dict(self) -> dict:
        """Serialize to the camelCase record shape."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "startTime": self.start.isoformat(),
            "endTime": self.end.isoformat() if self.end else None,
            "location": self.location,
            "category": self.category.value,
            "categories": [c.value for c in self.categories],
            "organizer": {"name": self.organizer, "type": self.organizer_type},
            "isClubEvent": self.is_club_event,
            "isSocialEvent": self.is_social_event,
            "tags": list(self.tags),
            "capacity": self.capacity,
            "attendee_count": self.attendee_count,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


def classify_by_organizer(event: Event) -> EventClass:
    """
    Default classifier.

    The source's explicit flags win: a club flag makes a club event, a social
    flag alone a social one. Without flags, events organized by a club are
    club events.
    """
    if event.is_club_event:
        return EventClass.CLUB
    if event.is_social_event is not None or event.is_club_event is not None:
        return EventClass.SOCIAL
    if event.organizer_type == "club":
        return EventClass.CLUB
    return EventClass.SOCIAL


def _timestamp(dt: datetime, tz: tzinfo = UTC) -> float:
    return to_aware(dt, tz).timestamp()


def sort_events(
    events: list[Event],
    key: SortKey | str = SortKey.DATE,
    tz: tzinfo = UTC,
) -> list[Event]:
    """
    Stable sort of events.

    DATE sorts ascending by start. POPULARITY and RECENT sort descending by
    attendee count and creation time. Ties keep their input order. Naive
    datetimes are read in `tz`.
    """
    key = SortKey(key)
    match key:
        case SortKey.DATE:
            return sorted(events, key=lambda e: _timestamp(e.start, tz))
        case SortKey.POPULARITY:
            return sorted(events, key=lambda e: e.attendee_count, reverse=True)
        case SortKey.RECENT:
            return sorted(
                events,
                key=lambda e: _timestamp(e.created_at, tz) if e.created_at else float("-inf"),
                reverse=True,
            )


def events_on_day(events: list[Event], day: date, tz: tzinfo = UTC) -> list[Event]:
    """Events starting, ending or running through the given calendar day."""
    result = []
    for e in events:
        first = to_day(e.start, tz)
        last = max(first, to_day(e.end, tz)) if e.end else first
        if first <= day <= last:
            result.append(e)
    return result


def upcoming_events(
    events: list[Event],
    now: datetime,
    limit: int | None = None,
    tz: tzinfo = UTC,
) -> list[Event]:
    """Events starting after `now`, soonest first."""
    cutoff = _timestamp(now, tz)
    upcoming = sort_events([e for e in events if _timestamp(e.start, tz) > cutoff], tz=tz)
    return upcoming[:limit] if limit and limit > 0 else upcoming

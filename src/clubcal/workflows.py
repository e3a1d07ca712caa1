"""Shared workflow layer between the CLI and other front ends.

Resolves adapters from config and composes them with the core controllers.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .adapters.file_events import JsonFileEventSource
from .adapters.file_store import FileKeyValueStore
from .adapters.http_events import HttpEventSource
from .adapters.http_scorer import HttpSearchScorer
from .adapters.keyword_scorer import KeywordScorer
from .config import DATA_DIR, Config
from .core.dates import UTC, parse_week_key, week_key
from .core.controller import FilterController
from .core.events import Event, events_on_day, sort_events
from .core.navigator import CalendarNavigator
from .core.schedule import ScheduledEventStore
from .ports import EventSource, SearchScorer

logger = logging.getLogger(__name__)


def get_timezone(config: Config) -> tzinfo:
    """Resolve the reference timezone, falling back to UTC."""
    try:
        return ZoneInfo(config.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone {config.timezone!r}, using UTC")
        return UTC


def get_event_source(config: Config) -> EventSource:
    """Resolve the event source from config."""
    if config.events_url:
        return HttpEventSource(config.events_url, timeout=config.http_timeout)
    if config.events_file:
        return JsonFileEventSource(Path(config.events_file).expanduser())
    return JsonFileEventSource(DATA_DIR / "events.json")


def get_scorer(config: Config) -> SearchScorer:
    """Resolve the semantic search scorer from config."""
    if config.scorer_url:
        return HttpSearchScorer(config.scorer_url, timeout=config.http_timeout)
    return KeywordScorer()


def get_store(config: Config) -> ScheduledEventStore:
    """Resolve the scheduled-event store directory from config."""
    if config.schedule_dir:
        return ScheduledEventStore(FileKeyValueStore(Path(config.schedule_dir).expanduser()))
    return ScheduledEventStore(FileKeyValueStore(DATA_DIR))


def build_filter_controller(config: Config, events: list[Event]) -> FilterController:
    """Filter controller wired with the configured scorer and timezone."""
    controller = FilterController(
        events,
        scorer=get_scorer(config),
        tz=get_timezone(config),
        semantic_limit=config.semantic_limit,
    )
    controller.set_search_mode(config.search_mode)
    return controller


def build_navigator(config: Config, anchor: date | None = None, days: int | None = None) -> CalendarNavigator:
    """Navigator anchored at `anchor` (today if omitted)."""
    navigator = CalendarNavigator(initial_date=anchor, view_days=config.view_days, tz=get_timezone(config))
    if days is not None:
        navigator.set_view_days(days)
    return navigator


def resolve_week_key(week: str | None = None, day: date | None = None, tz: tzinfo = UTC) -> str:
    """
    Week key from an explicit key, a day inside the week, or today.

    Raises ValueError for a malformed key.
    """
    if week:
        parse_week_key(week)
        return week.strip()
    return week_key(day or datetime.now(tz).date())


@dataclass
class DayView:
    """One day of the visible calendar window."""

    day: date
    week_key: str
    events: list[Event] = field(default_factory=list)
    scheduled_ids: set[str] = field(default_factory=set)

    def is_scheduled(self, event: Event) -> bool:
        return event.id in self.scheduled_ids


def calendar_view(
    navigator: CalendarNavigator,
    events: list[Event],
    store: ScheduledEventStore,
    tz: tzinfo = UTC,
) -> list[DayView]:
    """Events per displayed day, with the pinned ids of each day's week."""
    ordered = sort_events(events, tz=tz)
    scheduled = {key: store.ids_for(key) for key in navigator.week_keys}
    views = []
    for day in navigator.display_days:
        key = week_key(day)
        views.append(
            DayView(
                day=day,
                week_key=key,
                events=events_on_day(ordered, day, tz),
                scheduled_ids=scheduled[key],
            )
        )
    return views


def scheduled_events(
    events: list[Event],
    store: ScheduledEventStore,
    week: str | None = None,
    tz: tzinfo = UTC,
) -> list[Event]:
    """Known events pinned to a week, or to any week when `week` is None."""
    ids = store.ids_for(week) if week else store.all_scheduled_ids()
    return sort_events([e for e in events if e.id in ids], tz=tz)

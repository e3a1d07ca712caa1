"""Filter state controller - composes search, filtering and sorting."""

from dataclasses import replace
from datetime import date, datetime, tzinfo
from typing import Callable, Sequence

from .dates import UTC
from .events import Category, Event, EventClass, SortKey, classify_by_organizer, sort_events
from .filters import DateRange, FilterSpec, TimeOfDay, active_filter_count, apply_filters
from .search import SearchMode, parse_search_mode, search_events


class FilterController:
    """
    Holds an event list and the current FilterSpec.

    filtered_events runs search -> filter -> date sort and is memoized per
    (event list, spec), so a semantic scorer is consulted at most once for
    each distinct state.
    """

    def __init__(
        self,
        events: Sequence[Event] = (),
        classify: Callable[[Event], EventClass] = classify_by_organizer,
        scorer: Callable[[list[Event], str], Sequence[Event]] | None = None,
        tz: tzinfo = UTC,
        semantic_limit: int | None = None,
        spec: FilterSpec | None = None,
    ):
        self.classify = classify
        self.scorer = scorer
        self.tz = tz
        self.semantic_limit = semantic_limit
        self.spec = spec or FilterSpec()
        self._events: tuple[Event, ...] = tuple(events)
        self._version = 0
        self._cache_key: tuple[int, FilterSpec] | None = None
        self._cache: list[Event] = []

    @property
    def events(self) -> tuple[Event, ...]:
        return self._events

    def set_events(self, events: Sequence[Event]) -> None:
        self._events = tuple(events)
        self._version += 1

    @property
    def filtered_events(self) -> list[Event]:
        key = (self._version, self.spec)
        if key != self._cache_key:
            self._cache = self._compute()
            self._cache_key = key
        return list(self._cache)

    def _compute(self) -> list[Event]:
        result = list(self._events)
        if self.spec.search_query.strip():
            result = search_events(
                result,
                self.spec.search_query,
                self.spec.search_mode,
                scorer=self.scorer,
                limit=self.semantic_limit,
            )
        result = apply_filters(result, self.spec, self.classify, self.tz)
        return sort_events(result, SortKey.DATE, self.tz)

    @property
    def active_filter_count(self) -> int:
        return active_filter_count(self.spec)

    # Mutators

    def toggle_category(self, category: Category | str) -> None:
        category = Category.parse(category)
        self.spec = replace(self.spec, categories=self.spec.categories ^ {category})

    def set_categories(self, categories) -> None:
        self.spec = replace(self.spec, categories=frozenset(Category.parse(c) for c in categories))

    def toggle_event_type(self, event_class: EventClass | str) -> None:
        event_class = EventClass(event_class)
        types = self.spec.event_types
        if event_class is EventClass.CLUB:
            types = replace(types, club_events=not types.club_events)
        else:
            types = replace(types, social_events=not types.social_events)
        self.spec = replace(self.spec, event_types=types)

    def set_search_query(self, query: str) -> None:
        self.spec = replace(self.spec, search_query=query)

    def set_search_mode(self, mode: SearchMode | str) -> None:
        """Raises InvalidSearchMode for unknown modes and leaves the FilterSpec untouched."""
        self.spec = replace(self.spec, search_mode=parse_search_mode(mode))

    def set_date_range(self, start: date | datetime, end: date | datetime) -> None:
        self.spec = replace(self.spec, date_range=DateRange(start, end))

    def clear_date_range(self) -> None:
        self.spec = replace(self.spec, date_range=None)

    def set_location(self, location: str | None) -> None:
        self.spec = replace(self.spec, location=location or None)

    def set_time_of_day(self, time_of_day: TimeOfDay | str | None) -> None:
        if time_of_day is not None:
            time_of_day = TimeOfDay(time_of_day)
        self.spec = replace(self.spec, time_of_day=time_of_day)

    def set_has_availability(self, has_availability: bool) -> None:
        self.spec = replace(self.spec, has_availability=has_availability)

    def clear_filters(self) -> None:
        """Reset everything, search included."""
        self.spec = FilterSpec()

    def clear_all_filters(self) -> None:
        """Reset the filters but keep the search query and mode."""
        self.spec = FilterSpec(
            search_query=self.spec.search_query,
            search_mode=self.spec.search_mode,
        )

"""Functional core - pure business logic with no I/O."""

from .dates import start_of_week, days_window, add_days, subtract_days, is_same_day, week_key, week_keys
from .events import Category, Event, EventClass, SortKey, classify_by_organizer, sort_events
from .search import SearchMode, InvalidSearchMode, search_events
from .filters import DateRange, EventTypes, FilterSpec, TimeOfDay, apply_filters, active_filter_count
from .schedule import ScheduledEventStore, PersistenceReadFailure, PersistenceWriteFailure
from .navigator import CalendarNavigator, CalendarWindowState
from .controller import FilterController

__all__ = [
    # Dates
    "start_of_week",
    "days_window",
    "add_days",
    "subtract_days",
    "is_same_day",
    "week_key",
    "week_keys",
    # Events
    "Category",
    "Event",
    "EventClass",
    "SortKey",
    "classify_by_organizer",
    "sort_events",
    # Search
    "SearchMode",
    "InvalidSearchMode",
    "search_events",
    # Filters
    "DateRange",
    "EventTypes",
    "FilterSpec",
    "TimeOfDay",
    "apply_filters",
    "active_filter_count",
    # Schedule
    "ScheduledEventStore",
    "PersistenceReadFailure",
    "PersistenceWriteFailure",
    # Controllers
    "CalendarNavigator",
    "CalendarWindowState",
    "FilterController",
]

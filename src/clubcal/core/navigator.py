"""Navigable calendar day window.

CalendarWindowState is an immutable value; the module-level functions are
pure transitions over it. CalendarNavigator holds the current state for a
rendering surface and applies transitions in place.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime, tzinfo
from typing import Callable

from .dates import UTC, add_days, days_window, start_of_week, subtract_days, to_day, week_keys

MIN_VIEW_DAYS = 1
MAX_VIEW_DAYS = 15
DEFAULT_VIEW_DAYS = 7


@dataclass(frozen=True)
class CalendarWindowState:
    """Anchor date, window length and an optional selected day."""

    current_date: date
    view_days: int = DEFAULT_VIEW_DAYS
    selected_date: date | None = None

    def __post_init__(self):
        if not MIN_VIEW_DAYS <= self.view_days <= MAX_VIEW_DAYS:
            raise ValueError(
                f"view_days must be between {MIN_VIEW_DAYS} and {MAX_VIEW_DAYS}, got {self.view_days}"
            )

    @property
    def display_days(self) -> list[date]:
        """Days shown, starting on the Monday of the anchor's week."""
        return days_window(start_of_week(self.current_date), self.view_days)

    @property
    def week_keys(self) -> list[str]:
        """ISO week keys touched by the displayed days."""
        return week_keys(self.display_days)


def go_to_today(state: CalendarWindowState, today: date) -> CalendarWindowState:
    return replace(state, current_date=to_day(today))


def go_to(state: CalendarWindowState, target: date | datetime, tz: tzinfo = UTC) -> CalendarWindowState:
    return replace(state, current_date=to_day(target, tz))


def next_period(state: CalendarWindowState) -> CalendarWindowState:
    """Page forward by one window length."""
    return replace(state, current_date=add_days(state.current_date, state.view_days))


def previous_period(state: CalendarWindowState) -> CalendarWindowState:
    """Page back by one window length."""
    return replace(state, current_date=subtract_days(state.current_date, state.view_days))


def with_view_days(state: CalendarWindowState, days: int) -> CalendarWindowState:
    """Change the window length; out-of-range values leave the state as is."""
    if not MIN_VIEW_DAYS <= days <= MAX_VIEW_DAYS:
        return state
    return replace(state, view_days=days)


def select_date(state: CalendarWindowState, day: date | datetime, tz: tzinfo = UTC) -> CalendarWindowState:
    return replace(state, selected_date=to_day(day, tz))


def clear_selection(state: CalendarWindowState) -> CalendarWindowState:
    return replace(state, selected_date=None)


class CalendarNavigator:
    """
    Stateful wrapper around the window transitions.

    Datetimes are converted to `tz` before their date is taken. Without a
    clock, "today" is the current date in `tz`.
    """

    def __init__(
        self,
        initial_date: date | datetime | None = None,
        view_days: int = DEFAULT_VIEW_DAYS,
        clock: Callable[[], date] | None = None,
        tz: tzinfo = UTC,
    ):
        self.tz = tz
        self._clock = clock or (lambda: datetime.now(tz).date())
        self.state = CalendarWindowState(
            current_date=to_day(initial_date or self._clock(), tz),
            view_days=view_days,
        )

    @property
    def current_date(self) -> date:
        return self.state.current_date

    @property
    def view_days(self) -> int:
        return self.state.view_days

    @property
    def selected_date(self) -> date | None:
        return self.state.selected_date

    @property
    def display_days(self) -> list[date]:
        return self.state.display_days

    @property
    def week_keys(self) -> list[str]:
        return self.state.week_keys

    def today(self) -> None:
        self.state = go_to_today(self.state, self._clock())

    def goto(self, target: date | datetime) -> None:
        self.state = go_to(self.state, target, self.tz)

    def next(self) -> None:
        self.state = next_period(self.state)

    def previous(self) -> None:
        self.state = previous_period(self.state)

    def set_view_days(self, days: int) -> None:
        self.state = with_view_days(self.state, days)

    def select(self, day: date | datetime) -> None:
        self.state = select_date(self.state, day, self.tz)

    def clear_selection(self) -> None:
        self.state = clear_selection(self.state)

"""Tests for core event filtering."""

from datetime import date, datetime, timedelta, timezone

import pytest

from clubcal.core.events import Category, Event, EventClass
from clubcal.core.filters import (
    DateRange,
    EventTypes,
    FilterSpec,
    TimeOfDay,
    active_filter_count,
    apply_filters,
    time_of_day_for,
)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def make_event():
    """Factory for creating events."""
    def _make(event_id: str, start: datetime, category: Category = Category.SOCIAL, **kwargs) -> Event:
        return Event(id=event_id, start=start, category=category, **kwargs)
    return _make


@pytest.fixture
def sample_events(make_event):
    return [
        make_event("a", utc(2025, 3, 10, 9), Category.SOCIAL, location="Student Union", organizer_type="club"),
        make_event("b", utc(2025, 3, 12, 18), Category.ACADEMIC, location="Library Room 2"),
        make_event("c", utc(2025, 3, 14, 22), Category.SPORTS, location="Gym", capacity=10, attendee_count=10),
        make_event("d", utc(2025, 3, 15, 13), Category.FOOD, location="", organizer_type="club", capacity=50),
    ]


def ids(events):
    return [e.id for e in events]


class TestTimeOfDayBuckets:
    @pytest.mark.parametrize(
        "hour, bucket",
        [
            (5, TimeOfDay.MORNING),
            (11, TimeOfDay.MORNING),
            (12, TimeOfDay.AFTERNOON),
            (16, TimeOfDay.AFTERNOON),
            (17, TimeOfDay.EVENING),
            (20, TimeOfDay.EVENING),
            (21, TimeOfDay.NIGHT),
            (23, TimeOfDay.NIGHT),
            (0, TimeOfDay.NIGHT),
            (4, TimeOfDay.NIGHT),
        ],
    )
    def test_boundaries(self, hour, bucket):
        assert time_of_day_for(hour) is bucket


class TestApplyFilters:
    def test_empty_spec_returns_input_unchanged(self, sample_events):
        reversed_events = list(reversed(sample_events))
        assert apply_filters(reversed_events, FilterSpec()) == reversed_events

    def test_category_scenario(self, make_event):
        events = [
            make_event("a", datetime.fromisoformat("2025-03-10T09:00:00+00:00"), Category.SOCIAL),
            make_event("b", datetime.fromisoformat("2025-03-12T18:00:00+00:00"), Category.ACADEMIC),
        ]
        spec = FilterSpec(categories=frozenset({Category.SOCIAL}))
        assert ids(apply_filters(events, spec)) == ["a"]

    def test_multiple_categories(self, sample_events):
        spec = FilterSpec(categories=frozenset({Category.SPORTS, Category.SOCIAL}))
        assert ids(apply_filters(sample_events, spec)) == ["a", "c"]

    def test_any_category_matches(self):
        event = Event.from_dict(
            {"id": "potluck", "startTime": "2025-03-10T18:00:00Z", "categories": ["Food", "Social"]}
        )
        spec = FilterSpec(categories=frozenset({Category.SOCIAL}))
        assert ids(apply_filters([event], spec)) == ["potluck"]
        spec = FilterSpec(categories=frozenset({Category.SPORTS}))
        assert apply_filters([event], spec) == []

    def test_club_flag_hidden_with_club_events(self):
        event = Event.from_dict(
            {
                "id": "flagged",
                "startTime": "2025-03-10T18:00:00Z",
                "categories": ["Social"],
                "organizer": {"name": "Sam", "type": "individual"},
                "isClubEvent": True,
            }
        )
        assert apply_filters([event], FilterSpec(event_types=EventTypes(club_events=False))) == []
        assert ids(apply_filters([event], FilterSpec(event_types=EventTypes(social_events=False)))) == ["flagged"]

    def test_club_events_hidden(self, sample_events):
        spec = FilterSpec(event_types=EventTypes(club_events=False))
        assert ids(apply_filters(sample_events, spec)) == ["b", "c"]

    def test_social_events_hidden(self, sample_events):
        spec = FilterSpec(event_types=EventTypes(social_events=False))
        assert ids(apply_filters(sample_events, spec)) == ["a", "d"]

    def test_both_types_hidden(self, sample_events):
        spec = FilterSpec(event_types=EventTypes(club_events=False, social_events=False))
        assert apply_filters(sample_events, spec) == []

    def test_custom_classifier(self, sample_events):
        spec = FilterSpec(event_types=EventTypes(social_events=False))
        everything_is_club = lambda e: EventClass.CLUB
        assert ids(apply_filters(sample_events, spec, classify=everything_is_club)) == ["a", "b", "c", "d"]

    def test_category_and_type_are_and_combined(self, sample_events):
        spec = FilterSpec(
            categories=frozenset({Category.SOCIAL, Category.ACADEMIC}),
            event_types=EventTypes(club_events=False),
        )
        assert ids(apply_filters(sample_events, spec)) == ["b"]

    def test_date_range_inclusive_days(self, sample_events):
        spec = FilterSpec(date_range=DateRange(date(2025, 3, 12), date(2025, 3, 14)))
        assert ids(apply_filters(sample_events, spec)) == ["b", "c"]

    def test_date_range_datetime_bounds_inclusive(self, sample_events):
        spec = FilterSpec(date_range=DateRange(utc(2025, 3, 10, 9), utc(2025, 3, 12, 18)))
        assert ids(apply_filters(sample_events, spec)) == ["a", "b"]

    def test_date_range_uses_reference_timezone(self, make_event):
        # 02:00 UTC on the 11th is the evening of the 10th in UTC-5
        events = [make_event("late", utc(2025, 3, 11, 2))]
        spec = FilterSpec(date_range=DateRange(date(2025, 3, 10), date(2025, 3, 10)))
        assert apply_filters(events, spec) == []
        assert ids(apply_filters(events, spec, tz=timezone(timedelta(hours=-5)))) == ["late"]

    def test_inverted_date_range_matches_nothing(self, sample_events):
        spec = FilterSpec(date_range=DateRange(date(2025, 3, 15), date(2025, 3, 10)))
        assert apply_filters(sample_events, spec) == []

    def test_location_substring_case_insensitive(self, sample_events):
        spec = FilterSpec(location="library")
        assert ids(apply_filters(sample_events, spec)) == ["b"]

    def test_location_against_empty_location(self, sample_events):
        spec = FilterSpec(location="gym")
        assert ids(apply_filters(sample_events, spec)) == ["c"]

    @pytest.mark.parametrize(
        "bucket, expected",
        [
            (TimeOfDay.MORNING, ["a"]),
            (TimeOfDay.AFTERNOON, ["d"]),
            (TimeOfDay.EVENING, ["b"]),
            (TimeOfDay.NIGHT, ["c"]),
        ],
    )
    def test_time_of_day(self, sample_events, bucket, expected):
        assert ids(apply_filters(sample_events, FilterSpec(time_of_day=bucket))) == expected

    def test_time_of_day_uses_local_hour(self, make_event):
        # 15:00 UTC is 10:00 in UTC-5
        events = [make_event("x", utc(2025, 3, 10, 15))]
        spec = FilterSpec(time_of_day=TimeOfDay.MORNING)
        assert apply_filters(events, spec) == []
        assert ids(apply_filters(events, spec, tz=timezone(timedelta(hours=-5)))) == ["x"]

    def test_availability(self, sample_events):
        assert ids(apply_filters(sample_events, FilterSpec(has_availability=True))) == ["a", "b", "d"]

    def test_availability_false_is_no_restriction(self, sample_events):
        assert apply_filters(sample_events, FilterSpec(has_availability=False)) == sample_events

    def test_all_predicates_combined(self, sample_events):
        spec = FilterSpec(
            categories=frozenset({Category.FOOD, Category.SPORTS}),
            date_range=DateRange(date(2025, 3, 14), date(2025, 3, 31)),
            time_of_day=TimeOfDay.AFTERNOON,
            has_availability=True,
        )
        assert ids(apply_filters(sample_events, spec)) == ["d"]

    def test_preserves_input_order(self, sample_events):
        shuffled = [sample_events[2], sample_events[0], sample_events[3]]
        spec = FilterSpec(has_availability=True)
        assert ids(apply_filters(shuffled, spec)) == ["a", "d"]


class TestActiveFilterCount:
    def test_default_is_zero(self):
        assert active_filter_count(FilterSpec()) == 0

    def test_search_is_not_a_filter(self):
        assert active_filter_count(FilterSpec(search_query="pizza")) == 0

    def test_counts_each_group_once(self):
        spec = FilterSpec(
            categories=frozenset({Category.FOOD, Category.ARTS}),
            event_types=EventTypes(club_events=False, social_events=False),
            date_range=DateRange(date(2025, 1, 1), date(2025, 1, 31)),
            location="hall",
            time_of_day=TimeOfDay.NIGHT,
            has_availability=True,
        )
        assert active_filter_count(spec) == 6

    def test_availability_false_not_counted(self):
        assert active_filter_count(FilterSpec(has_availability=False)) == 0

"""Tests for core date-window logic."""

from datetime import date, datetime, timedelta, timezone

import pytest

from clubcal.core.dates import (
    add_days,
    days_window,
    is_same_day,
    parse_week_key,
    start_of_week,
    subtract_days,
    to_day,
    week_key,
    week_keys,
    week_start_from_key,
)

EST = timezone(timedelta(hours=-5))


@pytest.fixture
def today():
    return date(2025, 1, 15)  # Wednesday


class TestStartOfWeek:
    def test_midweek_goes_back_to_monday(self, today):
        assert start_of_week(today) == date(2025, 1, 13)

    def test_monday_is_its_own_start(self):
        assert start_of_week(date(2025, 1, 13)) == date(2025, 1, 13)

    def test_sunday_belongs_to_previous_monday(self):
        assert start_of_week(date(2025, 1, 19)) == date(2025, 1, 13)

    def test_crosses_year_boundary(self):
        assert start_of_week(date(2025, 1, 1)) == date(2024, 12, 30)

    def test_accepts_datetime(self):
        assert start_of_week(datetime(2025, 1, 15, 23, 0)) == date(2025, 1, 13)


class TestDaysWindow:
    def test_length_and_consecutive(self, today):
        days = days_window(start_of_week(today), 10)
        assert len(days) == 10
        for a, b in zip(days, days[1:]):
            assert b - a == timedelta(days=1)

    def test_starts_at_start(self, today):
        assert days_window(today, 3) == [date(2025, 1, 15), date(2025, 1, 16), date(2025, 1, 17)]

    def test_month_rollover(self):
        assert days_window(date(2025, 2, 27), 3) == [
            date(2025, 2, 27),
            date(2025, 2, 28),
            date(2025, 3, 1),
        ]

    @pytest.mark.parametrize("count", [0, -3])
    def test_non_positive_count_is_empty(self, today, count):
        assert days_window(today, count) == []

    @pytest.mark.parametrize("n", [1, 7, 15])
    def test_window_from_week_start_has_requested_length(self, n):
        for offset in range(14):
            d = date(2024, 12, 20) + timedelta(days=offset)
            days = days_window(start_of_week(d), n)
            assert len(days) == n
            assert days[0].weekday() == 0


class TestDayOffsets:
    def test_add_days_year_rollover(self):
        assert add_days(date(2024, 12, 30), 3) == date(2025, 1, 2)

    def test_subtract_days_leap_year(self):
        assert subtract_days(date(2024, 3, 1), 1) == date(2024, 2, 29)

    def test_datetime_keeps_time(self):
        assert add_days(datetime(2025, 1, 31, 18, 30), 1) == datetime(2025, 2, 1, 18, 30)


class TestIsSameDay:
    def test_ignores_time_of_day(self):
        assert is_same_day(datetime(2025, 1, 15, 0, 1), datetime(2025, 1, 15, 23, 59))

    def test_date_and_datetime(self, today):
        assert is_same_day(today, datetime(2025, 1, 15, 12, 0))
        assert not is_same_day(today, datetime(2025, 1, 16, 0, 0))

    def test_normalizes_to_reference_timezone(self):
        # 02:00 UTC on the 16th is still the 15th in UTC-5
        late = datetime(2025, 1, 16, 2, 0, tzinfo=timezone.utc)
        assert not is_same_day(late, date(2025, 1, 15))
        assert is_same_day(late, date(2025, 1, 15), tz=EST)

    def test_naive_datetimes_are_taken_as_reference_time(self):
        assert to_day(datetime(2025, 1, 16, 2, 0), tz=EST) == date(2025, 1, 16)


class TestWeekKey:
    def test_regular_week(self, today):
        assert week_key(today) == "2025-W03"

    def test_zero_padded(self):
        assert week_key(date(2025, 3, 5)) == "2025-W10"

    def test_december_day_in_next_years_first_week(self):
        # Tuesday 2024-12-31, whose Thursday is 2025-01-02
        assert week_key(date(2024, 12, 31)) == "2025-W01"

    def test_january_day_in_previous_years_last_week(self):
        # Friday 2021-01-01, whose Thursday is 2020-12-31
        assert week_key(date(2021, 1, 1)) == "2020-W53"

    def test_stable_within_a_week(self):
        monday = date(2024, 12, 30)
        keys = {week_key(monday + timedelta(days=i)) for i in range(7)}
        assert keys == {"2025-W01"}

    def test_changes_across_weeks(self):
        assert week_key(date(2025, 1, 12)) != week_key(date(2025, 1, 13))

    def test_timezone_normalized(self):
        # Monday 03:00 UTC is still Sunday in UTC-5
        dt = datetime(2025, 1, 13, 3, 0, tzinfo=timezone.utc)
        assert week_key(dt) == "2025-W03"
        assert week_key(dt, tz=EST) == "2025-W02"

    def test_week_keys_for_window(self):
        days = days_window(date(2025, 1, 13), 15)
        assert week_keys(days) == ["2025-W03", "2025-W04", "2025-W05"]


class TestParseWeekKey:
    def test_round_trip_to_monday(self):
        assert week_start_from_key("2025-W01") == date(2024, 12, 30)

    def test_parse(self):
        assert parse_week_key("2025-W10") == (2025, 10)

    @pytest.mark.parametrize("key", ["2025-10", "2025-W1", "W10-2025", "2025-W00", "2025-W54", ""])
    def test_malformed(self, key):
        with pytest.raises(ValueError):
            parse_week_key(key)

    def test_week_53_only_in_long_years(self):
        assert parse_week_key("2020-W53") == (2020, 53)
        with pytest.raises(ValueError):
            parse_week_key("2025-W53")

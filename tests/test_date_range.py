"""Unit tests for the pure date helpers."""

import types
from datetime import date, datetime

import pytest
import pytz

from backend.config import FirstWeekday
from backend.date_range import (
    add_months, add_weeks, days_in_month, end_of_week, enumerate_dates,
    last_of_month, months_between, start_of_week, weekday_offset, weekday_order,
)


class TestWeekBoundaries:
    """start_of_week / end_of_week."""

    def test_monday_first(self):
        assert start_of_week(date(2024, 1, 17), FirstWeekday.MONDAY) == date(2024, 1, 15)
        assert end_of_week(date(2024, 1, 17), FirstWeekday.MONDAY) == date(2024, 1, 21)

    def test_sunday_first(self):
        assert start_of_week(date(2024, 1, 17), FirstWeekday.SUNDAY) == date(2024, 1, 14)
        assert end_of_week(date(2024, 1, 17), FirstWeekday.SUNDAY) == date(2024, 1, 20)

    def test_week_start_day_maps_to_itself(self):
        assert start_of_week(date(2024, 1, 15), FirstWeekday.MONDAY) == date(2024, 1, 15)
        assert start_of_week(date(2024, 1, 14), FirstWeekday.SUNDAY) == date(2024, 1, 14)

    def test_time_of_day_is_ignored(self):
        late = datetime(2024, 1, 21, 23, 59, 59)
        early = datetime(2024, 1, 21, 0, 0, 1)
        assert start_of_week(late) == start_of_week(early) == date(2024, 1, 15)

    def test_aware_datetime_uses_given_timezone(self):
        # Monday 2024-01-15 02:00 UTC is still Sunday evening in New York
        value = datetime(2024, 1, 15, 2, 0, tzinfo=pytz.UTC)
        tz = pytz.timezone("America/New_York")
        assert start_of_week(value, FirstWeekday.MONDAY, tz=tz) == date(2024, 1, 8)
        assert start_of_week(value, FirstWeekday.MONDAY, tz=pytz.UTC) == date(2024, 1, 15)

    def test_across_year_boundary(self):
        assert start_of_week(date(2025, 1, 1), FirstWeekday.MONDAY) == date(2024, 12, 30)


class TestEnumerateDates:
    """enumerate_dates."""

    def test_inclusive_and_ascending(self):
        days = list(enumerate_dates(date(2024, 2, 27), date(2024, 3, 2)))
        assert days == [
            date(2024, 2, 27), date(2024, 2, 28), date(2024, 2, 29),
            date(2024, 3, 1), date(2024, 3, 2),
        ]

    def test_single_day(self):
        assert list(enumerate_dates(date(2024, 5, 5), date(2024, 5, 5))) == [date(2024, 5, 5)]

    def test_reversed_range_is_empty(self):
        assert list(enumerate_dates(date(2024, 3, 10), date(2024, 1, 15))) == []

    def test_is_lazy(self):
        days = enumerate_dates(date(2000, 1, 1), date(9999, 12, 31))
        assert isinstance(days, types.GeneratorType)
        assert next(days) == date(2000, 1, 1)


class TestMonthArithmetic:
    """days_in_month, add_months and friends."""

    @pytest.mark.parametrize("year, month, expected", [
        (2024, 2, 29),
        (2023, 2, 28),
        (1900, 2, 28),
        (2000, 2, 29),
        (2024, 4, 30),
        (2024, 12, 31),
    ])
    def test_days_in_month(self, year, month, expected):
        assert days_in_month(year, month) == expected

    def test_add_months_clamps_day(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)
        assert add_months(date(2024, 3, 31), -1) == date(2024, 2, 29)

    def test_add_months_across_years(self):
        assert add_months(date(2024, 12, 15), 1) == date(2025, 1, 15)
        assert add_months(date(2024, 1, 15), -13) == date(2022, 12, 15)

    def test_leap_day_plus_one_month(self):
        assert add_months(date(2024, 2, 29), 1) == date(2024, 3, 29)
        assert add_months(date(2024, 2, 29), 12) == date(2025, 2, 28)

    def test_months_between(self):
        assert months_between(date(2024, 1, 15), date(2024, 3, 10)) == 2
        assert months_between(date(2023, 11, 30), date(2024, 1, 1)) == 2
        assert months_between(date(2024, 3, 1), date(2024, 1, 31)) == -2

    def test_last_of_month(self):
        assert last_of_month(date(2024, 2, 3)) == date(2024, 2, 29)

    def test_add_weeks(self):
        assert add_weeks(date(2024, 2, 26), 1) == date(2024, 3, 4)


class TestWeekdayOffset:
    """weekday_offset and weekday_order."""

    def test_offsets(self):
        # 2024-01-01 is a Monday
        assert weekday_offset(date(2024, 1, 1), FirstWeekday.MONDAY) == 0
        assert weekday_offset(date(2024, 1, 1), FirstWeekday.SUNDAY) == 1
        # 2024-01-07 is a Sunday
        assert weekday_offset(date(2024, 1, 7), FirstWeekday.MONDAY) == 6
        assert weekday_offset(date(2024, 1, 7), FirstWeekday.SUNDAY) == 0

    def test_weekday_order(self):
        assert weekday_order(FirstWeekday.MONDAY) == [0, 1, 2, 3, 4, 5, 6]
        assert weekday_order(FirstWeekday.SUNDAY) == [6, 0, 1, 2, 3, 4, 5]

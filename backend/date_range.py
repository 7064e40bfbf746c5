"""
Pure calendar calculations for the day grid.

Week and month boundaries, date enumeration and month arithmetic. Every
function works on whole days; datetimes are truncated, and an aware datetime
is first converted into the timezone passed by the caller.
"""

import calendar
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterator, Optional

from .config import FirstWeekday
from .timezone_utils import DateLike, to_calendar_date


DAYS_PER_WEEK = 7


def as_day(value: DateLike, tz: Optional[tzinfo] = None) -> date:
    """Drop the time-of-day of `value`, converting into `tz` when given."""
    if tz is not None:
        return to_calendar_date(value, tz)
    if isinstance(value, datetime):
        return value.date()
    return value


def weekday_offset(value: DateLike, first_weekday: FirstWeekday) -> int:
    """Column (0..6) of `value` in a week starting on `first_weekday`."""
    return (as_day(value).weekday() - first_weekday.value + DAYS_PER_WEEK) % DAYS_PER_WEEK


def weekday_order(first_weekday: FirstWeekday) -> list[int]:
    """date.weekday() numbers in column order, e.g. [6, 0, 1, ...] for Sunday."""
    return [(first_weekday.value + i) % DAYS_PER_WEEK for i in range(DAYS_PER_WEEK)]


def start_of_week(value: DateLike, first_weekday: FirstWeekday = FirstWeekday.MONDAY,
                  tz: Optional[tzinfo] = None) -> date:
    """First day of the week containing `value`."""
    day = as_day(value, tz)
    return day - timedelta(days=weekday_offset(day, first_weekday))


def end_of_week(value: DateLike, first_weekday: FirstWeekday = FirstWeekday.MONDAY,
                tz: Optional[tzinfo] = None) -> date:
    """Last day of the week containing `value`."""
    return start_of_week(value, first_weekday, tz) + timedelta(days=DAYS_PER_WEEK - 1)


def enumerate_dates(start: DateLike, end: DateLike) -> Iterator[date]:
    """
    Yield every calendar day from `start` to `end`, both inclusive.

    Yields nothing when `start` is after `end`.
    """
    current = as_day(start)
    last = as_day(end)
    while current <= last:
        yield current
        current += timedelta(days=1)


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given Gregorian month."""
    return calendar.monthrange(year, month)[1]


def first_of_month(value: DateLike) -> date:
    return as_day(value).replace(day=1)


def last_of_month(value: DateLike) -> date:
    day = as_day(value)
    return day.replace(day=days_in_month(day.year, day.month))


def months_between(start: DateLike, end: DateLike) -> int:
    """Whole calendar months from the month of `start` to the month of `end`."""
    a, b = as_day(start), as_day(end)
    return (b.year - a.year) * 12 + (b.month - a.month)


def add_months(value: DateLike, months: int) -> date:
    """
    Shift `value` by a number of calendar months.

    The day of month is clamped to the length of the target month, so
    January 31 plus one month is the last day of February.
    """
    day = as_day(value)
    month_index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    return date(year, month, min(day.day, days_in_month(year, month)))


def add_weeks(value: DateLike, weeks: int) -> date:
    return as_day(value) + timedelta(weeks=weeks)

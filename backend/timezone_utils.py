"""
Timezone utilities for the day grid.

Every conversion takes the timezone explicitly. Nothing here reads the
process-wide local timezone, so the same timestamp always lands on the same
calendar day regardless of where the host runs.
"""

from datetime import datetime, date, tzinfo
from typing import Union

import pytz

from .errors import ConfigurationError


DateLike = Union[date, datetime]


def get_timezone(timezone_name: str) -> tzinfo:
    """
    Resolve a timezone name to a pytz timezone object.

    Raises:
        ConfigurationError: if the name is not a known zone.
    """
    try:
        return pytz.timezone(timezone_name)
    except pytz.UnknownTimeZoneError:
        raise ConfigurationError(f"Unknown timezone: {timezone_name!r}")


def to_calendar_date(value: DateLike, tz: tzinfo = pytz.UTC) -> date:
    """
    Truncate a date or datetime to the calendar day it falls on in `tz`.

    Args:
        value: A date, a naive datetime (taken to be wall time in `tz`)
            or an aware datetime (converted into `tz` first).
        tz: The timezone whose calendar days are meant.

    Returns:
        A plain date without time-of-day.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()
    return value


def today_in(tz: tzinfo) -> date:
    """Get today's date as seen in the given timezone."""
    return datetime.now(pytz.UTC).astimezone(tz).date()

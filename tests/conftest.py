"""Shared fixtures for day grid tests."""

from datetime import date
from unittest.mock import Mock

import pytest

from backend.calendar_controller import CalendarController
from backend.calendar_day import StaticDaySource
from backend.config import CalendarConfig, Config, FirstWeekday, SelectionConfig, ViewType
from backend.grid_cache import GridCache
from backend.selection import CalendarDelegate


RANGE_START = date(2024, 1, 15)
RANGE_END = date(2024, 3, 10)


@pytest.fixture
def winter_source():
    """Every day from 2024-01-15 to 2024-03-10 is active."""
    return StaticDaySource.from_range(RANGE_START, RANGE_END)


@pytest.fixture
def monday_cache(winter_source):
    return GridCache(winter_source, FirstWeekday.MONDAY, week_anchor=date(2024, 1, 17))


@pytest.fixture
def mock_delegate():
    return Mock(spec=CalendarDelegate)


@pytest.fixture
def make_controller(winter_source, mock_delegate):
    """Factory for controllers over the winter range with a fixed today."""

    def _make(today=date(2024, 1, 10), view_type=ViewType.MONTH,
              first_weekday=FirstWeekday.MONDAY, source=winter_source, **selection):
        config = Config(
            calendar=CalendarConfig(first_weekday=first_weekday, view_type=view_type),
            selection=SelectionConfig(**selection),
        )
        return CalendarController(config, source, delegate=mock_delegate, today=lambda: today)

    return _make

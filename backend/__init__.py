"""
Day Grid Calendar Backend Module

This module provides the toolkit-independent calendar logic:
- Configuration parsing (config.py)
- Date arithmetic (date_range.py) and timezone handling (timezone_utils.py)
- Calendar days and day sources (calendar_day.py, ics_day_source.py)
- Month/week index cache (grid_cache.py) and data provider (grid_provider.py)
- Selection (selection.py) and navigation (navigation.py) state
- The controller tying them together (calendar_controller.py)
"""

from .config import Config, FirstWeekday, ViewType, ReselectPolicy
from .errors import CalendarError, ConfigurationError
from .calendar_day import CalendarDay, DaySource, StaticDaySource, ActivityResolver
from .ics_day_source import ICSDaySource
from .grid_cache import GridCache, GridIndex, MonthSectionInfo
from .grid_provider import GridDataProvider, CellState, DayCell
from .selection import CalendarDelegate, SelectionEvent, SelectionState
from .navigation import NavigationState
from .calendar_controller import CalendarController

__all__ = [
    'Config',
    'FirstWeekday',
    'ViewType',
    'ReselectPolicy',
    'CalendarError',
    'ConfigurationError',
    'CalendarDay',
    'DaySource',
    'StaticDaySource',
    'ActivityResolver',
    'ICSDaySource',
    'GridCache',
    'GridIndex',
    'MonthSectionInfo',
    'GridDataProvider',
    'CellState',
    'DayCell',
    'CalendarDelegate',
    'SelectionEvent',
    'SelectionState',
    'NavigationState',
    'CalendarController',
]

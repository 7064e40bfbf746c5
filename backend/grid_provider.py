"""
Grid data provider: the query contract consumed by a rendering layer.

Answers how many sections and items there are, which day sits at a grid
position and what state a cell is in. It only reads the cache.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, Optional

from .calendar_day import CalendarDay
from .config import ViewType
from .date_range import as_day
from .grid_cache import GridCache, GridIndex, MONTH_ITEM_COUNT, WEEK_ITEM_COUNT
from .timezone_utils import DateLike


class CellState(Enum):
    PADDING = "padding"            # no day in this slot; rendered blank
    OUT_OF_RANGE = "out_of_range"  # a real day that cannot be selected
    ACTIVE = "active"              # a selectable day


@dataclass(frozen=True)
class DayCell:
    """Everything a renderer needs to draw one cell."""
    index: GridIndex
    day: Optional[CalendarDay]
    state: CellState
    is_today: bool = False
    is_selected: bool = False

    @property
    def day_number(self) -> Optional[int]:
        return self.day.day_number if self.day is not None else None


class GridDataProvider:
    """Read-only view of a GridCache for one view type."""

    def __init__(self, cache: GridCache, today: Callable[[], date],
                 view_type: ViewType = ViewType.MONTH,
                 today_always_selectable: bool = False):
        self._cache = cache
        self._today = today
        self.view_type = view_type
        self.today_always_selectable = today_always_selectable

    @property
    def cache(self) -> GridCache:
        return self._cache

    def section_count(self) -> int:
        """
        Number of sections in the current view.

        Month view has one per configured month, week view a single one.
        Both report 0 without a source or with an empty or reversed range.
        """
        if self.view_type == ViewType.WEEK:
            return 1 if self._cache.is_range_valid() else 0
        return self._cache.month_count()

    def item_count(self, section: int) -> int:
        return WEEK_ITEM_COUNT if self.view_type == ViewType.WEEK else MONTH_ITEM_COUNT

    def day_at(self, index: GridIndex) -> Optional[CalendarDay]:
        """Day at a grid position, None for padding or positions off the grid."""
        if self.view_type == ViewType.WEEK:
            return self._cache.week_day_for_index(index)
        info = self._cache.section_info(index.section)
        if info is None:
            return None
        return info.day_for_item(index.item)

    def index_for_date(self, value: DateLike) -> Optional[GridIndex]:
        if self.view_type == ViewType.WEEK:
            return self._cache.week_index_for_date(value)
        return self._cache.index_for_date(value)

    def date_for_index(self, index: GridIndex) -> Optional[date]:
        day = self.day_at(index)
        return day.date if day is not None else None

    def month_date_for_section(self, section: int) -> Optional[date]:
        """Day 1 of the month shown by a month section."""
        return self._cache.month_start(section)

    def is_today(self, value: DateLike) -> bool:
        return as_day(value) == self._today()

    def is_selectable(self, day: Optional[CalendarDay]) -> bool:
        """
        Whether a day may be selected.

        Padding cells, days before today and days outside the source's range
        never are; otherwise the day's activity flag decides. Today skips the
        activity check when today_always_selectable is set.
        """
        if day is None:
            return False
        today = self._today()
        if day.date == today and self.today_always_selectable:
            return True
        if day.date < today:
            return False
        if not self._cache.in_range(day.date):
            return False
        return day.is_active

    def cell(self, index: GridIndex, selected: Optional[CalendarDay] = None) -> DayCell:
        day = self.day_at(index)
        if day is None:
            return DayCell(index=index, day=None, state=CellState.PADDING)
        return DayCell(
            index=index,
            day=day,
            state=CellState.ACTIVE if self.is_selectable(day) else CellState.OUT_OF_RANGE,
            is_today=self.is_today(day.date),
            is_selected=selected is not None and selected == day,
        )

    def section_cells(self, section: int, selected: Optional[CalendarDay] = None) -> list[DayCell]:
        """All cells of a section in item order."""
        return [
            self.cell(GridIndex(section=section, item=item), selected)
            for item in range(self.item_count(section))
        ]

"""
Month and week index cache.

Translates between calendar dates and grid positions. A month section is a
fixed 6x7 block; section 0 is the month holding the day source's first day.
The week view is a single 7-day strip around an anchor date.

All cached data (range boundaries, month sections, the week strip and the
activity index) is derived from one snapshot of the day source and is
dropped as a unit whenever that snapshot changes. Queries only compare the
source's revision; the day list itself is read when the revision moves,
after invalidate() and on refresh().
"""

import threading
from dataclasses import dataclass
from datetime import date
from typing import Optional

import pytz

from .calendar_day import ActivityResolver, CalendarDay, DaySource
from .config import FirstWeekday
from .date_range import (
    DAYS_PER_WEEK, add_months, as_day, end_of_week, enumerate_dates,
    first_of_month, last_of_month, months_between, start_of_week, weekday_offset,
)
from .debug_log import debug_print
from .timezone_utils import DateLike, today_in


MONTH_ROWS = 6
MONTH_ITEM_COUNT = MONTH_ROWS * DAYS_PER_WEEK
WEEK_ITEM_COUNT = DAYS_PER_WEEK


@dataclass(frozen=True)
class GridIndex:
    """Position of a cell: section (month page) and item (slot in the page)."""
    section: int
    item: int


@dataclass(frozen=True)
class MonthSectionInfo:
    """Layout of one month section."""
    first_day_offset: int  # column of day 1, 0..6
    days: tuple[CalendarDay, ...]

    @property
    def end_item(self) -> int:
        """First item past the last day; items from here on are padding."""
        return self.first_day_offset + len(self.days)

    def is_padding(self, item: int) -> bool:
        return not (self.first_day_offset <= item < self.end_item)

    def day_for_item(self, item: int) -> Optional[CalendarDay]:
        if self.is_padding(item):
            return None
        return self.days[item - self.first_day_offset]


@dataclass(frozen=True)
class _RangeSnapshot:
    revision: Optional[int]
    signature: tuple
    start: Optional[date]  # first day listed by the source
    end: Optional[date]    # last day listed by the source

    @property
    def is_valid(self) -> bool:
        return self.start is not None and self.end is not None and self.start <= self.end


class GridCache:
    """
    Cached date <-> grid index mapping for one calendar instance.

    Every public method takes the same lock, so invalidation is never
    observed half-done.
    """

    def __init__(self, source: Optional[DaySource] = None,
                 first_weekday: FirstWeekday = FirstWeekday.MONDAY,
                 week_anchor: Optional[date] = None):
        self._lock = threading.RLock()
        self._source = source
        self._first_weekday = first_weekday
        self._resolver = ActivityResolver(source)
        self._week_anchor = week_anchor or today_in(pytz.UTC)

        self._generation = 0
        self._snapshot: Optional[_RangeSnapshot] = None
        self._months: dict[int, MonthSectionInfo] = {}
        self._week: tuple[CalendarDay, ...] = ()

    # ==================== Configuration ====================

    @property
    def generation(self) -> int:
        """Incremented every time cached data is dropped."""
        return self._generation

    @property
    def source(self) -> Optional[DaySource]:
        return self._source

    def set_source(self, source: Optional[DaySource]):
        with self._lock:
            self._source = source
            self._resolver.set_source(source)
            self._reset("data source replaced")

    @property
    def first_weekday(self) -> FirstWeekday:
        return self._first_weekday

    def set_first_weekday(self, first_weekday: FirstWeekday):
        with self._lock:
            if first_weekday == self._first_weekday:
                return
            self._first_weekday = first_weekday
            self._reset(f"first weekday set to {first_weekday.name.lower()}")

    def invalidate(self):
        """Drop everything; the host's day list has changed."""
        with self._lock:
            self._reset("explicit invalidation")

    def _reset(self, reason: str):
        self._snapshot = None
        self._months.clear()
        self._week = ()
        self._resolver.rebuild()
        self._generation += 1
        debug_print("CACHE", f"invalidated ({reason}), generation {self._generation}")

    # ==================== Range snapshot ====================

    def _source_revision(self) -> Optional[int]:
        return self._source.revision if self._source is not None else None

    def _read_snapshot(self, revision: Optional[int]) -> _RangeSnapshot:
        """Read the day list once and record its boundaries."""
        start = end = None
        count = 0
        if self._source is not None:
            days = self._source.days()
            count = len(days)
            if days:
                start, end = days[0].date, days[-1].date
        snapshot = _RangeSnapshot(
            revision=revision,
            signature=(revision, start, end, count),
            start=start,
            end=end,
        )
        if not snapshot.is_valid:
            debug_print("CACHE", f"no usable range (start={start}, end={end})")
        return snapshot

    def _ensure_fresh(self) -> _RangeSnapshot:
        revision = self._source_revision()
        if self._snapshot is not None:
            if self._snapshot.revision == revision:
                return self._snapshot
            self._reset(f"source revision {self._snapshot.revision} -> {revision}")
        self._snapshot = self._read_snapshot(revision)
        return self._snapshot

    def refresh(self) -> bool:
        """
        Re-read the source's range boundaries.

        For hosts that rebuild their day list without bumping `revision`.

        Returns:
            True if the boundaries moved and the cache was dropped
        """
        with self._lock:
            if self._snapshot is None:
                return False
            fresh = self._read_snapshot(self._source_revision())
            if fresh.signature == self._snapshot.signature:
                return False
            self._reset(f"range changed to {fresh.signature[1:]}")
            self._snapshot = fresh
            return True

    @property
    def start_date(self) -> Optional[date]:
        """First day of the source, None without a valid range."""
        with self._lock:
            snapshot = self._ensure_fresh()
            return snapshot.start if snapshot.is_valid else None

    @property
    def end_date(self) -> Optional[date]:
        """Last day of the source, None without a valid range."""
        with self._lock:
            snapshot = self._ensure_fresh()
            return snapshot.end if snapshot.is_valid else None

    @property
    def first_date(self) -> Optional[date]:
        """Day 1 of the month of the start date."""
        start = self.start_date
        return first_of_month(start) if start is not None else None

    @property
    def last_date(self) -> Optional[date]:
        """Last day of the month of the end date."""
        end = self.end_date
        return last_of_month(end) if end is not None else None

    def is_range_valid(self) -> bool:
        with self._lock:
            return self._ensure_fresh().is_valid

    def in_range(self, value: DateLike) -> bool:
        """Whether `value` lies between the source's first and last day."""
        with self._lock:
            snapshot = self._ensure_fresh()
            if not snapshot.is_valid:
                return False
            return snapshot.start <= as_day(value) <= snapshot.end

    def month_count(self) -> int:
        """Number of month sections; 0 when the range is missing or reversed."""
        with self._lock:
            snapshot = self._ensure_fresh()
            if not snapshot.is_valid:
                return 0
            return months_between(snapshot.start, snapshot.end) + 1

    # ==================== Activity ====================

    def is_active(self, value: DateLike) -> bool:
        with self._lock:
            self._ensure_fresh()
            return self._resolver.is_active(value)

    def lookup_day(self, value: DateLike) -> Optional[CalendarDay]:
        """The source's own entry for a day, if it lists one."""
        with self._lock:
            self._ensure_fresh()
            return self._resolver.lookup(value)

    def _make_day(self, value: date) -> CalendarDay:
        return CalendarDay(value, self._resolver.is_active(value))

    # ==================== Month sections ====================

    def section_info(self, section: int) -> Optional[MonthSectionInfo]:
        """Layout of a month section, or None outside the configured months."""
        with self._lock:
            if not 0 <= section < self.month_count():
                return None
            info = self._months.get(section)
            if info is not None:
                return info

            month_start = self.month_start(section)
            days = tuple(
                self._make_day(d)
                for d in enumerate_dates(month_start, last_of_month(month_start))
            )
            info = MonthSectionInfo(
                first_day_offset=weekday_offset(month_start, self._first_weekday),
                days=days,
            )
            self._months[section] = info
            debug_print(
                "CACHE",
                f"built section {section} ({month_start:%Y-%m}): "
                f"offset {info.first_day_offset}, {len(days)} days"
            )
            return info

    def month_start(self, section: int) -> Optional[date]:
        """Day 1 of the month shown by a section, None outside the configured months."""
        with self._lock:
            if not 0 <= section < self.month_count():
                return None
            return add_months(self.first_date, section)

    def section_for_date(self, value: DateLike) -> Optional[int]:
        index = self.index_for_date(value)
        return index.section if index is not None else None

    def index_for_date(self, value: DateLike) -> Optional[GridIndex]:
        """Month grid position of a date, None outside the displayed months."""
        day = as_day(value)
        with self._lock:
            first, last = self.first_date, self.last_date
            if first is None or not first <= day <= last:
                return None
            section = months_between(first, day)
            info = self.section_info(section)
            if info is None:
                return None
            return GridIndex(section=section, item=day.day - 1 + info.first_day_offset)

    def date_for_index(self, index: GridIndex) -> Optional[date]:
        """Date shown at a month grid position, None for padding."""
        with self._lock:
            info = self.section_info(index.section)
            if info is None:
                return None
            day = info.day_for_item(index.item)
            return day.date if day is not None else None

    # ==================== Week strip ====================

    @property
    def week_anchor(self) -> date:
        return self._week_anchor

    def rebuild_week(self, anchor: DateLike):
        """Recompute the week strip around `anchor`."""
        with self._lock:
            self._ensure_fresh()
            self._week_anchor = as_day(anchor)
            self._week = self._build_week()

    def _build_week(self) -> tuple[CalendarDay, ...]:
        first = start_of_week(self._week_anchor, self._first_weekday)
        last = end_of_week(self._week_anchor, self._first_weekday)
        week = tuple(self._make_day(d) for d in enumerate_dates(first, last))
        debug_print("CACHE", f"built week {first} .. {last}")
        return week

    def week(self) -> tuple[CalendarDay, ...]:
        """The seven days of the current week strip."""
        with self._lock:
            self._ensure_fresh()
            if not self._week:
                self._week = self._build_week()
            return self._week

    def week_index_for_date(self, value: DateLike) -> Optional[GridIndex]:
        day = as_day(value)
        for item, week_day in enumerate(self.week()):
            if week_day.date == day:
                return GridIndex(section=0, item=item)
        return None

    def week_day_for_index(self, index: GridIndex) -> Optional[CalendarDay]:
        if index.section != 0 or not 0 <= index.item < WEEK_ITEM_COUNT:
            return None
        return self.week()[index.item]

"""
Calendar days and the host's day list.

The host describes which days exist and which of them are selectable
through a DaySource. The grid never scans that list per cell; an
ActivityResolver indexes it by day once per update.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from .date_range import as_day, enumerate_dates
from .timezone_utils import DateLike


@dataclass(frozen=True, eq=False)
class CalendarDay:
    """
    A calendar day and whether the host allows selecting it.

    Two CalendarDay values are equal when they fall on the same date,
    whatever their activity flag.
    """
    date: date
    is_active: bool = False

    def __post_init__(self):
        if isinstance(self.date, datetime):
            object.__setattr__(self, 'date', self.date.date())

    def __hash__(self):
        return hash(self.date)

    def __eq__(self, other):
        if isinstance(other, CalendarDay):
            return self.date == other.date
        return NotImplemented

    def with_activity(self, is_active: bool) -> 'CalendarDay':
        """Copy of this day with a different activity flag."""
        return replace(self, is_active=is_active)

    @property
    def day_number(self) -> int:
        return self.date.day


class DaySource(ABC):
    """
    Supplies the ordered list of days the calendar covers.

    The first and last entries define the configured range. Hosts that
    recompute the list bump `revision` so cached grids are dropped.
    """

    @abstractmethod
    def days(self) -> Sequence[CalendarDay]:
        """Ordered days, earliest first."""

    @property
    def revision(self) -> int:
        return 0


class StaticDaySource(DaySource):
    """DaySource backed by an in-memory list."""

    def __init__(self, days: Iterable[CalendarDay] = ()):
        self._days: tuple[CalendarDay, ...] = tuple(days)
        self._revision = 0

    @classmethod
    def from_range(cls, start: DateLike, end: DateLike,
                   inactive: Iterable[DateLike] = ()) -> 'StaticDaySource':
        """Every day from start to end, active unless listed in `inactive`."""
        blocked = {as_day(d) for d in inactive}
        return cls(CalendarDay(d, d not in blocked) for d in enumerate_dates(start, end))

    def days(self) -> Sequence[CalendarDay]:
        return self._days

    @property
    def revision(self) -> int:
        return self._revision

    def set_days(self, days: Iterable[CalendarDay]):
        """Replace the day list."""
        self._days = tuple(days)
        self._revision += 1


class ActivityResolver:
    """Day-keyed index over a DaySource."""

    def __init__(self, source: Optional[DaySource] = None):
        self._source = source
        self._index: Optional[dict[date, CalendarDay]] = None

    @property
    def source(self) -> Optional[DaySource]:
        return self._source

    def set_source(self, source: Optional[DaySource]):
        self._source = source
        self._index = None

    def rebuild(self):
        """Drop the index; it is rebuilt on the next lookup."""
        self._index = None

    def _ensure_index(self) -> dict[date, CalendarDay]:
        if self._index is None:
            index: dict[date, CalendarDay] = {}
            if self._source is not None:
                for day in self._source.days():
                    # First entry for a date wins
                    index.setdefault(day.date, day)
            self._index = index
        return self._index

    def lookup(self, value: DateLike) -> Optional[CalendarDay]:
        """The host's entry for this day, or None if it has none."""
        return self._ensure_index().get(as_day(value))

    def is_active(self, value: DateLike) -> bool:
        day = self.lookup(value)
        return day.is_active if day is not None else False

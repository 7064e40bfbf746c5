"""
Day source built from an iCalendar feed.

Days that have at least one event (recurring events expanded with
recurring_ical_events) are "busy". Depending on `busy_days_active` the busy
days are the selectable ones (an event picker) or the blocked ones (a
booking calendar).
"""

from datetime import date, datetime, timedelta, tzinfo
from pathlib import Path
from typing import Optional, Sequence

import pytz
import requests
from icalendar import Calendar as ICalCalendar
from recurring_ical_events import of as recurring_events_of

from .calendar_day import CalendarDay, DaySource
from .date_range import as_day, enumerate_dates
from .debug_log import debug_print
from .timezone_utils import DateLike, to_calendar_date


class ICSDaySource(DaySource):
    """DaySource covering `start`..`end`, activity derived from ICS events."""

    def __init__(self, start: DateLike, end: DateLike, tz: tzinfo = pytz.UTC,
                 busy_days_active: bool = True):
        """
        Initialize an empty source; call load_text(), load_file() or fetch().

        Args:
            start: First day of the range
            end: Last day of the range
            tz: Timezone used to place timed events on calendar days
            busy_days_active: True if days with events are selectable
        """
        self.start = as_day(start)
        self.end = as_day(end)
        self.tz = tz
        self.busy_days_active = busy_days_active

        self._busy: set[date] = set()
        self._days: tuple[CalendarDay, ...] = ()
        self._revision = 0
        self._last_fetch: Optional[datetime] = None
        self._error: Optional[str] = None
        self._rebuild_days()

    # ==================== DaySource ====================

    def days(self) -> Sequence[CalendarDay]:
        return self._days

    @property
    def revision(self) -> int:
        return self._revision

    # ==================== Loading ====================

    def load_text(self, ical_text: str) -> int:
        """
        Replace the busy days with those found in VCALENDAR text.

        Returns:
            Number of busy days inside the range
        """
        cal = ICalCalendar.from_ical(ical_text)
        # between() treats the end as exclusive
        occurrences = recurring_events_of(cal).between(self.start, self.end + timedelta(days=1))

        busy: set[date] = set()
        for event in occurrences:
            busy.update(self._event_days(event))
        self._busy = {d for d in busy if self.start <= d <= self.end}
        self._rebuild_days()
        debug_print("ICS", f"{len(occurrences)} occurrences, {len(self._busy)} busy days")
        return len(self._busy)

    def load_file(self, path: Path) -> int:
        """Load VCALENDAR text from a file."""
        return self.load_text(Path(path).read_text(encoding='utf-8'))

    def fetch(self, url: str, timeout: int = 30) -> bool:
        """
        Fetch and load the ICS file from a URL.

        Returns:
            True if successful, False otherwise (see `error`).
        """
        try:
            response = requests.get(
                url,
                timeout=timeout,
                headers={
                    'User-Agent': 'daygrid-calendar/1.0',
                    'Accept': 'text/calendar'
                }
            )
            response.raise_for_status()

            # Ensure proper UTF-8 decoding
            response.encoding = 'utf-8'
            self.load_text(response.text)
            self._last_fetch = datetime.now(pytz.UTC)
            self._error = None
            return True

        except requests.RequestException as e:
            self._error = f"Network error: {e}"
            return False
        except ValueError as e:
            # icalendar raises ValueError for malformed content
            self._error = f"Parse error: {e}"
            return False

    def load(self, location: str) -> bool:
        """Load from an http(s) URL or a file path."""
        if location.startswith(('http://', 'https://')):
            return self.fetch(location)
        try:
            self.load_file(Path(location).expanduser())
        except (OSError, ValueError) as e:
            self._error = f"Error: {e}"
            return False
        self._error = None
        return True

    @property
    def busy_days(self) -> frozenset[date]:
        return frozenset(self._busy)

    @property
    def last_fetch(self) -> Optional[datetime]:
        return self._last_fetch

    @property
    def error(self) -> Optional[str]:
        """Get the last error message."""
        return self._error

    # ==================== Internals ====================

    def _event_days(self, event) -> list[date]:
        """Calendar days an event instance touches."""
        dtstart = event.get('DTSTART')
        if dtstart is None:
            return []
        start_val = dtstart.dt
        dtend = event.get('DTEND')
        end_val = dtend.dt if dtend is not None else None

        if isinstance(start_val, datetime):
            first = self._timed_day(start_val)
        else:
            first = start_val

        if end_val is None:
            return [first]
        if isinstance(end_val, datetime):
            # An event ending exactly at midnight does not occupy the next day
            last = self._timed_day(end_val - timedelta(microseconds=1))
        elif isinstance(start_val, datetime):
            last = first
        else:
            # All-day event: DTEND is exclusive
            last = end_val - timedelta(days=1)
        return list(enumerate_dates(first, max(last, first)))

    def _timed_day(self, value: datetime) -> date:
        if value.tzinfo is None:
            value = self.tz.localize(value)
        return to_calendar_date(value, self.tz)

    def _rebuild_days(self):
        self._days = tuple(
            CalendarDay(d, (d in self._busy) == self.busy_days_active)
            for d in enumerate_dates(self.start, self.end)
        )
        self._revision += 1

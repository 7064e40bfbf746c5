"""Navigation state: which date the calendar is paged to."""

from datetime import date
from typing import Callable, List, Optional

from .date_range import add_months, add_weeks, as_day
from .debug_log import debug_print
from .timezone_utils import DateLike


class NavigationState:
    """
    Tracks the display date and moves it by calendar months or weeks.

    The display date starts unset. Moving without one returns None instead
    of falling back to the current date.
    """

    def __init__(self, display_date: Optional[DateLike] = None):
        self._display_date: Optional[date] = as_day(display_date) if display_date else None
        self._change_callbacks: List[Callable[[date], None]] = []

    @property
    def display_date(self) -> Optional[date]:
        return self._display_date

    def set_display_date(self, value: DateLike) -> date:
        """
        Page to a specific date.

        Returns:
            The new display date
        """
        old_date = self._display_date
        self._display_date = as_day(value)
        debug_print("NAV", f"display date {old_date} -> {self._display_date}")
        self._notify_change()
        return self._display_date

    def advance_month(self, offset: int = 1) -> Optional[date]:
        """
        Move by `offset` calendar months, clamping the day of month.

        Returns:
            The new display date, or None if none was set
        """
        if self._display_date is None:
            debug_print("NAV", "advance_month ignored: no display date")
            return None
        return self.set_display_date(add_months(self._display_date, offset))

    def advance_week(self, offset: int = 1) -> Optional[date]:
        """
        Move by `offset` weeks.

        Returns:
            The new display date, or None if none was set
        """
        if self._display_date is None:
            debug_print("NAV", "advance_week ignored: no display date")
            return None
        return self.set_display_date(add_weeks(self._display_date, offset))

    def add_change_callback(self, callback: Callable[[date], None]) -> None:
        """Call `callback` with the new date whenever the display date changes."""
        self._change_callbacks.append(callback)

    def remove_change_callback(self, callback: Callable[[date], None]) -> None:
        if callback in self._change_callbacks:
            self._change_callbacks.remove(callback)

    def _notify_change(self) -> None:
        for callback in list(self._change_callbacks):
            callback(self._display_date)

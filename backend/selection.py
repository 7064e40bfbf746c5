"""Single-day selection and the host delegate interface."""

from enum import Enum
from typing import Optional

from .calendar_day import CalendarDay
from .config import ReselectPolicy, ViewType
from .debug_log import debug_print


class SelectionEvent(Enum):
    """Outcome of a selection request."""
    SELECTED = "selected"
    DESELECTED = "deselected"
    UNCHANGED = "unchanged"


class CalendarDelegate:
    """
    Callbacks the calendar sends to its host.

    Every method is a no-op here; hosts override the ones they need.
    """

    def on_select(self, day: CalendarDay) -> None:
        pass

    def on_deselect(self, day: CalendarDay) -> None:
        pass

    def on_scroll_to_month(self, day: CalendarDay) -> None:
        pass

    def on_view_type_changed(self, view_type: ViewType) -> None:
        pass

    def on_long_press(self, day: CalendarDay) -> None:
        pass


class SelectionState:
    """Holds at most one selected day."""

    def __init__(self, policy: ReselectPolicy = ReselectPolicy.TOGGLE):
        self.policy = policy
        self._selected: Optional[CalendarDay] = None

    @property
    def selected_day(self) -> Optional[CalendarDay]:
        return self._selected

    @property
    def has_selection(self) -> bool:
        return self._selected is not None

    def is_selected(self, day: CalendarDay) -> bool:
        return self._selected is not None and self._selected == day

    def select_day(self, day: CalendarDay) -> SelectionEvent:
        """
        Select `day`.

        Selecting a different day replaces the selection. Selecting the
        current day again follows the reselect policy.
        """
        if self._selected is not None and self._selected == day:
            if self.policy == ReselectPolicy.TOGGLE:
                self._selected = None
                debug_print("SELECTION", f"deselected {day.date}")
                return SelectionEvent.DESELECTED
            return SelectionEvent.UNCHANGED

        previous = self._selected
        self._selected = day
        debug_print("SELECTION", f"selected {day.date} (was {previous.date if previous else None})")
        return SelectionEvent.SELECTED

    def clear(self):
        """Drop the selection without reporting it."""
        self._selected = None

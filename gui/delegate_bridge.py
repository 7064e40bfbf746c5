"""
Qt signal bridge for calendar delegate callbacks.

Install a QtCalendarDelegate as the controller's delegate and connect Qt
slots to its signals instead of subclassing CalendarDelegate.
"""

from PySide6.QtCore import QObject, Signal

from backend.calendar_day import CalendarDay
from backend.config import ViewType
from backend.selection import CalendarDelegate


class QtCalendarDelegate(QObject, CalendarDelegate):
    """Re-emits every CalendarDelegate callback as a Qt signal."""

    day_selected = Signal(object)        # CalendarDay
    day_deselected = Signal(object)      # CalendarDay
    scrolled_to_month = Signal(object)   # CalendarDay
    view_type_changed = Signal(object)   # ViewType
    day_long_pressed = Signal(object)    # CalendarDay

    def __init__(self, parent=None):
        super().__init__(parent)

    def on_select(self, day: CalendarDay) -> None:
        self.day_selected.emit(day)

    def on_deselect(self, day: CalendarDay) -> None:
        self.day_deselected.emit(day)

    def on_scroll_to_month(self, day: CalendarDay) -> None:
        self.scrolled_to_month.emit(day)

    def on_view_type_changed(self, view_type: ViewType) -> None:
        self.view_type_changed.emit(view_type)

    def on_long_press(self, day: CalendarDay) -> None:
        self.day_long_pressed.emit(day)

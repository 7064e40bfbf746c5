"""
Calendar controller.

Owns the cache, data provider, selection and navigation state of one
calendar instance and reports user-visible changes to a CalendarDelegate.
A rendering layer asks it what to draw and forwards taps, header button
presses and page changes to it.
"""

from datetime import date
from typing import Callable, Optional

from .calendar_day import CalendarDay, DaySource
from .config import Config, FirstWeekday, ViewType
from .date_range import DAYS_PER_WEEK, weekday_order
from .debug_log import debug_print
from .grid_cache import GridCache, GridIndex
from .grid_provider import DayCell, GridDataProvider
from .navigation import NavigationState
from .selection import CalendarDelegate, SelectionEvent, SelectionState
from .timezone_utils import DateLike, get_timezone, to_calendar_date, today_in


class CalendarController:
    """The toolkit-independent half of a calendar widget."""

    def __init__(
        self,
        config: Optional[Config] = None,
        data_source: Optional[DaySource] = None,
        delegate: Optional[CalendarDelegate] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        """
        Initialize the controller.

        Args:
            config: Calendar settings; defaults are used when omitted
            data_source: The host's day list
            delegate: Receives selection, paging and view-type events
            today: Returns the current date; defaults to today in the
                configured timezone

        Raises:
            ConfigurationError: if the calendar settings are inconsistent
        """
        self._config = config or Config()
        calendar_config = self._config.calendar
        calendar_config.validate()
        self._tz = get_timezone(calendar_config.timezone)
        self._today = today or (lambda: today_in(self._tz))

        self._cache = GridCache(
            data_source,
            first_weekday=calendar_config.first_weekday,
            week_anchor=self._today(),
        )
        self._provider = GridDataProvider(
            self._cache,
            today=self._today,
            view_type=calendar_config.view_type,
            today_always_selectable=self._config.selection.today_always_selectable,
        )
        self._selection = SelectionState(self._config.selection.reselect)
        self._navigation = NavigationState()
        self.delegate: CalendarDelegate = delegate or CalendarDelegate()
        self._host_rtl = False

    # ==================== Accessors ====================

    @property
    def config(self) -> Config:
        return self._config

    @property
    def cache(self) -> GridCache:
        return self._cache

    @property
    def provider(self) -> GridDataProvider:
        return self._provider

    @property
    def navigation(self) -> NavigationState:
        return self._navigation

    @property
    def view_type(self) -> ViewType:
        return self._provider.view_type

    @property
    def first_weekday(self) -> FirstWeekday:
        return self._cache.first_weekday

    @property
    def selected_day(self) -> Optional[CalendarDay]:
        return self._selection.selected_day

    @property
    def display_date(self) -> Optional[date]:
        return self._navigation.display_date

    def today(self) -> date:
        return self._today()

    def _to_day(self, value: DateLike) -> date:
        return to_calendar_date(value, self._tz)

    # ==================== Data source ====================

    def set_data_source(self, source: Optional[DaySource]):
        self._cache.set_source(source)
        self._revalidate_selection()

    def reload_data(self):
        """The host recomputed its days: drop caches and recheck the selection."""
        self._cache.invalidate()
        if self.view_type == ViewType.WEEK and self.display_date is not None:
            self._cache.rebuild_week(self.display_date)
        self._revalidate_selection()

    def set_first_weekday(self, first_weekday: FirstWeekday):
        self._config.calendar.first_weekday = first_weekday
        self._cache.set_first_weekday(first_weekday)
        anchor = self.display_date or self._today()
        self._cache.rebuild_week(anchor)

    # ==================== Display ====================

    def set_display_date(self, value: DateLike) -> date:
        """Page to the section (or week) containing `value`."""
        day = self._to_day(value)
        if self.view_type == ViewType.WEEK:
            self._cache.rebuild_week(day)
        return self._navigation.set_display_date(day)

    def display_section(self) -> Optional[int]:
        """Section the grid should be scrolled to, None if not determinable."""
        if self.display_date is None:
            return None
        if self.view_type == ViewType.WEEK:
            return 0 if self._provider.section_count() else None
        return self._cache.section_for_date(self.display_date)

    def header_title(self) -> Optional[str]:
        """Localized month name of the display date."""
        if self.display_date is None:
            return None
        return self._config.localization.get_month_name(self.display_date.month)

    def weekday_headers(self) -> list[str]:
        localization = self._config.localization
        return [localization.get_day_name(weekday) for weekday in weekday_order(self.first_weekday)]

    def cell(self, index: GridIndex) -> DayCell:
        return self._provider.cell(index, self.selected_day)

    def section_cells(self, section: int) -> list[DayCell]:
        return self._provider.section_cells(section, self.selected_day)

    # ==================== Selection ====================

    def select_index(self, index: GridIndex) -> Optional[SelectionEvent]:
        """
        Handle a tap on a cell.

        Returns:
            What happened to the selection, or None if the cell cannot be
            selected (padding, past, out of range or inactive)
        """
        day = self._provider.day_at(index)
        if not self._provider.is_selectable(day):
            debug_print("SELECTION", f"refused {index}")
            return None
        return self._select(day)

    def select_date(self, value: DateLike) -> Optional[SelectionEvent]:
        """Select the cell showing `value` in the current view."""
        index = self._provider.index_for_date(self._to_day(value))
        if index is None:
            return None
        return self.select_index(index)

    def _select(self, day: CalendarDay) -> SelectionEvent:
        event = self._selection.select_day(day)
        if event == SelectionEvent.SELECTED:
            self.delegate.on_select(day)
        elif event == SelectionEvent.DESELECTED:
            self.delegate.on_deselect(day)
        return event

    def clear_selection(self):
        """Drop the selection without notifying the delegate."""
        self._selection.clear()

    def selected_index(self) -> Optional[GridIndex]:
        """Where the selected day sits in the current view."""
        if self.selected_day is None:
            return None
        return self._provider.index_for_date(self.selected_day.date)

    def _revalidate_selection(self):
        day = self._selection.selected_day
        if day is None:
            return
        current = CalendarDay(day.date, self._cache.is_active(day.date))
        if not self._provider.is_selectable(current):
            debug_print("SELECTION", f"dropped {day.date}: no longer selectable")
            self._selection.clear()

    # ==================== Navigation ====================

    def advance_month(self, offset: int = 1) -> Optional[date]:
        """
        Move the display by `offset` calendar months.

        Returns:
            The new display date, or None if no display date was set
        """
        new_date = self._navigation.advance_month(offset)
        if new_date is None:
            return None
        if self.view_type == ViewType.WEEK:
            self._cache.rebuild_week(new_date)
        self._revalidate_selection()
        return new_date

    def advance_week(self, offset: int = 1) -> Optional[date]:
        """
        Move the display by `offset` weeks, rebuilding the week strip.

        Returns:
            The new display date, or None if no display date was set
        """
        new_date = self._navigation.advance_week(offset)
        if new_date is None:
            return None
        self._cache.rebuild_week(new_date)
        self._revalidate_selection()
        return new_date

    def go_next(self) -> Optional[date]:
        """Header "next" button."""
        if self.view_type == ViewType.MONTH:
            return self.advance_month(1)
        return self.advance_week(1)

    def go_previous(self) -> Optional[date]:
        """Header "previous" button."""
        if self.view_type == ViewType.MONTH:
            return self.advance_month(-1)
        return self.advance_week(-1)

    def set_view_type(self, view_type: ViewType) -> Optional[date]:
        """
        Switch between month and week view.

        The new view is paged to the selected day if there is one;
        otherwise to the first day of the cached week (entering month view)
        or the current display date (entering week view), else today.
        """
        if view_type == self.view_type:
            return self.display_date

        if view_type == ViewType.MONTH:
            week = self._cache.week()
            fallback = week[0].date if week else None
        else:
            fallback = self.display_date

        self._provider.view_type = view_type
        self._config.calendar.view_type = view_type
        debug_print("NAV", f"view type -> {view_type.value}")
        self.delegate.on_view_type_changed(view_type)

        if self.selected_day is not None:
            target = self.selected_day.date
        else:
            target = fallback or self._today()
        return self.set_display_date(target)

    def toggle_view_type(self) -> Optional[date]:
        """Header title button."""
        return self.set_view_type(self.view_type.toggled())

    def did_scroll_to_section(self, page: int) -> Optional[CalendarDay]:
        """
        The month grid came to rest on `page`.

        Updates the display date to the first of that month and tells the
        delegate, passing the host's own entry for that day.

        Returns:
            The day reported to the delegate, or None
        """
        if self.view_type != ViewType.MONTH:
            return None
        month_start = self._provider.month_date_for_section(max(page, 0))
        if month_start is None:
            return None
        self._navigation.set_display_date(month_start)
        day = self._cache.lookup_day(month_start)
        if day is None:
            return None
        self.delegate.on_scroll_to_month(day)
        return day

    def long_press(self, index: GridIndex) -> Optional[CalendarDay]:
        """Forward a long press on a non-padding cell to the delegate."""
        day = self._provider.day_at(index)
        if day is None:
            return None
        self.delegate.on_long_press(day)
        return day

    # ==================== Layout direction ====================

    @property
    def is_rtl(self) -> bool:
        return not self._config.calendar.force_ltr and self._host_rtl

    def set_host_layout_direction(self, right_to_left: bool):
        """Tell the controller which direction the host lays text out in."""
        self._host_rtl = right_to_left

    def visual_column(self, item: int) -> int:
        """Screen column of a grid item, mirrored for right-to-left layouts."""
        column = item % DAYS_PER_WEEK
        return DAYS_PER_WEEK - 1 - column if self.is_rtl else column

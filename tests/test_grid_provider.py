"""Unit tests for GridDataProvider."""

from datetime import date

import pytest

from backend.calendar_day import CalendarDay, StaticDaySource
from backend.config import FirstWeekday, ViewType
from backend.grid_cache import GridCache, GridIndex
from backend.grid_provider import CellState, GridDataProvider


def _provider(cache, today=date(2024, 1, 10), view_type=ViewType.MONTH, **kwargs):
    return GridDataProvider(cache, lambda: today, view_type=view_type, **kwargs)


class TestCounts:
    """section_count / item_count."""

    def test_month_view(self, monday_cache):
        provider = _provider(monday_cache)
        assert provider.section_count() == 3
        assert provider.item_count(0) == 42

    def test_week_view(self, monday_cache):
        provider = _provider(monday_cache, view_type=ViewType.WEEK)
        assert provider.section_count() == 1
        assert provider.item_count(0) == 7

    def test_empty_source(self):
        cache = GridCache(StaticDaySource(), week_anchor=date(2024, 1, 17))
        assert _provider(cache).section_count() == 0

    @pytest.mark.parametrize("source", [
        None,
        StaticDaySource(),
        StaticDaySource([CalendarDay(date(2024, 3, 10), True), CalendarDay(date(2024, 1, 15), True)]),
    ], ids=["no-source", "empty", "reversed"])
    def test_week_view_without_usable_range(self, source):
        cache = GridCache(source, week_anchor=date(2024, 1, 17))
        assert _provider(cache, view_type=ViewType.WEEK).section_count() == 0

    def test_month_date_for_section_without_source(self):
        cache = GridCache(None, week_anchor=date(2024, 1, 17))
        assert _provider(cache).month_date_for_section(0) is None


class TestCellStates:
    """cell() state assignment."""

    def test_padding(self, monday_cache):
        cell = _provider(monday_cache).cell(GridIndex(1, 0))
        assert cell.state is CellState.PADDING
        assert cell.day is None
        assert cell.day_number is None

    def test_before_range_is_out_of_range(self, monday_cache):
        cell = _provider(monday_cache).cell(GridIndex(0, 13))  # Jan 14
        assert cell.state is CellState.OUT_OF_RANGE
        assert cell.day_number == 14

    def test_inside_range_is_active(self, monday_cache):
        cell = _provider(monday_cache).cell(GridIndex(0, 14))  # Jan 15
        assert cell.state is CellState.ACTIVE

    def test_after_range_is_out_of_range(self, monday_cache):
        cell = _provider(monday_cache).cell(GridIndex(2, 14))  # Mar 11
        assert cell.state is CellState.OUT_OF_RANGE

    def test_inactive_day_inside_range(self):
        source = StaticDaySource.from_range(
            date(2024, 1, 15), date(2024, 3, 10), inactive=[date(2024, 2, 14)]
        )
        cache = GridCache(source, FirstWeekday.MONDAY, week_anchor=date(2024, 1, 17))
        provider = _provider(cache)
        index = cache.index_for_date(date(2024, 2, 14))
        assert provider.cell(index).state is CellState.OUT_OF_RANGE
        assert provider.cell(GridIndex(index.section, index.item + 1)).state is CellState.ACTIVE

    def test_past_days_are_not_selectable(self, monday_cache):
        provider = _provider(monday_cache, today=date(2024, 2, 1))
        assert provider.cell(monday_cache.index_for_date(date(2024, 1, 31))).state is CellState.OUT_OF_RANGE
        assert provider.cell(monday_cache.index_for_date(date(2024, 2, 1))).state is CellState.ACTIVE

    def test_today_and_selection_flags(self, monday_cache):
        provider = _provider(monday_cache, today=date(2024, 2, 1))
        selected = CalendarDay(date(2024, 2, 5), True)
        cells = provider.section_cells(1, selected)
        assert len(cells) == 42
        assert [c.day_number for c in cells if c.is_today] == [1]
        assert [c.day_number for c in cells if c.is_selected] == [5]

    def test_states_agree_with_selectability(self, monday_cache):
        provider = _provider(monday_cache, today=date(2024, 1, 20))
        for section in range(provider.section_count()):
            for cell in provider.section_cells(section):
                if cell.state is CellState.PADDING:
                    assert monday_cache.date_for_index(cell.index) is None
                else:
                    assert (cell.state is CellState.ACTIVE) == provider.is_selectable(cell.day)


class TestTodayPolicy:
    """today_always_selectable."""

    @pytest.fixture
    def sparse_cache(self):
        source = StaticDaySource.from_range(
            date(2024, 1, 15), date(2024, 3, 10), inactive=[date(2024, 1, 20)]
        )
        return GridCache(source, FirstWeekday.MONDAY, week_anchor=date(2024, 1, 20))

    @pytest.mark.parametrize("view_type", list(ViewType))
    def test_inactive_today_is_blocked_by_default(self, sparse_cache, view_type):
        provider = _provider(sparse_cache, today=date(2024, 1, 20), view_type=view_type)
        index = provider.index_for_date(date(2024, 1, 20))
        cell = provider.cell(index)
        assert cell.is_today
        assert cell.state is CellState.OUT_OF_RANGE

    @pytest.mark.parametrize("view_type", list(ViewType))
    def test_inactive_today_allowed_by_policy(self, sparse_cache, view_type):
        provider = _provider(
            sparse_cache, today=date(2024, 1, 20), view_type=view_type,
            today_always_selectable=True,
        )
        cell = provider.cell(provider.index_for_date(date(2024, 1, 20)))
        assert cell.state is CellState.ACTIVE


class TestWeekView:
    """Week strip lookups through the provider."""

    def test_day_at_and_index(self, monday_cache):
        provider = _provider(monday_cache, view_type=ViewType.WEEK)
        assert provider.date_for_index(GridIndex(0, 0)) == date(2024, 1, 15)
        assert provider.index_for_date(date(2024, 1, 21)) == GridIndex(0, 6)
        assert provider.index_for_date(date(2024, 2, 1)) is None

    def test_week_has_no_padding(self, monday_cache):
        provider = _provider(monday_cache, view_type=ViewType.WEEK)
        assert all(c.state is not CellState.PADDING for c in provider.section_cells(0))

    def test_month_date_for_section(self, monday_cache):
        provider = _provider(monday_cache)
        assert provider.month_date_for_section(1) == date(2024, 2, 1)
        assert provider.month_date_for_section(3) is None

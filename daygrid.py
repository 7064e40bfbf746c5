#!/usr/bin/env python3
"""
Day Grid Calendar - print the month or week grid of a calendar.

This is the command-line entry point. It loads the configuration and a day
source (an ICS feed or a plain date range) and prints the section that
contains the display date.
"""

import sys
import argparse
from datetime import date, timedelta
from pathlib import Path
from typing import Optional

from backend.calendar_controller import CalendarController
from backend.calendar_day import DaySource, StaticDaySource
from backend.config import Config, FirstWeekday, ViewType
from backend.debug_log import set_debug_enabled
from backend.errors import ConfigurationError
from backend.grid_provider import CellState, DayCell
from backend.ics_day_source import ICSDaySource
from backend.timezone_utils import get_timezone, today_in


DEFAULT_RANGE_DAYS = 90


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Day Grid Calendar - print a month or week grid with selectable days"
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Path to configuration file (default: built-in defaults)"
    )
    parser.add_argument(
        "--ics",
        help="ICS file path or URL marking busy days"
    )
    parser.add_argument("--start", type=date.fromisoformat, help="First day of the range (YYYY-MM-DD)")
    parser.add_argument("--end", type=date.fromisoformat, help="Last day of the range (YYYY-MM-DD)")
    parser.add_argument("--date", type=date.fromisoformat, help="Date to display (default: today)")
    parser.add_argument("--today", type=date.fromisoformat, help="Override today's date")
    parser.add_argument("--view", choices=[v.value for v in ViewType], help="View type")
    parser.add_argument("--first-weekday", choices=["monday", "sunday"], help="First column of the grid")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output"
    )
    return parser.parse_args(argv)


def build_day_source(config: Config, today: date, ics: Optional[str],
                     start: Optional[date], end: Optional[date]) -> DaySource:
    """Create the day source described by the config and command line."""
    start = start or config.source.start or today
    end = end or config.source.end or (start + timedelta(days=DEFAULT_RANGE_DAYS))
    location = ics or config.source.ics
    if not location:
        return StaticDaySource.from_range(start, end)

    source = ICSDaySource(
        start, end,
        tz=get_timezone(config.calendar.timezone),
        busy_days_active=config.source.busy_days_active,
    )
    if not source.load(location):
        print(f"Warning: could not load {location}: {source.error}", file=sys.stderr)
    return source


def format_cell(cell: DayCell) -> str:
    """Three characters: day number plus a marker."""
    if cell.state == CellState.PADDING:
        return "   "
    if cell.is_selected:
        marker = "*"
    elif cell.is_today:
        marker = "!"
    elif cell.state == CellState.OUT_OF_RANGE:
        marker = "-"
    else:
        marker = " "
    return f"{cell.day_number:>2}{marker}"


def render_section(controller: CalendarController) -> list[str]:
    """Text lines for the section holding the display date."""
    section = controller.display_section()
    display = controller.display_date
    if section is None:
        return [f"{display} is outside the calendar range"]

    lines = [f"{controller.header_title()} {display.year}"]
    headers = controller.weekday_headers()
    lines.append(" ".join(f"{name[:3]:>3}" for name in headers))

    cells = controller.section_cells(section)
    for row_start in range(0, len(cells), 7):
        row = cells[row_start:row_start + 7]
        if all(cell.state == CellState.PADDING for cell in row):
            continue
        lines.append(" ".join(format_cell(cell) for cell in row))
    return lines


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    set_debug_enabled(args.debug)

    # Load configuration
    try:
        config = Config.load(args.config) if args.config else Config()
        if args.view:
            config.calendar.view_type = ViewType(args.view)
        if args.first_weekday:
            config.calendar.first_weekday = FirstWeekday[args.first_weekday.upper()]

        tz = get_timezone(config.calendar.timezone)
        today = args.today or today_in(tz)
        source = build_day_source(config, today, args.ics, args.start, args.end)
        controller = CalendarController(config, source, today=lambda: today)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        print(f"\nCreate a configuration file, e.g. at {Config.get_default_config_path()}")
        return 1
    except ConfigurationError as e:
        print(f"Error loading configuration: {e}")
        return 1

    controller.set_display_date(args.date or today)
    for line in render_section(controller):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())

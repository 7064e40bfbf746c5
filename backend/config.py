"""
Configuration parser for the day grid calendar.

Handles TOML file parsing and validation of the calendar, selection,
localization and day-source settings.
"""

import tomllib
import os
import re
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional

import pytz

from .debug_log import debug_print
from .errors import ConfigurationError


class FirstWeekday(Enum):
    """First column of the grid. Values follow date.weekday() numbering."""
    MONDAY = 0
    SUNDAY = 6


class ViewType(Enum):
    MONTH = "month"
    WEEK = "week"

    def toggled(self) -> 'ViewType':
        return ViewType.WEEK if self is ViewType.MONTH else ViewType.MONTH


class ReselectPolicy(Enum):
    """What selecting the already selected day does."""
    TOGGLE = "toggle"  # deselect it and notify on_deselect
    IGNORE = "ignore"  # keep it, no notification


SUPPORTED_CALENDAR_SYSTEMS = ("gregorian",)

_LOCALE_PATTERN = re.compile(r'^[a-z]{2,3}(_[A-Z]{2})?$')


@dataclass
class CalendarConfig:
    """
    Grid layout and calendar arithmetic settings.

    `locale` is only checked for form (`ll` or `ll_CC`) and passed through to
    hosts; the grid takes its day and month names from LocalizationConfig.
    """
    first_weekday: FirstWeekday = FirstWeekday.MONDAY
    view_type: ViewType = ViewType.WEEK
    timezone: str = "UTC"
    locale: str = "en_US"
    calendar_system: str = "gregorian"
    force_ltr: bool = True  # False follows the host's natural layout direction

    def validate(self):
        """Raise ConfigurationError for settings the grid cannot honour."""
        try:
            pytz.timezone(self.timezone)
        except pytz.UnknownTimeZoneError:
            raise ConfigurationError(f"Unknown timezone: {self.timezone!r}")
        if self.calendar_system not in SUPPORTED_CALENDAR_SYSTEMS:
            raise ConfigurationError(
                f"Unsupported calendar system: {self.calendar_system!r} "
                f"(supported: {', '.join(SUPPORTED_CALENDAR_SYSTEMS)})"
            )
        if not _LOCALE_PATTERN.match(self.locale):
            raise ConfigurationError(f"Malformed locale: {self.locale!r}")


@dataclass
class SelectionConfig:
    """Selection behaviour."""
    reselect: ReselectPolicy = ReselectPolicy.TOGGLE
    today_always_selectable: bool = False


@dataclass
class LocalizationConfig:
    """Configuration for localized day and month names."""
    # Default to English abbreviated day names
    day_names: list[str] = None  # Mon Tue Wed Thu Fri Sat Sun
    # Default to English full month names
    month_names: list[str] = None  # January February ... December

    def __post_init__(self):
        if self.day_names is None:
            self.day_names = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
        if self.month_names is None:
            self.month_names = [
                "January", "February", "March", "April", "May", "June",
                "July", "August", "September", "October", "November", "December"
            ]
        if len(self.day_names) != 7:
            raise ConfigurationError(f"Expected 7 day names, got {len(self.day_names)}")
        if len(self.month_names) != 12:
            raise ConfigurationError(f"Expected 12 month names, got {len(self.month_names)}")

    def get_day_name(self, weekday: int) -> str:
        """Get localized day name for weekday (0=Monday, 6=Sunday)."""
        return self.day_names[weekday] if 0 <= weekday < len(self.day_names) else ""

    def get_month_name(self, month: int) -> str:
        """Get localized month name (1=January, 12=December)."""
        return self.month_names[month - 1] if 1 <= month <= len(self.month_names) else ""


@dataclass
class SourceConfig:
    """Where the command-line host gets its days from."""
    ics: str = ""  # file path or http(s) URL; empty means every day is active
    start: Optional[date] = None
    end: Optional[date] = None
    busy_days_active: bool = True  # False: days with events are the inactive ones


@dataclass
class Config:
    """Main configuration container for the day grid calendar."""

    calendar: CalendarConfig = field(default_factory=CalendarConfig)
    selection: SelectionConfig = field(default_factory=SelectionConfig)
    localization: LocalizationConfig = field(default_factory=LocalizationConfig)
    source: SourceConfig = field(default_factory=SourceConfig)

    @classmethod
    def get_default_config_path(cls) -> Path:
        """Get the default configuration file path."""
        xdg_config = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
        return Path(xdg_config) / 'daygrid-calendar' / 'daygrid-calendar.toml'

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'Config':
        """Load configuration from TOML file."""
        if config_path is None:
            config_path = cls.get_default_config_path()

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'rb') as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ConfigurationError(f"Invalid TOML in {config_path}: {e}")

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        """Build and validate a configuration from parsed TOML data."""
        debug_print("CONFIG", f"TOML data keys: {list(data.keys())}")

        # Parse Calendar section
        calendar_data = data.get('Calendar', {})
        calendar = CalendarConfig(
            first_weekday=_parse_first_weekday(calendar_data.get('first_weekday', 'monday')),
            view_type=_parse_enum(ViewType, calendar_data.get('view_type', CalendarConfig.view_type.value), 'view_type'),
            timezone=calendar_data.get('timezone', CalendarConfig.timezone),
            locale=calendar_data.get('locale', CalendarConfig.locale),
            calendar_system=calendar_data.get('calendar_system', CalendarConfig.calendar_system),
            force_ltr=_parse_bool(calendar_data.get('force_ltr', CalendarConfig.force_ltr), 'force_ltr'),
        )
        calendar.validate()

        # Parse Selection section
        selection_data = data.get('Selection', {})
        selection = SelectionConfig(
            reselect=_parse_enum(ReselectPolicy, selection_data.get('reselect', 'toggle'), 'reselect'),
            today_always_selectable=_parse_bool(
                selection_data.get('today_always_selectable', SelectionConfig.today_always_selectable),
                'today_always_selectable',
            ),
        )

        # Parse Localization section
        localization_data = data.get('Localization', {})
        day_names_str = localization_data.get('day_names', '')
        month_names_str = localization_data.get('month_names', '')

        # Parse space-separated names (if provided)
        localization = LocalizationConfig(
            day_names=day_names_str.split() if day_names_str else None,
            month_names=month_names_str.split() if month_names_str else None,
        )

        # Parse Source section
        source_data = data.get('Source', {})
        source = SourceConfig(
            ics=source_data.get('ics', ''),
            start=_parse_date(source_data.get('start'), 'start'),
            end=_parse_date(source_data.get('end'), 'end'),
            busy_days_active=_parse_bool(
                source_data.get('busy_days_active', SourceConfig.busy_days_active), 'busy_days_active'
            ),
        )

        return cls(
            calendar=calendar,
            selection=selection,
            localization=localization,
            source=source,
        )


def _parse_first_weekday(value: str) -> FirstWeekday:
    try:
        return FirstWeekday[str(value).upper()]
    except KeyError:
        raise ConfigurationError(f"first_weekday must be 'monday' or 'sunday', got {value!r}")


def _parse_enum(enum_cls, value, key: str):
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        allowed = ", ".join(repr(member.value) for member in enum_cls)
        raise ConfigurationError(f"{key} must be one of {allowed}, got {value!r}")


def _parse_bool(value, key: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{key} must be true or false, got {value!r}")
    return value


def _parse_date(value, key: str) -> Optional[date]:
    """TOML may give a native date or an ISO string."""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ConfigurationError(f"{key} must be an ISO date (YYYY-MM-DD), got {value!r}")

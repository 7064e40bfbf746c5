"""Unit tests for configuration loading."""

from datetime import date

import pytest

from backend.config import (
    CalendarConfig, Config, FirstWeekday, LocalizationConfig, ReselectPolicy, ViewType,
)
from backend.errors import ConfigurationError


SAMPLE_TOML = """
[Calendar]
first_weekday = "sunday"
view_type = "month"
timezone = "Europe/Berlin"
locale = "de_DE"
force_ltr = false

[Selection]
reselect = "ignore"
today_always_selectable = true

[Localization]
day_names = "Mo Di Mi Do Fr Sa So"
month_names = "Januar Februar März April Mai Juni Juli August September Oktober November Dezember"

[Source]
ics = "~/calendars/bookings.ics"
start = 2024-01-15
end = "2024-03-10"
busy_days_active = false
"""


class TestDefaults:
    """Config() without a file."""

    def test_defaults(self):
        config = Config()
        assert config.calendar.first_weekday is FirstWeekday.MONDAY
        assert config.calendar.view_type is ViewType.WEEK
        assert config.calendar.timezone == "UTC"
        assert config.calendar.force_ltr
        assert config.selection.reselect is ReselectPolicy.TOGGLE
        assert not config.selection.today_always_selectable
        assert config.source.ics == ""

    def test_empty_dict_gives_defaults(self):
        assert Config.from_dict({}) == Config()

    def test_default_path_follows_xdg(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert Config.get_default_config_path() == tmp_path / "daygrid-calendar" / "daygrid-calendar.toml"


class TestLoad:
    """Config.load from TOML files."""

    def test_full_file(self, tmp_path):
        path = tmp_path / "daygrid.toml"
        path.write_text(SAMPLE_TOML, encoding="utf-8")
        config = Config.load(path)

        assert config.calendar.first_weekday is FirstWeekday.SUNDAY
        assert config.calendar.view_type is ViewType.MONTH
        assert config.calendar.timezone == "Europe/Berlin"
        assert not config.calendar.force_ltr
        assert config.selection.reselect is ReselectPolicy.IGNORE
        assert config.selection.today_always_selectable
        assert config.localization.get_day_name(6) == "So"
        assert config.localization.get_month_name(3) == "März"
        assert config.source.start == date(2024, 1, 15)
        assert config.source.end == date(2024, 3, 10)
        assert not config.source.busy_days_active

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config.load(tmp_path / "nope.toml")

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "broken.toml"
        path.write_text("[Calendar\nview_type = ", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid TOML"):
            Config.load(path)


class TestValidation:
    """Rejected settings."""

    @pytest.mark.parametrize("section, key, value", [
        ("Calendar", "first_weekday", "wednesday"),
        ("Calendar", "view_type", "year"),
        ("Calendar", "timezone", "Mars/Olympus"),
        ("Calendar", "locale", "english"),
        ("Calendar", "calendar_system", "hebrew"),
        ("Selection", "reselect", "sometimes"),
        ("Source", "start", "15.01.2024"),
    ])
    def test_bad_values(self, section, key, value):
        with pytest.raises(ConfigurationError):
            Config.from_dict({section: {key: value}})

    @pytest.mark.parametrize("section, key, value", [
        ("Calendar", "force_ltr", "false"),
        ("Selection", "today_always_selectable", "yes"),
        ("Source", "busy_days_active", 1),
    ])
    def test_flags_must_be_booleans(self, section, key, value):
        with pytest.raises(ConfigurationError, match=key):
            Config.from_dict({section: {key: value}})

    def test_enum_values_are_case_insensitive(self):
        config = Config.from_dict({"Calendar": {"first_weekday": "Sunday", "view_type": "MONTH"}})
        assert config.calendar.first_weekday is FirstWeekday.SUNDAY
        assert config.calendar.view_type is ViewType.MONTH

    def test_wrong_number_of_names(self):
        with pytest.raises(ConfigurationError):
            LocalizationConfig(day_names=["Mon", "Tue"])
        with pytest.raises(ConfigurationError):
            Config.from_dict({"Localization": {"month_names": "Jan Feb"}})

    def test_locale_forms(self):
        CalendarConfig(locale="fr").validate()
        CalendarConfig(locale="pt_BR").validate()
        with pytest.raises(ConfigurationError):
            CalendarConfig(locale="pt-br").validate()

    def test_out_of_range_name_lookup(self):
        localization = LocalizationConfig()
        assert localization.get_day_name(7) == ""
        assert localization.get_month_name(0) == ""

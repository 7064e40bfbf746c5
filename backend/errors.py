"""
Exception types for the day grid.

Per-cell and per-date queries never raise; they return None. Only setup
problems (bad configuration, unknown timezone) are reported as exceptions.
"""


class CalendarError(Exception):
    """Base class for day grid errors."""


class ConfigurationError(CalendarError):
    """The host supplied an inconsistent or unsupported configuration."""

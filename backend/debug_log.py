"""
Debug output for the day grid.

Messages are timestamped, tagged and written to stderr. Output is off
unless the host enables it (the command-line tool does so with --debug).
"""

import sys
from datetime import datetime


_debug_enabled: bool = False


def set_debug_enabled(enabled: bool):
    """Turn debug output on or off for the whole process."""
    global _debug_enabled
    _debug_enabled = enabled


def is_debug_enabled() -> bool:
    return _debug_enabled


def debug_print(tag: str, msg: str) -> None:
    if not _debug_enabled:
        return
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] {tag}: {msg}", file=sys.stderr)

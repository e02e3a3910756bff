"""
Calendar primitives: shifts, unit boundaries, timezones, ISO-8601.
"""

from datemath.core.calendar.timestamps import (
    CLOCK_UNIT_SECONDS,
    LAST_MICROSECOND,
    Clock,
    add,
    end_of,
    now,
    parse_iso,
    resolve_timezone,
    start_of,
    subtract,
    system_clock,
)

__all__ = [
    # Constants
    "CLOCK_UNIT_SECONDS",
    "LAST_MICROSECOND",
    # Types
    "Clock",
    # Timezones
    "resolve_timezone",
    "system_clock",
    "now",
    "parse_iso",
    # Arithmetic
    "add",
    "subtract",
    "start_of",
    "end_of",
]

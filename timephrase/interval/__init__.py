"""Interval module: calendar differences and time unit flags.

Public API:
    diff_calendar(subject, reference) -> CalendarInterval
        Borrowing calendar diff with direction and totals

    TimeUnit
        Bit flags for units (punctuality masks, range formats)

Examples:
    >>> from timephrase import parse_instant
    >>> from timephrase.interval import diff_calendar
    >>> a = parse_instant("2024-01-10 12:00:00")
    >>> b = parse_instant("2024-01-10 13:30:00")
    >>> interval = diff_calendar(a, b)
    >>> (interval.hours, interval.minutes, interval.was_past)
    (1, 30, True)
"""

from timephrase.interval.intervalunits import (
    TimeUnit,
    DATETIME_RANGE_FORMAT,
    DATE_RANGE_FORMAT,
    UNITS_DESCENDING,
    APPEND_ORDER,
    unit_name,
    as_mask,
    units_in,
)
from timephrase.interval.intervalidentity import (
    CalendarInterval,
    diff_calendar,
    epoch_seconds,
    days_in_month,
)

__all__ = [
    "TimeUnit",
    "DATETIME_RANGE_FORMAT",
    "DATE_RANGE_FORMAT",
    "UNITS_DESCENDING",
    "APPEND_ORDER",
    "unit_name",
    "as_mask",
    "units_in",
    "CalendarInterval",
    "diff_calendar",
    "epoch_seconds",
    "days_in_month",
]

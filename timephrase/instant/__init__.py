"""Instant module: timezone-aware points in time with calendar helpers.

Public API:
    parse_instant(source="now", timezone=None, ...) -> InstantValue | None
        Build an instant from a string, datetime, date or instant

    compare_instants(a, b, timezone=None, with_micro=None) -> int
        -1 / 0 / +1 comparison, microseconds on request

    InstantValue
        Calendar fields, mutators guarded by ``changeable``, with_*() copies,
        diff() to a CalendarInterval, canonical/MySQL/human formatting

Examples:
    >>> from timephrase.instant import parse_instant
    >>> instant = parse_instant("2024-01-10 12:00:00")
    >>> instant.with_modified("last day of next month").format_mysql()
    '2024-02-29 12:00:00'
    >>> str(instant)
    '10 января 2024 г. в 12:00'
    >>> parse_instant("0000-00-00 00:00:00") is None
    True
"""

from timephrase.instant.instantapi import (
    InstantValue,
    parse_instant,
    now_instant,
    from_timestamp,
    compare_instants,
    is_equal,
    max_instant,
    min_instant,
    julian_diff_days,
    is_before_gregorian_start,
    is_after_gregorian_start_ru,
)

__all__ = [
    "InstantValue",
    "parse_instant",
    "now_instant",
    "from_timestamp",
    "compare_instants",
    "is_equal",
    "max_instant",
    "min_instant",
    "julian_diff_days",
    "is_before_gregorian_start",
    "is_after_gregorian_start_ru",
]

"""Relative module: colloquial Russian phrases for time distances.

Public API:
    relative_time_diff(subject, reference=None, ...) -> RelativeTimeDiff
        Bucket phrase, smart idiom, absolute date, counters

    smart(subject, reference=None, ...) -> str
        Just the smart phrase

Examples:
    >>> from timephrase.relative import smart
    >>> smart("2024-01-09 12:00:00", now="2024-01-10 12:00:00")
    'вчера, 9 января в 12:00 (вторник)'
"""

from timephrase.relative.relativeapi import (
    RelativeTimeDiff,
    relative_time_diff,
    smart,
)
from timephrase.relative.relativeidentity import (
    build_phrase,
    crosses_midnight,
)

__all__ = [
    "RelativeTimeDiff",
    "relative_time_diff",
    "smart",
    "build_phrase",
    "crosses_midnight",
]

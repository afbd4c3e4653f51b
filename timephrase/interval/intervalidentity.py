"""Calendar Interval
-----------------

Structured difference between two instants: years, months, days, hours,
minutes, seconds and microseconds (all non-negative) plus the direction.

Calendar borrowing works on the wall-clock fields of both instants viewed in
the subject's timezone:

  - seconds, minutes and hours borrow from the next larger unit
  - a negative day count borrows the length of the month that precedes the
    later instant's month (walking backwards until non-negative)
  - a negative month count borrows 12 months from the years

Microseconds are not part of the borrowing: the interval carries
abs(subject.microsecond - reference.microsecond) unchanged.

Example:
  >>> a = datetime(2024, 3, 1, 10, 0, tzinfo=UTC)
  >>> b = datetime(2024, 1, 31, 12, 0, tzinfo=UTC)
  >>> diff_calendar(a, b)
  CalendarInterval(years=0, months=0, days=29, hours=22, minutes=0,
                   seconds=0, microseconds=0, was_past=False, total_seconds=2584800)
"""

import calendar
from dataclasses import dataclass
from datetime import datetime
from typing import Dict

from timephrase.errors import InvalidArgumentError


# ---- Helpers ----

def _as_moment(value) -> datetime:
    """Accept an aware datetime or anything exposing to_datetime()."""
    if hasattr(value, "to_datetime"):
        value = value.to_datetime()

    if not isinstance(value, datetime):
        raise TypeError(f"Cannot diff a {type(value).__name__}, an instant is required")

    if value.tzinfo is None or value.utcoffset() is None:
        raise InvalidArgumentError("Cannot diff a naive datetime, attach a timezone first")

    return value


def epoch_seconds(moment: datetime) -> int:
    """Whole UNIX seconds of an aware datetime (floor, microseconds ignored)."""
    return calendar.timegm(moment.utctimetuple())


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


# ---- Interval ----

@dataclass(frozen=True)
class CalendarInterval:
    """Signed calendar difference between two instants.

    Attributes:
        years, months, days, hours, minutes, seconds: Borrowed calendar fields
        microseconds: abs difference of the microsecond fractions
        was_past: True when the subject is earlier than the reference
        total_seconds: abs difference of the whole UNIX seconds
    """

    years: int = 0
    months: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    microseconds: int = 0
    was_past: bool = False
    total_seconds: int = 0

    # ---- Totals ----

    @property
    def total_minutes(self) -> int:
        return self.total_seconds // 60

    @property
    def total_hours(self) -> int:
        return self.total_minutes // 60

    @property
    def total_days(self) -> int:
        return self.total_hours // 24

    @property
    def total_months(self) -> int:
        """Total days // 30, or the month field when February makes that 0."""
        months = self.total_days // 30
        if not months and self.months:
            months = self.months
        return months

    @property
    def total_years(self) -> int:
        return self.years

    @property
    def total_centuries(self) -> int:
        return self.years // 100

    @property
    def total_millennia(self) -> int:
        return self.years // 1000

    # ---- Per-unit parts ----

    @property
    def centuries(self) -> int:
        """Centuries within the current millennium (1250 years -> 2)."""
        return (self.years // 100) % 10

    @property
    def millennia(self) -> int:
        return self.years // 1000

    @property
    def invert(self) -> int:
        """1 when the subject is in the past, 0 otherwise."""
        return 1 if self.was_past else 0

    def unit_values(self) -> Dict[str, int]:
        """
        Per-unit parts keyed by paradigm name, coarsest first.

        Examples:
            >>> CalendarInterval(years=1250, days=3).unit_values()["centuries"]
            2
        """
        return {
            "millennia": self.millennia,
            "centuries": self.centuries,
            "years": self.years,
            "months": self.months,
            "days": self.days,
            "hours": self.hours,
            "minutes": self.minutes,
            "seconds": self.seconds,
            "microseconds": self.microseconds,
        }

    def total_values(self) -> Dict[str, int]:
        """Totals keyed by paradigm name, finest first."""
        return {
            "seconds": self.total_seconds,
            "minutes": self.total_minutes,
            "hours": self.total_hours,
            "days": self.total_days,
            "months": self.total_months,
            "years": self.total_years,
            "centuries": self.total_centuries,
            "millennia": self.total_millennia,
        }


# ---- Calendar diff ----

def diff_calendar(subject, reference) -> CalendarInterval:
    """
    Compute the calendar interval between subject and reference.

    Args:
        subject: Instant being described (InstantValue or aware datetime)
        reference: Instant it is compared to

    Returns:
        CalendarInterval; was_past is True when subject < reference
        (microseconds included)

    Raises:
        TypeError: If an operand is not an instant
        InvalidArgumentError: If an operand is a naive datetime

    Examples:
        >>> now = datetime(2024, 1, 10, 12, 0, 2, tzinfo=UTC)
        >>> diff_calendar(now.replace(second=0), now).was_past
        True
    """
    first = _as_moment(subject)
    second = _as_moment(reference).astimezone(first.tzinfo)

    was_past = first < second
    later, earlier = (second, first) if was_past else (first, second)

    years = later.year - earlier.year
    months = later.month - earlier.month
    days = later.day - earlier.day
    hours = later.hour - earlier.hour
    minutes = later.minute - earlier.minute
    seconds = later.second - earlier.second

    if seconds < 0:
        seconds += 60
        minutes -= 1

    if minutes < 0:
        minutes += 60
        hours -= 1

    if hours < 0:
        hours += 24
        days -= 1

    year, month = later.year, later.month
    while days < 0:
        month -= 1
        if month == 0:
            month = 12
            year -= 1
        days += days_in_month(year, month)
        months -= 1

    if months < 0:
        months += 12
        years -= 1

    return CalendarInterval(
        years=years,
        months=months,
        days=days,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        microseconds=abs(first.microsecond - second.microsecond),
        was_past=was_past,
        total_seconds=abs(epoch_seconds(first) - epoch_seconds(second)),
    )


__all__ = [
    "CalendarInterval",
    "diff_calendar",
    "epoch_seconds",
    "days_in_month",
]

"""Instant Resolution
------------------

Core of the instant module: the ``InstantValue`` type and the resolver that
turns strings, datetimes and dates into instants.

Supports:
  - Canonical strings: "2024-01-10 12:00:00", "2024-01-10 12:00:00.25"
  - Date strings: "2024-01-10"
  - Wall clock: "now", "" (microseconds only when with_micro is on)
  - Relative modifiers applied to now: "tomorrow", "+3 days", "next friday"
  - Anything else dateutil can parse: "10 Jan 2024 12:00", "2024-01-10T12:00+03:00"
  - Sentinel: "0000-00-00[ 00:00:00[.000]]" and None resolve to None

Key Design Principles:
  1. One timezone-aware datetime inside, never naive
  2. Date-only instants keep 00:00:00.000000 after every mutation
  3. Mutators raise ImmutableStateError when ``changeable`` is off;
     clone()/with_*() give a mutable copy
  4. Month and year arithmetic clamps to the last day of the month
"""

from __future__ import annotations

import functools
import logging
from datetime import date, datetime, timedelta
from typing import Optional

try:
    from dateutil import parser as dateutil_parser
    from dateutil import tz as dateutil_tz
    from dateutil.relativedelta import relativedelta
except ImportError as e:
    raise ImportError("python-dateutil not installed. pip install python-dateutil") from e

try:
    from isoweek import Week
except ImportError as e:
    raise ImportError("isoweek not installed. pip install isoweek") from e

from timephrase.config import Settings, resolve_settings
from timephrase.errors import (
    FormatError,
    ImmutableStateError,
    InvalidArgumentError,
    RangeError,
)
from timephrase.instant.instantjulian import (
    GREGORIAN_START,
    GREGORIAN_START_RU,
    julian_offset,
)
from timephrase.instant.instantnormalize import (
    CANONICAL_RE,
    MICROS_PER_SECOND,
    ModifierClause,
    format_fraction,
    is_relative_text,
    is_sentinel,
    normalize_instant_text,
    parse_fraction,
    parse_modifier,
    resolve_timezone,
)
from timephrase.interval.intervalidentity import (
    CalendarInterval,
    days_in_month,
    diff_calendar,
    epoch_seconds,
)
from timephrase.interval.intervalunits import TimeUnit
from timephrase.locales.localeapi import NBSP, resolve_locale

logger = logging.getLogger(__name__)


# ---- Helpers: start/end of day ----

def _start_of_day(moment: datetime) -> datetime:
    """Return the moment at 00:00:00.000000, timezone kept."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def _end_of_day(moment: datetime) -> datetime:
    """Return the moment at 23:59:59.999999, timezone kept."""
    return moment.replace(hour=23, minute=59, second=59, microsecond=999999)


def _shift_absolute(moment: datetime, delta: timedelta) -> datetime:
    """Add elapsed time (seconds, minutes, hours) across DST changes."""
    return (moment.astimezone(dateutil_tz.UTC) + delta).astimezone(moment.tzinfo)


def _shift_calendar(moment: datetime, delta) -> datetime:
    """Add calendar time (days and larger) keeping the wall clock."""
    return dateutil_tz.resolve_imaginary(moment + delta)


def _date_string(moment: datetime) -> str:
    return f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"


def _time_string(moment: datetime) -> str:
    return f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"


# ---- InstantValue ----

@functools.total_ordering
class InstantValue:
    """A point in time with calendar fields, microseconds and one timezone.

    Wraps a timezone-aware datetime. Build instances with parse_instant();
    the constructor only validates.

    Args:
        moment: Timezone-aware datetime
        changeable: Allow in-place mutation (default True)
        date_only: Keep the time at 00:00:00.000000

    Examples:
        >>> instant = parse_instant("2024-01-10 12:00:00")
        >>> instant.modify("+1 day").format_mysql()
        '2024-01-11 12:00:00'

        >>> frozen = parse_instant("2024-01-10").set_changeable(False)
        >>> frozen.with_modified("+1 month").format_mysql()
        '2024-02-10 00:00:00'
    """

    def __init__(self, moment: datetime, *, changeable: bool = True, date_only: bool = False):
        if not isinstance(moment, datetime):
            raise TypeError(f"InstantValue wraps a datetime, got {type(moment).__name__}")

        if moment.tzinfo is None or moment.utcoffset() is None:
            raise InvalidArgumentError("InstantValue requires a timezone-aware datetime")

        self._date_only = bool(date_only)
        self._changeable = bool(changeable)
        self._moment = _start_of_day(moment) if self._date_only else moment

    # ---- Fields ----

    @property
    def year(self) -> int:
        return self._moment.year

    @property
    def month(self) -> int:
        return self._moment.month

    @property
    def day(self) -> int:
        return self._moment.day

    @property
    def hour(self) -> int:
        return self._moment.hour

    @property
    def minute(self) -> int:
        return self._moment.minute

    @property
    def second(self) -> int:
        return self._moment.second

    @property
    def microsecond(self) -> int:
        return self._moment.microsecond

    @property
    def tzinfo(self):
        return self._moment.tzinfo

    @property
    def changeable(self) -> bool:
        return self._changeable

    @property
    def date_only(self) -> bool:
        return self._date_only

    @property
    def timestamp(self) -> int:
        """Whole UNIX seconds (floor)."""
        return epoch_seconds(self._moment)

    @property
    def iso_weekday(self) -> int:
        """1 (Monday) - 7 (Sunday)."""
        return self._moment.isoweekday()

    @property
    def iso_week(self) -> int:
        return Week.withdate(self._moment.date()).week

    def to_datetime(self) -> datetime:
        return self._moment

    def to_date(self) -> date:
        return self._moment.date()

    def set_changeable(self, changeable: bool) -> "InstantValue":
        self._changeable = bool(changeable)
        return self

    # ---- Cloning ----

    def clone(self, keep_changeable: bool = False) -> "InstantValue":
        """
        Copy the instant.

        The copy is changeable unless keep_changeable is set, in which case it
        inherits the flag of the original.
        """
        changeable = self._changeable if keep_changeable else True
        return InstantValue(self._moment, changeable=changeable, date_only=self._date_only)

    def as_date_only(self) -> "InstantValue":
        """Date-only copy (time reset to midnight)."""
        return InstantValue(self._moment, date_only=True)

    def as_date_time(self) -> "InstantValue":
        """Copy without the date-only restriction."""
        return InstantValue(self._moment, date_only=False)

    def with_time(self, hour: int, minute: int, second: int = 0, microsecond: int = 0) -> "InstantValue":
        return self.clone().set_time(hour, minute, second, microsecond)

    def with_date(self, year: int, month: int, day: int) -> "InstantValue":
        return self.clone().set_date(year, month, day)

    def with_modified(self, modifier: str) -> "InstantValue":
        return self.clone().modify(modifier)

    # ---- Mutators ----

    def _ensure_changeable(self):
        if not self._changeable:
            raise ImmutableStateError(
                f"Instant '{self.format_mysql()}' is marked as not changeable. "
                "Use clone() or a with_*() method to get a mutable copy."
            )

    def _assign(self, moment: datetime) -> "InstantValue":
        self._moment = _start_of_day(moment) if self._date_only else moment
        return self

    def set_time(self, hour: int, minute: int, second: int = 0, microsecond: int = 0) -> "InstantValue":
        """
        Set the wall-clock time. Values past their range roll over
        ("25:00" is 01:00 of the next day).

        Raises:
            ImmutableStateError: If the instant is not changeable
            RangeError: If microsecond is outside 0..999999
        """
        self._ensure_changeable()
        if not 0 <= microsecond < MICROS_PER_SECOND:
            raise RangeError(f"Microseconds must be within 0..999999, got {microsecond}")

        moment = _start_of_day(self._moment) + timedelta(hours=hour, minutes=minute, seconds=second)
        return self._assign(dateutil_tz.resolve_imaginary(moment.replace(microsecond=microsecond)))

    def set_date(self, year: int, month: int, day: int) -> "InstantValue":
        """
        Set the calendar date. Month and day roll over like set_time
        (month 13 is January of the next year, day 0 the last day of the
        previous month).

        Raises:
            ImmutableStateError: If the instant is not changeable
            RangeError: If the resulting year is outside 1..9999
        """
        self._ensure_changeable()
        try:
            moment = self._moment.replace(year=year, month=1, day=1)
            moment = moment + relativedelta(months=month - 1) + timedelta(days=day - 1)
        except (ValueError, OverflowError) as e:
            raise RangeError(f"Date {year}-{month}-{day} is out of range") from e

        return self._assign(dateutil_tz.resolve_imaginary(moment))

    def set_year(self, year: int) -> "InstantValue":
        return self.set_date(year, self.month, self.day)

    def set_month_and_day(self, month: int, day: int) -> "InstantValue":
        return self.set_date(self.year, month, day)

    def set_microseconds(self, microseconds: int) -> "InstantValue":
        """
        Raises:
            RangeError: If microseconds is outside 0..999999
        """
        self._ensure_changeable()
        if not 0 <= microseconds < MICROS_PER_SECOND:
            raise RangeError(f"Microseconds must be within 0..999999, got {microseconds}")
        return self._assign(self._moment.replace(microsecond=microseconds))

    def set_week_number(self, week: int) -> "InstantValue":
        """
        Move to the same weekday of another ISO week of the year.

        Raises:
            RangeError: If week is outside 0..53
        """
        self._ensure_changeable()
        if not 0 <= week <= 53:
            raise RangeError(f"A year has at most 53 ISO weeks, got {week}")

        current = Week.withdate(self._moment.date())
        shift = week - current.week
        if shift:
            self._assign(_shift_calendar(self._moment, timedelta(weeks=shift)))
        return self

    def set_day_of_week(self, iso_day: int) -> "InstantValue":
        """
        Move to another day of the current ISO week (1 = Monday).

        Raises:
            RangeError: If iso_day is outside 1..7
        """
        self._ensure_changeable()
        if not 1 <= iso_day <= 7:
            raise RangeError(f"ISO weekday must be within 1..7, got {iso_day}")

        shift = iso_day - self.iso_weekday
        if shift:
            self._assign(_shift_calendar(self._moment, timedelta(days=shift)))
        return self

    def modify(self, modifier: str) -> "InstantValue":
        """
        Apply a relative modifier in place.

        See parse_modifier() for the grammar. A microsecond delta must be
        below one second in magnitude; crossing a second boundary borrows or
        lends exactly one second.

        Raises:
            ImmutableStateError: If the instant is not changeable
            FormatError: If the modifier cannot be interpreted
            RangeError: If a microsecond delta is 1 000 000 or more

        Examples:
            >>> parse_instant("2024-01-31 10:00:00").modify("+1 month").format_mysql()
            '2024-02-29 10:00:00'

            >>> parse_instant("2024-01-10 10:00:00.900000").modify("+200000 usec").format_canonical()
            '2024-01-10 10:00:01.100000'
        """
        self._ensure_changeable()

        moment = self._moment
        for clause in parse_modifier(modifier):
            moment = _apply_clause(moment, clause)

        return self._assign(moment)

    # ---- Period boundaries ----

    def to_day_start(self) -> "InstantValue":
        self._ensure_changeable()
        return self._assign(_start_of_day(self._moment))

    def to_day_end(self) -> "InstantValue":
        self._ensure_changeable()
        return self._assign(_end_of_day(self._moment))

    def to_week_start(self) -> "InstantValue":
        """Monday 00:00:00 of the ISO week."""
        self._ensure_changeable()
        monday = Week.withdate(self._moment.date()).monday()
        return self._assign(_start_of_day(self._moment.replace(year=monday.year, month=monday.month, day=monday.day)))

    def to_week_end(self) -> "InstantValue":
        """Sunday 23:59:59.999999 of the ISO week."""
        self._ensure_changeable()
        sunday = Week.withdate(self._moment.date()).sunday()
        return self._assign(_end_of_day(self._moment.replace(year=sunday.year, month=sunday.month, day=sunday.day)))

    def to_month_start(self) -> "InstantValue":
        self._ensure_changeable()
        return self._assign(_start_of_day(self._moment.replace(day=1)))

    def to_month_end(self) -> "InstantValue":
        self._ensure_changeable()
        last_day = days_in_month(self.year, self.month)
        return self._assign(_end_of_day(self._moment.replace(day=last_day)))

    def to_year_start(self) -> "InstantValue":
        self._ensure_changeable()
        return self._assign(_start_of_day(self._moment.replace(month=1, day=1)))

    def to_year_end(self) -> "InstantValue":
        self._ensure_changeable()
        return self._assign(_end_of_day(self._moment.replace(month=12, day=31)))

    def to_first_day_of(self, period: str = "this month") -> "InstantValue":
        """
        First day of a month or year, time kept ("next month", "last year").

        Raises:
            InvalidArgumentError: If period is empty
            FormatError: If period is not understood
        """
        return self.modify(f"first day of {_check_period(period)}")

    def to_last_day_of(self, period: str = "this month") -> "InstantValue":
        """Last day of a month or year, time kept."""
        return self.modify(f"last day of {_check_period(period)}")

    # ---- Comparison ----

    def diff(self, other="now", settings: Optional[Settings] = None) -> CalendarInterval:
        """
        Calendar interval between this instant and another.

        was_past is True when this instant is earlier than ``other``.
        """
        reference = resolve_instant(other, self.tzinfo, settings=settings)
        if reference is None:
            raise TypeError("Cannot diff against an empty (all-zero) instant")
        return diff_calendar(self, reference)

    def compare_with(self, other, timezone=None, with_micro: Optional[bool] = None,
                     settings: Optional[Settings] = None) -> int:
        return compare_instants(self, other, timezone, with_micro, settings)

    def is_before(self, other) -> bool:
        return self.compare_with(other) < 0

    def is_after(self, other) -> bool:
        return self.compare_with(other) > 0

    def is_between(self, begin=None, end=None) -> bool:
        """Inclusive on both ends; a missing end is unbounded."""
        return (
            (begin is None or self.compare_with(begin) >= 0)
            and (end is None or self.compare_with(end) <= 0)
        )

    def in_past(self, now=None) -> bool:
        return self.compare_with(now if now is not None else _now_in(self.tzinfo)) < 0

    def in_future(self, now=None) -> bool:
        return self.compare_with(now if now is not None else _now_in(self.tzinfo)) > 0

    def is_today(self, now=None) -> bool:
        reference = resolve_instant(now if now is not None else "now", self.tzinfo)
        return self.to_date() == reference.to_datetime().astimezone(self.tzinfo).date()

    def __eq__(self, other):
        if not isinstance(other, (InstantValue, datetime)):
            return NotImplemented
        return compare_instants(self, other, with_micro=True) == 0

    def __lt__(self, other):
        if not isinstance(other, (InstantValue, datetime)):
            return NotImplemented
        return compare_instants(self, other, with_micro=True) < 0

    # Mutable: not hashable
    __hash__ = None

    # ---- Julian calendar ----

    def in_julian_calendar(self) -> "InstantValue":
        """Copy of this date expressed in the Julian calendar."""
        offset = julian_offset(self.year)
        return self.clone().modify(f"{-offset} days")

    def format_with_julian(self, julian_first: bool = False, detail=TimeUnit.MONTHS, locale=None) -> str:
        """
        Date with its Julian counterpart in brackets.

        Args:
            julian_first: Put the Julian date first, Gregorian in brackets
            detail: TimeUnit mask: YEARS repeats the year in brackets, MONTHS
                    the day and month, DAYS only the day
            locale: LocaleTable or code

        Examples:
            >>> parse_instant("2024-02-14").format_with_julian()
            '14 февраля (1 февраля) 2024 года'
        """
        table = resolve_locale(locale)
        julian = self.in_julian_calendar()
        first, second = (julian, self) if julian_first else (self, julian)

        def full(instant):
            return table.phrase(
                "julian_full",
                day=instant.day,
                month=table.month_name(instant.month, genitive=True),
                year=instant.year,
            )

        def day_month(instant):
            return table.phrase(
                "julian_day_month",
                day=instant.day,
                month=table.month_name(instant.month, genitive=True),
            )

        if detail & TimeUnit.YEARS or first.year != second.year:
            return f"{full(first)} ({full(second)})"

        if detail & TimeUnit.MONTHS or first.month != second.month:
            return f"{day_month(first)} ({day_month(second)})" + table.phrase("julian_year", year=first.year)

        if detail & TimeUnit.DAYS or first.day != second.day:
            return table.phrase(
                "julian_full",
                day=f"{first.day}{NBSP}({second.day})",
                month=table.month_name(first.month, genitive=True),
                year=first.year,
            )

        return full(first)

    def is_before_gregorian_start(self) -> bool:
        year, month, day = GREGORIAN_START
        start = _start_of_day(self._moment.replace(year=year, month=month, day=day))
        return self._moment < start

    def is_after_gregorian_start_ru(self) -> bool:
        year, month, day = GREGORIAN_START_RU
        start = _start_of_day(self._moment.replace(year=year, month=month, day=day))
        return self._moment > start

    # ---- Formatting ----

    def format_canonical(self) -> str:
        """'YYYY-MM-DD HH:MM:SS.ffffff'."""
        return f"{_date_string(self._moment)} {_time_string(self._moment)}.{format_fraction(self.microsecond)}"

    def format_mysql(self) -> str:
        """'YYYY-MM-DD HH:MM:SS' ('YYYY-MM-DD' for date-only)."""
        if self._date_only:
            return _date_string(self._moment)
        return f"{_date_string(self._moment)} {_time_string(self._moment)}"

    def format_digits(self) -> str:
        """'dd.mm.YYYY HH:MM' ('dd.mm.YYYY' for date-only)."""
        digits = f"{self.day:02d}.{self.month:02d}.{self.year:04d}"
        if self._date_only:
            return digits
        return f"{digits} {self.hour:02d}:{self.minute:02d}"

    def format_human(self, locale=None) -> str:
        """
        Localized date ('05 января 1970 г. в 09:15', date-only '5 января 1970 г.').
        """
        table = resolve_locale(locale)
        month = table.month_name(self.month, genitive=True)

        if self._date_only:
            return table.phrase("instant_date", day=self.day, month=month, year=self.year)

        return table.phrase(
            "instant_datetime",
            day=f"{self.day:02d}",
            month=month,
            year=self.year,
            time=f"{self.hour:02d}:{self.minute:02d}",
        )

    def __str__(self):
        return self.format_human()

    def __repr__(self):
        kind = "date" if self._date_only else "datetime"
        return f"InstantValue('{self.format_canonical()}', tz='{self._moment.tzname()}', {kind})"


# ---- Modifier application ----

def _check_period(period: str) -> str:
    period = normalize_instant_text(period or "")
    if not period:
        raise InvalidArgumentError("Period must name a month or a year ('this month', 'next year')")
    return period


def _apply_clause(moment: datetime, clause: ModifierClause) -> datetime:
    """Apply one parsed modifier clause to an aware datetime."""
    if clause.kind == "delta":
        return _apply_delta(moment, clause.unit, clause.amount)

    if clause.kind == "keyword":
        if clause.unit == "now":
            return moment
        if clause.unit in ("today", "midnight"):
            return _start_of_day(moment)
        if clause.unit == "noon":
            return _start_of_day(moment).replace(hour=12)
        if clause.unit == "tomorrow":
            return _shift_calendar(_start_of_day(moment), timedelta(days=1))
        if clause.unit == "yesterday":
            return _shift_calendar(_start_of_day(moment), timedelta(days=-1))

    if clause.kind == "weekday":
        current = moment.isoweekday()
        if clause.direction == "next":
            shift = (clause.amount - current) % 7 or 7
        else:
            shift = -((current - clause.amount) % 7 or 7)
        return _start_of_day(_shift_calendar(moment, timedelta(days=shift)))

    if clause.kind == "boundary":
        if clause.unit == "month":
            base = moment + relativedelta(months=clause.amount)
            day = 1 if clause.direction == "first" else days_in_month(base.year, base.month)
            return dateutil_tz.resolve_imaginary(base.replace(day=day))

        base = moment + relativedelta(years=clause.amount)
        if clause.direction == "first":
            return dateutil_tz.resolve_imaginary(base.replace(month=1, day=1))
        return dateutil_tz.resolve_imaginary(base.replace(month=12, day=31))

    raise FormatError(f"Unsupported modifier clause: {clause}")


def _apply_delta(moment: datetime, unit: str, amount: int) -> datetime:
    if unit == "microseconds":
        if abs(amount) >= MICROS_PER_SECOND:
            raise RangeError(
                f"Microsecond delta must be below one second, got {amount}"
            )
        value = moment.microsecond + amount
        if value < 0:
            moment = _shift_absolute(moment, timedelta(seconds=-1))
            value += MICROS_PER_SECOND
        elif value >= MICROS_PER_SECOND:
            moment = _shift_absolute(moment, timedelta(seconds=1))
            value -= MICROS_PER_SECOND
        return moment.replace(microsecond=value)

    if unit in ("seconds", "minutes", "hours"):
        return _shift_absolute(moment, timedelta(**{unit: amount}))

    if unit == "days":
        return _shift_calendar(moment, timedelta(days=amount))

    if unit == "weeks":
        return _shift_calendar(moment, timedelta(weeks=amount))

    if unit == "fortnights":
        return _shift_calendar(moment, timedelta(weeks=2 * amount))

    try:
        return _shift_calendar(moment, relativedelta(**{unit: amount}))
    except (ValueError, OverflowError) as e:
        raise RangeError(f"Cannot shift {_date_string(moment)} by {amount} {unit}") from e


# ---- Resolution ----

def _now_in(zone, with_micro: bool = False) -> datetime:
    moment = datetime.now(zone)
    if not with_micro:
        moment = moment.replace(microsecond=0)
    return moment


def resolve_instant(source="now", timezone=None, *, with_micro: Optional[bool] = None,
                    date_only: bool = False, settings: Optional[Settings] = None) -> Optional[InstantValue]:
    """
    Resolve a source to an InstantValue.

    Args:
        source: InstantValue, datetime, date, or string
        timezone: Name or tzinfo. Converts temporal sources, interprets naive
                  strings; None keeps the source's zone or uses settings.timezone
        with_micro: Keep microseconds of the wall clock (default: settings)
        date_only: Build a date-only instant
        settings: Explicit Settings (default: environment)

    Returns:
        InstantValue, or None for None and the all-zero sentinel

    Raises:
        FormatError: If the string cannot be interpreted
        TypeError: If source is not a string or a temporal value
        InvalidArgumentError: If the timezone name is unknown

    Examples:
        >>> resolve_instant("2024-01-10 12:00:00.5").microsecond
        500000

        >>> resolve_instant("0000-00-00 00:00:00") is None
        True
    """
    if source is None:
        return None

    settings = resolve_settings(settings)
    if with_micro is None:
        with_micro = settings.with_micro

    zone = resolve_timezone(timezone)
    default_zone = zone or resolve_timezone(None, settings.timezone)

    if isinstance(source, InstantValue):
        moment = source.to_datetime()
        if zone is not None:
            moment = moment.astimezone(zone)
        return InstantValue(moment, date_only=date_only or source.date_only)

    if isinstance(source, datetime):
        if source.tzinfo is None or source.utcoffset() is None:
            moment = source.replace(tzinfo=default_zone)
        elif zone is not None:
            moment = source.astimezone(zone)
        else:
            moment = source
        return InstantValue(moment, date_only=date_only)

    if isinstance(source, date):
        moment = datetime(source.year, source.month, source.day, tzinfo=default_zone)
        return InstantValue(moment, date_only=date_only)

    if not isinstance(source, str):
        raise TypeError(
            f"Cannot build an instant from {type(source).__name__}, "
            "expected a string, datetime, date or InstantValue"
        )

    text = normalize_instant_text(source)

    if text.lower() in ("", "now"):
        return InstantValue(_now_in(default_zone, with_micro), date_only=date_only)

    if is_sentinel(text):
        return None

    match = CANONICAL_RE.match(text)
    if match:
        try:
            moment = datetime(
                int(match.group("year")),
                int(match.group("month")),
                int(match.group("day")),
                int(match.group("hour") or 0),
                int(match.group("minute") or 0),
                int(match.group("second") or 0),
                parse_fraction(match.group("fraction")),
                tzinfo=default_zone,
            )
        except ValueError as e:
            raise FormatError(f"'{source}' is not a valid calendar moment") from e
        return InstantValue(moment, date_only=date_only)

    if is_relative_text(text):
        logger.debug(f"Resolving '{text}' as a modifier of now")
        instant = InstantValue(_now_in(default_zone, with_micro), date_only=date_only)
        return instant.modify(text)

    logger.debug(f"Falling back to dateutil for '{text}'")
    try:
        moment = dateutil_parser.parse(text)
    except (ValueError, OverflowError) as e:
        raise FormatError(f"Cannot interpret '{source}' as a calendar moment") from e

    if moment.tzinfo is None or moment.utcoffset() is None:
        moment = moment.replace(tzinfo=default_zone)
    elif zone is not None:
        moment = moment.astimezone(zone)

    return InstantValue(moment, date_only=date_only)


def _as_operand(value, zone, settings: Settings) -> InstantValue:
    if isinstance(value, InstantValue):
        return value

    if not isinstance(value, (str, datetime, date)):
        raise TypeError(
            f"Cannot compare {type(value).__name__}, expected a string, datetime, date or InstantValue"
        )

    instant = resolve_instant(value, zone, settings=settings)
    if instant is None:
        raise TypeError(f"Cannot compare an empty (all-zero) instant '{value}'")
    return instant


def compare_instants(a, b, timezone=None, with_micro: Optional[bool] = None,
                     settings: Optional[Settings] = None) -> int:
    """
    Compare two instants.

    The whole-second UNIX difference decides; with microseconds on, the
    microsecond difference is added (exact integer arithmetic) before the
    sign is taken. If either operand is date-only, calendar dates are
    compared in ``timezone`` (default: a's zone).

    Args:
        a, b: InstantValue, datetime, date, or string
        timezone: Zone for date-only comparison and naive strings
        with_micro: Include microseconds (default: settings.with_micro)
        settings: Explicit Settings

    Returns:
        -1 if a < b, 0 if equal, +1 if a > b

    Raises:
        TypeError: If an operand is not temporal

    Examples:
        >>> compare_instants("2024-01-10 12:00:00.9", "2024-01-10 12:00:00.1")
        0

        >>> compare_instants("2024-01-10 12:00:00.9", "2024-01-10 12:00:00.1", with_micro=True)
        1
    """
    settings = resolve_settings(settings)
    if with_micro is None:
        with_micro = settings.with_micro

    zone = resolve_timezone(timezone)
    first = _as_operand(a, zone, settings)
    second = _as_operand(b, zone, settings)

    if first.date_only or second.date_only:
        target = zone or first.tzinfo
        day_a = first.to_datetime().astimezone(target).date()
        day_b = second.to_datetime().astimezone(target).date()
        return (day_a > day_b) - (day_a < day_b)

    total = (first.timestamp - second.timestamp) * MICROS_PER_SECOND
    if with_micro:
        total += first.microsecond - second.microsecond

    return (total > 0) - (total < 0)


__all__ = [
    "InstantValue",
    "resolve_instant",
    "compare_instants",
]

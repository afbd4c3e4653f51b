"""Instant API.

Public API for building, comparing and inspecting instants.
Accepts strings, datetimes, dates and InstantValue objects everywhere.
"""

from datetime import datetime
from typing import Iterable, Optional

from timephrase.config import Settings, resolve_settings
from timephrase.errors import FormatError, InvalidArgumentError
from timephrase.instant.instantidentity import (
    InstantValue,
    compare_instants,
    resolve_instant,
)
from timephrase.instant.instantjulian import julian_offset
from timephrase.instant.instantnormalize import MICROS_PER_SECOND, resolve_timezone


def parse_instant(
    source="now",
    timezone=None,
    *,
    with_micro: Optional[bool] = None,
    date_only: bool = False,
    strict: bool = True,
    message: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> Optional[InstantValue]:
    """
    Build an InstantValue from a string, datetime, date or another instant.

    Supports:
      - Canonical: "2024-01-10 12:00:00.250000" (1-8 fraction digits)
      - Dates: "2024-01-10"
      - Wall clock: "now", ""
      - Modifiers of now: "tomorrow", "-2 hours", "next monday"
      - Free-form text understood by dateutil

    Key Behaviors:
      1. None and the all-zero sentinel ("0000-00-00 00:00:00") return None
      2. A timezone converts temporal sources and localizes naive strings
      3. Without a timezone, temporal sources keep theirs, naive input uses
         settings.timezone (default Europe/Moscow)

    Args:
        source: Value to interpret
        timezone: Name ('Europe/Moscow', 'UTC', '+03:00') or tzinfo
        with_micro: Keep wall-clock microseconds (default: settings.with_micro)
        date_only: Build a date-only instant (time fixed at midnight)
        strict: Raise FormatError on unparsable input; otherwise return None
        message: Replacement text for the FormatError
        settings: Explicit Settings (default: TIMEPHRASE_* environment)

    Returns:
        InstantValue, or None (sentinel, None input, or strict=False failure)

    Raises:
        FormatError: If source cannot be interpreted and strict is True
        TypeError: If source is not a string or temporal value
        InvalidArgumentError: If the timezone is unknown

    Examples:
        >>> parse_instant("2024-01-10 12:00:00.25").format_canonical()
        '2024-01-10 12:00:00.250000'

        >>> parse_instant("0000-00-00") is None
        True

        >>> parse_instant("not a date", strict=False) is None
        True

        >>> parse_instant("2024-01-10", date_only=True).format_mysql()
        '2024-01-10'
    """
    try:
        return resolve_instant(
            source,
            timezone,
            with_micro=with_micro,
            date_only=date_only,
            settings=settings,
        )
    except FormatError as e:
        if not strict:
            return None
        if message:
            raise FormatError(message) from e
        raise


def now_instant(timezone=None, *, with_micro: Optional[bool] = None,
                settings: Optional[Settings] = None) -> InstantValue:
    """
    Current wall-clock instant.

    Examples:
        >>> now_instant("UTC").tzinfo
        tzutc()
    """
    return resolve_instant("now", timezone, with_micro=with_micro, settings=settings)


def from_timestamp(timestamp, timezone=None, *, settings: Optional[Settings] = None) -> InstantValue:
    """
    Instant from UNIX seconds (int or float; the fraction becomes microseconds).

    Raises:
        InvalidArgumentError: If timestamp is not a number or out of range

    Examples:
        >>> from_timestamp(0, "UTC").format_mysql()
        '1970-01-01 00:00:00'

        >>> from_timestamp(1.5, "UTC").microsecond
        500000
    """
    if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
        raise InvalidArgumentError(
            f"UNIX timestamp must be a number, got {type(timestamp).__name__}"
        )

    settings = resolve_settings(settings)
    zone = resolve_timezone(timezone, settings.timezone)

    whole = int(timestamp // 1)
    micro = int(round((timestamp - whole) * MICROS_PER_SECOND))
    if micro >= MICROS_PER_SECOND:
        whole, micro = whole + 1, micro - MICROS_PER_SECOND

    try:
        moment = datetime.fromtimestamp(whole, zone).replace(microsecond=micro)
    except (ValueError, OverflowError, OSError) as e:
        raise InvalidArgumentError(f"UNIX timestamp {timestamp} is out of range") from e

    return InstantValue(moment)


def is_equal(a, b, timezone=None, with_micro: Optional[bool] = None,
             settings: Optional[Settings] = None) -> bool:
    """
    Check that two instants denote the same moment (zones may differ).

    Examples:
        >>> is_equal("2024-01-10 12:00:00", parse_instant("2024-01-10 09:00:00", "UTC"))
        True
    """
    return compare_instants(a, b, timezone, with_micro, settings) == 0


def _pick(instants: Iterable, sign: int, timezone, with_micro, settings) -> Optional[InstantValue]:
    chosen = None
    for index, value in enumerate(instants):
        if value is None:
            raise TypeError(f"Element {index} is None, expected an instant")
        if chosen is None or compare_instants(value, chosen, timezone, with_micro, settings) == sign:
            chosen = value

    if chosen is None:
        return None

    return resolve_instant(chosen, settings=settings)


def max_instant(instants: Iterable, timezone=None, with_micro: Optional[bool] = None,
                settings: Optional[Settings] = None) -> Optional[InstantValue]:
    """
    Latest of several instants (None for an empty iterable).

    Examples:
        >>> max_instant(["2024-01-10", "2023-05-01", "2024-01-09"]).format_mysql()
        '2024-01-10 00:00:00'
    """
    return _pick(instants, 1, timezone, with_micro, settings)


def min_instant(instants: Iterable, timezone=None, with_micro: Optional[bool] = None,
                settings: Optional[Settings] = None) -> Optional[InstantValue]:
    """Earliest of several instants (None for an empty iterable)."""
    return _pick(instants, -1, timezone, with_micro, settings)


# ---- Julian calendar ----

def julian_diff_days(source, *, settings: Optional[Settings] = None) -> int:
    """
    Days between the Gregorian and Julian calendars for the instant's year.

    Examples:
        >>> julian_diff_days("2024-01-07")
        13
    """
    instant = parse_instant(source, settings=settings)
    return julian_offset(instant.year)


def is_before_gregorian_start(source, *, settings: Optional[Settings] = None) -> bool:
    """True before 5 October 1582 (first dropped day of the reform)."""
    return parse_instant(source, settings=settings).is_before_gregorian_start()


def is_after_gregorian_start_ru(source, *, settings: Optional[Settings] = None) -> bool:
    """True after 1 February 1918 (the switch in Russia)."""
    return parse_instant(source, settings=settings).is_after_gregorian_start_ru()


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

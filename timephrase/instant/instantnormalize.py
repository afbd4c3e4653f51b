"""Instant Text Normalization
--------------------------

Helpers used before an instant is built or modified:

  - canonical exchange strings ("2024-01-10 12:00:00.250000")
  - the all-zero sentinel ("0000-00-00 00:00:00") that decodes to None
  - timezone lookup by name (dateutil.tz)
  - the relative modifier grammar ("+1 day -5 min", "next monday",
    "last day of next month")

Examples:
  >>> is_sentinel("0000-00-00 00:00:00.000")
  True

  >>> parse_fraction("25")
  250000

  >>> parse_modifier("+2 days noon")
  [ModifierClause(kind='delta', unit='days', amount=2, direction=None),
   ModifierClause(kind='keyword', unit='noon', amount=0, direction=None)]
"""

import re
import unicodedata
from datetime import tzinfo
from typing import List, NamedTuple, Optional, Union

try:
    from dateutil import tz as dateutil_tz
except ImportError as e:
    raise ImportError("python-dateutil not installed. pip install python-dateutil") from e

from timephrase.errors import FormatError, InvalidArgumentError


MICROS_PER_SECOND = 1_000_000

CANONICAL_RE = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"(?:[ T](?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?:\.(?P<fraction>\d{1,8}))?)?$"
)

SENTINEL_RE = re.compile(r"^0000-00-00(?: 00:00:00(?:\.0+)?)?$")

WEEKDAYS = {
    "monday": 1, "mon": 1,
    "tuesday": 2, "tue": 2,
    "wednesday": 3, "wed": 3,
    "thursday": 4, "thu": 4,
    "friday": 5, "fri": 5,
    "saturday": 6, "sat": 6,
    "sunday": 7, "sun": 7,
}

# Unit spellings accepted by modify(), longest first
UNIT_ALIASES = {
    "microseconds": "microseconds", "microsecond": "microseconds",
    "micros": "microseconds", "micro": "microseconds",
    "usecs": "microseconds", "usec": "microseconds",
    "seconds": "seconds", "second": "seconds", "secs": "seconds", "sec": "seconds",
    "minutes": "minutes", "minute": "minutes", "mins": "minutes", "min": "minutes",
    "hours": "hours", "hour": "hours",
    "days": "days", "day": "days",
    "weeks": "weeks", "week": "weeks",
    "fortnights": "fortnights", "fortnight": "fortnights",
    "months": "months", "month": "months",
    "years": "years", "year": "years",
}

KEYWORDS = ("now", "today", "midnight", "noon", "tomorrow", "yesterday")

_UNIT_PATTERN = "|".join(sorted(UNIT_ALIASES, key=len, reverse=True))
_WEEKDAY_PATTERN = "|".join(sorted(WEEKDAYS, key=len, reverse=True))

_DELTA_RE = re.compile(rf"(?P<sign>[+-]?)\s*(?P<amount>\d+)\s*(?P<unit>{_UNIT_PATTERN})\b")
_BOUNDARY_RE = re.compile(
    r"(?P<edge>first|last) day of(?: (?P<offset>this|next|last|previous))? (?P<period>month|year)\b"
)
_WEEKDAY_RE = re.compile(rf"(?P<direction>next|last|previous) (?P<weekday>{_WEEKDAY_PATTERN})\b")
_STEP_RE = re.compile(rf"(?P<direction>next|last|previous|this) (?P<unit>{_UNIT_PATTERN})\b")
_KEYWORD_RE = re.compile(rf"(?P<keyword>{'|'.join(KEYWORDS)})\b")


class ModifierClause(NamedTuple):
    """One clause of a relative modifier.

    kind is one of:
      - 'delta': unit + signed amount ("+3 hours")
      - 'keyword': unit holds the keyword ("noon")
      - 'weekday': amount holds the ISO weekday, direction 'next'/'last'
      - 'boundary': unit holds 'month'/'year', direction 'first'/'last',
        amount holds the period offset (-1, 0, +1)
    """

    kind: str
    unit: str
    amount: int = 0
    direction: Optional[str] = None


def normalize_instant_text(text: str) -> str:
    """
    Normalize calendar text before parsing.

    Strips, applies NFC, turns no-break spaces into plain spaces and
    collapses runs of whitespace.

    Examples:
        >>> normalize_instant_text("  2024-01-10\\u00a012:00:00 ")
        '2024-01-10 12:00:00'
    """
    if not text:
        return ""

    text = unicodedata.normalize("NFC", text)
    text = text.replace("\u00a0", " ")
    text = re.sub(r"\s+", " ", text)

    return text.strip()


def is_sentinel(text: str) -> bool:
    """
    Check for the all-zero date/time that persistence layers use as "no value".

    Examples:
        >>> is_sentinel("0000-00-00")
        True

        >>> is_sentinel("0000-00-00 00:00:00.0001")
        False
    """
    return bool(SENTINEL_RE.match(normalize_instant_text(text)))


def parse_fraction(fraction: Optional[str]) -> int:
    """
    Convert the digits after the decimal point to microseconds.

    Right-padded to 6 digits; digits past the sixth are dropped.

    Examples:
        >>> parse_fraction("5")
        500000

        >>> parse_fraction("12345678")
        123456
    """
    if not fraction:
        return 0
    return int(fraction[:6].ljust(6, "0"))


def format_fraction(microsecond: int) -> str:
    """Six-digit zero-padded fraction ('000250')."""
    return f"{microsecond:06d}"


def resolve_timezone(timezone: Union[str, tzinfo, None], default: Optional[str] = None) -> Optional[tzinfo]:
    """
    Resolve a timezone name or tzinfo.

    Args:
        timezone: IANA name ('Europe/Moscow'), 'UTC', a fixed offset
                  ('+03:00') or a tzinfo instance
        default: Name used when timezone is None (None -> return None)

    Returns:
        tzinfo or None

    Raises:
        InvalidArgumentError: If the name is unknown

    Examples:
        >>> resolve_timezone("Europe/Moscow")
        tzfile('/usr/share/zoneinfo/Europe/Moscow')
    """
    if isinstance(timezone, tzinfo):
        return timezone

    if timezone is None:
        if default is None:
            return None
        timezone = default

    if not isinstance(timezone, str):
        raise InvalidArgumentError(
            f"Timezone must be a name or tzinfo, got {type(timezone).__name__}"
        )

    name = timezone.strip()
    if name.upper() in ("UTC", "Z", "GMT"):
        return dateutil_tz.UTC

    offset = re.match(r"^([+-])(\d{2}):?(\d{2})$", name)
    if offset:
        seconds = int(offset.group(2)) * 3600 + int(offset.group(3)) * 60
        if offset.group(1) == "-":
            seconds = -seconds
        return dateutil_tz.tzoffset(None, seconds)

    zone = dateutil_tz.gettz(name)
    if zone is None:
        raise InvalidArgumentError(f"Unknown timezone '{timezone}'")

    return zone


def parse_modifier(modifier: str) -> List[ModifierClause]:
    """
    Split a relative modifier into clauses.

    Grammar (whitespace separated, applied left to right):
      - [+-]N unit: microsecond(s)/micro/usec, sec/second(s), min/minute(s),
        hour(s), day(s), week(s), fortnight(s), month(s), year(s)
      - keywords: now, today, midnight, noon, tomorrow, yesterday
      - next|last|previous <weekday>
      - next|last|previous|this <unit> (one unit step)
      - first|last day of [this|next|last|previous] month|year

    Args:
        modifier: Modifier text, case-insensitive

    Returns:
        List of ModifierClause

    Raises:
        FormatError: If a clause is not recognized

    Examples:
        >>> parse_modifier("-1 week")
        [ModifierClause(kind='delta', unit='weeks', amount=-1, direction=None)]

        >>> parse_modifier("last day of next month")
        [ModifierClause(kind='boundary', unit='month', amount=1, direction='last')]
    """
    text = normalize_instant_text(modifier).lower()
    if not text:
        raise FormatError("Empty modifier")

    clauses = []
    position = 0

    while position < len(text):
        if text[position] == " ":
            position += 1
            continue

        match = _BOUNDARY_RE.match(text, position)
        if match:
            offset = {"next": 1, "last": -1, "previous": -1}.get(match.group("offset"), 0)
            clauses.append(ModifierClause("boundary", match.group("period"), offset, match.group("edge")))
            position = match.end()
            continue

        match = _WEEKDAY_RE.match(text, position)
        if match:
            direction = "next" if match.group("direction") == "next" else "last"
            clauses.append(ModifierClause("weekday", "weekday", WEEKDAYS[match.group("weekday")], direction))
            position = match.end()
            continue

        match = _STEP_RE.match(text, position)
        if match:
            amount = {"next": 1, "this": 0}.get(match.group("direction"), -1)
            clauses.append(ModifierClause("delta", UNIT_ALIASES[match.group("unit")], amount))
            position = match.end()
            continue

        match = _DELTA_RE.match(text, position)
        if match:
            amount = int(match.group("amount"))
            if match.group("sign") == "-":
                amount = -amount
            clauses.append(ModifierClause("delta", UNIT_ALIASES[match.group("unit")], amount))
            position = match.end()
            continue

        match = _KEYWORD_RE.match(text, position)
        if match:
            clauses.append(ModifierClause("keyword", match.group("keyword")))
            position = match.end()
            continue

        raise FormatError(f"Cannot interpret modifier '{modifier}' at: '{text[position:]}'")

    return clauses


def is_relative_text(text: str) -> bool:
    """
    Check whether text is a relative modifier rather than a calendar string.

    Examples:
        >>> is_relative_text("tomorrow")
        True

        >>> is_relative_text("2024-01-10")
        False
    """
    try:
        parse_modifier(text)
    except FormatError:
        return False
    return True


__all__ = [
    "MICROS_PER_SECOND",
    "CANONICAL_RE",
    "WEEKDAYS",
    "UNIT_ALIASES",
    "KEYWORDS",
    "ModifierClause",
    "normalize_instant_text",
    "is_sentinel",
    "parse_fraction",
    "format_fraction",
    "resolve_timezone",
    "parse_modifier",
    "is_relative_text",
]

"""Range API.

Compact rendering of two instants as a range:

    >>> render_range("2024-01-02", "2024-01-05", DATE_RANGE_FORMAT, now="2024-03-01")
    'со 2 по 5 января'

Pieces shared by both endpoints are written once, on the end side.
"""

import re
from typing import Dict, Optional

from timephrase.config import Settings, resolve_settings
from timephrase.instant.instantapi import compare_instants, now_instant, parse_instant
from timephrase.instant.instantidentity import InstantValue
from timephrase.interval.intervalunits import (
    DATE_RANGE_FORMAT,
    DATETIME_RANGE_FORMAT,
    TimeUnit,
    as_mask,
)
from timephrase.locales.localeapi import NBSP, LocaleTable, resolve_locale

PIECE_ORDER = ("hour", "minute", "second", "day", "month", "year", "century", "millennium")

_STRIP_CHARS = " \t\n" + NBSP
_BEFORE_TWO_RE = re.compile(r"^2(?:\s|$)")


def _resolve_endpoint(value, settings: Settings) -> InstantValue:
    instant = parse_instant(value, settings=settings)
    if instant is None:
        raise TypeError("Range endpoints must be instants, got an empty value")
    return instant


def _pieces(instant: InstantValue, mask: TimeUnit, table: LocaleTable, glue: str) -> Dict[str, str]:
    """Text fragments of one endpoint, '' where the mask hides them."""
    pieces = {
        "hour": str(instant.hour),
        "minute": f":{instant.minute:02d}",
        "second": f":{instant.second:02d}",
        "day": f" {instant.day}",
        "month": "",
        "year": " " + table.phrase("range_year", year=instant.year),
        "century": " " + table.phrase("range_century", century=instant.year // 100),
        "millennium": " " + table.phrase("range_millennium", millennium=instant.year // 1000),
    }

    if not mask & TimeUnit.SECONDS:
        pieces["second"] = ""
    if not mask & TimeUnit.MINUTES:
        pieces["minute"] = ":00"
    if not mask & TimeUnit.HOURS:
        pieces["hour"] = pieces["minute"] = ""
    if not mask & TimeUnit.DAYS:
        pieces["day"] = ""

    if mask & TimeUnit.MONTHS:
        genitive = bool(pieces["day"]) or not glue
        pieces["month"] = NBSP + table.month_name(instant.month, genitive=genitive)
        if glue and not pieces["day"]:
            pieces["month"] = pieces["month"].strip(_STRIP_CHARS)

    return pieces


def render_range(
    start,
    end,
    unit_mask=None,
    *,
    suppress_current_year: bool = True,
    glue: str = "",
    now=None,
    locale=None,
    settings: Optional[Settings] = None,
) -> str:
    """
    Render two instants as a compact range.

    Rules:
      1. Endpoints are swapped when start is later than end
      2. Only units in the mask are shown (see TimeUnit)
      3. Pieces equal on both sides are dropped from the start, from the
         millennium down to the day, while the coarser ones match
      4. The end's year disappears when it is the current one
         (suppress_current_year)
      5. Without glue the result reads "с {start} по {end}"
         ("со" before a leading 2)
      6. Hours use the 24-hour clock without a leading zero ("9:00",
         "18:30"), never a zero-padded 12-hour clock ("09:00" for 21:00)

    Args:
        start: Range start (anything parse_instant accepts)
        end: Range end
        unit_mask: TimeUnit mask (default: DATE_RANGE_FORMAT for date-only
            starts, DATETIME_RANGE_FORMAT otherwise)
        suppress_current_year: Hide the end's year when it is now's year
        glue: Separator put between start and end instead of "с … по …"
        now: Wall clock used for the current year (default: real clock)
        locale: Locale code or LocaleTable (default: settings.locale)
        settings: Explicit Settings (default: TIMEPHRASE_* environment)

    Returns:
        Range text; '' when every piece cancels out

    Examples:
        >>> render_range("2023-12-30", "2024-01-05", DATE_RANGE_FORMAT)
        'с 30 декабря 2023 года по 5 января 2024 года'

        >>> render_range("2024-01-10 9:00:00", "2024-01-10 18:30:00",
        ...              TimeUnit.HOURS | TimeUnit.MINUTES | TimeUnit.DAYS | TimeUnit.MONTHS)
        'с 9:00 по 18:30 10 января'

        >>> render_range("2024-01-01", "2024-01-01", TimeUnit.YEARS)
        ''
    """
    settings = resolve_settings(settings)
    table = resolve_locale(locale, settings)

    first = _resolve_endpoint(start, settings)
    second = _resolve_endpoint(end, settings)
    if compare_instants(first, second, settings=settings) > 0:
        first, second = second, first

    if not unit_mask:
        mask = DATE_RANGE_FORMAT if first.date_only else DATETIME_RANGE_FORMAT
    else:
        mask = as_mask(unit_mask)

    if now is not None:
        clock = parse_instant(now, first.tzinfo, settings=settings)
    else:
        clock = now_instant(first.tzinfo, settings=settings)

    one = _pieces(first, mask, table, glue)
    two = _pieces(second, mask, table, glue)

    if not mask & TimeUnit.DAYS and one["month"].strip(_STRIP_CHARS) == two["month"].strip(_STRIP_CHARS) \
            and one["year"] == two["year"]:
        one["month"] = ""

    if not mask & TimeUnit.YEARS:
        one["year"] = two["year"] = ""
    if not mask & TimeUnit.CENTURIES:
        one["century"] = two["century"] = ""
    if not mask & TimeUnit.MILLENNIA:
        one["millennium"] = two["millennium"] = ""

    if mask == TimeUnit.YEARS and one["year"] == two["year"]:
        one["year"] = two["year"] = ""

    # Cascade: each level is compared only when all coarser levels matched
    current_year = table.phrase("range_year", year=clock.year)
    for level in ("millennium", "century", "year", "month", "day"):
        if one[level] != two[level]:
            break
        one[level] = ""
        if level == "year" and suppress_current_year and two["year"].strip(_STRIP_CHARS) == current_year:
            two["year"] = ""
    else:
        if (one["second"], one["minute"], one["hour"]) == (two["second"], two["minute"], two["hour"]):
            one["second"] = one["minute"] = one["hour"] = ""

    start_text = "".join(one[piece] for piece in PIECE_ORDER).strip(_STRIP_CHARS)
    end_text = "".join(two[piece] for piece in PIECE_ORDER).strip(_STRIP_CHARS)

    if not start_text:
        text = end_text
    elif glue:
        text = start_text + glue + end_text
    else:
        preposition = table.phrase("range_from_before_two" if _BEFORE_TWO_RE.match(start_text) else "range_from")
        text = table.phrase("range", preposition=preposition, start=start_text, end=end_text)

    lone_year = re.fullmatch(r"(\d{4})" + re.escape(NBSP) + r"\S+", text)
    if lone_year and text == table.phrase("range_year", year=lone_year.group(1)):
        text = table.phrase("range_single_year", year=lone_year.group(1))

    return text


__all__ = [
    "PIECE_ORDER",
    "render_range",
]

"""Relative Phrase Resolution
--------------------------

Magnitude-bucket decision tree turning a CalendarInterval into a phrase.

Buckets are tested top-down, first match wins:

  seconds    total_minutes == 0
  minutes    total_hours == 0
  hours      total_days == 0
  days       total_months == 0
  months     total_years == 0
  years      total_years < 100
  centuries  total_years <= 1500
  millennia  otherwise

When the chosen bucket's own field is 0 (a DST night makes elapsed time and
the wall clock disagree), the coarsest non-zero wall-clock field picks the
bucket instead.

Each bucket yields the plain text ("2 часа", "день и 5 часов") and, where a
colloquial idiom fits, a smart override ("вчера", "полчаса назад"). Idioms
that mention the direction already carry it; the plain text is wrapped in
the direction after the punctuality units are appended.

Key Design Principles:
  1. All wording comes from the LocaleTable, thresholds live here
  2. The midnight test uses the reference's own wall clock (H, M, S) in
     the subject's timezone
  3. Only "только что" skips the appended units and the direction
"""

import re
from typing import Dict, NamedTuple, Tuple

from timephrase.interval.intervalidentity import CalendarInterval
from timephrase.interval.intervalunits import APPEND_ORDER, as_mask, unit_name
from timephrase.locales.localeapi import NBSP, LocaleTable
from timephrase.plural.pluralapi import select_form

QUARTER = "¼"
HALF = "½"
THREE_QUARTERS = "¾"

_LEADING_NUMBER_RE = re.compile(r"^(\d+)")


class PhraseParts(NamedTuple):
    """Result of the decision tree.

    Attributes:
        bucket: Name of the magnitude bucket ('hours', ...)
        text: Plain phrase, direction-wrapped unless 'just now'
        smart: Idiom override ('' when none applies)
        dated: False when no absolute date may follow ('just now')
    """

    bucket: str
    text: str
    smart: str
    dated: bool


# ---- Unit strings ----

def unit_phrases(interval: CalendarInterval, table: LocaleTable) -> Dict[str, str]:
    """
    Pluralized per-unit parts, '' for zero units.

    Examples:
        >>> unit_phrases(CalendarInterval(hours=2, minutes=5), ru)["hours"]
        '2 часа'
    """
    phrases = {}
    for name, value in interval.unit_values().items():
        phrases[name] = select_form(value, table.paradigm(name), with_number=True) if value else ""
    return phrases


def total_phrases(interval: CalendarInterval, table: LocaleTable, to_now: bool) -> Dict[str, str]:
    """Pluralized totals, direction-wrapped when describing against now."""
    phrases = {}
    for name, value in interval.total_values().items():
        phrase = select_form(value, table.paradigm(name), with_number=True)
        phrases[name] = table.wrap(phrase, interval.was_past) if to_now else phrase
    return phrases


def with_glyph(text: str, glyph: str) -> str:
    """
    Put a fraction glyph right after the leading number.

    Examples:
        >>> with_glyph("3 часа", "½")
        '3½ часа'
    """
    return _LEADING_NUMBER_RE.sub(lambda match: match.group(1) + glyph, text, count=1)


def hour_glyph(minutes: int) -> str:
    """¾ from 45 minutes, ½ from 30, ¼ from 15, '' below."""
    if minutes >= 45:
        return THREE_QUARTERS
    if minutes >= 30:
        return HALF
    if minutes >= 15:
        return QUARTER
    return ""


# ---- Midnight test ----

def crosses_midnight(interval: CalendarInterval, reference_clock: Tuple[int, int, int]) -> bool:
    """
    Check whether the subject lies on the other side of a midnight.

    Past: H - h <= 0 and (H - h < 0 or M - m < 0 or (M - m <= 0 and S - s < 0))
    Future: H + h >= 23 and (H + h >= 24 or M + m >= 60 or (M + m >= 59 and S + s >= 60))

    where H, M, S is the reference's wall clock and h, m, s the interval's
    hours, minutes and seconds.

    Examples:
        >>> crosses_midnight(CalendarInterval(hours=3, was_past=True), (2, 0, 0))
        True

        >>> crosses_midnight(CalendarInterval(hours=3, was_past=True), (12, 0, 0))
        False
    """
    hour, minute, second = reference_clock
    h, m, s = interval.hours, interval.minutes, interval.seconds

    if interval.was_past:
        return hour - h <= 0 and (
            hour - h < 0
            or minute - m < 0
            or (minute - m <= 0 and second - s < 0)
        )

    return hour + h >= 23 and (
        hour + h >= 24
        or minute + m >= 60
        or (minute + m >= 59 and second + s >= 60)
    )


# ---- Buckets ----

def _seconds_bucket(interval, units, table):
    if interval.total_seconds <= 3:
        return table.phrase("just_now"), "", False
    return units["seconds"], "", True


def _minutes_bucket(interval, units, table):
    was_past = interval.was_past
    minutes, seconds = interval.minutes, interval.seconds

    text = units["minutes"]
    if seconds >= 10 and minutes < 10:
        text = table.join_and(text, units["seconds"])

    smart = ""
    if 25 < minutes < 35:
        smart = table.directional("half_hour", was_past)
    elif minutes >= 45:
        smart = table.directional("less_than_hour", was_past)

    return text, smart, True


def _hours_bucket(interval, units, table, reference_clock):
    was_past = interval.was_past
    hours, minutes = interval.hours, interval.minutes

    smart = table.phrase("today")
    text = units["hours"]

    if hours == 1:
        smart = units["hours"]
        if 29 <= minutes <= 31:
            smart = table.phrase("hour_and_half")
        elif minutes > 4:
            smart = table.join_and(smart, units["minutes"])
        smart = table.wrap(smart, was_past)

        if minutes >= 32:
            smart = table.directional("less_than_two_hours", was_past)
    else:
        glyph = hour_glyph(minutes)
        if glyph:
            text = with_glyph(text, glyph)

        if hours >= 20:
            smart = table.directional("less_than_day", was_past)

    if crosses_midnight(interval, reference_clock):
        smart = table.phrase("yesterday" if was_past else "tomorrow")

    return text, smart, True


def _days_bucket(interval, units, table, reference_clock):
    was_past = interval.was_past
    days, hours = interval.days, interval.hours
    crossed = crosses_midnight(interval, reference_clock)

    text = table.phrase("a_day")
    smart = ""

    if days == 1:
        if hours > 2:
            text = table.join_and(text, units["hours"])
        if 11 <= hours <= 13:
            text = table.phrase("day_and_half")

        if hours > 14:
            smart = table.directional("less_than_two_days", was_past)
        else:
            smart = table.phrase("yesterday" if was_past else "tomorrow")

        if crossed:
            smart = table.phrase("day_before_yesterday" if was_past else "day_after_tomorrow")
    else:
        text = units["days"]
        if 11 <= hours <= 13:
            text = with_glyph(text, HALF)

        if days == 2 and not crossed:
            smart = table.phrase("day_before_yesterday" if was_past else "day_after_tomorrow")

    if days in (7, 14):
        smart = table.wrap(table.phrase("week" if days == 7 else "two_weeks"), was_past)

    return text, smart, True


def _months_bucket(interval, units, table):
    was_past = interval.was_past
    months, days = interval.months, interval.days
    smart = ""

    if months == 1:
        text = table.phrase("a_month")

        if days > 2:
            text = table.join_and(table.phrase("one_month"), units["days"])

            if 14 <= days <= 17:
                text = table.phrase("month_and_half")
            elif days <= 17:
                smart = table.wrap(text, was_past)
            else:
                smart = table.directional("less_than_two_months", was_past)

    elif months == 0:
        # 30+ days inside one calendar month
        text = units["days"]

    else:
        text = units["months"]
        if 13 < days < 18:
            text = with_glyph(text, HALF)

    return text, smart, True


def _years_bucket(interval, units, table):
    was_past = interval.was_past
    years, months = interval.years, interval.months
    smart = ""

    if years == 1:
        text = table.phrase("a_year")

        if months > 2:
            text = table.join_and(text, units["months"])

        if months < 5:
            smart = table.directional("more_than_year", was_past)
        elif months <= 7:
            text = table.phrase("year_and_half")
        else:
            smart = table.directional("less_than_two_years", was_past)
    else:
        text = units["years"]
        if 13 < months < 18:
            text = with_glyph(text, HALF)

    return text, smart, True


# ---- Punctuality ----

_GLYPHS_RE = re.compile(f"[{QUARTER}{HALF}{THREE_QUARTERS}]")


def _mentions(text: str, part: str) -> bool:
    """
    Whole-phrase containment, fraction glyphs ignored.

    '1 час' is not inside '11 часов'; '2 часа' is inside '2½ часа'.
    """
    bare = _GLYPHS_RE.sub("", text)
    return re.search(rf"(?<!\w){re.escape(part)}(?!\w)", bare) is not None


def append_units(text: str, units: Dict[str, str], punctuality, table: LocaleTable) -> str:
    """
    Append the requested non-zero units: 'text~a~b~и~c'.

    Units already mentioned in the text are skipped.

    Examples:
        >>> append_units("2 дня", {"days": "2 дня", "hours": "3 часа", ...},
        ...              TimeUnit.DAYS | TimeUnit.HOURS, ru)
        '2 дня и 3 часа'
    """
    mask = as_mask(punctuality)

    extras = []
    for unit in APPEND_ORDER:
        part = units.get(unit_name(unit), "")
        if mask & unit and part and not _mentions(text, part):
            extras.append(part)

    if not extras:
        return text

    last = extras.pop()
    return table.join_and(NBSP.join([text] + extras), last)


# ---- Decision tree ----

def _bucket_by_totals(interval: CalendarInterval) -> str:
    if interval.total_minutes == 0:
        return "seconds"
    if interval.total_hours == 0:
        return "minutes"
    if interval.total_days == 0:
        return "hours"
    if interval.total_months == 0:
        return "days"
    if interval.total_years == 0:
        return "months"
    if interval.total_years < 100:
        return "years"
    if interval.total_years <= 1500:
        return "centuries"
    return "millennia"


def _bucket_by_fields(interval: CalendarInterval) -> str:
    """Coarsest non-zero wall-clock field."""
    for name in ("months", "days", "hours", "minutes"):
        if getattr(interval, name):
            return name
    return "seconds"


def _fields_cover(bucket: str, interval: CalendarInterval) -> bool:
    """False when the bucket's own field is 0 (elapsed time and wall clock disagree across DST)."""
    if bucket == "months":
        return bool(interval.months or interval.days)
    if bucket in ("minutes", "hours", "days"):
        return bool(getattr(interval, bucket))
    return True


def choose_bucket(interval: CalendarInterval) -> str:
    """
    Pick the magnitude bucket.

    Elapsed totals decide, unless the chosen bucket's own field is 0: then
    the coarsest non-zero wall-clock field decides.

    Examples:
        >>> choose_bucket(CalendarInterval(hours=1, minutes=30, total_seconds=5400))
        'hours'

        >>> # 23 elapsed hours between two noons across a spring-forward night
        >>> choose_bucket(CalendarInterval(days=1, total_seconds=23 * 3600))
        'days'
    """
    bucket = _bucket_by_totals(interval)
    if not _fields_cover(bucket, interval):
        bucket = _bucket_by_fields(interval)
    return bucket


def build_phrase(
    interval: CalendarInterval,
    reference_clock: Tuple[int, int, int],
    table: LocaleTable,
    punctuality=0,
) -> PhraseParts:
    """
    Run the decision tree.

    Args:
        interval: Calendar interval (subject vs reference)
        reference_clock: Reference (hour, minute, second) in the subject's zone
        table: Locale wording
        punctuality: TimeUnit mask of units to append

    Returns:
        PhraseParts(bucket, text, smart, dated)

    Examples:
        >>> build_phrase(CalendarInterval(hours=1, minutes=30, was_past=True,
        ...                               total_seconds=5400), (12, 0, 0), ru).smart
        'полтора часа назад'
    """
    units = unit_phrases(interval, table)
    bucket = choose_bucket(interval)

    if bucket == "seconds":
        text, smart, dated = _seconds_bucket(interval, units, table)
    elif bucket == "minutes":
        text, smart, dated = _minutes_bucket(interval, units, table)
    elif bucket == "hours":
        text, smart, dated = _hours_bucket(interval, units, table, reference_clock)
    elif bucket == "days":
        text, smart, dated = _days_bucket(interval, units, table, reference_clock)
    elif bucket == "months":
        text, smart, dated = _months_bucket(interval, units, table)
    elif bucket == "years":
        text, smart, dated = _years_bucket(interval, units, table)
    elif bucket == "centuries":
        text = select_form(interval.total_centuries, table.paradigm("centuries"), with_number=True)
        smart, dated = "", True
    else:
        text = select_form(interval.total_millennia, table.paradigm("millennia"), with_number=True)
        smart, dated = "", True

    if dated:
        text = append_units(text, units, punctuality, table)
        text = table.wrap(text, interval.was_past)

    return PhraseParts(bucket, text, smart, dated)


__all__ = [
    "QUARTER",
    "HALF",
    "THREE_QUARTERS",
    "PhraseParts",
    "unit_phrases",
    "total_phrases",
    "with_glyph",
    "hour_glyph",
    "crosses_midnight",
    "append_units",
    "choose_bucket",
    "build_phrase",
]

"""Absolute date companion for relative phrases.

Builds the "27 декабря в 12:00 (среда)" part that follows a smart phrase,
and the midnight wording for instants in the first minutes of a day.
"""

import re

from timephrase.instant.instantidentity import InstantValue
from timephrase.interval.intervalidentity import CalendarInterval
from timephrase.locales.localeapi import LocaleTable

MIDNIGHT_MINUTES = 5


def absolute_date(
    subject: InstantValue,
    interval: CalendarInterval,
    now: InstantValue,
    table: LocaleTable,
    hide_current_year: bool = True,
) -> str:
    """
    Absolute date of the subject, sized to the distance.

    Same calendar distance below one day: "в 9:05:00", plus the weekday
    when it differs from today's. Further away: day, genitive month, year
    (hidden for the current year when hide_current_year), short time and
    weekday.

    Args:
        subject: Described instant
        interval: Interval between subject and reference
        now: Wall clock, already in the subject's timezone
        table: Locale wording
        hide_current_year: Drop the year when it equals now's year

    Examples:
        >>> absolute_date(parse_instant("2023-12-27 12:00:00"), interval, now, ru)
        '27 декабря 2023 года в 12:00 (среда)'
    """
    weekday = table.weekday_name(subject.iso_weekday)

    if interval.total_days == 0 and not interval.days:
        text = table.phrase("time_at", time=f"{subject.hour}:{subject.minute:02d}:{subject.second:02d}")
        if subject.iso_weekday != now.iso_weekday:
            text += table.phrase("weekday_suffix", weekday=weekday)
        return text

    values = dict(
        day=subject.day,
        month=table.month_name(subject.month, genitive=True),
        year=subject.year,
        time=f"{subject.hour}:{subject.minute:02d}",
        weekday=weekday,
    )

    if hide_current_year and subject.year == now.year:
        return table.phrase("date_without_year", **values)
    return table.phrase("date_with_year", **values)


def is_about_midnight(subject: InstantValue) -> bool:
    """True for 0:00 through 0:05."""
    return subject.hour == 0 and subject.minute <= MIDNIGHT_MINUTES


def attach_date(smart: str, date_text: str, subject: InstantValue, table: LocaleTable) -> str:
    """
    Join a smart phrase and its absolute date.

    Near midnight the "at" preposition is dropped from the date and the
    midnight wording takes its place.

    Examples:
        >>> attach_date("вчера", "в 0:03:00 (вторник)", subject, ru)
        'вчера в полночь, 0:03:00 (вторник)'
    """
    if is_about_midnight(subject):
        preposition = re.escape(table.phrase("at_preposition"))
        date_text = re.sub(rf"(?<!\w){preposition}\s", "", date_text)
        return smart + table.phrase("midnight") + date_text

    return smart + table.phrase("date_joiner") + date_text


__all__ = [
    "MIDNIGHT_MINUTES",
    "absolute_date",
    "is_about_midnight",
    "attach_date",
]

"""Relative API.

Public API for describing an instant relative to now (or to another
instant) in natural Russian:

    >>> diff = relative_time_diff("2024-01-10 10:30:00", now="2024-01-10 12:00:00")
    >>> diff.smart_phrase
    'полтора часа назад, в 10:30:00'
    >>> diff.bucket_phrase
    '1 час назад'
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from timephrase.config import Settings, resolve_settings
from timephrase.instant.instantapi import now_instant, parse_instant
from timephrase.instant.instantidentity import InstantValue
from timephrase.instant.instantnormalize import normalize_instant_text
from timephrase.interval.intervalidentity import CalendarInterval, diff_calendar
from timephrase.interval.intervalunits import UNITS_DESCENDING, TimeUnit, as_mask, unit_name, units_in
from timephrase.locales.localeapi import NBSP, LocaleTable, resolve_locale
from timephrase.ranges.rangeapi import render_range
from timephrase.relative.relativedate import absolute_date, attach_date
from timephrase.relative.relativeidentity import build_phrase, total_phrases, unit_phrases

logger = logging.getLogger(__name__)


def _join_counters(units: Dict[str, str], mask) -> str:
    parts = [units.get(unit_name(unit), "") for unit in units_in(mask)]
    return " ".join(part for part in parts if part)


@dataclass(frozen=True)
class RelativeTimeDiff:
    """Phrases describing one instant relative to another.

    Attributes:
        subject: Described instant
        reference: Instant it is compared with (now when to_now)
        interval: Calendar interval between the two
        to_now: True when the reference is the wall clock
        punctuality: TimeUnit mask of appended units
        bucket: Magnitude bucket ('seconds' ... 'millennia')
        bucket_phrase: Plain phrase ('2 часа назад')
        absolute_date: Date companion ('27 декабря в 12:00 (среда)')
        smart_phrase: Idiom plus date ('вчера, 9 января в 12:00 (вторник)')
        unit_phrases: Pluralized per-unit parts ('' for zero units)
        total_phrases: Pluralized totals, direction-wrapped when to_now
    """

    subject: InstantValue
    reference: InstantValue
    interval: CalendarInterval
    to_now: bool
    punctuality: TimeUnit
    bucket: str
    bucket_phrase: str
    absolute_date: str
    smart_phrase: str
    unit_phrases: Dict[str, str] = field(default_factory=dict)
    total_phrases: Dict[str, str] = field(default_factory=dict)

    @property
    def was_past(self) -> bool:
        return self.interval.was_past

    @property
    def phrase_with_absolute_date(self) -> str:
        """
        Plain phrase followed by the absolute date.

        Examples:
            >>> relative_time_diff("2024-01-10 10:00:00", now="2024-01-10 12:00:00").phrase_with_absolute_date
            '2 часа назад, в 10:00:00'
        """
        return f"{self.bucket_phrase}, {self.absolute_date}"

    def all_counters(self, min_unit=None) -> Optional[str]:
        """
        Non-zero units from millennia down to ``min_unit`` (inclusive).

        Args:
            min_unit: Finest TimeUnit to include (default: seconds)

        Returns:
            Space-joined parts, or None when every unit is zero

        Examples:
            >>> diff.all_counters(TimeUnit.HOURS)
            '1 день 2 часа'
        """
        parts = []
        for unit in UNITS_DESCENDING:
            part = self.unit_phrases.get(unit_name(unit), "")
            if part:
                parts.append(part)
            if min_unit is not None and unit == min_unit:
                break

        return " ".join(parts) or None

    def counters_by_bit(self, mask) -> str:
        """
        Non-zero units whose bit is set in ``mask``, coarsest first.

        Examples:
            >>> diff.counters_by_bit(TimeUnit.DAYS | TimeUnit.MINUTES)
            '1 день 5 минут'
        """
        return _join_counters(self.unit_phrases, mask)

    def __str__(self):
        return self.smart_phrase


def _is_wall_clock(reference) -> bool:
    if reference is None:
        return True
    return isinstance(reference, str) and normalize_instant_text(reference).lower() in ("", "now")


def relative_time_diff(
    subject,
    reference=None,
    *,
    punctuality=0,
    now=None,
    hide_current_year: bool = True,
    locale=None,
    settings: Optional[Settings] = None,
) -> RelativeTimeDiff:
    """
    Describe an instant relative to now or to another instant.

    Against now the result carries the colloquial phrase ("вчера",
    "полчаса назад", "через 2 дня") and the absolute date. Against a fixed
    reference both phrases become the requested counters followed by the
    range between the two instants.

    Args:
        subject: Instant to describe (anything parse_instant accepts)
        reference: Instant to compare with; None or "now" means the wall clock
        punctuality: TimeUnit mask of units appended to the plain phrase
        now: Wall clock override (default: the real clock in the subject's zone)
        hide_current_year: Omit the year of dates in now's year
        locale: Locale code or LocaleTable (default: settings.locale)
        settings: Explicit Settings (default: TIMEPHRASE_* environment)

    Returns:
        RelativeTimeDiff

    Raises:
        TypeError: If subject or reference is empty or not temporal
        FormatError: If a string cannot be interpreted

    Examples:
        >>> relative_time_diff("2024-01-10 12:00:00", now="2024-01-10 12:00:02").smart_phrase
        'только что'

        >>> relative_time_diff("2023-12-27 12:00:00", now="2024-01-10 12:00:00").smart_phrase
        '2 недели назад, 27 декабря 2023 года в 12:00 (среда)'

        >>> relative_time_diff("2024-01-11 15:00:00", now="2024-01-10 12:00:00",
        ...                    punctuality=TimeUnit.HOURS).bucket_phrase
        'через день и 3 часа'
    """
    settings = resolve_settings(settings)
    table: LocaleTable = resolve_locale(locale, settings)
    mask = as_mask(punctuality)

    instant = parse_instant(subject, settings=settings)
    if instant is None:
        raise TypeError("Cannot describe an empty (all-zero) instant")
    zone = instant.tzinfo

    if now is not None:
        clock = parse_instant(now, zone, settings=settings)
    else:
        clock = now_instant(zone, settings=settings)

    to_now = _is_wall_clock(reference)
    if to_now:
        other = clock
    else:
        other = parse_instant(reference, settings=settings)
        if other is None:
            raise TypeError("Cannot compare with an empty (all-zero) instant")

    interval = diff_calendar(instant, other)

    reference_local = parse_instant(other, zone, settings=settings)
    reference_clock = (reference_local.hour, reference_local.minute, reference_local.second)

    parts = build_phrase(interval, reference_clock, table, mask)
    logger.debug(f"Relative phrase for {instant!r}: bucket={parts.bucket}")

    date_text = absolute_date(instant, interval, clock, table, hide_current_year)

    text = parts.text
    smart = parts.smart or parts.text
    if parts.dated:
        smart = attach_date(smart, date_text, instant, table)

    units = unit_phrases(interval, table)

    if not to_now:
        pieces = [
            _join_counters(units, mask),
            render_range(instant, other, mask or None, now=clock, locale=table, settings=settings),
        ]
        text = smart = NBSP.join(piece for piece in pieces if piece)

    return RelativeTimeDiff(
        subject=instant,
        reference=other,
        interval=interval,
        to_now=to_now,
        punctuality=mask,
        bucket=parts.bucket,
        bucket_phrase=text,
        absolute_date=date_text,
        smart_phrase=smart,
        unit_phrases=units,
        total_phrases=total_phrases(interval, table, to_now),
    )


def smart(subject, reference=None, **kwargs) -> str:
    """
    Shortcut for ``relative_time_diff(...).smart_phrase``.

    Examples:
        >>> smart("2024-01-09 12:00:00", now="2024-01-10 12:00:00")
        'вчера, 9 января в 12:00 (вторник)'
    """
    return relative_time_diff(subject, reference, **kwargs).smart_phrase


__all__ = [
    "RelativeTimeDiff",
    "relative_time_diff",
    "smart",
]

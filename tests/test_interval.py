"""Tests for calendar intervals and unit flags.

Run with: pytest tests/test_interval.py -v
"""

import pytest
from datetime import datetime, timezone

from timephrase.errors import InvalidArgumentError
from timephrase.instant.instantapi import compare_instants, parse_instant
from timephrase.interval.intervalidentity import (
    CalendarInterval,
    days_in_month,
    diff_calendar,
    epoch_seconds,
)
from timephrase.interval.intervalunits import (
    APPEND_ORDER,
    DATE_RANGE_FORMAT,
    DATETIME_RANGE_FORMAT,
    UNITS_DESCENDING,
    TimeUnit,
    as_mask,
    unit_name,
    units_in,
)


UTC = timezone.utc


# ============================================================================
# Calendar Diff Tests
# ============================================================================

class TestDiffCalendar:
    """Test the borrowing calendar diff"""

    def test_seconds_in_past(self):
        interval = diff_calendar(parse_instant("2024-01-10 12:00:00"), parse_instant("2024-01-10 12:00:02"))
        assert interval.was_past is True
        assert interval.seconds == 2
        assert interval.total_seconds == 2
        assert interval.total_minutes == 0

    def test_hours_and_minutes(self):
        interval = diff_calendar(parse_instant("2024-01-10 10:30:00"), parse_instant("2024-01-10 12:00:00"))
        assert (interval.hours, interval.minutes, interval.was_past) == (1, 30, True)
        assert interval.total_minutes == 90

    def test_future(self):
        interval = diff_calendar(parse_instant("2024-01-11 15:00:00"), parse_instant("2024-01-10 12:00:00"))
        assert interval.was_past is False
        assert (interval.days, interval.hours) == (1, 3)

    def test_day_borrow_uses_preceding_months(self):
        interval = diff_calendar(
            datetime(2024, 3, 1, 10, 0, tzinfo=UTC),
            datetime(2024, 1, 31, 12, 0, tzinfo=UTC),
        )
        assert interval == CalendarInterval(
            years=0, months=0, days=29, hours=22, minutes=0, seconds=0,
            microseconds=0, was_past=False, total_seconds=2584800,
        )

    def test_month_borrow_from_year(self):
        interval = diff_calendar(parse_instant("2023-11-15"), parse_instant("2024-02-10"))
        assert (interval.years, interval.months, interval.days) == (0, 2, 26)
        assert interval.was_past is True

    def test_years(self):
        interval = diff_calendar(parse_instant("2020-06-01 08:00:00"), parse_instant("2024-01-10 12:00:00"))
        assert (interval.years, interval.months, interval.days, interval.hours) == (3, 7, 9, 4)

    def test_equal(self):
        interval = diff_calendar(parse_instant("2024-01-10 12:00:00"), parse_instant("2024-01-10 12:00:00"))
        assert interval.total_seconds == 0
        assert interval.was_past is False

    def test_across_zones(self):
        interval = diff_calendar(
            parse_instant("2024-01-10 12:00:00"),
            parse_instant("2024-01-10 09:00:00", "UTC"),
        )
        assert interval.total_seconds == 0
        assert interval.hours == 0

    def test_microseconds(self):
        interval = diff_calendar(
            parse_instant("2024-01-10 12:00:00.250000"),
            parse_instant("2024-01-10 12:00:01.750000"),
        )
        assert interval.microseconds == 500000
        assert interval.was_past is True

    @pytest.mark.parametrize("a,b", [
        ("2024-01-10 12:00:00", "2024-01-10 12:00:01"),
        ("2024-01-10 12:00:01", "2024-01-10 12:00:00"),
        ("2023-02-28 23:00:00", "2024-02-29 01:00:00"),
        ("2024-05-05", "2024-05-05"),
    ])
    def test_direction_matches_comparison(self, a, b):
        interval = diff_calendar(parse_instant(a), parse_instant(b))
        assert interval.was_past == (compare_instants(b, a) > 0)

    def test_instant_diff_method(self):
        interval = parse_instant("2024-01-10 13:30:00").diff("2024-01-10 12:00:00")
        assert (interval.hours, interval.minutes, interval.was_past) == (1, 30, False)

    def test_diff_against_sentinel(self):
        with pytest.raises(TypeError):
            parse_instant("2024-01-10").diff("0000-00-00")

    def test_naive_datetime(self):
        with pytest.raises(InvalidArgumentError):
            diff_calendar(datetime(2024, 1, 10), datetime(2024, 1, 11, tzinfo=UTC))

    def test_non_temporal(self):
        with pytest.raises(TypeError):
            diff_calendar("2024-01-10", parse_instant("2024-01-10"))


class TestTotals:
    """Test derived totals"""

    def test_total_chain(self):
        interval = CalendarInterval(days=40, total_seconds=40 * 86400 + 3600)
        assert interval.total_hours == 961
        assert interval.total_days == 40
        assert interval.total_months == 1

    def test_february_month(self):
        """Test a full February counts as one month"""
        interval = diff_calendar(parse_instant("2024-02-01"), parse_instant("2024-03-01"))
        assert interval.total_days == 29
        assert interval.months == 1
        assert interval.total_months == 1

    def test_centuries_and_millennia(self):
        interval = CalendarInterval(years=1250)
        assert interval.centuries == 2
        assert interval.millennia == 1
        assert interval.total_centuries == 12
        assert interval.total_millennia == 1
        assert interval.total_years == 1250

    def test_invert(self):
        assert CalendarInterval(was_past=True).invert == 1
        assert CalendarInterval().invert == 0

    def test_unit_values_order(self):
        assert list(CalendarInterval().unit_values()) == [
            "millennia", "centuries", "years", "months", "days",
            "hours", "minutes", "seconds", "microseconds",
        ]

    def test_total_values(self):
        totals = CalendarInterval(years=2, total_seconds=3 * 86400).total_values()
        assert totals["days"] == 3
        assert totals["years"] == 2
        assert totals["seconds"] == 3 * 86400


class TestHelpers:
    def test_epoch_seconds(self):
        assert epoch_seconds(datetime(1970, 1, 1, 0, 0, 1, 999999, tzinfo=UTC)) == 1

    def test_days_in_month(self):
        assert days_in_month(2024, 2) == 29
        assert days_in_month(2023, 2) == 28
        assert days_in_month(2024, 12) == 31


# ============================================================================
# Unit Flag Tests
# ============================================================================

class TestTimeUnit:
    """Test unit bit flags"""

    def test_values(self):
        assert int(TimeUnit.SECONDS) == 1
        assert int(TimeUnit.MILLENNIA) == 128
        assert int(TimeUnit.MICROSECONDS) == 256

    def test_formats(self):
        assert int(DATETIME_RANGE_FORMAT) == 63
        assert int(DATE_RANGE_FORMAT) == 56

    def test_as_mask(self):
        assert as_mask(56) == DATE_RANGE_FORMAT
        assert as_mask(56 | 1024) == DATE_RANGE_FORMAT
        assert as_mask(None) == 0

    def test_unit_name(self):
        assert unit_name(TimeUnit.CENTURIES) == "centuries"
        assert unit_name(TimeUnit.MICROSECONDS) == "microseconds"

    def test_units_in(self):
        assert units_in(TimeUnit.MICROSECONDS | TimeUnit.DAYS | TimeUnit.YEARS) == [
            TimeUnit.YEARS, TimeUnit.DAYS, TimeUnit.MICROSECONDS,
        ]
        assert units_in(0) == []

    def test_orders(self):
        assert UNITS_DESCENDING[0] == TimeUnit.MILLENNIA
        assert UNITS_DESCENDING[-1] == TimeUnit.SECONDS
        assert APPEND_ORDER[0] == TimeUnit.CENTURIES
        assert APPEND_ORDER[-1] == TimeUnit.MICROSECONDS

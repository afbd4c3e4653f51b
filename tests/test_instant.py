"""Comprehensive tests for the instant module.

These tests verify instant handling across:
- Parsing: canonical strings, fractions, sentinels, timezones, dateutil fallback
- Modifiers: deltas, keywords, weekdays, month/year boundaries, DST
- Mutators and the changeable flag
- Comparison with and without microseconds, date-only comparison
- Julian calendar helpers and formatting

Run with: pytest tests/test_instant.py -v
"""

import pytest
from datetime import date, datetime, timezone

from timephrase.config import Settings
from timephrase.errors import (
    FormatError,
    ImmutableStateError,
    InvalidArgumentError,
    RangeError,
)
from timephrase.instant.instantapi import (
    InstantValue,
    compare_instants,
    from_timestamp,
    is_after_gregorian_start_ru,
    is_before_gregorian_start,
    is_equal,
    julian_diff_days,
    max_instant,
    min_instant,
    now_instant,
    parse_instant,
)
from timephrase.instant.instantnormalize import (
    ModifierClause,
    is_relative_text,
    is_sentinel,
    normalize_instant_text,
    parse_fraction,
    parse_modifier,
    resolve_timezone,
)
from timephrase.interval.intervalunits import TimeUnit


# ============================================================================
# Parsing Tests
# ============================================================================

class TestParseCanonical:
    """Test canonical string parsing"""

    def test_datetime(self):
        instant = parse_instant("2024-01-10 12:00:00")
        assert (instant.year, instant.month, instant.day) == (2024, 1, 10)
        assert (instant.hour, instant.minute, instant.second) == (12, 0, 0)
        assert instant.microsecond == 0
        assert instant.date_only is False

    def test_default_timezone_is_moscow(self):
        instant = parse_instant("2024-01-10 12:00:00")
        assert instant.to_datetime().utcoffset().total_seconds() == 3 * 3600

    @pytest.mark.parametrize("text,micro", [
        ("2024-01-10 12:00:00.5", 500000),
        ("2024-01-10 12:00:00.000250", 250),
        ("2024-01-10 12:00:00.12345678", 123456),
        ("2024-01-10T12:00:00.1", 100000),
    ])
    def test_fraction(self, text, micro):
        assert parse_instant(text).microsecond == micro

    def test_date_string(self):
        instant = parse_instant("2024-01-10")
        assert instant.format_mysql() == "2024-01-10 00:00:00"

    def test_date_only(self):
        instant = parse_instant("2024-01-10 15:30:00", date_only=True)
        assert instant.date_only is True
        assert instant.format_mysql() == "2024-01-10"
        assert instant.hour == 0

    def test_invalid_calendar_date(self):
        with pytest.raises(FormatError):
            parse_instant("2024-02-30 00:00:00")

    def test_nbsp_and_whitespace(self):
        assert parse_instant("  2024-01-10\u00a012:00:00 ").format_mysql() == "2024-01-10 12:00:00"


class TestParseSpecialValues:
    """Test sentinels, None, now and failure modes"""

    @pytest.mark.parametrize("text", [
        "0000-00-00",
        "0000-00-00 00:00:00",
        "0000-00-00 00:00:00.000",
    ])
    def test_sentinel(self, text):
        assert parse_instant(text) is None
        assert is_sentinel(text)

    def test_none(self):
        assert parse_instant(None) is None

    def test_now(self):
        before = datetime.now(timezone.utc).replace(microsecond=0)
        instant = parse_instant("now")
        after = datetime.now(timezone.utc)
        assert before <= instant.to_datetime() <= after
        assert instant.microsecond == 0

    def test_empty_string_is_now(self):
        assert isinstance(parse_instant(""), InstantValue)

    def test_now_with_micro(self):
        instant = now_instant("UTC", with_micro=True)
        assert instant.tzinfo is not None

    def test_unparsable_strict(self):
        with pytest.raises(FormatError):
            parse_instant("qwerty zxcv")

    def test_unparsable_lenient(self):
        assert parse_instant("qwerty zxcv", strict=False) is None

    def test_custom_message(self):
        with pytest.raises(FormatError, match="Дата начала указана неверно"):
            parse_instant("qwerty zxcv", message="Дата начала указана неверно")

    @pytest.mark.parametrize("value", [42, 3.5, ["2024-01-10"], object()])
    def test_non_temporal(self, value):
        with pytest.raises(TypeError):
            parse_instant(value)


class TestParseTemporalSources:
    """Test datetimes, dates, instants and timezones"""

    def test_naive_datetime_localized(self):
        instant = parse_instant(datetime(2024, 1, 10, 12, 0))
        assert instant.format_mysql() == "2024-01-10 12:00:00"
        assert instant.to_datetime().utcoffset().total_seconds() == 3 * 3600

    def test_aware_datetime_keeps_zone(self):
        instant = parse_instant(datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc))
        assert instant.hour == 12

    def test_aware_datetime_converted(self):
        instant = parse_instant(datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc), "Europe/Moscow")
        assert instant.hour == 15

    def test_date(self):
        instant = parse_instant(date(2024, 1, 10))
        assert instant.format_mysql() == "2024-01-10 00:00:00"

    def test_instant_copy(self):
        original = parse_instant("2024-01-10 12:00:00")
        copy = parse_instant(original)
        assert copy == original
        assert copy is not original

    def test_instant_converted(self):
        original = parse_instant("2024-01-10 12:00:00")
        assert parse_instant(original, "UTC").hour == 9

    def test_fixed_offset(self):
        instant = parse_instant("2024-01-10 12:00:00", "+05:30")
        assert instant.to_datetime().utcoffset().total_seconds() == 5.5 * 3600

    def test_unknown_timezone(self):
        with pytest.raises(InvalidArgumentError):
            parse_instant("2024-01-10 12:00:00", "Mars/Olympus")

    def test_dateutil_fallback(self):
        assert parse_instant("10 Jan 2024 12:00").format_mysql() == "2024-01-10 12:00:00"

    def test_dateutil_with_offset(self):
        instant = parse_instant("2024-01-10T12:00:00+00:00")
        assert is_equal(instant, "2024-01-10 15:00:00")

    def test_settings_timezone(self):
        instant = parse_instant("2024-01-10 12:00:00", settings=Settings(timezone="UTC"))
        assert instant.timestamp == int(datetime(2024, 1, 10, 12, tzinfo=timezone.utc).timestamp())


class TestNormalizeHelpers:
    """Test text helpers"""

    def test_normalize(self):
        assert normalize_instant_text("  a \u00a0 b  ") == "a b"
        assert normalize_instant_text("") == ""

    def test_parse_fraction(self):
        assert parse_fraction("5") == 500000
        assert parse_fraction(None) == 0

    def test_resolve_timezone(self):
        assert resolve_timezone(None) is None
        assert resolve_timezone("Z").utcoffset(datetime(2024, 1, 1)).total_seconds() == 0
        with pytest.raises(InvalidArgumentError):
            resolve_timezone(3)

    def test_relative_text(self):
        assert is_relative_text("tomorrow")
        assert is_relative_text("+3 days")
        assert not is_relative_text("2024-01-10")


# ============================================================================
# Modifier Tests
# ============================================================================

class TestParseModifier:
    """Test modifier grammar"""

    def test_delta(self):
        assert parse_modifier("-1 week") == [ModifierClause("delta", "weeks", -1)]

    def test_combined(self):
        clauses = parse_modifier("+2 hours -30 minutes")
        assert [(c.unit, c.amount) for c in clauses] == [("hours", 2), ("minutes", -30)]

    def test_boundary(self):
        assert parse_modifier("last day of next month") == [
            ModifierClause("boundary", "month", 1, "last")
        ]

    def test_weekday(self):
        assert parse_modifier("next friday") == [ModifierClause("weekday", "weekday", 5, "next")]

    def test_step(self):
        assert parse_modifier("next month") == [ModifierClause("delta", "months", 1)]

    def test_case_insensitive(self):
        assert parse_modifier("Tomorrow") == [ModifierClause("keyword", "tomorrow")]

    @pytest.mark.parametrize("text", ["", "someday", "+3 parsecs"])
    def test_invalid(self, text):
        with pytest.raises(FormatError):
            parse_modifier(text)


class TestModify:
    """Test modifier application"""

    @pytest.mark.parametrize("start,modifier,expected", [
        ("2024-01-10 12:00:00", "+1 day", "2024-01-11 12:00:00"),
        ("2024-01-10 12:00:00", "-2 hours", "2024-01-10 10:00:00"),
        ("2024-01-10 12:00:00", "+2 hours -30 minutes", "2024-01-10 13:30:00"),
        ("2024-01-31 10:00:00", "+1 month", "2024-02-29 10:00:00"),
        ("2024-02-29 10:00:00", "-1 year", "2023-02-28 10:00:00"),
        ("2024-01-10 12:00:00", "+1 fortnight", "2024-01-24 12:00:00"),
        ("2024-01-10 12:00:00", "next week", "2024-01-17 12:00:00"),
        ("2024-01-10 12:00:00", "tomorrow", "2024-01-11 00:00:00"),
        ("2024-01-10 12:00:00", "yesterday noon", "2024-01-09 12:00:00"),
        ("2024-01-10 12:00:00", "midnight", "2024-01-10 00:00:00"),
        ("2024-01-10 12:00:00", "next monday", "2024-01-15 00:00:00"),
        ("2024-01-10 12:00:00", "next wednesday", "2024-01-17 00:00:00"),
        ("2024-01-10 12:00:00", "last friday", "2024-01-05 00:00:00"),
        ("2024-01-10 12:00:00", "first day of next month", "2024-02-01 12:00:00"),
        ("2024-01-10 12:00:00", "last day of next month", "2024-02-29 12:00:00"),
        ("2024-01-10 12:00:00", "last day of previous month", "2023-12-31 12:00:00"),
        ("2024-01-10 12:00:00", "first day of next year", "2025-01-01 12:00:00"),
        ("2024-01-10 12:00:00", "last day of this year", "2024-12-31 12:00:00"),
    ])
    def test_modify(self, start, modifier, expected):
        assert parse_instant(start).modify(modifier).format_mysql() == expected

    def test_microsecond_carry(self):
        instant = parse_instant("2024-01-10 10:00:00.900000").modify("+200000 usec")
        assert instant.format_canonical() == "2024-01-10 10:00:01.100000"

    def test_microsecond_borrow(self):
        instant = parse_instant("2024-01-10 10:00:00.100000").modify("-200000 usec")
        assert instant.format_canonical() == "2024-01-10 09:59:59.900000"

    def test_microsecond_delta_too_large(self):
        with pytest.raises(RangeError):
            parse_instant("2024-01-10 10:00:00").modify("+1000000 usec")

    def test_invalid_modifier(self):
        with pytest.raises(FormatError):
            parse_instant("2024-01-10 10:00:00").modify("bogus")

    def test_relative_source(self):
        """Test modifier strings resolve against now"""
        tomorrow = parse_instant("tomorrow")
        assert tomorrow.hour == 0
        assert tomorrow.to_date() > now_instant().to_date()

    def test_hours_are_elapsed_time_across_dst(self):
        instant = parse_instant("2024-03-31 01:30:00", "Europe/Berlin").modify("+1 hour")
        assert instant.format_mysql() == "2024-03-31 03:30:00"

    def test_days_keep_wall_clock_across_dst(self):
        instant = parse_instant("2024-03-30 12:00:00", "Europe/Berlin").modify("+1 day")
        assert instant.format_mysql() == "2024-03-31 12:00:00"

    def test_nonexistent_wall_clock_resolved(self):
        instant = parse_instant("2024-03-30 02:30:00", "Europe/Berlin").modify("+1 day")
        assert instant.format_mysql() == "2024-03-31 03:30:00"


# ============================================================================
# Mutator Tests
# ============================================================================

class TestChangeable:
    """Test the changeable flag"""

    def test_frozen_rejects_mutation(self):
        frozen = parse_instant("2024-01-10 12:00:00").set_changeable(False)
        with pytest.raises(ImmutableStateError):
            frozen.modify("+1 day")
        with pytest.raises(ImmutableStateError):
            frozen.set_time(10, 0)
        with pytest.raises(ImmutableStateError):
            frozen.to_month_start()

    def test_with_methods_copy(self):
        frozen = parse_instant("2024-01-10").set_changeable(False)
        moved = frozen.with_modified("+1 month")
        assert moved.format_mysql() == "2024-02-10 00:00:00"
        assert frozen.format_mysql() == "2024-01-10 00:00:00"
        assert moved.changeable is True

    def test_with_time_and_date(self):
        original = parse_instant("2024-01-10 12:00:00")
        assert original.with_time(8, 15).format_mysql() == "2024-01-10 08:15:00"
        assert original.with_date(2023, 5, 1).format_mysql() == "2023-05-01 12:00:00"
        assert original.format_mysql() == "2024-01-10 12:00:00"

    def test_clone_flags(self):
        frozen = parse_instant("2024-01-10").set_changeable(False)
        assert frozen.clone().changeable is True
        assert frozen.clone(keep_changeable=True).changeable is False

    def test_immutable_error_is_runtime_error(self):
        frozen = parse_instant("2024-01-10").set_changeable(False)
        with pytest.raises(RuntimeError):
            frozen.set_year(2020)


class TestSetters:
    """Test in-place setters"""

    def test_set_time_rolls_over(self):
        instant = parse_instant("2024-01-10 12:00:00").set_time(25, 0)
        assert instant.format_mysql() == "2024-01-11 01:00:00"

    def test_set_time_microseconds(self):
        instant = parse_instant("2024-01-10 12:00:00").set_time(9, 5, 7, 250)
        assert instant.format_canonical() == "2024-01-10 09:05:07.000250"

    def test_set_date_rolls_over(self):
        assert parse_instant("2024-01-10").set_date(2024, 13, 1).format_mysql() == "2025-01-01 00:00:00"
        assert parse_instant("2024-01-10").set_date(2024, 3, 0).format_mysql() == "2024-02-29 00:00:00"

    def test_set_year_and_month_day(self):
        instant = parse_instant("2024-01-10 12:00:00")
        assert instant.set_year(2020).year == 2020
        assert instant.set_month_and_day(7, 4).format_mysql() == "2020-07-04 12:00:00"

    def test_set_microseconds(self):
        instant = parse_instant("2024-01-10 12:00:00").set_microseconds(999999)
        assert instant.microsecond == 999999
        with pytest.raises(RangeError):
            instant.set_microseconds(1_000_000)

    def test_set_week_number(self):
        instant = parse_instant("2024-01-10 12:00:00").set_week_number(1)
        assert instant.format_mysql() == "2024-01-03 12:00:00"
        assert instant.iso_week == 1

    @pytest.mark.parametrize("week", [-1, 54])
    def test_set_week_number_out_of_range(self, week):
        with pytest.raises(RangeError):
            parse_instant("2024-01-10").set_week_number(week)

    def test_set_day_of_week(self):
        instant = parse_instant("2024-01-10 12:00:00").set_day_of_week(1)
        assert instant.format_mysql() == "2024-01-08 12:00:00"
        with pytest.raises(RangeError):
            instant.set_day_of_week(8)

    def test_date_only_stays_midnight(self):
        instant = parse_instant("2024-01-10", date_only=True).set_time(15, 30)
        assert instant.format_canonical() == "2024-01-10 00:00:00.000000"

    def test_as_date_only_and_back(self):
        instant = parse_instant("2024-01-10 15:30:00")
        assert instant.as_date_only().format_mysql() == "2024-01-10"
        assert instant.as_date_only().as_date_time().format_mysql() == "2024-01-10 00:00:00"


class TestBoundaries:
    """Test period boundaries"""

    def test_day(self):
        assert parse_instant("2024-01-10 12:00:00").to_day_start().format_mysql() == "2024-01-10 00:00:00"
        assert parse_instant("2024-01-10 12:00:00").to_day_end().format_canonical() == "2024-01-10 23:59:59.999999"

    def test_week(self):
        assert parse_instant("2024-01-10 12:00:00").to_week_start().format_mysql() == "2024-01-08 00:00:00"
        assert parse_instant("2024-01-10 12:00:00").to_week_end().format_mysql() == "2024-01-14 23:59:59"

    def test_week_across_year(self):
        assert parse_instant("2025-01-01 12:00:00").to_week_start().format_mysql() == "2024-12-30 00:00:00"

    def test_month(self):
        assert parse_instant("2024-02-10 12:00:00").to_month_start().format_mysql() == "2024-02-01 00:00:00"
        assert parse_instant("2024-02-10 12:00:00").to_month_end().format_mysql() == "2024-02-29 23:59:59"

    def test_year(self):
        assert parse_instant("2024-02-10 12:00:00").to_year_start().format_mysql() == "2024-01-01 00:00:00"
        assert parse_instant("2024-02-10 12:00:00").to_year_end().format_mysql() == "2024-12-31 23:59:59"

    def test_first_and_last_day_of(self):
        instant = parse_instant("2024-01-10 12:00:00")
        assert instant.with_modified("now").to_first_day_of("next month").format_mysql() == "2024-02-01 12:00:00"
        assert instant.clone().to_last_day_of().format_mysql() == "2024-01-31 12:00:00"
        assert instant.clone().to_last_day_of("last year").format_mysql() == "2023-12-31 12:00:00"

    def test_empty_period(self):
        with pytest.raises(InvalidArgumentError):
            parse_instant("2024-01-10").to_first_day_of("")


# ============================================================================
# Comparison Tests
# ============================================================================

class TestCompare:
    """Test comparison"""

    def test_ignores_micro_by_default(self):
        assert compare_instants("2024-01-10 12:00:00.9", "2024-01-10 12:00:00.1") == 0

    def test_with_micro(self):
        assert compare_instants("2024-01-10 12:00:00.9", "2024-01-10 12:00:00.1", with_micro=True) == 1
        assert compare_instants("2024-01-10 12:00:00.1", "2024-01-10 12:00:00.9", with_micro=True) == -1

    def test_with_micro_from_settings(self):
        settings = Settings(with_micro=True)
        assert compare_instants("2024-01-10 12:00:00.9", "2024-01-10 12:00:00.1", settings=settings) == 1

    def test_seconds_dominate(self):
        assert compare_instants("2024-01-10 12:00:01.0", "2024-01-10 12:00:00.9", with_micro=True) == 1

    def test_across_zones(self):
        assert is_equal("2024-01-10 12:00:00", parse_instant("2024-01-10 09:00:00", "UTC"))

    def test_date_only_compares_dates(self):
        day = parse_instant("2024-01-10", date_only=True)
        assert compare_instants(day, "2024-01-10 23:00:00") == 0
        assert compare_instants(day, "2024-01-11 00:30:00") == -1

    def test_non_temporal(self):
        with pytest.raises(TypeError):
            compare_instants("2024-01-10", 5)

    def test_sentinel_operand(self):
        with pytest.raises(TypeError):
            compare_instants("2024-01-10", "0000-00-00")

    def test_operators(self):
        a = parse_instant("2024-01-10 12:00:00")
        b = parse_instant("2024-01-10 13:00:00")
        assert a < b
        assert b >= a
        assert a == parse_instant("2024-01-10 09:00:00", "UTC")
        assert sorted([b, a]) == [a, b]
        assert a != 5

    def test_not_hashable(self):
        with pytest.raises(TypeError):
            hash(parse_instant("2024-01-10"))

    def test_methods(self):
        instant = parse_instant("2024-01-10 12:00:00")
        assert instant.is_before("2024-01-10 12:00:01")
        assert instant.is_after("2024-01-09")
        assert instant.is_between("2024-01-01", "2024-01-31")
        assert instant.is_between("2024-01-10 12:00:00", None)
        assert not instant.is_between(None, "2024-01-09")

    def test_past_future_today(self, now):
        instant = parse_instant("2024-01-10 09:00:00")
        assert instant.in_past(now)
        assert not instant.in_future(now)
        assert instant.is_today(now)
        assert not instant.is_today("2024-01-11 12:00:00")


class TestMaxMin:
    """Test max/min of several instants"""

    def test_max(self):
        assert max_instant(["2024-01-10", "2023-05-01", "2024-01-09"]).format_mysql() == "2024-01-10 00:00:00"

    def test_min(self):
        assert min_instant(["2024-01-10", "2023-05-01", "2024-01-09"]).format_mysql() == "2023-05-01 00:00:00"

    def test_empty(self):
        assert max_instant([]) is None

    def test_none_element(self):
        with pytest.raises(TypeError):
            min_instant(["2024-01-10", None])


class TestTimestamp:
    """Test UNIX timestamps"""

    def test_from_timestamp(self):
        assert from_timestamp(0, "UTC").format_mysql() == "1970-01-01 00:00:00"
        assert from_timestamp(1.5, "UTC").microsecond == 500000

    def test_round_trip(self):
        instant = parse_instant("2024-01-10 12:00:00")
        assert from_timestamp(instant.timestamp) == instant

    def test_invalid(self):
        with pytest.raises(InvalidArgumentError):
            from_timestamp("0")
        with pytest.raises(InvalidArgumentError):
            from_timestamp(True)

    def test_iso_fields(self):
        instant = parse_instant("2024-01-10 12:00:00")
        assert instant.iso_weekday == 3
        assert instant.iso_week == 2


# ============================================================================
# Julian Calendar and Formatting Tests
# ============================================================================

class TestJulian:
    """Test Julian calendar helpers"""

    def test_diff_days(self):
        assert julian_diff_days("2024-01-07") == 13
        assert julian_diff_days("1700-03-01") == 11

    def test_in_julian_calendar(self):
        assert parse_instant("2024-01-14").in_julian_calendar().format_mysql() == "2024-01-01 00:00:00"

    def test_format_with_julian(self, plain):
        instant = parse_instant("2024-02-14")
        assert plain(instant.format_with_julian()) == "14 февраля (1 февраля) 2024 года"
        assert plain(instant.format_with_julian(julian_first=True)) == "1 февраля (14 февраля) 2024 года"
        assert plain(instant.format_with_julian(detail=TimeUnit.YEARS)) == \
            "14 февраля 2024 года (1 февраля 2024 года)"

    def test_format_with_julian_days(self, plain):
        assert plain(parse_instant("2024-01-20").format_with_julian(detail=TimeUnit.DAYS)) == "20 (7) января 2024 года"

    def test_format_with_julian_year_change(self, plain):
        assert plain(parse_instant("2024-01-05").format_with_julian(detail=TimeUnit.DAYS)) == \
            "5 января 2024 года (23 декабря 2023 года)"

    def test_gregorian_start(self):
        assert is_before_gregorian_start("1582-10-04")
        assert not is_before_gregorian_start("1582-10-15")
        assert is_after_gregorian_start_ru("1918-02-14")
        assert not is_after_gregorian_start_ru("1918-01-31")


class TestFormatting:
    """Test string formats"""

    def test_canonical(self):
        assert parse_instant("2024-01-10 12:00:00.25").format_canonical() == "2024-01-10 12:00:00.250000"

    def test_canonical_round_trip(self):
        instant = parse_instant("2024-01-10 12:34:56.789", "UTC")
        assert parse_instant(instant.format_canonical(), instant.tzinfo) == instant

    def test_digits(self):
        assert parse_instant("2024-01-10 09:05:00").format_digits() == "10.01.2024 09:05"
        assert parse_instant("2024-01-10", date_only=True).format_digits() == "10.01.2024"

    def test_human(self):
        assert str(parse_instant("1970-01-05 09:15:00")) == "05 января 1970 г. в 09:15"
        assert parse_instant("1970-01-05", date_only=True).format_human() == "5 января 1970 г."

    def test_repr(self):
        text = repr(parse_instant("2024-01-10 12:00:00"))
        assert "2024-01-10 12:00:00.000000" in text
        assert "datetime" in text

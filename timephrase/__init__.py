"""Time Phrase - Russian relative time phrases

Public API for instants, calendar intervals and colloquial time-distance phrases.

Usage:
    from timephrase import parse_instant, relative_time_diff, render_range, select_form

    # Parse an instant (Europe/Moscow unless configured otherwise)
    instant = parse_instant("2024-01-10 12:00:00")

    # Describe it relative to now
    diff = relative_time_diff("2024-01-09 12:00:00", now=instant)
    diff.smart_phrase    # Returns: 'вчера, 9 января в 12:00 (вторник)'
    diff.bucket_phrase   # Returns: 'день назад'

    # Render a range
    render_range("2024-01-02", "2024-01-05", DATE_RANGE_FORMAT, now=instant)  # Returns: 'со 2 по 5 января'

    # Agree a noun with a numeral
    select_form(21, ["рубль", "рубля", "рублей"])  # Returns: 'рубль'

Settings come from TIMEPHRASE_TIMEZONE, TIMEPHRASE_WITH_MICRO,
TIMEPHRASE_LOCALE and TIMEPHRASE_LOCALE_PATH, or an explicit Settings object.
"""

__version__ = "0.0.1"

# ============================================================================
# Errors and configuration
# ============================================================================

from .errors import (
    TimePhraseError,         # Base class of package errors
    FormatError,             # Unparsable calendar string or modifier
    ImmutableStateError,     # Mutation of a frozen instant
    RangeError,              # Numeral out of bounds
    InvalidArgumentError,    # Wrong shape or type of an argument
)

from .config import (
    Settings,                # Timezone, microseconds, locale
    get_settings,            # Settings from the environment (cached)
    clear_settings_cache,    # Re-read the environment
)

# ============================================================================
# Pluralization API
# ============================================================================

from .plural.pluralapi import (
    PluralParadigm,          # (one, few, many) forms plus stem
    select_form,             # Primary API - choose the form agreeing with a numeral
    pluralize_unit,          # Pluralize a time unit by name
)

# ============================================================================
# Locale API
# ============================================================================

from .locales.localeapi import (
    LocaleTable,             # Month/weekday names, paradigms, phrase templates
    load_locale,             # Load a locale table (cached)
)

# ============================================================================
# Instant API
# ============================================================================

from .instant.instantapi import (
    InstantValue,            # Timezone-aware instant with calendar helpers
    parse_instant,           # Primary API - build an instant from anything temporal
    now_instant,             # Current wall clock
    from_timestamp,          # Instant from UNIX seconds
    compare_instants,        # -1 / 0 / +1 comparison
    is_equal,                # Same moment check
    max_instant,             # Latest of several instants
    min_instant,             # Earliest of several instants
    julian_diff_days,        # Gregorian/Julian offset in days
)

# ============================================================================
# Interval API
# ============================================================================

from .interval.intervalunits import (
    TimeUnit,                # Unit bit flags
    DATETIME_RANGE_FORMAT,   # Seconds through years
    DATE_RANGE_FORMAT,       # Days, months, years
)

from .interval.intervalidentity import (
    CalendarInterval,        # Borrowed calendar fields plus totals
    diff_calendar,           # Calendar interval between two instants
)

# ============================================================================
# Relative phrase and range API
# ============================================================================

from .relative.relativeapi import (
    RelativeTimeDiff,        # Phrases for one subject/reference pair
    relative_time_diff,      # Primary API - describe an instant relative to now
    smart,                   # Smart phrase shortcut
)

from .ranges.rangeapi import (
    render_range,            # "с … по …" range text
)

__all__ = [
    # Errors
    "TimePhraseError",
    "FormatError",
    "ImmutableStateError",
    "RangeError",
    "InvalidArgumentError",
    # Configuration
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Pluralization
    "PluralParadigm",
    "select_form",
    "pluralize_unit",
    # Locales
    "LocaleTable",
    "load_locale",
    # Instants
    "InstantValue",
    "parse_instant",
    "now_instant",
    "from_timestamp",
    "compare_instants",
    "is_equal",
    "max_instant",
    "min_instant",
    "julian_diff_days",
    # Intervals
    "TimeUnit",
    "DATETIME_RANGE_FORMAT",
    "DATE_RANGE_FORMAT",
    "CalendarInterval",
    "diff_calendar",
    # Relative phrases and ranges
    "RelativeTimeDiff",
    "relative_time_diff",
    "smart",
    "render_range",
]

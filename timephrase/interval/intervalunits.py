"""Time unit flags.

One bit per unit. The values are part of the public contract: callers
persist punctuality masks and range formats as plain integers.

  SECONDS=1  MINUTES=2  HOURS=4  DAYS=8  MONTHS=16  YEARS=32
  CENTURIES=64  MILLENNIA=128  MICROSECONDS=256

Examples:
  >>> TimeUnit.DAYS | TimeUnit.MONTHS | TimeUnit.YEARS == DATE_RANGE_FORMAT
  True

  >>> int(DATETIME_RANGE_FORMAT)
  63

  >>> unit_name(TimeUnit.CENTURIES)
  'centuries'
"""

from enum import IntFlag
from typing import List, Union


class TimeUnit(IntFlag):
    SECONDS = 1
    MINUTES = 2
    HOURS = 4
    DAYS = 8
    MONTHS = 16
    YEARS = 32
    CENTURIES = 64
    MILLENNIA = 128
    MICROSECONDS = 256


# seconds, minutes, hours, days, months, years
DATETIME_RANGE_FORMAT = (
    TimeUnit.SECONDS | TimeUnit.MINUTES | TimeUnit.HOURS
    | TimeUnit.DAYS | TimeUnit.MONTHS | TimeUnit.YEARS
)

# days, months, years
DATE_RANGE_FORMAT = TimeUnit.DAYS | TimeUnit.MONTHS | TimeUnit.YEARS

# Coarsest first; microseconds are not part of the calendar cascade
UNITS_DESCENDING = (
    TimeUnit.MILLENNIA,
    TimeUnit.CENTURIES,
    TimeUnit.YEARS,
    TimeUnit.MONTHS,
    TimeUnit.DAYS,
    TimeUnit.HOURS,
    TimeUnit.MINUTES,
    TimeUnit.SECONDS,
)

# Order used when extra units are appended to a phrase
APPEND_ORDER = (
    TimeUnit.CENTURIES,
    TimeUnit.YEARS,
    TimeUnit.MONTHS,
    TimeUnit.DAYS,
    TimeUnit.HOURS,
    TimeUnit.MINUTES,
    TimeUnit.SECONDS,
    TimeUnit.MICROSECONDS,
)


def unit_name(unit: TimeUnit) -> str:
    """Lowercase plural name used as the paradigm key ('hours')."""
    return TimeUnit(unit).name.lower()


def as_mask(mask: Union[TimeUnit, int, None]) -> TimeUnit:
    """
    Convert an integer (or None) to a TimeUnit mask.

    Bits outside the known units are dropped.

    Examples:
        >>> as_mask(56) == DATE_RANGE_FORMAT
        True

        >>> as_mask(None)
        <TimeUnit: 0>
    """
    if mask is None:
        return TimeUnit(0)

    value = int(mask)
    known = 0
    for unit in TimeUnit:
        if value & unit:
            known |= unit

    return TimeUnit(known)


def units_in(mask: Union[TimeUnit, int, None]) -> List[TimeUnit]:
    """Units set in a mask, coarsest first (microseconds last)."""
    mask = as_mask(mask)
    units = [unit for unit in UNITS_DESCENDING if mask & unit]
    if mask & TimeUnit.MICROSECONDS:
        units.append(TimeUnit.MICROSECONDS)
    return units


__all__ = [
    "TimeUnit",
    "DATETIME_RANGE_FORMAT",
    "DATE_RANGE_FORMAT",
    "UNITS_DESCENDING",
    "APPEND_ORDER",
    "unit_name",
    "as_mask",
    "units_in",
]

"""Julian calendar arithmetic.

The Gregorian reform dropped 10 days in 1582 (4 October was followed by
15 October); Russia switched on 1 February 1918 (31 January was followed by
14 February). The gap between the calendars grows by one day every century
that is not divisible by 400.

Examples:
  >>> julian_offset(2024)
  13

  >>> julian_offset(1700)
  11
"""

# (year, month, day) of the first day of the reform
GREGORIAN_START = (1582, 10, 5)
GREGORIAN_START_RU = (1918, 2, 1)


def julian_offset(year: int) -> int:
    """
    Days the Julian calendar lags behind the Gregorian one in a year.

    Uses the century rule: year//100 - year//400 - 2.

    Args:
        year: Gregorian year (1-9999)

    Returns:
        Number of days (10 in 1582, 13 for 1900-2099)

    Examples:
        >>> julian_offset(1582)
        10

        >>> julian_offset(2100)
        14
    """
    return year // 100 - year // 400 - 2


__all__ = [
    "GREGORIAN_START",
    "GREGORIAN_START_RU",
    "julian_offset",
]

"""Numeral Normalization
---------------------

Turns pluralization input into decimal text before the word form is chosen.

Examples:
  >>> coerce_numeral(21)
  '21'

  >>> coerce_numeral(" 1 000 ")
  '1000'

  >>> coerce_numeral(["a", "b"])
  '2'

  >>> group_digits("1234567", " ")
  '1 234 567'
"""

import numbers
import re
from collections.abc import Sized
from decimal import Decimal

from timephrase.errors import InvalidArgumentError

# Four-per-em space between digit groups, no-break space before the word
GROUP_SEPARATOR = "\u2005"
NUMBER_SPACE = "\u00a0"

_NUMERIC_RE = re.compile(r"^[+-]?\d+(?:[.,]\d+)?$")


def coerce_numeral(count) -> str:
    """
    Convert a count to its decimal text.

    Accepted:
      - integers of any numeric type (int, numpy ints), integral values (2.0 -> '2')
      - floats, Decimal and Fraction as plain positional text (1e-05 -> '0.00001')
      - numeric strings, whitespace ignored ('1 000', '2,5')
      - sized collections: their length substitutes the numeral
      - other strings: their length substitutes the numeral

    Args:
        count: Numeral or countable value

    Returns:
        Decimal text of the numeral (may carry sign and fraction)

    Raises:
        InvalidArgumentError: If count cannot be coerced (bool, None, objects)

    Examples:
        >>> coerce_numeral(2.0)
        '2'

        >>> coerce_numeral("2,5")
        '2,5'

        >>> coerce_numeral("abc")
        '3'
    """
    if isinstance(count, bool) or count is None:
        raise InvalidArgumentError(
            f"Pluralization needs a number or a countable value, got {type(count).__name__}"
        )

    if isinstance(count, numbers.Integral):
        return str(int(count))

    if isinstance(count, float):
        return _decimal_text(Decimal(repr(count)))

    if isinstance(count, Decimal):
        return _decimal_text(count)

    if isinstance(count, numbers.Rational):
        return _decimal_text(Decimal(count.numerator) / Decimal(count.denominator))

    if isinstance(count, numbers.Real):
        return _decimal_text(Decimal(repr(float(count))))

    if isinstance(count, str):
        text = re.sub(r"\s+", "", count)
        if _NUMERIC_RE.match(text):
            return text
        return str(len(count))

    if isinstance(count, Sized):
        return str(len(count))

    raise InvalidArgumentError(
        f"Pluralization needs a number or a countable value, got {type(count).__name__}"
    )


def _decimal_text(value: Decimal) -> str:
    """Plain positional text, integral values without a fraction ('1e-05' -> '0.00001')."""
    if not value.is_finite():
        raise InvalidArgumentError(f"Pluralization needs a finite number, got {value}")
    if value == value.to_integral_value():
        return str(int(value))
    return format(value, "f").rstrip("0")


def has_fraction(numeral: str) -> bool:
    """True if the numeral text carries a decimal separator."""
    return "." in numeral or "," in numeral


def last_two_digits(numeral: str) -> tuple[int, int]:
    """
    Return (second-to-last, last) digit of the integer part.

    Examples:
        >>> last_two_digits("21")
        (2, 1)

        >>> last_two_digits("-7")
        (0, 7)
    """
    digits = re.sub(r"[^\d]", "", re.split(r"[.,]", numeral)[0])
    last = int(digits[-1])
    before_last = int(digits[-2]) if len(digits) > 1 else 0
    return (before_last, last)


def group_digits(numeral: str, separator: str = GROUP_SEPARATOR) -> str:
    """
    Group integer digits by three from the right.

    Args:
        numeral: Decimal text from coerce_numeral()
        separator: Group separator (default: four-per-em space)

    Returns:
        Grouped numeral, sign and fractional part kept as given

    Examples:
        >>> group_digits("159069615", " ")
        '159 069 615'

        >>> group_digits("-1500,25", " ")
        '-1 500,25'
    """
    match = re.match(r"^([+-]?)(\d+)([.,]\d+)?$", numeral)
    if not match:
        return numeral

    sign, digits, fraction = match.group(1), match.group(2), match.group(3) or ""
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)

    return sign + separator.join(groups) + fraction


__all__ = [
    "GROUP_SEPARATOR",
    "NUMBER_SPACE",
    "coerce_numeral",
    "has_fraction",
    "last_two_digits",
    "group_digits",
]

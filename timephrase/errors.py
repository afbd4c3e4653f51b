"""Error taxonomy for timephrase.

Every error derives from ``TimePhraseError`` and from the builtin exception a
caller would naturally catch, so ``except ValueError`` keeps working.

  - FormatError: calendar string or modifier cannot be interpreted
  - ImmutableStateError: mutation of an instant marked as not changeable
  - RangeError: numeral outside a configured bound (ISO week > 53, ...)
  - InvalidArgumentError: argument of the wrong shape or type
"""


class TimePhraseError(Exception):
    """Base class for all timephrase errors."""


class FormatError(TimePhraseError, ValueError):
    """Calendar string (or relative modifier) is unparsable."""


class ImmutableStateError(TimePhraseError, RuntimeError):
    """Mutation attempted on an instant whose ``changeable`` flag is off."""


class RangeError(TimePhraseError, ValueError):
    """Numeral is outside of its allowed range."""


class InvalidArgumentError(TimePhraseError, ValueError):
    """Argument has the wrong shape or type."""


__all__ = [
    "TimePhraseError",
    "FormatError",
    "ImmutableStateError",
    "RangeError",
    "InvalidArgumentError",
]

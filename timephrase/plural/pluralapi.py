"""Numeral pluralization API.

Selects the grammatically correct word form for a numeral from a 3-form
paradigm (Slavic agreement: 1 / 2-4 / 0,5+).
"""

from typing import NamedTuple, Optional, Sequence, Union

from timephrase.errors import InvalidArgumentError
from timephrase.plural.pluralnormalize import (
    NUMBER_SPACE,
    coerce_numeral,
    group_digits,
    has_fraction,
    last_two_digits,
)


class PluralParadigm(NamedTuple):
    """Ordered word forms for 1 / 2-4 / 0,5+ plus an invariant stem.

    Examples:
        >>> PluralParadigm("у", "ы", "", stem="секунд")
        >>> PluralParadigm("день", "дня", "дней")
    """

    one: str
    few: str
    many: str
    stem: str = ""


def as_paradigm(paradigm: Union[PluralParadigm, Sequence[str]]) -> PluralParadigm:
    """
    Validate and convert a paradigm.

    Args:
        paradigm: PluralParadigm or an ordered 3-element sequence of strings

    Returns:
        PluralParadigm

    Raises:
        InvalidArgumentError: If paradigm is not an ordered 3-element sequence

    Examples:
        >>> as_paradigm(["рубль", "рубля", "рублей"])
        PluralParadigm(one='рубль', few='рубля', many='рублей', stem='')
    """
    if isinstance(paradigm, PluralParadigm):
        return paradigm

    if isinstance(paradigm, (str, bytes, set, dict)) or not isinstance(paradigm, Sequence):
        raise InvalidArgumentError(
            f"Pluralization paradigm must be an ordered list of 3 forms, got {type(paradigm).__name__}"
        )

    if len(paradigm) != 3:
        raise InvalidArgumentError(
            f"Pluralization paradigm must have exactly 3 forms, got {len(paradigm)}"
        )

    forms = [str(form) for form in paradigm]
    return PluralParadigm(forms[0], forms[1], forms[2])


def select_form(
    count,
    paradigm: Union[PluralParadigm, Sequence[str]],
    with_number: bool = False,
    stem: Optional[str] = None,
) -> str:
    """
    Select the word form agreeing with a numeral.

    Selection rules (d1 = last digit, d2 = second-to-last digit or 0):
      1. Numeral with a decimal separator -> "few" form
      2. d1 == 1 and d2 != 1 -> "one" form (1, 21, 101)
      3. d1 in {2, 3, 4} and d2 != 1 -> "few" form (2, 23, 104)
      4. Everything else -> "many" form (0, 5, 11-14, 25)

    Args:
        count: Numeral, numeric string, or countable value (see coerce_numeral)
        paradigm: PluralParadigm or ordered (one, few, many) sequence
        with_number: Prefix the grouped numeral and a no-break space
        stem: Invariant stem put before the form (overrides paradigm.stem)

    Returns:
        Word form, optionally prefixed by the numeral

    Raises:
        InvalidArgumentError: If count is not coercible or paradigm malformed

    Examples:
        >>> select_form(21, ["рубль", "рубля", "рублей"])
        'рубль'

        >>> select_form(12, ["у", "ы", ""], stem="минут")
        'минут'

        >>> select_form(1500, ["день", "дня", "дней"], with_number=True)
        '1 500 дней'
    """
    forms = as_paradigm(paradigm)
    numeral = coerce_numeral(count)
    before_last, last = last_two_digits(numeral)

    if has_fraction(numeral):
        word = forms.few
    elif last == 1 and before_last != 1:
        word = forms.one
    elif last in (2, 3, 4) and before_last != 1:
        word = forms.few
    else:
        word = forms.many

    text = ""
    if with_number:
        text = group_digits(numeral) + NUMBER_SPACE

    text = text + (stem if stem is not None else forms.stem)

    return text + word


def paradigm_for(unit: str, locale=None) -> PluralParadigm:
    """
    Get the locale paradigm of a time unit.

    Args:
        unit: Unit name ('seconds', 'hours', 'centuries', ...)
        locale: LocaleTable (default: configured locale)

    Returns:
        PluralParadigm for the unit

    Examples:
        >>> paradigm_for("hours")
        PluralParadigm(one='', few='а', many='ов', stem='час')
    """
    from timephrase.locales.localeapi import resolve_locale

    return resolve_locale(locale).paradigm(unit)


def pluralize_unit(count, unit: str, locale=None, with_number: bool = True) -> str:
    """
    Pluralize a time unit with its numeral.

    Examples:
        >>> pluralize_unit(2, "hours")
        '2 часа'

        >>> pluralize_unit(5, "years")
        '5 лет'
    """
    return select_form(count, paradigm_for(unit, locale), with_number=with_number)


__all__ = [
    "PluralParadigm",
    "as_paradigm",
    "select_form",
    "paradigm_for",
    "pluralize_unit",
]

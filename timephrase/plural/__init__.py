"""Plural module for numeral agreement.

Public API:
    select_form(count, paradigm, with_number=False, stem=None) -> str
        Choose the word form agreeing with a numeral

    pluralize_unit(count, unit, locale=None) -> str
        Pluralize a time unit ("2 часа", "5 лет")

Examples:
    >>> from timephrase.plural import select_form
    >>> select_form(1, ["рубль", "рубля", "рублей"])
    'рубль'
    >>> select_form(11, ["рубль", "рубля", "рублей"])
    'рублей'
    >>> select_form(22, ["рубль", "рубля", "рублей"], with_number=True)
    '22 рубля'
"""

from timephrase.plural.pluralapi import (
    PluralParadigm,
    as_paradigm,
    select_form,
    paradigm_for,
    pluralize_unit,
)

__all__ = [
    "PluralParadigm",
    "as_paradigm",
    "select_form",
    "paradigm_for",
    "pluralize_unit",
]

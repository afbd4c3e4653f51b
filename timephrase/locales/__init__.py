"""Locales module: injectable month/weekday names, paradigms and phrases.

Public API:
    load_locale(code="ru", path=None) -> LocaleTable
        Load packaged (or overridden) tables, cached per process

    resolve_locale(locale=None, settings=None) -> LocaleTable
        Accept a table, a code, or fall back to the configured locale

Examples:
    >>> from timephrase.locales import load_locale
    >>> ru = load_locale("ru")
    >>> ru.weekday_name(3)
    'среда'
    >>> ru.weekday_name(3, accusative=True)
    'среду'
"""

from timephrase.locales.localeapi import (
    NBSP,
    UNIT_NAMES,
    LocaleTable,
    load_locale,
    resolve_locale,
    clear_cache,
)

__all__ = [
    "NBSP",
    "UNIT_NAMES",
    "LocaleTable",
    "load_locale",
    "resolve_locale",
    "clear_cache",
]

"""Locale tables API.

Month and weekday names, numeral paradigms and phrase templates used by the
formatters. Tables are injectable: pass a ``LocaleTable`` built with
``LocaleTable.from_mapping()`` or point ``Settings.locale_path`` to a
directory laid out like the packaged ``data/ru/``:

    <locale>/months.csv     month,nominative,genitive,short
    <locale>/weekdays.csv   iso_day,nominative,accusative,short
    <locale>/locale.yaml    paradigms + phrases

In phrase templates "~" stands for a no-break space.
"""

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from timephrase.config import Settings, resolve_settings
from timephrase.errors import InvalidArgumentError
from timephrase.plural.pluralapi import PluralParadigm, as_paradigm
from timephrase.utils.dataloader import (
    find_data_file,
    format_not_found_error,
    load_csv_table,
    load_yaml_file,
)

logger = logging.getLogger(__name__)

NBSP = "\u00a0"

UNIT_NAMES = (
    "microseconds",
    "seconds",
    "minutes",
    "hours",
    "days",
    "months",
    "years",
    "centuries",
    "millennia",
)


def _expand_template(value):
    """Replace "~" by a no-break space in a template or a past/future pair."""
    if isinstance(value, dict):
        return {key: _expand_template(item) for key, item in value.items()}
    return str(value).replace("~", NBSP)


@dataclass(frozen=True, eq=False)
class LocaleTable:
    """Names, paradigms and phrase templates of one locale."""

    code: str
    months_nominative: Tuple[str, ...]
    months_genitive: Tuple[str, ...]
    months_short: Tuple[str, ...]
    weekdays_nominative: Tuple[str, ...]
    weekdays_accusative: Tuple[str, ...]
    weekdays_short: Tuple[str, ...]
    paradigms: Dict[str, PluralParadigm] = field(default_factory=dict)
    phrases: Dict[str, Union[str, Dict[str, str]]] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: dict) -> "LocaleTable":
        """
        Build a locale table from plain data.

        Args:
            data: Mapping with keys code, months (list of
                  {nominative, genitive, short}), weekdays (Monday first, list of
                  {nominative, accusative, short}), paradigms ({unit: {stem, forms}})
                  and phrases ({key: template or {past, future}})

        Returns:
            Validated LocaleTable

        Raises:
            InvalidArgumentError: If a table has the wrong shape
        """
        months = list(data.get("months") or [])
        weekdays = list(data.get("weekdays") or [])

        if len(months) != 12:
            raise InvalidArgumentError(f"Locale needs 12 months, got {len(months)}")
        if len(weekdays) != 7:
            raise InvalidArgumentError(f"Locale needs 7 weekdays, got {len(weekdays)}")

        paradigms = {}
        for unit, entry in (data.get("paradigms") or {}).items():
            if not isinstance(entry, dict) or "forms" not in entry:
                raise InvalidArgumentError(f"Paradigm for '{unit}' needs a 'forms' list")
            forms = as_paradigm(entry["forms"])
            paradigms[unit] = forms._replace(stem=str(entry.get("stem") or ""))

        missing = [unit for unit in UNIT_NAMES if unit not in paradigms]
        if missing:
            raise InvalidArgumentError(f"Locale is missing paradigms for: {missing}")

        phrases = {
            key: _expand_template(value)
            for key, value in (data.get("phrases") or {}).items()
        }

        return cls(
            code=str(data.get("code") or "custom"),
            months_nominative=tuple(str(m["nominative"]) for m in months),
            months_genitive=tuple(str(m.get("genitive") or m["nominative"]) for m in months),
            months_short=tuple(str(m.get("short") or m["nominative"]) for m in months),
            weekdays_nominative=tuple(str(d["nominative"]) for d in weekdays),
            weekdays_accusative=tuple(str(d.get("accusative") or d["nominative"]) for d in weekdays),
            weekdays_short=tuple(str(d.get("short") or d["nominative"]) for d in weekdays),
            paradigms=paradigms,
            phrases=phrases,
        )

    def month_name(self, month: int, genitive: bool = False) -> str:
        """Month name, 1-12 ("Январь" or, genitive, "января")."""
        names = self.months_genitive if genitive else self.months_nominative
        return names[month - 1]

    def month_short(self, month: int) -> str:
        return self.months_short[month - 1]

    def weekday_name(self, iso_day: int, accusative: bool = False) -> str:
        """Weekday name, 1 (Monday) - 7 (Sunday)."""
        names = self.weekdays_accusative if accusative else self.weekdays_nominative
        return names[iso_day - 1]

    def weekday_short(self, iso_day: int) -> str:
        return self.weekdays_short[iso_day - 1]

    def paradigm(self, unit: str) -> PluralParadigm:
        """
        Paradigm of a time unit.

        Raises:
            InvalidArgumentError: If the unit is unknown
        """
        try:
            return self.paradigms[unit]
        except KeyError:
            raise InvalidArgumentError(
                f"Unknown time unit '{unit}'. Use one of: {', '.join(UNIT_NAMES)}"
            ) from None

    def phrase(self, key: str, **values) -> str:
        """
        Render a phrase template.

        Examples:
            >>> load_locale("ru").phrase("time_at", time="9:05:00")
            'в 9:05:00'
        """
        template = self.phrases.get(key)
        if template is None:
            raise InvalidArgumentError(f"Locale '{self.code}' has no phrase '{key}'")
        if isinstance(template, dict):
            raise InvalidArgumentError(
                f"Phrase '{key}' depends on direction, use directional()"
            )
        return template.format(**values) if values else template

    def directional(self, key: str, was_past: bool) -> str:
        """Render a phrase that has separate past and future forms."""
        template = self.phrases.get(key)
        if not isinstance(template, dict):
            raise InvalidArgumentError(f"Locale '{self.code}' has no directional phrase '{key}'")
        return template["past" if was_past else "future"]

    def wrap(self, phrase: str, was_past: bool) -> str:
        """
        Apply the direction wording.

        Examples:
            >>> load_locale("ru").wrap("2 часа", was_past=True)
            '2 часа назад'
        """
        return self.phrase("past" if was_past else "future", phrase=phrase)

    def join_and(self, left: str, right: str) -> str:
        """Join two phrase parts with the locale's "and"."""
        return self.phrase("and", left=left, right=right)


@lru_cache(maxsize=8)
def load_locale(code: str = "ru", path: Optional[str] = None) -> LocaleTable:
    """Load a locale table into memory.

    Uses LRU cache to load each locale once and reuse it.

    Args:
        code: Locale code (directory name, e.g. 'ru')
        path: Optional directory searched before the packaged data

    Returns:
        LocaleTable for the locale

    Raises:
        FileNotFoundError: If one of the table files cannot be found
        InvalidArgumentError: If a table has the wrong shape

    Examples:
        >>> table = load_locale("ru")
        >>> table.month_name(1, genitive=True)
        'января'
    """
    found = {}
    for filename in ("months.csv", "weekdays.csv", "locale.yaml"):
        found_path = find_data_file(
            module_file=__file__,
            subdirectory=code,
            filenames=[filename],
            override_dir=path,
        )

        if found_path is None:
            error_msg = format_not_found_error(
                subdirectory=code,
                searched_locations=[
                    ("Override directory", Path(path) / code if path else "Not provided"),
                    ("Package data", Path(__file__).parent / "data" / code),
                ],
                fix_instructions=[
                    f"Create {code}/{filename} next to the other locale tables.",
                    "Or set TIMEPHRASE_LOCALE_PATH to a directory containing it.",
                ],
            )
            raise FileNotFoundError(error_msg)

        found[filename] = found_path

    months_df = load_csv_table(found["months.csv"]).sort_values(
        "month", key=lambda col: col.astype(int)
    )
    weekdays_df = load_csv_table(found["weekdays.csv"]).sort_values(
        "iso_day", key=lambda col: col.astype(int)
    )
    config = load_yaml_file(found["locale.yaml"])

    table = LocaleTable.from_mapping({
        "code": config.get("code", code),
        "months": months_df.to_dict("records"),
        "weekdays": weekdays_df.to_dict("records"),
        "paradigms": config.get("paradigms"),
        "phrases": config.get("phrases"),
    })

    logger.info(f"Loaded locale '{table.code}' from {found['locale.yaml'].parent}")
    return table


def resolve_locale(
    locale: Union[LocaleTable, str, None] = None,
    settings: Optional[Settings] = None,
) -> LocaleTable:
    """
    Return a LocaleTable for a table, a code, or the configured default.

    Examples:
        >>> resolve_locale().code
        'ru'
    """
    if isinstance(locale, LocaleTable):
        return locale

    settings = resolve_settings(settings)
    return load_locale(locale or settings.locale, settings.locale_path)


def clear_cache():
    """Clear the LRU cache for load_locale.

    Useful for testing or when locale tables change on disk.
    """
    load_locale.cache_clear()
    logger.info("Cleared locale loader cache")


__all__ = [
    "NBSP",
    "UNIT_NAMES",
    "LocaleTable",
    "load_locale",
    "resolve_locale",
    "clear_cache",
]

"""Runtime settings.

Settings are resolved once from the environment and can always be overridden
by passing an explicit ``Settings`` object to the public functions.

Environment variables:
  - TIMEPHRASE_TIMEZONE: default timezone name (default: Europe/Moscow)
  - TIMEPHRASE_WITH_MICRO: track microseconds when reading the clock (default: off)
  - TIMEPHRASE_LOCALE: locale code of the phrase tables (default: ru)
  - TIMEPHRASE_LOCALE_PATH: directory with locale tables overriding package data
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE_NAME = "Europe/Moscow"
DEFAULT_LOCALE = "ru"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Explicit configuration threaded through constructors and formatters.

    Attributes:
        timezone: Timezone name used for naive input and for the clock
        with_micro: Keep microseconds when reading the wall clock and compare
                    instants with microsecond precision
        locale: Locale code of the month/weekday/phrase tables
        locale_path: Optional directory holding ``<locale>/`` table folders
    """

    timezone: str = DEFAULT_TIMEZONE_NAME
    with_micro: bool = False
    locale: str = DEFAULT_LOCALE
    locale_path: Optional[str] = None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Read settings from the environment (cached for the process).

    Returns:
        Settings built from TIMEPHRASE_* variables, defaults otherwise

    Examples:
        >>> get_settings().timezone
        'Europe/Moscow'
    """
    with_micro_raw = os.environ.get("TIMEPHRASE_WITH_MICRO", "")
    settings = Settings(
        timezone=os.environ.get("TIMEPHRASE_TIMEZONE") or DEFAULT_TIMEZONE_NAME,
        with_micro=with_micro_raw.strip().lower() in _TRUTHY,
        locale=os.environ.get("TIMEPHRASE_LOCALE") or DEFAULT_LOCALE,
        locale_path=os.environ.get("TIMEPHRASE_LOCALE_PATH") or None,
    )
    logger.debug(f"Resolved settings: {settings}")
    return settings


def resolve_settings(settings: Optional[Settings] = None) -> Settings:
    """Return ``settings`` or the environment defaults."""
    return settings if settings is not None else get_settings()


def clear_settings_cache():
    """Clear the cached environment settings.

    Useful for testing when TIMEPHRASE_* variables change.
    """
    get_settings.cache_clear()


__all__ = [
    "Settings",
    "get_settings",
    "resolve_settings",
    "clear_settings_cache",
    "DEFAULT_TIMEZONE_NAME",
    "DEFAULT_LOCALE",
]

"""Shared test fixtures and utilities for timephrase tests."""

import pytest

from timephrase.config import Settings, clear_settings_cache
from timephrase.locales.localeapi import clear_cache, load_locale


def _plain(text):
    if text is None:
        return None
    return text.replace("\u00a0", " ").replace("\u2005", " ")


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    """Isolate tests from TIMEPHRASE_* variables of the calling shell."""
    for name in ("TIMEPHRASE_TIMEZONE", "TIMEPHRASE_WITH_MICRO", "TIMEPHRASE_LOCALE", "TIMEPHRASE_LOCALE_PATH"):
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def plain():
    """Replace no-break (U+00A0) and digit-group (U+2005) spaces by plain spaces.

    Phrases glue words with no-break spaces; tests compare against readable
    strings.

    Example:
        def test_yesterday(plain):
            assert plain(smart(...)) == "вчера, 9 января в 12:00 (вторник)"
    """
    return _plain


@pytest.fixture
def ru():
    """Russian locale table from the package data."""
    clear_cache()
    return load_locale("ru")


@pytest.fixture
def moscow():
    """Default settings spelled out."""
    return Settings(timezone="Europe/Moscow", with_micro=False, locale="ru")


@pytest.fixture
def utc_settings():
    """Settings with UTC as the default timezone."""
    return Settings(timezone="UTC")


@pytest.fixture
def now():
    """Fixed wall clock: Wednesday 2024-01-10 12:00:00 Moscow time."""
    return "2024-01-10 12:00:00"

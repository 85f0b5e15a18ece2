"""Locale code utilities.

Centralizes locale normalization used throughout the codebase. All locale
handling normalizes at the system boundary (entry point) with
normalize_locale(), then uses the normalized form for table keys, directory
names and load-state bookkeeping.

Python 3.13+.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "clear_locale_cache",
    "get_babel_locale",
    "normalize_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Normalize a locale code for table and directory lookups.

    Locale directories on disk are named by lowercase code, and BCP-47 is
    case-insensitive, so "en-US" and "EN-us" address the same locale.

    Args:
        locale_code: Locale code (e.g., "en-US", "pt-BR", "de")

    Returns:
        Lowercase code with surrounding whitespace removed

    Example:
        >>> normalize_locale("en-US")
        'en-us'
        >>> normalize_locale(" DE ")
        'de'
    """
    return locale_code.strip().lower()


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object for a locale code, with caching.

    Babel is imported on first use. Useful for callers that want CLDR metadata
    (display names, text direction) for a locale the localizer serves.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale code in the localizer's form ("en-us") or POSIX ("en_US")

    Returns:
        Babel Locale object

    Raises:
        ImportError: If Babel is not installed
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid

    Example:
        >>> locale = get_babel_locale("en-us")
        >>> locale.language
        'en'
        >>> locale.territory
        'US'
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(locale_code.strip(), sep="-" if "-" in locale_code else "_")


def clear_locale_cache() -> None:
    """Clear the Babel Locale cache."""
    get_babel_locale.cache_clear()

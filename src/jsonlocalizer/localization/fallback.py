"""Locale fallback chains.

Two chains are derived from a requested locale and the configured default
locale:

- load_set(): every locale that must be loaded before a lookup against the
  requested locale can be answered. Always starts with the baseline "en".
- probe_order(): the locales one lookup checks, in order, stopping at the
  first hit. Regional variant -> its base language -> default locale ->
  default's base language.

Both functions are pure; callers pass already-normalized codes.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from jsonlocalizer.constants import BASELINE_LOCALE, LOCALE_DELIMITER
from jsonlocalizer.localization.types import LocaleCode

__all__ = [
    "base_language",
    "load_set",
    "probe_order",
]


def base_language(code: LocaleCode, default_locale: LocaleCode) -> LocaleCode:
    """Get the base language of a locale code.

    Args:
        code: Normalized locale code (e.g., 'en-us')
        default_locale: Current default locale

    Returns:
        Substring before the first delimiter ('en' for 'en-us'). Codes
        without a delimiter, and empty codes, collapse to default_locale.

    Example:
        >>> base_language("pt-br", "en")
        'pt'
        >>> base_language("pt", "de")
        'de'
    """
    if code:
        language, sep, _ = code.partition(LOCALE_DELIMITER)
        if sep:
            return language
    return default_locale


def load_set(requested: LocaleCode, default_locale: LocaleCode) -> tuple[LocaleCode, ...]:
    """Locales to load before serving lookups for requested.

    Args:
        requested: Normalized requested locale
        default_locale: Normalized default locale

    Returns:
        One to five distinct codes, baseline first

    Example:
        >>> load_set("fr-ca", "de-at")
        ('en', 'de', 'de-at', 'fr', 'fr-ca')
    """
    fb_default = base_language(default_locale, default_locale)
    fb_requested = base_language(requested, default_locale)

    locales = [BASELINE_LOCALE]
    if fb_default != BASELINE_LOCALE:
        locales.append(fb_default)
    if default_locale != fb_default:
        locales.append(default_locale)
    if fb_requested != fb_default:
        locales.append(fb_requested)
    if requested != fb_requested:
        locales.append(requested)
    # dict.fromkeys() removes duplicates while maintaining insertion order
    return tuple(dict.fromkeys(locales))


def probe_order(requested: LocaleCode, default_locale: LocaleCode) -> tuple[LocaleCode, ...]:
    """Locales checked, in order, by a single lookup.

    Args:
        requested: Normalized requested locale
        default_locale: Normalized default locale

    Returns:
        requested, its base language, the default, the default's base
        language; each step only when it differs from its predecessor
        as described in the module docstring

    Example:
        >>> probe_order("en-gb", "fr-ca")
        ('en-gb', 'en', 'fr-ca', 'fr')
    """
    fb_requested = base_language(requested, default_locale)
    fb_default = base_language(default_locale, default_locale)

    probes = [requested]
    if fb_requested != requested:
        probes.append(fb_requested)
    if default_locale != requested:
        probes.append(default_locale)
    if fb_default != default_locale:
        probes.append(fb_default)
    return tuple(probes)

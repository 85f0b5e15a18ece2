"""Shared constants for jsonlocalizer.

Centralizes the delimiters, reserved names and limits used by the key codec,
the fallback resolver and the bundle loader. Placing them here avoids circular
imports between the localization submodules.

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locales
    "BASELINE_LOCALE",
    "LOCALE_DELIMITER",
    # Keys
    "NAMESPACE_DELIMITER",
    "ESCAPED_NAMESPACE_DELIMITER",
    # Bundle files
    "BUNDLE_SUFFIX",
    "INDEX_NAMESPACE",
    "DEFAULT_ENCODING",
    "MAX_BUNDLE_SIZE",
    "DEFAULT_MAX_WORKERS",
    # Loader results
    "NOT_FOUND_SENTINEL",
]

# ============================================================================
# LOCALES
# ============================================================================

# Always loaded and always the last resort of the fallback chain.
BASELINE_LOCALE: str = "en"

# Separates language from region ("en-us"). Only the first occurrence counts.
LOCALE_DELIMITER: str = "-"

# ============================================================================
# KEYS
# ============================================================================

NAMESPACE_DELIMITER: str = ":"

# Substituted for NAMESPACE_DELIMITER inside message ids.
ESCAPED_NAMESPACE_DELIMITER: str = "--"

# ============================================================================
# BUNDLE FILES
# ============================================================================

BUNDLE_SUFFIX: str = ".json"

# A bundle file with this base name contributes global (un-namespaced) keys.
INDEX_NAMESPACE: str = "index"

DEFAULT_ENCODING: str = "utf-8"

# Bundle files larger than this are rejected as unparseable (10 MiB).
MAX_BUNDLE_SIZE: int = 10 * 1024 * 1024

# Upper bound on threads used to parse the files of one locale directory.
DEFAULT_MAX_WORKERS: int = 4

# ============================================================================
# LOADER RESULTS
# ============================================================================

# Returned by PathLoader.merge_from_path when <search path>/<locale>/ is absent.
NOT_FOUND_SENTINEL: int = -1

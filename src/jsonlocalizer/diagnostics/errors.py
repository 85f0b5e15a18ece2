"""Localizer exception hierarchy.

Hierarchy:
    LocalizerError (base)
    ├─ LocaleLoadError (locale directory could not be listed; fails the locale)
    └─ BundleParseError (one bundle file is unusable; isolated to that file)

A missing locale directory is not an exception: the loader reports it with
NOT_FOUND_SENTINEL. Lookups never raise.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

__all__ = [
    "BundleParseError",
    "LocaleLoadError",
    "LocalizerError",
]


class LocalizerError(Exception):
    """Base exception for all localizer errors.

    Attributes:
        locale: Locale code being processed when the error occurred
        path: Filesystem path involved, if any
    """

    def __init__(self, message: str, *, locale: str = "", path: str | None = None) -> None:
        """Initialize LocalizerError.

        Args:
            message: Human-readable error message
            locale: Locale code being processed
            path: Directory or file path involved
        """
        super().__init__(message)
        self.locale = locale
        self.path = path


class LocaleLoadError(LocalizerError):
    """Loading a locale failed for a reason other than a missing directory.

    Raised when a locale directory exists but cannot be listed. Marks the
    locale as failed; every thread waiting on that locale's load receives
    the same instance.
    """


class BundleParseError(LocalizerError):
    """A bundle file could not be read or does not have the expected shape.

    Expected shape: a flat JSON object mapping message id to a string or to
    a non-empty array of strings. The loader logs the error, drops the
    file's contribution and continues with the remaining files.
    """

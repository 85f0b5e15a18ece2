"""Enumerations for jsonlocalizer type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class LoadState(StrEnum):
    """Lifecycle of one locale inside the BundleStore.

    StrEnum provides automatic string conversion: str(LoadState.LOADED) == "loaded"
    """

    UNLOADED = "unloaded"
    """No load has been requested for the locale."""

    LOADING = "loading"
    """A single load is in flight; concurrent requesters wait on it."""

    LOADED = "loaded"
    """Terminal success: the merged table is published and immutable."""

    FAILED = "failed"
    """Terminal failure: the table is discarded, reads return nothing."""


class LoadStatus(StrEnum):
    """Outcome of loading one search path or one bundle file.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """Content was read and merged."""

    NOT_FOUND = "not_found"
    """The locale directory does not exist under the search path."""

    ERROR = "error"
    """Reading or parsing failed."""


__all__ = [
    "LoadState",
    "LoadStatus",
]

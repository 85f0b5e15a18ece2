"""Per-locale bundle cache with shared, at-most-once loading.

BundleStore owns every locale table and its load state. A locale moves
through UNLOADED -> LOADING -> LOADED | FAILED exactly once:

- The first thread to request an unloaded locale becomes the loader. It
  creates a Future, marks the locale LOADING and merges every search path
  into a private table, strictly one path after another.
- Threads requesting the same locale while it is LOADING wait on that
  Future and observe the same outcome, success or exception.
- Only after the last path is merged is the table published (as a read-only
  mapping) and the state set to LOADED. Readers therefore see either no
  table or a complete one.
- FAILED is terminal: the table is discarded and later requests re-raise the
  recorded LocaleLoadError. A load interrupted by KeyboardInterrupt or
  SystemExit also ends FAILED before the interrupt propagates.

Reads never perform I/O and never block on a load in progress.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from jsonlocalizer.diagnostics import LocaleLoadError
from jsonlocalizer.enums import LoadState
from jsonlocalizer.locale_utils import normalize_locale
from jsonlocalizer.localization.loading import LoadSummary, PathLoader, PathLoadResult

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from jsonlocalizer.localization.types import LocaleCode, SearchPath, TableKey
    from jsonlocalizer.localization.values import BundleValue

__all__ = ["BundleStore"]

logger = logging.getLogger(__name__)


@dataclass(slots=True, eq=False)
class _LocaleEntry:
    """Load state, completion handle and (once loaded) table for one locale."""

    state: LoadState
    done: Future[LoadSummary] = field(default_factory=Future)
    table: Mapping[TableKey, BundleValue] | None = None
    summary: LoadSummary | None = None


class BundleStore:
    """In-memory locale -> merged table cache.

    Thread Safety:
        A mutex guards the locale -> entry map and state transitions. Loading
        runs outside the mutex on the requesting thread; other requesters for
        the same locale wait on the entry's Future. Different locales load
        independently and concurrently.

    Example:
        >>> store = BundleStore(["libs/core/locale", "app/locale"])
        >>> store.ensure_loaded("en")
        >>> store.read("en", "greeting")
        SingleValue(text='Hello')
    """

    __slots__ = ("_entries", "_loader", "_lock", "_search_paths")

    def __init__(
        self,
        search_paths: Iterable[SearchPath],
        loader: PathLoader | None = None,
    ) -> None:
        """Initialize store.

        Args:
            search_paths: Search path roots, lowest precedence first
            loader: Path loader (default: filesystem PathLoader)
        """
        self._search_paths: tuple[SearchPath, ...] = tuple(search_paths)
        self._loader = loader if loader is not None else PathLoader()
        self._entries: dict[LocaleCode, _LocaleEntry] = {}
        self._lock = threading.Lock()

    @property
    def search_paths(self) -> tuple[SearchPath, ...]:
        """Search paths in merge order (read-only)."""
        return self._search_paths

    @property
    def loaded_locales(self) -> tuple[LocaleCode, ...]:
        """Locales that reached LOADED, in request order."""
        with self._lock:
            return tuple(
                code for code, entry in self._entries.items() if entry.state == LoadState.LOADED
            )

    @staticmethod
    def _validate_locale(locale: LocaleCode) -> None:
        """Reject locale codes that cannot name a locale directory.

        Raises:
            ValueError: If locale is empty or contains path components
        """
        if not locale:
            msg = "Locale code cannot be empty"
            raise ValueError(msg)
        if ".." in locale:
            msg = f"Path traversal sequences not allowed in locale: '{locale}'"
            raise ValueError(msg)
        if locale == "." or Path(locale).name != locale or "\\" in locale:
            msg = f"Locale must be a single path component, not allowed: '{locale}'"
            raise ValueError(msg)

    def ensure_loaded(self, locale: LocaleCode) -> LoadSummary:
        """Load a locale's bundles from every search path, at most once.

        Args:
            locale: Locale code (normalized here)

        Returns:
            Summary of the (shared) load

        Raises:
            LocaleLoadError: If the load failed, now or in an earlier call
            ValueError: If the locale code is empty or contains path components
        """
        code = normalize_locale(locale)
        self._validate_locale(code)

        with self._lock:
            entry = self._entries.get(code)
            is_owner = entry is None
            if entry is None:
                entry = _LocaleEntry(LoadState.LOADING)
                self._entries[code] = entry

        if is_owner:
            self._load(code, entry)
        else:
            logger.debug("localizer.load(%s) - Waiting on shared load", code)
        return entry.done.result()

    def _load(self, locale: LocaleCode, entry: _LocaleEntry) -> None:
        """Merge all search paths into a new table and publish it."""
        logger.debug(
            "localizer.load(%s) - Loading from %d search paths", locale, len(self._search_paths)
        )
        table: dict[TableKey, BundleValue] = {}
        results: list[PathLoadResult] = []
        try:
            for search_path in self._search_paths:
                results.append(self._loader.load_path(locale, search_path, table))
        except LocaleLoadError as e:
            self._fail(locale, entry, e)
            return
        except Exception as e:  # noqa: BLE001 - waiters must always be released
            msg = f"Unexpected error loading locale '{locale}': {e}"
            error = LocaleLoadError(msg, locale=locale)
            error.__cause__ = e
            self._fail(locale, entry, error)
            return
        except BaseException as e:
            msg = f"Load of locale '{locale}' was interrupted: {e!r}"
            error = LocaleLoadError(msg, locale=locale)
            error.__cause__ = e
            self._fail(locale, entry, error)
            raise

        summary = LoadSummary(locale=locale, results=tuple(results))
        with self._lock:
            entry.table = MappingProxyType(table)
            entry.summary = summary
            entry.state = LoadState.LOADED
        logger.debug("localizer.load(%s) - Loaded %d entries", locale, len(table))
        entry.done.set_result(summary)

    def _fail(self, locale: LocaleCode, entry: _LocaleEntry, error: LocaleLoadError) -> None:
        with self._lock:
            entry.state = LoadState.FAILED
        logger.error("localizer.load(%s) - Error: %s", locale, error)
        entry.done.set_exception(error)

    def read(self, locale: LocaleCode, key: TableKey) -> BundleValue | None:
        """Look up a key in a loaded locale table.

        Never performs I/O.

        Args:
            locale: Locale code
            key: Table key from create_key()

        Returns:
            Stored value, or None if the locale is not loaded (never
            requested, still loading, failed) or the key is absent
        """
        entry = self._entries.get(normalize_locale(locale))
        if entry is None:
            return None
        table = entry.table
        if table is None:
            return None
        return table.get(key)

    def get_state(self, locale: LocaleCode) -> LoadState:
        """Current load state of a locale."""
        with self._lock:
            entry = self._entries.get(normalize_locale(locale))
            return entry.state if entry is not None else LoadState.UNLOADED

    def get_load_summary(self, locale: LocaleCode) -> LoadSummary | None:
        """Summary of a completed load, or None if not LOADED."""
        entry = self._entries.get(normalize_locale(locale))
        return entry.summary if entry is not None else None

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"BundleStore(search_paths={len(self._search_paths)}, "
            f"loaded={len(self.loaded_locales)})"
        )

"""Localizer: fallback-aware message lookup over layered JSON bundles.

Key architectural decisions:
- Search paths computed once at construction from the library tree
- Lazy per-locale loading: callers load() a locale before looking it up;
  lookups themselves never perform I/O
- Fallback chain derived from the requested locale and a mutable default
  locale: regional variant -> base language -> default -> default's base
- List-valued messages resolve to a random alternative on every lookup
- Lookups never raise; the message id is the translation of last resort

Python 3.13+.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING

from jsonlocalizer.constants import BASELINE_LOCALE
from jsonlocalizer.keys import create_key
from jsonlocalizer.locale_utils import get_babel_locale, normalize_locale
from jsonlocalizer.localization.fallback import load_set, probe_order
from jsonlocalizer.localization.library import collect_search_paths
from jsonlocalizer.localization.loading import PathLoader
from jsonlocalizer.localization.store import BundleStore

if TYPE_CHECKING:
    from collections.abc import Callable

    from babel import Locale

    from jsonlocalizer.config import LocalizerConfig
    from jsonlocalizer.enums import LoadState
    from jsonlocalizer.localization.library import Library
    from jsonlocalizer.localization.loading import BundleStorage, LoadSummary
    from jsonlocalizer.localization.types import LocaleCode, MessageId, Namespace, SearchPath

__all__ = ["FallbackInfo", "Localizer"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """Information about a locale fallback event.

    Provided to the on_fallback callback when a message is resolved from a
    locale other than the one requested.

    Attributes:
        requested_locale: The normalized locale passed to the lookup
        resolved_locale: The locale that actually contained the message
        message_id: The message identifier that was resolved
        namespace: The namespace of the lookup, if any

    Example:
        >>> def log_fallback(info: FallbackInfo) -> None:
        ...     print(f"Fallback: {info.message_id} resolved from "
        ...           f"{info.resolved_locale} (requested {info.requested_locale})")
        >>> localizer = Localizer(root, on_fallback=log_fallback)
    """

    requested_locale: LocaleCode
    resolved_locale: LocaleCode
    message_id: MessageId
    namespace: Namespace | None = None


class Localizer:
    """Message lookup with locale fallback over a library tree's bundles.

    Every library in the tree may ship a locale directory laid out as
    ``<locale path>/<locale>/<namespace>.json``. Bundles from all libraries are
    merged per locale; the application's own (root) library wins collisions.

    Example:
        >>> app = LibraryNode("app", "locale", [LibraryNode("prompts", "libs/prompts")])
        >>> localizer = Localizer(app, default_locale="en")
        >>> localizer.load("en-GB")
        >>> localizer.gettext("en-GB", "welcome")
        'Hello!'
        >>> localizer.ngettext("en-GB", "item", "items", 3, "cart")
        'You have several items'

    Attributes:
        default_locale: Default locale; reassignable at runtime
    """

    __slots__ = ("_default_locale", "_on_fallback", "_rng", "_store")

    def __init__(
        self,
        root: Library,
        default_locale: LocaleCode = BASELINE_LOCALE,
        *,
        config: LocalizerConfig | None = None,
        storage: BundleStorage | None = None,
        rng: random.Random | None = None,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> None:
        """Initialize localizer.

        Args:
            root: Top-level library; its tree is walked once for search paths
            default_locale: Default locale (default: "en")
            config: Bundle conventions and limits (default: LocalizerConfig())
            storage: Medium bundles are read from (default: local filesystem)
            rng: Random source for list-valued messages (default: new Random)
            on_fallback: Optional callback invoked when a message resolves from
                a locale other than the requested one

        Raises:
            ValueError: If default_locale is empty
        """
        self._default_locale = BASELINE_LOCALE
        self.default_locale = default_locale
        self._store = BundleStore(
            collect_search_paths(root), PathLoader(storage=storage, config=config)
        )
        self._rng = rng if rng is not None else random.Random()
        self._on_fallback = on_fallback
        logger.debug(
            "Localizer created with %d search paths, default locale %s",
            len(self._store.search_paths),
            self._default_locale,
        )

    @property
    def default_locale(self) -> LocaleCode:
        """Default locale (normalized).

        Reassignment does not reload already-loaded locales; call load() for
        the new default before relying on it.
        """
        return self._default_locale

    @default_locale.setter
    def default_locale(self, locale: LocaleCode) -> None:
        code = normalize_locale(locale)
        if not code:
            msg = "Default locale cannot be empty"
            raise ValueError(msg)
        self._default_locale = code

    @property
    def search_paths(self) -> tuple[SearchPath, ...]:
        """Search paths in merge order, root library last (read-only)."""
        return self._store.search_paths

    @property
    def loaded_locales(self) -> tuple[LocaleCode, ...]:
        """Locales whose bundles are loaded."""
        return self._store.loaded_locales

    def _normalize_request(self, locale: LocaleCode | None) -> LocaleCode:
        code = normalize_locale(locale) if locale else ""
        return code or self._default_locale

    def load(self, locale: LocaleCode | None = None) -> None:
        """Ensure every locale needed to serve lookups for locale is loaded.

        Loads the baseline, the default locale and its base language, and the
        requested locale and its base language. Locales already loaded are
        not re-read; concurrent calls share one load per locale.

        Args:
            locale: Requested locale (default: the default locale)

        Raises:
            LocaleLoadError: If any of those locales failed to load
            ValueError: If a locale code contains path components
        """
        requested = self._normalize_request(locale)
        logger.debug("localizer.load(%s)", requested)
        for code in load_set(requested, self._default_locale):
            self._store.ensure_loaded(code)

    def try_gettext(
        self, locale: LocaleCode | None, msgid: MessageId, ns: Namespace | None = None
    ) -> str | None:
        """Look up a message through the fallback chain.

        Args:
            locale: Requested locale (None/"" means the default locale)
            msgid: Message identifier
            ns: Namespace (bundle file base name), or None for global keys

        Returns:
            Translation from the first locale in the probe order that has the
            key, or None if none has it
        """
        requested = self._normalize_request(locale)
        key = create_key(ns, msgid)
        for code in probe_order(requested, self._default_locale):
            value = self._store.read(code, key)
            if value is not None:
                if code != requested and self._on_fallback is not None:
                    self._on_fallback(FallbackInfo(requested, code, msgid, ns))
                return value.resolve(self._rng)
        return None

    def gettext(
        self, locale: LocaleCode | None, msgid: MessageId, ns: Namespace | None = None
    ) -> str:
        """Look up a message, echoing msgid when no translation exists.

        Returns:
            Translation, or msgid unchanged
        """
        text = self.try_gettext(locale, msgid, ns)
        return text if text is not None else msgid

    def ngettext(
        self,
        locale: LocaleCode | None,
        msgid: MessageId,
        msgid_plural: MessageId,
        count: int,
        ns: Namespace | None = None,
    ) -> str:
        """Look up the singular or plural form of a message.

        Binary policy: count == 1 selects msgid, any other count selects
        msgid_plural.

        Returns:
            Translation of the selected id, or that id unchanged
        """
        return self.gettext(locale, msgid if count == 1 else msgid_plural, ns)

    def has_message(
        self, locale: LocaleCode | None, msgid: MessageId, ns: Namespace | None = None
    ) -> bool:
        """Check if any locale in the probe order has the message."""
        requested = self._normalize_request(locale)
        key = create_key(ns, msgid)
        return any(
            self._store.read(code, key) is not None
            for code in probe_order(requested, self._default_locale)
        )

    def get_load_state(self, locale: LocaleCode) -> LoadState:
        """Load state of a single locale (no fallback)."""
        return self._store.get_state(locale)

    def get_load_summary(self, locale: LocaleCode) -> LoadSummary | None:
        """Per-path and per-file outcomes of a locale's load.

        Returns:
            LoadSummary, or None if the locale has not finished loading
            successfully
        """
        return self._store.get_load_summary(locale)

    def get_babel_locale(self, locale: LocaleCode | None = None) -> Locale:
        """Get the Babel Locale for a locale (default: the default locale).

        Example:
            >>> localizer.get_babel_locale("pt-br").get_display_name("en")
            'Portuguese (Brazil)'
        """
        return get_babel_locale(self._normalize_request(locale))

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"Localizer(default_locale={self._default_locale!r}, "
            f"search_paths={len(self._store.search_paths)}, "
            f"loaded={self._store.loaded_locales!r})"
        )

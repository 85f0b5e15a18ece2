"""Tests for Localizer: loading, fallback lookups, plurals and alternatives.

Uses on-disk bundle trees built in tmp_path and LibraryNode trees pointing
at them.
"""

from __future__ import annotations

import random
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from jsonlocalizer import FallbackInfo, LibraryNode, LocaleLoadError, Localizer
from jsonlocalizer.enums import LoadState


@pytest.fixture
def app_tree(bundle_tree):
    """Core library plus application library with overlapping bundles."""
    bundle_tree.write("core", "en", "index", {"hello": "Hello (core)", "bye": "Goodbye"})
    bundle_tree.write("core", "en", "prompts", {"retry": "Try again", "http:404": "Not found"})
    bundle_tree.write("core", "de", "index", {"bye": "Tschüss"})
    bundle_tree.write("app", "en", "index", {"hello": "Hello"})
    bundle_tree.write("app", "en-gb", "index", {"color": "Colour"})
    bundle_tree.write("app", "en", "cart", {"item": "One item", "items": "Several items"})
    core = LibraryNode("core", bundle_tree.path("core"))
    return LibraryNode("app", bundle_tree.path("app"), [core])


class TestConstruction:
    """Test Localizer construction and configuration."""

    def test_default_locale_defaults_to_baseline(self, app_tree) -> None:
        """Without an explicit default, the default locale is 'en'."""
        assert Localizer(app_tree).default_locale == "en"

    def test_default_locale_normalized(self, app_tree) -> None:
        """Default locale is lowercased."""
        assert Localizer(app_tree, "DE-AT").default_locale == "de-at"

    def test_empty_default_rejected(self, app_tree) -> None:
        """An empty default locale is a configuration error."""
        with pytest.raises(ValueError, match="Default locale cannot be empty"):
            Localizer(app_tree, "")

    def test_search_paths_root_last(self, app_tree, bundle_tree) -> None:
        """Dependencies precede the root library."""
        localizer = Localizer(app_tree)

        assert localizer.search_paths == (bundle_tree.path("core"), bundle_tree.path("app"))

    def test_set_default_locale(self, app_tree) -> None:
        """The default locale can be reassigned and is normalized."""
        localizer = Localizer(app_tree)

        localizer.default_locale = "FR"

        assert localizer.default_locale == "fr"

    def test_repr(self, app_tree) -> None:
        """repr shows default locale and loaded locales."""
        localizer = Localizer(app_tree)
        localizer.load()

        assert repr(localizer) == "Localizer(default_locale='en', search_paths=2, loaded=('en',))"


class TestLoad:
    """Test Localizer.load."""

    def test_load_default(self, app_tree) -> None:
        """Loading without a locale loads the default chain."""
        localizer = Localizer(app_tree, "de")

        localizer.load()

        assert localizer.loaded_locales == ("en", "de")

    def test_load_regional(self, app_tree) -> None:
        """Loading a regional variant also loads its base and the baseline."""
        localizer = Localizer(app_tree)

        localizer.load("en-GB")

        assert localizer.loaded_locales == ("en", "en-gb")
        assert localizer.get_load_state("en-gb") == LoadState.LOADED

    def test_load_missing_locale_succeeds(self, app_tree) -> None:
        """Locales without any bundle directory load as empty tables."""
        localizer = Localizer(app_tree)

        localizer.load("xx-yy")

        assert localizer.get_load_state("xx-yy") == LoadState.LOADED
        summary = localizer.get_load_summary("xx-yy")
        assert summary is not None
        assert summary.paths_found == 0

    def test_load_failure_propagates(self, bundle_tree) -> None:
        """A locale directory that cannot be listed fails load()."""
        (bundle_tree.root / "app").mkdir()
        (bundle_tree.root / "app" / "en").write_text("not a dir", encoding="utf-8")
        localizer = Localizer(LibraryNode("app", bundle_tree.path("app")))

        with pytest.raises(LocaleLoadError):
            localizer.load()

        assert localizer.get_load_state("en") == LoadState.FAILED

    def test_default_change_does_not_reload(self, app_tree) -> None:
        """Reassigning the default leaves loaded locales alone."""
        localizer = Localizer(app_tree)
        localizer.load()

        localizer.default_locale = "de"

        assert localizer.loaded_locales == ("en",)
        assert localizer.get_load_state("de") == LoadState.UNLOADED


class TestGettext:
    """Test lookups through the fallback chain."""

    def test_direct_hit(self, app_tree) -> None:
        """A key in the requested locale is returned."""
        localizer = Localizer(app_tree)
        localizer.load("en-gb")

        assert localizer.gettext("en-gb", "color") == "Colour"

    def test_falls_back_to_base_language(self, app_tree) -> None:
        """Missing in en-gb, present in en."""
        localizer = Localizer(app_tree)
        localizer.load("en-gb")

        assert localizer.gettext("en-gb", "bye") == "Goodbye"

    def test_falls_back_to_default_locale(self, app_tree) -> None:
        """Missing in the requested chain, present in the default."""
        localizer = Localizer(app_tree, "de")
        localizer.load("fr-ca")

        assert localizer.gettext("fr-ca", "bye") == "Tschüss"

    def test_root_library_wins(self, app_tree) -> None:
        """The application's bundle overrides the core library's."""
        localizer = Localizer(app_tree)
        localizer.load()

        assert localizer.gettext("en", "hello") == "Hello"

    def test_missing_everywhere_echoes_msgid(self, app_tree) -> None:
        """No translation anywhere returns the message id verbatim."""
        localizer = Localizer(app_tree)
        localizer.load("en-gb")

        assert localizer.gettext("en-gb", "Unknown Message") == "Unknown Message"
        assert localizer.try_gettext("en-gb", "Unknown Message") is None

    def test_namespaced_lookup(self, app_tree) -> None:
        """Namespace selects the bundle file."""
        localizer = Localizer(app_tree)
        localizer.load()

        assert localizer.gettext("en", "retry", "prompts") == "Try again"
        assert localizer.gettext("en", "retry") == "retry"

    def test_namespace_case_insensitive(self, app_tree) -> None:
        """Namespace and message id casing do not matter."""
        localizer = Localizer(app_tree)
        localizer.load()

        assert localizer.gettext("EN", "RETRY", "Prompts") == "Try again"

    def test_escaped_message_id(self, app_tree) -> None:
        """Ids containing the namespace delimiter round-trip."""
        localizer = Localizer(app_tree)
        localizer.load()

        assert localizer.gettext("en", "http:404", "prompts") == "Not found"

    def test_none_locale_uses_default(self, app_tree) -> None:
        """A missing locale argument means the default locale."""
        localizer = Localizer(app_tree, "de")
        localizer.load()

        assert localizer.gettext(None, "bye") == "Tschüss"
        assert localizer.gettext("", "bye") == "Tschüss"

    def test_unloaded_locale_echoes_msgid(self, app_tree) -> None:
        """Lookups never load; before load() they degrade to the msgid."""
        localizer = Localizer(app_tree)

        assert localizer.gettext("en", "hello") == "hello"
        assert localizer.get_load_state("en") == LoadState.UNLOADED

    def test_failed_locale_degrades_silently(self, bundle_tree) -> None:
        """After a failed load, lookups still return the msgid."""
        (bundle_tree.root / "app").mkdir()
        (bundle_tree.root / "app" / "en").write_text("not a dir", encoding="utf-8")
        localizer = Localizer(LibraryNode("app", bundle_tree.path("app")))
        with pytest.raises(LocaleLoadError):
            localizer.load()

        assert localizer.gettext("en", "hello") == "hello"

    def test_has_message(self, app_tree) -> None:
        """has_message follows the same probe order as lookups."""
        localizer = Localizer(app_tree)
        localizer.load("en-gb")

        assert localizer.has_message("en-gb", "bye")
        assert localizer.has_message("en-gb", "retry", "prompts")
        assert not localizer.has_message("en-gb", "nope")


class TestNgettext:
    """Test binary singular/plural selection."""

    def test_singular(self, app_tree) -> None:
        """count == 1 selects the singular id."""
        localizer = Localizer(app_tree)
        localizer.load()

        assert localizer.ngettext("en", "item", "items", 1, "cart") == "One item"

    @pytest.mark.parametrize("count", [0, 2, 5, -1, 100])
    def test_plural(self, app_tree, count: int) -> None:
        """Any other count selects the plural id."""
        localizer = Localizer(app_tree)
        localizer.load()

        assert localizer.ngettext("en", "item", "items", count, "cart") == "Several items"

    def test_untranslated_plural_echoes_plural_id(self, app_tree) -> None:
        """Missing plural translation returns the plural id."""
        localizer = Localizer(app_tree)
        localizer.load()

        assert localizer.ngettext("en", "file", "files", 3) == "files"
        assert localizer.ngettext("en", "file", "files", 1) == "file"


class TestAlternatives:
    """Test list-valued messages."""

    def test_all_choices_reached_and_none_outside(self, bundle_tree) -> None:
        """Repeated lookups cover every choice and never leave the list."""
        choices = ["Hi!", "Hello!", "Hey there!"]
        path = bundle_tree.write("app", "en", "index", {"greeting": choices})
        localizer = Localizer(LibraryNode("app", path))
        localizer.load()

        seen = {localizer.gettext("en", "greeting") for _ in range(500)}

        assert seen == set(choices)

    def test_choice_made_per_lookup(self, bundle_tree) -> None:
        """Resolution uses the injected random source on every read."""
        path = bundle_tree.write("app", "en", "index", {"greeting": ["a", "b", "c", "d"]})
        localizer = Localizer(LibraryNode("app", path), rng=random.Random(7))
        replay = random.Random(7)
        localizer.load()

        results = [localizer.gettext("en", "greeting") for _ in range(20)]

        assert results == [replay.choice(("a", "b", "c", "d")) for _ in range(20)]


class TestFallbackCallback:
    """Test on_fallback notifications."""

    def test_callback_on_fallback(self, app_tree) -> None:
        """The callback reports which locale answered."""
        events: list[FallbackInfo] = []
        localizer = Localizer(app_tree, on_fallback=events.append)
        localizer.load("en-gb")

        localizer.gettext("en-gb", "retry", "prompts")

        assert events == [FallbackInfo("en-gb", "en", "retry", "prompts")]

    def test_no_callback_on_direct_hit(self, app_tree) -> None:
        """Direct hits and misses do not report fallbacks."""
        events: list[FallbackInfo] = []
        localizer = Localizer(app_tree, on_fallback=events.append)
        localizer.load("en-gb")

        localizer.gettext("en-gb", "color")
        localizer.gettext("en-gb", "missing")

        assert events == []


class TestConcurrentLookups:
    """Test lookups and loads from many threads."""

    def test_concurrent_load_and_lookup(self, app_tree) -> None:
        """Threads loading and looking up the same locale agree on results."""
        localizer = Localizer(app_tree)
        barrier = threading.Barrier(12)

        def work() -> str:
            barrier.wait()
            localizer.load("en-gb")
            return localizer.gettext("en-gb", "bye")

        with ThreadPoolExecutor(max_workers=12) as executor:
            results = list(executor.map(lambda _: work(), range(12)))

        assert results == ["Goodbye"] * 12


class TestBabelLocale:
    """Test Babel integration."""

    def test_default_locale(self, app_tree) -> None:
        """Without argument, the default locale is resolved."""
        localizer = Localizer(app_tree, "pt-br")

        locale = localizer.get_babel_locale()

        assert locale.language == "pt"
        assert locale.territory == "BR"

    def test_explicit_locale(self, app_tree) -> None:
        """Localizer codes are accepted as-is."""
        localizer = Localizer(app_tree)

        assert localizer.get_babel_locale("de-at").get_display_name("en") == "German (Austria)"


def test_storage_injection(tmp_path: Path) -> None:
    """Custom storage is used for every read."""

    class SingleFileStorage:
        def list_dir(self, directory: Path) -> list[str]:
            if directory.name != "en":
                raise FileNotFoundError(directory)
            return ["index.json"]

        def read_bytes(self, path: Path) -> bytes:
            return b'{"hello": "Hello from memory"}'

    localizer = Localizer(LibraryNode("app", str(tmp_path)), storage=SingleFileStorage())
    localizer.load("de")

    assert localizer.gettext("de", "hello") == "Hello from memory"

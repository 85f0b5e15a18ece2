"""jsonlocalizer - Layered JSON message bundles with locale fallback.

Resolves text for a locale, message id and optional namespace from JSON
bundles contributed by a tree of libraries. Bundles are merged per locale in
deterministic override order, loaded lazily at most once per locale, and
looked up through a regional -> base language -> default locale chain.

Public API:
    Localizer - Load locales and look up messages
    LibraryNode - Plain library tree node
    LocalizerConfig - Bundle conventions and loading limits
    create_key / escape_key - Namespaced table keys

Exceptions:
    LocalizerError - Base exception class
    LocaleLoadError - A locale could not be loaded
    BundleParseError - A bundle file was malformed (logged, not raised by load)

Submodules:
    jsonlocalizer.localization - Loader, store, fallback chains, result types
    jsonlocalizer.locale_utils - Locale normalization and Babel integration
"""

from .config import LocalizerConfig
from .diagnostics import BundleParseError, LocaleLoadError, LocalizerError
from .keys import create_key, escape_key
from .localization import FallbackInfo, LibraryNode, Localizer

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("jsonlocalizer")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "BundleParseError",
    "FallbackInfo",
    "LibraryNode",
    "LocaleLoadError",
    "LocalizerConfig",
    "LocalizerError",
    "Localizer",
    "__version__",
    "create_key",
    "escape_key",
]

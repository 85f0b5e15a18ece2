"""Error types raised while loading translation bundles.

Python 3.13+. Zero external dependencies.
"""

from .errors import BundleParseError, LocaleLoadError, LocalizerError

__all__ = [
    "BundleParseError",
    "LocaleLoadError",
    "LocalizerError",
]

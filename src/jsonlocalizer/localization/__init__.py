"""Layered localization package for Localizer.

Provides the full localization stack: type aliases, stored value variants,
library-tree search-path discovery, bundle loading, the per-locale bundle
store, fallback-chain computation and the Localizer lookup engine.

Submodules:
    types      - PEP 695 type aliases (LocaleCode, MessageId, Namespace, ...)
    values     - SingleValue / Alternatives stored value variants
    library    - Library protocol, LibraryNode, collect_search_paths
    loading    - BundleStorage protocol, FileSystemStorage, PathLoader,
                 FileLoadResult, PathLoadResult, LoadSummary
    fallback   - base_language, load_set, probe_order
    store      - BundleStore (at-most-once per-locale loading)
    localizer  - Localizer, FallbackInfo

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from jsonlocalizer.enums import LoadState, LoadStatus
from jsonlocalizer.localization.fallback import base_language, load_set, probe_order
from jsonlocalizer.localization.library import Library, LibraryNode, collect_search_paths
from jsonlocalizer.localization.loading import (
    BundleStorage,
    FileLoadResult,
    FileSystemStorage,
    LoadSummary,
    PathLoader,
    PathLoadResult,
)
from jsonlocalizer.localization.localizer import FallbackInfo, Localizer
from jsonlocalizer.localization.store import BundleStore
from jsonlocalizer.localization.types import (
    LocaleCode,
    MessageId,
    Namespace,
    SearchPath,
    TableKey,
)
from jsonlocalizer.localization.values import Alternatives, BundleValue, SingleValue

__all__ = [
    # Main lookup engine
    "Localizer",
    "FallbackInfo",
    # Library tree
    "Library",
    "LibraryNode",
    "collect_search_paths",
    # Storage and loading
    "BundleStorage",
    "FileSystemStorage",
    "PathLoader",
    "BundleStore",
    # Load tracking
    "LoadState",
    "LoadStatus",
    "LoadSummary",
    "PathLoadResult",
    "FileLoadResult",
    # Fallback chains
    "base_language",
    "load_set",
    "probe_order",
    # Stored values
    "Alternatives",
    "BundleValue",
    "SingleValue",
    # Type aliases for user code type annotations
    "LocaleCode",
    "MessageId",
    "Namespace",
    "SearchPath",
    "TableKey",
]

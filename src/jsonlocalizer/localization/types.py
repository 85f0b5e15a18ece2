"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the localization package
and by user code when annotating Localizer call sites.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "LocaleCode",
    "MessageId",
    "Namespace",
    "SearchPath",
    "TableKey",
]

type MessageId = str
"""Identifier for a message as written in a bundle (e.g., 'welcome', 'error:404')."""

type LocaleCode = str
"""Lowercase locale code (e.g., 'en', 'en-us', 'zh-hans-cn')."""

type Namespace = str
"""Bundle file base name partitioning message ids (e.g., 'prompts')."""

type TableKey = str
"""Escaped, namespaced key indexing a locale table (e.g., 'prompts:welcome')."""

type SearchPath = str
"""Root directory scanned for per-locale bundle subdirectories."""

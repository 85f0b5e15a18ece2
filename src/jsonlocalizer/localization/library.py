"""Search-path discovery over the library tree.

An application is composed from libraries, each of which may ship its own
locale directory and may depend on further libraries. Translations from every
library are merged, and the order of the resulting search-path list decides
which translation wins when two libraries define the same key: later paths
override earlier ones.

collect_search_paths() walks the tree depth-first, adds a library's own path
only after all of its dependencies, and visits each library (identified by
name) once, so cycles terminate and the root library's path always comes last.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from jsonlocalizer.localization.types import SearchPath

__all__ = [
    "Library",
    "LibraryNode",
    "collect_search_paths",
]


class Library(Protocol):
    """Protocol for one node of the library tree.

    Implementations are supplied by whatever composes the application. Only
    the three members below are used.
    """

    @property
    def name(self) -> str:
        """Unique library name; used as identity when de-duplicating."""
        ...

    def locale_path(self) -> SearchPath | None:
        """Root of this library's per-locale directories, or None."""
        ...

    def libraries(self) -> Iterable[Library]:
        """Libraries this one depends on, in declaration order."""
        ...


@dataclass(slots=True, eq=False)
class LibraryNode:
    """Plain Library implementation.

    Mutable so that dependency cycles can be wired after construction.

    Example:
        >>> core = LibraryNode("core", "libs/core/locale")
        >>> app = LibraryNode("app", "app/locale", [core])
        >>> collect_search_paths(app)
        ('libs/core/locale', 'app/locale')
    """

    name: str
    path: SearchPath | None = None
    children: list[Library] = field(default_factory=list)

    def locale_path(self) -> SearchPath | None:
        return self.path

    def libraries(self) -> Iterable[Library]:
        return self.children

    def add_library(self, library: Library) -> None:
        self.children.append(library)


def collect_search_paths(root: Library) -> tuple[SearchPath, ...]:
    """Flatten the library tree into an ordered search-path tuple.

    Args:
        root: Top-level (application) library

    Returns:
        Search paths, dependencies first, root last. Libraries without a
        locale path contribute nothing.
    """
    seen: set[str] = set()
    paths: list[SearchPath] = []

    def visit(library: Library) -> None:
        if library.name in seen:
            return
        seen.add(library.name)
        for child in library.libraries():
            visit(child)
        path = library.locale_path()
        if path:
            paths.append(path)

    visit(root)
    return tuple(paths)

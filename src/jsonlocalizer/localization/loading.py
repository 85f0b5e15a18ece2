"""Bundle loading infrastructure for Localizer.

Provides the storage protocol the loader reads through, a filesystem
implementation, the per-path loader that merges one search path's bundles into
a locale table, and immutable result records for tracking load attempts.

Components:
    BundleStorage - Protocol for listing directories and reading files
    FileSystemStorage - pathlib-backed storage
    PathLoader - Merges <search path>/<locale>/*.json into a locale table
    FileLoadResult - Immutable result of loading one bundle file
    PathLoadResult - Immutable result of loading one search path
    LoadSummary - Immutable aggregate of all path results for one locale

Failure policy:
    A missing locale directory is expected (most libraries only translate a
    few locales) and is reported as NOT_FOUND. A bundle file that cannot be
    read or parsed is logged and skipped. Only a directory that exists but
    cannot be listed raises LocaleLoadError.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from jsonlocalizer.config import LocalizerConfig
from jsonlocalizer.constants import NOT_FOUND_SENTINEL
from jsonlocalizer.diagnostics import BundleParseError, LocaleLoadError
from jsonlocalizer.enums import LoadStatus
from jsonlocalizer.keys import create_key
from jsonlocalizer.localization.types import LocaleCode, Namespace, SearchPath, TableKey
from jsonlocalizer.localization.values import BundleValue, coerce_value

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Storage
    "BundleStorage",
    "FileSystemStorage",
    # Loader
    "PathLoader",
    # Load result types
    "FileLoadResult",
    "PathLoadResult",
    "LoadSummary",
]

logger = logging.getLogger(__name__)


class BundleStorage(Protocol):
    """Protocol for the medium bundle files are stored on.

    This is a Protocol (structural typing) rather than ABC so tests and
    alternative media (archives, package resources) can supply their own.

    Example:
        >>> class MemoryStorage:
        ...     def __init__(self, files: dict[str, bytes]) -> None:
        ...         self.files = files
        ...     def list_dir(self, directory: Path) -> list[str]:
        ...         prefix = f"{directory.as_posix()}/"
        ...         names = [k[len(prefix):] for k in self.files if k.startswith(prefix)]
        ...         if not names:
        ...             raise FileNotFoundError(directory)
        ...         return names
        ...     def read_bytes(self, path: Path) -> bytes:
        ...         return self.files[path.as_posix()]
    """

    def list_dir(self, directory: Path) -> list[str]:
        """List entry names in a directory.

        Args:
            directory: Directory to list

        Returns:
            Entry names (not paths), in any order

        Raises:
            FileNotFoundError: If the directory does not exist
            OSError: If the directory cannot be listed
        """
        ...

    def read_bytes(self, path: Path) -> bytes:
        """Read a file's full content.

        Args:
            path: File to read

        Returns:
            Raw file content

        Raises:
            OSError: If the file cannot be read
        """
        ...


@dataclass(frozen=True, slots=True)
class FileSystemStorage:
    """Local filesystem storage."""

    def list_dir(self, directory: Path) -> list[str]:
        return [entry.name for entry in directory.iterdir()]

    def read_bytes(self, path: Path) -> bytes:
        return path.read_bytes()


@dataclass(frozen=True, slots=True)
class FileLoadResult:
    """Result of loading a single bundle file.

    Attributes:
        filename: Bundle file name (e.g., 'prompts.json')
        namespace: Namespace derived from the file name, None for index files
        status: SUCCESS or ERROR
        entry_count: Entries merged into the table (0 on error)
        error: Exception if status is ERROR, None otherwise
    """

    filename: str
    namespace: Namespace | None
    status: LoadStatus
    entry_count: int = 0
    error: BundleParseError | None = None

    @property
    def is_success(self) -> bool:
        """Check if the file was parsed and merged."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_error(self) -> bool:
        """Check if the file was dropped."""
        return self.status == LoadStatus.ERROR


@dataclass(frozen=True, slots=True)
class PathLoadResult:
    """Result of loading one search path for one locale.

    Attributes:
        locale: Locale code loaded
        search_path: Search path root
        status: SUCCESS (directory found) or NOT_FOUND
        directory: Locale directory that was probed
        files: Per-file results in merge order
    """

    locale: LocaleCode
    search_path: SearchPath
    status: LoadStatus
    directory: str
    files: tuple[FileLoadResult, ...] = ()

    @property
    def is_not_found(self) -> bool:
        """Check if the locale directory was absent (expected, not an error)."""
        return self.status == LoadStatus.NOT_FOUND

    @property
    def entry_count(self) -> int:
        """Entries merged from this path, or NOT_FOUND_SENTINEL if absent."""
        if self.is_not_found:
            return NOT_FOUND_SENTINEL
        return sum(f.entry_count for f in self.files)

    @property
    def file_errors(self) -> tuple[FileLoadResult, ...]:
        """Files that were dropped."""
        return tuple(f for f in self.files if f.is_error)


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of path load results for one locale.

    Attributes:
        locale: Locale code
        results: Per-path results in search-path order

    Example:
        >>> localizer.load("de")
        >>> summary = localizer.get_load_summary("de")
        >>> for result in summary.get_file_errors():
        ...     print(f"Dropped {result.filename}: {result.error}")
    """

    locale: LocaleCode
    results: tuple[PathLoadResult, ...]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(locale={self.locale!r}, "
            f"paths={len(self.results)}, "
            f"found={self.paths_found}, "
            f"entries={self.entry_count}, "
            f"file_errors={self.file_error_count})"
        )

    @property
    def paths_found(self) -> int:
        """Number of search paths that had a directory for this locale."""
        return sum(1 for r in self.results if not r.is_not_found)

    @property
    def entry_count(self) -> int:
        """Total entries merged, counting overridden entries once per source."""
        return sum(r.entry_count for r in self.results if not r.is_not_found)

    @property
    def file_error_count(self) -> int:
        """Number of bundle files dropped."""
        return sum(len(r.file_errors) for r in self.results)

    @property
    def has_errors(self) -> bool:
        """Check if any bundle file was dropped."""
        return self.file_error_count > 0

    def get_file_errors(self) -> tuple[FileLoadResult, ...]:
        """Get all dropped files across all paths."""
        return tuple(f for r in self.results for f in r.file_errors)


class PathLoader:
    """Loads one search path's bundles for one locale into a table.

    Files inside one locale directory are independent, so they are parsed in
    parallel. Their entries are merged in sorted file-name order, which makes
    collisions between files of the same directory deterministic.

    Thread Safety:
        A PathLoader holds no mutable state. The table passed in must not be
        shared with readers until loading finishes.
    """

    __slots__ = ("_config", "_storage")

    def __init__(
        self,
        storage: BundleStorage | None = None,
        config: LocalizerConfig | None = None,
    ) -> None:
        """Initialize loader.

        Args:
            storage: Medium to read from (default: local filesystem)
            config: Bundle conventions and limits (default: LocalizerConfig())
        """
        self._storage: BundleStorage = storage if storage is not None else FileSystemStorage()
        self._config = config if config is not None else LocalizerConfig()

    @property
    def config(self) -> LocalizerConfig:
        """Loader configuration (read-only)."""
        return self._config

    def is_bundle_file(self, filename: str) -> bool:
        """Check whether a directory entry name is a bundle file."""
        return filename.lower().endswith(self._config.bundle_suffix.lower())

    def namespace_for(self, filename: str) -> Namespace | None:
        """Derive the namespace from a bundle file name.

        Args:
            filename: Bundle file name (e.g., 'Prompts.json')

        Returns:
            Base name without suffix, or None for the index file
        """
        name = filename[: len(filename) - len(self._config.bundle_suffix)]
        if name == self._config.index_namespace:
            return None
        return name

    def merge_from_path(
        self,
        locale: LocaleCode,
        search_path: SearchPath,
        table: dict[TableKey, BundleValue],
    ) -> int:
        """Merge one search path's bundles for a locale into table.

        Args:
            locale: Normalized locale code
            search_path: Search path root
            table: Table being built; entries are written in place

        Returns:
            Number of entries merged, or NOT_FOUND_SENTINEL (-1) if
            <search_path>/<locale>/ does not exist

        Raises:
            LocaleLoadError: If the locale directory cannot be listed
        """
        return self.load_path(locale, search_path, table).entry_count

    def load_path(
        self,
        locale: LocaleCode,
        search_path: SearchPath,
        table: dict[TableKey, BundleValue],
    ) -> PathLoadResult:
        """Merge one search path and return a detailed result.

        Same contract as merge_from_path(), with per-file outcomes.

        Raises:
            LocaleLoadError: If the locale directory cannot be listed
        """
        directory = Path(search_path) / locale
        try:
            names = self._storage.list_dir(directory)
        except FileNotFoundError:
            logger.debug("localizer.load(%s) - Couldn't find directory: %s", locale, directory)
            return PathLoadResult(
                locale=locale,
                search_path=search_path,
                status=LoadStatus.NOT_FOUND,
                directory=str(directory),
            )
        except OSError as e:
            logger.error("localizer.load(%s) - Error listing %s: %s", locale, directory, e)
            msg = f"Failed to list locale directory '{directory}': {e}"
            raise LocaleLoadError(msg, locale=locale, path=str(directory)) from e

        bundle_names = sorted(name for name in names if self.is_bundle_file(name))
        parsed = self._parse_all(locale, directory, bundle_names)

        files: list[FileLoadResult] = []
        for filename, entries, error in parsed:
            namespace = self.namespace_for(filename)
            if error is not None:
                files.append(
                    FileLoadResult(filename, namespace, LoadStatus.ERROR, error=error)
                )
                continue
            table.update(entries)
            files.append(FileLoadResult(filename, namespace, LoadStatus.SUCCESS, len(entries)))

        return PathLoadResult(
            locale=locale,
            search_path=search_path,
            status=LoadStatus.SUCCESS,
            directory=str(directory),
            files=tuple(files),
        )

    def parse_file(
        self,
        locale: LocaleCode,
        directory: Path,
        filename: str,
        table: dict[TableKey, BundleValue],
    ) -> int:
        """Parse one bundle file and write its entries into table.

        Args:
            locale: Normalized locale code (for diagnostics)
            directory: Locale directory containing the file
            filename: Bundle file name

        Returns:
            Number of entries written

        Raises:
            BundleParseError: If the file cannot be read or is malformed
        """
        entries = self.read_bundle(locale, directory, filename)
        table.update(entries)
        return len(entries)

    def read_bundle(
        self, locale: LocaleCode, directory: Path, filename: str
    ) -> dict[TableKey, BundleValue]:
        """Read and parse one bundle file into keyed entries.

        Raises:
            BundleParseError: If the file cannot be read, is too large, is not
                valid text in the configured encoding, is not valid JSON, or
                does not have the flat string -> string | [string] shape
        """
        path = directory / filename
        namespace = self.namespace_for(filename)

        try:
            data = self._storage.read_bytes(path)
        except OSError as e:
            msg = f"Failed to read bundle '{path}': {e}"
            raise BundleParseError(msg, locale=locale, path=str(path)) from e

        if len(data) > self._config.max_file_size:
            msg = (
                f"Bundle '{path}' is {len(data)} bytes, "
                f"limit is {self._config.max_file_size}"
            )
            raise BundleParseError(msg, locale=locale, path=str(path))

        try:
            decoded = json.loads(data.decode(self._config.encoding))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            msg = f"Malformed bundle '{path}': {e}"
            raise BundleParseError(msg, locale=locale, path=str(path)) from e

        if not isinstance(decoded, dict):
            msg = f"Bundle '{path}' must contain a JSON object, got {type(decoded).__name__}"
            raise BundleParseError(msg, locale=locale, path=str(path))

        entries: dict[TableKey, BundleValue] = {}
        for msgid, raw in decoded.items():
            try:
                value = coerce_value(raw)
            except (TypeError, ValueError) as e:
                msg = f"Bundle '{path}' has invalid value for '{msgid}': {e}"
                raise BundleParseError(msg, locale=locale, path=str(path)) from e
            entries[create_key(namespace, msgid)] = value
        return entries

    def _parse_all(
        self, locale: LocaleCode, directory: Path, filenames: list[str]
    ) -> list[tuple[str, dict[TableKey, BundleValue], BundleParseError | None]]:
        """Parse files, in parallel when there is more than one.

        Returns:
            (filename, entries, error) triples in the order of filenames
        """
        workers = min(self._config.max_workers, len(filenames))
        if workers <= 1:
            return [self._attempt(locale, directory, name) for name in filenames]
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(
                executor.map(lambda name: self._attempt(locale, directory, name), filenames)
            )

    def _attempt(
        self, locale: LocaleCode, directory: Path, filename: str
    ) -> tuple[str, dict[TableKey, BundleValue], BundleParseError | None]:
        logger.debug("localizer.load(%s) - Loading %s/%s", locale, directory, filename)
        try:
            return (filename, self.read_bundle(locale, directory, filename), None)
        except BundleParseError as e:
            logger.error(
                "localizer.load(%s) - Error reading %s/%s: %s", locale, directory, filename, e
            )
            return (filename, {}, e)

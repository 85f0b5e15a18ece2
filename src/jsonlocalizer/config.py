"""Loader configuration for Localizer.

Provides a single frozen dataclass that encapsulates the bundle-file
conventions and loading limits, so Localizer and PathLoader share one typed
object instead of repeating individual parameters.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from jsonlocalizer.constants import (
    BUNDLE_SUFFIX,
    DEFAULT_ENCODING,
    DEFAULT_MAX_WORKERS,
    INDEX_NAMESPACE,
    MAX_BUNDLE_SIZE,
)

__all__ = ["LocalizerConfig"]


@dataclass(frozen=True, slots=True)
class LocalizerConfig:
    """Immutable configuration for bundle discovery and parsing.

    All fields have sensible defaults; ``LocalizerConfig()`` with no arguments
    matches the standard on-disk layout.

    Attributes:
        bundle_suffix: File name suffix of bundle files, matched
            case-insensitively (default: ".json").
        index_namespace: Base name meaning "no namespace" (default: "index").
        encoding: Text encoding of bundle files (default: "utf-8").
        max_file_size: Bundle files larger than this many bytes are rejected
            as unparseable (default: 10 MiB).
        max_workers: Threads used to parse the files of one locale directory
            (default: 4). Search paths are always merged one at a time.

    Example:
        >>> config = LocalizerConfig(max_workers=1)
        >>> localizer = Localizer(root, config=config)
    """

    bundle_suffix: str = BUNDLE_SUFFIX
    index_namespace: str = INDEX_NAMESPACE
    encoding: str = DEFAULT_ENCODING
    max_file_size: int = MAX_BUNDLE_SIZE
    max_workers: int = DEFAULT_MAX_WORKERS

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If bundle_suffix is empty, or if max_file_size or
                max_workers is not positive.
        """
        if not self.bundle_suffix:
            msg = "bundle_suffix must not be empty"
            raise ValueError(msg)
        if self.max_file_size <= 0:
            msg = "max_file_size must be positive"
            raise ValueError(msg)
        if self.max_workers <= 0:
            msg = "max_workers must be positive"
            raise ValueError(msg)

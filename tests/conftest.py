"""Pytest configuration for the jsonlocalizer test suite.

Hypothesis profiles:
- dev: Local development with 200 examples
- ci: CI runs with 50 examples, derandomized
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- HYPOTHESIS_PROFILE env var -> explicit override
- CI=true environment variable -> "ci" profile
- Otherwise -> "dev" profile

Fixtures:
- bundle_tree: writes JSON bundles under tmp_path
- CountingStorage: BundleStorage wrapper recording every directory listing
"""

from __future__ import annotations

import json
import os
import threading
from pathlib import Path
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings

from jsonlocalizer.localization.loading import FileSystemStorage

# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=200,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context."""
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# FUZZING TEST SEPARATION
# =============================================================================


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz-marked tests unless explicitly requested with -m fuzz."""
    marker_expr = config.getoption("-m", default="")
    if "fuzz" in str(marker_expr):
        return

    skip_fuzz = pytest.mark.skip(reason="Fuzzing test - run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)


# =============================================================================
# BUNDLE FIXTURES
# =============================================================================


class BundleTree:
    """Writes bundle files below a root directory.

    Example:
        >>> tree.write("core", "en", "index", {"hello": "Hello"})
        # creates <root>/core/en/index.json and returns <root>/core
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def path(self, name: str) -> str:
        return str(self.root / name)

    def write(self, name: str, locale: str, filename: str, entries: Any) -> str:
        directory = self.root / name / locale
        directory.mkdir(parents=True, exist_ok=True)
        if "." not in filename:
            filename = f"{filename}.json"
        (directory / filename).write_text(json.dumps(entries), encoding="utf-8")
        return str(self.root / name)

    def write_raw(self, name: str, locale: str, filename: str, content: str | bytes) -> str:
        directory = self.root / name / locale
        directory.mkdir(parents=True, exist_ok=True)
        target = directory / filename
        if isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content, encoding="utf-8")
        return str(self.root / name)


@pytest.fixture
def bundle_tree(tmp_path: Path) -> BundleTree:
    """Bundle writer rooted at a fresh temporary directory."""
    return BundleTree(tmp_path)


class CountingStorage:
    """Filesystem storage that counts directory listings and file reads."""

    def __init__(self, delay: threading.Event | None = None) -> None:
        self._inner = FileSystemStorage()
        self._lock = threading.Lock()
        self._gate = delay
        self.entered = threading.Event()
        self.listings: list[Path] = []
        self.reads: list[Path] = []

    def list_dir(self, directory: Path) -> list[str]:
        with self._lock:
            self.listings.append(directory)
        self.entered.set()
        if self._gate is not None:
            self._gate.wait(timeout=5)
        return self._inner.list_dir(directory)

    def read_bytes(self, path: Path) -> bytes:
        with self._lock:
            self.reads.append(path)
        return self._inner.read_bytes(path)


@pytest.fixture
def counting_storage() -> CountingStorage:
    """Storage wrapper recording I/O calls."""
    return CountingStorage()


@pytest.fixture
def counting_storage_factory() -> type[CountingStorage]:
    """CountingStorage class, for tests that need a gated instance."""
    return CountingStorage

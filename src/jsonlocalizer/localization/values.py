"""Stored translation values.

A bundle entry maps a message id either to one string or to a list of
alternative strings (variations of the same message). The two shapes are kept
as distinct frozen types so lookups dispatch on the variant instead of
inspecting raw JSON values.

Alternatives are resolved at read time: every successful lookup of a
list-valued entry draws a fresh uniformly random choice.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import random

__all__ = [
    "Alternatives",
    "BundleValue",
    "SingleValue",
    "coerce_value",
]


@dataclass(frozen=True, slots=True)
class SingleValue:
    """A message with exactly one translation."""

    text: str

    def resolve(self, rng: random.Random) -> str:  # noqa: ARG002 - shared signature
        """Return the stored text."""
        return self.text


@dataclass(frozen=True, slots=True)
class Alternatives:
    """A message with several interchangeable translations.

    Attributes:
        choices: Non-empty tuple of candidate strings
    """

    choices: tuple[str, ...]

    def __post_init__(self) -> None:
        """Reject empty candidate lists.

        Raises:
            ValueError: If choices is empty
        """
        if not self.choices:
            msg = "Alternatives require at least one choice"
            raise ValueError(msg)

    def resolve(self, rng: random.Random) -> str:
        """Pick one candidate uniformly at random.

        Args:
            rng: Random source; a fresh draw is made on every call

        Returns:
            One element of choices
        """
        return rng.choice(self.choices)


type BundleValue = SingleValue | Alternatives


def coerce_value(raw: object) -> BundleValue:
    """Convert a decoded JSON value into a BundleValue.

    Args:
        raw: Value decoded from a bundle file

    Returns:
        SingleValue for a string, Alternatives for a non-empty list of strings

    Raises:
        TypeError: If raw is neither a string nor a list of strings
        ValueError: If raw is an empty list
    """
    match raw:
        case str():
            return SingleValue(raw)
        case list() if all(isinstance(item, str) for item in raw):
            return Alternatives(tuple(raw))
        case list():
            msg = "list values must contain only strings"
            raise TypeError(msg)
        case _:
            msg = f"expected string or list of strings, got {type(raw).__name__}"
            raise TypeError(msg)

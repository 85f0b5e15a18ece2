"""Namespaced lookup keys for locale tables.

A locale table is indexed by a single string combining the optional namespace
(derived from the bundle file name) and the message id. The namespace is
separated by NAMESPACE_DELIMITER; occurrences of that delimiter inside the
message id are escaped so an id such as "error:timeout" is never misread as
carrying the namespace "error".

The same functions are used when bundle entries are written and when lookups
read them back, so both sides always compute identical keys.

Known edge case: the namespace segment itself is not escaped. A namespace
containing NAMESPACE_DELIMITER (a bundle file named "a:b.json") yields keys
that only differ from other namespaces by where the delimiter sits. Escaping
is also not reversible: the literal id "a--b" and the id "a:b" share a key.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from jsonlocalizer.constants import ESCAPED_NAMESPACE_DELIMITER, NAMESPACE_DELIMITER

__all__ = ["create_key", "escape_key"]


def escape_key(raw_key: str) -> str:
    """Escape the namespace delimiter inside a message id and lowercase it.

    Args:
        raw_key: Message id as written in a bundle or passed to a lookup

    Returns:
        Escaped, lowercase message id

    Example:
        >>> escape_key("Error:Timeout")
        'error--timeout'
    """
    return raw_key.replace(NAMESPACE_DELIMITER, ESCAPED_NAMESPACE_DELIMITER).lower()


def create_key(namespace: str | None, raw_key: str) -> str:
    """Build the table key for a message id in an optional namespace.

    Args:
        namespace: Namespace (bundle file base name) or None/"" for global keys
        raw_key: Message id

    Returns:
        "<namespace lowercased>:<escaped id>" or just the escaped id

    Example:
        >>> create_key("Prompts", "Greeting")
        'prompts:greeting'
        >>> create_key(None, "a:b")
        'a--b'
    """
    escaped = escape_key(raw_key)
    if namespace:
        return f"{namespace.lower()}{NAMESPACE_DELIMITER}{escaped}"
    return escaped

"""
Location string algebra.

A location is a string of segments joined by a separator, e.g. "a.b.c".
Empty segments are ignored and the segment "<<" drops the segment pushed
before it, so every location has one canonical key sequence:

    >>> join("a.b", "<<", "c")
    'a.c'
    >>> split(".not.a..valid.location.")
    ['not', 'a', 'valid', 'location']

The separator on its own is the root location. Any location that yields
no segments (including "" and "..") is treated as the root.

These helpers are pure: they never look at a tree. Resolution against a
tree lives on conftree.store.Store.
"""

from __future__ import annotations

import typing as _typing

import conftree.constants as constants


def split(location: str | None, sep: str = constants.DEFAULT_SEPARATOR) -> list[str]:
    """
    Split a location into its canonical segment list.

    Args:
        location: Location string (None is treated as empty).
        sep: Segment separator.

    Returns:
        List of non-empty segments with every "<<" applied.
    """
    joined = join(location, sep=sep)
    return joined.split(sep) if joined else []


def join(*fragments: str | None, sep: str = constants.DEFAULT_SEPARATOR) -> str:
    """
    Join location fragments into one canonical location.

    "<<" pops the most recently pushed segment; popping past the start is a
    no-op. The result is "" when nothing remains.

    Args:
        *fragments: Location fragments, each may contain separators.
        sep: Segment separator.

    Returns:
        Canonical location string.
    """
    keys: list[str] = []
    for fragment in fragments:
        if fragment is None:
            continue
        for part in str(fragment).split(sep):
            if part == constants.POP_TOKEN:
                if keys:
                    keys.pop()
            elif part:
                keys.append(part)
    return sep.join(keys)


def is_root(location: str | None, sep: str = constants.DEFAULT_SEPARATOR) -> bool:
    """Check whether a location resolves to the root of the tree."""
    return not split(location, sep)


def canonical(location: str | None, sep: str = constants.DEFAULT_SEPARATOR) -> str:
    """Return the canonical form of a location, the separator for the root."""
    return join(location, sep=sep) or sep


def key_name(location: str | None, sep: str = constants.DEFAULT_SEPARATOR) -> str:
    """
    Return the last segment of a location.

    Args:
        location: Location string.
        sep: Segment separator.

    Returns:
        Final key, or "" for the root.
    """
    keys = split(location, sep)
    return keys[-1] if keys else ""


def parent_location(location: str | None, sep: str = constants.DEFAULT_SEPARATOR) -> str:
    """Return the location one level up (the root for top-level keys)."""
    return join(location, constants.POP_TOKEN, sep=sep) or sep


def normalize_key(
    key: str,
    sep: str = constants.DEFAULT_SEPARATOR,
    sep_normalized: str = constants.DEFAULT_NORMALIZED_SEPARATOR,
) -> str:
    """
    Replace every separator in a key with the normalized separator.

    Used to build identifiers from keys that contain the separator. It has
    no effect on how values are stored.
    """
    return key.replace(sep, sep_normalized)


def normalize_location(
    *args: _typing.Any,
    sep: str = constants.DEFAULT_SEPARATOR,
) -> tuple[str, _typing.Any]:
    """
    Turn variadic call arguments into a (location, value) pair.

    With more than two arguments the last one is the value and the others
    are joined into the location. With two they are (location, value); with
    one the value is None. An empty location becomes the root.

    Example:
        >>> normalize_location("a", "b", "c", 1)
        ('a.b.c', 1)
        >>> normalize_location(None, 1)
        ('.', 1)

    Returns:
        Tuple of (location, value).
    """
    if len(args) > 2:
        location: str | None = join(*args[:-1], sep=sep)
        value = args[-1]
    elif len(args) == 2:
        location, value = args
    elif len(args) == 1:
        location, value = args[0], None
    else:
        location, value = None, None
    if not location:
        location = sep
    return location, value

"""
Value model and deep copy/merge operations.

The tree holds three kinds of values:
- MAPPING: dicts (any collections.abc.Mapping on input)
- SEQUENCE: lists and tuples
- SCALAR: everything else, including str, bytes, None and callables

clone() and merge() never share mutable containers with their inputs.
Neither detects cycles; cyclic input recurses until RecursionError.
"""

from __future__ import annotations

import collections.abc as _abc
import enum as _enum
import typing as _typing

import conftree.errors as errors


class ValueKind(_enum.Enum):
    """Kind of a value stored in the tree."""

    SCALAR = "scalar"
    """Leaf value, never merged or concatenated element-wise."""

    SEQUENCE = "sequence"
    """List or tuple. Replaced wholesale by merge, concatenated by append."""

    MAPPING = "mapping"
    """Dict-like value. Merged key by key."""


def kind_of(value: _typing.Any) -> ValueKind:
    """
    Classify a value.

    Strings and bytes are sequences to Python but scalars here.

    Args:
        value: Any value.

    Returns:
        The ValueKind of the value.
    """
    if isinstance(value, _abc.Mapping):
        return ValueKind.MAPPING
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    return ValueKind.SCALAR


def is_mapping(value: _typing.Any) -> bool:
    """Check if a value is a mapping."""
    return kind_of(value) is ValueKind.MAPPING


def is_sequence(value: _typing.Any) -> bool:
    """Check if a value is a list or tuple."""
    return kind_of(value) is ValueKind.SEQUENCE


def clone(value: _typing.Any) -> _typing.Any:
    """
    Deep clone a value.

    Scalars are returned as-is. Lists and tuples are cloned element-wise
    and keep their type. Mappings are cloned entry-wise into plain dicts.

    Args:
        value: Value to clone.

    Returns:
        An independent copy of the value.
    """
    kind = kind_of(value)
    if kind is ValueKind.MAPPING:
        return {key: clone(item) for key, item in value.items()}
    if kind is ValueKind.SEQUENCE:
        items = [clone(item) for item in value]
        return tuple(items) if isinstance(value, tuple) else items
    return value


def merge(
    to: _typing.Mapping[str, _typing.Any],
    from_: _typing.Mapping[str, _typing.Any],
    in_place: bool = False,
) -> dict[str, _typing.Any]:
    """
    Overlay one mapping onto another.

    For each key of ``from_``:

    ============  ====================  ==============================
    from_ value   to value              result
    ============  ====================  ==============================
    sequence      anything              clone of the sequence
    mapping       mapping               recursive merge
    anything      anything else         clone of the from_ value
    ============  ====================  ==============================

    A scalar over a mapping replaces the mapping rather than leaving it in
    place.

    Sequences are never merged element-wise:
        >>> merge({"x": [1, 2]}, {"x": [3]})
        {'x': [3]}

    Args:
        to: Base mapping.
        from_: Mapping whose keys take priority.
        in_place: Modify ``to`` (and its nested mappings) instead of
            working on a clone. ``to`` must then be a mutable mapping.

    Returns:
        The merged mapping; ``to`` itself when ``in_place`` is True.

    Raises:
        InvalidMergeError: If ``to`` or ``from_`` is not a mapping.
    """
    if not is_mapping(to) or not is_mapping(from_):
        raise errors.InvalidMergeError(
            f"Can only merge mappings, got {type(to).__name__} "
            f"and {type(from_).__name__}"
        )

    result = _typing.cast(dict[str, _typing.Any], to) if in_place else clone(to)
    for key, value in from_.items():
        kind = kind_of(value)
        if kind is ValueKind.SEQUENCE:
            result[key] = clone(value)
        elif kind is ValueKind.MAPPING and is_mapping(result.get(key)):
            # result is either a fresh clone or the caller's own mapping
            result[key] = merge(result[key], value, in_place=True)
        else:
            result[key] = clone(value)
    return result

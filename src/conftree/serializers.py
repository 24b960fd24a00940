"""
Serialization of a tree to JSON and YAML text.
"""

from __future__ import annotations

import json as _json
import typing as _typing

import yaml as _yaml

import conftree.constants as constants


def to_json(
    tree: _typing.Any,
    indent: str | None = constants.DEFAULT_JSON_INDENT,
) -> str:
    """
    Serialize a tree to JSON.

    Args:
        tree: Value to serialize.
        indent: Indentation unit per nesting level. None or "" produces
            compact output with no whitespace at all.

    Returns:
        JSON text without a trailing newline.

    Example:
        >>> to_json({"top": "value"})
        '{\\n\\t"top": "value"\\n}'
        >>> to_json({"top": "value"}, None)
        '{"top":"value"}'
    """
    if not indent:
        return _json.dumps(tree, separators=(",", ":"), ensure_ascii=False)
    return _json.dumps(tree, indent=indent, ensure_ascii=False)


def to_yaml(tree: _typing.Any) -> str:
    """
    Serialize a tree to a block-style YAML document.

    Keys keep their insertion order.

    Example:
        >>> to_yaml({"top": "value"})
        'top: value\\n'
    """
    return _yaml.safe_dump(
        tree,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )

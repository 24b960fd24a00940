"""
conftree - a path-addressed configuration tree.

One in-memory tree of nested mappings, sequences and scalars, read and
written through dot-delimited locations, with deep merge, cloning, get/set
listeners and JSON/YAML loading and serialization.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("conftree")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)

from conftree.config import StoreSettings  # noqa: E402
from conftree.errors import (  # noqa: E402
    ConfigFileError,
    ConfigFileNotFoundError,
    ConfTreeError,
    InvalidAppendError,
    InvalidMergeError,
    MissingDescendantMatcherError,
    MissingMatcherError,
)
from conftree.listeners import Listener, ListenerAction, ListenerRegistry  # noqa: E402
from conftree.loaders import LoaderRegistry  # noqa: E402
from conftree.paths import join  # noqa: E402
from conftree.store import Store  # noqa: E402
from conftree.values import ValueKind, clone, kind_of, merge  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "ConfTreeError",
    "ConfigFileError",
    "ConfigFileNotFoundError",
    "InvalidAppendError",
    "InvalidMergeError",
    "Listener",
    "ListenerAction",
    "ListenerRegistry",
    "LoaderRegistry",
    "MissingDescendantMatcherError",
    "MissingMatcherError",
    "Store",
    "StoreSettings",
    "ValueKind",
    "clone",
    "join",
    "kind_of",
    "merge",
]

"""
Store - a path-addressed configuration tree.

A Store owns one tree of nested dicts, lists and scalars together with the
settings, listener registry and loaders that act on it. Values are
addressed by location strings:

    >>> store = Store()
    >>> store.set("db.host", "localhost")
    >>> store.set("db", "port", 5432)          # parts are joined
    >>> store.get("db")
    {'host': 'localhost', 'port': 5432}
    >>> store.get("db", "host", "<<", "port")  # "<<" goes up one level
    5432

Write semantics:
- Setting the root location merges into the tree instead of replacing it.
- Setting a mapping where a mapping already exists merges the two.
- Every other combination overwrites.

Reads never create nodes. Only mutating calls (set, set_value, append,
load) create missing intermediate mappings.

Variadic calls follow one rule: for get/remove/copy/touch every argument is
a location fragment; for set/append/load the last argument is the value
(or file path) and the rest are joined into the location.
"""

from __future__ import annotations

import logging as _logging
import pathlib as _pathlib
import typing as _typing

import conftree.config as config
import conftree.errors as errors
import conftree.listeners as listeners
import conftree.loaders as loaders
import conftree.paths as paths
import conftree.serializers as serializers
import conftree.values as values

_logger = _logging.getLogger(__name__)


class _MissingType:
    """Sentinel type for absent locations."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<MISSING>"


_MISSING = _MissingType()


class Store:
    """
    A hierarchical configuration tree with listeners.

    Attributes:
        settings: StoreSettings in effect. Changing a field (or replacing
            the object) affects every later call.
        listen: Facade for registering listeners, ``listen.get(match, fn)``
            and ``listen.set(match, fn)``.

    Note:
        Not thread-safe. Listener callbacks run synchronously inside the
        get/set call that triggered them.
    """

    def __init__(
        self,
        root: _typing.Mapping[str, _typing.Any] | None = None,
        *,
        settings: config.StoreSettings | None = None,
        loader_registry: loaders.LoaderRegistry | None = None,
    ) -> None:
        """
        Initialize a store.

        Args:
            root: Initial tree, stored by reference. Defaults to an empty dict.
            settings: Store settings. Defaults to StoreSettings() which reads
                CONFTREE_* environment variables.
            loader_registry: Loaders used by load(). Defaults to JSON, YAML
                and raw text.
        """
        self.settings = settings if settings is not None else config.StoreSettings()
        self._root: dict[str, _typing.Any] = {}
        if root is not None:
            self.root = root
        self._registry = listeners.ListenerRegistry()
        self._loaders = (
            loader_registry if loader_registry is not None else loaders.LoaderRegistry()
        )
        self.listen = listeners.Listen(self._registry, lambda: self.sep)

    def __repr__(self) -> str:
        return f"Store({list(self._root.keys())})"

    # =========================================================================
    # Settings shortcuts
    # =========================================================================

    @property
    def sep(self) -> str:
        """Location separator; on its own it is the root location."""
        return self.settings.separator

    @property
    def sep_normalized(self) -> str:
        """Separator replacement used by normalize_key()."""
        return self.settings.normalized_separator

    @property
    def root(self) -> dict[str, _typing.Any]:
        """The whole tree, by reference."""
        return self._root

    @root.setter
    def root(self, value: _typing.Mapping[str, _typing.Any]) -> None:
        if not values.is_mapping(value):
            raise TypeError(f"root must be a mapping, not {type(value).__name__}")
        self._root = value if isinstance(value, dict) else dict(value)

    @property
    def registry(self) -> listeners.ListenerRegistry:
        """The listener registry owned by this store."""
        return self._registry

    @property
    def loader_registry(self) -> loaders.LoaderRegistry:
        """The loaders used by load()."""
        return self._loaders

    # =========================================================================
    # Location algebra
    # =========================================================================

    def join(self, *fragments: str | None) -> str:
        """Join location fragments; "<<" drops the previous segment."""
        return paths.join(*fragments, sep=self.sep)

    def normalize_key(self, key: str) -> str:
        """Replace separators in a key with the normalized separator."""
        return paths.normalize_key(key, self.sep, self.sep_normalized)

    def normalize_location(self, *args: _typing.Any) -> tuple[str, _typing.Any]:
        """Split variadic arguments into (location, value)."""
        return paths.normalize_location(*args, sep=self.sep)

    def get_key_name(self, location: str) -> str:
        """Return the last segment of a location."""
        return paths.key_name(location, self.sep)

    def is_root(self, location: str | None) -> bool:
        """Check whether a location addresses the whole tree."""
        return paths.is_root(location, self.sep)

    def _canonical(self, location: str | None) -> str:
        return paths.canonical(location, self.sep)

    # =========================================================================
    # Resolution
    # =========================================================================

    def get_parent(self, location: str) -> dict[str, _typing.Any]:
        """
        Return the mapping that holds the final key of a location.

        Missing intermediate nodes, and intermediate nodes that are not
        mappings, are replaced by empty dicts. Mappings that are not dicts
        are copied into a dict so their keys survive the write. Only mutating operations
        call this; use resolve() for reads.

        Example:
            >>> store.get_parent("a.b.c") is store.root["a"]["b"]
            True
        """
        current = self._root
        for key in paths.split(location, self.sep)[:-1]:
            child = current.get(key)
            if not values.is_mapping(child):
                child = {}
                current[key] = child
            elif not isinstance(child, dict):
                child = dict(child)
                current[key] = child
            current = child
        return current

    def resolve(self, location: str | None, default: _typing.Any = None) -> _typing.Any:
        """
        Look up a location without side effects.

        No listeners run and no nodes are created.

        Args:
            location: Location to look up.
            default: Returned when the location does not exist.

        Returns:
            The stored value (the tree itself for the root), or default.
        """
        current: _typing.Any = self._root
        for key in paths.split(location, self.sep):
            if not values.is_mapping(current) or key not in current:
                return default
            current = current[key]
        return current

    def get_child_locations(self, *args: str | None) -> list[str]:
        """
        Return the locations of the direct children of a mapping.

        Called as ``(location)``, ``(location, match)`` or
        ``(*parts, match)``. With a match only the child whose key equals
        it is returned. Values that are not mappings have no children.

        The location is read through get_value(), so get listeners run and
        a listener that fills the location in is seen. Nothing is created.

        Example:
            >>> store.root = {"a": {"foo": 1, "bar": 2}}
            >>> store.get_child_locations("a")
            ['a.foo', 'a.bar']
            >>> store.get_child_locations("a", "bar")
            ['a.bar']
        """
        location, match = self.normalize_location(*args)
        data = self.get_value(location)
        if not values.is_mapping(data):
            return []
        return [
            self.join(location, str(key))
            for key in data
            if not match or str(key) == match
        ]

    def get_descendant_locations(self, *args: str | None) -> list[str]:
        """
        Return every location below ``location`` whose key equals ``match``.

        Called as ``(location, match)`` or ``(*parts, match)``. Results are
        in depth-first order, parents before their descendants.

        Raises:
            MissingDescendantMatcherError: If no key to match is given.
        """
        if len(args) < 2:
            raise errors.MissingDescendantMatcherError()
        location, match = self.normalize_location(*args)
        if not match:
            raise errors.MissingDescendantMatcherError()
        return self._collect_descendants(location, match)

    def _collect_descendants(self, location: str, match: str) -> list[str]:
        found: list[str] = []
        for child in self.get_child_locations(location):
            if self.get_key_name(child) == match:
                found.append(child)
            found.extend(self._collect_descendants(child, match))
        return found

    def get_ancestor_location(self, *args: str | None) -> str | None:
        """
        Find the nearest location at or above ``location`` that has a child
        named ``match``.

        The search starts at ``location`` and moves up one level at a time
        until the root has been searched.

        Example:
            >>> store.set("children.one.two.three", 3)
            >>> store.get_ancestor_location("children.one.two.three", "one")
            'children.one'

        Returns:
            The location of the matching child, or None when there is none
            (or no key to match was given).
        """
        location, match = self.normalize_location(*args)
        if not match:
            return None
        while True:
            found = self.get_child_locations(location, match)
            if len(found) == 1:
                return found[0]
            if self.is_root(location):
                return None
            location = paths.parent_location(location, self.sep)

    # =========================================================================
    # Reads
    # =========================================================================

    def get_value(self, location: str | None, default: _typing.Any = None) -> _typing.Any:
        """
        Read a single location, running get listeners.

        The root returns the tree itself without running listeners. For any
        other location the get listeners receive the stored value (None when
        absent). The value returned is read after the listeners ran, so a
        listener that set() the location changes what the caller sees.

        Args:
            location: Location to read.
            default: Returned when the location does not exist.
        """
        if self.is_root(location):
            return self._root
        location = self._canonical(location)
        self._registry.process(listeners.ListenerAction.GET, location, self.resolve(location))
        return self.resolve(location, default)

    def get(self, *parts: str | None, default: _typing.Any = None) -> _typing.Any:
        """
        Read the location formed by joining ``parts``.

        Example:
            >>> store.get("base", "path.key4", "value")
        """
        return self.get_value(self.join(*parts), default=default)

    def touch(self, *parts: str | None) -> None:
        """Run the get listeners for a location, discarding the value."""
        self.get(*parts)

    def copy(self, *parts: str | None) -> _typing.Any:
        """Return an independent deep copy of the value at a location."""
        return values.clone(self.get(*parts))

    # =========================================================================
    # Writes
    # =========================================================================

    def set_value(self, location: str | None, value: _typing.Any) -> None:
        """
        Low-level write.

        The root merges ``value`` into the tree. Any other location is
        overwritten as-is: no mapping merge, no listeners.
        """
        if self.is_root(location):
            self._root = values.merge(self._root, value)
            return
        parent = self.get_parent(location)
        parent[self.get_key_name(location)] = value

    def set(self, *args: _typing.Any) -> None:
        """
        Write a value, merging mappings and running set listeners.

        Called as ``(location, value)`` or ``(*parts, value)``.

        - Root location: ``value`` is merged into the tree; no listeners run.
          A value that is not a mapping is rejected with InvalidMergeError
          instead of being silently ignored.
        - Both the stored and the new value are mappings: they are merged.
        - Otherwise the new value replaces the stored one.

        Set listeners run afterwards with the value actually stored.

        Raises:
            TypeError: If called without a location and a value.
            InvalidMergeError: If the root is set to something that is not
                a mapping.
        """
        if len(args) < 2:
            raise TypeError("set() requires a location and a value")
        location, value = self.normalize_location(*args)
        if self.is_root(location):
            self._root = values.merge(self._root, value)
            _logger.debug("Merged %s into root", type(value).__name__)
            return

        location = self._canonical(location)
        parent = self.get_parent(location)
        key = self.get_key_name(location)
        current = parent.get(key)
        if values.is_mapping(value) and values.is_mapping(current):
            value = values.merge(current, value)
        parent[key] = value
        _logger.debug("Set %r", location)
        self._registry.process(listeners.ListenerAction.SET, location, value)

    def append(self, *args: _typing.Any) -> None:
        """
        Append to the value at a location.

        Called as ``(location, value)`` or ``(*parts, value)``.

        ============  ==========  ===========================
        stored        new         result
        ============  ==========  ===========================
        absent        anything    set(location, new)
        str           str         set(location, stored + new)
        sequence      sequence    set(location, [*stored, *new])
        ============  ==========  ===========================

        Raises:
            TypeError: If called without a location and a value.
            InvalidAppendError: For any other combination, before anything
                is written.
        """
        if len(args) < 2:
            raise TypeError("append() requires a location and a value")
        location, value = self.normalize_location(*args)
        current = self.get(location, default=_MISSING)

        if current is _MISSING:
            self.set(location, value)
        elif isinstance(current, str) and isinstance(value, str):
            self.set(location, current + value)
        elif values.is_sequence(current) and values.is_sequence(value):
            self.set(location, [*current, *value])
        else:
            raise errors.InvalidAppendError(self._canonical(location), current, value)

    def remove(self, *parts: str | None) -> None:
        """
        Delete the location formed by joining ``parts``.

        Absent locations are a no-op and no intermediate nodes are created.
        The root has no key of its own, so removing it is a no-op too; use
        ``store.root = {}`` to empty the tree. No listeners run.
        """
        location = self.join(*parts)
        if self.is_root(location):
            return
        parent = self.resolve(paths.parent_location(location, self.sep))
        key = self.get_key_name(location)
        if values.is_mapping(parent) and key in parent:
            del parent[key]
            _logger.debug("Removed %r", location)

    def load(self, *args: _typing.Any) -> None:
        """
        Load a file and set its content at a location.

        Called as ``(location, file_path)`` or ``(*parts, file_path)``. The
        loader is chosen by file extension (see conftree.loaders); the
        result goes through set(), so mappings merge into existing ones.

        Raises:
            TypeError: If called without a location and a file path.
            ConfigFileNotFoundError: If the file does not exist.
            ConfigFileError: If the file cannot be read or parsed.
        """
        if len(args) < 2:
            raise TypeError("load() requires a location and a file path")
        location, file_path = self.normalize_location(*args)
        value = self._loaders.load(_pathlib.Path(file_path))
        self.set(location, value)
        _logger.debug("Loaded %s into %r", file_path, location)

    def register_loader(self, extension: str, loader: loaders.Loader) -> None:
        """Use ``loader`` for files with ``extension`` in load()."""
        self._loaders.register(extension, loader)

    # =========================================================================
    # Value operations
    # =========================================================================

    @staticmethod
    def clone(value: _typing.Any) -> _typing.Any:
        """Deep clone a value (see conftree.values.clone)."""
        return values.clone(value)

    @staticmethod
    def merge(
        to: _typing.Mapping[str, _typing.Any],
        from_: _typing.Mapping[str, _typing.Any],
        in_place: bool = False,
    ) -> dict[str, _typing.Any]:
        """Overlay ``from_`` onto ``to`` (see conftree.values.merge)."""
        return values.merge(to, from_, in_place)

    # =========================================================================
    # Listener dispatch
    # =========================================================================

    def process(
        self,
        action: listeners.ListenerAction | str,
        location: str,
        value: _typing.Any,
    ) -> None:
        """Run the listeners for an action on a location (guarded)."""
        self._registry.process(action, self._canonical(location), value)

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_json(self) -> str:
        """Serialize the tree to JSON using settings.json_indent."""
        return serializers.to_json(self._root, self.settings.json_indent)

    def to_yaml(self) -> str:
        """Serialize the tree to a YAML document."""
        return serializers.to_yaml(self._root)

"""
Listener registry for get/set interception.

Listeners are callbacks registered against a location suffix. When a store
reads or writes a location, every listener for that action whose match
string is a suffix of the location runs in registration order. The root
sentinel (the separator itself) matches every location.

Dispatch is guarded per (location, action): while the listeners for a pair
are running, dispatching the same pair again is skipped. A get listener
may therefore read or rewrite the location it listens on without
re-triggering itself. Listeners for other locations or actions still run.

Example:
    >>> registry = ListenerRegistry()
    >>> registry.register(ListenerAction.SET, "port", lambda loc, val: print(loc, val))
    >>> registry.process(ListenerAction.SET, "db.port", 5432)
    db.port 5432
"""

from __future__ import annotations

import dataclasses as _dataclasses
import enum as _enum
import logging as _logging
import typing as _typing

import conftree.constants as constants
import conftree.errors as errors

_logger = _logging.getLogger(__name__)

ListenerCallback = _typing.Callable[[str, _typing.Any], _typing.Any]
"""Callback signature: (location, value). The return value is ignored."""


class ListenerAction(_enum.Enum):
    """Store actions that can be listened to."""

    GET = "get"
    """Fired by Store.get()/get_value()/touch() before the value is returned."""

    SET = "set"
    """Fired by Store.set() after a non-root value is assigned."""


@_dataclasses.dataclass(frozen=True)
class Listener:
    """
    A single listener registration.

    Attributes:
        match: Location suffix to match, or the root sentinel for all.
        callback: Function called with (location, value).
        root: The root sentinel in effect when the listener was registered.
    """

    match: str
    callback: ListenerCallback
    root: str = constants.DEFAULT_SEPARATOR

    def matches(self, location: str) -> bool:
        """Check whether this listener fires for a location."""
        return self.match == self.root or location.endswith(self.match)


class ListenerRegistry:
    """
    Ordered listener lists per action plus the reentrancy guard.

    One registry belongs to one store. Listeners run synchronously and
    inline; an exception from a listener stops the remaining listeners of
    that dispatch and propagates to the caller.
    """

    def __init__(self) -> None:
        self._listeners: dict[ListenerAction, list[Listener]] = {
            action: [] for action in ListenerAction
        }
        self._processing: set[tuple[str, ListenerAction]] = set()

    def register(
        self,
        action: ListenerAction | str,
        match: str | None,
        callback: ListenerCallback | None,
        *,
        root: str = constants.DEFAULT_SEPARATOR,
    ) -> Listener:
        """
        Register a listener.

        Args:
            action: Action to listen to (enum member or its value).
            match: Location suffix, or the root sentinel to match everything.
            callback: Function called with (location, value).
            root: Root sentinel for this registration.

        Returns:
            The Listener, usable with unregister().

        Raises:
            MissingMatcherError: If match or callback is missing.
        """
        action = ListenerAction(action)
        if not match or callback is None:
            raise errors.MissingMatcherError(
                f"First argument to `listen.{action.value}()` must be a string "
                "to match against, followed by a callback."
            )
        listener = Listener(match=match, callback=callback, root=root)
        self._listeners[action].append(listener)
        _logger.debug("Registered %s listener for %r", action.value, match)
        return listener

    def unregister(self, action: ListenerAction | str, listener: Listener) -> None:
        """
        Remove a previously registered listener.

        Raises:
            ValueError: If the listener is not registered for the action.
        """
        self._listeners[ListenerAction(action)].remove(listener)

    def listeners(self, action: ListenerAction | str) -> list[Listener]:
        """Get the listeners for an action, in registration order."""
        return list(self._listeners[ListenerAction(action)])

    def clear(self, action: ListenerAction | str | None = None) -> None:
        """Remove all listeners for one action, or for every action."""
        if action is None:
            for listeners in self._listeners.values():
                listeners.clear()
        else:
            self._listeners[ListenerAction(action)].clear()

    def is_processing(self, action: ListenerAction | str, location: str) -> bool:
        """Check whether listeners for (location, action) are running right now."""
        return (location, ListenerAction(action)) in self._processing

    def process(
        self,
        action: ListenerAction | str,
        location: str,
        value: _typing.Any,
    ) -> None:
        """
        Run every matching listener for an action.

        Skipped entirely when the same (location, action) pair is already
        being processed further up the call stack.

        Args:
            action: The action that happened.
            location: Canonical location that was read or written.
            value: The value read or written.
        """
        action = ListenerAction(action)
        key = (location, action)
        if key in self._processing:
            _logger.debug("Skipping reentrant %s dispatch for %r", action.value, location)
            return

        self._processing.add(key)
        try:
            for listener in list(self._listeners[action]):
                if listener.matches(location):
                    listener.callback(location, value)
        finally:
            self._processing.discard(key)


class Listen:
    """
    Registration facade exposed as ``Store.listen``.

    Example:
        >>> store.listen.get("port", on_port_read)
        >>> store.listen.set(".", on_any_write)
    """

    def __init__(
        self,
        registry: ListenerRegistry,
        root: _typing.Callable[[], str],
    ) -> None:
        """
        Initialize the facade.

        Args:
            registry: Registry that receives the registrations.
            root: Returns the current root sentinel (it follows the
                store's separator setting).
        """
        self._registry = registry
        self._root = root

    def get(
        self,
        match: str | None = None,
        callback: ListenerCallback | None = None,
    ) -> Listener:
        """Register a listener fired when a matching location is read."""
        return self._registry.register(
            ListenerAction.GET, match, callback, root=self._root()
        )

    def set(
        self,
        match: str | None = None,
        callback: ListenerCallback | None = None,
    ) -> Listener:
        """Register a listener fired after a matching location is written."""
        return self._registry.register(
            ListenerAction.SET, match, callback, root=self._root()
        )

"""
Exceptions raised by conftree.

Every error derives from ConfTreeError. Where a builtin exception already
describes the failure (missing file, wrong type, missing argument), the
conftree error also inherits from it so callers can catch either.
"""

import pathlib as _pathlib


class ConfTreeError(Exception):
    """Base class for all conftree errors."""

    pass


class ConfigFileNotFoundError(ConfTreeError, FileNotFoundError):
    """Raised when load() is pointed at a file that does not exist."""

    def __init__(self, path: _pathlib.Path | str) -> None:
        self.path = _pathlib.Path(path)
        super().__init__(f"No file found at {self.path}")


class ConfigFileError(ConfTreeError):
    """Error reading or parsing a file passed to load()."""

    def __init__(self, path: _pathlib.Path | str, message: str) -> None:
        self.path = _pathlib.Path(path)
        super().__init__(f"Error in config file {self.path}: {message}")


class InvalidAppendError(ConfTreeError, TypeError):
    """Raised when append() is given types that cannot be concatenated."""

    def __init__(self, location: str, current: object, value: object) -> None:
        self.location = location
        super().__init__(
            f"Cannot append {type(value).__name__} to {type(current).__name__} "
            f"at '{location}': only str to str and sequence to sequence are supported"
        )


class InvalidMergeError(ConfTreeError, TypeError):
    """Raised when merge() is given something other than two mappings."""

    pass


class MissingMatcherError(ConfTreeError, ValueError):
    """Raised when a listener registration is missing its match string or callback."""

    pass


class MissingDescendantMatcherError(MissingMatcherError):
    """Raised when get_descendant_locations() is called without a key to match."""

    def __init__(self) -> None:
        super().__init__(
            'The second argument must be a "key" to match to any descendant keys.'
        )

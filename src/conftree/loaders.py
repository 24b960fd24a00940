"""
File loaders used by Store.load().

A loader is a callable taking a file path and returning the parsed value.
The registry picks one by file extension:

- .json        -> parsed JSON
- .yml / .yaml -> parsed YAML (safe loader)
- anything else -> raw text, trailing newline included

Extra formats can be plugged in with LoaderRegistry.register().
"""

from __future__ import annotations

import json as _json
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import yaml as _yaml

import conftree.errors as errors

_logger = _logging.getLogger(__name__)

Loader = _typing.Callable[[_pathlib.Path], _typing.Any]
"""Loader signature: (path) -> parsed value."""


def _read_text(path: _pathlib.Path) -> str:
    """
    Read a file as UTF-8 text.

    Raises:
        ConfigFileError: If the file cannot be read.
    """
    try:
        # newline="" keeps the file's own line endings
        with path.open(encoding="utf-8", newline="") as handle:
            return handle.read()
    except PermissionError as e:
        raise errors.ConfigFileError(path, f"permission denied: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise errors.ConfigFileError(path, f"cannot read file: {e}") from e


def load_json(path: _pathlib.Path) -> _typing.Any:
    """
    Load a JSON file.

    Raises:
        ConfigFileError: If the file is unreadable or not valid JSON.
    """
    content = _read_text(path)
    try:
        return _json.loads(content)
    except _json.JSONDecodeError as e:
        raise errors.ConfigFileError(path, f"invalid JSON: {e}") from e


def load_yaml(path: _pathlib.Path) -> _typing.Any:
    """
    Load a YAML file.

    An empty document loads as None.

    Raises:
        ConfigFileError: If the file is unreadable or not valid YAML.
    """
    content = _read_text(path)
    try:
        return _yaml.safe_load(content)
    except _yaml.YAMLError as e:
        raise errors.ConfigFileError(path, f"invalid YAML: {e}") from e


def load_text(path: _pathlib.Path) -> str:
    """Load a file as raw text."""
    return _read_text(path)


def _normalize_extension(extension: str) -> str:
    """Lowercase an extension and make sure it has a leading dot."""
    extension = extension.lower()
    return extension if extension.startswith(".") else f".{extension}"


class LoaderRegistry:
    """
    Maps file extensions to loaders.

    Extensions are compared case-insensitively. Files whose extension has
    no registered loader go to the fallback loader (raw text by default).
    """

    def __init__(
        self,
        loaders: _typing.Mapping[str, Loader] | None = None,
        *,
        fallback: Loader = load_text,
    ) -> None:
        """
        Initialize the registry.

        Args:
            loaders: Extension to loader mapping. Defaults to JSON and YAML.
            fallback: Loader for unregistered extensions.
        """
        if loaders is None:
            loaders = {
                ".json": load_json,
                ".yml": load_yaml,
                ".yaml": load_yaml,
            }
        self._loaders: dict[str, Loader] = {
            _normalize_extension(ext): loader for ext, loader in loaders.items()
        }
        self._fallback = fallback

    def register(self, extension: str, loader: Loader) -> None:
        """Register (or replace) the loader for an extension."""
        self._loaders[_normalize_extension(extension)] = loader

    def get(self, extension: str) -> Loader:
        """Get the loader for an extension, or the fallback."""
        return self._loaders.get(_normalize_extension(extension), self._fallback)

    @property
    def extensions(self) -> list[str]:
        """Registered extensions, in registration order."""
        return list(self._loaders)

    def load(self, path: _pathlib.Path | str) -> _typing.Any:
        """
        Load a file with the loader for its extension.

        Args:
            path: File to load.

        Returns:
            Parsed value (or raw text for unknown extensions).

        Raises:
            ConfigFileNotFoundError: If the file does not exist.
            ConfigFileError: If the file cannot be read or parsed.
        """
        path = _pathlib.Path(path)
        if not path.exists():
            raise errors.ConfigFileNotFoundError(path)
        loader = self.get(path.suffix)
        _logger.debug("Loading %s with %s", path, getattr(loader, "__name__", loader))
        return loader(path)

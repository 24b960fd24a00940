"""
Shared pytest fixtures for conftree tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pytest as _pytest

import conftree.config as config
import conftree.constants as constants
import conftree.store as store_module

FIXTURES_DIR = _pathlib.Path(__file__).parent / "fixtures"


# =============================================================================
# Environment isolation
# =============================================================================


@_pytest.fixture(autouse=True)
def _clean_conftree_env(monkeypatch: _pytest.MonkeyPatch) -> None:
    """Remove CONFTREE_* variables so settings always start from defaults."""
    for key in list(_os.environ):
        if key.startswith(constants.ENV_PREFIX):
            monkeypatch.delenv(key)


# =============================================================================
# Store fixtures
# =============================================================================


@_pytest.fixture
def settings() -> config.StoreSettings:
    """Default store settings."""
    return config.StoreSettings()


@_pytest.fixture
def store(settings: config.StoreSettings) -> store_module.Store:
    """A fresh, empty store."""
    return store_module.Store(settings=settings)


@_pytest.fixture
def populated_store(store: store_module.Store) -> store_module.Store:
    """A store holding a small nested tree."""
    store.root = {
        "obj": {"parent": {"child": {"val": "foo"}}},
        "types": {
            "arr": ["foo", "bar", "baz"],
            "str": "Foo, bar, baz.",
            "int": 10,
        },
    }
    return store


@_pytest.fixture
def fixtures_dir() -> _pathlib.Path:
    """Directory holding the sample files used by load tests."""
    return FIXTURES_DIR


@_pytest.fixture
def recorder() -> tuple[list[tuple[str, _typing.Any]], _typing.Callable[[str, _typing.Any], None]]:
    """A listener callback that records every (location, value) it receives."""
    calls: list[tuple[str, _typing.Any]] = []

    def record(location: str, value: _typing.Any) -> None:
        calls.append((location, value))

    return calls, record

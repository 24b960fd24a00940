"""
Store settings using pydantic-settings.

Loads store configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with the CONFTREE_ prefix
3. Field defaults from conftree.constants (lowest)

Examples:
  CONFTREE_SEPARATOR=/
  CONFTREE_NORMALIZED_SEPARATOR=_
  CONFTREE_JSON_INDENT="  "

Settings are validated on assignment, so a store picks up a changed
separator on the very next call:

    >>> store = Store()
    >>> store.settings.separator = "/"
    >>> store.set("a/b", 1)
"""

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import conftree.constants as constants


class StoreSettings(_pydantic_settings.BaseSettings):
    """
    Configuration for a single Store.

    All settings can be overridden via environment variables with the
    CONFTREE_ prefix (e.g. CONFTREE_SEPARATOR).
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix=constants.ENV_PREFIX,
        env_file=None,
        extra="forbid",
        validate_assignment=True,
    )

    separator: str = _pydantic.Field(
        default=constants.DEFAULT_SEPARATOR,
        min_length=1,
        description="Separator between location segments",
    )
    """Separator between location segments. The separator alone is the root."""

    normalized_separator: str = _pydantic.Field(
        default=constants.DEFAULT_NORMALIZED_SEPARATOR,
        description="Replacement for the separator in normalized keys",
    )
    """Replacement used by Store.normalize_key()."""

    json_indent: str | None = _pydantic.Field(
        default=constants.DEFAULT_JSON_INDENT,
        description="Indentation unit for Store.to_json()",
    )
    """Indentation unit per JSON nesting level. None or "" gives compact output."""

    @_pydantic.field_validator("separator")
    @classmethod
    def _check_separator(cls, value: str) -> str:
        """Reject separators that would collide with the pop token."""
        if constants.POP_TOKEN in value or value in constants.POP_TOKEN:
            raise ValueError(
                f"separator {value!r} conflicts with the pop token {constants.POP_TOKEN!r}"
            )
        return value

    @property
    def root_location(self) -> str:
        """The location string that denotes the whole tree."""
        return self.separator

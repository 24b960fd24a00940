"""
Shared constants for conftree.

This module provides a single source of truth for default values
used across the store, the path helpers and the settings model.
"""

# Location syntax defaults
DEFAULT_SEPARATOR = "."
"""Separator between segments of a location string."""

DEFAULT_NORMALIZED_SEPARATOR = "-"
"""Replacement for the separator when normalizing keys."""

POP_TOKEN = "<<"
"""Location segment that drops the previously pushed segment."""

# Serialization defaults
DEFAULT_JSON_INDENT = "\t"
"""Indentation unit for JSON output (None for compact output)."""

# Environment
ENV_PREFIX = "CONFTREE_"
"""Prefix for environment variables read by StoreSettings."""

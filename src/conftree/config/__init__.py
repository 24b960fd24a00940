"""
Configuration module for conftree.

Uses pydantic-settings for environment variable loading.
"""

from conftree.config.settings import StoreSettings

__all__ = ["StoreSettings"]

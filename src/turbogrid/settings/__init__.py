"""User settings for the grid viewer."""

from __future__ import annotations

from .schema import DEFAULT_SETTINGS, SETTINGS_SCHEMA, merge_with_defaults

__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults"]

"""Viewport cache and fetch coordination for very large on-demand grids."""

from __future__ import annotations

__version__ = "0.1.0"

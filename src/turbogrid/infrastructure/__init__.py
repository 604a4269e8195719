"""Concrete grid sources."""

from .demo_grid_source import DemoGridSource, column_name

__all__ = ["DemoGridSource", "column_name"]

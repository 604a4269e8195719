"""Presentation-facing layers of the grid viewer."""

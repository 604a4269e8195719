"""Domain types shared by the grid source and the viewport."""

from .grid_source import GridSource
from .models import Cell, GridDimensions, HeaderSet, RowRecord, ViewportSnapshot

__all__ = [
    "Cell",
    "GridDimensions",
    "GridSource",
    "HeaderSet",
    "RowRecord",
    "ViewportSnapshot",
]

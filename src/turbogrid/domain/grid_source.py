"""Contract of the external grid engine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from .models import GridDimensions, RowRecord


class GridSource(ABC):
    """Engine that owns the grid's data.

    The read methods block.  Callers must run them through a fetch dispatcher
    so they never stall the thread that owns the viewport.
    """

    @abstractmethod
    def dimensions(self) -> GridDimensions:
        """Return the grid size; fixed for the lifetime of the source."""

    @abstractmethod
    def fetch_headers(self, col_start: int, col_count: int) -> List[str]:
        """Return exactly ``col_count`` labels for ``[col_start, col_start + col_count)``.

        Raises :class:`~turbogrid.errors.GridRangeError` when the range leaves
        the grid.
        """

    @abstractmethod
    def fetch_rows(
        self,
        row_start: int,
        row_count: int,
        col_start: int,
        col_count: int,
    ) -> List[RowRecord]:
        """Return up to ``row_count`` rows of ``col_count`` cells each.

        The result is shorter than ``row_count`` only when the request runs
        past the last row.
        """


__all__ = ["GridSource"]

"""Synthetic grid engine that computes every cell on demand.

Nothing is stored: a header is the spreadsheet name of its column and a cell
reads ``"<column>,<row>"``.  Optional latency and fault injection make the
source useful for exercising the viewport's race handling.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, List, Optional

from ..config import DEMO_TOTAL_COLS, DEMO_TOTAL_ROWS
from ..domain.grid_source import GridSource
from ..domain.models import Cell, GridDimensions, RowRecord
from ..errors import GridRangeError, SourceUnavailableError

_LOGGER = logging.getLogger(__name__)


def column_name(index: int) -> str:
    """Return the spreadsheet label for zero-based column *index* (0 -> ``A``, 26 -> ``AA``)."""

    if index < 0:
        raise ValueError(f"Column index must be non-negative, got {index}")
    letters: list[str] = []
    n = index
    while True:
        n, remainder = divmod(n, 26)
        letters.append(chr(ord("A") + remainder))
        if n == 0:
            break
        n -= 1
    return "".join(reversed(letters))


class DemoGridSource(GridSource):
    """In-memory engine for a grid of arbitrary size."""

    def __init__(
        self,
        total_rows: int = DEMO_TOTAL_ROWS,
        total_cols: int = DEMO_TOTAL_COLS,
        *,
        latency: float = 0.0,
        fail_when: Optional[Callable[[str, int], bool]] = None,
    ) -> None:
        self._dimensions = GridDimensions(total_rows, total_cols)
        self._latency = max(0.0, latency)
        # ``fail_when(kind, start)`` returns True to simulate a transport
        # fault; kind is "headers" or "rows".
        self._fail_when = fail_when
        self._lock = threading.Lock()
        self._calls = 0

    @property
    def call_count(self) -> int:
        with self._lock:
            return self._calls

    def dimensions(self) -> GridDimensions:
        return self._dimensions

    def fetch_headers(self, col_start: int, col_count: int) -> List[str]:
        self._begin_call("headers", col_start)
        self._check_columns(col_start, col_count)
        return [column_name(col_start + offset) for offset in range(col_count)]

    def fetch_rows(
        self,
        row_start: int,
        row_count: int,
        col_start: int,
        col_count: int,
    ) -> List[RowRecord]:
        self._begin_call("rows", row_start)
        if row_start < 0 or row_count < 0:
            raise GridRangeError(f"Invalid row range start={row_start} count={row_count}")
        self._check_columns(col_start, col_count)

        labels = [column_name(col_start + offset) for offset in range(col_count)]
        stop = min(row_start + row_count, self._dimensions.total_rows)
        return [
            RowRecord(index=row, cells=tuple(Cell(f"{label},{row}") for label in labels))
            for row in range(row_start, stop)
        ]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _begin_call(self, kind: str, start: int) -> None:
        with self._lock:
            self._calls += 1
        if self._latency:
            time.sleep(self._latency)
        if self._fail_when is not None and self._fail_when(kind, start):
            _LOGGER.debug("Injected %s failure at %d", kind, start)
            raise SourceUnavailableError(f"Simulated {kind} fetch failure at {start}")

    def _check_columns(self, col_start: int, col_count: int) -> None:
        if col_start < 0 or col_count < 0:
            raise GridRangeError(f"Invalid column range start={col_start} count={col_count}")
        if col_start + col_count > self._dimensions.total_cols:
            raise GridRangeError(
                f"Columns [{col_start}, {col_start + col_count}) exceed "
                f"{self._dimensions.total_cols} total columns"
            )


__all__ = ["DemoGridSource", "column_name"]

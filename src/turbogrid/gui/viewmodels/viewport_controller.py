"""Viewport controller, pure Python with no Qt dependency.

Decides which rows and headers the presentation layer needs, fetches them
through a :class:`FetchDispatcher`, and keeps the page cache coherent with
the current column window.

Every dispatched request carries the window generation it was issued under.
When the completion arrives the stamp is compared with the live generation
and the result is dropped if the window has moved since.  Stale completions
are expected under fast navigation and are not errors.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, List, Optional

from ...config import DEFAULT_DRAG_THRESHOLD, DEFAULT_ROWS_PER_PAGE, DEFAULT_VISIBLE_COLS
from ...domain.grid_source import GridSource
from ...domain.models import GridDimensions, HeaderSet, RowRecord, ViewportSnapshot
from .column_window import ColumnWindow
from .page_cache import PageCache
from .signal import ObservableProperty, Signal

if TYPE_CHECKING:
    from .fetch_dispatcher import FetchDispatcher


class ViewportController:
    """Owns the column window and page cache of one grid session.

    All methods must be called from the thread that owns the controller; the
    dispatcher delivers completions on that same thread.
    """

    def __init__(
        self,
        source: GridSource,
        dispatcher: FetchDispatcher,
        *,
        rows_per_page: int = DEFAULT_ROWS_PER_PAGE,
        visible_cols: int = DEFAULT_VISIBLE_COLS,
        drag_threshold: int = DEFAULT_DRAG_THRESHOLD,
    ) -> None:
        self._source = source
        self._dispatcher = dispatcher
        self._dimensions: GridDimensions = source.dimensions()
        self._window = ColumnWindow(self._dimensions.total_cols, visible_cols)
        self._cache = PageCache(rows_per_page, generation=self._window.generation)
        self._drag_threshold = max(0, drag_threshold)
        self._disposed = False
        self._logger = logging.getLogger(__name__)

        # Observable properties
        self.headers = ObservableProperty(HeaderSet.empty(), "headers")
        self.window_start = ObservableProperty(self._window.start, "window_start")

        # Signals
        self.rows_installed = Signal("rows_installed")  # emits (page_index, rows)
        self.page_failed = Signal("page_failed")  # emits (page_index, message)
        self.headers_failed = Signal("headers_failed")  # emits (message,)

    # -- read surface ------------------------------------------------------

    @property
    def dimensions(self) -> GridDimensions:
        return self._dimensions

    @property
    def window_width(self) -> int:
        return self._window.width

    @property
    def max_window_start(self) -> int:
        return self._window.max_start

    @property
    def generation(self) -> int:
        return self._window.generation

    @property
    def rows_per_page(self) -> int:
        return self._cache.rows_per_page

    @property
    def drag_threshold(self) -> int:
        return self._drag_threshold

    @property
    def loading_pages(self) -> frozenset[int]:
        return self._cache.loading_pages

    @property
    def resident_count(self) -> int:
        return self._cache.resident_count

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def row(self, index: int) -> Optional[RowRecord]:
        """Return the resident row at *index*, or ``None`` if not loaded yet."""
        return self._cache.get(index)

    def is_resident(self, index: int) -> bool:
        return self._cache.get(index) is not None

    def snapshot(self) -> ViewportSnapshot:
        return ViewportSnapshot(
            headers=self.headers.value,
            window_start=self._window.start,
            window_width=self._window.width,
            generation=self._window.generation,
            rows=MappingProxyType(dict(self._cache.rows)),
            loading_pages=self._cache.loading_pages,
        )

    # -- lifecycle ---------------------------------------------------------

    def start(self) -> None:
        """Request the headers of the initial window."""
        if self._disposed:
            return
        self._refresh_headers()

    def dispose(self) -> None:
        """Stop accepting completions and release presentation handlers.

        Fetches already in flight still finish, but their results are
        discarded like any other stale completion.
        """
        if self._disposed:
            return
        self._disposed = True
        self._cache.clear()
        for signal in (self.rows_installed, self.page_failed, self.headers_failed):
            signal.disconnect_all()
        self.headers.changed.disconnect_all()
        self.window_start.changed.disconnect_all()

    # -- row visibility ----------------------------------------------------

    def on_row_visible(self, row: int) -> None:
        """React to row *row* entering the rendered range."""
        if self._disposed:
            return
        if row < 0 or row >= self._dimensions.total_rows:
            return
        if self._cache.get(row) is not None:
            return
        self._request_page(self._cache.page_of(row))

    def on_rows_visible(self, first: int, last: int) -> None:
        """React to the inclusive range ``[first, last]`` being rendered."""
        if self._disposed:
            return
        first = max(first, 0)
        last = min(last, self._dimensions.total_rows - 1)
        if first > last:
            return
        page_size = self._cache.rows_per_page
        for page_index in range(first // page_size, last // page_size + 1):
            page_start, page_stop = self._cache.page_range(page_index)
            rows = range(max(page_start, first), min(page_stop, last + 1))
            if any(self._cache.get(row) is None for row in rows):
                self._request_page(page_index)

    def _request_page(self, page_index: int) -> None:
        if self._cache.is_loading(page_index):
            return
        if self._window.width == 0:
            return

        page_start, page_stop = self._cache.page_range(page_index)
        row_count = min(page_stop, self._dimensions.total_rows) - page_start
        generation = self._window.generation
        col_start = self._window.start
        col_count = self._window.width

        self._cache.mark_loading(page_index)
        self._logger.debug(
            "Fetching page %d (rows %d..%d, cols %d..%d) for generation %d",
            page_index,
            page_start,
            page_start + row_count,
            col_start,
            col_start + col_count,
            generation,
        )
        source = self._source
        self._dispatcher.submit(
            lambda: source.fetch_rows(page_start, row_count, col_start, col_count),
            lambda rows: self._on_page_loaded(page_index, generation, rows),
            lambda error: self._on_page_failed(page_index, generation, error),
        )

    def _on_page_loaded(self, page_index: int, generation: int, rows: List[RowRecord]) -> None:
        if self._disposed:
            return
        rows = list(rows)
        installed = self._cache.install(rows, generation)
        self._cache.finish_loading(page_index, generation)
        if installed:
            self.rows_installed.emit(page_index, rows)

    def _on_page_failed(self, page_index: int, generation: int, error: BaseException) -> None:
        if self._disposed:
            return
        self._cache.finish_loading(page_index, generation)
        if generation != self._window.generation:
            return
        self._logger.warning("Failed to fetch page %d: %s", page_index, error)
        self.page_failed.emit(page_index, str(error))

    # -- navigation --------------------------------------------------------

    def shift_window(self, delta: int) -> bool:
        """Scroll the column window by *delta* columns, saturating at the edges."""
        if self._disposed:
            return False
        return self._apply(self._window.shift(delta))

    def jump_to_column(self, col: int) -> bool:
        """Place the column window at *col*, saturating at the edges."""
        if self._disposed:
            return False
        return self._apply(self._window.jump_to(col))

    def drag_to_column(self, col: int) -> bool:
        """Slider path: only move once *col* is far enough from the current start."""
        if self._disposed:
            return False
        if abs(col - self._window.start) <= self._drag_threshold:
            return False
        return self.jump_to_column(col)

    def jump_to(self, row: Optional[int] = None, col: Optional[int] = None) -> Optional[int]:
        """Jump to a cell coordinate.

        The column moves the window; the row is clamped into the grid,
        requested, and returned so the caller can scroll to it.
        """
        if self._disposed:
            return None
        if col is not None:
            self.jump_to_column(col)
        if row is None or self._dimensions.total_rows == 0:
            return None
        target = max(0, min(row, self._dimensions.total_rows - 1))
        self.on_row_visible(target)
        return target

    def _apply(self, moved: bool) -> bool:
        if not moved:
            return False
        self._cache.invalidate(self._window.generation)
        self.window_start.value = self._window.start
        self._refresh_headers()
        return True

    # -- headers -----------------------------------------------------------

    def _refresh_headers(self) -> None:
        generation = self._window.generation
        col_start = self._window.start
        col_count = self._window.width
        source = self._source
        self._dispatcher.submit(
            lambda: source.fetch_headers(col_start, col_count),
            lambda labels: self._on_headers_loaded(generation, col_start, labels),
            lambda error: self._on_headers_failed(generation, error),
        )

    def _on_headers_loaded(self, generation: int, col_start: int, labels: List[str]) -> None:
        if self._disposed or generation != self._window.generation:
            self._logger.debug("Discarding headers for stale generation %d", generation)
            return
        self.headers.value = HeaderSet(col_start=col_start, labels=tuple(labels))

    def _on_headers_failed(self, generation: int, error: BaseException) -> None:
        if self._disposed or generation != self._window.generation:
            return
        self._logger.warning("Failed to fetch headers at column %d: %s", self._window.start, error)
        self.headers_failed.emit(str(error))


__all__ = ["ViewportController"]

"""Row cache with per-page in-flight tracking."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Set, Tuple

from ...domain.models import RowRecord

_LOGGER = logging.getLogger(__name__)


class PageCache:
    """Rows of the current column window, keyed by row index.

    The cache is bound to one window generation at a time.  Rows arriving for
    any other generation are dropped, and moving to a new generation empties
    the cache completely; it is never pruned row by row.

    The loading set gates fetches: a page index in it has exactly one
    outstanding request, and callers must not issue another for it.
    """

    def __init__(self, rows_per_page: int, generation: int = 0) -> None:
        if rows_per_page <= 0:
            raise ValueError(f"rows_per_page must be positive, got {rows_per_page}")
        self._rows_per_page = rows_per_page
        self._generation = generation
        self._rows: Dict[int, RowRecord] = {}
        self._loading: Set[int] = set()

    # -- properties --------------------------------------------------------

    @property
    def rows_per_page(self) -> int:
        return self._rows_per_page

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def resident_count(self) -> int:
        return len(self._rows)

    @property
    def loading_pages(self) -> frozenset[int]:
        return frozenset(self._loading)

    @property
    def rows(self) -> Mapping[int, RowRecord]:
        return MappingProxyType(self._rows)

    # -- page arithmetic ---------------------------------------------------

    def page_of(self, row_index: int) -> int:
        return row_index // self._rows_per_page

    def page_range(self, page_index: int) -> Tuple[int, int]:
        """Return the half-open row range ``(start, stop)`` covered by *page_index*."""
        start = page_index * self._rows_per_page
        return start, start + self._rows_per_page

    # -- queries -----------------------------------------------------------

    def get(self, row_index: int) -> Optional[RowRecord]:
        return self._rows.get(row_index)

    def is_loading(self, page_index: int) -> bool:
        return page_index in self._loading

    # -- mutation ----------------------------------------------------------

    def mark_loading(self, page_index: int) -> None:
        self._loading.add(page_index)

    def finish_loading(self, page_index: int, for_generation: int) -> None:
        """Release the loading marker of a fetch started under *for_generation*.

        After a generation change the marker may belong to a newer fetch of
        the same page, so a release from an older generation is ignored.
        """
        if for_generation != self._generation:
            return
        self._loading.discard(page_index)

    def install(self, rows: Iterable[RowRecord], for_generation: int) -> bool:
        """Store *rows* if they were fetched for the active generation.

        Returns ``False`` and leaves the cache untouched for stale results.
        """
        if for_generation != self._generation:
            _LOGGER.debug(
                "Dropping rows fetched for generation %d (active %d)",
                for_generation,
                self._generation,
            )
            return False
        for row in rows:
            self._rows[row.index] = row
        return True

    def clear(self) -> None:
        self._rows.clear()
        self._loading.clear()

    def invalidate(self, generation: int) -> None:
        """Drop everything and bind the cache to *generation*."""
        self.clear()
        self._generation = generation


__all__ = ["PageCache"]

"""Horizontal window over the grid's columns."""

from __future__ import annotations

import logging

_LOGGER = logging.getLogger(__name__)


class ColumnWindow:
    """Start offset and width of the visible column range.

    ``start`` always lies in ``[0, total_cols - width]``.  Every call that
    actually moves the window bumps ``generation``; calls that would leave the
    window where it is (including attempts to scroll past either edge) change
    nothing.  The generation carries no data, it only identifies a window
    state so late fetch results can be recognised as stale.
    """

    def __init__(self, total_cols: int, width: int, start: int = 0) -> None:
        if total_cols < 0:
            raise ValueError(f"total_cols must be non-negative, got {total_cols}")
        if width <= 0:
            raise ValueError(f"width must be positive, got {width}")
        self._total_cols = total_cols
        # A grid narrower than the display shows all of its columns.
        self._width = min(width, total_cols)
        self._start = 0
        self._generation = 0
        self._start = self.clamp(start)

    # -- properties --------------------------------------------------------

    @property
    def start(self) -> int:
        return self._start

    @property
    def width(self) -> int:
        return self._width

    @property
    def stop(self) -> int:
        return self._start + self._width

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def total_cols(self) -> int:
        return self._total_cols

    @property
    def max_start(self) -> int:
        return max(0, self._total_cols - self._width)

    # -- navigation --------------------------------------------------------

    def clamp(self, col: int) -> int:
        """Return *col* saturated into the valid start range."""
        return max(0, min(col, self.max_start))

    def shift(self, delta: int) -> bool:
        """Move the window by *delta* columns. Returns ``True`` if it moved."""
        return self._move_to(self._start + delta)

    def jump_to(self, col: int) -> bool:
        """Place the window at column *col*. Returns ``True`` if it moved."""
        return self._move_to(col)

    def _move_to(self, candidate: int) -> bool:
        new_start = self.clamp(candidate)
        if new_start == self._start:
            return False
        self._start = new_start
        self._generation += 1
        _LOGGER.debug(
            "Column window moved to %d (requested %d), generation %d",
            new_start,
            candidate,
            self._generation,
        )
        return True

    def __repr__(self) -> str:
        return (
            f"ColumnWindow(start={self._start}, width={self._width}, "
            f"generation={self._generation})"
        )


__all__ = ["ColumnWindow"]

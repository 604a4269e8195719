from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Tuple


@dataclass(frozen=True)
class GridDimensions:
    total_rows: int
    total_cols: int

    def __post_init__(self) -> None:
        if self.total_rows < 0 or self.total_cols < 0:
            raise ValueError(
                f"Grid dimensions must be non-negative, got "
                f"{self.total_rows} x {self.total_cols}"
            )


@dataclass(frozen=True)
class Cell:
    content: str


@dataclass(frozen=True)
class RowRecord:
    index: int
    cells: Tuple[Cell, ...] = ()

    def __post_init__(self) -> None:
        # Sources may hand back lists; store an immutable copy.
        if not isinstance(self.cells, tuple):
            object.__setattr__(self, "cells", tuple(self.cells))

    @property
    def contents(self) -> Tuple[str, ...]:
        return tuple(cell.content for cell in self.cells)


@dataclass(frozen=True)
class HeaderSet:
    """Column labels for the window starting at ``col_start``."""

    col_start: int = 0
    labels: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.labels, tuple):
            object.__setattr__(self, "labels", tuple(self.labels))

    @classmethod
    def empty(cls) -> HeaderSet:
        return cls()

    def __len__(self) -> int:
        return len(self.labels)

    def __iter__(self) -> Iterator[str]:
        return iter(self.labels)

    def __getitem__(self, offset: int) -> str:
        return self.labels[offset]


@dataclass(frozen=True)
class ViewportSnapshot:
    """Read-only picture of the viewport handed to the presentation layer."""

    headers: HeaderSet
    window_start: int
    window_width: int
    generation: int
    rows: Mapping[int, RowRecord] = field(default_factory=lambda: MappingProxyType({}))
    loading_pages: frozenset[int] = frozenset()

    def row(self, index: int) -> RowRecord | None:
        return self.rows.get(index)

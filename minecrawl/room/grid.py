"""Grid model: cell types plus the parallel per-cell metadata array.

Storage is column-major (``types[x][y]``) like the rest of the generator code.
Accessors bounds-check every coordinate and return sentinels instead of
raising, so callers can look up neighbours without guarding.
"""
from __future__ import annotations

from typing import Iterator, List, Optional

from .cells import CellMeta, Coord2D, MetaGrid, TypeGrid
from .tiles import FLOOR, OUT_OF_BOUNDS, WALL

CARDINAL = ((0, -1), (1, 0), (0, 1), (-1, 0))
DIAGONAL = ((-1, -1), (1, -1), (1, 1), (-1, 1))
EIGHT_WAY = CARDINAL + DIAGONAL


class Grid:
    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.types: TypeGrid = [[FLOOR for _ in range(height)] for _ in range(width)]
        self.meta: MetaGrid = [[CellMeta() for _ in range(height)] for _ in range(width)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_border(self, x: int, y: int) -> bool:
        return x in (0, self.width - 1) or y in (0, self.height - 1)

    def is_interior(self, x: int, y: int) -> bool:
        return 0 < x < self.width - 1 and 0 < y < self.height - 1

    def cell_type(self, x: int, y: int) -> str:
        if not self.in_bounds(x, y):
            return OUT_OF_BOUNDS
        return self.types[x][y]

    def set_cell_type(self, x: int, y: int, cell_type: str) -> None:
        if self.in_bounds(x, y):
            self.types[x][y] = cell_type

    def is_valid_move(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.types[x][y] != WALL

    def is_floor(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.types[x][y] == FLOOR

    def cell(self, x: int, y: int) -> Optional[CellMeta]:
        if not self.in_bounds(x, y):
            return None
        return self.meta[x][y]

    def neighbors4(self, x: int, y: int) -> Iterator[Coord2D]:
        for dx, dy in CARDINAL:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                yield nx, ny

    def neighbors8(self, x: int, y: int) -> Iterator[Coord2D]:
        for dx, dy in EIGHT_WAY:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                yield nx, ny

    def coords(self) -> Iterator[Coord2D]:
        for x in range(self.width):
            for y in range(self.height):
                yield x, y

    def interior_coords(self) -> Iterator[Coord2D]:
        for x in range(1, self.width - 1):
            for y in range(1, self.height - 1):
                yield x, y

    def floor_cells(self) -> List[Coord2D]:
        return [(x, y) for x, y in self.coords() if self.types[x][y] == FLOOR]

    def count(self, cell_type: str) -> int:
        return sum(col.count(cell_type) for col in self.types)


__all__ = ["Grid", "CARDINAL", "DIAGONAL", "EIGHT_WAY"]

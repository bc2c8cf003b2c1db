"""Fog-of-war: hidden flags, single-cell reveal and blank-region flood fill."""
from __future__ import annotations

from typing import Collection, Set

from .cells import Coord2D
from .grid import CARDINAL, DIAGONAL, Grid
from .tiles import WALL


def is_hidden(grid: Grid, x: int, y: int) -> bool:
    meta = grid.cell(x, y)
    return meta is not None and meta.hidden


def reveal_cell(grid: Grid, x: int, y: int) -> None:
    meta = grid.cell(x, y)
    if meta is not None:
        meta.hidden = False


def flood_fill_unhide(grid: Grid, x: int, y: int, occupied: Collection[Coord2D]) -> Set[Coord2D]:
    """Reveal the blank region containing (x, y) plus its numbered rim.

    A cell stops the expansion (after being revealed) when it has a hint, holds
    an entity or is a wall. Blank cells expand into their four cardinal
    neighbours and also uncover, without expanding, any diagonal neighbour that
    carries a hint. Returns the set of processed cells.
    """
    visited: Set[Coord2D] = set()
    stack = [(x, y)]
    while stack:
        cx, cy = stack.pop()
        if (cx, cy) in visited or not grid.in_bounds(cx, cy):
            continue
        visited.add((cx, cy))
        meta = grid.meta[cx][cy]
        meta.hidden = False
        if meta.hint > 0 or (cx, cy) in occupied or grid.types[cx][cy] == WALL:
            continue
        for dx, dy in DIAGONAL:
            nx, ny = cx + dx, cy + dy
            if grid.in_bounds(nx, ny) and grid.meta[nx][ny].hint > 0:
                grid.meta[nx][ny].hidden = False
        for dx, dy in CARDINAL:
            stack.append((cx + dx, cy + dy))
    return visited


def on_enter(grid: Grid, x: int, y: int, occupied: Collection[Coord2D], doors: Collection[Coord2D]) -> bool:
    """Handle a player stepping onto (x, y). Returns True if anything was newly revealed."""
    meta = grid.cell(x, y)
    if meta is None:
        return False
    if not meta.hidden:
        return False
    meta.hidden = False
    if (x, y) in doors:
        return True
    if meta.hint == 0 and (x, y) not in occupied and grid.types[x][y] != WALL:
        flood_fill_unhide(grid, x, y, occupied)
    return True


__all__ = ["is_hidden", "reveal_cell", "flood_fill_unhide", "on_enter"]

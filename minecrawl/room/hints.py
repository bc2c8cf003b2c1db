"""Minesweeper-style hint numbers.

Every entity (bomb, enemy or coin) adds one to the hint of each of its eight
neighbours. Always recomputed from scratch; rooms are small.
"""
from __future__ import annotations

from typing import Iterable

from .grid import Grid
from .tiles import BOMB, COIN, ENEMY

_FLAG_ATTR = {
    BOMB: "has_neighbor_bomb",
    ENEMY: "has_neighbor_enemy",
    COIN: "has_neighbor_coin",
}


def compute_hints(grid: Grid, entities: Iterable) -> None:
    for col in grid.meta:
        for meta in col:
            meta.clear_hint()
    for ent in entities:
        attr = _FLAG_ATTR[ent.kind]
        for nx, ny in grid.neighbors8(ent.x, ent.y):
            meta = grid.meta[nx][ny]
            meta.hint += 1
            setattr(meta, attr, True)


__all__ = ["compute_hints"]

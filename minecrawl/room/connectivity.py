"""Reachability checks over the room grid.

All searches are 4-directional BFS. ``blockers`` is any container of (x, y)
positions treated as impassable in addition to walls (usually bomb positions).
"""
from __future__ import annotations

from collections import deque
from typing import Collection, Dict, List, Optional, Set

from .cells import Coord2D
from .grid import Grid
from .tiles import FLOOR, WALL

_NO_BLOCKERS: frozenset = frozenset()


def has_path(grid: Grid, start: Coord2D, end: Coord2D, blockers: Collection[Coord2D] = _NO_BLOCKERS) -> bool:
    if start in blockers or end in blockers:
        return False
    if not (grid.is_floor(*start) and grid.is_floor(*end)):
        return False
    q = deque([start])
    visited = {start}
    while q:
        cur = q.popleft()
        if cur == end:
            return True
        for nxt in grid.neighbors4(*cur):
            if nxt in visited or nxt in blockers:
                continue
            if grid.types[nxt[0]][nxt[1]] != FLOOR:
                continue
            visited.add(nxt)
            q.append(nxt)
    return False


def reachable_from(grid: Grid, start: Coord2D, blockers: Collection[Coord2D] = _NO_BLOCKERS) -> Set[Coord2D]:
    if start in blockers or not grid.is_floor(*start):
        return set()
    q = deque([start])
    visited = {start}
    while q:
        cx, cy = q.popleft()
        for nxt in grid.neighbors4(cx, cy):
            if nxt in visited or nxt in blockers:
                continue
            if grid.types[nxt[0]][nxt[1]] == FLOOR:
                visited.add(nxt)
                q.append(nxt)
    return visited


def has_no_isolated_regions(grid: Grid, entrance: Coord2D, blockers: Collection[Coord2D] = _NO_BLOCKERS) -> bool:
    """True iff every non-blocked floor cell is reachable from the entrance."""
    open_cells = sum(
        1 for x, y in grid.coords() if grid.types[x][y] == FLOOR and (x, y) not in blockers
    )
    return len(reachable_from(grid, entrance, blockers)) == open_cells


def shortest_path_ignoring_hazards(grid: Grid, start: Coord2D, end: Coord2D) -> Optional[List[Coord2D]]:
    """BFS where only walls block; returns start..end inclusive or None."""
    if grid.cell_type(*start) != FLOOR or grid.cell_type(*end) != FLOOR:
        return None
    parent: Dict[Coord2D, Optional[Coord2D]] = {start: None}
    q = deque([start])
    while q:
        cur = q.popleft()
        if cur == end:
            path = []
            node: Optional[Coord2D] = cur
            while node is not None:
                path.append(node)
                node = parent[node]
            path.reverse()
            return path
        for nxt in grid.neighbors4(*cur):
            if nxt in parent or grid.types[nxt[0]][nxt[1]] == WALL:
                continue
            parent[nxt] = cur
            q.append(nxt)
    return None


def zero_hint_clusters(grid: Grid, occupied: Collection[Coord2D]) -> List[List[Coord2D]]:
    """Maximal 4-connected clusters of interior floor cells with hint 0 and no entity."""

    def eligible(x: int, y: int) -> bool:
        return (
            grid.is_interior(x, y)
            and grid.types[x][y] == FLOOR
            and grid.meta[x][y].hint == 0
            and (x, y) not in occupied
        )

    seen: Set[Coord2D] = set()
    clusters: List[List[Coord2D]] = []
    for x, y in grid.interior_coords():
        if (x, y) in seen or not eligible(x, y):
            continue
        cluster = []
        q = deque([(x, y)])
        seen.add((x, y))
        while q:
            cur = q.popleft()
            cluster.append(cur)
            for nx, ny in grid.neighbors4(*cur):
                if (nx, ny) not in seen and eligible(nx, ny):
                    seen.add((nx, ny))
                    q.append((nx, ny))
        clusters.append(cluster)
    return clusters


__all__ = [
    "has_path",
    "reachable_from",
    "has_no_isolated_regions",
    "shortest_path_ignoring_hazards",
    "zero_hint_clusters",
]

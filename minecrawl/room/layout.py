"""Structural layout phases: grid init, border walls, entrance/exit, interior wall chunks."""
from __future__ import annotations

import random
from typing import Dict, List, NamedTuple, Tuple

from minecrawl.logging_utils import get_logger

from .cells import CellMeta, Coord2D
from .config import RoomConfig
from .connectivity import has_no_isolated_regions, has_path
from .grid import Grid
from .tiles import FLOOR, WALL, exit_sides, side_midpoint

log = get_logger("minecrawl.layout")


class Chunk(NamedTuple):
    x: int
    y: int
    w: int
    h: int

    def cells(self):
        for ix in range(self.x, self.x + self.w):
            for iy in range(self.y, self.y + self.h):
                yield ix, iy


class LayoutOutputs(NamedTuple):
    grid: Grid
    entrance: Coord2D
    exit: Coord2D
    exit_side: str


class LayoutBuilder:
    def __init__(self, config: RoomConfig, rng: random.Random, metrics: Dict):
        self.config = config
        self.rng = rng
        self.metrics = metrics
        self.grid = Grid(config.width, config.height)
        self.entrance: Coord2D = (0, 0)
        self.exit: Coord2D = (0, 0)
        self.exit_side = ""

    def init_grid(self) -> None:
        g = self.grid
        variants = self.config.floor_variants
        for x, y in g.coords():
            g.types[x][y] = FLOOR
            g.meta[x][y] = CellMeta(
                hidden=not g.is_border(x, y),
                hidden_variant=self.rng.randint(0, 1),
                floor_variant=self.rng.randrange(variants),
            )

    def stamp_border(self) -> None:
        g = self.grid
        for x, y in g.coords():
            if g.is_border(x, y):
                g.types[x][y] = WALL

    def place_entrance(self) -> None:
        self.entrance = side_midpoint(self.config.entrance_side, self.grid.width, self.grid.height)
        self.grid.set_cell_type(*self.entrance, FLOOR)

    def place_exit(self) -> None:
        self.exit_side = self.rng.choice(exit_sides(self.config.entrance_side))
        self.exit = side_midpoint(self.exit_side, self.grid.width, self.grid.height)
        self.grid.set_cell_type(*self.exit, FLOOR)

    # ---------------- Interior chunks --------------------------------------
    def _biased_axis(self, extent: int) -> int:
        """Sample an interior coordinate on one axis, pushed toward the walls.

        Offset magnitude from the axis centre is ``1 - r**2`` for uniform ``r``,
        so half of all samples land in the outer quarter of the half-extent.
        """
        centre = (extent - 1) / 2
        half = max(centre - 1, 0)
        r = self.rng.random()
        offset = (1 - r * r) * half
        if self.rng.random() < 0.5:
            offset = -offset
        return min(max(int(round(centre + offset)), 1), extent - 2)

    def _centre_distance(self, x: int, y: int) -> float:
        g = self.grid
        cx, cy = (g.width - 1) / 2, (g.height - 1) / 2
        hx, hy = max(cx - 1, 1), max(cy - 1, 1)
        return min(1.0, max(abs(x - cx) / hx, abs(y - cy) / hy))

    def sample_chunk(self) -> Chunk:
        g = self.grid
        cfg = self.config
        cx = self._biased_axis(g.width)
        cy = self._biased_axis(g.height)
        d = self._centre_distance(cx, cy)
        limit = cfg.chunk_min_size + int(round(d * (cfg.chunk_max_size - cfg.chunk_min_size)))
        w = self.rng.randint(cfg.chunk_min_size, limit)
        h = self.rng.randint(cfg.chunk_min_size, limit)
        return Chunk(cx - w // 2, cy - h // 2, w, h)

    def _near_door(self, x: int, y: int) -> bool:
        r = self.config.safe_radius
        return any(max(abs(x - px), abs(y - py)) <= r for px, py in (self.entrance, self.exit))

    def _stamp(self, chunk: Chunk) -> List[Tuple[int, int, bool]]:
        g = self.grid
        stamped = []
        for x, y in chunk.cells():
            if not g.is_interior(x, y) or g.types[x][y] == WALL:
                continue
            meta = g.meta[x][y]
            stamped.append((x, y, meta.hidden))
            g.types[x][y] = WALL
            meta.hidden = False
        return stamped

    def _revert(self, stamped: List[Tuple[int, int, bool]]) -> None:
        for x, y, was_hidden in stamped:
            self.grid.types[x][y] = FLOOR
            self.grid.meta[x][y].hidden = was_hidden

    def generate_wall_chunks(self) -> int:
        cfg = self.config
        g = self.grid
        interior = (g.width - 2) * (g.height - 2)
        density = self.rng.uniform(cfg.wall_density_min, cfg.wall_density_max)
        budget = int(interior * density)
        self.metrics['wall_budget'] = budget
        placed = 0
        for _attempt in range(cfg.chunk_attempts):
            if placed >= budget:
                break
            chunk = self.sample_chunk()
            centre = (chunk.x + chunk.w // 2, chunk.y + chunk.h // 2)
            if self._near_door(*centre):
                self.metrics['chunks_rejected_safe_zone'] += 1
                continue
            stamped = self._stamp(chunk)
            if not stamped:
                continue
            if has_path(g, self.entrance, self.exit) and has_no_isolated_regions(g, self.entrance):
                placed += len(stamped)
                self.metrics['chunks_placed'] += 1
            else:
                self._revert(stamped)
                self.metrics['chunks_reverted'] += 1
        self.metrics['wall_cells'] = placed
        log.debug(event="layout_chunks", walls=placed, budget=budget,
                  placed=self.metrics['chunks_placed'], reverted=self.metrics['chunks_reverted'])
        return placed

    def run(self) -> LayoutOutputs:
        self.init_grid()
        self.stamp_border()
        self.place_entrance()
        self.place_exit()
        self.generate_wall_chunks()
        return LayoutOutputs(self.grid, self.entrance, self.exit, self.exit_side)


__all__ = ["Chunk", "LayoutBuilder", "LayoutOutputs"]

"""Room facade: generation pipeline plus the query/mutation contract used per turn.

Generation phases (strictly ordered, no backtracking once a phase commits):
    * layout     - floor grid, border walls, entrance, exit, interior wall chunks
    * placement  - bombs (scatter, void-break, top-up, path repair), enemies, coins
    * hints      - full hint/neighbour-flag recomputation

Public contract consumed by the turn service, HTTP routes and renderers:
    Room(width, height, cell_size, entrance_side, bomb_count=0, enemy_count=0, coin_count=0)
    Attributes: grid, entrance_pos, exit_pos, exit_side, bombs, enemies, coins, flags, level, metrics
    Queries: cell_type, is_hidden, is_valid_move, hint_at, get_entity_at, has_entity_at, flag_at
    Mutators: on_player_enter, reveal_cell, remove_entity, place_flag, remove_flag,
              update_enemies, regenerate_next_level

Out-of-bounds coordinates never raise: queries return OUT_OF_BOUNDS / False / None.
"""
from __future__ import annotations

import dataclasses
import random
import time
from typing import Any, Dict, List, Optional

from minecrawl.logging_utils import get_logger

from . import connectivity, reveal
from .cells import CellMeta, Coord2D
from .config import RoomConfig, apply_overrides
from .entities import Bomb, Coin, Enemy, EntityRef, Flag, to_dict
from .grid import Grid
from .hints import compute_hints
from .layout import LayoutBuilder
from .metrics import init_metrics
from .placement import PlacementEngine
from .tiles import BOMB, COIN, ENEMY, FLOOR, LEFT, OPPOSITE_SIDE, WALL

log = get_logger("minecrawl.room")

_DEFAULT_SHAPE = (15, 15, 30, LEFT, 0, 0, 0)


class Room:
    def __init__(
        self,
        width: int = 15,
        height: int = 15,
        cell_size: int = 30,
        entrance_side: str = LEFT,
        bomb_count: int = 0,
        enemy_count: int = 0,
        coin_count: int = 0,
        *,
        config: RoomConfig | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
    ):
        shape = (width, height, cell_size, entrance_side, bomb_count, enemy_count, coin_count)
        # Accept either a config object or the positional call style, not both
        if config is None:
            config = RoomConfig(
                width=width,
                height=height,
                cell_size=cell_size,
                entrance_side=entrance_side,
                bomb_count=bomb_count,
                enemy_count=enemy_count,
                coin_count=coin_count,
                seed=seed,
            )
        elif shape != _DEFAULT_SHAPE:
            raise ValueError("pass room dimensions and counts either positionally or via config, not both")
        else:
            # The room owns its copy; level changes must not leak to the caller
            config = dataclasses.replace(config)
            if seed is not None:
                config.seed = seed
        self.config = apply_overrides(config)
        # Generation draws only from this RNG
        self.rng = rng or random.Random(self.config.seed)
        self.level = 1
        self.grid: Grid = Grid(self.config.width, self.config.height)
        self.entrance_pos: Coord2D = (0, 0)
        self.exit_pos: Coord2D = (0, 0)
        self.exit_side = ""
        self.bombs: List[Bomb] = []
        self.enemies: List[Enemy] = []
        self.coins: List[Coin] = []
        self.flags: Dict[Coord2D, Flag] = {}
        self.metrics: Dict[str, Any] = {}
        self.generate()

    @classmethod
    def from_config(cls, config: RoomConfig, rng: random.Random | None = None) -> "Room":
        return cls(config=config, rng=rng)

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def cell_size(self) -> int:
        return self.config.cell_size

    @property
    def entrance_side(self) -> str:
        return self.config.entrance_side

    # ------------------------------------------------------------------
    # Generation Pipeline
    # ------------------------------------------------------------------
    def generate(self) -> None:
        """Build layout and entities from scratch, discarding any prior state."""
        metrics = init_metrics()
        start = time.perf_counter()
        phase_times: Dict[str, int] = {}

        def _phase(label, fn, *a, **k):
            ps = time.perf_counter()
            r = fn(*a, **k)
            phase_times[label] = int((time.perf_counter() - ps) * 1000)
            return r

        layout = _phase('layout', LayoutBuilder(self.config, self.rng, metrics).run)
        self.grid = layout.grid
        self.entrance_pos = layout.entrance
        self.exit_pos = layout.exit
        self.exit_side = layout.exit_side
        engine = PlacementEngine(self.grid, self.entrance_pos, self.exit_pos, self.config, self.rng, metrics)
        placed = _phase('placement', engine.run)
        self.bombs = placed.bombs
        self.enemies = placed.enemies
        self.coins = placed.coins
        self.flags = {}
        _phase('hints', self.recompute_hints)

        if self.config.enable_metrics:
            metrics['runtime_ms'] = int((time.perf_counter() - start) * 1000)
            metrics['phase_ms'] = phase_times
            self.metrics = metrics
        else:
            self.metrics = {}
        log.info(
            event="room_generated",
            room_level=self.level,
            size=f"{self.width}x{self.height}",
            entrance=self.config.entrance_side,
            exit=self.exit_side,
            walls=metrics['wall_cells'],
            bombs=len(self.bombs),
            enemies=len(self.enemies),
            coins=len(self.coins),
        )

    def regenerate_next_level(self, entrance_side: str | None = None) -> None:
        """Rebuild in place for the next level.

        The new entrance defaults to the side opposite the previous exit, so
        walking out through the exit enters the next room from the facing wall.
        """
        side = entrance_side or OPPOSITE_SIDE[self.exit_side]
        self.config.entrance_side = side
        self.config.__post_init__()
        self.level += 1
        self.generate()

    def recompute_hints(self) -> None:
        compute_hints(self.grid, self.entities())

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def entities(self) -> List[Any]:
        return [*self.bombs, *self.enemies, *self.coins]

    def occupied(self) -> set:
        return {e.pos for e in self.entities()}

    def cell_type(self, x: int, y: int) -> str:
        return self.grid.cell_type(x, y)

    def set_cell_type(self, x: int, y: int, cell_type: str) -> None:
        self.grid.set_cell_type(x, y, cell_type)

    def is_valid_move(self, x: int, y: int) -> bool:
        return self.grid.is_valid_move(x, y)

    def is_hidden(self, x: int, y: int) -> bool:
        return reveal.is_hidden(self.grid, x, y)

    def cell(self, x: int, y: int) -> Optional[CellMeta]:
        return self.grid.cell(x, y)

    def hint_at(self, x: int, y: int) -> int:
        meta = self.grid.cell(x, y)
        return meta.hint if meta is not None else 0

    def get_entity_at(self, x: int, y: int) -> Optional[EntityRef]:
        # Lookup order: enemy, bomb, coin
        for group in (self.enemies, self.bombs, self.coins):
            for ent in group:
                if ent.x == x and ent.y == y:
                    return EntityRef(ent.kind, ent)
        return None

    def has_entity_at(self, x: int, y: int) -> bool:
        return self.get_entity_at(x, y) is not None

    def flag_at(self, x: int, y: int) -> Optional[Flag]:
        return self.flags.get((x, y))

    def is_entrance_or_exit(self, x: int, y: int) -> bool:
        return (x, y) in (self.entrance_pos, self.exit_pos)

    def has_path(self, start: Coord2D | None = None, end: Coord2D | None = None, blockers=None) -> bool:
        """Entrance->exit reachability; bombs block by default."""
        if blockers is None:
            blockers = {b.pos for b in self.bombs}
        return connectivity.has_path(self.grid, start or self.entrance_pos, end or self.exit_pos, blockers)

    def has_no_isolated_regions(self, blockers=()) -> bool:
        return connectivity.has_no_isolated_regions(self.grid, self.entrance_pos, blockers)

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------
    def reveal_cell(self, x: int, y: int) -> None:
        reveal.reveal_cell(self.grid, x, y)
        self._drop_revealed_flags()

    def on_player_enter(self, x: int, y: int) -> bool:
        flooded = reveal.on_enter(self.grid, x, y, self.occupied(), (self.entrance_pos, self.exit_pos))
        self._drop_revealed_flags()
        return flooded

    def flood_fill_unhide(self, x: int, y: int) -> set:
        revealed = reveal.flood_fill_unhide(self.grid, x, y, self.occupied())
        self._drop_revealed_flags()
        return revealed

    def _drop_revealed_flags(self) -> List[Flag]:
        """Flags only mark hidden cells; discard any whose cell has been revealed."""
        dropped = [f for pos, f in self.flags.items() if not self.is_hidden(*pos)]
        for flag in dropped:
            del self.flags[(flag.x, flag.y)]
        return dropped

    def remove_entity(self, target) -> bool:
        """Remove an entity (or an ``EntityRef``) by identity and refresh hints."""
        entity = target.entity if isinstance(target, EntityRef) else target
        group = {BOMB: self.bombs, ENEMY: self.enemies, COIN: self.coins}.get(getattr(entity, "kind", None))
        if group is None:
            return False
        for i, ent in enumerate(group):
            if ent is entity:
                del group[i]
                self.recompute_hints()
                return True
        return False

    def place_flag(self, x: int, y: int) -> bool:
        if not self.is_hidden(x, y) or (x, y) in self.flags:
            return False
        ref = self.get_entity_at(x, y)
        self.flags[(x, y)] = Flag(x, y, is_danger=ref is not None and ref.kind == BOMB)
        return True

    def remove_flag(self, x: int, y: int) -> bool:
        return self.flags.pop((x, y), None) is not None

    def update_enemies(self, player) -> bool:
        """Give every enemy one turn; returns True if any enemy moved or acted.

        Player death is not checked here; callers inspect health after the
        full pass so every enemy gets its turn in the same tick.
        """
        acted = False
        for enemy in list(self.enemies):
            if not any(e is enemy for e in self.enemies):
                continue  # removed earlier in this pass
            if enemy.take_turn(player, self):
                acted = True
        if acted:
            self.recompute_hints()
        return acted

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self, reveal_all: bool = False) -> Dict[str, Any]:
        cells = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                meta = self.grid.meta[x][y]
                row.append({"type": self.grid.types[x][y], **meta.to_dict()})
            cells.append(row)

        def visible(ent) -> bool:
            return reveal_all or not self.grid.meta[ent.x][ent.y].hidden

        return {
            "width": self.width,
            "height": self.height,
            "cell_size": self.cell_size,
            "level": self.level,
            "entrance": list(self.entrance_pos),
            "exit": list(self.exit_pos),
            "entrance_side": self.config.entrance_side,
            "exit_side": self.exit_side,
            "cells": cells,
            "entities": [to_dict(e) for e in self.entities() if visible(e)],
            "flags": [{"x": f.x, "y": f.y, "sprite": f.sprite} for f in self.flags.values()],
            "counts": {"bombs": len(self.bombs), "enemies": len(self.enemies), "coins": len(self.coins)},
        }

    def render_ascii(self, reveal_all: bool = False, player: Coord2D | None = None) -> str:
        """Text rendering for the CLI and debugging.

        ``#`` wall, ``?`` hidden, ``.`` blank floor, digits hints, ``E``/``X``
        entrance/exit, ``*`` bomb, ``m`` enemy, ``$`` coin, ``F`` flag, ``@`` player.
        """
        glyph = {BOMB: "*", ENEMY: "m", COIN: "$"}
        occupants = {e.pos: glyph[e.kind] for e in self.entities()}
        rows = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                meta = self.grid.meta[x][y]
                if player == (x, y):
                    ch = "@"
                elif (x, y) in self.flags and meta.hidden:
                    ch = "F"
                elif meta.hidden and not reveal_all:
                    ch = "?"
                elif self.grid.types[x][y] == WALL:
                    ch = "#"
                elif (x, y) == self.entrance_pos:
                    ch = "E"
                elif (x, y) == self.exit_pos:
                    ch = "X"
                elif (x, y) in occupants:
                    ch = occupants[(x, y)]
                elif self.grid.types[x][y] == FLOOR and meta.hint:
                    ch = str(meta.hint)
                else:
                    ch = "."
                row.append(ch)
            rows.append("".join(row))
        return "\n".join(rows)


__all__ = ["Room"]

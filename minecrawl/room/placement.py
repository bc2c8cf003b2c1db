"""Entity placement: bombs (scatter, void breaking, top-up, path repair), enemies, coins.

Bomb placement runs in four ordered steps:

  1. scatter   - sample ``scatter_fraction`` of the quota from shuffled
                 candidate cells; any bomb that would cut off part of the
                 floor is rolled back and its cell is not tried again.
  2. void-break - recompute hints and drop one extra bomb into every blank
                 (hint 0, entity-free) cluster larger than ``void_threshold``.
  3. top-up    - scatter whatever quota is left.
  4. repair    - if bombs block entrance->exit, clear every bomb on the
                 wall-only shortest path.

Under-fill (quota not met within the attempt budget) is logged and counted in
metrics; it never raises.
"""
from __future__ import annotations

import random
from typing import Dict, List, NamedTuple, Set

from minecrawl.logging_utils import get_logger

from .cells import Coord2D
from .config import RoomConfig
from .connectivity import has_no_isolated_regions, has_path, shortest_path_ignoring_hazards, zero_hint_clusters
from .enemy_ai import HORIZONTAL, VERTICAL, ChaseBehavior
from .entities import ENEMY_SPRITE, ENEMY_SPRITE_VERTICAL, Bomb, Coin, Enemy
from .errors import RoomGenerationError
from .grid import Grid
from .hints import compute_hints
from .tiles import FLOOR

log = get_logger("minecrawl.placement")

_ENEMY_VARIANTS = ((HORIZONTAL, ENEMY_SPRITE), (VERTICAL, ENEMY_SPRITE_VERTICAL))


class PlacementOutputs(NamedTuple):
    bombs: List[Bomb]
    enemies: List[Enemy]
    coins: List[Coin]


class PlacementEngine:
    def __init__(self, grid: Grid, entrance: Coord2D, exit_pos: Coord2D, config: RoomConfig,
                 rng: random.Random, metrics: Dict):
        self.grid = grid
        self.entrance = entrance
        self.exit = exit_pos
        self.config = config
        self.rng = rng
        self.metrics = metrics
        self.bombs: List[Bomb] = []
        self.enemies: List[Enemy] = []
        self.coins: List[Coin] = []
        # Cells whose bomb would strand floor
        self._rejected: Set[Coord2D] = set()

    # ---------------- Helpers ----------------------------------------------
    def all_entities(self):
        return [*self.bombs, *self.enemies, *self.coins]

    def occupied(self) -> Set[Coord2D]:
        return {e.pos for e in self.all_entities()}

    def bomb_positions(self) -> Set[Coord2D]:
        return {b.pos for b in self.bombs}

    def is_valid_entity_position(self, x: int, y: int, occupied: Set[Coord2D] | None = None) -> bool:
        g = self.grid
        if not g.is_interior(x, y) or g.types[x][y] != FLOOR:
            return False
        r = self.config.entity_exclusion_radius
        for px, py in (self.entrance, self.exit):
            if max(abs(x - px), abs(y - py)) <= r:
                return False
        if occupied is None:
            occupied = self.occupied()
        return (x, y) not in occupied

    def _random_interior(self) -> Coord2D:
        return (self.rng.randint(1, self.grid.width - 2), self.rng.randint(1, self.grid.height - 2))

    def _try_add_bomb(self, x: int, y: int) -> bool:
        """Tentatively place a bomb; keep it only if no floor region gets cut off."""
        bomb = Bomb(x, y)
        self.bombs.append(bomb)
        if has_no_isolated_regions(self.grid, self.entrance, self.bomb_positions()):
            return True
        self.bombs.pop()
        self.metrics['bombs_rolled_back'] += 1
        return False

    # ---------------- Bombs ------------------------------------------------
    def scatter_bombs(self, count: int) -> int:
        """Place up to ``count`` bombs on shuffled candidate cells.

        Candidates are drawn without replacement and cells that failed the
        isolation check are never retried, so each cell costs at most one BFS.
        """
        occupied = self.occupied()
        candidates = [
            (x, y)
            for x, y in self.grid.interior_coords()
            if (x, y) not in self._rejected and self.is_valid_entity_position(x, y, occupied)
        ]
        self.rng.shuffle(candidates)
        placed = 0
        attempts = count * self.config.placement_attempt_factor
        for x, y in candidates:
            if placed >= count or attempts <= 0:
                break
            attempts -= 1
            if self._try_add_bomb(x, y):
                placed += 1
            else:
                self._rejected.add((x, y))
        return placed

    def break_voids(self, quota: int) -> int:
        """Inject a bomb near the middle of each oversized blank cluster."""
        compute_hints(self.grid, self.all_entities())
        injected = 0
        clusters = zero_hint_clusters(self.grid, self.occupied())
        for cluster in clusters:
            if len(self.bombs) >= quota:
                break
            if len(cluster) <= self.config.void_threshold:
                continue
            mx = sum(x for x, _ in cluster) / len(cluster)
            my = sum(y for _, y in cluster) / len(cluster)
            occupied = self.occupied()
            candidates = sorted(
                (c for c in cluster if self.is_valid_entity_position(c[0], c[1], occupied)),
                key=lambda c: ((c[0] - mx) ** 2 + (c[1] - my) ** 2, c),
            )
            for x, y in candidates:
                if (x, y) in self._rejected:
                    continue
                if self._try_add_bomb(x, y):
                    injected += 1
                    break
                self._rejected.add((x, y))
        self.metrics['void_bombs'] += injected
        return injected

    def repair_path(self) -> int:
        if has_path(self.grid, self.entrance, self.exit, self.bomb_positions()):
            return 0
        path = shortest_path_ignoring_hazards(self.grid, self.entrance, self.exit)
        if path is None:
            raise RoomGenerationError(f"walls separate entrance {self.entrance} from exit {self.exit}")
        on_path = set(path)
        before = len(self.bombs)
        self.bombs = [b for b in self.bombs if b.pos not in on_path]
        removed = before - len(self.bombs)
        self.metrics['bombs_repaired'] += removed
        log.info(event="bomb_path_repair", removed=removed, path_len=len(path))
        return removed

    def place_bombs(self, count: int) -> List[Bomb]:
        if count <= 0:
            return self.bombs
        first_batch = int(round(count * self.config.scatter_fraction))
        self.scatter_bombs(first_batch)
        self.break_voids(count)
        remaining = count - len(self.bombs)
        if remaining > 0:
            self.scatter_bombs(remaining)
        self.repair_path()
        compute_hints(self.grid, self.all_entities())
        self._report_underfill('bomb', 'bombs_underfill', count, len(self.bombs))
        return self.bombs

    # ---------------- Enemies & coins --------------------------------------
    def place_enemies(self, count: int) -> List[Enemy]:
        placed = self._scatter(count, self._make_enemy, self.enemies)
        self._report_underfill('enemy', 'enemies_underfill', count, placed)
        return self.enemies

    def place_coins(self, count: int) -> List[Coin]:
        placed = self._scatter(count, Coin, self.coins)
        self._report_underfill('coin', 'coins_underfill', count, placed)
        return self.coins

    def _make_enemy(self, x: int, y: int) -> Enemy:
        orientation, sprite = self.rng.choice(_ENEMY_VARIANTS)
        return Enemy(x, y, behavior=ChaseBehavior(orientation), sprite=sprite)

    def _scatter(self, count: int, factory, target: list) -> int:
        placed = 0
        attempts = count * self.config.placement_attempt_factor
        occupied = self.occupied()
        while placed < count and attempts > 0:
            attempts -= 1
            x, y = self._random_interior()
            if not self.is_valid_entity_position(x, y, occupied):
                continue
            target.append(factory(x, y))
            occupied.add((x, y))
            placed += 1
        return placed

    def _report_underfill(self, kind: str, metric: str, requested: int, placed: int) -> None:
        missing = requested - placed
        if missing > 0:
            self.metrics[metric] += missing
            log.warn(event="placement_underfill", kind=kind, requested=requested, placed=placed)

    def run(self) -> PlacementOutputs:
        cfg = self.config
        self.place_bombs(cfg.bomb_count)
        self.place_enemies(cfg.enemy_count)
        self.place_coins(cfg.coin_count)
        compute_hints(self.grid, self.all_entities())
        return PlacementOutputs(self.bombs, self.enemies, self.coins)


__all__ = ["PlacementEngine", "PlacementOutputs"]

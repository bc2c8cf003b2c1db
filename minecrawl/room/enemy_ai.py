"""Enemy chase behaviour.

One ``ChaseBehavior`` class serves both enemy variants; the only difference
between them is the axis tried first when stepping toward the player:

  horizontal  - close the x gap first, then y
  vertical    - close the y gap first, then x

Shared rules (activation, blocked-turn counting, tile breaking) live here so
the variants cannot drift apart.

Turn outline:
  * Dormant enemies wake when the player stands in their 8-neighbourhood.
    Waking reveals the enemy's own cell and consumes the turn.
  * Awake enemies take one orthogonal step toward the player. They refuse to
    step onto other enemies, coins, hidden cells or bombs; hidden cells and bombs
    are remembered as the desired move.
  * Stepping onto the player deals one damage and removes the enemy.
  * After ``BLOCKED_TURNS_TO_BREAK`` consecutive blocked turns the enemy breaks
    (reveals) the remembered hidden tile and force-moves onto it. A forced move
    onto a bomb detonates it and damages the enemy.

The room passed in must expose ``is_valid_move``, ``is_hidden``,
``get_entity_at``, ``reveal_cell`` and ``remove_entity``; the player must expose
``x``, ``y`` and ``take_damage``.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple

from minecrawl.logging_utils import get_logger

from .tiles import BOMB, COIN, ENEMY

HORIZONTAL = "horizontal"
VERTICAL = "vertical"
ORIENTATIONS = (HORIZONTAL, VERTICAL)

BLOCKED_TURNS_TO_BREAK = 3

log = get_logger("minecrawl.enemy_ai")

Coord = Tuple[int, int]


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


def should_activate(enemy: Any, player: Any) -> bool:
    dx = abs(enemy.x - player.x)
    dy = abs(enemy.y - player.y)
    return dx <= 1 and dy <= 1 and (dx != 0 or dy != 0)


def chase_steps(enemy: Any, player: Any, orientation: str):
    """Yield candidate (x, y) steps toward the player in axis order."""
    dx = player.x - enemy.x
    dy = player.y - enemy.y
    horizontal = (enemy.x + _sign(dx), enemy.y) if dx else None
    vertical = (enemy.x, enemy.y + _sign(dy)) if dy else None
    order = (horizontal, vertical) if orientation == HORIZONTAL else (vertical, horizontal)
    for step in order:
        if step is not None:
            yield step


def _attack_player(enemy: Any, player: Any, room: Any) -> bool:
    log.debug(event="enemy_attack", x=enemy.x, y=enemy.y)
    player.take_damage(1)
    room.remove_entity(enemy)
    return True


class ChaseBehavior:
    def __init__(self, orientation: str = HORIZONTAL):
        if orientation not in ORIENTATIONS:
            raise ValueError(f"unknown orientation {orientation!r}")
        self.orientation = orientation
        self.active = False
        self.blocked_turns = 0
        self.last_desired_move: Optional[Coord] = None

    def take_turn(self, enemy: Any, player: Any, room: Any) -> bool:
        if not self.active:
            if should_activate(enemy, player):
                log.debug(event="enemy_activated", x=enemy.x, y=enemy.y)
                self.active = True
                room.reveal_cell(enemy.x, enemy.y)
                return True
            return False

        moved = self.chase(enemy, player, room)
        if moved:
            self.blocked_turns = 0
            self.last_desired_move = None
            return True

        self.blocked_turns += 1
        if self.blocked_turns >= BLOCKED_TURNS_TO_BREAK and self.last_desired_move:
            x, y = self.last_desired_move
            self.blocked_turns = 0
            if room.is_hidden(x, y) and room.is_valid_move(x, y):
                log.debug(event="enemy_breaks_tile", x=x, y=y)
                room.reveal_cell(x, y)
                if self.try_move_forced(enemy, x, y, room, player):
                    self.last_desired_move = None
                    return True
        return False

    def chase(self, enemy: Any, player: Any, room: Any) -> bool:
        for x, y in chase_steps(enemy, player, self.orientation):
            if self.try_move(enemy, x, y, room, player):
                return True
        return False

    def try_move(self, enemy: Any, x: int, y: int, room: Any, player: Any) -> bool:
        if not room.is_valid_move(x, y):
            return False
        other = room.get_entity_at(x, y)
        if other is not None and other.kind in (ENEMY, COIN):
            return False
        if room.is_hidden(x, y) or (other is not None and other.kind == BOMB):
            self.last_desired_move = (x, y)
            return False
        if (x, y) == (player.x, player.y):
            return _attack_player(enemy, player, room)
        enemy.x, enemy.y = x, y
        return True

    def try_move_forced(self, enemy: Any, x: int, y: int, room: Any, player: Any) -> bool:
        """Move after breaking a tile; bombs are stepped on instead of avoided."""
        if not room.is_valid_move(x, y):
            return False
        other = room.get_entity_at(x, y)
        if other is not None and other.kind in (ENEMY, COIN):
            return False
        if (x, y) == (player.x, player.y):
            return _attack_player(enemy, player, room)
        if other is not None and other.kind == BOMB:
            log.debug(event="enemy_steps_on_bomb", x=x, y=y)
            room.remove_entity(other.entity)
            if enemy.take_damage(1) <= 0:
                room.remove_entity(enemy)
                return True
        enemy.x, enemy.y = x, y
        return True


__all__ = [
    "ChaseBehavior",
    "HORIZONTAL",
    "VERTICAL",
    "ORIENTATIONS",
    "BLOCKED_TURNS_TO_BREAK",
    "should_activate",
    "chase_steps",
]

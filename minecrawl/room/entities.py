"""Room entities: bombs, enemies and coins.

Entities compare by identity (``eq=False``) so two bombs on the same cell are
never confused when one is removed.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, NamedTuple

from .enemy_ai import ChaseBehavior
from .tiles import BOMB, COIN, ENEMY

ENEMY_SPRITE = "enemy"
ENEMY_SPRITE_VERTICAL = "enemy_vertical"


@dataclass(eq=False)
class Bomb:
    x: int
    y: int
    kind: str = field(default=BOMB, init=False)

    @property
    def pos(self):
        return (self.x, self.y)


@dataclass(eq=False)
class Coin:
    x: int
    y: int
    kind: str = field(default=COIN, init=False)

    @property
    def pos(self):
        return (self.x, self.y)


@dataclass(eq=False)
class Enemy:
    x: int
    y: int
    behavior: ChaseBehavior = field(default_factory=ChaseBehavior)
    sprite: str = ENEMY_SPRITE
    health: int = 1
    kind: str = field(default=ENEMY, init=False)

    @property
    def pos(self):
        return (self.x, self.y)

    @property
    def active(self) -> bool:
        return self.behavior.active

    def take_damage(self, amount: int) -> int:
        self.health -= amount
        return self.health

    def take_turn(self, player, room) -> bool:
        """Run one AI step; returns True if the enemy moved or acted."""
        return self.behavior.take_turn(self, player, room)


@dataclass(eq=False)
class Flag:
    """Player marker on a hidden cell; ``is_danger`` records a bomb underneath at placement."""
    x: int
    y: int
    is_danger: bool = False

    @property
    def sprite(self) -> str:
        return "flag_danger" if self.is_danger else "flag_safe"


class EntityRef(NamedTuple):
    kind: str
    entity: Any


def to_dict(entity) -> dict:
    data = {"kind": entity.kind, "x": entity.x, "y": entity.y}
    if entity.kind == ENEMY:
        data.update(
            health=entity.health,
            active=entity.active,
            sprite=entity.sprite,
            orientation=entity.behavior.orientation,
        )
    return data


__all__ = ["Bomb", "Coin", "Enemy", "Flag", "EntityRef", "ENEMY_SPRITE", "ENEMY_SPRITE_VERTICAL", "to_dict"]

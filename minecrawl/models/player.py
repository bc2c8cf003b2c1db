"""Player state carried across rooms within one session."""

from __future__ import annotations

from dataclasses import dataclass

SWORD = "sword"
FLAG = "flag"
EQUIPMENT = (SWORD, FLAG)

STARTING_HEALTH = 3
STARTING_FLAGS = 3


@dataclass
class Player:
    x: int
    y: int
    health: int = STARTING_HEALTH
    flag_count: int = STARTING_FLAGS
    coins: int = 0
    equipped: str = SWORD

    @property
    def pos(self):
        return (self.x, self.y)

    @property
    def alive(self) -> bool:
        return self.health > 0

    def move_to(self, x: int, y: int) -> None:
        self.x, self.y = x, y

    def toggle_equip(self) -> str:
        self.equipped = FLAG if self.equipped == SWORD else SWORD
        return self.equipped

    def use_flag(self) -> bool:
        if self.flag_count <= 0:
            return False
        self.flag_count -= 1
        return True

    def add_flag(self) -> None:
        self.flag_count += 1

    def take_damage(self, amount: int) -> int:
        # Health never drops below zero
        self.health = max(0, self.health - amount)
        return self.health

    def to_dict(self):
        return {
            "x": self.x,
            "y": self.y,
            "health": self.health,
            "flag_count": self.flag_count,
            "coins": self.coins,
            "equipped": self.equipped,
        }


__all__ = ["Player", "SWORD", "FLAG", "EQUIPMENT", "STARTING_HEALTH", "STARTING_FLAGS"]

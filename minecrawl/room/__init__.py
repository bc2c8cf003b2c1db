"""Public room package interface."""

from .config import MIN_ROOM_SIZE, RoomConfig  # noqa: F401
from .entities import Bomb, Coin, Enemy, EntityRef, Flag  # noqa: F401
from .errors import RoomGenerationError  # noqa: F401
from .room import Room  # noqa: F401
from .tiles import (  # noqa: F401
    BOMB,
    BOTTOM,
    COIN,
    ENEMY,
    FLOOR,
    LEFT,
    OUT_OF_BOUNDS,
    RIGHT,
    SIDES,
    TOP,
    WALL,
)

__all__ = [
    "Room",
    "RoomConfig",
    "RoomGenerationError",
    "MIN_ROOM_SIZE",
    "Bomb",
    "Coin",
    "Enemy",
    "EntityRef",
    "Flag",
    "FLOOR",
    "WALL",
    "OUT_OF_BOUNDS",
    "TOP",
    "RIGHT",
    "BOTTOM",
    "LEFT",
    "SIDES",
    "BOMB",
    "ENEMY",
    "COIN",
]

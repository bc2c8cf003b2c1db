# Cell type constants centralized for modular imports
FLOOR = "F"
WALL = "W"
OUT_OF_BOUNDS = "X"  # sentinel returned by accessors, never stored in a grid

TOP = "TOP"
RIGHT = "RIGHT"
BOTTOM = "BOTTOM"
LEFT = "LEFT"
SIDES = (TOP, RIGHT, BOTTOM, LEFT)

OPPOSITE_SIDE = {TOP: BOTTOM, BOTTOM: TOP, LEFT: RIGHT, RIGHT: LEFT}

# Entity kind tags
BOMB = "bomb"
ENEMY = "enemy"
COIN = "coin"


def side_midpoint(side: str, width: int, height: int):
    """Return the (x, y) border cell at the middle of ``side``."""
    if side == TOP:
        return (width // 2, 0)
    if side == RIGHT:
        return (width - 1, height // 2)
    if side == BOTTOM:
        return (width // 2, height - 1)
    if side == LEFT:
        return (0, height // 2)
    raise ValueError(f"unknown side {side!r}")


def exit_sides(entrance_side: str):
    return [s for s in SIDES if s != entrance_side]


__all__ = [
    "FLOOR",
    "WALL",
    "OUT_OF_BOUNDS",
    "TOP",
    "RIGHT",
    "BOTTOM",
    "LEFT",
    "SIDES",
    "OPPOSITE_SIDE",
    "BOMB",
    "ENEMY",
    "COIN",
    "side_midpoint",
    "exit_sides",
]

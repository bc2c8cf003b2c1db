from typing import List, Tuple


class CellMeta:
    """Per-cell fog, hint and cosmetic state (parallel to the type grid)."""
    __slots__ = ("hidden", "hidden_variant", "floor_variant", "hint",
                 "has_neighbor_bomb", "has_neighbor_enemy", "has_neighbor_coin")

    def __init__(self, hidden: bool = True, hidden_variant: int = 0, floor_variant: int = 0):
        self.hidden = hidden
        self.hidden_variant = hidden_variant
        self.floor_variant = floor_variant
        self.hint = 0
        self.has_neighbor_bomb = False
        self.has_neighbor_enemy = False
        self.has_neighbor_coin = False

    def clear_hint(self):
        self.hint = 0
        self.has_neighbor_bomb = False
        self.has_neighbor_enemy = False
        self.has_neighbor_coin = False

    def to_dict(self):
        return {
            "hidden": self.hidden,
            "hidden_variant": self.hidden_variant,
            "floor_variant": self.floor_variant,
            "hint": self.hint,
            "has_neighbor_bomb": self.has_neighbor_bomb,
            "has_neighbor_enemy": self.has_neighbor_enemy,
            "has_neighbor_coin": self.has_neighbor_coin,
        }


Coord2D = Tuple[int, int]
TypeGrid = List[List[str]]
MetaGrid = List[List[CellMeta]]

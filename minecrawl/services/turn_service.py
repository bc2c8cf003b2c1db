"""Turn processing for one player walking through a chain of rooms.

Responsibilities:
    * Resolve a directional action according to the equipped item.
    * Apply the consequences of stepping onto a cell (reveal, bomb, coin, exit).
    * Run the enemy pass after every consumed turn and detect the loss.

Each call returns the list of event names produced, in order, so callers can
drive audio or animation without inspecting state diffs:

    move, bump, attack, enemy_killed, damage, explosion, coin,
    flag_placed, flag_removed, exit, lose, equip

Flag actions never consume a turn. A bump (walking into a wall or off the
grid) does not consume one either, so enemies only act when the player
actually moved or attacked.
"""

from __future__ import annotations

import random
import threading
import uuid
from typing import Dict, List, Optional

from minecrawl.logging_utils import get_logger
from minecrawl.models.player import FLAG, Player
from minecrawl.room import BOMB, COIN, ENEMY, Room, RoomConfig

log = get_logger("minecrawl.turns")

DIRECTIONS = {
    "n": (0, -1),
    "s": (0, 1),
    "e": (1, 0),
    "w": (-1, 0),
}


class InvalidAction(ValueError):
    pass


class GameOverError(RuntimeError):
    """Raised when an action is attempted after the player has died."""


class GameSession:
    def __init__(self, room: Room, player: Optional[Player] = None, session_id: Optional[str] = None):
        self.id = session_id or uuid.uuid4().hex
        self.room = room
        self.player = player or Player(*room.entrance_pos)
        self.game_over = False
        self.turn = 0
        # Held for a whole turn; reentrant so routes can also cover the snapshot
        self.lock = threading.RLock()

    @classmethod
    def new(cls, config: RoomConfig, rng: random.Random | None = None) -> "GameSession":
        return cls(Room.from_config(config, rng=rng))

    # ------------------------------------------------------------------
    def act(self, direction: str) -> List[str]:
        with self.lock:
            return self._act(direction)

    def _act(self, direction: str) -> List[str]:
        if self.game_over:
            raise GameOverError("player is dead")
        if direction not in DIRECTIONS:
            raise InvalidAction(f"unknown direction {direction!r}")
        dx, dy = DIRECTIONS[direction]
        tx, ty = self.player.x + dx, self.player.y + dy

        if self.player.equipped == FLAG:
            return self._toggle_flag(tx, ty)

        events: List[str] = []
        level = self.room.level
        if not self._sword_action(tx, ty, events):
            return events
        self.turn += 1
        if self.room.level == level:
            health = self.player.health
            flags = len(self.room.flags)
            self.room.update_enemies(self.player)
            if self.player.health < health:
                events.append("damage")
            self._reclaim_flags(flags, events)
        if self.player.health <= 0:
            self.game_over = True
            events.append("lose")
            log.info(event="game_lost", session=self.id, room_level=self.room.level, turn=self.turn)
        return events

    def toggle_equip(self) -> List[str]:
        with self.lock:
            if self.game_over:
                raise GameOverError("player is dead")
            self.player.toggle_equip()
            return ["equip"]

    # ------------------------------------------------------------------
    def _sword_action(self, tx: int, ty: int, events: List[str]) -> bool:
        """Attack or move toward (tx, ty); returns True when the turn is consumed."""
        room = self.room
        target = room.get_entity_at(tx, ty)
        if target is not None and target.kind == ENEMY:
            events.append("attack")
            if target.entity.take_damage(1) <= 0:
                room.remove_entity(target)
                events.append("enemy_killed")
            return True
        if not room.is_valid_move(tx, ty):
            events.append("bump")
            return False

        self.player.move_to(tx, ty)
        events.append("move")
        if room.remove_flag(tx, ty):
            self.player.add_flag()
            events.append("flag_removed")
        flags = len(room.flags)
        room.on_player_enter(tx, ty)
        self._reclaim_flags(flags, events)
        if target is not None and target.kind == BOMB:
            self.player.take_damage(1)
            room.remove_entity(target)
            events.extend(("damage", "explosion"))
        elif target is not None and target.kind == COIN:
            self.player.coins += 1
            room.remove_entity(target)
            events.append("coin")

        if (tx, ty) == room.exit_pos and self.player.health > 0:
            room.regenerate_next_level()
            self.player.move_to(*room.entrance_pos)
            room.on_player_enter(*room.entrance_pos)
            events.append("exit")
            log.info(event="level_advanced", session=self.id, room_level=room.level)
        return True

    def _reclaim_flags(self, before: int, events: List[str]) -> None:
        """Hand back flags the room dropped because their cells were revealed."""
        for _ in range(before - len(self.room.flags)):
            self.player.add_flag()
            events.append("flag_removed")

    def _toggle_flag(self, tx: int, ty: int) -> List[str]:
        room = self.room
        if room.remove_flag(tx, ty):
            self.player.add_flag()
            return ["flag_removed"]
        if self.player.flag_count > 0 and room.place_flag(tx, ty):
            self.player.use_flag()
            return ["flag_placed"]
        return ["bump"]

    # ------------------------------------------------------------------
    def to_dict(self, reveal_all: bool = False) -> Dict:
        return {
            "session_id": self.id,
            "turn": self.turn,
            "game_over": self.game_over,
            "player": self.player.to_dict(),
            "room": self.room.to_dict(reveal_all=reveal_all),
        }


__all__ = ["GameSession", "GameOverError", "InvalidAction", "DIRECTIONS"]

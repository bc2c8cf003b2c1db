"""
project: Minecrawl
module: room_api.py
License: MIT

Room session API routes.

Each session owns one room chain and one player. Sessions live in an
in-process registry; nothing is persisted, so a server restart drops them.
"""

import hashlib
import random
import threading

from flask import Blueprint, current_app, jsonify, request

from minecrawl.logging_utils import get_logger
from minecrawl.room import RoomConfig
from minecrawl.services.turn_service import GameOverError, GameSession

from .validation import ROOM_ACTION, ROOM_NEW, check_room_capacity, validate

log = get_logger("minecrawl.api")

bp_room = Blueprint("room", __name__)

# session_id -> GameSession. Requests may be served on several threads.
_sessions = {}
_sessions_lock = threading.Lock()

SEED_MAX = 2**63 - 1


def _coerce_seed(payload_seed):
    """Convert provided seed (int or str) into a bounded non-negative int."""
    if payload_seed is None:
        return random.randint(1, 1_000_000)
    if isinstance(payload_seed, bool):
        raise ValueError("seed must be an int or string")
    if isinstance(payload_seed, int):
        return payload_seed % SEED_MAX
    if isinstance(payload_seed, str):
        s = payload_seed.strip()
        if not s:
            return random.randint(1, 1_000_000)
        if s.isdigit():
            return int(s) % SEED_MAX
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % SEED_MAX
    raise ValueError("seed must be an int or string")


def _error(err: dict, status: int = 400):
    return jsonify(err), status


def _register(game: GameSession) -> None:
    cap = current_app.config.get("ROOM_SESSION_MAX", 64)
    with _sessions_lock:
        _sessions[game.id] = game
        # Oldest sessions are evicted first (dicts keep insertion order)
        while len(_sessions) > cap:
            evicted = next(iter(_sessions))
            _sessions.pop(evicted)
            log.info(event="session_evicted", session=evicted)


def _lookup(session_id: str):
    with _sessions_lock:
        return _sessions.get(session_id)


def clear_sessions() -> None:
    with _sessions_lock:
        _sessions.clear()


def _unknown_session():
    return _error({"error": "unknown session", "field": "session_id", "code": "not_found"}, 404)


@bp_room.route("/api/room/new", methods=["POST"])
def new_room():
    """Create a session with a freshly generated room.

    Body JSON (all optional):
      { "width", "height", "entrance_side", "bombs", "enemies", "coins", "seed" }
    Response: { "session_id": <str>, "state": <session snapshot> }
    """
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    ok, parsed = validate(data, ROOM_NEW)
    if ok:
        ok, parsed = check_room_capacity(parsed)
    if not ok:
        return _error(parsed)
    try:
        seed = _coerce_seed(data.get("seed"))
    except ValueError as exc:
        return _error({"error": str(exc), "field": "seed", "code": "type"})
    config = RoomConfig(
        width=parsed.get("width", 15),
        height=parsed.get("height", 15),
        entrance_side=parsed.get("entrance_side", "LEFT"),
        bomb_count=parsed.get("bombs", 0),
        enemy_count=parsed.get("enemies", 0),
        coin_count=parsed.get("coins", 0),
        seed=seed,
    )
    game = GameSession.new(config)
    _register(game)
    log.info(event="session_created", session=game.id, seed=seed, size=f"{config.width}x{config.height}")
    return jsonify({"session_id": game.id, "state": game.to_dict()}), 201


@bp_room.route("/api/room/<session_id>/state")
def room_state(session_id):
    game = _lookup(session_id)
    if game is None:
        return _unknown_session()
    with game.lock:
        state = game.to_dict()
    return jsonify(state)


@bp_room.route("/api/room/<session_id>/action", methods=["POST"])
def room_action(session_id):
    """Apply one player action.

    Body JSON: { "action": "move" | "toggle_equip", "dir": "n" | "s" | "e" | "w" }
    Response: { "events": [<str>, ...], "state": <session snapshot> }
    """
    game = _lookup(session_id)
    if game is None:
        return _unknown_session()
    ok, parsed = validate(request.get_json(silent=True), ROOM_ACTION)
    if not ok:
        return _error(parsed)
    if parsed["action"] == "move" and "dir" not in parsed:
        return _error({"error": "missing required field", "field": "dir", "code": "required"})
    # One turn at a time per session; the snapshot must match the events
    with game.lock:
        try:
            if parsed["action"] == "toggle_equip":
                events = game.toggle_equip()
            else:
                events = game.act(parsed["dir"])
        except GameOverError as exc:
            return _error({"error": str(exc), "field": "action", "code": "game_over"}, 409)
        state = game.to_dict()
    return jsonify({"events": events, "state": state})


@bp_room.route("/api/room/<session_id>/metrics")
def room_metrics(session_id):
    game = _lookup(session_id)
    if game is None:
        return _unknown_session()
    with game.lock:
        payload = {"level": game.room.level, "metrics": dict(game.room.metrics)}
    return jsonify(payload)


@bp_room.route("/api/room/<session_id>", methods=["DELETE"])
def delete_room(session_id):
    with _sessions_lock:
        game = _sessions.pop(session_id, None)
    if game is None:
        return _unknown_session()
    return jsonify({"deleted": session_id})

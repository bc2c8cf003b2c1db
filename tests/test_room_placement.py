import random

import pytest

from minecrawl.room import FLOOR, LEFT, WALL, Bomb, Coin, Room, RoomGenerationError
from minecrawl.room import placement
from minecrawl.room.connectivity import has_no_isolated_regions, has_path
from minecrawl.room.metrics import init_metrics
from minecrawl.room.placement import PlacementEngine
from tests.room_test_utils import hints_consistent, open_room


def _engine(room, seed=0):
    return PlacementEngine(room.grid, room.entrance_pos, room.exit_pos, room.config, random.Random(seed), init_metrics())


def _chebyshev(a, b):
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


def test_reference_scenario_20x20():
    room = Room(20, 20, 30, LEFT, 25, 10, 5, seed=2024)
    assert room.entrance_pos[0] == 0
    assert room.exit_side != LEFT
    assert len(room.bombs) <= 25
    assert len(room.enemies) <= 10
    assert len(room.coins) <= 5
    assert room.has_path()
    assert room.has_no_isolated_regions()


@pytest.mark.parametrize("seed", range(10))
def test_entity_placement_rules(seed):
    room = Room(16, 16, 30, LEFT, 20, 6, 4, seed=seed)
    positions = [e.pos for e in room.entities()]
    assert len(positions) == len(set(positions))
    for x, y in positions:
        assert room.grid.is_interior(x, y)
        assert room.cell_type(x, y) == FLOOR
        for door in (room.entrance_pos, room.exit_pos):
            assert _chebyshev((x, y), door) > 2
    assert room.has_path()
    assert room.has_no_isolated_regions({b.pos for b in room.bombs})
    assert hints_consistent(room)


def test_bomb_that_strands_a_pocket_is_rejected():
    room = open_room(9, 9)
    # (1, 1) is reachable only through (2, 1) once (1, 2) is walled
    room.grid.set_cell_type(1, 2, WALL)
    engine = _engine(room)
    assert not engine._try_add_bomb(2, 1)
    assert engine.bombs == []
    assert engine.metrics["bombs_rolled_back"] == 1
    assert engine._try_add_bomb(5, 5)
    assert len(engine.bombs) == 1


def test_invalid_positions():
    room = open_room(9, 9)
    engine = _engine(room)
    ex, ey = room.entrance_pos
    assert not engine.is_valid_entity_position(0, 0)
    assert not engine.is_valid_entity_position(ex + 2, ey)
    assert engine.is_valid_entity_position(3, 5)
    engine.coins.append(Coin(3, 5))
    assert not engine.is_valid_entity_position(3, 5)
    room.grid.set_cell_type(4, 4, WALL)
    assert not engine.is_valid_entity_position(4, 4)


def test_void_breaking_targets_cluster_centre():
    room = open_room(15, 15)
    engine = _engine(room)
    injected = engine.break_voids(quota=5)
    assert injected == 1
    assert engine.metrics["void_bombs"] == 1
    (bomb,) = engine.bombs
    assert _chebyshev(bomb.pos, (7, 7)) <= 1


def test_void_breaking_respects_quota():
    room = open_room(15, 15)
    engine = _engine(room)
    assert engine.break_voids(quota=0) == 0
    assert engine.bombs == []


def test_repair_clears_bombs_on_path():
    room = open_room(9, 9)
    engine = _engine(room)
    engine.bombs = [Bomb(3, y) for y in range(1, 8)]
    removed = engine.repair_path()
    assert removed >= 1
    assert engine.metrics["bombs_repaired"] == removed
    assert len(engine.bombs) == 7 - removed
    assert has_path(room.grid, room.entrance_pos, room.exit_pos, engine.bomb_positions())


def test_repair_is_noop_when_path_exists():
    room = open_room(9, 9)
    engine = _engine(room)
    engine.bombs = [Bomb(5, 5)]
    assert engine.repair_path() == 0
    assert len(engine.bombs) == 1


def test_walls_only_disconnection_raises():
    room = open_room(9, 9)
    for y in range(1, 8):
        room.grid.set_cell_type(3, y, WALL)
    engine = _engine(room)
    with pytest.raises(RoomGenerationError):
        engine.repair_path()


def test_underfill_is_logged_not_raised(capsys):
    room = Room(5, 5, 30, LEFT, 20, 0, 0, seed=1)
    assert len(room.bombs) < 20
    assert room.metrics["bombs_underfill"] == 20 - len(room.bombs)
    out = capsys.readouterr().out
    assert "event=placement_underfill" in out
    assert "kind=bomb" in out


def test_bomb_count_never_exceeds_request():
    for seed in range(15):
        room = Room(15, 15, 30, LEFT, 12, 0, 0, seed=seed)
        assert len(room.bombs) <= 12


def test_saturated_scatter_checks_each_cell_once(monkeypatch):
    room = open_room(12, 12)
    engine = _engine(room)
    calls = []
    real = placement.has_no_isolated_regions

    def counting(grid, start, blockers):
        calls.append(start)
        return real(grid, start, blockers)

    monkeypatch.setattr(placement, "has_no_isolated_regions", counting)
    engine.scatter_bombs(500)
    engine.scatter_bombs(500)
    interior = (room.width - 2) * (room.height - 2)
    assert len(calls) <= interior
    positions = [b.pos for b in engine.bombs]
    assert len(positions) == len(set(positions))
    assert has_no_isolated_regions(room.grid, room.entrance_pos, set(positions))

import pytest

from minecrawl.room import LEFT, TOP, Room, RoomConfig


@pytest.mark.parametrize(
    "kwargs",
    [
        {"width": 4},
        {"height": 2},
        {"entrance_side": "NORTH"},
        {"bomb_count": -1},
        {"enemy_count": -2},
        {"coin_count": -3},
        {"wall_density_min": 0.5, "wall_density_max": 0.2},
        {"chunk_min_size": 0},
    ],
)
def test_invalid_config_rejected(kwargs):
    with pytest.raises(ValueError):
        RoomConfig(**kwargs)


def test_room_constructor_validates():
    with pytest.raises(ValueError):
        Room(3, 3, 30, LEFT)
    with pytest.raises(ValueError):
        Room(10, 10, 30, "DOWN")


def test_env_override(monkeypatch):
    monkeypatch.setenv("ROOM_VOID_THRESHOLD", "7")
    monkeypatch.setenv("ROOM_ENABLE_GENERATION_METRICS", "0")
    room = Room(10, 10, 30, LEFT, seed=1)
    assert room.config.void_threshold == 7
    assert room.metrics == {}


def test_flask_config_override_wins(monkeypatch, test_app):
    monkeypatch.setenv("ROOM_SAFE_RADIUS", "1")
    test_app.config["ROOM_SAFE_RADIUS"] = 2
    try:
        room = Room(10, 10, 30, LEFT, seed=1)
        assert room.config.safe_radius == 2
    finally:
        test_app.config.pop("ROOM_SAFE_RADIUS")


def test_bad_override_fails_validation(monkeypatch):
    monkeypatch.setenv("ROOM_WALL_DENSITY_MIN", "0.9")
    with pytest.raises(ValueError):
        Room(10, 10, 30, LEFT, seed=1)


def test_zero_density_yields_no_interior_walls(monkeypatch):
    monkeypatch.setenv("ROOM_WALL_DENSITY_MIN", "0")
    monkeypatch.setenv("ROOM_WALL_DENSITY_MAX", "0")
    room = Room(12, 12, 30, LEFT, seed=4)
    assert room.metrics["wall_cells"] == 0


def test_config_and_positional_shape_conflict():
    with pytest.raises(ValueError):
        Room(20, 20, config=RoomConfig())
    with pytest.raises(ValueError):
        Room(15, 15, 30, LEFT, 4, config=RoomConfig())


def test_room_keeps_its_own_config_copy():
    cfg = RoomConfig(width=15, height=15, entrance_side=LEFT, bomb_count=4, seed=9)
    room = Room(config=cfg, seed=3)
    assert room.config is not cfg
    assert cfg.seed == 9
    room.regenerate_next_level(entrance_side=TOP)
    assert room.entrance_side == TOP
    assert cfg.entrance_side == LEFT

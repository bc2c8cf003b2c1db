from minecrawl.room import Bomb, Coin, Enemy
from minecrawl.room.hints import compute_hints
from tests.room_test_utils import hints_consistent


def _add(room, *entities):
    for ent in entities:
        {"bomb": room.bombs, "enemy": room.enemies, "coin": room.coins}[ent.kind].append(ent)
    room.recompute_hints()


def test_hint_counts_all_entity_kinds(blank_room):
    _add(blank_room, Bomb(4, 4), Enemy(5, 5), Coin(3, 5))
    assert blank_room.hint_at(4, 5) == 3
    meta = blank_room.cell(4, 5)
    assert meta.has_neighbor_bomb and meta.has_neighbor_enemy and meta.has_neighbor_coin
    # The bomb does not count itself; the enemy and coin touch it diagonally
    assert blank_room.hint_at(4, 4) == 2
    assert blank_room.hint_at(1, 1) == 0
    assert hints_consistent(blank_room)


def test_neighbor_flags_are_per_kind(blank_room):
    _add(blank_room, Coin(2, 2))
    meta = blank_room.cell(3, 3)
    assert meta.hint == 1
    assert meta.has_neighbor_coin
    assert not meta.has_neighbor_bomb and not meta.has_neighbor_enemy


def test_remove_bomb_decrements_neighbors(blank_room):
    bomb = Bomb(4, 4)
    _add(blank_room, bomb, Bomb(6, 4))
    before = {(x, y): blank_room.hint_at(x, y) for x, y in blank_room.grid.neighbors8(4, 4)}
    assert blank_room.remove_entity(blank_room.get_entity_at(4, 4))
    assert len(blank_room.bombs) == 1
    for (x, y), hint in before.items():
        assert blank_room.hint_at(x, y) == hint - 1
    assert not blank_room.cell(3, 3).has_neighbor_bomb
    assert hints_consistent(blank_room)


def test_remove_entity_by_identity(blank_room):
    enemy = Enemy(4, 4)
    _add(blank_room, enemy)
    assert blank_room.remove_entity(enemy)
    assert not blank_room.remove_entity(enemy)
    assert blank_room.enemies == []


def test_recompute_clears_stale_hints(blank_room):
    _add(blank_room, Bomb(4, 4))
    blank_room.bombs.clear()
    compute_hints(blank_room.grid, blank_room.entities())
    assert all(blank_room.grid.meta[x][y].hint == 0 for x, y in blank_room.grid.coords())


def test_hint_at_out_of_bounds_is_zero(blank_room):
    assert blank_room.hint_at(-1, -1) == 0

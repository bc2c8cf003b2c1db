from minecrawl.room import WALL, Bomb
from tests.room_test_utils import open_room


def _row_of_bombs(room):
    room.bombs.extend([Bomb(3, 3), Bomb(4, 3), Bomb(5, 3)])
    room.recompute_hints()


def test_reveal_cell_is_idempotent(blank_room):
    blank_room.reveal_cell(3, 3)
    assert not blank_room.is_hidden(3, 3)
    blank_room.reveal_cell(3, 3)
    assert not blank_room.is_hidden(3, 3)
    # out of bounds is ignored
    blank_room.reveal_cell(99, 99)
    assert not blank_room.is_hidden(99, 99)


def test_enter_numbered_cell_reveals_only_itself(blank_room):
    _row_of_bombs(blank_room)
    assert blank_room.hint_at(4, 4) == 3
    assert blank_room.on_player_enter(4, 4)
    assert not blank_room.is_hidden(4, 4)
    assert blank_room.is_hidden(3, 4)
    assert blank_room.is_hidden(5, 4)
    assert blank_room.is_hidden(4, 5)


def test_enter_blank_cell_floods_region_and_rim(blank_room):
    _row_of_bombs(blank_room)
    assert blank_room.hint_at(4, 7) == 0
    assert blank_room.on_player_enter(4, 7)
    revealed = [(x, y) for x, y in blank_room.grid.interior_coords() if not blank_room.is_hidden(x, y)]
    assert len(revealed) > 1
    assert not blank_room.is_hidden(4, 5)
    # numbered rim cells are uncovered but do not spread further
    assert not blank_room.is_hidden(4, 4)
    assert not blank_room.is_hidden(4, 2)
    # the region wraps around the bomb row through the side columns
    assert not blank_room.is_hidden(1, 1)
    for bomb in blank_room.bombs:
        assert blank_room.is_hidden(*bomb.pos)


def test_enter_already_revealed_cell_returns_false(blank_room):
    blank_room.reveal_cell(2, 2)
    assert not blank_room.on_player_enter(2, 2)


def test_doors_do_not_cascade(blank_room):
    ex, ey = blank_room.entrance_pos
    blank_room.grid.meta[ex][ey].hidden = True
    assert blank_room.on_player_enter(ex, ey)
    assert blank_room.is_hidden(ex + 1, ey)


def test_flood_fill_stops_at_walls():
    room = open_room(9, 9)
    for y in range(1, 8):
        room.grid.set_cell_type(4, y, WALL)
    visited = room.flood_fill_unhide(2, 4)
    assert all(x <= 4 for x, _ in visited)
    assert room.is_hidden(6, 4)
    assert not room.is_hidden(3, 4)


def test_flood_fill_uncovers_rim_but_not_entity(blank_room):
    blank_room.bombs.append(Bomb(6, 6))
    blank_room.recompute_hints()
    # (5, 5) touches the bomb; it is revealed as part of the rim
    blank_room.flood_fill_unhide(2, 2)
    assert not blank_room.is_hidden(5, 5)
    assert blank_room.is_hidden(6, 6)


def test_flood_fill_does_not_expand_from_entity_cells(blank_room):
    blank_room.bombs.append(Bomb(2, 2))
    blank_room.recompute_hints()
    visited = blank_room.flood_fill_unhide(2, 2)
    assert visited == {(2, 2)}


def test_flood_fill_clears_large_open_room():
    room = open_room(60, 60)
    assert room.on_player_enter(30, 30)
    assert not any(room.is_hidden(x, y) for x, y in room.grid.interior_coords())

from minecrawl.room import WALL
from minecrawl.room.connectivity import (
    has_no_isolated_regions,
    has_path,
    reachable_from,
    shortest_path_ignoring_hazards,
    zero_hint_clusters,
)
from minecrawl.room.grid import Grid


def _corridor_grid():
    # 7x5 with a wall column at x=3 except for a gap at y=2
    g = Grid(7, 5)
    for y in range(5):
        if y != 2:
            g.set_cell_type(3, y, WALL)
    return g


def test_has_path_through_gap():
    g = _corridor_grid()
    assert has_path(g, (0, 0), (6, 4))


def test_blockers_close_the_gap():
    g = _corridor_grid()
    assert not has_path(g, (0, 0), (6, 4), {(3, 2)})


def test_has_path_rejects_wall_or_blocked_endpoints():
    g = _corridor_grid()
    assert not has_path(g, (3, 0), (6, 4))
    assert not has_path(g, (0, 0), (6, 4), {(0, 0)})


def test_has_path_trivial_same_cell():
    g = Grid(5, 5)
    assert has_path(g, (2, 2), (2, 2))


def test_isolated_region_detected():
    g = _corridor_grid()
    assert has_no_isolated_regions(g, (0, 0))
    # Blocking the gap strands everything right of the wall
    assert not has_no_isolated_regions(g, (0, 0), {(3, 2)})


def test_reachable_from_excludes_blockers():
    g = Grid(5, 5)
    reach = reachable_from(g, (0, 0), {(1, 1)})
    assert (1, 1) not in reach
    assert len(reach) == 24


def test_shortest_path_ignores_hazards_but_not_walls():
    g = _corridor_grid()
    path = shortest_path_ignoring_hazards(g, (0, 2), (6, 2))
    assert path[0] == (0, 2) and path[-1] == (6, 2)
    assert (3, 2) in path
    assert len(path) == 7
    g.set_cell_type(3, 2, WALL)
    assert shortest_path_ignoring_hazards(g, (0, 2), (6, 2)) is None


def test_zero_hint_clusters_split_by_walls_and_hints():
    g = _corridor_grid()
    g.meta[5][2].hint = 1
    clusters = zero_hint_clusters(g, occupied={(1, 1)})
    cells = {c for cluster in clusters for c in cluster}
    # border cells, walls, hinted and occupied cells never join a cluster
    assert (0, 0) not in cells
    assert (3, 2) in cells
    assert (5, 2) not in cells
    assert (1, 1) not in cells
    assert sum(len(c) for c in clusters) == len(cells)

import pytest

from bumperfield.grid import Grid
from bumperfield.mapgen.carve import (
    block_chance, blocked_neighbours, carve_funnel, carve_pockets,
    carve_rooms_and_funnels, seed_rock_noise, smooth, smooth_pass,
)
from bumperfield.mapgen.perimeter import mark_edge_buffer
from bumperfield.rng import PMRandom
from bumperfield.terrain import (
    OPEN, OPEN_POCKET, FUNNEL, BLOCKED_ROCK, BLOCKED_WALL_BUFFER,
)

def medium_grid():
    g = Grid.create(20, 12, 1.0)
    mark_edge_buffer(g, 1)
    return g

def test_pockets_are_open_pocket_rectangles_inside_margin():
    for seed in range(1, 30):
        g = medium_grid()
        rooms = carve_pockets(g, PMRandom.from_seed(seed), complexity=2)
        assert 1 <= len(rooms) <= 4
        for rx, ry, rw, rh in rooms:
            assert (rw, rh) == (2, 2)   # max(3, 20 // 6) and max(3, 12 // 6) cap both at 2
            assert 2 <= rx and rx + rw <= 18
            assert 2 <= ry and ry + rh <= 10
            for x in range(rx, rx + rw):
                for y in range(ry, ry + rh):
                    assert g.get(x, y) == OPEN_POCKET

def test_pocket_count_without_complexity():
    counts = {len(carve_pockets(medium_grid(), PMRandom.from_seed(s), 0)) for s in range(1, 60)}
    assert counts <= {1, 2}

def test_larger_grid_allows_bigger_rooms():
    g = Grid.create(50, 30, 1.0)
    sizes = set()
    for seed in range(1, 40):
        for _, _, rw, rh in carve_pockets(g, PMRandom.from_seed(seed), 4):
            assert 2 <= rw < 8 and 2 <= rh < 5
            sizes.add((rw, rh))
    assert len(sizes) > 1

def test_funnel_walk_starts_on_bottom_edge_and_never_moves_down():
    for seed in range(1, 25):
        g = medium_grid()
        path = carve_funnel(g, PMRandom.from_seed(seed), cohesion=2)
        assert path[0][1] == 0
        assert 1 <= path[0][0] < 19
        for (ax, ay), (bx, by) in zip(path, path[1:]):
            assert abs(bx - ax) + abs(by - ay) == 1
            assert by >= ay
            assert 1 <= bx <= 18 and 1 <= by <= 10
        assert len(path) <= 20 * 12 // 2
        assert all(g.get(x, y) == FUNNEL for x, y in path)

def test_funnel_without_noise_reaches_target_window():
    for seed in range(1, 25):
        path = carve_funnel(medium_grid(), PMRandom.from_seed(seed), cohesion=0)
        ex, ey = path[-1]
        # target = centre +- a sixth of each dimension
        assert 7 <= ex < 13
        assert 4 <= ey < 8

def test_no_funnels_without_cohesion():
    for seed in range(1, 30):
        g = medium_grid()
        assert carve_rooms_and_funnels(g, PMRandom.from_seed(seed), 0, 0) == 0
        assert g.count(FUNNEL) == 0

def test_block_chance_scales_with_complexity():
    assert block_chance(0) == pytest.approx(0.08)
    assert block_chance(4) == pytest.approx(0.16)

def test_noise_only_touches_open_interior_cells():
    g = Grid.create(50, 30, 1.0)
    mark_edge_buffer(g, 1)
    g.set(10, 10, OPEN_POCKET)
    placed = seed_rock_noise(g, PMRandom.from_seed(3), complexity=0)
    assert g.count(BLOCKED_ROCK) == placed
    # 46 * 26 interior cells at 8%: about 96 expected
    assert 40 < placed < 160
    assert g.get(10, 10) == OPEN_POCKET
    for c in g.cells():
        if c.x < 2 or c.y < 2 or c.x >= 48 or c.y >= 28:
            assert c.terrain != BLOCKED_ROCK

def test_neighbour_count_excludes_centre():
    g = Grid.create(4, 4, 1.0, fill=BLOCKED_ROCK)
    assert blocked_neighbours(g.buf, g.width, 1, 1) == 8
    g.set(1, 1, OPEN)
    g.set(2, 2, OPEN)
    assert blocked_neighbours(g.buf, g.width, 1, 1) == 7

def test_smoothing_reads_previous_pass_only():
    # A=(1,2) has one blocked neighbour and opens; B=(2,2) sees five blocked
    # neighbours (A included) in the snapshot and turns to rock. An in-place
    # update would have let B see A already open (four) and stay open.
    g = Grid.create(5, 5, 1.0)
    for x, y in ((1, 2), (2, 3), (3, 1), (3, 2), (3, 3)):
        g.set(x, y, BLOCKED_ROCK)
    smooth(g, 1)
    assert g.get(1, 2) == OPEN
    assert g.get(2, 2) == BLOCKED_ROCK

def test_smooth_pass_leaves_source_untouched():
    g = Grid.create(6, 6, 1.0)
    g.set(2, 2, BLOCKED_ROCK)
    src = g.snapshot()
    dst = [0] * len(src)
    smooth_pass(g, src, dst)
    assert src == g.buf
    assert dst[g.idx(2, 2)] == OPEN

def test_smoothing_keeps_buffer_cells():
    g = Grid.create(6, 6, 1.0)
    mark_edge_buffer(g, 2)
    before = g.count(BLOCKED_WALL_BUFFER)
    smooth(g, 3)
    assert g.count(BLOCKED_WALL_BUFFER) == before == 32

import dataclasses
import random
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from math import hypot

import pytest

from bumperfield.config import default_options
from bumperfield.mapgen.generator import generate, get_preset_size
from bumperfield.mapgen.placement import spawn_candidates
from bumperfield.terrain import (
    BOSS_ROOM, LARGE, MEDIUM, SMALL, PRESET_SIZES,
    FUNNEL, BLOCKED_WALL_BUFFER, is_spawnable,
)

def fingerprint(data):
    return (
        tuple(data.grid.buf),
        tuple(data.launcher_nodes),
        tuple(data.enemy_spawns),
        tuple(data.wall_segments),
        data.open_cell_count,
        data.spawn_count,
    )

def test_preset_sizes():
    assert get_preset_size(SMALL) == (12.0, 8.0)
    assert get_preset_size(MEDIUM) == (20.0, 12.0)
    assert get_preset_size(LARGE) == (30.0, 18.0)
    assert get_preset_size(BOSS_ROOM) == (50.0, 30.0)
    assert get_preset_size("nowhere") == (20.0, 12.0)

def test_same_arguments_same_battlefield():
    for preset in PRESET_SIZES:
        assert fingerprint(generate(42, preset)) == fingerprint(generate(42, preset))

def test_seeds_change_the_layout():
    layouts = {tuple(generate(seed, MEDIUM).grid.buf) for seed in range(1, 6)}
    assert len(layouts) > 1

def test_process_random_state_does_not_leak_in():
    random.seed(1)
    a = fingerprint(generate(7, LARGE))
    random.seed(999)
    random.random()
    assert fingerprint(generate(7, LARGE)) == a

def test_parallel_generation_matches_serial():
    seeds = list(range(100, 108))
    serial = [fingerprint(generate(s, MEDIUM)) for s in seeds]
    with ThreadPoolExecutor(max_workers=4) as pool:
        parallel = list(pool.map(lambda s: fingerprint(generate(s, MEDIUM)), seeds))
    assert parallel == serial

def test_seed_42_medium_defaults():
    data = generate(42, MEDIUM, default_options())
    assert data.grid_size == (20, 12)
    assert len(data.wall_segments) == 4
    assert 0 < len(data.enemy_spawns) <= 8
    assert data.spawn_count == len(data.enemy_spawns)
    assert data.open_cell_count == data.grid.count_open()
    assert len(data.launcher_nodes) == 32
    assert data.bounds.extents == (10.0, 6.0)

def test_none_options_are_the_defaults():
    assert fingerprint(generate(5, SMALL, None)) == fingerprint(generate(5, SMALL, default_options()))

def test_grid_floor_for_huge_cells():
    for preset, (w, h) in PRESET_SIZES.items():
        for cell in (min(w, h), max(w, h), 100.0):
            data = generate(3, preset, replace(default_options(), cell_size=cell))
            assert data.grid.width >= 4 and data.grid.height >= 4
            assert len(data.wall_segments) == 4
            assert data.bounds.extents == (data.grid.width * cell / 2, data.grid.height * cell / 2)

def test_spawn_filter_and_count():
    opts = default_options()
    for preset in PRESET_SIZES:
        for seed in (1, 2, 3, 17):
            data = generate(seed, preset, opts)
            for p in data.enemy_spawns:
                assert hypot(*p) > opts.spawn_distance_from_launcher_exit
                assert is_spawnable(data.grid.cell_at_world(p).terrain)
            n = len(spawn_candidates(data.grid, opts.spawn_distance_from_launcher_exit))
            assert data.spawn_count == min(opts.spawn_count, n)
            assert len(set(data.enemy_spawns)) == data.spawn_count

def test_buffer_ring_survives_without_funnels():
    for wall_buffer in (1.0, 2.0):
        opts = replace(default_options(), cohesion=0, wall_buffer=wall_buffer)
        b = int(wall_buffer)
        for seed in range(1, 8):
            g = generate(seed, MEDIUM, opts).grid
            for c in g.cells():
                if c.x < b or c.y < b or c.x >= g.width - b or c.y >= g.height - b:
                    assert c.terrain == BLOCKED_WALL_BUFFER

def test_min_open_above_total_cells():
    opts = replace(default_options(), min_open_cells=20 * 12 + 1)
    data = generate(42, MEDIUM, opts)
    assert data.open_cell_count <= 20 * 12
    assert data.open_cell_count == data.grid.count_open()

def test_calm_settings_carve_no_funnels():
    opts = replace(default_options(), complexity=0, cohesion=0)
    for seed in range(1, 10):
        assert generate(seed, LARGE, opts).grid.count(FUNNEL) == 0

def test_max_open_is_respected_when_reachable():
    opts = replace(default_options(), min_open_cells=0, max_open_cells=120)
    data = generate(8, MEDIUM, opts)
    assert data.open_cell_count <= 120

def test_preset_names_are_normalised():
    data = generate(1, "BossRoom")
    assert data.preset == BOSS_ROOM
    assert data.grid_size == (50, 30)

def test_unknown_preset_sizes_as_medium():
    data = generate(1, "arena")
    assert data.preset == "arena"
    assert data.grid_size == (20, 12)

def test_launcher_nodes_stay_outside_for_any_offset():
    for offset in (0.0, -1.5):
        data = generate(1, MEDIUM, replace(default_options(), launcher_offset=offset))
        assert data.launcher_nodes
        assert not [n.position for n in data.launcher_nodes if data.bounds.contains(n.position)]

def test_result_is_immutable():
    data = generate(4, SMALL)
    with pytest.raises(dataclasses.FrozenInstanceError):
        data.spawn_count = 0
    assert isinstance(data.launcher_nodes, tuple)
    assert isinstance(data.enemy_spawns, tuple)
    assert isinstance(data.wall_segments, tuple)

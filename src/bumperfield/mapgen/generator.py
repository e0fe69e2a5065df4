# src/bumperfield/mapgen/generator.py
# Battlefield pipeline. Pure function of (seed, preset, options): a fresh
# PMRandom per call, threaded through every stage in a fixed order.

import logging
import math
from typing import Optional, Tuple

from ..config import GenerationOptions, default_options
from ..grid import Grid
from ..models import BattlefieldData, Bounds
from ..rng import PMRandom
from ..terrain import MEDIUM, PRESET_SIZES, normalize_preset
from .balance import balance_open_cells
from .carve import carve_maze_and_noise, carve_rooms_and_funnels
from .perimeter import (
    buffer_cells_for, build_wall_segments, generate_launcher_nodes, mark_edge_buffer,
)
from .placement import pick_spawn_points

logger = logging.getLogger(__name__)


def get_preset_size(preset: str) -> Tuple[float, float]:
    """Nominal world (width, height) for a preset; unknown names size as medium."""
    size = PRESET_SIZES.get(preset)
    if size is None:
        logger.warning("unknown preset %r, sizing as %s", preset, MEDIUM)
        return PRESET_SIZES[MEDIUM]
    return size


def build_grid(preset: str, cell_size: float) -> Tuple[Grid, Bounds]:
    world_w, world_h = get_preset_size(preset)
    g = Grid.create(math.floor(world_w / cell_size), math.floor(world_h / cell_size), cell_size)
    # Realized size follows the clamped cell counts, not the nominal preset size.
    bounds = Bounds(center=(0.0, 0.0), extents=(g.width * cell_size / 2.0, g.height * cell_size / 2.0))
    return g, bounds


def generate(seed: int, preset: str = MEDIUM, options: Optional[GenerationOptions] = None) -> BattlefieldData:
    opts = (options or default_options()).sanitized()
    try:
        preset = normalize_preset(preset)
    except ValueError:
        pass  # get_preset_size sizes it as medium
    rng = PMRandom.from_seed(seed)

    g, bounds = build_grid(preset, opts.cell_size)
    logger.debug("seed %s preset %s: grid %sx%s", seed, preset, g.width, g.height)

    buffer = buffer_cells_for(opts.wall_buffer, opts.cell_size)
    mark_edge_buffer(g, buffer)
    logger.debug("edge buffer %s cells", buffer)

    nodes = generate_launcher_nodes(bounds, opts.launcher_node_spacing, opts.launcher_offset)
    logger.debug("%s launcher nodes", len(nodes))

    funnels = carve_rooms_and_funnels(g, rng, opts.complexity, opts.cohesion)
    logger.debug("carved rooms and %s funnels", funnels)

    carve_maze_and_noise(g, rng, opts.complexity)
    logger.debug("noise + smoothing done, open cells %s", g.count_open())

    report = balance_open_cells(g, rng, opts.min_open_cells, opts.max_open_cells)
    logger.debug("balance %s", report)

    spawns = pick_spawn_points(
        g, rng, opts.spawn_count, opts.spawn_distance_from_launcher_exit,
    )
    walls = build_wall_segments(bounds, opts.wall_thickness)

    data = BattlefieldData(
        seed=seed,
        preset=preset,
        cell_size=opts.cell_size,
        bounds=bounds,
        grid=g,
        launcher_nodes=tuple(nodes),
        enemy_spawns=tuple(spawns),
        wall_segments=tuple(walls),
        open_cell_count=g.count_open(),
        spawn_count=len(spawns),
    )

    logger.info(
        "Generated battlefield (seed %s, %s %sx%s) openCells=%s spawns=%s",
        seed, preset, g.width, g.height, data.open_cell_count, data.spawn_count,
    )
    return data

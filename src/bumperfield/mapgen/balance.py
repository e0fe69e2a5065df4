# src/bumperfield/mapgen/balance.py
# Open-cell balancer: nudges the open count into [min, max] by clearing small
# rock clusters, widening random 3x3 patches, or dropping single blockers.
# Bounds are best-effort; running out of attempts is not an error.

import logging
from collections import deque
from dataclasses import dataclass
from typing import List, Set, Tuple

from ..grid import Grid
from ..rng import PMRandom
from ..terrain import OPEN, BLOCKED_ROCK, BLOCKED_WALL_BUFFER

logger = logging.getLogger(__name__)

XY = Tuple[int, int]

MAX_ATTEMPTS = 1000
SMALL_CLUSTER = 4
NEIGHBOURS_4 = ((0, 1), (0, -1), (-1, 0), (1, 0))  # up, down, left, right

@dataclass
class BalanceReport:
    raise_attempts: int = 0
    clusters_cleared: int = 0
    widenings: int = 0
    lower_attempts: int = 0
    open_cells: int = 0
    within_bounds: bool = True

def flood_cluster(g: Grid, sx: int, sy: int, tag: int) -> List[XY]:
    """4-connected cells sharing `tag` with (sx, sy), breadth-first."""
    if not g.in_bounds(sx, sy) or g.get(sx, sy) != tag:
        return []
    seen: Set[XY] = {(sx, sy)}
    q = deque([(sx, sy)])
    out = []
    while q:
        x, y = q.popleft()
        out.append((x, y))
        for dx, dy in NEIGHBOURS_4:
            nx, ny = x + dx, y + dy
            if (nx, ny) not in seen and g.in_bounds(nx, ny) and g.get(nx, ny) == tag:
                seen.add((nx, ny))
                q.append((nx, ny))
    return out

def flood_size(g: Grid, sx: int, sy: int, tag: int) -> int:
    return len(flood_cluster(g, sx, sy, tag))

def clear_small_blocked_cluster(g: Grid, max_size: int = SMALL_CLUSTER) -> bool:
    """
    Open the first rock cluster (x-major scan over the 1-cell interior)
    with at most `max_size` cells. Returns False when none exists.
    """
    measured: Set[XY] = set()
    for x in range(1, g.width - 1):
        for y in range(1, g.height - 1):
            if (x, y) in measured or g.get(x, y) != BLOCKED_ROCK:
                continue
            cluster = flood_cluster(g, x, y, BLOCKED_ROCK)
            if len(cluster) <= max_size:
                for cx, cy in cluster:
                    g.set(cx, cy, OPEN)
                return True
            measured.update(cluster)
    return False

def widen_random_path(g: Grid, rng: PMRandom) -> XY:
    rx = rng.range(2, g.width - 2)
    ry = rng.range(2, g.height - 2)
    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            x, y = rx + dx, ry + dy
            if g.in_bounds(x, y) and g.get(x, y) != BLOCKED_WALL_BUFFER:
                g.set(x, y, OPEN)
    return (rx, ry)

def add_random_blocker(g: Grid, rng: PMRandom) -> XY:
    # No check for an already-blocked cell; the buffer ring keeps its tag.
    rx = rng.range(2, g.width - 2)
    ry = rng.range(2, g.height - 2)
    if g.get(rx, ry) != BLOCKED_WALL_BUFFER:
        g.set(rx, ry, BLOCKED_ROCK)
    return (rx, ry)

def balance_open_cells(g: Grid, rng: PMRandom, min_open: int, max_open: int) -> BalanceReport:
    report = BalanceReport()
    open_cells = g.count_open()

    while open_cells < min_open and report.raise_attempts < MAX_ATTEMPTS:
        if clear_small_blocked_cluster(g):
            report.clusters_cleared += 1
        else:
            widen_random_path(g, rng)
            report.widenings += 1
        open_cells = g.count_open()
        report.raise_attempts += 1

    while open_cells > max_open and report.lower_attempts < MAX_ATTEMPTS:
        add_random_blocker(g, rng)
        open_cells = g.count_open()
        report.lower_attempts += 1

    report.open_cells = open_cells
    report.within_bounds = min_open <= open_cells <= max_open
    if not report.within_bounds:
        logger.warning(
            "open cells %s outside [%s, %s] after %s raise / %s lower attempts",
            open_cells, min_open, max_open, report.raise_attempts, report.lower_attempts,
        )
    return report

# src/bumperfield/mapgen/carve.py
# Terrain carving: pocket rooms, biased-walk funnels, rock noise and
# cellular-automata smoothing. Every draw comes from the PMRandom passed in,
# in the order written here; changing that order changes every layout.

import math
from typing import List, Tuple

from ..grid import Grid
from ..rng import PMRandom
from ..terrain import (
    OPEN, OPEN_POCKET, FUNNEL, BLOCKED_ROCK, BLOCKED_WALL_BUFFER,
    is_clear_for_smoothing,
)

XY = Tuple[int, int]

# Funnels only grow upward or sideways. Order breaks score ties.
FUNNEL_DIRS = ((0, 1), (-1, 0), (1, 0))  # up, left, right

BASE_BLOCK_CHANCE = 0.08
BLOCK_CHANCE_PER_COMPLEXITY = 0.02

def carve_pockets(g: Grid, rng: PMRandom, complexity: int) -> List[Tuple[int, int, int, int]]:
    """
    Carve 1..(2+complexity) rectangular rooms as OPEN_POCKET.
    Rooms overwrite whatever is underneath, buffer cells included.
    Returns the (x, y, w, h) rectangles for inspection.
    """
    w, h = g.width, g.height
    rooms = []
    pocket_count = rng.range(1, 3 + complexity)
    for _ in range(pocket_count):
        room_w = rng.range(2, max(3, w // 6))
        room_h = rng.range(2, max(3, h // 6))
        rx = rng.range(2, w - room_w - 2)
        ry = rng.range(2, h - room_h - 2)
        for x in range(rx, rx + room_w):
            for y in range(ry, ry + room_h):
                if g.in_bounds(x, y):
                    g.set(x, y, OPEN_POCKET)
        rooms.append((rx, ry, room_w, room_h))
    return rooms

def _in_funnel_bounds(g: Grid, x: int, y: int) -> bool:
    return 1 <= x < g.width - 1 and 1 <= y < g.height - 1

def carve_funnel(g: Grid, rng: PMRandom, cohesion: int) -> List[XY]:
    """
    Biased random walk from a bottom-edge entrance toward a point near the
    centre. Each step scores up/left/right by closeness to the target plus
    uniform noise in [-cohesion, cohesion) and takes the strict best.
    Returns the visited path.
    """
    w, h = g.width, g.height
    entrance = (rng.range(1, w - 1), 0)
    target = (
        w // 2 + rng.range(-(w // 6), w // 6),
        h // 2 + rng.range(-(h // 6), h // 6),
    )

    path = []
    cur = entrance
    for _ in range(w * h // 2):
        g.set(cur[0], cur[1], FUNNEL)
        path.append(cur)
        if cur == target:
            break

        best = cur
        best_score = -math.inf
        for dx, dy in FUNNEL_DIRS:
            nx, ny = cur[0] + dx, cur[1] + dy
            if not _in_funnel_bounds(g, nx, ny):
                continue
            score = -math.hypot(nx - target[0], ny - target[1]) + rng.uniform(-cohesion, cohesion)
            if score > best_score:
                best_score = score
                best = (nx, ny)
        cur = best
    return path

def carve_rooms_and_funnels(g: Grid, rng: PMRandom, complexity: int, cohesion: int) -> int:
    """Pockets first, then 0..cohesion funnels. Returns the funnel count."""
    carve_pockets(g, rng, complexity)
    funnels = rng.range(0, 1 + cohesion)
    for _ in range(funnels):
        carve_funnel(g, rng, cohesion)
    return funnels

def block_chance(complexity: int) -> float:
    return BASE_BLOCK_CHANCE + BLOCK_CHANCE_PER_COMPLEXITY * complexity

def seed_rock_noise(g: Grid, rng: PMRandom, complexity: int) -> int:
    # Interior only (2-cell margin). One draw per OPEN cell, x-major.
    chance = block_chance(complexity)
    placed = 0
    for x in range(2, g.width - 2):
        for y in range(2, g.height - 2):
            if g.get(x, y) == OPEN and rng.value() < chance:
                g.set(x, y, BLOCKED_ROCK)
                placed += 1
    return placed

def blocked_neighbours(tags: List[int], width: int, x: int, y: int) -> int:
    # 8-neighbourhood; the centre cell itself is not counted.
    n = 0
    for nx in range(x - 1, x + 2):
        for ny in range(y - 1, y + 2):
            if nx == x and ny == y:
                continue
            if not is_clear_for_smoothing(tags[ny * width + nx]):
                n += 1
    return n

def smooth_pass(g: Grid, src: List[int], dst: List[int]) -> None:
    """
    One automaton step reading only `src` and writing `dst`. Interior cells
    (1-cell margin) with >=5 blocked neighbours become rock, <=2 become open.
    Buffer cells are read as blocked but keep their tag.
    """
    w, h = g.width, g.height
    dst[:] = src
    for x in range(1, w - 1):
        for y in range(1, h - 1):
            i = y * w + x
            if src[i] == BLOCKED_WALL_BUFFER:
                continue
            blocked = blocked_neighbours(src, w, x, y)
            if blocked >= 5:
                dst[i] = BLOCKED_ROCK
            elif blocked <= 2:
                dst[i] = OPEN

def smooth(g: Grid, passes: int) -> None:
    front = g.snapshot()
    back = [0] * len(front)
    for _ in range(passes):
        smooth_pass(g, front, back)
        front, back = back, front
    g.buf[:] = front

def carve_maze_and_noise(g: Grid, rng: PMRandom, complexity: int) -> None:
    seed_rock_noise(g, rng, complexity)
    smooth(g, 2 + complexity)

# src/bumperfield/mapgen/placement.py
from math import hypot
from typing import List

from ..grid import Grid, Vec2
from ..rng import PMRandom
from ..terrain import is_spawnable

def spawn_candidates(g: Grid, min_distance: float) -> List[Vec2]:
    """
    World centres of OPEN / OPEN_POCKET cells farther than `min_distance`
    from the origin, in x-major scan order. Funnel cells never qualify.
    """
    out = []
    for cell in g.cells():
        if not is_spawnable(cell.terrain):
            continue
        if hypot(cell.world[0], cell.world[1]) > min_distance:
            out.append(cell.world)
    return out

def shuffle_in_place(items: list, rng: PMRandom) -> None:
    # Forward Fisher–Yates: slot i swaps with a draw from [i, n).
    n = len(items)
    for i in range(n):
        j = rng.range(i, n)
        items[i], items[j] = items[j], items[i]

def pick_spawn_points(g: Grid, rng: PMRandom, spawn_count: int, min_distance: float) -> List[Vec2]:
    candidates = spawn_candidates(g, min_distance)
    shuffle_in_place(candidates, rng)
    take = min(spawn_count, len(candidates))
    return candidates[:take]

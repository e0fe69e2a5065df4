from dataclasses import dataclass
from typing import Tuple

from .grid import Grid, Vec2

@dataclass(frozen=True)
class Bounds:
    center: Vec2
    extents: Vec2  # half-size

    @property
    def size(self) -> Vec2:
        return (self.extents[0] * 2.0, self.extents[1] * 2.0)

    @property
    def min(self) -> Vec2:
        return (self.center[0] - self.extents[0], self.center[1] - self.extents[1])

    @property
    def max(self) -> Vec2:
        return (self.center[0] + self.extents[0], self.center[1] + self.extents[1])

    def contains(self, point: Vec2) -> bool:
        (x0, y0), (x1, y1) = self.min, self.max
        return x0 <= point[0] <= x1 and y0 <= point[1] <= y1

@dataclass(frozen=True)
class LauncherNode:
    position: Vec2
    inward_normal: Vec2

@dataclass(frozen=True)
class WallSegment:
    type: str
    center: Vec2
    size: Vec2

@dataclass(frozen=True)
class BattlefieldData:
    seed: int
    preset: str
    cell_size: float
    bounds: Bounds
    grid: Grid
    launcher_nodes: Tuple[LauncherNode, ...] = ()
    enemy_spawns: Tuple[Vec2, ...] = ()
    wall_segments: Tuple[WallSegment, ...] = ()

    # metadata
    open_cell_count: int = 0
    spawn_count: int = 0

    @property
    def grid_size(self) -> Tuple[int, int]:
        return (self.grid.width, self.grid.height)

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from .terrain import OPEN, is_open

MIN_CELLS = 4

Vec2 = Tuple[float, float]

@dataclass(frozen=True)
class GridCell:
    x: int
    y: int
    world: Vec2
    terrain: int

@dataclass
class Grid:
    """
    Flat row-major terrain buffer. Only the tags in `buf` ever change;
    dimensions and the precomputed cell centres are fixed at construction.
    """
    width: int
    height: int
    cell_size: float
    bottom_left: Vec2
    buf: List[int]
    centres: List[Vec2] = field(repr=False, default_factory=list)

    @classmethod
    def create(cls, width: int, height: int, cell_size: float, fill: int = OPEN) -> "Grid":
        width = max(MIN_CELLS, width)
        height = max(MIN_CELLS, height)
        # Centred on the world origin.
        left = -width * cell_size / 2.0
        bottom = -height * cell_size / 2.0
        centres = [
            (left + (x + 0.5) * cell_size, bottom + (y + 0.5) * cell_size)
            for y in range(height)
            for x in range(width)
        ]
        return cls(
            width=width,
            height=height,
            cell_size=cell_size,
            bottom_left=(left, bottom),
            buf=[fill] * (width * height),
            centres=centres,
        )

    def idx(self, x: int, y: int) -> int:
        return y * self.width + x

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> int:
        return self.buf[self.idx(x, y)]

    def set(self, x: int, y: int, v: int) -> None:
        self.buf[self.idx(x, y)] = v

    def world_pos(self, x: int, y: int) -> Vec2:
        return self.centres[self.idx(x, y)]

    def cell(self, x: int, y: int) -> GridCell:
        if not self.in_bounds(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")
        i = self.idx(x, y)
        return GridCell(x, y, self.centres[i], self.buf[i])

    def cells(self) -> Iterator[GridCell]:
        # Column-major (x outer, y inner); stages that draw randomness per
        # cell rely on this order.
        for x in range(self.width):
            for y in range(self.height):
                yield self.cell(x, y)

    def cell_at_world(self, point: Vec2) -> Optional[GridCell]:
        px, py = point
        x = int((px - self.bottom_left[0]) // self.cell_size)
        y = int((py - self.bottom_left[1]) // self.cell_size)
        if not self.in_bounds(x, y):
            return None
        return self.cell(x, y)

    def snapshot(self) -> List[int]:
        return list(self.buf)

    def count(self, tag: int) -> int:
        return self.buf.count(tag)

    def count_open(self) -> int:
        return sum(1 for t in self.buf if is_open(t))

    def as_matrix(self) -> List[List[int]]:
        """Rows top-to-bottom (highest y first), as the battlefield reads on screen."""
        out = []
        for y in reversed(range(self.height)):
            row = [self.get(x, y) for x in range(self.width)]
            out.append(row)
        return out

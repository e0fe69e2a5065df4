# src/bumperfield/mapgen/perimeter.py
# Everything that lives on or just outside the battlefield edge: the blocked
# buffer ring, launcher nodes and the four boundary walls. No randomness here.

from typing import List

from ..grid import Grid
from ..models import Bounds, LauncherNode, WallSegment
from ..terrain import BLOCKED_WALL_BUFFER, WALL_BOUNCY, WALL_DAMPEN, WALL_NORMAL

DOWN, LEFT, UP, RIGHT = (0.0, -1.0), (-1.0, 0.0), (0.0, 1.0), (1.0, 0.0)

def buffer_cells_for(wall_buffer: float, cell_size: float) -> int:
    return max(1, round(wall_buffer / cell_size))

def mark_edge_buffer(g: Grid, buffer: int) -> None:
    w, h = g.width, g.height
    for x in range(w):
        for y in range(h):
            if x < buffer or y < buffer or x >= w - buffer or y >= h - buffer:
                g.set(x, y, BLOCKED_WALL_BUFFER)

def generate_launcher_nodes(bounds: Bounds, spacing: float, offset: float) -> List[LauncherNode]:
    """
    Nodes every `spacing` world units along each edge, starting half a
    spacing in from the corner, pushed `offset` outside the bounds.
    Emission order is top (x up), right (y down), bottom (x down), left (y up);
    consumers identify edges by this order.
    """
    half_w, half_h = bounds.extents
    cx, cy = bounds.center
    nodes: List[LauncherNode] = []

    x = -half_w + spacing / 2.0
    while x < half_w:
        nodes.append(LauncherNode((cx + x, cy + half_h + offset), DOWN))
        x += spacing

    y = half_h - spacing / 2.0
    while y > -half_h:
        nodes.append(LauncherNode((cx + half_w + offset, cy + y), LEFT))
        y -= spacing

    x = half_w - spacing / 2.0
    while x > -half_w:
        nodes.append(LauncherNode((cx + x, cy - half_h - offset), UP))
        x -= spacing

    y = -half_h + spacing / 2.0
    while y < half_h:
        nodes.append(LauncherNode((cx - half_w - offset, cy + y), RIGHT))
        y += spacing

    return nodes

def build_wall_segments(bounds: Bounds, thickness: float) -> List[WallSegment]:
    # Each wall spans its full side plus one thickness, so corners overlap.
    w, h = bounds.extents
    cx, cy = bounds.center
    t = thickness
    return [
        WallSegment(WALL_NORMAL, (cx, cy + h + t / 2.0), (w * 2.0 + t, t)),   # top
        WallSegment(WALL_NORMAL, (cx, cy - h - t / 2.0), (w * 2.0 + t, t)),   # bottom
        WallSegment(WALL_BOUNCY, (cx + w + t / 2.0, cy), (t, h * 2.0 + t)),   # right
        WallSegment(WALL_DAMPEN, (cx - w - t / 2.0, cy), (t, h * 2.0 + t)),   # left
    ]

# src/bumperfield/render/image.py
# Render a BattlefieldData to a Pillow image: terrain cells, wall outlines,
# launcher nodes with their inward normals, and spawn markers.

import os
from typing import Tuple

from PIL import Image, ImageDraw

from ..models import BattlefieldData
from .palette import BACKGROUND, LAUNCHER, SPAWN, terrain_color, wall_color

def _world_extent(data: BattlefieldData) -> Tuple[float, float, float, float]:
    (x0, y0), (x1, y1) = data.bounds.min, data.bounds.max
    for n in data.launcher_nodes:
        px, py = n.position
        x0, y0, x1, y1 = min(x0, px), min(y0, py), max(x1, px), max(y1, py)
    for s in data.wall_segments:
        hx, hy = s.size[0] / 2.0, s.size[1] / 2.0
        x0, y0 = min(x0, s.center[0] - hx), min(y0, s.center[1] - hy)
        x1, y1 = max(x1, s.center[0] + hx), max(y1, s.center[1] + hy)
    pad = data.cell_size
    return x0 - pad, y0 - pad, x1 + pad, y1 + pad

def render_battlefield(data: BattlefieldData, cell_px: int = 16) -> Image.Image:
    """
    Pixels per world unit are cell_px / cell_size. World +y is up, so rows
    are flipped when drawing.
    """
    scale = cell_px / data.cell_size
    x0, y0, x1, y1 = _world_extent(data)
    w_px = max(1, int(round((x1 - x0) * scale)))
    h_px = max(1, int(round((y1 - y0) * scale)))

    def to_px(p):
        return ((p[0] - x0) * scale, (y1 - p[1]) * scale)

    img = Image.new("RGBA", (w_px, h_px), BACKGROUND)
    draw = ImageDraw.Draw(img)

    half = data.cell_size / 2.0
    for cell in data.grid.cells():
        cx, cy = cell.world
        left, top = to_px((cx - half, cy + half))
        right, bottom = to_px((cx + half, cy - half))
        # 90% of the cell, leaving a grid line between neighbours
        inset = cell_px * 0.05
        draw.rectangle([left + inset, top + inset, right - inset, bottom - inset], fill=terrain_color(cell.terrain))

    for s in data.wall_segments:
        hx, hy = s.size[0] / 2.0, s.size[1] / 2.0
        left, top = to_px((s.center[0] - hx, s.center[1] + hy))
        right, bottom = to_px((s.center[0] + hx, s.center[1] - hy))
        draw.rectangle([left, top, right, bottom], outline=wall_color(s.type))

    r = max(2, cell_px // 4)
    for n in data.launcher_nodes:
        px, py = to_px(n.position)
        draw.ellipse([px - r, py - r, px + r, py + r], fill=LAUNCHER)
        tip = to_px((n.position[0] + n.inward_normal[0] * data.cell_size * 1.2,
                     n.position[1] + n.inward_normal[1] * data.cell_size * 1.2))
        draw.line([(px, py), tip], fill=LAUNCHER, width=1)

    for p in data.enemy_spawns:
        px, py = to_px(p)
        draw.line([(px - r, py - r), (px + r, py + r)], fill=SPAWN, width=2)
        draw.line([(px - r, py + r), (px + r, py - r)], fill=SPAWN, width=2)

    return img

def save_png(data: BattlefieldData, out_png: str, cell_px: int = 16) -> None:
    parent = os.path.dirname(out_png)
    if parent:
        os.makedirs(parent, exist_ok=True)
    render_battlefield(data, cell_px=cell_px).save(out_png)

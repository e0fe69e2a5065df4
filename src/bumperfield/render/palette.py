# src/bumperfield/render/palette.py
# Debug colours shared by the Pillow renderer and the pygame viewer.

from typing import Tuple

from ..terrain import (
    OPEN, OPEN_POCKET, FUNNEL, BLOCKED_ROCK, BLOCKED_WALL_BUFFER,
    WALL_NORMAL, WALL_BOUNCY, WALL_DAMPEN, WALL_BREAKABLE,
)

RGBA = Tuple[int, int, int, int]

BACKGROUND: RGBA = (16, 16, 20, 255)
LAUNCHER: RGBA = (255, 0, 255, 255)
SPAWN: RGBA = (255, 60, 60, 255)

_TERRAIN_COLORS = {
    OPEN:                (70, 160, 80, 255),
    OPEN_POCKET:         (110, 200, 120, 255),
    FUNNEL:              (235, 140, 40, 255),
    BLOCKED_ROCK:        (150, 45, 45, 255),
    BLOCKED_WALL_BUFFER: (120, 120, 120, 255),
}

_WALL_COLORS = {
    WALL_NORMAL:    (255, 220, 0, 255),
    WALL_BOUNCY:    (0, 200, 255, 255),
    WALL_DAMPEN:    (150, 110, 255, 255),
    WALL_BREAKABLE: (220, 220, 220, 255),
}

def terrain_color(tag: int) -> RGBA:
    return _TERRAIN_COLORS.get(tag, (0, 0, 0, 255))

def wall_color(wall_type: str) -> RGBA:
    return _WALL_COLORS.get(wall_type, (255, 255, 255, 255))

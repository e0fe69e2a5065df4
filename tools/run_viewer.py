#!/usr/bin/env python3
# Minimal interactive viewer for generated battlefields (no gameplay).
# - Left/Right: previous/next seed
# - Up/Down: cycle preset
# - R: random seed
# - N: toggle launcher nodes + normals
# - S: toggle spawn markers
# - 60 Hz fixed loop; window scale fits the whole battlefield plus a border.

import argparse
import logging
import random

import pygame

from bumperfield.config import default_options, load_options
from bumperfield.mapgen.generator import generate
from bumperfield.render.palette import BACKGROUND, LAUNCHER, SPAWN, terrain_color, wall_color
from bumperfield.terrain import PRESET_SIZES, normalize_preset

PRESETS = list(PRESET_SIZES)
BORDER_PADDING = 2.0  # world units around the outermost geometry

def fit_scale(data, max_w: int, max_h: int) -> float:
    # Pixels per world unit so bounds + launcher offset + padding fit the window.
    reach_x = max([data.bounds.extents[0]] + [abs(n.position[0]) for n in data.launcher_nodes])
    reach_y = max([data.bounds.extents[1]] + [abs(n.position[1]) for n in data.launcher_nodes])
    half_w = reach_x + BORDER_PADDING
    half_h = reach_y + BORDER_PADDING
    return min(max_w / (2 * half_w), max_h / (2 * half_h))

def draw_battlefield(screen, data, scale: float, show_nodes: bool, show_spawns: bool) -> None:
    W, H = screen.get_size()
    cx, cy = W / 2, H / 2

    def to_px(p):
        return (cx + p[0] * scale, cy - p[1] * scale)

    screen.fill(BACKGROUND)
    cell_px = data.cell_size * scale
    for cell in data.grid.cells():
        x, y = to_px((cell.world[0] - data.cell_size / 2, cell.world[1] + data.cell_size / 2))
        r = pygame.Rect(round(x), round(y), max(1, round(cell_px * 0.9)), max(1, round(cell_px * 0.9)))
        pygame.draw.rect(screen, terrain_color(cell.terrain), r)

    for s in data.wall_segments:
        x, y = to_px((s.center[0] - s.size[0] / 2, s.center[1] + s.size[1] / 2))
        r = pygame.Rect(round(x), round(y), max(1, round(s.size[0] * scale)), max(1, round(s.size[1] * scale)))
        pygame.draw.rect(screen, wall_color(s.type), r, width=2)

    if show_nodes:
        for n in data.launcher_nodes:
            p = to_px(n.position)
            tip = to_px((n.position[0] + n.inward_normal[0] * data.cell_size * 1.2,
                         n.position[1] + n.inward_normal[1] * data.cell_size * 1.2))
            pygame.draw.circle(screen, LAUNCHER, p, max(2, cell_px * 0.25))
            pygame.draw.line(screen, LAUNCHER, p, tip)

    if show_spawns:
        for sp in data.enemy_spawns:
            pygame.draw.circle(screen, SPAWN, to_px(sp), max(2, cell_px * 0.3), width=2)

def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--preset", type=normalize_preset, default="medium")
    ap.add_argument("--options", type=str, default=None, help="JSON file with generation options")
    ap.add_argument("--width", type=int, default=1024, help="Window width in pixels")
    ap.add_argument("--height", type=int, default=640, help="Window height in pixels")
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    opts = load_options(args.options) if args.options else default_options()

    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height))
    clock = pygame.time.Clock()

    seed, preset = args.seed, args.preset
    show_nodes, show_spawns = True, True
    data = generate(seed, preset, opts)

    running = True
    while running:
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                running = False
            elif ev.type == pygame.KEYDOWN:
                regen = True
                if ev.key == pygame.K_ESCAPE:
                    running = False
                    regen = False
                elif ev.key == pygame.K_RIGHT:
                    seed += 1
                elif ev.key == pygame.K_LEFT:
                    seed = max(1, seed - 1)
                elif ev.key in (pygame.K_UP, pygame.K_DOWN):
                    step = 1 if ev.key == pygame.K_UP else -1
                    preset = PRESETS[(PRESETS.index(preset) + step) % len(PRESETS)]
                elif ev.key == pygame.K_r:
                    seed = random.randint(1, 0x7FFFFFFF)
                else:
                    regen = False
                    if ev.key == pygame.K_n:
                        show_nodes = not show_nodes
                    elif ev.key == pygame.K_s:
                        show_spawns = not show_spawns
                if regen:
                    data = generate(seed, preset, opts)

        draw_battlefield(screen, data, fit_scale(data, *screen.get_size()), show_nodes, show_spawns)
        pygame.display.set_caption(
            f"Battlefield Viewer | seed {seed}  {preset}  open:{data.open_cell_count}  spawns:{data.spawn_count}"
        )
        pygame.display.flip()
        clock.tick(60)

    pygame.quit()

if __name__ == "__main__":
    main()

"""
Serialise a generated battlefield for inspection: a tag matrix as TSV
(same shape the tools and tests read back), or a JSON-ready dict.
"""

import csv
import json
import os
from typing import Any, Dict, List

from .models import BattlefieldData
from .terrain import terrain_name

def terrain_matrix(data: BattlefieldData) -> List[List[int]]:
    return data.grid.as_matrix()

def write_tsv(data: BattlefieldData, path: str, include_header: bool = False) -> None:
    mat = terrain_matrix(data)
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f, delimiter="\t", lineterminator="\n")
        if include_header:
            w.writerow(list(range(len(mat[0]))))
        for r in mat:
            w.writerow(r)

def read_tsv(path: str) -> List[List[int]]:
    rows = []
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.rstrip("\n")
            if line:
                rows.append([int(x) for x in line.split("\t")])
    return rows

def _vec(v) -> List[float]:
    return [float(v[0]), float(v[1])]

def battlefield_to_dict(data: BattlefieldData) -> Dict[str, Any]:
    g = data.grid
    return {
        "seed": data.seed,
        "preset": data.preset,
        "cellSize": data.cell_size,
        "grid": {"width": g.width, "height": g.height},
        "bounds": {"center": _vec(data.bounds.center), "extents": _vec(data.bounds.extents)},
        "launcherNodes": [
            {"position": _vec(n.position), "inwardNormal": _vec(n.inward_normal)}
            for n in data.launcher_nodes
        ],
        "enemySpawns": [_vec(p) for p in data.enemy_spawns],
        "wallSegments": [
            {"type": s.type, "center": _vec(s.center), "size": _vec(s.size)}
            for s in data.wall_segments
        ],
        "openCellCount": data.open_cell_count,
        "spawnCount": data.spawn_count,
        # Rows top-to-bottom, one name per cell.
        "terrain": [[terrain_name(t) for t in row] for row in terrain_matrix(data)],
    }

def write_json(data: BattlefieldData, path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(battlefield_to_dict(data), f, indent=2)
        f.write("\n")

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

MIN_CELL_SIZE = 0.05
MAX_COMPLEXITY = 4
MAX_COHESION = 3


@dataclass(frozen=True)
class GenerationOptions:
    # World units per cell.
    cell_size: float = 1.0
    # World-unit depth of the blocked border (converted to whole cells).
    wall_buffer: float = 1.0
    launcher_node_spacing: float = 2.0
    # How far outside the bounds launcher nodes sit; kept positive.
    launcher_offset: float = 1.5
    wall_thickness: float = 0.5
    # Inclusive, best-effort bounds for the balancer.
    min_open_cells: int = 20
    max_open_cells: int = 400
    spawn_count: int = 8
    # Minimum world distance from the grid centre for a spawn.
    spawn_distance_from_launcher_exit: int = 3
    complexity: int = 2  # 0..4
    cohesion: int = 1    # 0..3

    def sanitized(self) -> "GenerationOptions":
        """Return a copy with every numeric field clamped into a usable range."""
        cell = max(MIN_CELL_SIZE, float(self.cell_size))
        return replace(
            self,
            cell_size=cell,
            wall_buffer=max(0.0, float(self.wall_buffer)),
            launcher_node_spacing=max(MIN_CELL_SIZE, float(self.launcher_node_spacing)),
            launcher_offset=max(MIN_CELL_SIZE, float(self.launcher_offset)),
            wall_thickness=max(0.0, float(self.wall_thickness)),
            min_open_cells=max(0, int(self.min_open_cells)),
            max_open_cells=max(0, int(self.max_open_cells)),
            spawn_count=max(0, int(self.spawn_count)),
            spawn_distance_from_launcher_exit=int(self.spawn_distance_from_launcher_exit),
            complexity=min(MAX_COMPLEXITY, max(0, int(self.complexity))),
            cohesion=min(MAX_COHESION, max(0, int(self.cohesion))),
        )


def default_options() -> GenerationOptions:
    return GenerationOptions()


# camelCase keys as written by the editor-side options files
_ALIASES = {
    "cellSize": "cell_size",
    "wallBuffer": "wall_buffer",
    "launcherNodeSpacing": "launcher_node_spacing",
    "launcherOffset": "launcher_offset",
    "wallThickness": "wall_thickness",
    "minOpenCells": "min_open_cells",
    "maxOpenCells": "max_open_cells",
    "spawnCount": "spawn_count",
    "spawnDistanceFromLauncherExit": "spawn_distance_from_launcher_exit",
}

_FIELD_TYPES = {f.name: (float if f.type == "float" else int) for f in fields(GenerationOptions)}


def options_from_dict(raw: Dict[str, Any], base: Optional[GenerationOptions] = None) -> GenerationOptions:
    """Parse generation options from config data.

    Args:
        raw: Mapping of option names (snake_case or camelCase) to values.
        base: Options to start from; defaults to ``default_options()``.

    Returns:
        GenerationOptions with the given overrides applied.

    Raises:
        ValueError: If ``raw`` is not a mapping or a value is not numeric.
    """
    if not isinstance(raw, dict):
        raise ValueError(f"options must be a mapping, got {type(raw).__name__}")

    overrides: Dict[str, Any] = {}
    for key, value in raw.items():
        name = _ALIASES.get(str(key), str(key))
        cast = _FIELD_TYPES.get(name)
        if cast is None:
            logger.debug("ignoring unknown option: %s", key)
            continue
        if isinstance(value, bool):
            raise ValueError(f"option {key!r} must be a number, got {value!r}")
        try:
            overrides[name] = cast(value)
        except (TypeError, ValueError):
            raise ValueError(f"option {key!r} must be a number, got {value!r}") from None
    return replace(base or default_options(), **overrides)


def load_options(path: Path) -> GenerationOptions:
    """Load generation options from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid JSON or holds bad values.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Options file not found: {path}")
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"{path}: invalid JSON at line {e.lineno}, col {e.colno}: {e.msg}") from e
    return options_from_dict(raw)

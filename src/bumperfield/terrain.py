# Canonical terrain tags, wall types and size presets.

OPEN = 0
OPEN_POCKET = 1
FUNNEL = 2
BLOCKED_ROCK = 3
BLOCKED_WALL_BUFFER = 4

TERRAIN_TAGS = (OPEN, OPEN_POCKET, FUNNEL, BLOCKED_ROCK, BLOCKED_WALL_BUFFER)

_TERRAIN_NAMES = {
    OPEN: "open",
    OPEN_POCKET: "open_pocket",
    FUNNEL: "funnel",
    BLOCKED_ROCK: "blocked_rock",
    BLOCKED_WALL_BUFFER: "blocked_wall_buffer",
}

# Wall segment physical types. BREAKABLE is reserved; the generator never emits it.
WALL_NORMAL = "normal"
WALL_BOUNCY = "bouncy"
WALL_DAMPEN = "dampen"
WALL_BREAKABLE = "breakable"

SMALL = "small"
MEDIUM = "medium"
LARGE = "large"
BOSS_ROOM = "boss_room"

# Nominal world size (width, height) per preset.
PRESET_SIZES = {
    SMALL: (12.0, 8.0),
    MEDIUM: (20.0, 12.0),
    LARGE: (30.0, 18.0),
    BOSS_ROOM: (50.0, 30.0),
}

def terrain_name(tag: int) -> str:
    return _TERRAIN_NAMES[tag]

def is_open(tag: int) -> bool:
    # Traversable; this is what the balancer and open_cell_count count.
    return tag in (OPEN, OPEN_POCKET, FUNNEL)

def is_spawnable(tag: int) -> bool:
    # Funnel corridors count as open but never host spawns.
    return tag in (OPEN, OPEN_POCKET)

def is_clear_for_smoothing(tag: int) -> bool:
    return tag in (OPEN, OPEN_POCKET)

def normalize_preset(name: str) -> str:
    """
    Accept "Medium", "boss-room", "BossRoom", "boss_room" etc.
    Raises ValueError for names that are not a preset.
    """
    key = str(name).strip().replace("-", "_")
    if key.lower() == "bossroom":
        key = BOSS_ROOM
    key = key.lower()
    if key not in PRESET_SIZES:
        raise ValueError(f"unknown preset {name!r}; expected one of {', '.join(PRESET_SIZES)}")
    return key

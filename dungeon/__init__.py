"""BSP dungeon layout generation: partition tree, rooms, corridors and grid."""

from .config import DungeonConfig, load_dungeon_config, minimum_leaf_extent
from .exceptions import (
    AreaOutOfBoundsError,
    DungeonConfigError,
    DungeonError,
    EmptyRoomListError,
    GeneratorStateError,
)
from .generator import DungeonGenerator
from .geometry import Area
from .grid import TILE_FLOOR, TILE_WALL, rasterize, render_ascii
from .partition import PartitionNode, PartitionTree
from .reachability import find_unreachable_rooms, label_floor_regions

__all__ = [
    "Area",
    "AreaOutOfBoundsError",
    "DungeonConfig",
    "DungeonConfigError",
    "DungeonError",
    "DungeonGenerator",
    "EmptyRoomListError",
    "GeneratorStateError",
    "PartitionNode",
    "PartitionTree",
    "TILE_FLOOR",
    "TILE_WALL",
    "find_unreachable_rooms",
    "label_floor_regions",
    "load_dungeon_config",
    "minimum_leaf_extent",
    "rasterize",
    "render_ascii",
]

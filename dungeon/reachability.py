# dungeon/reachability.py
"""Connectivity report for a rasterized dungeon.

Chain-linked corridors follow shuffled list order rather than geometric
adjacency, so parts of a layout can end up isolated. This module only
reports that; it never carves extra corridors.
"""

from collections import deque
from typing import List, Sequence, Tuple

import numpy as np
import structlog

from dungeon.geometry import Area
from dungeon.grid import TILE_FLOOR

log = structlog.get_logger()

_NEIGHBOURS = ((0, 1), (1, 0), (0, -1), (-1, 0))


def label_floor_regions(grid: np.ndarray) -> Tuple[np.ndarray, int]:
    """Label 4-connected floor regions.

    Returns a label array (0 for wall, 1..count for regions) and the count.
    """
    map_height, map_width = grid.shape
    labels = np.zeros(grid.shape, dtype=np.int32)
    count = 0
    for seed_y, seed_x in np.argwhere(grid == TILE_FLOOR):
        seed_y, seed_x = int(seed_y), int(seed_x)
        if labels[seed_y, seed_x]:
            continue
        count += 1
        labels[seed_y, seed_x] = count
        queue = deque([(seed_y, seed_x)])
        while queue:
            cy, cx = queue.popleft()
            for dy, dx in _NEIGHBOURS:
                ny, nx = cy + dy, cx + dx
                if (
                    0 <= ny < map_height
                    and 0 <= nx < map_width
                    and grid[ny, nx] == TILE_FLOOR
                    and not labels[ny, nx]
                ):
                    labels[ny, nx] = count
                    queue.append((ny, nx))
    return labels, count


def find_unreachable_rooms(grid: np.ndarray, rooms: Sequence[Area]) -> List[Area]:
    """Rooms not connected to the first room through floor cells."""
    if not rooms:
        return []
    labels, count = label_floor_regions(grid)
    if count <= 1:
        return []
    reference = labels[rooms[0].y, rooms[0].x]
    unreachable = [room for room in rooms if labels[room.y, room.x] != reference]
    log.debug(
        "Reachability check",
        regions=count,
        rooms=len(rooms),
        unreachable=len(unreachable),
    )
    return unreachable

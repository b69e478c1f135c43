# dungeon/grid.py
"""Rasterization of Areas into a wall/floor grid, plus debug text renderers.

Grids are ``(height, width)`` uint8 arrays indexed ``grid[y, x]``.
"""

import string
import sys
from typing import Final, Iterable, Sequence, TextIO

import numpy as np
import structlog

from dungeon.exceptions import AreaOutOfBoundsError
from dungeon.geometry import Area

log = structlog.get_logger()

TILE_WALL: Final[int] = 0
TILE_FLOOR: Final[int] = 1
# Codes 2 and 3 are reserved for spawn markers; never written by the generator.

TILE_CHARS: Final[dict[int, str]] = {
    TILE_WALL: "█",
    TILE_FLOOR: ".",
}

_PARTITION_SYMBOLS: Final[str] = string.digits + string.ascii_lowercase


def new_grid(width: int, height: int, fill: int = TILE_WALL) -> np.ndarray:
    return np.full((height, width), fill_value=fill, dtype=np.uint8, order="C")


def carve(grid: np.ndarray, area: Area, value: int = TILE_FLOOR) -> None:
    """Set every cell of ``area`` to ``value``.

    Raises AreaOutOfBoundsError instead of letting numpy clip the slice.
    """
    height, width = grid.shape
    if not area.within_bounds(width, height):
        log.error("Area outside dungeon bounds", rect=area, width=width, height=height)
        raise AreaOutOfBoundsError(
            f"{area} does not fit inside the {width}x{height} dungeon"
        )
    grid[area.y : area.y2, area.x : area.x2] = value


def rasterize(areas: Iterable[Area], width: int, height: int) -> np.ndarray:
    """Convert rooms and corridors into a grid of wall (0) and floor (1)."""
    grid = new_grid(width, height)
    count = 0
    for area in areas:
        carve(grid, area, TILE_FLOOR)
        count += 1
    log.debug(
        "Rasterized areas",
        areas=count,
        floor_cells=int(np.count_nonzero(grid == TILE_FLOOR)),
    )
    return grid


def render_partitions(leaves: Sequence[Area], width: int, height: int) -> np.ndarray:
    """Grid where each cell holds the index of the leaf region covering it."""
    grid = np.zeros((height, width), dtype=np.int32)
    for index, leaf in enumerate(leaves):
        if not leaf.within_bounds(width, height):
            raise AreaOutOfBoundsError(f"{leaf} does not fit inside the {width}x{height} dungeon")
        grid[leaf.y : leaf.y2, leaf.x : leaf.x2] = index
    return grid


def grid_to_lines(grid: np.ndarray) -> list[str]:
    lines = []
    for row in grid:
        lines.append("".join(TILE_CHARS.get(int(v), "?") for v in row))
    return lines


def render_ascii(grid: np.ndarray, stream: TextIO | None = None) -> None:
    """Print the grid, one row per line: '█' for wall, '.' for floor."""
    out = stream or sys.stdout
    for line in grid_to_lines(grid):
        out.write(line + "\n")


def render_partitions_ascii(partition_grid: np.ndarray, stream: TextIO | None = None) -> None:
    """Print a partition map with one symbol per region (0-9, then a-z, cycling)."""
    out = stream or sys.stdout
    for row in partition_grid:
        out.write(
            "".join(_PARTITION_SYMBOLS[int(v) % len(_PARTITION_SYMBOLS)] for v in row) + "\n"
        )

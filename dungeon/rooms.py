# dungeon/rooms.py
from typing import List, Sequence, Tuple

import structlog

from dungeon.geometry import Area
from game_rng import GameRNG

log = structlog.get_logger()


def carve_room(leaf: Area, rng: GameRNG, margin: int, min_room_fraction: float) -> Area:
    """Randomly carve a room strictly inside a leaf region.

    The room is pushed in from the top-left corner by at least one tile and
    stops at least ``margin`` tiles short of the region's far edges.
    """
    x_offset = rng.get_randrange(1, leaf.w // 2)
    y_offset = rng.get_randrange(1, leaf.h // 2)

    width_bound = leaf.w - x_offset
    height_bound = leaf.h - y_offset

    room_w = rng.get_randrange(int(width_bound * min_room_fraction), width_bound - margin)
    room_h = rng.get_randrange(int(height_bound * min_room_fraction), height_bound - margin)

    return Area(leaf.x + x_offset, leaf.y + y_offset, room_w, room_h)


def create_rooms(
    leaves: Sequence[Area], rng: GameRNG, margin: int, min_room_fraction: float
) -> List[Area]:
    """Carve one room per leaf region, in leaf order."""
    rooms = []
    for leaf in leaves:
        room = carve_room(leaf, rng, margin, min_room_fraction)
        log.debug("Defined room", room_rect=room, leaf_rect=leaf)
        rooms.append(room)
    log.info("Room definition finished", created=len(rooms))
    return rooms


def random_point_within(room: Area, rng: GameRNG) -> Tuple[int, int]:
    return (
        rng.get_randrange(room.x, room.x + room.w),
        rng.get_randrange(room.y, room.y + room.h),
    )


def connect_points(
    a: Tuple[int, int], b: Tuple[int, int], corridor_width: int
) -> Tuple[Area, Area]:
    """L-shaped connector between two points.

    The horizontal span starts at the leftmost point, the vertical span at the
    topmost one. On a tie the second point anchors. Spans between aligned
    points have zero length.
    """
    (ax, ay), (bx, by) = a, b
    left = a if ax < bx else b
    top = a if ay < by else b
    horizontal = Area(left[0], left[1], abs(ax - bx), corridor_width)
    vertical = Area(top[0], top[1], corridor_width, abs(ay - by))
    return horizontal, vertical


def create_corridors(areas: List[Area], rng: GameRNG, corridor_width: int) -> List[Area]:
    """Chain-link rooms with corridors.

    ``areas`` is shuffled in place, each consecutive pair is joined, and the
    corridors are appended to ``areas`` once every pair has been processed.
    Returns the new corridors.
    """
    rng.shuffle(areas)

    corridors: List[Area] = []
    for room_a, room_b in zip(areas, areas[1:]):
        point_a = random_point_within(room_a, rng)
        point_b = random_point_within(room_b, rng)
        horizontal, vertical = connect_points(point_a, point_b, corridor_width)
        log.debug(
            "Connecting rooms",
            room_a=room_a,
            room_b=room_b,
            connect_a=point_a,
            connect_b=point_b,
            horizontal=horizontal,
            vertical=vertical,
        )
        corridors.extend((horizontal, vertical))

    areas.extend(corridors)
    log.info("Corridors created", pairs=len(corridors) // 2, segments=len(corridors))
    return corridors

import pytest

from dungeon.geometry import Area
from dungeon.rooms import (
    carve_room,
    connect_points,
    create_corridors,
    create_rooms,
    random_point_within,
)
from game_rng import GameRNG

LEAVES = [
    Area(0, 0, 10, 5),
    Area(10, 0, 10, 10),
    Area(0, 5, 20, 5),
    Area(40, 20, 4, 4),
    Area(3, 7, 17, 13),
]


@pytest.mark.parametrize("leaf", LEAVES)
@pytest.mark.parametrize("seed", range(25))
def test_room_lies_inside_leaf_with_margin(leaf, seed):
    margin = 1
    room = carve_room(leaf, GameRNG(seed=seed), margin, 0.5)
    assert leaf.contains(room)
    assert room.x >= leaf.x + 1
    assert room.y >= leaf.y + 1
    assert room.x2 <= leaf.x2 - margin
    assert room.y2 <= leaf.y2 - margin
    assert room.w >= 1 and room.h >= 1


@pytest.mark.parametrize("seed", range(25))
def test_room_extent_respects_min_fraction(seed):
    leaf = Area(0, 0, 20, 12)
    room = carve_room(leaf, GameRNG(seed=seed), 1, 0.5)
    width_bound = leaf.w - (room.x - leaf.x)
    height_bound = leaf.h - (room.y - leaf.y)
    assert width_bound // 2 <= room.w < width_bound - 1
    assert height_bound // 2 <= room.h < height_bound - 1


def test_smallest_carvable_leaf_gives_single_tile_room():
    room = carve_room(Area(5, 5, 4, 4), GameRNG(seed=0), 1, 0.5)
    assert room == Area(6, 6, 1, 1)


def test_too_small_leaf_hits_empty_range():
    with pytest.raises(ValueError):
        carve_room(Area(0, 0, 3, 3), GameRNG(seed=0), 1, 0.5)


def test_create_rooms_one_per_leaf_in_order():
    rooms = create_rooms(LEAVES, GameRNG(seed=3), 1, 0.5)
    assert len(rooms) == len(LEAVES)
    for leaf, room in zip(LEAVES, rooms):
        assert leaf.contains(room)


@pytest.mark.parametrize("seed", range(10))
def test_random_point_within_room(seed):
    room = Area(4, 7, 3, 2)
    x, y = random_point_within(room, GameRNG(seed=seed))
    assert room.contains_point(x, y)


@pytest.mark.parametrize(
    "a, b, horizontal, vertical",
    [
        ((2, 3), (7, 9), Area(2, 3, 5, 1), Area(2, 3, 1, 6)),
        ((7, 9), (2, 3), Area(2, 3, 5, 1), Area(2, 3, 1, 6)),
        ((2, 9), (7, 3), Area(2, 9, 5, 1), Area(7, 3, 1, 6)),
        ((4, 4), (4, 8), Area(4, 8, 0, 1), Area(4, 4, 1, 4)),
        ((1, 5), (6, 5), Area(1, 5, 5, 1), Area(6, 5, 1, 0)),
    ],
)
def test_connect_points_anchors(a, b, horizontal, vertical):
    assert connect_points(a, b, 1) == (horizontal, vertical)


def test_connect_points_uses_corridor_width():
    horizontal, vertical = connect_points((0, 0), (3, 3), 2)
    assert horizontal.h == 2
    assert vertical.w == 2


def test_create_corridors_chain_links_and_appends():
    rooms = create_rooms(LEAVES[:3], GameRNG(seed=1), 1, 0.5)
    areas = list(rooms)
    corridors = create_corridors(areas, GameRNG(seed=2), 1)
    assert len(corridors) == 2 * (len(rooms) - 1)
    assert sorted(areas[: len(rooms)]) == sorted(rooms)
    assert areas[len(rooms) :] == corridors
    for horizontal, vertical in zip(corridors[::2], corridors[1::2]):
        assert horizontal.h == 1
        assert vertical.w == 1


def test_corridors_start_inside_linked_rooms():
    rooms = create_rooms(LEAVES[:3], GameRNG(seed=6), 1, 0.5)
    areas = list(rooms)
    corridors = create_corridors(areas, GameRNG(seed=7), 1)
    shuffled = areas[: len(rooms)]
    for i, (horizontal, vertical) in enumerate(zip(corridors[::2], corridors[1::2])):
        pair = shuffled[i : i + 2]
        assert any(room.contains_point(horizontal.x, horizontal.y) for room in pair)
        assert any(room.contains_point(vertical.x, vertical.y) for room in pair)


def test_single_room_gets_no_corridors():
    areas = [Area(1, 1, 3, 3)]
    assert create_corridors(areas, GameRNG(seed=1), 1) == []
    assert areas == [Area(1, 1, 3, 3)]

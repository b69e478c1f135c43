import numpy as np
import pytest

from dungeon.config import DungeonConfig
from dungeon.exceptions import DungeonConfigError, EmptyRoomListError, GeneratorStateError
from dungeon.generator import DungeonGenerator
from dungeon.geometry import Area
from dungeon.grid import TILE_FLOOR
from game_rng import GameRNG


def _generated(seed=1234, **config):
    generator = DungeonGenerator(config=DungeonConfig(**config), seed=seed)
    generator.generate_map()
    return generator


def test_default_map_shape_and_codes():
    grid = DungeonGenerator(seed=1).generate_map()
    assert grid.shape == (40, 80)
    assert set(np.unique(grid).tolist()) <= {0, 1}
    assert (grid == TILE_FLOOR).any()


@pytest.mark.parametrize("seed", [0, 7, 1234, 2**31])
def test_same_seed_gives_identical_grid(seed):
    first = DungeonGenerator(seed=seed).generate_map()
    second = DungeonGenerator(seed=seed).generate_map()
    assert first.tobytes() == second.tobytes()


def test_injected_rng_matches_seed():
    by_seed = DungeonGenerator(seed=5).generate_map()
    by_rng = DungeonGenerator(rng=GameRNG(seed=5)).generate_map()
    assert np.array_equal(by_seed, by_rng)


def test_rng_and_seed_are_exclusive():
    with pytest.raises(ValueError):
        DungeonGenerator(rng=GameRNG(seed=1), seed=1)


def test_room_and_corridor_counts():
    generator = _generated()
    assert len(generator.leaves) == 8
    assert len(generator.rooms) == 8
    assert len(generator.corridors) == 2 * 7
    assert generator.areas == generator.rooms + generator.corridors


@pytest.mark.parametrize("seed", range(10))
def test_every_room_sits_inside_exactly_one_leaf(seed):
    generator = _generated(seed=seed)
    leaf_areas = generator.tree.leaf_areas()
    margin = generator.config.margin
    for room in generator.rooms:
        owners = [leaf for leaf in leaf_areas if leaf.contains(room)]
        assert len(owners) == 1
        leaf = owners[0]
        assert room.x >= leaf.x + 1 and room.y >= leaf.y + 1
        assert room.x2 <= leaf.x2 - margin and room.y2 <= leaf.y2 - margin


@pytest.mark.parametrize("seed", range(10))
def test_rooms_never_overlap(seed):
    rooms = _generated(seed=seed).rooms
    for i, room in enumerate(rooms):
        for other in rooms[i + 1 :]:
            assert not room.intersects(other)


def test_every_room_and_corridor_is_floor():
    generator = _generated(seed=77)
    for area in generator.areas:
        assert (generator.grid[area.y : area.y2, area.x : area.x2] == TILE_FLOOR).all()


def test_entity_spots_land_on_room_floor():
    generator = _generated(seed=31)
    for _ in range(1000):
        x, y = generator.get_entity_spot()
        assert generator.grid[y, x] == TILE_FLOOR
        assert any(room.contains_point(x, y) for room in generator.rooms)


def test_entity_spot_before_generation_raises():
    with pytest.raises(EmptyRoomListError):
        DungeonGenerator(seed=1).get_entity_spot()


def test_generating_twice_requires_reset():
    generator = _generated(seed=3)
    with pytest.raises(GeneratorStateError):
        generator.generate_map()
    assert len(generator.rooms) == 8


def test_reset_with_seed_reproduces_layout():
    generator = DungeonGenerator(seed=21)
    first = generator.generate_map().copy()
    generator.reset(seed=21)
    assert generator.rooms == []
    assert generator.grid is None
    second = generator.generate_map()
    assert np.array_equal(first, second)
    assert len(generator.rooms) == 8


def test_oversplit_config_fails_before_splitting():
    generator = DungeonGenerator(config=DungeonConfig(split_iterations=4), seed=1)
    with pytest.raises(DungeonConfigError):
        generator.generate_map()
    assert generator.leaves == [generator.root]
    assert generator.areas == []


def test_single_round_on_8x8_with_seed_0_splits_horizontally():
    # The first draw of seed 0 is 0.637, a tails flip
    config = DungeonConfig(width=8, height=8, split_iterations=1)
    generator = DungeonGenerator(config=config, seed=0)
    generator.generate_map()
    assert generator.tree.leaf_areas() == [Area(0, 0, 8, 4), Area(0, 4, 8, 4)]
    again = DungeonGenerator(config=config, seed=0)
    again.generate_map()
    assert again.tree.leaf_areas() == generator.tree.leaf_areas()


@pytest.mark.parametrize("seed", [1, 2, 3, 99])
def test_single_round_on_8x8_halves_the_square(seed):
    config = DungeonConfig(width=8, height=8, split_iterations=1)
    generator = DungeonGenerator(config=config, seed=seed)
    generator.generate_map()
    assert generator.tree.leaf_areas() in (
        [Area(0, 0, 4, 8), Area(4, 0, 4, 8)],
        [Area(0, 0, 8, 4), Area(0, 4, 8, 4)],
    )


@pytest.mark.parametrize("margin", [0, 1])
@pytest.mark.parametrize("seed", range(0, 200, 7))
def test_widest_allowed_corridors_stay_in_bounds(seed, margin):
    config = DungeonConfig(margin=margin, corridor_width=margin + 2)
    generator = DungeonGenerator(config=config, seed=seed)
    grid = generator.generate_map()
    assert grid.shape == (config.height, config.width)
    for area in generator.areas:
        assert area.within_bounds(config.width, config.height)


def test_zero_iterations_gives_one_room_no_corridors():
    generator = _generated(seed=4, split_iterations=0)
    assert len(generator.rooms) == 1
    assert generator.corridors == []
    assert generator.unreachable_rooms == []


def test_unreachable_rooms_are_reported_not_repaired():
    generator = _generated(seed=12)
    floor_before = int((generator.grid == TILE_FLOOR).sum())
    expected = int(
        (
            np.logical_or.reduce(
                [_mask(area, generator.grid.shape) for area in generator.areas]
            )
        ).sum()
    )
    assert floor_before == expected
    assert all(room in generator.rooms for room in generator.unreachable_rooms)


def _mask(area, shape):
    mask = np.zeros(shape, dtype=bool)
    mask[area.y : area.y2, area.x : area.x2] = True
    return mask

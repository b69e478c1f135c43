# dungeon/generator.py
"""Rooms-and-corridors dungeon built on a BSP tree.

Typical use::

    generator = DungeonGenerator(seed=1234)
    grid = generator.generate_map()
    x, y = generator.get_entity_spot()

A generator builds exactly one dungeon. Call :meth:`DungeonGenerator.reset`
before generating another one with the same instance.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np
import structlog

from dungeon.config import DungeonConfig
from dungeon.exceptions import EmptyRoomListError, GeneratorStateError
from dungeon.geometry import Area
from dungeon.grid import rasterize
from dungeon.partition import PartitionNode, PartitionTree
from dungeon.reachability import find_unreachable_rooms
from dungeon.rooms import create_corridors, create_rooms, random_point_within
from game_rng import GameRNG

log = structlog.get_logger()


class DungeonGenerator:
    def __init__(
        self,
        config: Optional[DungeonConfig] = None,
        rng: Optional[GameRNG] = None,
        seed: Optional[int] = None,
    ):
        if rng is not None and seed is not None:
            raise ValueError("Pass either an rng or a seed, not both")
        self.config = config or DungeonConfig()
        self.rng = rng if rng is not None else GameRNG(seed=seed)
        self.tree = PartitionTree(self.config.width, self.config.height, self.rng)
        # Rooms first, then corridors once they are stitched.
        self.areas: List[Area] = []
        self._room_count = 0
        self.grid: Optional[np.ndarray] = None
        self.unreachable_rooms: List[Area] = []
        self._generated = False

    @property
    def root(self) -> PartitionNode:
        return self.tree.root

    @property
    def leaves(self) -> List[PartitionNode]:
        return self.tree.leaves

    @property
    def rooms(self) -> List[Area]:
        """True rooms only, in their shuffled order."""
        return self.areas[: self._room_count]

    @property
    def corridors(self) -> List[Area]:
        return self.areas[self._room_count :]

    def reset(self, seed: Optional[int] = None) -> None:
        """Discard the current dungeon. The RNG stream continues unless
        ``seed`` is given."""
        if seed is not None:
            self.rng.reset(seed)
        self.tree = PartitionTree(self.config.width, self.config.height, self.rng)
        self.areas = []
        self._room_count = 0
        self.grid = None
        self.unreachable_rooms = []
        self._generated = False
        log.debug("Generator reset", seed=seed)

    def generate_map(self) -> np.ndarray:
        """Split, carve rooms, stitch corridors and rasterize.

        Returns the ``(height, width)`` grid of wall (0) and floor (1).
        """
        if self._generated:
            log.error("generate_map called twice on one generator")
            raise GeneratorStateError(
                "This generator already built a dungeon; call reset() first"
            )
        config = self.config.validate()
        log.info(
            "Starting dungeon generation",
            width=config.width,
            height=config.height,
            seed=self.rng.initial_seed,
            split_iterations=config.split_iterations,
        )

        for _ in range(config.split_iterations):
            self.tree.split_all()
        leaf_areas = self.tree.leaf_areas()
        log.info("Partitioning finished", leaves=len(leaf_areas))

        self.areas = create_rooms(
            leaf_areas, self.rng, config.margin, config.min_room_fraction
        )
        self._room_count = len(self.areas)
        create_corridors(self.areas, self.rng, config.corridor_width)

        self.grid = rasterize(self.areas, config.width, config.height)
        self._generated = True

        self.unreachable_rooms = find_unreachable_rooms(self.grid, self.rooms)
        if self.unreachable_rooms:
            log.warning(
                "Some rooms are not reachable from the first room",
                unreachable=len(self.unreachable_rooms),
                rooms=self._room_count,
            )

        log.info(
            "Dungeon generation complete",
            rooms=self._room_count,
            corridors=len(self.corridors),
        )
        return self.grid

    def get_entity_spot(self) -> Tuple[int, int]:
        """Random ``(x, y)`` floor tile inside a random room."""
        if not self.rooms:
            log.error("Entity spot requested before any rooms were generated")
            raise EmptyRoomListError("No rooms available; call generate_map() first")
        room = self.rng.choice(self.rooms)
        return random_point_within(room, self.rng)

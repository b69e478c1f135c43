# dungeon/partition.py
"""Binary space partition tree.

Each round of :meth:`PartitionTree.split_all` halves every current leaf, so
after ``k`` rounds the tree holds ``2**k`` leaves that tile the dungeon
rectangle exactly.
"""

from __future__ import annotations

import weakref
from typing import Iterator, List, Optional

import structlog

from dungeon.geometry import Area
from game_rng import GameRNG

log = structlog.get_logger()


class PartitionNode:
    """A node in the BSP tree. Parents own their children; the parent link is
    a weak back-reference used for lookups only."""

    def __init__(self, area: Area, parent: Optional[PartitionNode] = None):
        self.area: Area = area
        self.left: Optional[PartitionNode] = None
        self.right: Optional[PartitionNode] = None
        self._parent = weakref.ref(parent) if parent is not None else None
        self.depth: int = parent.depth + 1 if parent is not None else 0

    @property
    def parent(self) -> Optional[PartitionNode]:
        return self._parent() if self._parent is not None else None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    @property
    def children(self) -> List[PartitionNode]:
        return [child for child in (self.left, self.right) if child is not None]

    def iter_nodes(self) -> Iterator[PartitionNode]:
        """Pre-order walk of this subtree."""
        yield self
        for child in self.children:
            yield from child.iter_nodes()

    def __repr__(self) -> str:
        return f"PartitionNode(area={self.area}, depth={self.depth}, leaf={self.is_leaf})"


def halve_vertically(area: Area) -> tuple[Area, Area]:
    """Split along a vertical line: left half, right half."""
    first = area.w // 2
    return (
        Area(area.x, area.y, first, area.h),
        Area(area.x + first, area.y, area.w - first, area.h),
    )


def halve_horizontally(area: Area) -> tuple[Area, Area]:
    """Split along a horizontal line: top half, bottom half."""
    first = area.h // 2
    return (
        Area(area.x, area.y, area.w, first),
        Area(area.x, area.y + first, area.w, area.h - first),
    )


class PartitionTree:
    def __init__(self, width: int, height: int, rng: GameRNG):
        self.width = width
        self.height = height
        self.rng = rng
        self.root = PartitionNode(Area(0, 0, width, height))
        self.leaves: List[PartitionNode] = [self.root]
        self.rounds = 0
        log.debug("Created root partition", rect=self.root.area)

    def split(self, node: PartitionNode) -> None:
        """Halve ``node`` into two children, vertically or horizontally by a
        fair coin flip.

        Small regions are not special-cased; callers that need carvable
        leaves must bound the number of rounds beforehand.
        """
        split_vertically = self.rng.coin_flip() == "heads"
        if split_vertically:
            left_area, right_area = halve_vertically(node.area)
        else:
            left_area, right_area = halve_horizontally(node.area)

        node.left = PartitionNode(left_area, parent=node)
        node.right = PartitionNode(right_area, parent=node)
        log.debug(
            "Split node vertically" if split_vertically else "Split node horizontally",
            depth=node.depth,
            rect=node.area,
            left_rect=left_area,
            right_rect=right_area,
        )
        if left_area.is_empty or right_area.is_empty:
            log.warning("Split produced a degenerate region", rect=node.area)

    def split_all(self) -> List[PartitionNode]:
        """Split every leaf; its children become the new frontier, in order."""
        for leaf in self.leaves:
            self.split(leaf)

        new_leaves: List[PartitionNode] = []
        for leaf in self.leaves:
            if leaf.left is not None and leaf.right is not None:
                new_leaves.extend((leaf.left, leaf.right))
            else:
                log.warning("Leaf did not produce two children", rect=leaf.area)
        self.leaves = new_leaves
        self.rounds += 1
        log.debug("Split round complete", round=self.rounds, leaves=len(self.leaves))
        return self.leaves

    def leaf_areas(self) -> List[Area]:
        return [leaf.area for leaf in self.leaves]

    def iter_nodes(self) -> Iterator[PartitionNode]:
        return self.root.iter_nodes()

    def nodes_at_depth(self, depth: int) -> List[PartitionNode]:
        """The frontier as it stood after ``depth`` rounds, left to right."""
        level = [self.root]
        for _ in range(depth):
            level = [child for node in level for child in node.children]
        return level

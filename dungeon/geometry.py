# dungeon/geometry.py
from typing import NamedTuple


class Area(NamedTuple):
    """An axis-aligned rectangle in tile units.

    Partition regions, rooms and corridor segments all share this shape.
    ``x2``/``y2`` are exclusive edges.
    """

    x: int
    y: int
    w: int
    h: int

    @property
    def x2(self) -> int:
        return self.x + self.w

    @property
    def y2(self) -> int:
        return self.y + self.h

    @property
    def cells(self) -> int:
        """Number of tiles covered."""
        return self.w * self.h

    @property
    def is_empty(self) -> bool:
        return self.w <= 0 or self.h <= 0

    def intersects(self, other: "Area") -> bool:
        """True if the two Areas share at least one tile."""
        if self.is_empty or other.is_empty:
            return False
        return (
            self.x < other.x2
            and other.x < self.x2
            and self.y < other.y2
            and other.y < self.y2
        )

    def contains(self, other: "Area") -> bool:
        return (
            self.x <= other.x
            and self.y <= other.y
            and other.x2 <= self.x2
            and other.y2 <= self.y2
        )

    def contains_point(self, x: int, y: int) -> bool:
        return self.x <= x < self.x2 and self.y <= y < self.y2

    def within_bounds(self, width: int, height: int) -> bool:
        """True if the Area fits inside ``(0, 0, width, height)``."""
        return (
            self.x >= 0
            and self.y >= 0
            and self.w >= 0
            and self.h >= 0
            and self.x2 <= width
            and self.y2 <= height
        )

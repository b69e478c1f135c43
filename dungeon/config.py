# dungeon/config.py
"""Generation settings and their YAML loader.

The defaults reproduce the classic 80x40 layout: three rounds of halving,
a one-tile wall margin inside every region and one-tile corridors.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict

import structlog
import yaml

from dungeon.exceptions import DungeonConfigError

log = structlog.get_logger()

DUNGEON_WIDTH = 80
DUNGEON_HEIGHT = 40
SPLIT_MARGIN = 1
CORRIDOR_WIDTH = 1
SPLIT_ITERATIONS = 3
MIN_ROOM_FRACTION = 0.5

# Upper limit for the smallest-carvable-extent search
_EXTENT_SEARCH_LIMIT = 4096

_INT_FIELDS = ("width", "height", "margin", "corridor_width", "split_iterations")


def _room_range(bound: int, margin: int, fraction: float) -> tuple[int, int]:
    """Half-open range a room extent is drawn from inside ``bound`` tiles."""
    return int(bound * fraction), bound - margin


def is_carvable(extent: int, margin: int, fraction: float) -> bool:
    """True if every offset draw for a region of ``extent`` tiles leaves a
    non-empty room range with at least one tile."""
    if extent // 2 <= 1:
        return False
    for offset in range(1, extent // 2):
        low, high = _room_range(extent - offset, margin, fraction)
        if low < 1 or low >= high:
            return False
    return True


def _type_problems(values: Dict[str, Any]) -> list[str]:
    """Describe every field in ``values`` whose type the generator cannot use."""
    problems = []
    for name, value in values.items():
        if isinstance(value, bool):
            problems.append(f"{name} must be a number, not a boolean (got {value!r})")
        elif name in _INT_FIELDS and not isinstance(value, int):
            problems.append(f"{name} must be an integer (got {value!r})")
        elif name == "min_room_fraction" and not isinstance(value, (int, float)):
            problems.append(f"{name} must be a number (got {value!r})")
    return problems


def minimum_leaf_extent(margin: int = SPLIT_MARGIN, fraction: float = MIN_ROOM_FRACTION) -> int:
    """Smallest region width/height a room can be carved from."""
    for extent in range(1, _EXTENT_SEARCH_LIMIT):
        if is_carvable(extent, margin, fraction):
            return extent
    raise DungeonConfigError(
        f"No region up to {_EXTENT_SEARCH_LIMIT} tiles can hold a room "
        f"with margin={margin} and min_room_fraction={fraction}"
    )


@dataclass(frozen=True)
class DungeonConfig:
    width: int = DUNGEON_WIDTH
    height: int = DUNGEON_HEIGHT
    margin: int = SPLIT_MARGIN
    corridor_width: int = CORRIDOR_WIDTH
    split_iterations: int = SPLIT_ITERATIONS
    min_room_fraction: float = MIN_ROOM_FRACTION

    def worst_case_leaf_extents(self, iterations: int | None = None) -> tuple[int, int]:
        """Smallest width and height a leaf can reach after ``iterations`` rounds.

        Every round may halve the same axis, and the first child always takes
        the floor half.
        """
        rounds = self.split_iterations if iterations is None else iterations
        return self.width >> rounds, self.height >> rounds

    def max_split_iterations(self) -> int:
        """Deepest number of rounds that still leaves every leaf carvable."""
        min_extent = minimum_leaf_extent(self.margin, self.min_room_fraction)
        rounds = 0
        while min(self.worst_case_leaf_extents(rounds + 1)) >= min_extent:
            rounds += 1
        return rounds

    def validate(self) -> "DungeonConfig":
        problems = _type_problems(self.as_dict())
        if problems:
            log.error("Invalid dungeon configuration types", problems=problems)
            raise DungeonConfigError("; ".join(problems))

        if self.width <= 0 or self.height <= 0:
            problems.append(f"dimensions must be positive (got {self.width}x{self.height})")
        if self.split_iterations < 0:
            problems.append(f"split_iterations must be >= 0 (got {self.split_iterations})")
        if self.margin < 0:
            problems.append(f"margin must be >= 0 (got {self.margin})")
        if self.corridor_width <= 0:
            problems.append(f"corridor_width must be positive (got {self.corridor_width})")
        elif self.margin >= 0 and self.corridor_width > self.margin + 2:
            # Corridor points lie at least margin + 2 tiles short of the far edge
            problems.append(
                f"corridor_width {self.corridor_width} exceeds margin + 2 "
                f"({self.margin + 2}); corridors could run past the dungeon edge"
            )
        if not 0.0 < self.min_room_fraction < 1.0:
            problems.append(
                f"min_room_fraction must lie in (0, 1) (got {self.min_room_fraction})"
            )
        if problems:
            log.error("Invalid dungeon configuration", problems=problems)
            raise DungeonConfigError("; ".join(problems))

        min_extent = minimum_leaf_extent(self.margin, self.min_room_fraction)
        leaf_w, leaf_h = self.worst_case_leaf_extents()
        if leaf_w < min_extent or leaf_h < min_extent:
            log.error(
                "Leaf regions too small for room carving",
                width=self.width,
                height=self.height,
                split_iterations=self.split_iterations,
                worst_case_leaf=(leaf_w, leaf_h),
                min_extent=min_extent,
            )
            raise DungeonConfigError(
                f"{self.split_iterations} split rounds on a {self.width}x{self.height} "
                f"dungeon can produce {leaf_w}x{leaf_h} leaves, but rooms need regions "
                f"of at least {min_extent}x{min_extent} "
                f"(margin={self.margin}, min_room_fraction={self.min_room_fraction}); "
                f"at most {self.max_split_iterations()} rounds fit"
            )
        return self

    def with_overrides(self, **overrides: Any) -> "DungeonConfig":
        """Copy with the given fields replaced; ``None`` values are ignored."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        unknown = set(changes) - {f.name for f in fields(self)}
        if unknown:
            raise DungeonConfigError(f"Unknown config keys: {sorted(unknown)}")
        problems = _type_problems(changes)
        if problems:
            log.error("Invalid dungeon configuration types", problems=problems)
            raise DungeonConfigError("; ".join(problems))
        return replace(self, **changes)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def config_from_mapping(data: Dict[str, Any]) -> DungeonConfig:
    """Build a config from a mapping, accepting an optional ``dungeon`` section."""
    if not isinstance(data, dict):
        raise DungeonConfigError(f"Config must be a mapping, got {type(data).__name__}")
    section = data.get("dungeon", data)
    if not isinstance(section, dict):
        raise DungeonConfigError("'dungeon' section must be a mapping")
    return DungeonConfig().with_overrides(**section)


def load_dungeon_config(config_path: Path | str) -> DungeonConfig:
    """Loads a dungeon configuration from a YAML file."""
    config_path = Path(config_path)
    if not config_path.is_file():
        log.error("Dungeon config file not found", path=str(config_path))
        raise FileNotFoundError(f"Dungeon configuration file not found: {config_path}")
    try:
        with config_path.open("r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        log.error(
            "Error parsing YAML for dungeon config",
            path=str(config_path),
            error=str(e),
            exc_info=True,
        )
        raise
    if config_data is None:
        log.warning("Dungeon config file is empty, using defaults", path=str(config_path))
        return DungeonConfig()
    config = config_from_mapping(config_data)
    log.info("Dungeon config loaded", path=str(config_path), **config.as_dict())
    return config


__all__ = [
    "DungeonConfig",
    "config_from_mapping",
    "load_dungeon_config",
    "minimum_leaf_extent",
    "is_carvable",
]

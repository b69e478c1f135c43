# dungeon/exceptions.py
"""Errors raised while generating or querying a dungeon layout."""


class DungeonError(Exception):
    """Base class for every dungeon generation error."""


class DungeonConfigError(DungeonError, ValueError):
    """Dimensions or split settings cannot yield carvable leaf regions."""


class AreaOutOfBoundsError(DungeonError, IndexError):
    """An Area reached rasterization while lying outside the dungeon rectangle."""


class EmptyRoomListError(DungeonError, LookupError):
    """A room query was made before any rooms were generated."""


class GeneratorStateError(DungeonError, RuntimeError):
    """A generator was asked to build a second dungeon without being reset."""


__all__ = [
    "DungeonError",
    "DungeonConfigError",
    "AreaOutOfBoundsError",
    "EmptyRoomListError",
    "GeneratorStateError",
]

"""
Tile types for the world grid.
"""

from __future__ import annotations

from enum import Enum, IntEnum


class Tile(IntEnum):
    """
    One cell of the world grid.

    Values are stored directly in the numpy grid.
    """
    EMPTY = 0
    ENEMY = 2
    TOWN = 3
    FOREST = 4
    WATER = 5
    MOUNTAIN = 6
    TREASURE = 7
    BOSS = 9

    @property
    def is_passable(self) -> bool:
        return self not in IMPASSABLE_TILES

    @property
    def is_marker(self) -> bool:
        """True for tiles that stand for exactly one entity record."""
        return self in MARKER_TILES


class Surface(Enum):
    """Footstep surfaces."""
    GRASS = "grass"
    STONE = "stone"


IMPASSABLE_TILES = frozenset({Tile.WATER, Tile.MOUNTAIN})
MARKER_TILES = frozenset({Tile.ENEMY, Tile.BOSS, Tile.TREASURE})

BLOCKED_MESSAGES: dict[Tile, str] = {
    Tile.WATER: "The water is too deep to cross...",
    Tile.MOUNTAIN: "A steep mountain blocks the way...",
}


def surface_for(tile: Tile) -> Surface:
    """Footstep surface for a tile."""
    if tile == Tile.TOWN:
        return Surface.STONE
    return Surface.GRASS

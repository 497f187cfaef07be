"""
World map - the tile grid plus the entities placed on it.

The grid (numpy, indexed ``[y, x]``) holds only tile types; entities
hold the payloads. Marker tiles (enemy, boss, treasure) and their
entity records are created and removed together so the two never
disagree.
"""

from __future__ import annotations

import math
from typing import Iterator, Optional

import numpy as np

from pixelrpg.world.entities import EntityType, WorldEntity
from pixelrpg.world.tiles import Tile


class WorldMap:
    """
    Square tile grid with its entity list.

    Handles:
    - Tile access and bounds checks
    - Entity lookup by position
    - Atomic entity consumption
    - Grid/entity consistency checks
    """

    def __init__(self, size: int):
        self.size = size
        self.grid: np.ndarray = np.full((size, size), Tile.EMPTY, dtype=np.int8)
        self.entities: list[WorldEntity] = []

    # Tiles

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def tile_at(self, x: int, y: int) -> Tile:
        return Tile(int(self.grid[y, x]))

    def set_tile(self, x: int, y: int, tile: Tile) -> None:
        self.grid[y, x] = tile

    def is_empty(self, x: int, y: int) -> bool:
        return self.grid[y, x] == Tile.EMPTY

    def is_passable(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.tile_at(x, y).is_passable

    def fill_rect(self, x: int, y: int, width: int, height: int, tile: Tile) -> int:
        """
        Paint a rectangle, clipped to the world.

        Returns:
            Number of cells painted
        """
        x0, y0 = max(0, x), max(0, y)
        x1, y1 = min(self.size, x + width), min(self.size, y + height)
        if x0 >= x1 or y0 >= y1:
            return 0
        self.grid[y0:y1, x0:x1] = tile
        return (x1 - x0) * (y1 - y0)

    def count_tiles(self, tile: Tile) -> int:
        return int(np.count_nonzero(self.grid == tile))

    def tile_positions(self, tile: Tile) -> list[tuple[int, int]]:
        """All (x, y) cells holding a tile type, row by row."""
        ys, xs = np.nonzero(self.grid == tile)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    def has_tile_within(self, tile: Tile, x: int, y: int, radius: int) -> bool:
        """Whether a tile type appears in the square of ``radius`` around (x, y)."""
        x0, y0 = max(0, x - radius), max(0, y - radius)
        x1, y1 = min(self.size, x + radius + 1), min(self.size, y + radius + 1)
        return bool(np.any(self.grid[y0:y1, x0:x1] == tile))

    def find_nearest_tile(self, tile: Tile, x: int, y: int) -> Optional[tuple[int, int]]:
        """Closest cell (Euclidean) holding a tile type, or None."""
        nearest = None
        best = math.inf
        for tx, ty in self.tile_positions(tile):
            dist = math.hypot(tx - x, ty - y)
            if dist < best:
                best = dist
                nearest = (tx, ty)
        return nearest

    # Entities

    def add_entity(self, entity: WorldEntity) -> WorldEntity:
        self.entities.append(entity)
        return entity

    def entity_at(
        self,
        x: int,
        y: int,
        entity_type: Optional[EntityType] = None,
    ) -> Optional[WorldEntity]:
        """Entity registered exactly at (x, y), optionally of one type."""
        for entity in self.entities:
            if entity.x == x and entity.y == y:
                if entity_type is None or entity.entity_type == entity_type:
                    return entity
        return None

    def town_near(self, x: int, y: int) -> Optional[WorldEntity]:
        """Town whose 3x3 block covers (x, y)."""
        for entity in self.entities:
            if entity.entity_type == EntityType.TOWN:
                if abs(entity.x - x) <= 1 and abs(entity.y - y) <= 1:
                    return entity
        return None

    def entities_of(self, entity_type: EntityType) -> Iterator[WorldEntity]:
        return (e for e in self.entities if e.entity_type == entity_type)

    def count_entities(self, entity_type: EntityType) -> int:
        return sum(1 for _ in self.entities_of(entity_type))

    def remove_entity(self, entity: WorldEntity) -> bool:
        """
        Consume an entity: clear its marker tile and drop the record.

        Returns:
            False if the entity was not on this map
        """
        for i, existing in enumerate(self.entities):
            if existing is entity:
                del self.entities[i]
                if self.tile_at(entity.x, entity.y).is_marker:
                    self.set_tile(entity.x, entity.y, Tile.EMPTY)
                return True
        return False

    # Invariants

    def consistency_errors(self) -> list[str]:
        """
        Describe every place the grid and entity list disagree.

        Marker tiles map one-to-one onto enemy/treasure entities
        (BOSS tiles onto boss enemies). Town entities sit on TOWN
        tiles and every TOWN tile belongs to some town block.
        """
        errors: list[str] = []
        expected_tile = {
            EntityType.TREASURE: Tile.TREASURE,
            EntityType.TOWN: Tile.TOWN,
        }

        seen: dict[tuple[int, int], WorldEntity] = {}
        for entity in self.entities:
            if not self.in_bounds(entity.x, entity.y):
                errors.append(f"{entity!r} is out of bounds")
                continue
            if entity.entity_type == EntityType.ENEMY:
                want = Tile.BOSS if entity.is_boss else Tile.ENEMY
            else:
                want = expected_tile[entity.entity_type]
            have = self.tile_at(entity.x, entity.y)
            if have != want:
                errors.append(f"{entity!r} sits on {have.name}, expected {want.name}")
            if entity.position in seen:
                errors.append(f"{entity!r} shares a cell with {seen[entity.position]!r}")
            seen[entity.position] = entity

        for tile in (Tile.ENEMY, Tile.BOSS, Tile.TREASURE):
            for x, y in self.tile_positions(tile):
                if self.entity_at(x, y) is None:
                    errors.append(f"{tile.name} tile at ({x}, {y}) has no entity")

        for x, y in self.tile_positions(Tile.TOWN):
            if self.town_near(x, y) is None:
                errors.append(f"TOWN tile at ({x}, {y}) belongs to no town")

        return errors

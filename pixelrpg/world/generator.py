"""
World generation - terrain, towns, enemies and treasure.

Placement runs in a fixed order. Scattered placements (forest,
enemies, treasure) only ever write into EMPTY cells; water, the
mountain range, towns and the boss are painted unconditionally so
they always exist.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Optional

from pixelrpg.config import GameConfig
from pixelrpg.world.content import GameContent
from pixelrpg.world.entities import EntityType, TreasureData, WorldEntity
from pixelrpg.world.map import WorldMap
from pixelrpg.world.tiles import Tile

logger = logging.getLogger(__name__)


class WorldGenerator:
    """
    Builds a fresh WorldMap from a random source.

    Deterministic for a given ``random.Random`` state.
    """

    def __init__(
        self,
        content: GameContent,
        rng: Optional[random.Random] = None,
        config: Optional[GameConfig] = None,
    ):
        self.content = content
        self.rng = rng or random.Random()
        self.config = config or GameConfig()

    def generate(self, world_size: Optional[int] = None) -> WorldMap:
        """
        Generate a world.

        Args:
            world_size: Side length in cells (defaults to the config)

        Returns:
            The populated map (grid and entity list)
        """
        size = world_size or self.config.world_size
        world = WorldMap(size)

        self._place_terrain(world)
        self._place_towns(world)
        self._place_enemies(world)
        self._place_treasures(world)

        logger.info(
            "Generated %dx%d world: %d entities (%d enemies incl. boss, %d treasures, %d towns)",
            size, size, len(world.entities),
            world.count_tiles(Tile.ENEMY) + world.count_tiles(Tile.BOSS),
            world.count_tiles(Tile.TREASURE),
            len(self.config.town_anchors),
        )
        return world

    # Steps

    def _place_terrain(self, world: WorldMap) -> None:
        """Forest scatter, one lake and one mountain range."""
        size = world.size
        margin = self.config.terrain_margin
        span = max(1, size - 2 * margin)

        for _ in range(self.config.forest_count):
            x = self.rng.randrange(span) + margin
            y = self.rng.randrange(span) + margin
            if world.in_bounds(x, y) and world.is_empty(x, y):
                world.set_tile(x, y, Tile.FOREST)

        low, high = self.config.water_anchor_range
        water_x = self.rng.randrange(low, high)
        water_y = self.rng.randrange(low, high)
        water_w, water_h = self.config.water_size
        world.fill_rect(water_x, water_y, water_w, water_h, Tile.WATER)

        mount_x, mount_y = self.config.mountain_origin(size)
        mount_w, mount_h = self.config.mountain_size
        world.fill_rect(mount_x, mount_y, mount_w, mount_h, Tile.MOUNTAIN)

    def _place_towns(self, world: WorldMap) -> None:
        """3x3 town blocks around each anchor."""
        for i, (x, y) in enumerate(self.config.town_anchors):
            if not world.in_bounds(x, y):
                logger.warning("Town anchor (%d, %d) is outside the world, skipped", x, y)
                continue
            world.fill_rect(x - 1, y - 1, 3, 3, Tile.TOWN)
            world.add_entity(WorldEntity.of(self.content.town_for_anchor(i), x, y))

    def _place_enemies(self, world: WorldMap) -> None:
        """The boss first, then regular enemies graded by distance from center."""
        boss_x, boss_y = self.config.boss_cell(world.size)
        stale = world.entity_at(boss_x, boss_y) if world.in_bounds(boss_x, boss_y) else None
        if stale is not None and stale.entity_type == EntityType.TOWN:
            logger.warning("Boss position (%d, %d) is a town anchor, boss skipped", boss_x, boss_y)
        elif world.in_bounds(boss_x, boss_y):
            if stale is not None:
                # The boss cell must hold the boss alone
                world.remove_entity(stale)
            world.set_tile(boss_x, boss_y, Tile.BOSS)
            world.add_entity(WorldEntity.of(self.content.boss.copy(), boss_x, boss_y))
        else:
            logger.warning("Boss position (%d, %d) is outside the world, skipped", boss_x, boss_y)

        center_x, center_y = self.config.world_center(world.size)
        for _ in range(self.config.enemy_count):
            cell = self._sample_empty_cell(world)
            if cell is None:
                logger.debug("No empty cell for an enemy after %d attempts", self.config.placement_attempts)
                continue
            x, y = cell
            distance = math.hypot(x - center_x, y - center_y)
            enemy = self.content.enemy_for_distance(distance, self.config.tier_distance)
            world.set_tile(x, y, Tile.ENEMY)
            world.add_entity(WorldEntity.of(enemy, x, y))

    def _place_treasures(self, world: WorldMap) -> None:
        low, high = self.config.treasure_gold_range
        for _ in range(self.config.treasure_count):
            cell = self._sample_empty_cell(world)
            if cell is None:
                logger.debug("No empty cell for a treasure after %d attempts", self.config.placement_attempts)
                continue
            x, y = cell
            world.set_tile(x, y, Tile.TREASURE)
            world.add_entity(WorldEntity.of(TreasureData(gold=self.rng.randrange(low, high)), x, y))

    def _sample_empty_cell(self, world: WorldMap) -> Optional[tuple[int, int]]:
        """Rejection-sample a uniformly random EMPTY cell."""
        for _ in range(self.config.placement_attempts):
            x = self.rng.randrange(world.size)
            y = self.rng.randrange(world.size)
            if world.is_empty(x, y):
                return (x, y)
        return None

"""
Game configuration.

Every tunable number of the game lives here so the systems can be
exercised with small or unusual worlds in tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

DEFAULT_DATA_PATH = Path(__file__).parent / "data"


class GameConfig:
    """Configuration for a game session."""

    def __init__(
        self,
        world_size: int = 32,
        start_position: Optional[tuple[int, int]] = None,
        # World generation
        forest_count: int = 20,
        terrain_margin: int = 5,
        water_size: tuple[int, int] = (5, 4),
        water_anchor_range: tuple[int, int] = (5, 15),
        mountain_size: tuple[int, int] = (3, 6),
        town_anchors: Optional[list[tuple[int, int]]] = None,
        boss_position: Optional[tuple[int, int]] = None,
        enemy_count: int = 8,
        treasure_count: int = 3,
        placement_attempts: int = 100,
        tier_distance: float = 8.0,
        treasure_gold_range: tuple[int, int] = (50, 150),
        # Battle
        magic_cost: int = 10,
        flee_chance: float = 0.7,
        # Overworld
        proximity_radius: float = 8.0,
        proximity_cue_chance: float = 0.3,
        # Content
        data_path: Path | str = DEFAULT_DATA_PATH,
    ):
        self.world_size = world_size
        self.start_position = start_position or (world_size // 2, world_size // 2)

        self.forest_count = forest_count
        self.terrain_margin = terrain_margin
        self.water_size = water_size  # (width, height)
        self.water_anchor_range = water_anchor_range
        self.mountain_size = mountain_size  # (width, height)
        self.town_anchors = town_anchors if town_anchors is not None else [(5, 5), (25, 20)]
        self.boss_position = boss_position  # None: three cells in from the top-right corner
        self.enemy_count = enemy_count
        self.treasure_count = treasure_count
        self.placement_attempts = placement_attempts
        self.tier_distance = tier_distance
        self.treasure_gold_range = treasure_gold_range

        self.magic_cost = magic_cost
        self.flee_chance = flee_chance

        self.proximity_radius = proximity_radius
        self.proximity_cue_chance = proximity_cue_chance

        self.data_path = Path(data_path)

    # Geometry derived from the side length of the world being built

    def world_center(self, size: Optional[int] = None) -> tuple[float, float]:
        """Center used for enemy tier distances."""
        size = size or self.world_size
        return (size / 2, size / 2)

    def mountain_origin(self, size: Optional[int] = None) -> tuple[int, int]:
        """Top-left cell of the mountain range (near the top-right corner)."""
        size = size or self.world_size
        return (size - 8, 2)

    def boss_cell(self, size: Optional[int] = None) -> tuple[int, int]:
        """Where the boss stands; an explicit boss_position wins."""
        if self.boss_position is not None:
            return self.boss_position
        size = size or self.world_size
        return (size - 3, 3)

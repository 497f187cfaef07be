"""
World module - tiles, entities, content and generation.

Provides:
- Tile grid with entity bookkeeping
- Tagged entity payloads (town, enemy, treasure)
- Content loading from the JSON database
- Procedural world generation
"""

from pixelrpg.world.tiles import (
    Tile,
    Surface,
    BLOCKED_MESSAGES,
    surface_for,
)
from pixelrpg.world.entities import (
    WorldEntity,
    EntityType,
    EnemyData,
    TownData,
    TreasureData,
    ShopItem,
    ShopEffect,
    payload_kind,
)
from pixelrpg.world.content import (
    GameContent,
    ContentError,
    load_content,
)
from pixelrpg.world.map import WorldMap
from pixelrpg.world.generator import WorldGenerator

__all__ = [
    # Tiles
    "Tile",
    "Surface",
    "BLOCKED_MESSAGES",
    "surface_for",
    # Entities
    "WorldEntity",
    "EntityType",
    "EnemyData",
    "TownData",
    "TreasureData",
    "ShopItem",
    "ShopEffect",
    "payload_kind",
    # Content
    "GameContent",
    "ContentError",
    "load_content",
    # Map
    "WorldMap",
    "WorldGenerator",
]

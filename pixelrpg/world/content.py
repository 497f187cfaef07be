"""
Game content - enemy and town records.

Records are loaded from the JSON database shipped in ``pixelrpg/data``
and validated against its schemas before being turned into payloads.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from engine.resources import Database
from pixelrpg.config import DEFAULT_DATA_PATH
from pixelrpg.world.entities import EnemyData, ShopEffect, ShopItem, TownData

logger = logging.getLogger(__name__)


class ContentError(Exception):
    """Raised when game content cannot support world generation."""


@dataclass
class GameContent:
    """
    All records the world generator draws from.

    Attributes:
        enemies: Enemy records from weakest to strongest; the last
            one is the boss and is never used for regular placement
        towns: Town records in anchor order
    """
    enemies: list[EnemyData] = field(default_factory=list)
    towns: list[TownData] = field(default_factory=list)

    def __post_init__(self):
        if len(self.enemies) < 2:
            raise ContentError(
                f"Need at least one regular enemy and a boss, got {len(self.enemies)} enemy records"
            )
        if not self.enemies[-1].is_boss:
            raise ContentError(f"Strongest enemy {self.enemies[-1].name!r} is not flagged as boss")
        if not self.towns:
            raise ContentError("Need at least one town record")

    @property
    def boss(self) -> EnemyData:
        return self.enemies[-1]

    @property
    def max_regular_tier(self) -> int:
        """Highest tier index a regular (non-boss) enemy may use."""
        return len(self.enemies) - 2

    def tier_for_distance(self, distance: float, tier_distance: float) -> int:
        """
        Enemy tier for a placement ``distance`` cells from the center.

        Farther is stronger, clamped to the regular tiers so the
        boss record is never picked.
        """
        tier = math.floor(distance / tier_distance)
        return max(0, min(tier, self.max_regular_tier))

    def enemy_for_distance(self, distance: float, tier_distance: float) -> EnemyData:
        """A fresh copy of the enemy record for a placement distance."""
        return self.enemies[self.tier_for_distance(distance, tier_distance)].copy()

    def town_for_anchor(self, index: int) -> TownData:
        """Town record for the n-th anchor, falling back to the first."""
        if index < len(self.towns):
            return self.towns[index]
        return self.towns[0]


def enemy_from_record(record: dict[str, Any]) -> EnemyData:
    return EnemyData(
        id=record['id'],
        name=record['name'],
        hp=record['hp'],
        attack=record['attack'],
        defense=record['defense'],
        exp=record['exp'],
        gold=record['gold'],
        color=record.get('color', '#f44'),
        is_boss=record.get('is_boss', False),
    )


def town_from_record(record: dict[str, Any]) -> TownData:
    return TownData(
        id=record['id'],
        name=record['name'],
        description=record.get('description', ''),
        inn_cost=record['inn_cost'],
        inn_heal_percent=record.get('inn_heal_percent', 100),
        shop_items=[
            ShopItem(
                name=item['name'],
                price=item['price'],
                effect=ShopEffect(item['effect']),
                value=item['value'],
            )
            for item in record['shop_items']
        ],
        dialogue=list(record['dialogue']),
    )


def load_content(data_path: Path | str = DEFAULT_DATA_PATH) -> GameContent:
    """
    Load and validate enemy and town records.

    Raises:
        ContentError: If the surviving records cannot populate a world
    """
    database = Database(data_path)
    database.load_all()

    enemy_records = sorted(database.enemies.values(), key=lambda r: r['tier'])
    town_records = sorted(database.towns.values(), key=lambda r: r.get('order', 0))

    content = GameContent(
        enemies=[enemy_from_record(r) for r in enemy_records],
        towns=[town_from_record(r) for r in town_records],
    )
    for enemy in content.enemies[:-1]:
        if enemy.is_boss:
            logger.warning("Enemy %r is flagged as boss but is not the strongest tier", enemy.name)
    return content

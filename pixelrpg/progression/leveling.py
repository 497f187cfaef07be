"""
Leveling - experience thresholds and stat growth.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from pixelrpg.components import Player


@dataclass(frozen=True)
class GrowthTable:
    """Flat stat gains per level and the experience curve."""
    max_hp: int = 20
    max_mp: int = 10
    attack: int = 5
    defense: int = 3
    exp_multiplier: float = 1.5


@dataclass(frozen=True)
class LevelUp:
    """One level gained."""
    level: int
    max_hp: int
    max_mp: int
    attack: int
    defense: int

    @property
    def message(self) -> str:
        return f"You reached level {self.level}!"


DEFAULT_GROWTH = GrowthTable()


def check_level_ups(player: Player, growth: GrowthTable = DEFAULT_GROWTH) -> list[LevelUp]:
    """
    Convert banked experience into levels.

    A single award can cross several thresholds, so this loops until
    ``player.exp < player.exp_to_next``. Each level raises the flat
    stats and refills HP and MP.

    Returns:
        The levels gained, in order (empty if none)
    """
    gained: list[LevelUp] = []

    while player.exp >= player.exp_to_next:
        player.level += 1
        player.exp -= player.exp_to_next
        # Never below 1 so the loop always makes progress
        player.exp_to_next = max(1, math.floor(player.exp_to_next * growth.exp_multiplier))

        player.max_hp += growth.max_hp
        player.max_mp += growth.max_mp
        player.attack += growth.attack
        player.defense += growth.defense
        player.restore_full()

        gained.append(LevelUp(
            level=player.level,
            max_hp=player.max_hp,
            max_mp=player.max_mp,
            attack=player.attack,
            defense=player.defense,
        ))

    return gained

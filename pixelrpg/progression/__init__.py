"""
Progression module - experience and level-ups.
"""

from pixelrpg.progression.leveling import (
    GrowthTable,
    LevelUp,
    DEFAULT_GROWTH,
    check_level_ups,
)

__all__ = [
    "GrowthTable",
    "LevelUp",
    "DEFAULT_GROWTH",
    "check_level_ups",
]

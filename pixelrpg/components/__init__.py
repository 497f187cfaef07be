"""
Game components - data models for the player and its statuses.
"""

from pixelrpg.components.character import Player
from pixelrpg.components.status import (
    StatusType,
    StatusExpiry,
    StatusRule,
    StatusSet,
    STATUS_RULES,
)

__all__ = [
    "Player",
    "StatusType",
    "StatusExpiry",
    "StatusRule",
    "StatusSet",
    "STATUS_RULES",
]

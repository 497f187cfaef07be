"""
Outcome values returned by every player-facing operation.

Invalid actions are never exceptions: they come back as an outcome
with ``success=False``, a ``reason`` and a message to show, and the
game state is left untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class Rejection(Enum):
    """Why an action was refused."""
    NOT_PLAYER_TURN = auto()
    BATTLE_ENDED = auto()
    BATTLE_NOT_ENDED = auto()
    NO_BATTLE = auto()
    ALREADY_IN_BATTLE = auto()
    NOT_AN_ENEMY = auto()
    INSUFFICIENT_MP = auto()
    CANNOT_FLEE_BOSS = auto()
    NOT_IN_TOWN = auto()
    NOT_A_TOWN = auto()
    INSUFFICIENT_GOLD = auto()
    INVALID_ITEM = auto()
    IMPASSABLE = auto()
    WORLD_EDGE = auto()
    NOTHING_HERE = auto()
    WRONG_MODE = auto()


@dataclass
class Outcome:
    """
    Result of a player-facing operation.

    Attributes:
        success: False if the action was rejected
        message: Text for the presentation layer
        reason: Set when rejected
    """
    success: bool = True
    message: str = ""
    reason: Optional[Rejection] = None

    @classmethod
    def rejected(cls, reason: Rejection, message: str = "", **kwargs) -> Outcome:
        return cls(success=False, message=message, reason=reason, **kwargs)

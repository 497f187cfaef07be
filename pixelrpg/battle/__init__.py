"""
Battle module - turn-based combat against a single enemy.

Provides:
- Battle context and state machine states
- Player command execution and damage formulas
- Battle system that resolves turns, rewards and defeat
"""

from pixelrpg.battle.context import (
    BattleContext,
    BattleState,
    TERMINAL_STATES,
)
from pixelrpg.battle.actions import (
    ActionType,
    ActionResult,
    BattleActionExecutor,
    random_variance,
)
from pixelrpg.battle.system import (
    BattleSystem,
    BattleTurn,
    BattleRewards,
    BattleOutcome,
)

__all__ = [
    # Context
    "BattleContext",
    "BattleState",
    "TERMINAL_STATES",
    # Actions
    "ActionType",
    "ActionResult",
    "BattleActionExecutor",
    "random_variance",
    # System
    "BattleSystem",
    "BattleTurn",
    "BattleRewards",
    "BattleOutcome",
]

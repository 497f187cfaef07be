"""
Battle context - the ephemeral state of one battle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from pixelrpg.world.entities import EnemyData, WorldEntity


class BattleState(Enum):
    """State of the battle."""
    PLAYER_TURN = auto()
    ACTION_RESOLVING = auto()
    ENEMY_TURN = auto()
    VICTORY = auto()
    DEFEAT = auto()
    FLED = auto()


TERMINAL_STATES = frozenset({BattleState.VICTORY, BattleState.DEFEAT, BattleState.FLED})


@dataclass
class BattleContext:
    """
    One battle from start until it is dismissed.

    Attributes:
        enemy: Snapshot of the enemy payload taken at battle start
        entity: The world entity being fought (removed on victory)
        current_hp: Live enemy HP
        is_boss_battle: Copied from the payload; fleeing is impossible
        is_player_turn: Gate for action submission
        battle_ended: Set once a terminal state is reached
        state: Current state machine node
        turn_count: Player actions that consumed a turn
        log: Battle log lines, oldest first
    """
    enemy: EnemyData
    entity: WorldEntity
    current_hp: int
    is_boss_battle: bool = False
    is_player_turn: bool = True
    battle_ended: bool = False
    state: BattleState = BattleState.PLAYER_TURN
    turn_count: int = 0
    log: list[str] = field(default_factory=list)

    @classmethod
    def for_entity(cls, entity: WorldEntity) -> BattleContext:
        """Snapshot an enemy entity into a new context."""
        enemy = entity.payload
        if not isinstance(enemy, EnemyData):
            raise TypeError(f"Cannot battle {entity!r}")
        snapshot = enemy.copy()
        return cls(
            enemy=snapshot,
            entity=entity,
            current_hp=snapshot.hp,
            is_boss_battle=snapshot.is_boss,
        )

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def enemy_hp_ratio(self) -> float:
        return self.current_hp / self.enemy.hp if self.enemy.hp else 0.0

    def add_log(self, message: str) -> None:
        self.log.append(message)

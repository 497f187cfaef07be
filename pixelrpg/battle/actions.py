"""
Battle actions - attack, magic, defend, run and the enemy's attack.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pixelrpg.battle.context import BattleContext
from pixelrpg.components import Player, StatusExpiry, StatusType
from pixelrpg.config import GameConfig
from pixelrpg.results import Rejection


class ActionType(Enum):
    """Player battle commands."""
    ATTACK = "attack"
    MAGIC = "magic"
    DEFEND = "defend"
    RUN = "run"


@dataclass
class ActionResult:
    """
    Result of executing one battle action.

    Attributes:
        success: False if the action was refused or failed (missed flee)
        damage: Damage dealt by this action
        mp_cost: MP spent
        message: Battle log line
        reason: Why the action was refused, if it was
        fled: The player escaped
        defended: An enemy hit was halved by DEFENDING
        consumes_turn: Whether the enemy acts afterwards
    """
    success: bool = True
    damage: int = 0
    mp_cost: int = 0
    message: str = ""
    reason: Optional[Rejection] = None
    fled: bool = False
    defended: bool = False
    consumes_turn: bool = True


def random_variance(rng: random.Random, spread: int) -> int:
    """Uniform random integer in [-spread, +spread]."""
    return rng.randint(-spread, spread)


class BattleActionExecutor:
    """
    Executes battle actions and calculates results.

    Damage formulas:
        attack: max(1, attack - enemy.defense + variance(5))
        magic:  max(1, floor(attack * 1.5) + variance(10)), costs 10 MP
        enemy:  max(max(5, floor(enemy.attack * 0.25)),
                    enemy.attack + floor((level - 1) * 2.5) - defense + variance(3)),
                halved (floor, min 2) while defending
    """

    ATTACK_VARIANCE = 5
    MAGIC_VARIANCE = 10
    ENEMY_VARIANCE = 3
    MAGIC_MULTIPLIER = 1.5
    LEVEL_BONUS_PER_LEVEL = 2.5
    ENEMY_MIN_DAMAGE = 5
    ENEMY_MIN_DAMAGE_RATIO = 0.25
    DEFEND_MIN_DAMAGE = 2

    def __init__(self, rng: random.Random, config: Optional[GameConfig] = None):
        self.rng = rng
        self.config = config or GameConfig()

    # Damage formulas

    def attack_damage(self, player: Player, context: BattleContext) -> int:
        base = player.attack - context.enemy.defense
        return max(1, base + random_variance(self.rng, self.ATTACK_VARIANCE))

    def magic_damage(self, player: Player) -> int:
        base = math.floor(player.attack * self.MAGIC_MULTIPLIER)
        return max(1, base + random_variance(self.rng, self.MAGIC_VARIANCE))

    def enemy_min_damage(self, context: BattleContext) -> int:
        """Floor on enemy damage before defending, whatever the player's defense."""
        return max(
            self.ENEMY_MIN_DAMAGE,
            math.floor(context.enemy.attack * self.ENEMY_MIN_DAMAGE_RATIO),
        )

    def enemy_damage(self, player: Player, context: BattleContext) -> int:
        """Enemy damage before the defend halving."""
        # Offsets the +3 defense per level so late-game enemies still hurt
        level_bonus = math.floor((player.level - 1) * self.LEVEL_BONUS_PER_LEVEL)
        base = context.enemy.attack + level_bonus - player.defense
        return max(
            self.enemy_min_damage(context),
            base + random_variance(self.rng, self.ENEMY_VARIANCE),
        )

    # Actions

    def execute_attack(self, player: Player, context: BattleContext) -> ActionResult:
        """Physical attack on the enemy."""
        damage = self.attack_damage(player, context)
        context.current_hp = max(0, context.current_hp - damage)
        return ActionResult(
            damage=damage,
            message=f"You attack! {damage} damage!",
        )

    def execute_magic(self, player: Player, context: BattleContext) -> ActionResult:
        """Magic attack. Refused without spending a turn if MP is short."""
        cost = self.config.magic_cost
        if not player.spend_mp(cost):
            return ActionResult(
                success=False,
                message="Not enough MP...",
                reason=Rejection.INSUFFICIENT_MP,
                consumes_turn=False,
            )

        damage = self.magic_damage(player)
        context.current_hp = max(0, context.current_hp - damage)
        return ActionResult(
            damage=damage,
            mp_cost=cost,
            message=f"Magic attack! {damage} damage!",
        )

    def execute_defend(self, player: Player) -> ActionResult:
        """Brace for the next enemy hit."""
        player.statuses.add(StatusType.DEFENDING)
        return ActionResult(message="You take a defensive stance.")

    def execute_flee(self, context: BattleContext) -> ActionResult:
        """Try to run. Boss battles can never be escaped."""
        if context.is_boss_battle:
            return ActionResult(
                success=False,
                message="You cannot run from the boss!",
                reason=Rejection.CANNOT_FLEE_BOSS,
                consumes_turn=False,
            )

        if self.rng.random() < self.config.flee_chance:
            return ActionResult(message="You got away!", fled=True, consumes_turn=False)

        return ActionResult(success=False, message="You couldn't escape!")

    def execute_enemy_attack(self, player: Player, context: BattleContext) -> ActionResult:
        """The enemy's turn: one attack on the player."""
        damage = self.enemy_damage(player, context)

        defended = player.statuses.has(StatusType.DEFENDING)
        if defended:
            damage = max(self.DEFEND_MIN_DAMAGE, damage // 2)
        # DEFENDING only covers this one hit
        player.statuses.expire(StatusExpiry.NEXT_HIT)

        player.take_damage(damage)
        return ActionResult(
            damage=damage,
            defended=defended,
            message=f"{context.enemy.name} attacks! You take {damage} damage!",
        )

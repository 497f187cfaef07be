"""
Battle system - turn-based combat controller.

One battle runs from ``start_battle`` to ``dismiss``:

    PLAYER_TURN -> ACTION_RESOLVING -> ENEMY_TURN -> PLAYER_TURN ...
                                    \\-> VICTORY | DEFEAT | FLED

Every transition happens synchronously inside ``handle_action``.
The terminal states wait for an explicit ``dismiss`` so the
presentation layer can show the result first.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from engine.core.events import EventBus
from pixelrpg import story
from pixelrpg.battle.actions import ActionResult, ActionType, BattleActionExecutor
from pixelrpg.battle.context import BattleContext, BattleState
from pixelrpg.events import AudioEvent, BattleSound, GameEvent, UISound
from pixelrpg.progression import DEFAULT_GROWTH, GrowthTable, LevelUp, check_level_ups
from pixelrpg.results import Outcome, Rejection
from pixelrpg.world.entities import EntityType, WorldEntity

if TYPE_CHECKING:
    from pixelrpg.state import GameState

logger = logging.getLogger(__name__)


@dataclass
class BattleRewards:
    """Rewards from winning a battle."""
    exp: int = 0
    gold: int = 0
    is_boss: bool = False
    level_ups: list[LevelUp] = field(default_factory=list)


@dataclass
class BattleTurn(Outcome):
    """
    Everything one call into the battle system produced.

    Attributes:
        state: Battle state after resolution
        messages: Log lines added by this call, in order
        player_action: Result of the player's command
        enemy_action: Result of the enemy's attack, if it acted
        rewards: Set on victory
    """
    state: Optional[BattleState] = None
    messages: list[str] = field(default_factory=list)
    player_action: Optional[ActionResult] = None
    enemy_action: Optional[ActionResult] = None
    rewards: Optional[BattleRewards] = None

    @property
    def game_clear(self) -> bool:
        """True when this turn defeated the boss."""
        return self.state == BattleState.VICTORY and self.rewards is not None and self.rewards.is_boss

    @property
    def battle_over(self) -> bool:
        return self.state in (BattleState.VICTORY, BattleState.DEFEAT, BattleState.FLED)


@dataclass
class BattleOutcome(Outcome):
    """How a dismissed battle ended."""
    result: Optional[BattleState] = None
    enemy_name: str = ""
    game_clear: bool = False


class BattleSystem:
    """
    Turn-based battle controller.

    Manages:
    - Battle initialization from an enemy entity
    - Player command resolution and the enemy's reply
    - Victory rewards, defeat revival and escape
    """

    def __init__(
        self,
        state: GameState,
        events: EventBus,
        rng: Optional[random.Random] = None,
        growth: GrowthTable = DEFAULT_GROWTH,
    ):
        self.state = state
        self.events = events
        self.rng = rng or random.Random()
        self.growth = growth
        self._executor = BattleActionExecutor(self.rng, state.config)

    @property
    def context(self) -> Optional[BattleContext]:
        return self.state.battle

    @property
    def is_active(self) -> bool:
        return self.state.battle is not None

    # Lifecycle

    def start_battle(self, entity: WorldEntity) -> BattleTurn:
        """
        Start a battle against an enemy entity.

        Returns:
            A turn carrying the encounter message, or a rejection
        """
        if self.state.battle is not None:
            return BattleTurn.rejected(Rejection.ALREADY_IN_BATTLE, "A battle is already in progress.")
        if entity.entity_type != EntityType.ENEMY:
            return BattleTurn.rejected(Rejection.NOT_AN_ENEMY, "There is nothing to fight here.")

        context = BattleContext.for_entity(entity)
        self.state.battle = context

        turn = BattleTurn(state=context.state)
        self._log(context, turn, story.pick(story.ENEMY_ENCOUNTER, self.rng))

        logger.info(
            "Battle started: %s (hp=%d, boss=%s) at (%d, %d)",
            context.enemy.name, context.current_hp, context.is_boss_battle, entity.x, entity.y,
        )
        self.events.publish(
            GameEvent.BATTLE_STARTED,
            enemy=context.enemy.name,
            hp=context.current_hp,
            is_boss=context.is_boss_battle,
            x=entity.x,
            y=entity.y,
        )
        # The enemy announces itself at full volume from its cell
        self.events.publish(
            AudioEvent.ENEMY_PROXIMITY,
            enemy=entity,
            intensity=1.0,
            is_boss=context.is_boss_battle,
        )
        return turn

    def dismiss(self) -> BattleOutcome:
        """
        Leave a finished battle ("return to map").

        Clears the battle context and the player's transient statuses.
        """
        context = self.state.battle
        if context is None:
            return BattleOutcome.rejected(Rejection.NO_BATTLE, "There is no battle to leave.")
        if not context.is_terminal:
            return BattleOutcome.rejected(Rejection.BATTLE_NOT_ENDED, "The battle is not over yet.")

        self.state.battle = None
        self.state.player.statuses.clear()

        game_clear = context.state == BattleState.VICTORY and context.is_boss_battle
        logger.debug("Battle dismissed: %s (%s)", context.enemy.name, context.state.name)
        return BattleOutcome(
            result=context.state,
            enemy_name=context.enemy.name,
            game_clear=game_clear,
        )

    # Turn resolution

    def handle_action(self, action: ActionType | str) -> BattleTurn:
        """
        Resolve one player command and, if it costs a turn, the enemy's reply.

        Rejected without any state change when there is no battle, the
        battle is over, or it is not the player's turn.
        """
        context = self.state.battle
        if context is None:
            return BattleTurn.rejected(Rejection.NO_BATTLE)
        if context.battle_ended:
            return BattleTurn.rejected(Rejection.BATTLE_ENDED, state=context.state)
        if not context.is_player_turn:
            return BattleTurn.rejected(Rejection.NOT_PLAYER_TURN, state=context.state)

        action = ActionType(action)
        player = self.state.player

        # Closed until resolution hands the turn back
        context.is_player_turn = False
        context.state = BattleState.ACTION_RESOLVING
        turn = BattleTurn()

        if action == ActionType.ATTACK:
            result = self._executor.execute_attack(player, context)
            self._sound(BattleSound.ATTACK)
            self._sound(BattleSound.HIT)

        elif action == ActionType.MAGIC:
            result = self._executor.execute_magic(player, context)
            if result.success:
                self._sound(BattleSound.MAGIC)

        elif action == ActionType.DEFEND:
            result = self._executor.execute_defend(player)
            self._ui_sound(UISound.SELECT)

        elif action == ActionType.RUN:
            result = self._executor.execute_flee(context)

        else:
            raise ValueError(f"Unhandled battle action: {action}")

        turn.player_action = result
        self._log(context, turn, result.message)
        self._publish_action(context, action, result)

        if result.fled:
            self._ui_sound(UISound.CONFIRM)
            return self._finish_fled(context, turn)

        if not result.consumes_turn:
            # Refused commands (no MP, boss flee) hand the turn straight back
            turn.success = False
            turn.reason = result.reason
            turn.message = result.message
            return self._return_to_player(context, turn)

        context.turn_count += 1

        if action in (ActionType.ATTACK, ActionType.MAGIC) and context.current_hp <= 0:
            return self._finish_victory(context, turn)

        context.state = BattleState.ENEMY_TURN
        enemy_result = self._executor.execute_enemy_attack(player, context)
        turn.enemy_action = enemy_result
        self._sound(BattleSound.HIT)
        self._log(context, turn, enemy_result.message)
        self.events.publish(
            GameEvent.BATTLE_ACTION,
            actor=context.enemy.name,
            action=ActionType.ATTACK.value,
            damage=enemy_result.damage,
            defended=enemy_result.defended,
            enemy_hp=context.current_hp,
            player_hp=player.hp,
        )

        if player.hp <= 0:
            return self._finish_defeat(context, turn)

        return self._return_to_player(context, turn)

    # Transitions

    def _return_to_player(self, context: BattleContext, turn: BattleTurn) -> BattleTurn:
        context.state = BattleState.PLAYER_TURN
        context.is_player_turn = True
        turn.state = context.state
        return turn

    def _finish_victory(self, context: BattleContext, turn: BattleTurn) -> BattleTurn:
        player = self.state.player
        enemy = context.enemy

        rewards = BattleRewards(exp=enemy.exp, gold=enemy.gold, is_boss=context.is_boss_battle)

        self._end(context, BattleState.VICTORY)
        self._sound(BattleSound.VICTORY)
        self._log(context, turn, "Victory!")

        player.exp += rewards.exp
        player.gold += rewards.gold
        self._log(context, turn, f"Gained {rewards.exp} EXP and {rewards.gold} G!")

        rewards.level_ups = check_level_ups(player, self.growth)
        for level_up in rewards.level_ups:
            self._log(context, turn, level_up.message)
            self.events.publish(GameEvent.LEVEL_UP, level=level_up.level)
        if rewards.level_ups:
            self._narrate(context, turn, story.LEVEL_UP)
        self._narrate(context, turn, story.VICTORY)

        self.state.world.remove_entity(context.entity)

        turn.rewards = rewards
        turn.state = context.state
        logger.info(
            "Victory over %s: +%d exp, +%d gold, %d level(s) gained",
            enemy.name, rewards.exp, rewards.gold, len(rewards.level_ups),
        )
        self._publish_end(context)
        return turn

    def _finish_defeat(self, context: BattleContext, turn: BattleTurn) -> BattleTurn:
        self._end(context, BattleState.DEFEAT)
        self._sound(BattleSound.DEFEAT)
        self._log(context, turn, "Defeated...")
        self._log(context, turn, "You return to regroup...")
        self._narrate(context, turn, story.DEFEAT)

        self.state.revive_player()

        turn.state = context.state
        logger.info("Defeated by %s; player revived at %s", context.enemy.name, self.state.start_position)
        self._publish_end(context)
        return turn

    def _finish_fled(self, context: BattleContext, turn: BattleTurn) -> BattleTurn:
        self._end(context, BattleState.FLED)
        turn.state = context.state
        logger.info("Fled from %s", context.enemy.name)
        self._publish_end(context)
        return turn

    def _end(self, context: BattleContext, state: BattleState) -> None:
        context.state = state
        context.battle_ended = True
        context.is_player_turn = False
        self.state.player.statuses.clear()

    # Helpers

    def _log(self, context: BattleContext, turn: BattleTurn, message: str) -> None:
        context.add_log(message)
        turn.messages.append(message)

    def _narrate(self, context: BattleContext, turn: BattleTurn, lines: list[str]) -> None:
        for line in lines:
            self._log(context, turn, line)

    def _publish_action(self, context: BattleContext, action: ActionType, result: ActionResult) -> None:
        logger.debug("Player %s: %s", action.value, result.message)
        self.events.publish(
            GameEvent.BATTLE_ACTION,
            actor="player",
            action=action.value,
            success=result.success,
            damage=result.damage,
            enemy_hp=context.current_hp,
            player_hp=self.state.player.hp,
        )

    def _publish_end(self, context: BattleContext) -> None:
        self.events.publish(
            GameEvent.BATTLE_ENDED,
            result=context.state.name,
            enemy=context.enemy.name,
            is_boss=context.is_boss_battle,
        )

    def _sound(self, kind: BattleSound) -> None:
        self.events.publish(AudioEvent.BATTLE_SOUND, kind=kind)

    def _ui_sound(self, kind: UISound) -> None:
        self.events.publish(AudioEvent.UI_SOUND, kind=kind)

"""
Game session - owns the state and routes player input.

A session holds the one GameState of a play-through together with the
systems that act on it. Each input is handled to completion, state
changes are announced on the event bus, and every call returns an
outcome the presentation layer can show.

Usage:
    session = GameSession(seed=42)
    bridge = PresentationBridge(session.events, session.state, renderer, audio)
    session.start()
    session.handle_input(MoveInput(Direction.RIGHT))
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Iterable, Optional

import pygame

from engine.core.actions import Action
from engine.core.events import EngineEvent, EventBus
from engine.input import InputHandler
from pixelrpg import story
from pixelrpg.battle import ActionType, BattleOutcome, BattleSystem, BattleTurn
from pixelrpg.config import GameConfig
from pixelrpg.controls import (
    BattleInput,
    ConfirmInput,
    Direction,
    InputEvent,
    InteractInput,
    MoveInput,
    TownCommand,
    TownInput,
    translate_action,
)
from pixelrpg.events import AudioEvent, BattleSound, GameEvent, UISound
from pixelrpg.results import Outcome, Rejection
from pixelrpg.state import GameMode, GameState
from pixelrpg.town import TownSystem, TownVisit
from pixelrpg.world import (
    BLOCKED_MESSAGES,
    EntityType,
    GameContent,
    Tile,
    WorldEntity,
    WorldGenerator,
    load_content,
    surface_for,
)

logger = logging.getLogger(__name__)

AMBIENT_WATER_RADIUS = 10
AMBIENT_WIND_OFFSET = 10


@dataclass
class StepResult(Outcome):
    """
    Result of an overworld move or interaction.

    Attributes:
        position: Player position afterwards
        blocked_by: Terrain that stopped the move
        battle: Battle started by stepping onto an enemy
        town: Town entered by stepping onto it
        gold_found: Gold from a collected treasure
    """
    position: Optional[tuple[int, int]] = None
    blocked_by: Optional[Tile] = None
    battle: Optional[BattleTurn] = None
    town: Optional[TownVisit] = None
    gold_found: int = 0


@dataclass
class StoryResult(Outcome):
    """A mode change that comes with narrative lines."""
    lines: list = field(default_factory=list)


class GameSession:
    """
    Single-player session controller.

    Handles:
    - World generation and reset
    - Mode switching (title, overworld, battle, town, game clear)
    - Overworld movement, tile events and treasure
    - Routing battle and town commands to their systems
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        content: Optional[GameContent] = None,
        rng: Optional[random.Random] = None,
        events: Optional[EventBus] = None,
        seed: Optional[int] = None,
    ):
        self.config = config or GameConfig()
        self.rng = rng or random.Random(seed)
        self.events = events or EventBus()
        self.content = content or load_content(self.config.data_path)
        self.input = InputHandler(self.events)

        self.generator = WorldGenerator(self.content, self.rng, self.config)
        self.state = GameState.new(self.config, self.generator.generate())

        self.battle = BattleSystem(self.state, self.events, self.rng)
        self.town = TownSystem(self.state, self.events, self.rng)

        self.events.publish(GameEvent.WORLD_GENERATED, size=self.state.world.size)

    @property
    def mode(self) -> GameMode:
        return self.state.mode

    # Lifecycle

    def start(self) -> StoryResult:
        """Leave the title screen and begin exploring."""
        if self.state.mode != GameMode.TITLE:
            return StoryResult.rejected(Rejection.WRONG_MODE)

        self._ui_sound(UISound.CONFIRM)
        self._switch_mode(GameMode.OVERWORLD)
        self.events.publish(EngineEvent.GAME_START)
        self._start_ambient()
        logger.info("Game started at %s", self.state.player.position)
        return StoryResult(lines=list(story.INTRO))

    def reset(self) -> None:
        """New world, fresh level 1 player, back to the title screen."""
        self.state.world = self.generator.generate()
        self.state.reset_player()
        self.state.battle = None
        self.state.town = None
        self.state.move_count = 0
        self._switch_mode(GameMode.TITLE)

        logger.info("Session reset")
        self.events.publish(EngineEvent.GAME_RESET)
        self.events.publish(GameEvent.WORLD_GENERATED, size=self.state.world.size)

    # Input routing

    def process_events(self, raw_events: Iterable[pygame.event.Event]) -> list[Outcome]:
        """
        Handle a batch of pygame events.

        A key bound to several actions (SPACE is both interact and
        confirm) is handled once, as the first action that means
        something in the current mode.
        """
        outcomes = []
        for raw in raw_events:
            for action in self.input.process_event(raw):
                outcome = self.handle_action(action)
                if outcome is not None:
                    outcomes.append(outcome)
                    break
        return outcomes

    def handle_action(self, action: Action) -> Optional[Outcome]:
        """Handle a semantic action; None if it means nothing right now."""
        event = translate_action(action, self.state.mode, self.town.shop_open)
        if event is None:
            return None
        return self.handle_input(event)

    def handle_input(self, event: InputEvent) -> Outcome:
        """Handle one game input event to completion."""
        if isinstance(event, MoveInput):
            return self.move(event.direction)
        elif isinstance(event, InteractInput):
            return self.interact()
        elif isinstance(event, BattleInput):
            return self.battle_action(event.action)
        elif isinstance(event, TownInput):
            return self.town_command(event.command, event.item_index)
        elif isinstance(event, ConfirmInput):
            return self.confirm()
        raise TypeError(f"Unknown input event: {event!r}")

    def confirm(self) -> Outcome:
        if self.state.mode == GameMode.TITLE:
            return self.start()
        if self.state.mode == GameMode.BATTLE:
            return self.return_to_map()
        if self.state.mode == GameMode.GAME_CLEAR:
            self._ui_sound(UISound.CONFIRM)
            self.reset()
            return Outcome()
        return Outcome.rejected(Rejection.WRONG_MODE)

    # Overworld

    def move(self, direction: Direction) -> StepResult:
        """
        Step one cell. Clamped at the world edge; water and mountains block.
        """
        if self.state.mode != GameMode.OVERWORLD:
            return StepResult.rejected(Rejection.WRONG_MODE)

        world = self.state.world
        player = self.state.player
        x = min(max(player.x + direction.dx, 0), world.size - 1)
        y = min(max(player.y + direction.dy, 0), world.size - 1)

        if (x, y) == player.position:
            return StepResult.rejected(Rejection.WORLD_EDGE, position=player.position)

        tile = world.tile_at(x, y)
        if not tile.is_passable:
            message = BLOCKED_MESSAGES.get(tile, "You can't go that way.")
            self._ui_sound(UISound.CANCEL)
            self.events.publish(GameEvent.MOVE_BLOCKED, x=x, y=y, tile=tile)
            self._message(message)
            return StepResult.rejected(
                Rejection.IMPASSABLE,
                message,
                position=player.position,
                blocked_by=tile,
            )

        player.move_to(x, y)
        self.state.move_count += 1

        self.events.publish(AudioEvent.FOOTSTEP, surface=surface_for(tile))
        self.events.publish(GameEvent.PLAYER_MOVED, x=x, y=y)
        self._check_enemy_proximity()

        result = StepResult(position=player.position)
        self._check_tile_events(result, tile)
        return result

    def interact(self) -> StepResult:
        """Open a treasure chest on an orthogonally adjacent cell."""
        if self.state.mode != GameMode.OVERWORLD:
            return StepResult.rejected(Rejection.WRONG_MODE)

        world = self.state.world
        player = self.state.player
        for direction in Direction:
            x, y = player.x + direction.dx, player.y + direction.dy
            if world.in_bounds(x, y) and world.tile_at(x, y) == Tile.TREASURE:
                entity = world.entity_at(x, y, EntityType.TREASURE)
                if entity is not None:
                    gold = self.collect_treasure(entity)
                    return StepResult(position=player.position, gold_found=gold)

        message = "Nothing here..."
        self._message(message)
        return StepResult.rejected(Rejection.NOTHING_HERE, message, position=player.position)

    def collect_treasure(self, entity: WorldEntity) -> int:
        """
        Take a treasure's gold and remove it from the world.

        Returns:
            Gold gained (0 if the entity was already gone)
        """
        if not self.state.world.remove_entity(entity):
            return 0

        gold = entity.payload.gold
        self.state.player.gold += gold
        self.events.publish(AudioEvent.BATTLE_SOUND, kind=BattleSound.VICTORY)
        self.events.publish(GameEvent.TREASURE_COLLECTED, x=entity.x, y=entity.y, gold=gold)
        self._message(f"Found a treasure chest! Got {gold} G!")
        logger.debug("Treasure at (%d, %d): %d gold", entity.x, entity.y, gold)
        return gold

    def _check_tile_events(self, result: StepResult, tile: Tile) -> None:
        world = self.state.world
        x, y = self.state.player.position

        if tile in (Tile.ENEMY, Tile.BOSS):
            entity = world.entity_at(x, y, EntityType.ENEMY)
            if entity is not None:
                result.battle = self.start_battle(entity)
        elif tile == Tile.TOWN:
            entity = world.town_near(x, y)
            if entity is not None:
                result.town = self.enter_town(entity)
        elif tile == Tile.TREASURE:
            entity = world.entity_at(x, y, EntityType.TREASURE)
            if entity is not None:
                result.gold_found = self.collect_treasure(entity)
                result.message = f"Got {result.gold_found} G!"

    def _check_enemy_proximity(self) -> None:
        """Random growl cues from nearby enemies, louder when closer."""
        x, y = self.state.player.position
        radius = self.config.proximity_radius
        for enemy in self.state.world.entities_of(EntityType.ENEMY):
            dist = math.hypot(enemy.x - x, enemy.y - y)
            if 0 < dist < radius:
                intensity = 1 - dist / radius
                if self.rng.random() < intensity * self.config.proximity_cue_chance:
                    self.events.publish(
                        AudioEvent.ENEMY_PROXIMITY,
                        enemy=enemy,
                        intensity=intensity,
                        is_boss=enemy.is_boss,
                    )

    def _start_ambient(self) -> None:
        x, y = self.state.player.position
        world = self.state.world
        self.events.publish(AudioEvent.AMBIENT, kind="wind", position=(x + AMBIENT_WIND_OFFSET, y))
        if world.has_tile_within(Tile.WATER, x, y, AMBIENT_WATER_RADIUS):
            water = world.find_nearest_tile(Tile.WATER, x, y)
            if water is not None:
                self.events.publish(AudioEvent.AMBIENT, kind="water", position=water)

    # Battle

    def start_battle(self, entity: WorldEntity) -> BattleTurn:
        turn = self.battle.start_battle(entity)
        if turn.success:
            self._switch_mode(GameMode.BATTLE)
        return turn

    def battle_action(self, action: ActionType) -> BattleTurn:
        if self.state.mode != GameMode.BATTLE:
            return BattleTurn.rejected(Rejection.WRONG_MODE)
        return self.battle.handle_action(action)

    def return_to_map(self) -> Outcome:
        """Dismiss a finished battle; a boss victory ends the game."""
        if self.state.mode != GameMode.BATTLE:
            return BattleOutcome.rejected(Rejection.WRONG_MODE)

        outcome = self.battle.dismiss()
        if not outcome.success:
            return outcome

        if outcome.game_clear:
            player = self.state.player
            self._switch_mode(GameMode.GAME_CLEAR)
            self.events.publish(GameEvent.GAME_CLEAR, level=player.level, gold=player.gold)
            logger.info("Game clear at level %d with %d gold", player.level, player.gold)
            return StoryResult(lines=list(story.GAME_CLEAR))

        self._switch_mode(GameMode.OVERWORLD)
        self._start_ambient()
        return outcome

    # Town

    def enter_town(self, entity: WorldEntity) -> TownVisit:
        visit = self.town.enter_town(entity)
        if visit.success:
            self._switch_mode(GameMode.TOWN)
        return visit

    def town_command(self, command: TownCommand, item_index: Optional[int] = None) -> Outcome:
        if self.state.mode != GameMode.TOWN:
            return Outcome.rejected(Rejection.WRONG_MODE)

        if command == TownCommand.INN:
            return self.town.rest()
        elif command == TownCommand.SHOP:
            return self.town.open_shop()
        elif command == TownCommand.TALK:
            return self.town.talk()
        elif command == TownCommand.BUY:
            return self.town.buy(item_index if item_index is not None else -1)
        elif command == TownCommand.CLOSE_SHOP:
            return self.town.close_shop()
        elif command == TownCommand.LEAVE:
            result = self.town.leave()
            if result.success:
                self._switch_mode(GameMode.OVERWORLD)
                self._start_ambient()
                self._message(result.message)
            return result
        raise ValueError(f"Unhandled town command: {command}")

    # Helpers

    def _switch_mode(self, mode: GameMode) -> None:
        previous = self.state.mode
        self.state.mode = mode
        logger.debug("Mode %s -> %s", previous.name, mode.name)
        self.events.publish(EngineEvent.SCREEN_SWITCHED, previous=previous, mode=mode)

    def _message(self, text: str) -> None:
        self.events.publish(GameEvent.MESSAGE, text=text)

    def _ui_sound(self, kind: UISound) -> None:
        self.events.publish(AudioEvent.UI_SOUND, kind=kind)

"""
Presentation interfaces - what renderers and audio backends implement.

The core never calls these directly. A PresentationBridge listens on
the event bus and forwards state changes and sound cues, so a broken
or slow backend can never change the outcome of a game action.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

import numpy as np

from engine.core.events import Event, EventBus
from pixelrpg.components import StatusType
from pixelrpg.events import AudioEvent, BattleSound, GameEvent, UISound
from pixelrpg.state import GameState
from pixelrpg.world.entities import WorldEntity
from pixelrpg.world.tiles import Surface


class Renderer(ABC):
    """Draws the overworld. Purely observational."""

    @abstractmethod
    def draw_world(self, grid: np.ndarray, entities: list[WorldEntity]) -> None:
        """Draw the tile grid (indexed ``[y, x]``) and its entities."""
        pass

    @abstractmethod
    def draw_player(
        self,
        position: tuple[int, int],
        hp_ratio: float,
        statuses: Iterable[StatusType],
    ) -> None:
        """Draw the player token; ``hp_ratio`` is 0-1."""
        pass


class AudioCue(ABC):
    """Fire-and-forget sound notifications."""

    @abstractmethod
    def on_footstep(self, surface: Surface) -> None:
        pass

    @abstractmethod
    def on_enemy_proximity(self, enemy: WorldEntity, intensity: float) -> None:
        """``intensity`` is 0-1, higher when closer."""
        pass

    @abstractmethod
    def on_battle_event(self, kind: BattleSound) -> None:
        pass

    @abstractmethod
    def on_ui_event(self, kind: UISound) -> None:
        pass

    def on_ambient(self, kind: str, position: tuple[int, int]) -> None:
        """Positional ambient loop hint (wind, water). Optional."""
        pass


class NullRenderer(Renderer):
    """Renderer that draws nothing (headless runs)."""

    def draw_world(self, grid: np.ndarray, entities: list[WorldEntity]) -> None:
        pass

    def draw_player(
        self,
        position: tuple[int, int],
        hp_ratio: float,
        statuses: Iterable[StatusType],
    ) -> None:
        pass


class NullAudioCue(AudioCue):
    """Silent audio backend."""

    def on_footstep(self, surface: Surface) -> None:
        pass

    def on_enemy_proximity(self, enemy: WorldEntity, intensity: float) -> None:
        pass

    def on_battle_event(self, kind: BattleSound) -> None:
        pass

    def on_ui_event(self, kind: UISound) -> None:
        pass


# Events after which the overworld looks different
REDRAW_EVENTS = (
    GameEvent.WORLD_GENERATED,
    GameEvent.PLAYER_MOVED,
    GameEvent.PLAYER_CHANGED,
    GameEvent.TREASURE_COLLECTED,
    GameEvent.BATTLE_ENDED,
    GameEvent.TOWN_LEFT,
)


class PresentationBridge:
    """
    Connects a renderer and an audio backend to the game's event bus.

    Usage:
        bridge = PresentationBridge(session.events, session.state, renderer, audio)
        ...
        bridge.detach()
    """

    def __init__(
        self,
        events: EventBus,
        state: GameState,
        renderer: Renderer | None = None,
        audio: AudioCue | None = None,
    ):
        self.events = events
        self.state = state
        self.renderer = renderer or NullRenderer()
        self.audio = audio or NullAudioCue()
        self._subscriptions = [
            *((event_type, self._on_redraw) for event_type in REDRAW_EVENTS),
            (AudioEvent.FOOTSTEP, self._on_footstep),
            (AudioEvent.ENEMY_PROXIMITY, self._on_enemy_proximity),
            (AudioEvent.BATTLE_SOUND, self._on_battle_sound),
            (AudioEvent.UI_SOUND, self._on_ui_sound),
            (AudioEvent.AMBIENT, self._on_ambient),
        ]
        for event_type, handler in self._subscriptions:
            # Strong refs: the bridge lives as long as its subscriptions
            events.subscribe(event_type, handler, weak=False)

    def detach(self) -> None:
        """Stop forwarding events."""
        for event_type, handler in self._subscriptions:
            self.events.unsubscribe(event_type, handler)
        self._subscriptions = []

    def redraw(self) -> None:
        """Draw the current overworld and player."""
        world = self.state.world
        player = self.state.player
        self.renderer.draw_world(world.grid, world.entities)
        self.renderer.draw_player(player.position, player.hp_ratio, list(player.statuses))

    # Handlers

    def _on_redraw(self, event: Event) -> None:
        self.redraw()

    def _on_footstep(self, event: Event) -> None:
        self.audio.on_footstep(event["surface"])

    def _on_enemy_proximity(self, event: Event) -> None:
        self.audio.on_enemy_proximity(event["enemy"], event["intensity"])

    def _on_battle_sound(self, event: Event) -> None:
        self.audio.on_battle_event(event["kind"])

    def _on_ui_sound(self, event: Event) -> None:
        self.audio.on_ui_event(event["kind"])

    def _on_ambient(self, event: Event) -> None:
        self.audio.on_ambient(event["kind"], event["position"])

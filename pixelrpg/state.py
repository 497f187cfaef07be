"""
Game state - the single mutable model of a session.

Owned by the session controller and passed explicitly to every
system; there is no module-level game state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from pixelrpg.battle.context import BattleContext
from pixelrpg.components import Player
from pixelrpg.config import GameConfig
from pixelrpg.world.entities import TownData, WorldEntity
from pixelrpg.world.map import WorldMap


class GameMode(Enum):
    """Which screen currently owns input."""
    TITLE = auto()
    OVERWORLD = auto()
    BATTLE = auto()
    TOWN = auto()
    GAME_CLEAR = auto()


@dataclass
class TownContext:
    """The town the player is currently inside."""
    entity: WorldEntity
    town: TownData
    shop_open: bool = False


@dataclass
class GameState:
    """
    Canonical game model.

    Attributes:
        config: Session configuration
        world: Tile grid and entities
        player: Player stats and position
        mode: Active screen
        battle: Current battle, if any
        town: Current town, if any
        move_count: Successful overworld steps this session
    """
    config: GameConfig
    world: WorldMap
    player: Player = field(default_factory=Player)
    mode: GameMode = GameMode.TITLE
    battle: Optional[BattleContext] = None
    town: Optional[TownContext] = None
    move_count: int = 0

    @classmethod
    def new(cls, config: GameConfig, world: WorldMap) -> GameState:
        return cls(config=config, world=world, player=Player.starting(config.start_position))

    @property
    def start_position(self) -> tuple[int, int]:
        return self.config.start_position

    def reset_player(self) -> None:
        """Back to level 1 starting stats."""
        self.player = Player.starting(self.start_position)

    def revive_player(self) -> None:
        """Full HP/MP at the start position; level, exp and gold are kept."""
        self.player.restore_full()
        self.player.move_to(*self.start_position)

"""
Game input events and the per-screen action mapping.

The engine's InputHandler turns keys into Actions; this module gives
those Actions their meaning for the current game mode. The same key
("1") is an attack in battle, the inn in town and the first item in
the shop.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from engine.core.actions import Action
from pixelrpg.battle.actions import ActionType
from pixelrpg.state import GameMode


class Direction(Enum):
    """Overworld step directions as (dx, dy)."""
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


class TownCommand(Enum):
    """Town menu commands."""
    INN = "inn"
    SHOP = "shop"
    TALK = "talk"
    LEAVE = "leave"
    BUY = "buy"
    CLOSE_SHOP = "close_shop"


@dataclass(frozen=True)
class MoveInput:
    direction: Direction


@dataclass(frozen=True)
class InteractInput:
    pass


@dataclass(frozen=True)
class BattleInput:
    action: ActionType


@dataclass(frozen=True)
class TownInput:
    command: TownCommand
    item_index: Optional[int] = None


@dataclass(frozen=True)
class ConfirmInput:
    """Start the game, leave a finished battle, or return to the title."""
    pass


InputEvent = Union[MoveInput, InteractInput, BattleInput, TownInput, ConfirmInput]


MOVE_ACTIONS: dict[Action, Direction] = {
    Action.MOVE_UP: Direction.UP,
    Action.MOVE_DOWN: Direction.DOWN,
    Action.MOVE_LEFT: Direction.LEFT,
    Action.MOVE_RIGHT: Direction.RIGHT,
}

BATTLE_OPTIONS: dict[int, ActionType] = {
    1: ActionType.ATTACK,
    2: ActionType.MAGIC,
    3: ActionType.DEFEND,
    4: ActionType.RUN,
}

TOWN_OPTIONS: dict[int, TownCommand] = {
    1: TownCommand.INN,
    2: TownCommand.SHOP,
    3: TownCommand.TALK,
    4: TownCommand.LEAVE,
}


def translate_action(
    action: Action,
    mode: GameMode,
    shop_open: bool = False,
) -> Optional[InputEvent]:
    """
    Map a semantic Action to a game input event for the current mode.

    Args:
        action: Action reported by the InputHandler
        mode: Current game mode
        shop_open: Whether the shop overlay is showing (town mode only)

    Returns:
        The input event, or None if the action means nothing here
    """
    option = action.option_number

    if mode in (GameMode.TITLE, GameMode.GAME_CLEAR):
        return ConfirmInput() if action == Action.CONFIRM else None

    if mode == GameMode.OVERWORLD:
        if action in MOVE_ACTIONS:
            return MoveInput(MOVE_ACTIONS[action])
        if action == Action.INTERACT:
            return InteractInput()
        return None

    if mode == GameMode.BATTLE:
        if action == Action.CONFIRM:
            return ConfirmInput()
        if option in BATTLE_OPTIONS:
            return BattleInput(BATTLE_OPTIONS[option])
        return None

    if mode == GameMode.TOWN:
        if shop_open:
            if action == Action.CANCEL:
                return TownInput(TownCommand.CLOSE_SHOP)
            if option is not None:
                return TownInput(TownCommand.BUY, item_index=option - 1)
            return None
        if action == Action.CANCEL:
            return TownInput(TownCommand.LEAVE)
        if option in TOWN_OPTIONS:
            return TownInput(TOWN_OPTIONS[option])
        return None

    return None

"""
Input action definitions.

Actions abstract raw input (keys) into semantic actions.
Game logic should use Actions, not raw keys. This enables:
- Key rebinding
- Screen-specific meaning for shared keys (1-4 in battle vs. town)
- Cleaner game code

Usage:
    if Action.CONFIRM in handler.poll(events):
        ...
"""

from enum import Enum, auto

import pygame


class Action(Enum):
    """
    Semantic input actions.

    Each action can be mapped to multiple keys. The numbered
    options are interpreted by the current screen (battle
    commands, town commands or shop slots).
    """

    # Movement
    MOVE_UP = auto()
    MOVE_DOWN = auto()
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()

    # General
    INTERACT = auto()
    CONFIRM = auto()
    CANCEL = auto()

    # Numbered menu options
    OPTION_1 = auto()
    OPTION_2 = auto()
    OPTION_3 = auto()
    OPTION_4 = auto()
    OPTION_5 = auto()
    OPTION_6 = auto()
    OPTION_7 = auto()
    OPTION_8 = auto()
    OPTION_9 = auto()

    @property
    def option_number(self) -> int | None:
        """1-based number for OPTION_n actions, None otherwise."""
        if self.name.startswith("OPTION_"):
            return int(self.name.rsplit("_", 1)[1])
        return None


DEFAULT_KEY_BINDINGS: dict[Action, list[int]] = {
    # Movement
    Action.MOVE_UP: [pygame.K_UP, pygame.K_w],
    Action.MOVE_DOWN: [pygame.K_DOWN, pygame.K_s],
    Action.MOVE_LEFT: [pygame.K_LEFT, pygame.K_a],
    Action.MOVE_RIGHT: [pygame.K_RIGHT, pygame.K_d],

    # General
    Action.INTERACT: [pygame.K_SPACE],
    Action.CONFIRM: [pygame.K_RETURN, pygame.K_SPACE],
    Action.CANCEL: [pygame.K_ESCAPE],

    # Options
    Action.OPTION_1: [pygame.K_1, pygame.K_KP1],
    Action.OPTION_2: [pygame.K_2, pygame.K_KP2],
    Action.OPTION_3: [pygame.K_3, pygame.K_KP3],
    Action.OPTION_4: [pygame.K_4, pygame.K_KP4],
    Action.OPTION_5: [pygame.K_5, pygame.K_KP5],
    Action.OPTION_6: [pygame.K_6, pygame.K_KP6],
    Action.OPTION_7: [pygame.K_7, pygame.K_KP7],
    Action.OPTION_8: [pygame.K_8, pygame.K_KP8],
    Action.OPTION_9: [pygame.K_9, pygame.K_KP9],
}

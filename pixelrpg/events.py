"""
Game event types published on the engine EventBus.

The core publishes these after each state transition. Renderers and
audio backends subscribe; nothing in the core waits on them.
"""

from enum import Enum, auto


class GameEvent(Enum):
    """State-change notifications."""
    WORLD_GENERATED = auto()
    PLAYER_MOVED = auto()
    MOVE_BLOCKED = auto()
    PLAYER_CHANGED = auto()
    MESSAGE = auto()

    BATTLE_STARTED = auto()
    BATTLE_ACTION = auto()
    BATTLE_ENDED = auto()
    LEVEL_UP = auto()

    TOWN_ENTERED = auto()
    TOWN_LEFT = auto()

    TREASURE_COLLECTED = auto()
    GAME_CLEAR = auto()


class AudioEvent(Enum):
    """Fire-and-forget sound cues."""
    FOOTSTEP = auto()
    ENEMY_PROXIMITY = auto()
    BATTLE_SOUND = auto()
    UI_SOUND = auto()
    AMBIENT = auto()


class BattleSound(Enum):
    """Battle sound kinds."""
    ATTACK = "attack"
    HIT = "hit"
    MAGIC = "magic"
    HEAL = "heal"
    VICTORY = "victory"
    DEFEAT = "defeat"


class UISound(Enum):
    """UI sound kinds."""
    SELECT = "select"
    CONFIRM = "confirm"
    CANCEL = "cancel"

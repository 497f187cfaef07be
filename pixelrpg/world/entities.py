"""
World entities - towns, enemies and treasure placed on the grid.

The grid only holds a marker tile; the entity carries the payload.
Payloads are a closed set of dataclasses and every consumer matches
on them exhaustively (see ``payload_kind``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Union


class ShopEffect(Enum):
    """What a shop item does when bought."""
    HEAL = "heal"
    MP = "mp"
    BUFF_ATTACK = "buff_attack"
    BUFF_DEFENSE = "buff_defense"


@dataclass(frozen=True)
class ShopItem:
    """An item for sale in a town."""
    name: str
    price: int
    effect: ShopEffect
    value: int


@dataclass
class TownData:
    """Static data for a town."""
    id: str
    name: str
    description: str = ""
    inn_cost: int = 30
    inn_heal_percent: int = 100
    shop_items: list[ShopItem] = field(default_factory=list)
    dialogue: list[str] = field(default_factory=list)


@dataclass
class EnemyData:
    """Static data for an enemy type."""
    id: str
    name: str
    hp: int = 30
    attack: int = 5
    defense: int = 2
    exp: int = 20
    gold: int = 15
    color: str = "#f66"
    is_boss: bool = False

    def copy(self) -> EnemyData:
        return EnemyData(**self.__dict__)


@dataclass
class TreasureData:
    """A treasure chest's contents."""
    gold: int


Payload = Union[TownData, EnemyData, TreasureData]


class EntityType(Enum):
    """Type of world entity."""
    TOWN = auto()
    ENEMY = auto()
    TREASURE = auto()


_PAYLOAD_TYPES: dict[EntityType, type] = {
    EntityType.TOWN: TownData,
    EntityType.ENEMY: EnemyData,
    EntityType.TREASURE: TreasureData,
}


def payload_kind(payload: Payload) -> EntityType:
    """Entity type matching a payload. Raises TypeError for anything else."""
    if isinstance(payload, TownData):
        return EntityType.TOWN
    elif isinstance(payload, EnemyData):
        return EntityType.ENEMY
    elif isinstance(payload, TreasureData):
        return EntityType.TREASURE
    raise TypeError(f"Unknown entity payload: {type(payload).__name__}")


@dataclass(eq=False)
class WorldEntity:
    """
    An object placed on the world grid.

    Compared by identity: two enemies of the same type at different
    times are different entities.
    """
    entity_type: EntityType
    x: int
    y: int
    payload: Payload

    def __post_init__(self):
        expected = _PAYLOAD_TYPES[self.entity_type]
        if not isinstance(self.payload, expected):
            raise TypeError(
                f"{self.entity_type.name} entity needs {expected.__name__}, "
                f"got {type(self.payload).__name__}"
            )

    @classmethod
    def of(cls, payload: Payload, x: int, y: int) -> WorldEntity:
        """Create an entity, inferring its type from the payload."""
        return cls(payload_kind(payload), x, y, payload)

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)

    @property
    def is_boss(self) -> bool:
        return isinstance(self.payload, EnemyData) and self.payload.is_boss

    def __repr__(self) -> str:
        name = getattr(self.payload, "name", "treasure")
        return f"WorldEntity({self.entity_type.name}, {name!r}, x={self.x}, y={self.y})"

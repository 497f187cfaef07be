"""
Character components - the player's stats and resources.
"""

from __future__ import annotations

from pydantic import Field, model_validator

from engine.core.component import Component, register_component
from pixelrpg.components.status import StatusSet


@register_component
class Player(Component):
    """
    The player token and everything it carries.

    Attributes:
        x, y: Grid position
        hp, max_hp: Health points (hp never exceeds max_hp)
        mp, max_mp: Magic points (mp never exceeds max_mp)
        level: Current level
        exp: Experience towards the next level
        exp_to_next: Experience needed for the next level
        attack: Attack power
        defense: Defense power, raised by level-ups and items
        gold: Money
        statuses: Transient battle statuses
    """
    x: int = Field(default=16, ge=0)
    y: int = Field(default=16, ge=0)
    hp: int = Field(default=100, ge=0)
    max_hp: int = Field(default=100, gt=0)
    mp: int = Field(default=50, ge=0)
    max_mp: int = Field(default=50, ge=0)
    level: int = Field(default=1, ge=1)
    exp: int = Field(default=0, ge=0)
    exp_to_next: int = Field(default=100, gt=0)
    attack: int = Field(default=10, ge=0)
    defense: int = Field(default=5, ge=0)
    gold: int = Field(default=100, ge=0)
    statuses: StatusSet = Field(default_factory=StatusSet)

    @model_validator(mode='after')
    def _check_resources(self) -> Player:
        if self.hp > self.max_hp:
            raise ValueError(f"hp {self.hp} exceeds max_hp {self.max_hp}")
        if self.mp > self.max_mp:
            raise ValueError(f"mp {self.mp} exceeds max_mp {self.max_mp}")
        return self

    @classmethod
    def starting(cls, position: tuple[int, int]) -> Player:
        """A fresh level 1 player at the given position."""
        return cls(x=position[0], y=position[1])

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)

    @property
    def hp_ratio(self) -> float:
        """HP as a fraction of max HP (0-1)."""
        return self.hp / self.max_hp

    @property
    def is_dead(self) -> bool:
        return self.hp <= 0

    def move_to(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def take_damage(self, amount: int) -> int:
        """
        Take damage, flooring HP at 0.

        Returns:
            Actual damage dealt
        """
        actual = min(amount, self.hp)
        self.hp -= actual
        return actual

    def heal(self, amount: int) -> int:
        """Heal HP up to max. Returns the amount actually healed."""
        old = self.hp
        self.hp = min(self.max_hp, self.hp + amount)
        return self.hp - old

    def restore_mp(self, amount: int) -> int:
        """Restore MP up to max. Returns the amount actually restored."""
        old = self.mp
        self.mp = min(self.max_mp, self.mp + amount)
        return self.mp - old

    def spend_mp(self, amount: int) -> bool:
        """Spend MP. Returns False (and spends nothing) if insufficient."""
        if self.mp < amount:
            return False
        self.mp -= amount
        return True

    def spend_gold(self, amount: int) -> bool:
        """Spend gold. Returns False (and spends nothing) if insufficient."""
        if self.gold < amount:
            return False
        self.gold -= amount
        return True

    def restore_full(self) -> None:
        """Refill HP and MP."""
        self.hp = self.max_hp
        self.mp = self.max_mp
